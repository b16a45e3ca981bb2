from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    WrapValidator,
    model_validator,
)

from app.models.proxy import ProxyRequest

STEP_REQUEST = "request"
STEP_PHONE_CALL = "phone_call"
STEP_SITE_GENERATE = "site_generate"
STEP_UNKNOWN = "unknown"
STEP_INVALID = "invalid"

# Tags used by older workflow payloads.
STEP_TYPE_ALIASES = {
    "curl": STEP_REQUEST,
    "website": STEP_SITE_GENERATE,
}


class PhoneCallConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    phone_number: str | None = Field(default=None, alias="phoneNumber")


class SiteGenerateConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    domain: str | None = None
    template: str | None = None


class RequestStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = STEP_REQUEST
    name: str | None = None
    config: ProxyRequest = Field(default_factory=ProxyRequest)


class PhoneCallStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = STEP_PHONE_CALL
    name: str | None = None
    config: PhoneCallConfig = Field(default_factory=PhoneCallConfig)


class SiteGenerateStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = STEP_SITE_GENERATE
    name: str | None = None
    config: SiteGenerateConfig = Field(default_factory=SiteGenerateConfig)


class UnknownStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = ""
    name: str | None = None
    config: dict[str, Any] = Field(default_factory=dict)


# A step whose config did not fit its declared type. Kept in the sequence so
# it still yields a failed result.
class InvalidStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = ""
    name: str | None = None
    config: Any = None
    error: str


_STEP_CLASS_TAGS = {
    RequestStep: STEP_REQUEST,
    PhoneCallStep: STEP_PHONE_CALL,
    SiteGenerateStep: STEP_SITE_GENERATE,
    UnknownStep: STEP_UNKNOWN,
    InvalidStep: STEP_INVALID,
}


def normalize_step_type(raw: Any) -> str:
    tag = str(raw or "").strip().lower()
    tag = STEP_TYPE_ALIASES.get(tag, tag)
    if tag in (STEP_REQUEST, STEP_PHONE_CALL, STEP_SITE_GENERATE):
        return tag
    return STEP_UNKNOWN


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        # loc[0] is the union tag
        field = ".".join(str(part) for part in error["loc"][1:])
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts)


def _invalid_step(value: Any, exc: ValidationError) -> InvalidStep:
    raw = value if isinstance(value, dict) else {}
    name = raw.get("name")
    return InvalidStep(
        type=str(raw.get("type") or ""),
        name=name if isinstance(name, str) else None,
        config=raw.get("config"),
        error=f"Invalid step configuration: {_describe_validation_error(exc)}",
    )


def _keep_invalid_step(value: Any, handler) -> Any:
    try:
        return handler(value)
    except ValidationError as exc:
        return _invalid_step(value, exc)


def _step_tag(value: Any) -> str:
    if isinstance(value, dict):
        return normalize_step_type(value.get("type"))
    tag = _STEP_CLASS_TAGS.get(type(value))
    if tag:
        return tag
    return normalize_step_type(getattr(value, "type", None))


StepConfig = Annotated[
    Union[
        Annotated[RequestStep, Tag(STEP_REQUEST)],
        Annotated[PhoneCallStep, Tag(STEP_PHONE_CALL)],
        Annotated[SiteGenerateStep, Tag(STEP_SITE_GENERATE)],
        Annotated[UnknownStep, Tag(STEP_UNKNOWN)],
        Annotated[InvalidStep, Tag(STEP_INVALID)],
    ],
    Discriminator(_step_tag),
    WrapValidator(_keep_invalid_step),
]

_STEP_LIST = TypeAdapter(list[StepConfig])


def parse_steps(raw: Any) -> list[StepConfig]:
    return _STEP_LIST.validate_python(raw or [])


class StepResult(BaseModel):
    type: str
    success: bool
    status: int | None = None
    data: Any = None
    error: str | None = None

    @model_validator(mode="after")
    def check_error_matches_outcome(self) -> "StepResult":
        if self.success and self.error is not None:
            raise ValueError("successful step result must not carry an error")
        if not self.success and not self.error:
            raise ValueError("failed step result requires an error message")
        return self


class ExecutionRecord(BaseModel):
    execution_id: str
    workflow_id: str | None = None
    status: Literal["completed", "failed"]
    success: bool
    results: list[StepResult] = Field(default_factory=list)
    started_at: datetime
    duration_ms: int = 0


class WorkflowDefinition(BaseModel):
    id: str
    name: str
    description: str = ""
    steps: list[StepConfig] = Field(default_factory=list)
    status: str = "inactive"
    created_at: datetime
    last_run: datetime | None = None
    last_status: str | None = None
