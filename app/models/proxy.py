from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ProxyRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    url: str = ""
    method: str = "GET"
    headers: dict[str, Any] = Field(default_factory=dict)
    body: Any = Field(default=None, validation_alias=AliasChoices("body", "data"))
    # Milliseconds; None falls back to the call-site default.
    timeout: int | None = Field(default=None, gt=0)


class ProxyResult(BaseModel):
    success: bool
    status: int | None = None
    data: Any = None
    headers: dict[str, str] = Field(default_factory=dict)
    error: str | None = None
    duration_ms: int | None = None
