from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.steps import StepConfig


class BotMessageRequest(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    message: str
    user_id: str = Field(default="anonymous", alias="userId")


class BotExecuteRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    command: str
    parameters: dict[str, Any] = Field(default_factory=dict)


class WorkflowCreateRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    description: str = ""
    steps: list[StepConfig] = Field(default_factory=list)


class WorkflowRunRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    steps: list[StepConfig] = Field(default_factory=list)
