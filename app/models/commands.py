from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

PHONE_CALL = "phone_call"
API_REQUEST = "api_request"
WORKFLOW = "workflow"
STATUS = "status"
HELP = "help"
GENERIC = "generic"

IntentKind = Literal["phone_call", "api_request", "workflow", "status", "help", "generic"]


class CommandIntent(BaseModel):
    kind: IntentKind
    text: str
    phone_number: str | None = None
    call_message: str | None = None
    url: str | None = None
    method: str | None = None
    headers: dict[str, Any] = Field(default_factory=dict)
    data: Any = None


class BotHistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: str = Field(alias="userId")
    timestamp: datetime
    type: Literal["user", "bot"]
