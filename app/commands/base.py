from dataclasses import dataclass
from typing import Any

from app.commands.state import BotState
from app.models.commands import CommandIntent


@dataclass
class CommandContext:
    user_id: str
    text: str
    state: BotState


@dataclass
class CommandResult:
    intent: CommandIntent
    response_text: str
    action: dict[str, Any] | None = None
