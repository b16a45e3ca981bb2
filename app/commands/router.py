import logging
from typing import Any

from app.commands.api_request.handler import ApiRequestCommand
from app.commands.base import CommandContext, CommandResult
from app.commands.classifier import CommandClassifier
from app.commands.generic.handler import GenericCommand
from app.commands.help.handler import HelpCommand
from app.commands.phone_call.handler import PhoneCallCommand
from app.commands.status.handler import StatusCommand
from app.commands.workflow.handler import WorkflowCommand
from app.config import Settings
from app.models.commands import API_REQUEST, HELP, PHONE_CALL, STATUS, WORKFLOW, CommandIntent
from app.models.proxy import ProxyRequest
from app.outbound.proxy import OutboundRequestProxy
from app.outbound.simulated import place_phone_call

logger = logging.getLogger(__name__)


class UnknownCommandError(ValueError):
    pass


class CommandRouter:
    def __init__(self, settings: Settings, proxy: OutboundRequestProxy | None = None) -> None:
        self._settings = settings
        self._classifier = CommandClassifier()
        self._proxy = proxy or OutboundRequestProxy(settings.proxy_command_timeout_ms)
        self._handlers = {
            PHONE_CALL: PhoneCallCommand(settings),
            API_REQUEST: ApiRequestCommand(settings, self._proxy),
            WORKFLOW: WorkflowCommand(),
            STATUS: StatusCommand(settings),
            HELP: HelpCommand(),
        }
        self._fallback = GenericCommand()

    def classify(self, message: str) -> CommandIntent:
        return self._classifier.classify(message)

    async def respond(self, intent: CommandIntent, context: CommandContext) -> CommandResult:
        handler = self._handlers.get(intent.kind, self._fallback)
        return await handler.handle(intent, context)

    async def route(self, context: CommandContext) -> CommandResult:
        intent = self.classify(context.text)
        logger.info("bot message classified: user_id=%s intent=%s", context.user_id, intent.kind)
        return await self.respond(intent, context)

    async def execute_action(self, command: str, parameters: dict[str, Any], context: CommandContext) -> Any:
        """Run a structured bot action without going through text classification."""
        if command == "phone_call":
            to = str(parameters.get("to") or "").strip()
            if not to:
                raise ValueError("parameter 'to' is required for phone_call")
            return await place_phone_call(
                to=to,
                from_number=str(parameters.get("from") or self._settings.bot_caller_number),
                message=parameters.get("message"),
                delay_seconds=self._settings.bot_simulated_call_delay_seconds,
            )
        if command == "api_request":
            result = await self._proxy.execute(
                ProxyRequest.model_validate(parameters),
                timeout_ms=self._settings.proxy_command_timeout_ms,
            )
            return result.model_dump()
        if command == "status_check":
            intent = CommandIntent(kind=STATUS, text="")
            return (await self.respond(intent, context)).response_text
        raise UnknownCommandError(f"Unknown command: {command}")
