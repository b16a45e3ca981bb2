import json

from app.commands.base import CommandContext, CommandResult
from app.config import Settings
from app.models.commands import CommandIntent
from app.models.proxy import ProxyRequest
from app.outbound.proxy import OutboundRequestProxy


class ApiRequestCommand:
    prompt = (
        "🌐 I can make API requests for you! Please provide a URL. "
        "Example: 'Make a GET request to https://api.example.com/data'"
    )
    _PREVIEW_CHARS = 500

    def __init__(self, settings: Settings, proxy: OutboundRequestProxy) -> None:
        self._settings = settings
        self._proxy = proxy

    async def handle(self, intent: CommandIntent, context: CommandContext) -> CommandResult:
        if not intent.url:
            return CommandResult(intent=intent, response_text=self.prompt)

        method = intent.method or "GET"
        result = await self._proxy.execute(
            ProxyRequest(url=intent.url, method=method, headers=intent.headers, body=intent.data),
            timeout_ms=self._settings.proxy_command_timeout_ms,
        )
        action = result.model_dump()
        if not result.success:
            return CommandResult(
                intent=intent,
                response_text=f"❌ API request failed: {result.error}",
                action=action,
            )

        preview = json.dumps(result.data, indent=2, ensure_ascii=False, default=str)[: self._PREVIEW_CHARS]
        return CommandResult(
            intent=intent,
            response_text=(
                "✅ API request completed!\n\n"
                f"🌐 **URL:** {intent.url}\n"
                f"📋 **Method:** {method}\n"
                f"📊 **Status:** {result.status}\n"
                f"📝 **Response:** {preview}..."
            ),
            action=action,
        )
