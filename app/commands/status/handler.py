from app.commands.base import CommandContext, CommandResult
from app.config import Settings
from app.models.commands import CommandIntent
from app.time_utils import format_local_timestamp


class StatusCommand:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def handle(self, intent: CommandIntent, context: CommandContext) -> CommandResult:
        state = context.state
        uptime = int(state.uptime_seconds)
        hours, minutes = uptime // 3600, (uptime % 3600) // 60
        return CommandResult(
            intent=intent,
            response_text=(
                "🤖 **Bot Status Report**\n\n"
                f"{'🟢' if state.is_active else '🔴'} **Status:** {'Online' if state.is_active else 'Offline'}\n"
                f"⏱️ **Uptime:** {hours}h {minutes}m\n"
                f"📨 **Messages Processed:** {state.total_messages}\n"
                f"🔗 **Active Connections:** {len(state.active_connections)}\n"
                f"⏳ **Queue Length:** {len(state.execution_queue)}\n"
                f"🕐 **Last Activity:** {format_local_timestamp(self._settings, state.last_activity)}"
            ),
        )
