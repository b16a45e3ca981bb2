from app.commands.base import CommandContext, CommandResult
from app.config import Settings
from app.models.commands import CommandIntent
from app.outbound.simulated import place_phone_call
from app.time_utils import format_local_timestamp


class PhoneCallCommand:
    prompt = "📞 I can help you make a phone call! Please provide a phone number. Example: 'Call +1-555-123-4567'"

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def handle(self, intent: CommandIntent, context: CommandContext) -> CommandResult:
        if not intent.phone_number:
            return CommandResult(intent=intent, response_text=self.prompt)

        call = await place_phone_call(
            to=intent.phone_number,
            from_number=self._settings.bot_caller_number,
            message=intent.call_message,
            delay_seconds=self._settings.bot_simulated_call_delay_seconds,
        )
        return CommandResult(
            intent=intent,
            response_text=(
                "✅ Phone call initiated successfully! (simulated, no real call was placed)\n\n"
                f"📞 **To:** {call['to']}\n"
                f"📝 **Message:** {call['message']}\n"
                f"🆔 **Call ID:** {call['call_id']}\n"
                f"⏰ **Time:** {format_local_timestamp(self._settings)}"
            ),
            action=call,
        )
