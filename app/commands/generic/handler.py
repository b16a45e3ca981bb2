from app.commands.base import CommandContext, CommandResult
from app.models.commands import CommandIntent


class GenericCommand:
    async def handle(self, intent: CommandIntent, context: CommandContext) -> CommandResult:
        return CommandResult(
            intent=intent,
            response_text=(
                f"🤖 I understand you want to: \"{intent.text.strip()}\"\n\n"
                "I can help you with:\n"
                "📞 Making phone calls\n"
                "🌐 Executing API requests\n"
                "🔄 Managing workflows\n"
                "📊 Checking system status\n\n"
                "Try one of these commands or type \"help\" for more options!"
            ),
        )
