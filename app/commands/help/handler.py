from app.commands.base import CommandContext, CommandResult
from app.models.commands import CommandIntent


class HelpCommand:
    response_text = (
        "🤖 **Zen Bot Commands**\n\n"
        "📞 **Phone Calls (simulated):**\n"
        "• \"Call +1-555-123-4567\"\n"
        "• \"Phone +1-555-123-4567 and say 'Hello World'\"\n\n"
        "🌐 **API Requests:**\n"
        "• \"Make GET request to https://api.example.com/data\"\n"
        "• \"POST to https://api.example.com/users data: {\"name\": \"John\"}\"\n\n"
        "🔄 **Workflows:**\n"
        "• \"Create workflow for data sync\"\n"
        "• \"Run workflow 'Daily Backup'\"\n"
        "• \"Show all workflows\"\n\n"
        "📊 **Status:**\n"
        "• \"What's your status?\"\n"
        "• \"Bot health check\"\n\n"
        "💬 **General:**\n"
        "• Just type any message and I'll help!\n"
        "• \"Help\" - Show this message\n\n"
        "I'm here to help with API automation, phone calls, and workflow management!"
    )

    async def handle(self, intent: CommandIntent, context: CommandContext) -> CommandResult:
        return CommandResult(intent=intent, response_text=self.response_text)
