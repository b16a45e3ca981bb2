from app.commands.base import CommandContext, CommandResult
from app.models.commands import CommandIntent


class WorkflowCommand:
    response_text = (
        "🔄 **Workflow Command Received**\n\n"
        "I can help you create and manage workflows. Here are some options:\n\n"
        "• \"Create workflow for data sync\"\n"
        "• \"Run workflow named 'Daily Backup'\"\n"
        "• \"Show all workflows\"\n"
        "• \"Stop workflow 'Emergency Alert'\"\n\n"
        "What would you like to do with workflows?"
    )

    async def handle(self, intent: CommandIntent, context: CommandContext) -> CommandResult:
        return CommandResult(intent=intent, response_text=self.response_text)
