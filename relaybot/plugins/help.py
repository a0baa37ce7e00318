"""Help plugin."""
from relaybot.core.dispatcher import CommandContext, CommandDispatcher
from relaybot.plugins import Plugin
import logging

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "👋 Hi! Send me any message and I'll answer it with AI.\n\n"
    "Use /settings_tone to pick how I sound, or /help to see every command."
)

HELP_TEXT = """Commands:
/start - Welcome message
/help - Show this list
/settings - Show your tone and today's usage
/settings_tone <formal|friendly|technical> - Change the reply tone

Anything else you send goes straight to the AI."""


class HelpPlugin(Plugin):
    @property
    def name(self) -> str:
        return "help"

    @property
    def commands(self):
        return [
            ("start", "Welcome message"),
            ("help", "List available commands"),
        ]

    def register(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.add_command("start", self.start_command)
        dispatcher.add_command("help", self.help_command)

    async def start_command(self, ctx: CommandContext) -> str:
        return WELCOME_TEXT

    async def help_command(self, ctx: CommandContext) -> str:
        logger.info(f"Help shown to chat {ctx.chat_id}")
        return HELP_TEXT
