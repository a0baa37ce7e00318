import logging
from typing import List, Optional, Tuple
from telegram import Bot, BotCommand
from telegram.error import TelegramError

from relaybot.storage.analytics import EventLog

logger = logging.getLogger(__name__)


class TelegramService:
    """Thin wrapper over the Bot API calls the relay makes."""

    def __init__(self, bot: Bot, events: Optional[EventLog] = None):
        self.bot = bot
        self.events = events or EventLog()

    async def send_reply(self, chat_id: int, text: str) -> bool:
        """Send a message; failures are logged, never raised."""
        logger.info(f"Sending message to Telegram: chat_id={chat_id} length={len(text)}")
        try:
            message = await self.bot.send_message(chat_id=chat_id, text=text)
        except Exception as e:
            logger.error(f"Telegram sendMessage failed for chat {chat_id}: {e}")
            self.events.emit("reply_failed", chat_id, error=str(e))
            return False

        logger.info(f"Telegram response: message_id={getattr(message, 'message_id', None)}")
        self.events.emit("reply_sent", chat_id)
        return True

    async def start(self, commands: List[Tuple[str, str]], webhook_url: Optional[str] = None, secret_token: Optional[str] = None) -> None:
        await self.bot.initialize()
        try:
            if commands:
                await self.bot.set_my_commands([BotCommand(cmd, description) for cmd, description in commands])
                logger.info(f"Registered {len(commands)} bot commands")
            if webhook_url:
                await self.bot.set_webhook(url=webhook_url, secret_token=secret_token)
                logger.info(f"Webhook registered at {webhook_url}")
        except TelegramError as e:
            logger.error(f"Telegram startup call failed: {e}")

    async def stop(self) -> None:
        await self.bot.shutdown()
