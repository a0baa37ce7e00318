"""Relay orchestration for a single Telegram update."""
import logging
from typing import Any, Optional, Tuple, TYPE_CHECKING

from relaybot.core.ai import CompletionBridge
from relaybot.core.dispatcher import CommandDispatcher
from relaybot.core.quota import QuotaGate
from relaybot.core.state import UserState
from relaybot.services.telegram_service import TelegramService
from relaybot.storage.analytics import EventLog

if TYPE_CHECKING:
    from relaybot.storage.base import UserStateStore

logger = logging.getLogger(__name__)


def extract_message(update: Any) -> Tuple[Optional[int], Optional[str]]:
    """Pull (chat id, text) out of a raw update; either may be None."""
    if not isinstance(update, dict):
        return None, None
    message = update.get("message")
    if not isinstance(message, dict):
        return None, None
    text = message.get("text")
    chat = message.get("chat")
    chat_id = chat.get("id") if isinstance(chat, dict) else None
    if not isinstance(text, str) or not text:
        text = None
    if not isinstance(chat_id, int) or isinstance(chat_id, bool):
        chat_id = None
    return chat_id, text


class RelayBot:
    def __init__(
        self,
        store: 'UserStateStore',
        quota: QuotaGate,
        ai: CompletionBridge,
        telegram: TelegramService,
        dispatcher: CommandDispatcher,
        events: Optional[EventLog] = None,
    ):
        self.store = store
        self.quota = quota
        self.ai = ai
        self.telegram = telegram
        self.dispatcher = dispatcher
        self.events = events or EventLog()

    async def handle_update(self, update: Any) -> None:
        chat_id, text = extract_message(update)
        if chat_id is None or text is None:
            logger.info(f"No message to relay: {update}")
            self.events.emit("update_ignored")
            return

        state = await self.store.get(chat_id)
        if state is None:
            state = UserState(chat_id=chat_id, last_reset_date=self.quota.get_today())
            await self.store.save(state)
            self.events.emit("state_created", chat_id)

        reply = await self.dispatcher.dispatch(chat_id, text, state)
        if reply is not None:
            self.events.emit("command_handled", chat_id, command=text.split()[0])
            await self.telegram.send_reply(chat_id, reply)
            return

        await self.ask(chat_id, text, state)

    async def ask(self, chat_id: int, text: str, state: UserState) -> None:
        if not self.quota.can_use(state):
            logger.info(f"Quota exceeded for chat {chat_id}: {state.messages_today} messages, {state.tokens_today} tokens")
            self.events.emit(
                "quota_exceeded", chat_id,
                messages=state.messages_today, tokens=state.tokens_today,
            )
            await self.telegram.send_reply(chat_id, self.quota.get_limit_message())
            return

        result = await self.ai.complete(text, state.tone, chat_id=chat_id)

        self.quota.record_use(state, result.tokens)
        await self.store.save(state)
        logger.info(f"Updated usage for chat {chat_id}: {state.messages_today} messages, {state.tokens_today} tokens")

        await self.telegram.send_reply(chat_id, result.text)
