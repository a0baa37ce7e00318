"""Per-chat daily quota gate."""
from datetime import datetime
from typing import Callable, Optional
import logging

from relaybot.core.state import UserState, today_key

logger = logging.getLogger(__name__)

QUOTA_EXCEEDED_MESSAGE = "Daily quota exceeded. Please try again tomorrow."


class QuotaGate:
    def __init__(
        self,
        max_messages_per_day: int = 20,
        max_tokens_per_day: int = 20000,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.max_messages_per_day = max_messages_per_day
        self.max_tokens_per_day = max_tokens_per_day
        self._clock = clock

    def get_today(self) -> str:
        return today_key(self._clock() if self._clock else None)

    def refresh(self, state: UserState) -> bool:
        """Apply the day rollover to an already loaded state."""
        reset = state.roll_over(self.get_today())
        if reset:
            logger.info(f"Daily counters reset for chat {state.chat_id}")
        return reset

    def can_use(self, state: UserState) -> bool:
        self.refresh(state)
        return (
            state.messages_today < self.max_messages_per_day
            and state.tokens_today < self.max_tokens_per_day
        )

    def record_use(self, state: UserState, tokens: int = 0) -> None:
        self.refresh(state)
        state.record_usage(tokens)

    def get_limit_message(self) -> str:
        return QUOTA_EXCEEDED_MESSAGE
