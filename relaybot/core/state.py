"""Per-chat user state: tone preference and daily usage counters."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
import pytz


class Tone(str, Enum):
    FRIENDLY = "friendly"
    FORMAL = "formal"
    TECHNICAL = "technical"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Tone"]:
        """Return the matching tone, or None for anything else."""
        for tone in cls:
            if tone.value == value:
                return tone
        return None


def today_key(now: Optional[datetime] = None) -> str:
    """UTC calendar date as YYYY-MM-DD."""
    if now is None:
        now = datetime.now(pytz.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(pytz.utc)
    return now.strftime("%Y-%m-%d")


@dataclass
class UserState:
    chat_id: int
    tone: Tone = Tone.FRIENDLY
    messages_today: int = 0
    tokens_today: int = 0
    last_reset_date: str = field(default_factory=today_key)

    def roll_over(self, today: str) -> bool:
        """Zero the daily counters if the stored date is not today.

        Tone is never touched. Returns True when a reset happened.
        """
        if self.last_reset_date == today:
            return False
        self.messages_today = 0
        self.tokens_today = 0
        self.last_reset_date = today
        return True

    def record_usage(self, tokens: int) -> None:
        self.messages_today += 1
        self.tokens_today += max(tokens, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tone": self.tone.value,
            "messages_today": self.messages_today,
            "tokens_today": self.tokens_today,
            "last_reset_date": self.last_reset_date,
        }

    @classmethod
    def from_dict(cls, chat_id: int, data: Dict[str, Any]) -> "UserState":
        # Stored records written by older deployments may lack fields
        state = cls(chat_id=chat_id)
        state.tone = Tone.parse(data.get("tone")) or Tone.FRIENDLY
        state.messages_today = int(data.get("messages_today") or 0)
        state.tokens_today = int(data.get("tokens_today") or 0)
        state.last_reset_date = str(data.get("last_reset_date") or state.last_reset_date)
        return state
