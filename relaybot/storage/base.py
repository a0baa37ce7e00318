"""Key-value backed user state store interface."""
from abc import ABC, abstractmethod
from typing import Optional

from relaybot.core.state import UserState


def state_key(chat_id: int) -> str:
    return f"relaybot:user:{chat_id}"


class UserStateStore(ABC):
    """One unified record per chat.

    Reads and writes are independent; there is no compare-and-swap, so two
    concurrent updates for the same chat can overwrite each other.
    """

    @abstractmethod
    async def get(self, chat_id: int) -> Optional[UserState]:
        pass

    @abstractmethod
    async def save(self, state: UserState) -> None:
        pass

    async def close(self) -> None:
        pass
