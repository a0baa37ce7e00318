"""In-memory user state store."""
from typing import Dict, Optional
import json

from relaybot.core.state import UserState
from relaybot.storage.base import UserStateStore, state_key


class MemoryStateStore(UserStateStore):
    def __init__(self):
        self._records: Dict[str, str] = {}

    async def get(self, chat_id: int) -> Optional[UserState]:
        raw = self._records.get(state_key(chat_id))
        if raw is None:
            return None
        return UserState.from_dict(chat_id, json.loads(raw))

    async def save(self, state: UserState) -> None:
        self._records[state_key(state.chat_id)] = json.dumps(state.to_dict())
