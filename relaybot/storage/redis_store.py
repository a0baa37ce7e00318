"""
Redis-backed user state store.
Each chat is one JSON record; counters roll over by date, not by key expiry.
"""
import json
import logging
from typing import Optional

import redis.asyncio as redis

from relaybot.core.state import UserState
from relaybot.storage.base import UserStateStore, state_key

logger = logging.getLogger(__name__)


class RedisStateStore(UserStateStore):
    def __init__(self, url: Optional[str] = None, client: Optional[redis.Redis] = None):
        if client is None:
            if not url:
                raise ValueError("RedisStateStore needs a url or a client")
            client = redis.from_url(url)
        self.redis = client

    async def get(self, chat_id: int) -> Optional[UserState]:
        raw = await self.redis.get(state_key(chat_id))
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt state record for chat {chat_id}, starting fresh: {e}")
            return None
        if not isinstance(data, dict):
            logger.error(f"Unexpected state record for chat {chat_id}: {data!r}")
            return None
        return UserState.from_dict(chat_id, data)

    async def save(self, state: UserState) -> None:
        await self.redis.set(state_key(state.chat_id), json.dumps(state.to_dict()))

    async def health_check(self) -> bool:
        """Check if Redis connection is healthy."""
        try:
            await self.redis.ping()
            return True
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.redis.aclose()
