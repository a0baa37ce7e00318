"""Storage modules for the relay bot."""
from relaybot.storage.base import UserStateStore
from relaybot.storage.memory import MemoryStateStore
from relaybot.storage.redis_store import RedisStateStore
from relaybot.storage.analytics import EventLog, init_event_log

__all__ = ['UserStateStore', 'MemoryStateStore', 'RedisStateStore', 'EventLog', 'init_event_log']
