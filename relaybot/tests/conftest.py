"""Shared fixtures for relay tests."""
from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest
import pytz

from relaybot.core import RelayBot, CompletionBridge, QuotaGate, CommandDispatcher
from relaybot.plugins import HelpPlugin, SettingsPlugin
from relaybot.services.telegram_service import TelegramService
from relaybot.storage.analytics import RecordingEventLog
from relaybot.storage.memory import MemoryStateStore

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=pytz.utc)


class CountingStore(MemoryStateStore):
    """Memory store that counts reads and writes."""

    def __init__(self):
        super().__init__()
        self.reads = 0
        self.writes = 0

    async def get(self, chat_id):
        self.reads += 1
        return await super().get(chat_id)

    async def save(self, state):
        self.writes += 1
        await super().save(state)


@pytest.fixture
def today():
    return "2024-05-01"


@pytest.fixture
def events():
    return RecordingEventLog()


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def quota():
    return QuotaGate(max_messages_per_day=20, max_tokens_per_day=20000, clock=lambda: FIXED_NOW)


@pytest.fixture
def telegram_bot():
    bot = Mock()
    bot.send_message = AsyncMock(return_value=Mock(message_id=1))
    bot.initialize = AsyncMock()
    bot.shutdown = AsyncMock()
    bot.set_my_commands = AsyncMock()
    bot.set_webhook = AsyncMock()
    return bot


@pytest.fixture
def openai_client():
    client = Mock()
    client.responses.create = AsyncMock(return_value={
        "output_text": "Hi there!",
        "usage": {"input_tokens": 10, "output_tokens": 5},
    })
    return client


@pytest.fixture
def relay(store, quota, telegram_bot, openai_client, events):
    ai = CompletionBridge(model="gpt-5-mini", max_output_tokens=800, client=openai_client, events=events)
    telegram = TelegramService(telegram_bot, events=events)
    dispatcher = CommandDispatcher()
    dispatcher.register_plugin(HelpPlugin())
    dispatcher.register_plugin(SettingsPlugin(store, quota, events))
    return RelayBot(store, quota, ai, telegram, dispatcher, events=events)
