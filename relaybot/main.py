#!/usr/bin/env python3
"""
Relaybot - relays Telegram messages to an LLM with per-chat daily quotas.
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from telegram import Bot

from relaybot import config
from relaybot.core import RelayBot, CompletionBridge, QuotaGate, CommandDispatcher
from relaybot.plugins import HelpPlugin, SettingsPlugin
from relaybot.services.telegram_service import TelegramService
from relaybot.storage import MemoryStateStore, RedisStateStore, init_event_log
from relaybot.utils.webhook_server import create_app

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO
)
# httpx logs full request URLs, which carry the bot token
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def build_relay() -> RelayBot:
    events = init_event_log(config.DATABASE_URL)

    if config.REDIS_URL:
        store = RedisStateStore(config.REDIS_URL)
    else:
        logger.warning("REDIS_URL not set, user state will not survive restarts")
        store = MemoryStateStore()

    quota = QuotaGate(max_messages_per_day=config.DAILY_LIMIT, max_tokens_per_day=config.DAILY_TOKEN_LIMIT)
    ai = CompletionBridge(
        config.OPENAI_API_KEY,
        config.AI_MODEL,
        max_output_tokens=config.MAX_OUTPUT_TOKENS,
        events=events,
    )
    telegram = TelegramService(Bot(config.BOT_TOKEN or ""), events=events)

    dispatcher = CommandDispatcher()
    dispatcher.register_plugin(HelpPlugin())
    dispatcher.register_plugin(SettingsPlugin(store, quota, events))

    return RelayBot(store, quota, ai, telegram, dispatcher, events=events)


def main():
    config.validate_config()

    relay = build_relay()
    webhook_url = f"{config.WEBHOOK_URL.rstrip('/')}/webhook" if config.WEBHOOK_URL else None

    @asynccontextmanager
    async def lifespan(app):
        if isinstance(relay.store, RedisStateStore) and not await relay.store.health_check():
            logger.warning("Redis is not reachable yet")
        await relay.telegram.start(relay.dispatcher.commands, webhook_url, config.WEBHOOK_SECRET)
        logger.info("🤖 Relaybot starting up...")
        yield
        await relay.telegram.stop()
        await relay.store.close()
        logger.info("Relaybot stopped")

    app = create_app(relay, config.WEBHOOK_SECRET or "", lifespan=lifespan)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
