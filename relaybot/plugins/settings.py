"""Tone and usage settings plugin."""
from relaybot.core.dispatcher import CommandContext, CommandDispatcher
from relaybot.core.quota import QuotaGate
from relaybot.core.state import Tone
from relaybot.plugins import Plugin
from relaybot.storage.analytics import EventLog
from relaybot.storage.base import UserStateStore
import logging

logger = logging.getLogger(__name__)

TONE_USAGE = "Usage: /settings_tone formal|friendly|technical"

TONE_CONFIRMATIONS = {
    Tone.FRIENDLY: "Tone set to friendly. I'll keep things casual 😊",
    Tone.FORMAL: "Tone set to formal. I will respond in a professional manner.",
    Tone.TECHNICAL: "Tone set to technical. Expect precise, detailed answers.",
}


class SettingsPlugin(Plugin):
    def __init__(self, store: UserStateStore, quota: QuotaGate, events: EventLog | None = None):
        self.store = store
        self.quota = quota
        self.events = events or EventLog()

    @property
    def name(self) -> str:
        return "settings"

    @property
    def commands(self):
        return [
            ("settings", "Show your tone and today's usage"),
            ("settings_tone", "Change the reply tone"),
        ]

    def register(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.add_command("settings", self.show_settings)
        dispatcher.add_command("settings_tone", self.set_tone)

    async def show_settings(self, ctx: CommandContext) -> str:
        state = ctx.state
        self.quota.refresh(state)
        return (
            f"Tone: {state.tone.value}\n"
            f"Messages today: {state.messages_today}/{self.quota.max_messages_per_day}"
        )

    async def set_tone(self, ctx: CommandContext) -> str:
        tone = Tone.parse(ctx.args[0]) if ctx.args else None
        if tone is None:
            return TONE_USAGE

        state = ctx.state
        self.quota.refresh(state)
        state.tone = tone
        await self.store.save(state)

        logger.info(f"Tone for chat {ctx.chat_id} set to {tone.value}")
        self.events.emit("tone_changed", ctx.chat_id, tone=tone.value)
        return TONE_CONFIRMATIONS[tone]
