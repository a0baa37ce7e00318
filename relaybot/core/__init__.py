"""Core relay components."""
from relaybot.core.bot import RelayBot
from relaybot.core.ai import CompletionBridge
from relaybot.core.quota import QuotaGate
from relaybot.core.dispatcher import CommandDispatcher
from relaybot.core.state import Tone, UserState

__all__ = ['RelayBot', 'CompletionBridge', 'QuotaGate', 'CommandDispatcher', 'Tone', 'UserState']
