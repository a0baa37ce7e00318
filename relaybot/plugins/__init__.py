"""
Plugin system for the relay bot.
Each plugin is a self-contained module that registers its own commands.
"""
from abc import ABC, abstractmethod
from typing import List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from relaybot.core.dispatcher import CommandDispatcher


class Plugin(ABC):
    """Base class for all plugins."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Plugin name for logging."""
        pass

    @property
    def commands(self) -> List[Tuple[str, str]]:
        """List of (command, description) tuples for the bot menu.
        Override this if your plugin adds commands."""
        return []

    @abstractmethod
    def register(self, dispatcher: 'CommandDispatcher') -> None:
        """Register command callbacks with the dispatcher."""
        pass


# Import plugins for convenience
from relaybot.plugins.help import HelpPlugin
from relaybot.plugins.settings import SettingsPlugin

__all__ = [
    'Plugin',
    'HelpPlugin',
    'SettingsPlugin',
]
