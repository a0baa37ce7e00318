"""Slash-command table keyed by the first token of the message."""
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING
import logging

from relaybot.core.state import UserState

if TYPE_CHECKING:
    from relaybot.plugins import Plugin

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    chat_id: int
    text: str
    args: List[str]
    state: UserState


CommandCallback = Callable[[CommandContext], Awaitable[str]]


def parse_command(text: str) -> Tuple[str, List[str]]:
    tokens = text.split()
    if not tokens:
        return "", []
    return tokens[0], tokens[1:]


class CommandDispatcher:
    def __init__(self):
        self._handlers: Dict[str, CommandCallback] = {}
        self._plugins: List['Plugin'] = []

    def add_command(self, command: str, callback: CommandCallback) -> None:
        name = command if command.startswith("/") else f"/{command}"
        if name in self._handlers:
            raise ValueError(f"Command {name} already registered")
        self._handlers[name] = callback

    def register_plugin(self, plugin: 'Plugin') -> None:
        plugin.register(self)
        self._plugins.append(plugin)
        logger.info(f"Registered plugin: {plugin.name}")

    @property
    def commands(self) -> List[Tuple[str, str]]:
        """(command, description) pairs for the bot menu."""
        return [pair for plugin in self._plugins for pair in plugin.commands]

    async def dispatch(self, chat_id: int, text: str, state: UserState) -> Optional[str]:
        """Run the matching command and return its reply, or None to fall through."""
        command, args = parse_command(text)
        callback = self._handlers.get(command)
        if callback is None:
            return None
        logger.info(f"Command {command} from chat {chat_id}")
        return await callback(CommandContext(chat_id=chat_id, text=text, args=args, state=state))
