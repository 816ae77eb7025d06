from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING
from rmIRC.logger import NullLogger
from rmIRC.logMessages import LOG_REGISTRY_OVERWRITTEN

if TYPE_CHECKING:
    from rmIRC.plugin import Plugin


class CommandRegistry:
    """
    Maps command names to the plugin handling them.
    Names match exactly and case-sensitively. Registering a taken name
    replaces the previous plugin and logs a warning.
    """
    def __init__(self, logger: Any = None):
        self.logger: Any = logger if logger is not None else NullLogger()
        self._commands: Dict[str, 'Plugin'] = {}

    def register(self, name: str, plugin: 'Plugin'):
        old = self._commands.get(name)
        if old is not None and old is not plugin:
            self.logger.warning("PLUGIN", LOG_REGISTRY_OVERWRITTEN, name=name, old=old.name, new=plugin.name)
        self._commands[name] = plugin

    def lookup(self, name: str) -> Optional['Plugin']:
        return self._commands.get(name)

    def unregister_plugin(self, plugin: 'Plugin') -> List[str]:
        """
        Removes every name pointing at a plugin.
        @arg plugin: The plugin to drop.
        @return: The names that were removed.
        """
        removed = [name for name, owner in self._commands.items() if owner is plugin]
        for name in removed:
            del self._commands[name]
        return removed

    def names(self) -> List[str]:
        return list(self._commands)

    def clear(self):
        self._commands.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)
