from typing import Any, Dict, List, Optional, TYPE_CHECKING
from rmIRC.logMessages import *
from rmIRC.plugin import Plugin
from rmIRC.pools import MAX_RESPONSES
from rmIRC.registry import CommandRegistry
from rmIRC.types.context import Context
from rmIRC.types.message import Message, Response
import importlib
import sys

if TYPE_CHECKING:
    from rmIRC.irc import Bot


class Dispatcher:
    """
    Routes incoming messages to plugins and collects their responses.

    Two registries are kept: chat commands, keyed by the first word of a
    PRIVMSG, and protocol events, keyed by the IRC verb. One message can match
    several plugins; each gets its own Context and its own response list.
    """
    def __init__(self, bot: 'Bot', prefix: str = "", max_responses: int = MAX_RESPONSES):
        """
        @arg bot: The owning bot, handed to plugins on init.
        @kwarg prefix: Text that must precede chat commands. (default: "")
        @kwarg max_responses: Responses kept per incoming message. (default: MAX_RESPONSES)
        @return: None
        """
        self.bot = bot
        self.logger: Any = bot.logger
        self.prefix = prefix
        self.max_responses = max_responses
        self.plugins: Dict[str, Plugin] = {}
        self.modules: Dict[str, str] = {}
        self.commands = CommandRegistry(self.logger)
        self.events = CommandRegistry(self.logger)

    def _register(self, plugin: Plugin, commands: Optional[CommandRegistry] = None,
                  events: Optional[CommandRegistry] = None):
        commands = commands if commands is not None else self.commands
        events = events if events is not None else self.events
        for name in plugin.commands:
            commands.register(name, plugin)
        for verb in plugin.events:
            events.register(verb, plugin)

    def add_plugin(self, plugin: Plugin) -> bool:
        """
        Initializes a plugin and registers its commands and events.
        Errors raised by the plugin's init() propagate and the plugin is not added.
        @arg plugin: The plugin instance.
        @return: True if added, False if a plugin with that name is already loaded.
        """
        if plugin.name in self.plugins:
            self.logger.error("PLUGIN", LOG_PLUGIN_ALREADY_LOADED, plugin=plugin.name)
            return False

        plugin.init(self.bot)
        self.plugins[plugin.name] = plugin
        self._register(plugin)
        self.logger.info("PLUGIN", LOG_PLUGIN_LOADED, plugin=plugin.name,
                         commands=", ".join(plugin.commands), events=", ".join(plugin.events))
        return True

    def load_module(self, module_name: str) -> Plugin:
        """
        Imports a plugin module and adds the plugin returned by its setup(bot).
        @arg module_name: The dot-path name of the module (e.g., 'rmIRC.plugins.mappool').
        @return: The loaded plugin.
        @raise ImportError: if the module cannot be imported or has no setup().
        """
        self.logger.info("PLUGIN", LOG_PLUGIN_LOAD, module_name=module_name)
        module = importlib.import_module(module_name)
        setup = getattr(module, "setup", None)
        if setup is None:
            self.logger.error("PLUGIN", LOG_PLUGIN_NO_SETUP, module_name=module_name)
            raise ImportError(f"{module_name} has no setup() function")

        plugin = setup(self.bot)
        if self.add_plugin(plugin):
            self.modules[plugin.name] = module_name
        return plugin

    def _close(self, plugin: Plugin):
        try:
            plugin.close()
        except Exception as e:
            self.logger.error("ERROR", LOG_PLUGIN_CLOSE_FAIL, plugin=plugin.name, error=e)

    def unload_plugin(self, name: str) -> bool:
        """
        Closes a plugin and removes its commands and events.
        @arg name: The plugin name.
        @return: True if unloaded, False if no such plugin was loaded.
        """
        plugin = self.plugins.pop(name, None)
        if plugin is None:
            self.logger.error("PLUGIN", LOG_PLUGIN_NOT_LOADED, plugin=name)
            return False

        self._close(plugin)
        self.commands.unregister_plugin(plugin)
        self.events.unregister_plugin(plugin)
        module_name = self.modules.pop(name, None)
        if module_name in sys.modules:
            del sys.modules[module_name]
        self.logger.info("PLUGIN", LOG_PLUGIN_UNLOADED, plugin=name)
        return True

    def rebuild(self) -> List[str]:
        """
        Closes and re-initializes every plugin, then rebuilds both registries.
        The new registries are filled off to the side and swapped in at the end.
        A plugin whose init() raises is logged and keeps its commands, so it
        goes on answering with whatever state it had before.
        @return: Names of the plugins that failed to re-initialize.
        """
        self.logger.info("PLUGIN", LOG_PLUGIN_REBUILD, count=len(self.plugins))
        for plugin in self.plugins.values():
            self._close(plugin)

        commands = CommandRegistry(self.logger)
        events = CommandRegistry(self.logger)
        failed: List[str] = []
        for plugin in self.plugins.values():
            try:
                plugin.init(self.bot)
            except Exception as e:
                self.logger.error("ERROR", LOG_PLUGIN_INIT_FAIL, plugin=plugin.name, error=e)
                failed.append(plugin.name)
            self._register(plugin, commands, events)

        self.commands = commands
        self.events = events
        return failed

    def close_all(self):
        for plugin in self.plugins.values():
            self._close(plugin)

    def match(self, message: Message) -> List[Plugin]:
        """
        Finds the plugins interested in a message, in load order.
        @arg message: The parsed incoming message.
        @return: The matching plugins.
        """
        matched: List[Optional[Plugin]] = [self.events.lookup(message.command)]

        if message.command == "PRIVMSG":
            text = message.text
            if not self.prefix or text.startswith(self.prefix):
                command_name = Context(self.bot, message, self.prefix).command_name
                matched.append(self.commands.lookup(command_name))

        return [plugin for plugin in self.plugins.values() if any(plugin is m for m in matched)]

    async def dispatch(self, message: Message) -> List[Response]:
        """
        Runs one dispatch cycle: every matching plugin is offered the message
        once and their responses are collected in order.
        A plugin raising is logged and skipped; the other plugins still run.
        @arg message: The parsed incoming message.
        @return: The responses to send, at most max_responses of them.
        """
        if not message.command:
            return []

        responses: List[Response] = []
        for plugin in self.match(message):
            ctx = Context(self.bot, message, self.prefix)
            if message.command in plugin.events:
                self.logger.info("DISPATCH", LOG_DISPATCH_EVENT, verb=message.command, plugin=plugin.name)
            else:
                self.logger.info("DISPATCH", LOG_DISPATCH_COMMAND, command_name=ctx.command_name,
                                 author=ctx.author, plugin=plugin.name)
            try:
                responses.extend(await plugin.respond(ctx))
            except Exception as e:
                self.logger.error("ERROR", LOG_DISPATCH_PLUGIN_ERROR, plugin=plugin.name,
                                  command_name=ctx.command_name or message.command, error=e)

        if len(responses) > self.max_responses:
            self.logger.warning("DISPATCH", LOG_DISPATCH_TRUNCATED,
                                dropped=len(responses) - self.max_responses, limit=self.max_responses)
            del responses[self.max_responses:]
        return responses
