from typing import Tuple, TYPE_CHECKING
from rmIRC.types.context import Context
from rmIRC.types.message import Responses

if TYPE_CHECKING:
    from rmIRC.irc import Bot


class Plugin:
    """
    Base class for bot plugins.

    A plugin owns some chat commands (the first word of a PRIVMSG) and/or some
    protocol events (raw IRC verbs such as NOTICE). For every incoming message
    that matches one of them the dispatcher calls respond() with a fresh
    Context and sends whatever Responses it returns.

    Plugin modules expose a setup(bot) function returning the plugin instance.

    >>> class Ping(Plugin):
    >>>     name = "ping"
    >>>     commands = ("ping",)
    >>>     async def respond(self, ctx):
    >>>         out = Responses()
    >>>         out.add(ctx.reply("pong"))
    >>>         return out
    """
    name: str = "plugin"
    commands: Tuple[str, ...] = ()
    events: Tuple[str, ...] = ()

    def init(self, bot: 'Bot'):
        """
        Called when the plugin is added to a dispatcher, and again on rebuild.
        @arg bot: The owning bot.
        @return: None
        """
        self.bot = bot

    def close(self):
        """
        Called when the plugin is removed, and before a rebuild.
        @return: None
        """

    async def respond(self, ctx: Context) -> Responses:
        """
        Builds the responses for one matching message.
        @arg ctx: The parsed message.
        @return: Zero or more responses.
        """
        return Responses()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
