from rmIRC.plugin import Plugin
from rmIRC.permissions import Permissions, safeguard
from rmIRC.types.context import Context
from rmIRC.types.message import Responses

QUIT_COMMAND = "!QUIT"
DEFAULT_OWNER = "brandonw"


class QuitPlugin(Plugin):
    """
    Shuts the bot down when its owner says !QUIT.
    """
    name = "quit"

    def __init__(self, owner: str = DEFAULT_OWNER, command: str = QUIT_COMMAND):
        self.commands = (command,)
        self.permissions = Permissions([owner])

    @safeguard
    async def respond(self, ctx: Context) -> Responses:
        out = Responses()
        # only the bare command, "!QUIT now" does not count
        if ctx.arg:
            return out
        ctx.bot.kill(ctx.author)
        out.add(ctx.message_to(None, "QUIT"))
        return out


def setup(bot) -> QuitPlugin:
    return QuitPlugin(owner=bot.owner)
