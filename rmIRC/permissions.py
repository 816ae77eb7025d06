from typing import Callable, Iterable, Set
from rmIRC.types.context import Context
from rmIRC.types.message import Responses
from rmIRC.logMessages import LOG_PERM_GRANTED, LOG_PERM_DENIED
import functools

class Permissions:
    """
    A list of nicknames allowed to run privileged commands.
    Matching is plain string equality on the sender's nick.
    """
    def __init__(self, allowed: Iterable[str]):
        self.allowed: Set[str] = set(allowed)

    def check(self, ctx: Context, funcname: str = "command") -> bool:
        if ctx.author not in self.allowed:
            ctx.logger.debug("PERM", LOG_PERM_DENIED, author=ctx.author, funcname=funcname)
            return False
        ctx.logger.info("PERM", LOG_PERM_GRANTED, author=ctx.author, funcname=funcname)
        return True


def safeguard(func: Callable):
    """
    Decorator for Plugin.respond methods. The plugin must have a `permissions`
    attribute; senders not on it get no responses at all.
    >>> class Admin(Plugin):
    >>>     permissions = Permissions(["brandonw"])
    >>>     @safeguard
    >>>     async def respond(self, ctx): ...
    """
    @functools.wraps(func)
    async def wrapper(plugin, ctx: Context, *args, **kwargs):
        if not plugin.permissions.check(ctx, f"{plugin.name}:{ctx.command_name}"):
            return Responses()
        return await func(plugin, ctx, *args, **kwargs)
    return wrapper
