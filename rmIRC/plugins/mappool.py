from rmIRC.plugin import Plugin
from rmIRC.pools import PoolStore, PoolLoadError, EmptyPoolStoreError, InvalidPoolIndexError
from rmIRC.types.context import Context
from rmIRC.types.message import Responses
import asyncio
import re

# ASCII digits with an optional minus sign
POOL_NUMBER_RE = re.compile(r"-?[0-9]+")

POOLS_CMD = "pools"
RANDOM_MAP_CMD = "rm"
RELOAD_MAPS_CMD = "reload-maps"


class MapPoolPlugin(Plugin):
    """
    Lists map pools and picks random maps from them.

    pools           list the loaded pools with their numbers
    rm [n]          a random map from every pool, or from pool n
    reload-maps     re-read the pool directory
    """
    name = "random map pools"
    commands = (POOLS_CMD, RANDOM_MAP_CMD, RELOAD_MAPS_CMD)

    def __init__(self, store: PoolStore):
        self.store = store

    def init(self, bot):
        # PoolLoadError propagates: a bot without a readable pool directory does not start
        super().init(bot)
        self.store.load()

    async def respond(self, ctx: Context) -> Responses:
        if ctx.command_name == POOLS_CMD:
            return self.list_pools(ctx)
        if ctx.command_name == RANDOM_MAP_CMD:
            return self.random_map(ctx)
        if ctx.command_name == RELOAD_MAPS_CMD:
            return await self.reload_maps(ctx)
        return Responses()

    def list_pools(self, ctx: Context) -> Responses:
        out = Responses()
        out.add(ctx.reply("Available map pools:"))
        out.add(ctx.reply("All pools (don't specify a number)"))
        for number, name in enumerate(self.store.list_pools(), start=1):
            out.add(ctx.reply(f"{number}. {name}"))
        return out

    def random_map(self, ctx: Context) -> Responses:
        out = Responses()
        try:
            if ctx.args:
                number = ctx.args[0]
                if not POOL_NUMBER_RE.fullmatch(number):
                    raise InvalidPoolIndexError(number, len(self.store))
                index = int(number)
                choice = self.store.pick_random_from(index)
            else:
                choice = self.store.pick_random()
        except InvalidPoolIndexError as e:
            out.add(ctx.reply(f"Invalid pool number: {e.index}"))
            return out
        except EmptyPoolStoreError:
            out.add(ctx.reply("No map pools loaded"))
            return out

        out.add(ctx.reply(f"Map: {choice}"))
        return out

    async def reload_maps(self, ctx: Context) -> Responses:
        out = Responses()
        try:
            count = await asyncio.to_thread(self.store.reload)
        except PoolLoadError:
            out.add(ctx.reply("Failed to reload map pools"))
            return out

        out.add(ctx.reply(f"Reloaded map pools ({count} pools)"))
        return out


def setup(bot) -> MapPoolPlugin:
    return MapPoolPlugin(bot.pools)
