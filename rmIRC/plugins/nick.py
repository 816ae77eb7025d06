from rmIRC.plugin import Plugin
from rmIRC.types.context import Context
from rmIRC.types.message import Responses
from rmIRC.logMessages import LOG_CORE_NICK_SENT


class NickPlugin(Plugin):
    """
    Registers the bot's nickname on the first server NOTICE of a connection.
    """
    name = "nick"
    events = ("NOTICE",)

    async def respond(self, ctx: Context) -> Responses:
        out = Responses()
        bot = ctx.bot
        if bot.nick_sent:
            return out

        nick_msg = ctx.message_to(None, "NICK", params=(bot.nick,))
        user_msg = ctx.message_to(None, "USER", bot.realname, params=(bot.username, "0", "*"))
        if nick_msg is None or user_msg is None:
            return out

        out.add(nick_msg)
        out.add(user_msg)
        bot.mark_nick_sent()
        ctx.logger.info("CORE", LOG_CORE_NICK_SENT, nick=bot.nick)
        return out


def setup(bot) -> NickPlugin:
    return NickPlugin()
