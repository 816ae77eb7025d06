from rmIRC.irc import Bot, IRCConnection, DEFAULT_PLUGINS
from rmIRC.logger import Logger, LogLevel
from rmIRC.pools import PoolLoadError
from typing import Optional
import asyncio
import sys

BOT_NICK = "rmapbot"
BOT_USERNAME = "rmapbot"
BOT_REALNAME = "random map pool bot"
COMMAND_PREFIX = ""
OWNER_NICK = "brandonw"
CHANNELS_TO_JOIN = {
    "#rmap": None,
}
SERVER = "127.0.0.1"
PORT = 6667
SERVER_PASSWORD: Optional[str] = None
POOL_DIR = "rmap"
LOG_FILE: Optional[str] = "rmap.log"
LOG_LEVEL = LogLevel.INFO
PLUGINS = DEFAULT_PLUGINS


async def run_bot() -> int:
    """Main entry point to initialize and run the bot."""

    logger = Logger(file_path=LOG_FILE, min_level=LOG_LEVEL)
    irc_connection = IRCConnection(SERVER, PORT, logger)

    bot = Bot(
        conn=irc_connection,
        nick=BOT_NICK,
        username=BOT_USERNAME,
        realname=BOT_REALNAME,
        password=SERVER_PASSWORD,
        prefix=COMMAND_PREFIX,
        owner=OWNER_NICK,
        pool_dir=POOL_DIR,
    )

    try:
        bot.load_plugins(PLUGINS)
    except PoolLoadError as e:
        print(f"FATAL BOT ERROR: cannot load map pools: {e}", file=sys.stderr)
        return 1

    await bot.start(CHANNELS_TO_JOIN)
    logger.close()
    return 0


if __name__ == "__main__":
    print(f"Connecting as NICK: {BOT_NICK} to {SERVER}:{PORT}")
    print(f"Channels configured: {', '.join(CHANNELS_TO_JOIN.keys())}")

    try:
        sys.exit(asyncio.run(run_bot()))
    except KeyboardInterrupt:
        print("\n[BOT] Shutting down via Ctrl+C.")
