from typing import Dict, Iterable, Optional, Any, List
from rmIRC.logMessages import *
from rmIRC.logger import Logger, NullLogger
from rmIRC.dispatch import Dispatcher
from rmIRC.pools import PoolStore
from rmIRC.plugins.quit import DEFAULT_OWNER
from rmIRC.types.message import Message, Response, create_message
import asyncio

DEFAULT_PLUGINS = (
    "rmIRC.plugins.nick",
    "rmIRC.plugins.quit",
    "rmIRC.plugins.mappool",
)


class IRCConnection:
    """
    A line-oriented asyncio stream to one IRC server. Lines go out UTF-8
    encoded with a CRLF terminator; any socket error marks the connection
    as closed and is logged rather than raised.
    """
    def __init__(self, host: str, port: int, logger: Optional[Logger] = None):
        self.host = host
        self.port = port
        self.logger: Any = logger if logger is not None else NullLogger()
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.connected = False

    async def connect(self):
        self.logger.info("NET", LOG_NET_ATTEMPT, host=self.host, port=self.port)
        try:
            self.reader, self.writer = await asyncio.open_connection(self.host, self.port)
        except ConnectionRefusedError:
            self.logger.error("ERROR", LOG_ERROR_CONNECT_REFUSED, host=self.host)
            return
        except OSError as e:
            self.logger.error("ERROR", LOG_ERROR_CONNECT_FAIL, error=e)
            return
        self.connected = True
        self.logger.info("NET", LOG_NET_ESTABLISHED)

    async def send_raw(self, line: str):
        """
        Writes one protocol line.
        @arg line: The line without terminator (e.g., 'PRIVMSG #rmap :Map: de_nuke').
        @return: None
        """
        if not self.connected or self.writer is None:
            self.logger.error("ERROR", LOG_ERROR_NOT_CONNECTED)
            return

        line = line.strip()
        self.logger.raw_send(line)
        try:
            self.writer.write(f"{line}\r\n".encode("utf-8"))
            await self.writer.drain()
        except OSError as e:
            self.logger.error("ERROR", LOG_ERROR_SEND_FAIL, error=e)
            self.connected = False

    async def read_line(self) -> Optional[str]:
        """
        @return: The next line without its terminator, or None once the stream is gone.
        """
        if not self.connected or self.reader is None:
            return None

        try:
            data = await self.reader.readline()
        except OSError as e:
            self.logger.error("ERROR", LOG_ERROR_READ_FAIL, error=e)
            data = b""
        else:
            if not data:
                self.logger.info("NET", LOG_NET_CLOSED_REMOTE)

        if not data:
            self.connected = False
            return None
        return data.decode("utf-8", errors="ignore").strip()

    async def close(self, send_quit: bool = True):
        """
        @kwarg send_quit: Say QUIT before closing, unless the bot already did. (default: True)
        """
        if self.writer is not None:
            if send_quit and self.connected:
                await self.send_raw("QUIT")
            self.writer.close()
            self.logger.info("NET", LOG_NET_CLOSED_LOCAL)
        self.connected = False


class Bot:
    """
    The IRC bot client. Reads lines from the connection, hands them to the
    plugin dispatcher and writes the responses back.
    """
    def __init__(self, conn: IRCConnection, nick: str, username: str, realname: str,
                 password: Optional[str] = None, prefix: str = "", owner: str = DEFAULT_OWNER,
                 pool_dir: str = "rmap", pools: Optional[PoolStore] = None):
        """
        Initializes the Bot instance. Plugins are added separately with load_plugins().
        @arg conn: The pre-configured IRCConnection object used for I/O.
        @arg nick: The bot's nickname.
        @arg username: The bot's username (IDENT).
        @arg realname: The bot's real name (GECOS).
        @kwarg password: Server password sent with PASS, if required. (default: None)
        @kwarg prefix: Text that must precede chat commands. (default: "")
        @kwarg owner: The only nick allowed to shut the bot down. (default: "brandonw")
        @kwarg pool_dir: Directory holding the map pool files. (default: "rmap")
        @kwarg pools: A ready PoolStore, overriding pool_dir. (default: None)
        @return: None
        """
        self.conn = conn
        self.logger = conn.logger
        self.nick = nick
        self.username = username
        self.realname = realname
        self.password = password
        self.owner = owner

        self.running = False
        self.registered = False
        self.nick_sent = False
        self.quit_sent = False
        self.channel_map: Dict[str, Optional[str]] = {}

        self.pools = pools if pools is not None else PoolStore(pool_dir, logger=self.logger)
        self.dispatcher = Dispatcher(self, prefix)

    def load_plugins(self, module_names: Iterable[str] = DEFAULT_PLUGINS):
        """
        Loads plugin modules in order. Errors propagate; a failing plugin stops startup.
        @kwarg module_names: Dot-path module names. (default: DEFAULT_PLUGINS)
        @return: None
        """
        for module_name in module_names:
            self.dispatcher.load_module(module_name)

    def mark_nick_sent(self):
        self.nick_sent = True

    def kill(self, author: str = ""):
        """
        Stops the main loop after the current message's responses are sent.
        @kwarg author: Who asked, for the log. (default: "")
        @return: None
        """
        self.logger.info("CORE", LOG_CORE_KILLED, author=author or "bot")
        self.running = False

    def _join_channels(self) -> List[Response]:
        self.logger.info("CORE", LOG_READY_PROTOCOL)
        joins = []
        for channel, key in self.channel_map.items():
            join = create_message(channel, "JOIN", params=(key,) if key else (), logger=self.logger)
            if join is not None:
                joins.append(join)
        return joins

    async def handle_line(self, line: str) -> List[Response]:
        """
        Runs one dispatch cycle for a raw line.
        @arg line: The raw IRC line.
        @return: The responses to send, in order.
        """
        message = Message.parse(line)
        if not message.command:
            self.logger.debug("CORE", LOG_MESSAGE_UNPARSED, line=line)
            return []

        if message.command == "PING":
            self.logger.info("NET", LOG_NET_PONG)
            pong = create_message(None, "PONG", message.trailing, tuple(message.middle), logger=self.logger)
            return [pong] if pong is not None else []

        responses: List[Response] = []
        if message.command == "376" and not self.registered:
            self.registered = True
            self.logger.info("NET", LOG_READY_MOTD)
            responses.extend(self._join_channels())

        responses.extend(await self.dispatcher.dispatch(message))
        return responses

    async def send(self, responses: Iterable[Response]):
        for response in responses:
            await self.conn.send_raw(response.format())
            if response.verb == "QUIT":
                self.quit_sent = True

    async def start(self, channel_map: Dict[str, Optional[str]]):
        """
        Starts the main asynchronous bot loop.
        This method connects, waits for the server NOTICE that triggers nick
        registration, joins channels and dispatches every received line.
        @arg channel_map: Channel names to join mapped to optional channel keys.
        @return: None
        """
        logger = self.logger

        if not self.conn.connected:
            await self.conn.connect()
            if not self.conn.connected: return

        self.running = True
        self.registered = False
        self.nick_sent = False
        self.quit_sent = False
        self.channel_map = channel_map

        if self.password: await self.conn.send_raw(f"PASS {self.password}")

        try:
            while self.running and self.conn.connected:
                line = await self.conn.read_line()
                if line is None: break

                logger.raw_recv(line)
                await self.send(await self.handle_line(line))
        finally:
            self.running = False
            logger.info("CORE", LOG_LOOP_ENDED)
            self.dispatcher.close_all()
            await self.conn.close(send_quit=not self.quit_sent)
