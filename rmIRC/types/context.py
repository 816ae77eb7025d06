from rmIRC.types.message import Message, Response, create_message
from typing import Optional, List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from rmIRC.irc import Bot


def split_command(text: str) -> Tuple[str, str]:
    """
    Splits chat text into the command token and the rest of the line.
    Splits on the first space only; without a space the whole text is the command.
    @arg text: The message text (e.g., 'rm 2').
    @return: (command, argument)
    >>> split_command("rm 2")
    ('rm', '2')
    >>> split_command("pools")
    ('pools', '')
    """
    command, _, argument = text.partition(" ")
    return command, argument


class Context:
    """
    A context object passed to plugins, containing details about the received
    message and helpers for building replies.
    """
    def __init__(self, bot: 'Bot', message: Message, prefix: str = ""):
        """
        Initializes the context object.
        @arg bot: The associated Bot instance.
        @arg message: The parsed incoming message.
        @kwarg prefix: The bot's command prefix, stripped from the command token. (default: "")
        @return: None
        """
        self.bot = bot
        self.message = message
        self.logger = bot.logger
        self.author = message.nick
        self.target = message.target
        self.text = message.text
        self.command_type = message.command

        body = self.text
        if prefix and body.startswith(prefix):
            body = body[len(prefix):]
        self.command_name, self.arg = split_command(body)
        self.args: List[str] = self.arg.split()

    @property
    def recipient(self) -> str:
        """
        Where replies go: the author for private messages, otherwise the channel.
        """
        return self.author if self.target == self.bot.nick else self.target

    def reply(self, text: str) -> Optional[Response]:
        """
        Builds a PRIVMSG back to the originating channel or user.
        @arg text: The message content.
        @return: The Response, or None if it could not be built.
        """
        return create_message(self.recipient, "PRIVMSG", text, logger=self.logger)

    def message_to(self, target: Optional[str], verb: str, text: Optional[str] = None, params: Tuple[str, ...] = ()) -> Optional[Response]:
        """
        Builds an arbitrary outgoing message.
        @return: The Response, or None if it could not be built.
        """
        return create_message(target, verb, text, params, logger=self.logger)
