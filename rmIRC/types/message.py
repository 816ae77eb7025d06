from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple
from rmIRC.logMessages import LOG_MESSAGE_BUILD_FAIL
import re

MAX_BODY_BYTES = 400

IRC_RE = re.compile(
    r'^(?:[:](\S+) )?(\S+)(?: (.*))?$'
)


def split_params(params: str) -> Tuple[List[str], Optional[str]]:
    """
    Splits a raw parameter string into its middle parameters and the trailing one.
    @arg params: Everything after the verb (e.g., '#chat :rm 2').
    @return: (middle, trailing). trailing is None when the line has no ':' parameter.
    >>> split_params("#chat :rm 2")
    (['#chat'], 'rm 2')
    """
    if params.startswith(":"):
        return [], params[1:]
    middle, sep, trailing = params.partition(" :")
    return middle.split(), (trailing if sep else None)


@dataclass(frozen=True)
class Message:
    """
    A single parsed line received from the server.
    """
    prefix: str
    command: str
    params: str
    line: str = ""

    @classmethod
    def parse(cls, line: str) -> "Message":
        """
        Parses a raw IRC line.
        @arg line: The line without its CRLF terminator.
        @return: A Message. Lines that do not look like IRC have an empty command.
        >>> Message.parse(":brandonw!b@host PRIVMSG #chat :rm 2").nick
        'brandonw'
        """
        match = IRC_RE.match(line.strip())
        if not match:
            return cls("", "", "", line)
        prefix, command, params = match.groups()
        return cls(prefix or "", command, params or "", line)

    @property
    def nick(self) -> str:
        return self.prefix.split('!', 1)[0]

    @property
    def middle(self) -> List[str]:
        return split_params(self.params)[0]

    @property
    def trailing(self) -> Optional[str]:
        return split_params(self.params)[1]

    @property
    def target(self) -> str:
        middle = self.middle
        return middle[0] if middle else ""

    @property
    def text(self) -> str:
        """
        The trailing parameter, or for a colon-less one-word message like
        'PRIVMSG #rmap pools' the last parameter after the target.
        """
        middle, trailing = split_params(self.params)
        if trailing is not None:
            return trailing
        return middle[-1] if len(middle) > 1 else ""


@dataclass(frozen=True)
class Response:
    """
    A single outgoing protocol line, e.g. PRIVMSG #chat :Map: de_dust2
    Raises ValueError when the line could not be framed safely.
    """
    verb: str
    target: Optional[str] = None
    params: Tuple[str, ...] = field(default_factory=tuple)
    text: Optional[str] = None

    def __post_init__(self):
        if not self.verb or " " in self.verb:
            raise ValueError(f"bad verb {self.verb!r}")
        for part in (self.verb, self.target or "", *self.params, self.text or ""):
            if "\r" in part or "\n" in part:
                raise ValueError("line breaks are not allowed in a message")
        for part in (self.target or "", *self.params):
            if " " in part or part.startswith(":"):
                raise ValueError(f"bad middle parameter {part!r}")
        if self.text is not None and len(self.text.encode("utf-8")) > MAX_BODY_BYTES:
            raise ValueError(f"body longer than {MAX_BODY_BYTES} bytes")

    def format(self) -> str:
        """
        Serializes the response to its wire form, without the CRLF terminator.
        @return: The IRC line.
        """
        parts = [self.verb]
        if self.target:
            parts.append(self.target)
        parts.extend(self.params)
        if self.text is not None:
            parts.append(f":{self.text}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.format()


def create_message(target: Optional[str], verb: str, text: Optional[str] = None,
                   params: Tuple[str, ...] = (), logger: Any = None) -> Optional[Response]:
    """
    Builds a Response, returning None instead of raising when it cannot be framed.
    @arg target: The channel or nick, or None for targetless verbs like QUIT.
    @arg verb: The IRC verb (e.g., 'PRIVMSG').
    @kwarg text: The trailing parameter. (default: None)
    @kwarg params: Extra middle parameters after the target. (default: ())
    @kwarg logger: Where to report dropped responses. (default: None)
    @return: The Response, or None.
    """
    try:
        return Response(verb, target, tuple(params), text)
    except ValueError as e:
        if logger is not None:
            logger.error("ERROR", LOG_MESSAGE_BUILD_FAIL, verb=verb, target=target, error=e)
        return None


class Responses(list):
    """
    The responses one plugin produced for one incoming message.
    Failed constructions (None) are left out.
    """
    def add(self, response: Optional[Response]) -> bool:
        if response is None:
            return False
        self.append(response)
        return True
