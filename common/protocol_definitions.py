"""
Protocol definitions for the line chat service.

This module defines the command grammar the server understands and the
helpers shared by client and server for framing text lines on the wire.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from common.constants import Commands, LINE_TERMINATOR, ENCODING


class CommandKind(Enum):
    """Kinds of lines a client may send."""
    QUIT = Commands.QUIT
    LOGOUT = Commands.LOGOUT
    LISTALL = Commands.LISTALL
    LISTONLINE = Commands.LISTONLINE
    LOGIN = Commands.LOGIN
    REGISTER = Commands.REGISTER
    MESSAGE = 'MESSAGE'


_KEYWORDS = {kind.value: kind for kind in CommandKind if kind is not CommandKind.MESSAGE}


@dataclass(frozen=True)
class Command:
    """A parsed client line."""
    kind: CommandKind
    text: str = ''
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        """True when both a username and a password were given."""
        return bool(self.username) and bool(self.password)


def parse_command(line: str) -> Command:
    """
    Parse one received line into a Command.

    The keyword is the first whitespace-delimited token and must match
    exactly (case-sensitive). LOGIN and REGISTER take the next two
    space-separated fields as username and password; the password keeps
    any further spaces. Anything that is not a keyword is a chat message.
    """
    tokens = line.split(None, 1)
    kind = _KEYWORDS.get(tokens[0]) if tokens else None

    if kind is None:
        return Command(CommandKind.MESSAGE, text=line)

    if kind in (CommandKind.LOGIN, CommandKind.REGISTER):
        fields = line.lstrip().split(' ', 2)
        if len(fields) < 3:
            return Command(kind, text=line)
        return Command(kind, text=line, username=fields[1], password=fields[2])

    return Command(kind, text=line)


def format_chat_line(login: str, message: str) -> str:
    """Format a broadcast chat line."""
    return f"{login}: {message}"


def encode_line(text: str) -> bytes:
    """Frame a text line for the wire."""
    return (text + LINE_TERMINATOR).encode(ENCODING)


def decode_line(data: bytes) -> str:
    """Decode a received line, stripping an LF or CRLF terminator."""
    text = data.decode(ENCODING, errors='replace')
    if text.endswith('\n'):
        text = text[:-1]
    if text.endswith('\r'):
        text = text[:-1]
    return text


def split_address(address: str, default_host: Optional[str] = None) -> Tuple[Optional[str], int]:
    """
    Split a "host:port" address into its parts.

    An empty host (as in ":8080") yields default_host. IPv6 hosts may be
    given in brackets ("[::1]:8080").
    """
    host, sep, port = address.rpartition(':')
    if not sep:
        raise ValueError(f"Address '{address}' has no port")
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"Invalid port in address '{address}'") from None
    if not 0 <= port_number <= 65535:
        raise ValueError(f"Port out of range in address '{address}'")
    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    return (host or default_host), port_number
