"""Serial framing between card reader, terminal and host, and the terminal's state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from rfidattend.clock import RealTimeClock

STX = 0x02
ETX = 0x03
MAX_CARD_LENGTH = 9
HOST_TERMINATOR = "@"
MAX_HOST_MESSAGE = 14
CARD_TERMINATOR = "$"


class CardFrameDecoder:
    """Collect a card number sent by the reader between STX and ETX bytes.

    Bytes outside a frame are ignored and at most nine characters are kept.
    """

    def __init__(self) -> None:
        self._receiving = False
        self._chars: list[str] = []

    def feed(self, byte: int) -> str | None:
        """Consume one byte; return the card number when a frame ends."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"{byte!r} is not a byte")
        if byte == STX:
            self._receiving = True
            self._chars = []
            return None
        if not self._receiving:
            return None
        if byte == ETX:
            card = "".join(self._chars)
            self._receiving = False
            self._chars = []
            return card
        if len(self._chars) < MAX_CARD_LENGTH:
            self._chars.append(chr(byte))
        return None


class HostMessageDecoder:
    """Collect characters from the host up to an '@' terminator."""

    def __init__(self) -> None:
        self._chars: list[str] = []

    def feed(self, char: str) -> str | None:
        """Consume one character; return the message when '@' arrives."""
        if len(char) != 1:
            raise ValueError("feed takes exactly one character")
        if char == HOST_TERMINATOR:
            message = "".join(self._chars)
            self._chars = []
            return message
        if len(self._chars) >= MAX_HOST_MESSAGE:
            self._chars = []
            raise ValueError("host message exceeds the receive buffer")
        self._chars.append(char)
        return None


@dataclass(frozen=True)
class DateMessage:
    """Date sent by the host: ``YYYY-MM-DD`` then a weekday code."""

    year: int
    month: int
    day: int
    weekday: int


@dataclass(frozen=True)
class TimeMessage:
    """Time sent by the host: ``HH:MM:SS``."""

    hour: int
    minute: int
    second: int


def _digits(text: str, start: int, stop: int) -> int:
    part = text[start:stop]
    if len(part) != stop - start or not (part.isascii() and part.isdigit()):
        raise ValueError(f"expected digits at {start}..{stop - 1} in {text!r}")
    return int(part)


def parse_date_message(text: str) -> DateMessage:
    """Parse a host date message.

    The weekday follows the date as a digit or as a raw code 0-6; when it is
    absent (a zero code ends the string early) it is Sunday.
    """
    year = _digits(text, 0, 4)
    month = _digits(text, 5, 7)
    day = _digits(text, 8, 10)
    if text[4:5] != "-" or text[7:8] != "-":
        raise ValueError(f"malformed date {text!r}")
    rest = text[10:]
    if not rest:
        weekday = 0
    elif len(rest) == 1 and rest in "0123456":
        weekday = int(rest)
    elif len(rest) == 1 and ord(rest) <= 6:
        weekday = ord(rest)
    else:
        raise ValueError(f"malformed weekday in {text!r}")
    return DateMessage(year, month, day, weekday)


def parse_time_message(text: str) -> TimeMessage:
    """Parse a host time message of the form ``HH:MM:SS``."""
    if len(text) < 8 or text[2] != ":" or text[5] != ":":
        raise ValueError(f"malformed time {text!r}")
    return TimeMessage(_digits(text, 0, 2), _digits(text, 3, 5), _digits(text, 6, 8))


def build_reply(card: str, admin_card: str) -> str:
    """Build the line sent to the host: 'A' for the admin card, 'U' otherwise."""
    prefix = "A" if card == admin_card else "U"
    return f"{prefix}{card}{CARD_TERMINATOR}\r\n"


def encode_response(message: str) -> bytes:
    """Encode a host response: text up to any NUL, then the '@' terminator."""
    text = message.split("\0", 1)[0]
    return text.encode("latin-1") + HOST_TERMINATOR.encode("ascii")


class Stage(Enum):
    """What the terminal expects next from the host."""

    AWAIT_DATE = auto()
    AWAIT_TIME = auto()
    READY = auto()


@dataclass
class Terminal:
    """The card terminal: syncs its clock from the host, then reports cards."""

    admin_card: str
    clock: RealTimeClock = field(default_factory=RealTimeClock)
    stage: Stage = Stage.AWAIT_DATE
    last_message: str = ""

    def handle_host_message(self, text: str) -> DateMessage | TimeMessage | None:
        """Apply a message from the host; the first two set date and time."""
        self.last_message = text
        if self.stage is Stage.AWAIT_DATE:
            date = parse_date_message(text)
            self.clock.set_date(date.day, date.month, date.year)
            self.clock.set_weekday(date.weekday)
            self.stage = Stage.AWAIT_TIME
            return date
        if self.stage is Stage.AWAIT_TIME:
            time = parse_time_message(text)
            self.clock.set_time(time.hour, time.minute, time.second)
            self.stage = Stage.READY
            return time
        return None

    def handle_card(self, card: str) -> str:
        """Return the reply to send to the host for a scanned card."""
        if self.stage is not Stage.READY:
            raise RuntimeError("clock has not been synchronised by the host")
        return build_reply(card, self.admin_card)