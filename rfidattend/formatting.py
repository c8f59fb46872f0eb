"""Text rendering of numbers for the character display and serial line."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

U32_MAX = 0xFFFFFFFF
S32_MIN = -(1 << 31)
S32_MAX = (1 << 31) - 1
LINE_BUFFER_SIZE = 100


class LcdCommand(IntEnum):
    """HD44780 command bytes used by the terminal display."""

    CLEAR = 0x01
    RETURN_HOME = 0x02
    SHIFT_CURSOR_RIGHT = 0x06
    SHIFT_CURSOR_LEFT = 0x07
    DISPLAY_OFF = 0x08
    DISPLAY_ON_CURSOR_OFF = 0x0C
    DISPLAY_ON_CURSOR_ON = 0x0E
    DISPLAY_ON_CURSOR_BLINK = 0x0F
    SHIFT_DISPLAY_LEFT = 0x10
    SHIFT_DISPLAY_RIGHT = 0x14
    MODE_8BIT_1LINE = 0x30
    MODE_4BIT_1LINE = 0x20
    MODE_8BIT_2LINE = 0x38
    MODE_4BIT_2LINE = 0x28
    GOTO_LINE1 = 0x80
    GOTO_LINE2 = 0xC0
    GOTO_LINE3 = 0x94
    GOTO_LINE4 = 0xD4
    GOTO_CGRAM = 0x40


def format_u32(n: int) -> str:
    """Render an unsigned 32-bit integer in decimal."""
    if not 0 <= n <= U32_MAX:
        raise ValueError(f"{n!r} is not an unsigned 32-bit value")
    return str(n)


def format_s32(n: int) -> str:
    """Render a signed 32-bit integer in decimal, with a leading '-' if negative."""
    if not S32_MIN <= n <= S32_MAX:
        raise ValueError(f"{n!r} is not a signed 32-bit value")
    if n < 0:
        return "-" + format_u32(-n)
    return format_u32(n)


def format_f32(value: float, places: int) -> str:
    """Render ``value`` with ``places`` truncated decimal digits.

    The decimal point is always written, even when ``places`` is zero.
    """
    if places < 0:
        raise ValueError("places must not be negative")
    sign = ""
    if value < 0:
        sign = "-"
        value = -value
    whole = int(value)
    parts = [sign, format_u32(whole), "."]
    for _ in range(places):
        value = (value - whole) * 10
        whole = int(value)
        parts.append(chr(whole + ord("0")))
    return "".join(parts)


def format_two_places(value: float) -> str:
    """Render the integer part, '.', and the first two decimals as a plain integer.

    The fractional part is not zero-padded, so 1.05 renders as ``1.5``.
    """
    if value < 0:
        raise ValueError("value must not be negative")
    whole = int(value)
    fraction = int((value - whole) * 100)
    return f"{format_u32(whole)}.{format_u32(fraction)}"


def read_line(chars: Iterable[str]) -> str:
    """Collect characters up to a carriage return or newline and return them.

    Raises EOFError if the input ends before a terminator and ValueError
    if the line does not fit the receive buffer.
    """
    collected: list[str] = []
    for char in chars:
        if char in ("\r", "\n"):
            return "".join(collected)
        if len(collected) >= LINE_BUFFER_SIZE - 1:
            raise ValueError("line exceeds the receive buffer")
        collected.append(char)
    raise EOFError("input ended before a line terminator")