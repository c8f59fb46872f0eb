"""4x4 matrix keypad decoding, numeric entry and the terminal's edit menu."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from rfidattend.clock import RealTimeClock
from rfidattend.eeprom import Eeprom25LC512

KEY_MAP = (
    ("1", "2", "3", "A"),
    ("4", "5", "6", "B"),
    ("7", "8", "9", "C"),
    ("*", "0", "#", "D"),
)
BACKSPACE_KEY = "B"
U32_MASK = 0xFFFFFFFF
ADMIN_CARD_LENGTH = 8

MAIN_MENU = ("1.ADMIN CHANGE", "2.RTC EDIT")
RTC_MENU = ("1.H 2.M 3.S 4.D", "5.M 6.Y 7.DW 8.E")
SCAN_PROMPT = "Scan the card"

_ROW_PINS = range(16, 20)
_COLUMN_PINS = range(20, 24)


def key_at(row: int, col: int) -> str:
    """Return the key label at the given keypad row and column (both 0-3)."""
    if not 0 <= row < len(KEY_MAP):
        raise ValueError(f"row {row!r} is outside 0..{len(KEY_MAP) - 1}")
    if not 0 <= col < len(KEY_MAP[row]):
        raise ValueError(f"column {col!r} is outside 0..{len(KEY_MAP[row]) - 1}")
    return KEY_MAP[row][col]


def read_number(keys: Iterable[str]) -> int:
    """Accumulate a decimal number from key presses.

    Digits append to the number, 'B' drops the last digit, and any other
    key ends entry. The value wraps as an unsigned 32-bit integer. Raises
    EOFError if the keys run out before entry ends.
    """
    total = 0
    for key in keys:
        if len(key) == 1 and "0" <= key <= "9":
            total = (total * 10 + int(key)) & U32_MASK
        elif key == BACKSPACE_KEY:
            total //= 10
        else:
            return total
    raise EOFError("keys ran out during number entry")


def _next_key(keys: Iterator[str]) -> str:
    try:
        return next(keys)
    except StopIteration:
        raise EOFError("keys ran out while a menu was waiting") from None


def _change_admin(eeprom: Eeprom25LC512, card: str | None) -> str:
    if card is None:
        raise ValueError("admin change needs a scanned card")
    raw = card.encode("ascii")[:ADMIN_CARD_LENGTH].ljust(ADMIN_CARD_LENGTH, b"\0")
    for address, value in enumerate(raw):
        eeprom.write_byte(address, value)
    return eeprom.load_text(ADMIN_CARD_LENGTH)


def _edit_clock(keys: Iterator[str], clock: RealTimeClock) -> None:
    while True:
        choice = _next_key(keys)
        if choice == "8":
            return
        if choice == "1":
            clock.set_time(read_number(keys), clock.minute, clock.second)
        elif choice == "2":
            clock.set_time(clock.hour, read_number(keys), clock.second)
        elif choice == "3":
            clock.set_time(clock.hour, clock.minute, read_number(keys))
        elif choice == "4":
            clock.set_date(read_number(keys), clock.month, clock.year)
        elif choice == "5":
            clock.set_date(clock.day, read_number(keys), clock.year)
        elif choice == "6":
            clock.set_date(clock.day, clock.month, read_number(keys))
        elif choice == "7":
            clock.set_weekday(read_number(keys))
        else:
            continue
        return


def run_edit_menu(
    keys: Iterable[str],
    clock: RealTimeClock,
    eeprom: Eeprom25LC512,
    card: str | None,
) -> str | None:
    """Run the keypad edit menu once.

    Key '1' stores ``card`` as the new admin card in the EEPROM and returns
    the card read back; key '2' opens the clock editor, where keys '1'-'7'
    pick hour, minute, second, day, month, year or weekday to enter and
    '8' leaves unchanged. Other keys redisplay the current menu.
    """
    key_stream = iter(keys)
    while True:
        choice = _next_key(key_stream)
        if choice == "1":
            return _change_admin(eeprom, card)
        if choice == "2":
            _edit_clock(key_stream, clock)
            return None