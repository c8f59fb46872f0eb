"""Bit-field helpers for 32-bit register words and pin-function selection."""

from __future__ import annotations

from enum import IntEnum

WORD_MASK = 0xFFFFFFFF


class PinFunction(IntEnum):
    """Two-bit function codes for the pin select registers."""

    FUNC1 = 0
    FUNC2 = 1
    FUNC3 = 2
    FUNC4 = 3


def _check_field(value: int, width: int, what: str) -> int:
    if not 0 <= value < (1 << width):
        raise ValueError(f"{what} {value!r} does not fit in {width} bits")
    return value


def set_bit(word: int, pos: int) -> int:
    """Return ``word`` with bit ``pos`` set."""
    return word | (1 << pos)


def clear_bit(word: int, pos: int) -> int:
    """Return ``word`` with bit ``pos`` cleared."""
    return word & ~(1 << pos)


def toggle_bit(word: int, pos: int) -> int:
    """Return ``word`` with bit ``pos`` inverted."""
    return word ^ (1 << pos)


def write_bit(word: int, pos: int, bit: int) -> int:
    """Return ``word`` with bit ``pos`` replaced by ``bit``."""
    _check_field(bit, 1, "bit")
    return (word & ~(1 << pos)) | (bit << pos)


def read_bit(word: int, pos: int) -> int:
    """Return the value of bit ``pos``."""
    return (word >> pos) & 1


def write_nibble(word: int, start: int, nibble: int) -> int:
    """Return ``word`` with four bits from ``start`` replaced by ``nibble``."""
    _check_field(nibble, 4, "nibble")
    return (word & ~(0xF << start)) | (nibble << start)


def read_nibble(word: int, start: int) -> int:
    """Return the four bits of ``word`` starting at ``start``."""
    return (word >> start) & 0xF


def write_byte(word: int, start: int, byte: int) -> int:
    """Return ``word`` with eight bits from ``start`` replaced by ``byte``."""
    _check_field(byte, 8, "byte")
    return (word & ~(0xFF << start)) | (byte << start)


def read_byte(word: int, start: int) -> int:
    """Return the eight bits of ``word`` starting at ``start``."""
    return (word >> start) & 0xFF


def write_halfword(word: int, start: int, halfword: int) -> int:
    """Return ``word`` with sixteen bits from ``start`` replaced by ``halfword``."""
    _check_field(halfword, 16, "halfword")
    return (word & ~(0xFFFF << start)) | (halfword << start)


def copy_bit(dest: int, wbit: int, src: int, rbit: int) -> int:
    """Return ``dest`` with bit ``wbit`` set to bit ``rbit`` of ``src``."""
    return write_bit(dest, wbit, read_bit(src, rbit))


def select_pin_function(word: int, pin: int, func: int) -> int:
    """Return a pin select register value with ``pin`` set to ``func``.

    Pins 0-15 live in the low register and 16-31 in the high one; both use
    two bits per pin, so the pin number is taken modulo 16.
    """
    if not 0 <= pin < 32:
        raise ValueError(f"pin {pin!r} is outside 0..31")
    _check_field(int(func), 2, "pin function")
    shift = (pin % 16) * 2
    return (word & ~(3 << shift)) | (int(func) << shift)


def configure_port_pin(pinsel0: int, pinsel1: int, port: int, pin: int, func: int) -> tuple[int, int]:
    """Return the updated ``(pinsel0, pinsel1)`` pair after selecting ``func``.

    Only port 0 pins 0-31 are configurable; anything else leaves both
    registers as they were.
    """
    if port != 0 or not 0 <= pin < 32:
        return pinsel0, pinsel1
    if pin < 16:
        return select_pin_function(pinsel0, pin, func), pinsel1
    return pinsel0, select_pin_function(pinsel1, pin, func)