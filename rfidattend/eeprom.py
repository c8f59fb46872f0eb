"""In-memory model of a 25LC512 SPI EEPROM with a record of bus traffic."""

from __future__ import annotations

from enum import IntEnum

CAPACITY = 0x10000
PAGE_SIZE = 128
ERASED = 0xFF


class Instruction(IntEnum):
    """25LC512 instruction bytes."""

    WRITE = 0x02
    READ = 0x03
    WRDI = 0x04
    WREN = 0x06


def _check_address(address: int) -> int:
    if not 0 <= address < CAPACITY:
        raise ValueError(f"address {address!r} is outside 0..{CAPACITY - 1:#x}")
    return address


class Eeprom25LC512:
    """A 64 KiB SPI EEPROM.

    Every chip-select cycle is appended to ``frames`` as the bytes sent on
    the bus, so callers can inspect the exact traffic.
    """

    def __init__(self) -> None:
        self._memory = bytearray([ERASED]) * CAPACITY
        self._write_enabled = False
        self.frames: list[bytes] = []

    @property
    def write_enabled(self) -> bool:
        """Whether the write enable latch is set."""
        return self._write_enabled

    def command(self, instruction: Instruction) -> None:
        """Issue a single-byte latch instruction (WREN or WRDI)."""
        instruction = Instruction(instruction)
        if instruction not in (Instruction.WREN, Instruction.WRDI):
            raise ValueError(f"{instruction.name} needs an address")
        self.frames.append(bytes([instruction]))
        self._write_enabled = instruction is Instruction.WREN

    def write_byte(self, address: int, value: int) -> None:
        """Write one byte, enabling and then disabling the write latch."""
        _check_address(address)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"value {value!r} is not a byte")
        self.command(Instruction.WREN)
        self.frames.append(bytes([Instruction.WRITE, address >> 8, address & 0xFF, value]))
        self._memory[address] = value
        self.command(Instruction.WRDI)

    def read_byte(self, address: int) -> int:
        """Read one byte."""
        _check_address(address)
        self.frames.append(bytes([Instruction.READ, address >> 8, address & 0xFF, 0x00]))
        return self._memory[address]

    def write_page(self, start: int, data: bytes) -> None:
        """Write bytes from ``start`` up to the first zero byte in ``data``.

        Bytes past the end of the 128-byte page wrap to its beginning.
        """
        _check_address(start)
        payload = bytes(data).split(b"\0", 1)[0]
        if len(payload) > PAGE_SIZE:
            raise ValueError(f"page write of {len(payload)} bytes exceeds {PAGE_SIZE}")
        self.command(Instruction.WREN)
        self.frames.append(bytes([Instruction.WRITE, start >> 8, start & 0xFF]) + payload)
        page_base = start - start % PAGE_SIZE
        for offset, value in enumerate(payload):
            self._memory[page_base + (start % PAGE_SIZE + offset) % PAGE_SIZE] = value
        self.command(Instruction.WRDI)

    def store_text(self, text: str) -> None:
        """Write ASCII ``text`` byte by byte from address 0."""
        for address, value in enumerate(text.encode("ascii")):
            self.write_byte(address, value)

    def load_text(self, length: int) -> str:
        """Read ``length`` bytes from address 0 as text, stopping at a zero byte."""
        if length < 0:
            raise ValueError("length must not be negative")
        raw = bytes(self.read_byte(address) for address in range(length))
        return raw.split(b"\0", 1)[0].decode("latin-1")