"""RFID card attendance keeping: terminal protocol, records and serial host."""

__version__ = "0.1.0"

__all__ = [
    "attendance",
    "bits",
    "cli",
    "clock",
    "eeprom",
    "formatting",
    "keypad",
    "protocol",
]