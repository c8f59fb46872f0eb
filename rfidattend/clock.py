"""Real-time clock registers and their text rendering for the display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rfidattend.formatting import format_u32

WEEKDAY_NAMES = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")
WEEKDAY_COLUMN = 10

_LIMITS = {
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
    "day": (1, 31),
    "month": (1, 12),
    "year": (0, 4095),
    "weekday": (0, 6),
}


def _check(name: str, value: int) -> int:
    low, high = _LIMITS[name]
    if not low <= value <= high:
        raise ValueError(f"{name} {value!r} is outside {low}..{high}")
    return value


@dataclass
class RealTimeClock:
    """Time, date and day-of-week registers; weekday 0 is Sunday."""

    hour: int = 0
    minute: int = 0
    second: int = 0
    day: int = 1
    month: int = 1
    year: int = 0
    weekday: int = 0

    def __post_init__(self) -> None:
        self.set_time(self.hour, self.minute, self.second)
        self.set_date(self.day, self.month, self.year)
        self.set_weekday(self.weekday)

    @classmethod
    def from_datetime(cls, moment: datetime) -> RealTimeClock:
        """Build a clock holding the given moment."""
        return cls(
            hour=moment.hour,
            minute=moment.minute,
            second=moment.second,
            day=moment.day,
            month=moment.month,
            year=moment.year,
            weekday=(moment.weekday() + 1) % 7,
        )

    def set_time(self, hour: int, minute: int, second: int) -> None:
        """Load the hour, minute and second registers."""
        self.hour = _check("hour", hour)
        self.minute = _check("minute", minute)
        self.second = _check("second", second)

    def set_date(self, day: int, month: int, year: int) -> None:
        """Load the day-of-month, month and year registers."""
        self.day = _check("day", day)
        self.month = _check("month", month)
        self.year = _check("year", year)

    def set_weekday(self, weekday: int) -> None:
        """Load the day-of-week register (0 is Sunday)."""
        self.weekday = _check("weekday", weekday)

    def time_text(self) -> str:
        """Render the time as ``HH:MM:SS``."""
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"

    def date_text(self) -> str:
        """Render the date as ``DD/MM/`` followed by the year."""
        return f"{self.day:02d}/{self.month:02d}/{format_u32(self.year)}"

    def weekday_text(self) -> str:
        """Render the day of week as a three-letter name."""
        return WEEKDAY_NAMES[self.weekday]

    def display_lines(self) -> tuple[str, str]:
        """Return the two display lines: time with weekday, then date."""
        first = self.time_text().ljust(WEEKDAY_COLUMN) + self.weekday_text()
        return first, self.date_text()