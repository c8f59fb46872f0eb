"""User register and daily attendance records kept in plain text files."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

USERS_FILE = "userDetails1.txt"
ATTENDANCE_FILE = "readme5.csv"
ATTENDANCE_HEADER = "UserId,UserName,Date,workingHours,status,In,Out\n"

CHECKED_IN = "0"
CHECKED_OUT = "1"
NO_VALUE = "0"

_RECORD = re.compile(
    r"([^,]{1,11}),([^,]{1,20}),([^,]{1,11}),([^,]{1,6}),\s*(\S),([^,]{1,6}),([^\n]{1,6})\s*"
)


class UnknownUserError(LookupError):
    """Raised when a card or user id is not in the user register."""


@dataclass
class User:
    """A registered card holder."""

    user_id: str
    name: str


@dataclass
class AttendanceRecord:
    """One user's attendance line: status '0' is checked in, '1' checked out."""

    user_id: str
    name: str
    date: str
    working_hours: str
    status: str
    in_time: str
    out_time: str


def load_users(path: str | Path = USERS_FILE) -> list[User]:
    """Read the user register; the last line of the file comes first.

    A missing file gives an empty register.
    """
    try:
        text = Path(path).read_text()
    except FileNotFoundError:
        return []
    tokens = text.split()
    users: list[User] = []
    for user_id, name in zip(tokens[0::2], tokens[1::2]):
        users.insert(0, User(user_id, name))
    return users


def save_users(users: Iterable[User], path: str | Path = USERS_FILE) -> bool:
    """Write the register, one ``id name`` line per user in list order.

    An empty register leaves the file untouched; returns whether it was written.
    """
    users = list(users)
    if not users:
        return False
    with open(path, "w") as handle:
        for user in users:
            handle.write(f"{user.user_id} {user.name} \n")
    return True


def load_attendance(path: str | Path = ATTENDANCE_FILE) -> list[AttendanceRecord]:
    """Read attendance records after the header; the last record comes first.

    Reading stops at the first record that does not fit the format. A
    missing file gives no records.
    """
    try:
        text = Path(path).read_text()
    except FileNotFoundError:
        return []
    _, newline, body = text.partition("\n")
    if not newline:
        return []
    records: list[AttendanceRecord] = []
    position = 0
    while match := _RECORD.match(body, position):
        records.insert(0, AttendanceRecord(*match.groups()))
        position = match.end()
        if position == len(body):
            break
    return records


def save_attendance(records: Iterable[AttendanceRecord], path: str | Path = ATTENDANCE_FILE) -> bool:
    """Write the header and one CSV line per record in list order.

    No records leaves the file untouched; returns whether it was written.
    """
    records = list(records)
    if not records:
        return False
    with open(path, "w") as handle:
        handle.write(ATTENDANCE_HEADER)
        for r in records:
            handle.write(
                f"{r.user_id},{r.name},{r.date},{r.working_hours},"
                f"{r.status},{r.in_time},{r.out_time}\n"
            )
    return True


def find_user(users: Iterable[User], user_id: str) -> User | None:
    """Return the first user with ``user_id``, or None."""
    return next((user for user in users if user.user_id == user_id), None)


def add_user(users: list[User], user_id: str, name: str) -> User:
    """Put a new user at the front of the register.

    Raises ValueError if the id is already registered.
    """
    if find_user(users, user_id) is not None:
        raise ValueError(f"user id {user_id!r} already exists")
    user = User(user_id, name)
    users.insert(0, user)
    return user


def edit_user(
    users: Iterable[User],
    user_id: str,
    new_id: str | None = None,
    new_name: str | None = None,
) -> User:
    """Change the id and/or name of a registered user and return it."""
    user = find_user(users, user_id)
    if user is None:
        raise UnknownUserError(user_id)
    if new_id is not None:
        user.user_id = new_id
    if new_name is not None:
        user.name = new_name
    return user


def delete_user(users: list[User], user_id: str) -> User:
    """Remove the first user with ``user_id`` and return it."""
    user = find_user(users, user_id)
    if user is None:
        raise UnknownUserError(user_id)
    users.remove(user)
    return user


def _two_fields(text: str, what: str) -> tuple[int, int]:
    if len(text) < 5:
        raise ValueError(f"{what} time {text!r} is not HH:MM")
    digit = [ord(c) - ord("0") for c in text[:5]]
    return digit[0] * 10 + digit[1], digit[3] * 10 + digit[4]


def _c_pair(n: int) -> str:
    # Two characters from truncating division and remainder, as the
    # terminal computes them; negative values give non-digit characters.
    tens = abs(n) // 10 * (1 if n >= 0 else -1)
    units = n - tens * 10
    return chr(tens + ord("0")) + chr(units + ord("0"))


def working_hours(in_time: str, out_time: str) -> str:
    """Return ``HH:MM`` worked between two ``HH:MM`` times.

    Hours and minutes are subtracted separately, without borrowing.
    """
    in_hour, in_minute = _two_fields(in_time, "in")
    out_hour, out_minute = _two_fields(out_time, "out")
    return f"{_c_pair(out_hour - in_hour)}:{_c_pair(out_minute - in_minute)}"


def check_card(
    records: list[AttendanceRecord],
    users: Iterable[User],
    user_id: str,
    now: datetime,
) -> AttendanceRecord:
    """Record a card scan at ``now`` and return the affected record.

    A checked-out user is checked in again; a checked-in user is checked
    out and their working hours and date are updated. A user without a
    record gets a new checked-in record at the end of the list.
    """
    user = find_user(users, user_id)
    if user is None:
        raise UnknownUserError(user_id)
    today = now.strftime("%Y-%m-%d")
    clock = now.strftime("%H:%M:%S")[:5]
    for record in records:
        if record.user_id != user_id:
            continue
        if record.status == CHECKED_OUT:
            record.in_time = clock
            record.status = CHECKED_IN
        else:
            record.out_time = clock
            record.working_hours = working_hours(record.in_time, record.out_time)
            record.status = CHECKED_OUT
            record.date = today
        return record
    record = AttendanceRecord(
        user_id=user_id,
        name=user.name,
        date=today,
        working_hours=NO_VALUE,
        status=CHECKED_IN,
        in_time=clock,
        out_time=NO_VALUE,
    )
    records.append(record)
    return record