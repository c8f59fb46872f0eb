"""Host side of the attendance terminal: serial card loop and admin menu."""

from __future__ import annotations

import argparse
import sys
import time
from datetime import datetime
from pathlib import Path

import serial

from rfidattend.attendance import (
    ATTENDANCE_FILE,
    USERS_FILE,
    AttendanceRecord,
    UnknownUserError,
    User,
    add_user,
    check_card,
    delete_user,
    edit_user,
    find_user,
    load_attendance,
    load_users,
    save_attendance,
    save_users,
)
from rfidattend.protocol import CARD_TERMINATOR, encode_response

DEFAULT_DEVICE = "/dev/ttyUSB0"
DEFAULT_BAUD = 9600
MAX_CARD_CHARS = 10
ADMIN_PREFIX = "A"
INVALID_REPLY = "Invalid"
SYNC_PAUSE = 2.0

MENU_TEXT = (
    "MENU:\n 1. ADD USER\n 2. DELETE USER\n 3. EDIT USER\n 4. EXIT 5.PRINT_ATTENDENCE"
)


def read_card(connection) -> str:
    """Read characters up to and including '$' and return them as the card.

    Carriage returns and newlines are skipped. Raises EOFError when the
    connection yields nothing and ValueError when the card is too long.
    """
    chars: list[str] = []
    while True:
        data = connection.read(1)
        if not data:
            raise EOFError("connection closed while reading a card")
        char = bytes(data).decode("latin-1")
        if char in ("\r", "\n"):
            continue
        if len(chars) >= MAX_CARD_CHARS:
            raise ValueError("card data exceeds the receive buffer")
        chars.append(char)
        if char == CARD_TERMINATOR:
            return "".join(chars)


def _ask(prompt: str) -> str:
    print(prompt)
    words = input().split()
    return words[0] if words else ""


def _ask_choice(prompt: str) -> str:
    print(prompt)
    line = input().strip()
    return line[:1]


def _add(users: list[User]) -> None:
    user_id = _ask("place card")
    if find_user(users, user_id) is not None:
        print("sorry user id already existed")
        return
    name = _ask("enter username")
    add_user(users, user_id, name)


def _delete(users: list[User]) -> None:
    user_id = _ask("Enter user id to Delete")
    if not users:
        print("No node to delete")
        return
    try:
        delete_user(users, user_id)
    except UnknownUserError:
        print("sorry! user Id is not matchrd")


def _edit(users: list[User]) -> None:
    user_id = _ask("enter card you want modify")
    if find_user(users, user_id) is None:
        print("Sorry UserId Not Matched")
        return
    choice = _ask_choice("Enter choice to which one you want edit\n1.Edit userId\n2.Edit UserName")
    if choice == "1":
        edit_user(users, user_id, new_id=_ask("enter new id number"))
    elif choice == "2":
        edit_user(users, user_id, new_name=_ask("Enter Name"))


def _print_attendance(records: list[AttendanceRecord]) -> None:
    for r in records:
        print(
            f"UserId: {r.user_id}, UserName: {r.name},Date:{r.date},"
            f"workingHours: {r.working_hours} ,Status: {r.status} In: {r.in_time},Out:{r.out_time}"
        )


def _admin_menu(users: list[User], records: list[AttendanceRecord], users_path: str | Path) -> None:
    choice = _ask_choice(MENU_TEXT + "\nEnter your choice")
    if choice == "1":
        _add(users)
        save_users(users, users_path)
    elif choice == "2":
        _delete(users)
        save_users(users, users_path)
    elif choice == "3":
        _edit(users)
        save_users(users, users_path)
    elif choice == "4":
        save_users(users, users_path)
        raise SystemExit(0)
    elif choice == "5":
        _print_attendance(records)


def handle_card(
    card: str,
    users_path: str | Path,
    attendance_path: str | Path,
    now: datetime,
) -> str:
    """Process one scanned card and return the reply for the terminal.

    A card starting with 'A' opens the admin menu on standard input; any
    other card is checked in or out. Unknown cards get the reply 'Invalid'.
    """
    print(now.strftime("%Y-%m-%d %H:%M:%S"))
    users = load_users(users_path)
    for user in users:
        print(f"UserId: {user.user_id}, UserName: {user.name}")
    save_users(users, users_path)
    records = load_attendance(attendance_path)
    reply = card
    if card.startswith(ADMIN_PREFIX):
        print("matched")
        _admin_menu(users, records, users_path)
    else:
        try:
            check_card(records, users, card, now)
        except UnknownUserError:
            print("user details card is not matched")
            print("card is not valid, place again")
            reply = INVALID_REPLY
        else:
            print("user founded check status")
    save_attendance(records, attendance_path)
    return reply


def sync_clock(connection, now: datetime) -> None:
    """Send the date (with weekday code, Sunday 0) and then the time to the terminal."""
    weekday = (now.weekday() + 1) % 7
    date_text = now.strftime("%Y-%m-%d") + chr(weekday)
    time_text = now.strftime("%H:%M:%S")
    print(f"{now.strftime('%Y-%m-%d')} {time_text} {weekday}")
    connection.write(encode_response(date_text))
    time.sleep(SYNC_PAUSE)
    connection.write(encode_response(time_text))


def serve(connection, users_path: str | Path, attendance_path: str | Path) -> int:
    """Answer cards from the terminal until the connection closes.

    Returns the number of cards answered.
    """
    served = 0
    while True:
        try:
            card = read_card(connection)
        except EOFError:
            return served
        print(f"Readed {card}")
        reply = handle_card(card, users_path, attendance_path, datetime.now())
        connection.write(encode_response(reply))
        served += 1


def main(argv: list[str] | None = None) -> int:
    """Open the serial port, sync the terminal clock and serve cards."""
    parser = argparse.ArgumentParser(description="RFID attendance host")
    parser.add_argument("--device", default=DEFAULT_DEVICE)
    parser.add_argument("--baud", type=int, default=DEFAULT_BAUD)
    parser.add_argument("--users", default=USERS_FILE)
    parser.add_argument("--attendance", default=ATTENDANCE_FILE)
    args = parser.parse_args(argv)

    print("Opening serial port")
    try:
        connection = serial.Serial(args.device, args.baud, timeout=None)
    except (serial.SerialException, OSError) as error:
        print(f"Unable to open serial device: {error}", file=sys.stderr)
        return 1
    with connection:
        print("serial port is opened")
        sync_clock(connection, datetime.now())
        serve(connection, args.users, args.attendance)
    print("Closing serial port")
    return 0