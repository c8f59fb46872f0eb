# rfidattend

Attendance keeping with RFID cards. A card reader terminal reads a card and
sends its number over a serial line; the attendance host looks the card up
among the registered users, records the clock-in or clock-out time and the
hours worked, and answers the terminal.

## What is in the package

- `rfidattend.attendance`: the user register and the attendance records.
  `load_users` and `save_users` read and write the users file (one
  `id name` per line), `load_attendance` and `save_attendance` read and
  write the attendance CSV. `add_user`, `edit_user`, `delete_user` and
  `find_user` manage the register. `working_hours` subtracts two `HH:MM`
  times, hours and minutes separately. `check_card` records a scan: a user
  with no record gets a new checked-in record, a checked-in user is checked
  out with their working hours filled in, and a checked-out user is checked
  in again. An id that is not registered raises `UnknownUserError`.
- `rfidattend.protocol`: the messages between terminal and host.
  `CardFrameDecoder` collects a card number between STX and ETX bytes,
  `HostMessageDecoder` collects `@`-terminated host messages,
  `parse_date_message` and `parse_time_message` read the host's clock
  messages, `build_reply` builds the `A`/`U` line for a scanned card,
  `encode_response` adds the `@` terminator, and `Terminal` sets its clock
  from the first two host messages and then answers cards.
- `rfidattend.clock`: `RealTimeClock`, holding time, date and weekday
  (0 is Sunday) with range checks, and rendering them as `HH:MM:SS`,
  `DD/MM/YYYY` and a three-letter day name.
- `rfidattend.eeprom`: `Eeprom25LC512`, an in-memory model of a 64 KiB SPI
  EEPROM with its `Instruction` set; it records every bus frame in `frames`.
- `rfidattend.keypad`: the 4x4 keypad map (`key_at`), number entry from key
  presses (`read_number`) and the edit menu (`run_edit_menu`), which either
  stores a new admin card in the EEPROM or edits one clock field.
- `rfidattend.formatting`: decimal rendering of 32-bit and float values and
  `read_line` for carriage-return or newline terminated input.
- `rfidattend.bits`: bit-field helpers for 32-bit register words and pin
  function selection.
- `rfidattend.cli`: the attendance host behind the `rfidattend` command.

## Installing

```
pip install .
```

## Running the host

Connect the terminal's serial line and start the host:

```
rfidattend
```

It opens the serial device (`/dev/ttyUSB0` at 9600 baud by default), sends
the current date with a weekday code and then the time, each followed by
`@`, so that the terminal's clock is set, and then waits for cards. A card
is read up to and including `$`. A card starting with `A` opens the admin
menu on standard input (add, delete or edit a user, exit, or print the
attendance records); any other card is checked in or out against the users
file and echoed back, and a card no user holds gets `Invalid`.

Options:

- `--device` serial device path
- `--baud` baud rate
- `--users` users file (default `userDetails1.txt`)
- `--attendance` attendance file (default `readme5.csv`)

```
rfidattend --help
```

## Using the library

```python
from datetime import datetime
from rfidattend.attendance import add_user, check_card, working_hours

users = []
add_user(users, "U1001$", "ASHA")
records = []
check_card(records, users, "U1001$", datetime(2025, 1, 6, 9, 0))
record = check_card(records, users, "U1001$", datetime(2025, 1, 6, 17, 30))
print(record.working_hours)            # 08:30
print(working_hours("09:00", "17:30"))  # 08:30
```

## What it does not do

The terminal side (clock, EEPROM, keypad and display text) is modelled in
memory only; the package does not drive an LCD, a keypad, an EEPROM or a
clock chip, and has no firmware for the card reader terminal itself.

## Tests

```
pip install .[test]
pytest
```