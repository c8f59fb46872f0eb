from datetime import datetime

import pytest

from rfidattend.attendance import (
    ATTENDANCE_HEADER,
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
    working_hours,
)


def _record(user_id, name="HARISH"):
    return AttendanceRecord(user_id, name, "2025-06-28", "0", "1", "0", "0")


def test_load_users_missing_file_is_empty(tmp_path):
    assert load_users(tmp_path / "none.txt") == []


def test_save_users_line_format(tmp_path):
    path = tmp_path / "users.txt"
    assert save_users([User("A1234$", "HARISH"), User("A1237$", "RAMU")], path)
    assert path.read_text() == "A1234$ HARISH \nA1237$ RAMU \n"


def test_users_round_trip_reverses_order(tmp_path):
    path = tmp_path / "users.txt"
    users = [User("A1234$", "HARISH"), User("A1237$", "RAMU")]
    save_users(users, path)
    assert load_users(path) == list(reversed(users))


def test_save_users_empty_writes_nothing(tmp_path):
    path = tmp_path / "users.txt"
    assert save_users([], path) is False
    assert not path.exists()


def test_load_users_drops_unpaired_token(tmp_path):
    path = tmp_path / "users.txt"
    path.write_text("A1 HARISH\nB2 RAMU\nC3\n")
    assert [u.user_id for u in load_users(path)] == ["B2", "A1"]


def test_add_user_prepends_and_rejects_duplicate():
    users = [User("A1", "HARISH")]
    added = add_user(users, "B2", "RAMU")
    assert users[0] is added
    assert find_user(users, "B2").name == "RAMU"
    with pytest.raises(ValueError):
        add_user(users, "A1", "OTHER")
    assert len(users) == 2


def test_find_user_absent():
    assert find_user([User("A1", "HARISH")], "Z9") is None


def test_edit_user_name_and_id():
    users = [User("A1", "HARISH"), User("B2", "RAMU")]
    edit_user(users, "B2", new_name="RAMBABU")
    assert users[1].name == "RAMBABU"
    edit_user(users, "A1", new_id="C3")
    assert find_user(users, "C3").name == "HARISH"
    assert find_user(users, "A1") is None


def test_edit_user_unknown():
    with pytest.raises(UnknownUserError):
        edit_user([User("A1", "HARISH")], "Z9", new_name="X")


def test_delete_user():
    users = [User("A1", "HARISH"), User("B2", "RAMU"), User("C3", "SAMABA")]
    removed = delete_user(users, "B2")
    assert removed.name == "RAMU"
    assert [u.user_id for u in users] == ["A1", "C3"]
    with pytest.raises(UnknownUserError):
        delete_user(users, "B2")
    with pytest.raises(UnknownUserError):
        delete_user([], "A1")


def test_working_hours_same_time_is_zero():
    assert working_hours("09:15", "09:15") == "00:00"


def test_working_hours_whole_hours():
    assert working_hours("09:15", "17:15")[:3] == working_hours("01:00", "09:00")[:3]
    assert working_hours("10:30", "12:30")[2:] == ":00"


def test_working_hours_rejects_short_text():
    with pytest.raises(ValueError):
        working_hours("9", "17:45")


def test_attendance_missing_file_is_empty(tmp_path):
    assert load_attendance(tmp_path / "none.csv") == []


def test_save_attendance_format(tmp_path):
    path = tmp_path / "att.csv"
    assert save_attendance([_record("A1234$")], path)
    assert path.read_text() == ATTENDANCE_HEADER + "A1234$,HARISH,2025-06-28,0,1,0,0\n"


def test_attendance_round_trip_reverses_order(tmp_path):
    path = tmp_path / "att.csv"
    records = [_record("A1234$"), _record("A1237$", "RAMU"), _record("A1236$", "RAMBABU")]
    save_attendance(records, path)
    assert load_attendance(path) == list(reversed(records))


def test_save_attendance_empty_writes_nothing(tmp_path):
    path = tmp_path / "att.csv"
    assert save_attendance([], path) is False
    assert not path.exists()


def test_load_attendance_stops_at_malformed_line(tmp_path):
    path = tmp_path / "att.csv"
    path.write_text(
        ATTENDANCE_HEADER
        + "A1234$,HARISH,2025-06-28,0,1,0,0\n"
        + "broken line\n"
        + "A1237$,RAMU,2025-06-28,0,1,0,0\n"
    )
    assert [r.user_id for r in load_attendance(path)] == ["A1234$"]


def test_load_attendance_rejects_overlong_id(tmp_path):
    path = tmp_path / "att.csv"
    path.write_text(ATTENDANCE_HEADER + "ABCDEFGHIJKLM,HARISH,2025-06-28,0,1,0,0\n")
    assert load_attendance(path) == []


def test_check_card_unknown_user():
    with pytest.raises(UnknownUserError):
        check_card([], [User("A1", "HARISH")], "Z9", datetime(2025, 6, 28, 9, 15, 0))


def test_check_card_cycle():
    users = [User("A1", "HARISH")]
    records = []
    first = check_card(records, users, "A1", datetime(2025, 6, 28, 9, 15, 30))
    assert records == [first]
    assert (first.status, first.in_time, first.out_time, first.date) == ("0", "09:15", "0", "2025-06-28")
    assert first.name == "HARISH"

    second = check_card(records, users, "A1", datetime(2025, 6, 29, 17, 45, 10))
    assert second is first
    assert second.status == "1"
    assert second.out_time == "17:45"
    assert second.date == "2025-06-29"
    assert second.working_hours == working_hours("09:15", "17:45")

    third = check_card(records, users, "A1", datetime(2025, 6, 30, 8, 5, 0))
    assert third.status == "0"
    assert third.in_time == "08:05"
    assert len(records) == 1


def test_check_card_appends_new_user_at_end():
    users = [User("A1", "HARISH"), User("B2", "RAMU")]
    records = [_record("A1")]
    added = check_card(records, users, "B2", datetime(2025, 6, 28, 10, 0, 0))
    assert records[-1] is added
    assert added.name == "RAMU"
    assert len(records) == 2