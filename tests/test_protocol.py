import pytest

from rfidattend.protocol import (
    CardFrameDecoder,
    DateMessage,
    HostMessageDecoder,
    Stage,
    Terminal,
    TimeMessage,
    build_reply,
    encode_response,
    parse_date_message,
    parse_time_message,
)

ADMIN = "12535708"


def _feed_all(decoder, data):
    return [decoder.feed(b) for b in data]


def test_card_frame_decoded():
    results = _feed_all(CardFrameDecoder(), b"\x02" + ADMIN.encode() + b"\x03")
    assert results[-1] == ADMIN
    assert all(r is None for r in results[:-1])


def test_bytes_outside_frame_ignored():
    decoder = CardFrameDecoder()
    results = _feed_all(decoder, b"xy\x03" + b"\x02AB\x03")
    assert [r for r in results if r is not None] == ["AB"]


def test_long_card_truncated_to_nine():
    card = "ABCDEFGHIJKL"
    results = _feed_all(CardFrameDecoder(), b"\x02" + card.encode() + b"\x03")
    assert results[-1] == card[:9]


def test_card_decoder_rejects_non_byte():
    with pytest.raises(ValueError):
        CardFrameDecoder().feed(256)


def test_host_decoder_splits_on_at():
    decoder = HostMessageDecoder()
    results = [decoder.feed(c) for c in "12:00:00@hi@"]
    assert [r for r in results if r is not None] == ["12:00:00", "hi"]


def test_host_decoder_overflow():
    decoder = HostMessageDecoder()
    with pytest.raises(ValueError):
        for c in "x" * 20:
            decoder.feed(c)


def test_parse_date_with_digit_weekday():
    assert parse_date_message("2025-06-28" + "6") == DateMessage(2025, 6, 28, 6)


def test_parse_date_with_raw_weekday_and_missing():
    assert parse_date_message("2025-06-28" + chr(3)).weekday == 3
    assert parse_date_message("2025-06-28").weekday == 0


@pytest.mark.parametrize("text", ["2025/06/28", "20x5-06-28", "2025-06", "2025-06-289"])
def test_parse_date_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_date_message(text)


def test_parse_time():
    assert parse_time_message("12:34:56") == TimeMessage(12, 34, 56)


@pytest.mark.parametrize("text", ["12-34-56", "1:2:3", "ab:cd:ef"])
def test_parse_time_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_time_message(text)


def test_build_reply_admin_and_user():
    assert build_reply(ADMIN, ADMIN) == "A" + ADMIN + "$" + "\r\n"
    assert build_reply("99999999", ADMIN) == "U" + "99999999" + "$" + "\r\n"


def test_encode_response_appends_terminator_and_stops_at_nul():
    assert encode_response("Invalid") == b"Invalid@"
    assert encode_response("2025-06-28\0rest") == b"2025-06-28@"


def test_encode_then_decode_round_trip():
    decoder = HostMessageDecoder()
    results = [decoder.feed(chr(b)) for b in encode_response("A1234$")]
    assert results[-1] == "A1234$"


def test_terminal_sync_then_cards():
    terminal = Terminal(admin_card=ADMIN)
    assert terminal.handle_host_message("2025-06-28" + "6") == DateMessage(2025, 6, 28, 6)
    assert terminal.stage is Stage.AWAIT_TIME
    assert terminal.handle_host_message("12:34:56") == TimeMessage(12, 34, 56)
    assert terminal.stage is Stage.READY
    assert terminal.clock.time_text() == "12:34:56"
    assert terminal.clock.weekday_text() == "SAT"
    assert terminal.handle_card(ADMIN) == build_reply(ADMIN, ADMIN)
    assert terminal.handle_host_message("Invalid") is None
    assert terminal.last_message == "Invalid"


def test_terminal_rejects_card_before_sync():
    terminal = Terminal(admin_card=ADMIN)
    with pytest.raises(RuntimeError):
        terminal.handle_card(ADMIN)