"""Unit tests for utility modules."""

import json
import sys
from datetime import datetime, timedelta, timezone

import pytest

from core.errors import DecodingError
from core.tuid import is_valid
from utils import crash
from utils.timestamp import Duration, Timestamp, as_nanos, format_timestamp, now_nanos


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_format_timestamp_iso_format(self):
        """Timestamp is ISO 8601 format."""
        ts = format_timestamp()
        assert "T" in ts
        assert ts.endswith("Z")

    def test_format_timestamp_has_nanoseconds(self):
        """Timestamp includes nine fractional digits."""
        decimal_part = format_timestamp().split(".")[1].rstrip("Z")
        assert len(decimal_part) == 9

    def test_format_timestamp_explicit(self):
        """An explicit epoch value is formatted exactly."""
        assert format_timestamp(1_615_182_849_208_207_001) == "2021-03-08T05:54:09.208207001Z"
        assert format_timestamp(0) == "1970-01-01T00:00:00.000000000Z"

    def test_now_nanos_returns_int(self):
        """now_nanos returns integer."""
        assert isinstance(now_nanos(), int)

    def test_now_nanos_reasonable_value(self):
        """now_nanos returns reasonable timestamp."""
        assert now_nanos() > 1_577_836_800_000_000_000  # 2020-01-01

    def test_from_datetime_naive_is_utc(self):
        """Naive datetimes are read as UTC."""
        naive = datetime(2021, 3, 8, 5, 54, 9, 208207)
        aware = naive.replace(tzinfo=timezone.utc)
        assert Timestamp.from_datetime(naive) == Timestamp.from_datetime(aware)

    def test_from_datetime_with_offset(self):
        """Offsets are normalised to UTC."""
        plus_two = datetime(2021, 3, 8, 7, 54, 9, tzinfo=timezone(timedelta(hours=2)))
        assert Timestamp.from_datetime(plus_two).isoformat() == "2021-03-08T05:54:09.000000000Z"

    @pytest.mark.parametrize("text, nanos", [
        ("2021-03-08T05:54:09.208207000Z", 1_615_182_849_208_207_000),
        ("2021-03-08T05:54:09.208207001Z", 1_615_182_849_208_207_001),
        ("2021-03-08T05:54:09.2Z", 1_615_182_849_200_000_000),
        ("2021-03-08T05:54:09", 1_615_182_849_000_000_000),
        ("2021-03-08T07:54:09+02:00", 1_615_182_849_000_000_000),
        ("2000-01-01T00:00:00Z", 946_684_800_000_000_000),
    ])
    def test_parse(self, text, nanos):
        """ISO 8601 text parses to exact nanoseconds."""
        assert Timestamp.parse(text).nanos == nanos

    @pytest.mark.parametrize("text", ["", "yesterday", "2021-03-08", "2021-03-08T05:54:09.1234567890Z",
                                      "2021-03-08T05:54:09.\u0662Z", "\u0662021-03-08T05:54:09Z"])
    def test_parse_invalid(self, text):
        """Malformed text raises ValueError."""
        with pytest.raises(ValueError):
            Timestamp.parse(text)

    def test_parse_round_trip(self):
        """isoformat() output parses back to the same instant."""
        ts = Timestamp(1_700_000_000_123_456_789)
        assert Timestamp.parse(ts.isoformat()) == ts

    def test_ordering_and_arithmetic(self):
        """Timestamps order and subtract into durations."""
        early, late = Timestamp(100), Timestamp(250)
        assert early < late
        assert late - early == Duration(150)
        assert len({Timestamp(1), Timestamp(1)}) == 1

    def test_as_nanos(self):
        """Timestamps, datetimes and ints all convert to nanoseconds."""
        assert as_nanos(Timestamp(42)) == 42
        assert as_nanos(42) == 42
        assert as_nanos(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1_000_000_000
        with pytest.raises(TypeError):
            as_nanos(True)


class TestDuration:
    """Tests for Duration."""

    def test_str(self):
        """Durations render as H:MM:SS with nanoseconds."""
        assert str(Duration(3_723_000_000_001)) == "1:02:03.000000001"
        assert str(Duration(-1_500_000_000)) == "-0:00:01.500000000"

    def test_total_seconds(self):
        """total_seconds() is a float."""
        assert Duration(1_500_000_000).total_seconds() == 1.5


class TestCrashHandler:
    """Tests for crash handling utilities."""

    def test_configure_sets_path(self):
        """configure() sets crash log path."""
        original = crash._crash_log
        crash.configure("/tmp/test_crash.log")
        assert crash._crash_log == "/tmp/test_crash.log"
        crash.configure(original)

    def test_install_crash_handler(self):
        """install_crash_handler sets sys.excepthook."""
        original_hook = sys.excepthook
        crash.install_crash_handler()
        assert sys.excepthook == crash.log_crash
        sys.excepthook = original_hook

    def test_log_crash_writes_record(self, tmp_path, capsys):
        """log_crash() writes a record keyed by a valid TUID."""
        original = crash._crash_log
        crash.configure(str(tmp_path / "logs" / "crash.log"))
        try:
            try:
                raise DecodingError("no digits", text="")
            except DecodingError as exc:
                crash_id = crash.log_crash(type(exc), exc, exc.__traceback__)
        finally:
            crash.configure(original)

        assert is_valid(crash_id)
        record = json.loads((tmp_path / "logs" / "crash.log").read_text().strip())
        assert record["id"] == crash_id
        assert record["type"] == "DecodingError"
        assert record["context"] == {"text": ""}
        assert f"CRASH [{crash_id}]" in capsys.readouterr().err

    def test_async_handler(self, tmp_path):
        """The event loop handler records the exception."""
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        try:
            handler = crash.create_async_handler()
            handler(None, {"exception": RuntimeError("boom"), "message": "task failed"})
        finally:
            crash.configure(original)

        record = json.loads((tmp_path / "crash.log").read_text().strip())
        assert record["type"] == "RuntimeError"
        assert record["msg"] == "boom"
