# tests/test_due_dates.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from todo_cli.errors import ParseError, TimeZoneError
from todo_cli.tasks import due_dates
from todo_cli.tasks.due_dates import format_due_date, parse_due_date

IST = timedelta(hours=5, minutes=30)


def test_parse_date_and_time_is_wall_clock_in_ist() -> None:
    value = parse_due_date("2024-03-15 14:30")
    assert value.utcoffset() == IST
    assert (value.year, value.month, value.day, value.hour, value.minute) == (2024, 3, 15, 14, 30)
    assert value == datetime(2024, 3, 15, 9, 0, tzinfo=timezone.utc)


def test_parse_date_only_defaults_to_midnight() -> None:
    value = parse_due_date("2024-03-15")
    assert value.utcoffset() == IST
    assert (value.hour, value.minute, value.second) == (0, 0, 0)
    assert value.date().isoformat() == "2024-03-15"


def test_parse_strips_surrounding_whitespace() -> None:
    assert parse_due_date("  2024-03-15 14:30 ") == parse_due_date("2024-03-15 14:30")


@pytest.mark.parametrize("raw", ["2024-13-01", "not-a-date", "", "2024-02-30", "2024-03-15 25:00"])
def test_parse_rejects_bad_input(raw: str) -> None:
    with pytest.raises(ParseError) as exc:
        parse_due_date(raw)
    msg = str(exc.value)
    assert f"Invalid date format: {raw}." in msg
    assert "YYYY-MM-DD HH:MM" in msg
    assert "or YYYY-MM-DD" in msg


def test_offset_construction_failure_is_a_handled_error(monkeypatch) -> None:
    # timedelta of a full day is outside what datetime.timezone accepts.
    monkeypatch.setattr(due_dates, "IST_OFFSET_SECONDS", 24 * 3600)
    with pytest.raises(TimeZoneError):
        parse_due_date("2024-03-15")


def test_format_due_date_renders_in_ist() -> None:
    assert format_due_date(parse_due_date("2024-01-01 09:00")) == "2024-01-01 09:00 IST"
    # Same instant stored with a different offset still displays in IST.
    utc_value = datetime(2024, 1, 1, 3, 30, tzinfo=timezone.utc)
    assert format_due_date(utc_value) == "2024-01-01 09:00 IST"


def test_format_earliest_date_in_ist_needs_no_conversion() -> None:
    assert format_due_date(parse_due_date("0001-01-01")) == "0001-01-01 00:00 IST"


def test_format_unshiftable_value_is_shown_unconverted() -> None:
    # Shifting 0001-01-01 00:00+01:00 through UTC would fall before datetime.min.
    edge = datetime(1, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=1)))
    assert format_due_date(edge) == "0001-01-01 00:00 IST"
