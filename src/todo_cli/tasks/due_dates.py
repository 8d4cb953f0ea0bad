# src/todo_cli/tasks/due_dates.py

"""
Due-date normalization.

User input is read as wall-clock time in a fixed UTC+5:30 zone ("IST"),
independent of the host's local zone. Accepted inputs, tried in order:
- "YYYY-MM-DD HH:MM"
- "YYYY-MM-DD"  (time defaults to 00:00)
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo

from ..errors import ParseError, TimeZoneError

logger = logging.getLogger(__name__)

IST_OFFSET_SECONDS = 5 * 3600 + 30 * 60
IST_LABEL = "IST"

DUE_DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d %H:%M", "%Y-%m-%d")


def ist_timezone() -> tzinfo:
    try:
        return timezone(timedelta(seconds=IST_OFFSET_SECONDS), IST_LABEL)
    except (TypeError, ValueError) as e:
        raise TimeZoneError(f"Failed to create {IST_LABEL} offset: {e}") from e


def parse_due_date(text: str) -> datetime:
    """
    Parse a user-supplied due date into an aware datetime in UTC+5:30.

    Raises ParseError when no accepted format matches, TimeZoneError when the
    fixed offset cannot be attached.
    """
    raw = text.strip()
    naive: datetime | None = None
    for fmt in DUE_DATE_FORMATS:
        try:
            naive = datetime.strptime(raw, fmt)
            break
        except ValueError:
            continue

    if naive is None:
        raise ParseError(
            f"Invalid date format: {text}. Expected YYYY-MM-DD HH:MM or YYYY-MM-DD."
        )

    tz = ist_timezone()
    try:
        value = naive.replace(tzinfo=tz)
    except (TypeError, ValueError, OverflowError) as e:
        raise TimeZoneError(f"Cannot place {text!r} in {IST_LABEL}: {e}") from e
    if value.utcoffset() is None:
        raise TimeZoneError(f"Cannot place {text!r} in {IST_LABEL}")

    logger.debug("Parsed due date %r -> %s", text, value.isoformat())
    return value


def format_due_date(value: datetime) -> str:
    """Render as 'YYYY-MM-DD HH:MM IST', converting other offsets to IST first."""
    local = value
    if value.utcoffset() != timedelta(seconds=IST_OFFSET_SECONDS):
        try:
            local = value.astimezone(ist_timezone())
        except OverflowError:
            # Instants at the edge of the datetime range cannot be shifted.
            logger.debug("Cannot convert %s to %s; showing it unconverted", value, IST_LABEL)
    # isoformat pads years below 1000; strftime("%Y") does not on every libc.
    wall = local.replace(tzinfo=None).isoformat(sep=" ", timespec="minutes")
    return f"{wall} {IST_LABEL}"
