"""
Formatting utilities.

Dates travel through the tracker as timezone-aware UTC instants. These helpers
convert between that form, the persisted ISO-8601 text and the display
formats used by the table and the exports.
"""

from datetime import date, datetime, time, timezone
from typing import Union

from dateutil import parser as dateparser


DateLike = Union[datetime, date, str]

# Missing month/day parts are filled from here, never from the current date
_FILL_DEFAULT = datetime(2000, 1, 1)
_YEAR_CHECK_DEFAULT = datetime(2001, 1, 1)


def parse_instant(value: DateLike) -> datetime:
    """
    Parse a date-like value into a UTC-aware datetime.

    Strings are accepted in any format dateutil understands. Values without
    timezone information are treated as UTC, so a bare ``2025-06-01`` is UTC
    midnight of that day. A missing month or day is filled with 1; a
    missing year is an error.

    Args:
        value: A datetime, date or date string.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        ValueError: If the value cannot be parsed as a date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        if not value.strip():
            raise ValueError("Empty date string")
        try:
            parsed = dateparser.parse(value, default=_FILL_DEFAULT)
            # Strings without a year are rejected
            if dateparser.parse(value, default=_YEAR_CHECK_DEFAULT).year != parsed.year:
                raise ValueError(f"Date has no year: {value}")
        except OverflowError as e:
            raise ValueError(f"Date out of range: {value}") from e
    else:
        raise ValueError(f"Unsupported date value: {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def calendar_day(value: DateLike) -> date:
    """
    Return the calendar day a picker selection refers to.

    A datetime keeps its own wall-clock date (the day the user clicked in
    their timezone), not the UTC date of that instant.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_instant(value).date()


def utc_day(value: DateLike) -> date:
    """Return the UTC calendar day of an instant."""
    return parse_instant(value).date()


def format_instant(value: DateLike) -> str:
    """Format an instant as ``yyyy-MM-ddTHH:mm:ss.SSSZ``."""
    instant = parse_instant(value)
    millis = instant.microsecond // 1000
    return f"{instant:%Y-%m-%dT%H:%M:%S}.{millis:03d}Z"


def format_iso_date(value: DateLike) -> str:
    """Format as ``yyyy-MM-dd`` (UTC day)."""
    return utc_day(value).strftime("%Y-%m-%d")


def format_short_date(value: DateLike) -> str:
    """Format as ``dd/MM/yyyy`` (UTC day)."""
    return utc_day(value).strftime("%d/%m/%Y")


def format_long_date(value: date) -> str:
    """Format as ``d MMMM yyyy``, e.g. ``1 June 2025``."""
    return f"{value.day} {value:%B %Y}"
