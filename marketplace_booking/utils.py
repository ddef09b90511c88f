"""Shared date helpers used across the booking engine."""

from datetime import date, datetime
from typing import Union

from marketplace_booking.config import WEEKDAY_NAMES
from marketplace_booking.errors import InvalidDateFormat

DateLike = Union[date, datetime, str]


def parse_iso_date(value: DateLike) -> date:
    """Parse an ISO-8601 date or datetime into a calendar date.

    Datetime strings keep their calendar date as written; no timezone
    conversion is applied.

    Examples:
        >>> parse_iso_date("2024-06-03")
        datetime.date(2024, 6, 3)
        >>> parse_iso_date("2024-06-03T00:00:00.000Z")
        datetime.date(2024, 6, 3)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateFormat(f"'{value}' is not an ISO-8601 date")

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidDateFormat(f"'{value}' is not an ISO-8601 date") from None


def weekday_name(value: DateLike) -> str:
    """Return the English weekday name for a date, e.g. ``'Monday'``."""
    # date.weekday() counts from Monday; WEEKDAY_NAMES starts at Sunday
    return WEEKDAY_NAMES[(parse_iso_date(value).weekday() + 1) % 7]
