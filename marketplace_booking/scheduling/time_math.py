"""
Pure conversions between "HH:MM" strings, minutes and 12-hour labels.

Window end times of "00:00" mean midnight at the end of the day and are
compared as 1440 minutes (see ``end_minutes``). 12-hour labels are for
display only and always convert back to the same "HH:MM" string.
"""

import re

from marketplace_booking.config import MINUTES_PER_DAY
from marketplace_booking.errors import InvalidTimeFormat

_TIME_24_RE = re.compile(r"([0-9]{2}):([0-9]{2})", re.ASCII)
_TIME_12_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})\s*([AaPp][Mm])$", re.ASCII)


def parse_time(time: str) -> tuple[int, int]:
    """Split a zero-padded "HH:MM" string into ``(hour, minute)``."""
    match = _TIME_24_RE.fullmatch(time) if isinstance(time, str) else None
    if not match:
        raise InvalidTimeFormat(f"'{time}' is not a valid HH:MM time")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidTimeFormat(f"'{time}' is not a valid HH:MM time")
    return hour, minute


def canonical_time(time: str) -> str:
    """Validate "HH:MM" and return it in its wire form."""
    hour, minute = parse_time(time)
    return f"{hour:02d}:{minute:02d}"


def time_to_minutes(time: str) -> int:
    """Convert "HH:MM" to minutes since midnight, in [0, 1439]."""
    hour, minute = parse_time(time)
    return hour * 60 + minute


def end_minutes(time: str) -> int:
    """Like ``time_to_minutes`` but reads "00:00" as 1440 (end of day)."""
    minutes = time_to_minutes(time)
    return MINUTES_PER_DAY if minutes == 0 else minutes


def minutes_to_time(minutes: int, wrap: bool = False) -> str:
    """Convert minutes since midnight back to "HH:MM".

    1440 is accepted as the end-of-day sentinel and renders as "00:00".
    Values outside [0, 1440] are an error unless ``wrap`` is set, in
    which case they are reduced modulo one day.
    """
    if wrap:
        minutes %= MINUTES_PER_DAY
    elif not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single day")
    hour, minute = divmod(minutes % MINUTES_PER_DAY, 60)
    return f"{hour:02d}:{minute:02d}"


def crosses_midnight(start_time: str, end_time: str) -> bool:
    """True when the end is earlier in clock time than the start.

    An end of "00:00" is not a crossing; it closes the window at midnight.
    """
    return parse_time(start_time) > parse_time(end_time) and time_to_minutes(end_time) != 0


def format_to_12_hour(time: str) -> str:
    """Render "HH:MM" as a 12-hour label, e.g. "21:30" -> "9:30 PM"."""
    hour, minute = parse_time(time)
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {period}"


def parse_12_hour_to_24(time12: str) -> str:
    """Convert a label like "9:30 PM" back to "21:30"."""
    match = _TIME_12_RE.match(time12.strip()) if isinstance(time12, str) else None
    if not match:
        raise InvalidTimeFormat(f"'{time12}' is not a valid 12-hour time")
    hour, minute, period = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if not 1 <= hour <= 12 or minute > 59:
        raise InvalidTimeFormat(f"'{time12}' is not a valid 12-hour time")

    if period == "AM":
        hour = 0 if hour == 12 else hour
    else:
        hour = 12 if hour == 12 else hour + 12
    return f"{hour:02d}:{minute:02d}"


def format_range_12_hour(start_time: str, end_time: str) -> str:
    """Render a window as "9:00 AM - 5:00 PM"."""
    return f"{format_to_12_hour(start_time)} - {format_to_12_hour(end_time)}"
