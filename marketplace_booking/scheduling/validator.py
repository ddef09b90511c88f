"""
Availability checks for a single date or weekday and a candidate time range.

A candidate is accepted only when its weekday is open, it lies inside
that weekday's window and its end comes after its start. Windows that
cross midnight extend into the next calendar day: clock times earlier
than the window start are read as belonging to that next day.
"""

import logging
from typing import Any

from marketplace_booking.config import MINUTES_PER_DAY
from marketplace_booking.errors import (
    DayNotAvailable,
    InvalidTimeOrder,
    OutOfWindow,
)
from marketplace_booking.schemas.availability_schema import Weekday, WeeklyAvailability
from marketplace_booking.scheduling.time_math import end_minutes, time_to_minutes
from marketplace_booking.utils import DateLike, weekday_name

logger = logging.getLogger(__name__)


def weekday_for(value: DateLike) -> Weekday:
    """Map a date (or ISO string) to its Weekday."""
    return Weekday(weekday_name(value))


def is_day_available(availability: WeeklyAvailability, value: DateLike) -> bool:
    """True when the weekday of ``value`` is open."""
    return availability.is_open(weekday_for(value))


def require_day_available(availability: WeeklyAvailability, weekday: Any) -> Weekday:
    """Return the parsed weekday, raising DayNotAvailable when it is closed."""
    day = Weekday.parse(weekday)
    if not availability.is_open(day):
        logger.debug("Rejected: %s is closed", day.value)
        raise DayNotAvailable(day.value)
    return day


def _window_bounds(window_start: str, window_end: str) -> tuple[int, int]:
    start = time_to_minutes(window_start)
    end = end_minutes(window_end)
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def _candidate_minutes(time: str, window_start: int, is_end: bool) -> int:
    minutes = end_minutes(time) if is_end else time_to_minutes(time)
    if minutes < window_start:
        # before the window opens: only reachable on the next day
        minutes += MINUTES_PER_DAY
    return minutes


def is_within_window(
    availability: WeeklyAvailability,
    weekday: Any,
    candidate_start: str,
    candidate_end: str,
) -> bool:
    """
    Check a candidate range against a weekday's window.

    Returns True when the candidate fits. Every violation raises:
    DayNotAvailable, OutOfWindow or InvalidTimeOrder. "00:00" as an end
    time means midnight at the end of the day (1440 minutes).
    """
    day = require_day_available(availability, weekday)
    info = availability.for_day(day)

    window_start, window_end = _window_bounds(info.start_time, info.end_time)
    crossing = window_end > MINUTES_PER_DAY

    if crossing:
        start = _candidate_minutes(candidate_start, window_start, is_end=False)
        end = _candidate_minutes(candidate_end, window_start, is_end=True)
    else:
        start = time_to_minutes(candidate_start)
        end = end_minutes(candidate_end)

    if start < window_start or end > window_end:
        logger.debug(
            "Rejected: %s-%s outside %s window %s-%s",
            candidate_start, candidate_end, day.value, info.start_time, info.end_time,
        )
        raise OutOfWindow(
            f"{candidate_start}-{candidate_end} is outside {day.value}'s available "
            f"hours ({info.start_time}-{info.end_time})"
        )

    if end <= start:
        raise InvalidTimeOrder(
            f"End time {candidate_end} must be after start time {candidate_start}"
        )
    return True


def fits_window(
    availability: WeeklyAvailability,
    weekday: Any,
    candidate_start: str,
    candidate_end: str,
) -> bool:
    """Non-raising variant of ``is_within_window`` for enabling UI controls."""
    try:
        return is_within_window(availability, weekday, candidate_start, candidate_end)
    except (DayNotAvailable, OutOfWindow, InvalidTimeOrder):
        return False


def validate_date_range(
    availability: WeeklyAvailability,
    value: DateLike,
    candidate_start: str,
    candidate_end: str,
) -> Weekday:
    """Validate a concrete calendar date and time range; return its weekday."""
    day = weekday_for(value)
    is_within_window(availability, day, candidate_start, candidate_end)
    return day
