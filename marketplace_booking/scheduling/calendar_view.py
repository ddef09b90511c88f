"""
Calendar and list views of a service's weekly availability.

Everything here is display-only: times are rendered as 12-hour labels
and never sent back to the booking API.
"""

import calendar
import logging
from datetime import timedelta
from typing import Optional, TypedDict

from marketplace_booking.config import WEEKDAY_NAMES, settings
from marketplace_booking.schemas.availability_schema import Weekday, WeeklyAvailability
from marketplace_booking.scheduling.slot_generator import generate_time_options
from marketplace_booking.scheduling.time_math import format_range_12_hour
from marketplace_booking.utils import DateLike, parse_iso_date, weekday_name

logger = logging.getLogger(__name__)

UNAVAILABLE_LABEL = "Unavailable"


class CalendarDay(TypedDict):
    """One tile in the month grid."""

    date: str
    day: int
    weekday: str
    available: bool
    start_time: Optional[str]
    end_time: Optional[str]
    label: str


class DaySummary(TypedDict):
    """One row in the weekly list."""

    weekday: str
    available: bool
    start_time: Optional[str]
    end_time: Optional[str]
    label: str


class DateAvailability(TypedDict):
    """An upcoming open date."""

    date: str
    day_name: str
    start_time: str
    end_time: str
    label: str


def _label(availability: WeeklyAvailability, weekday: Weekday) -> str:
    info = availability.for_day(weekday)
    if not info.available:
        return UNAVAILABLE_LABEL
    return format_range_12_hour(info.start_time, info.end_time)


def _python_first_weekday(name: str) -> int:
    # calendar module counts Monday as 0
    return (WEEKDAY_NAMES.index(name) - 1) % 7


def weekday_headers(first_weekday: Optional[str] = None) -> list[str]:
    """Weekday names in grid column order."""
    first = first_weekday or settings.scheduling.calendar_first_weekday
    start = WEEKDAY_NAMES.index(Weekday.parse(first).value)
    return [WEEKDAY_NAMES[(start + i) % 7] for i in range(7)]


def month_calendar(
    availability: WeeklyAvailability,
    year: int,
    month: int,
    first_weekday: Optional[str] = None,
) -> list[list[Optional[CalendarDay]]]:
    """
    Build a month grid, one list of seven cells per week.

    Cells outside the month are None. Each open day carries its window as
    a 12-hour label, closed days are labelled "Unavailable".
    """
    first = Weekday.parse(first_weekday or settings.scheduling.calendar_first_weekday)
    cal = calendar.Calendar(firstweekday=_python_first_weekday(first.value))

    weeks: list[list[Optional[CalendarDay]]] = []
    for week in cal.monthdatescalendar(year, month):
        row: list[Optional[CalendarDay]] = []
        for day in week:
            if day.month != month:
                row.append(None)
                continue
            weekday = Weekday(weekday_name(day))
            info = availability.for_day(weekday)
            row.append({
                "date": day.isoformat(),
                "day": day.day,
                "weekday": weekday.value,
                "available": info.available,
                "start_time": info.start_time if info.available else None,
                "end_time": info.end_time if info.available else None,
                "label": _label(availability, weekday),
            })
        weeks.append(row)
    return weeks


def weekly_summary(availability: WeeklyAvailability) -> list[DaySummary]:
    """One row per weekday, Sunday first."""
    rows: list[DaySummary] = []
    for weekday in Weekday:
        info = availability.for_day(weekday)
        rows.append({
            "weekday": weekday.value,
            "available": info.available,
            "start_time": info.start_time if info.available else None,
            "end_time": info.end_time if info.available else None,
            "label": _label(availability, weekday),
        })
    return rows


def available_day_count(availability: WeeklyAvailability) -> int:
    return len(availability.open_days())


def time_options_for(availability: WeeklyAvailability, weekday: str) -> list[str]:
    """Start/end options for a weekday's selectors, empty when it is closed."""
    info = availability.for_day(weekday)
    if not info.available:
        return []
    return generate_time_options(info.start_time, info.end_time)


def upcoming_available_dates(
    availability: WeeklyAvailability,
    start: DateLike,
    limit: int = 5,
    horizon_days: Optional[int] = None,
) -> list[DateAvailability]:
    """Get the next open dates from ``start`` (inclusive), at most ``limit``."""
    first = parse_iso_date(start)
    if limit < 1:
        return []
    horizon = (
        horizon_days if horizon_days is not None
        else settings.scheduling.upcoming_days_horizon
    )

    results: list[DateAvailability] = []
    for offset in range(horizon):
        day = first + timedelta(days=offset)
        weekday = Weekday(weekday_name(day))
        info = availability.for_day(weekday)
        if info.available:
            results.append({
                "date": day.isoformat(),
                "day_name": weekday.value,
                "start_time": info.start_time,
                "end_time": info.end_time,
                "label": _label(availability, weekday),
            })
        if len(results) >= limit:
            break
    return results


def render_month(
    availability: WeeklyAvailability,
    year: int,
    month: int,
    first_weekday: Optional[str] = None,
) -> str:
    """Plain-text month grid: open days are marked with '*'."""
    headers = weekday_headers(first_weekday)
    lines = [f"{calendar.month_name[month]} {year}".center(7 * 5 - 1)]
    lines.append(" ".join(name[:3].center(4) for name in headers))
    for week in month_calendar(availability, year, month, first_weekday):
        cells = []
        for cell in week:
            if cell is None:
                cells.append("    ")
            else:
                marker = "*" if cell["available"] else " "
                cells.append(f"{cell['day']:>3}{marker}")
        lines.append(" ".join(cells).rstrip())
    lines.append("")
    for row in weekly_summary(availability):
        lines.append(f"{row['weekday']:<10} {row['label']}")
    return "\n".join(lines)
