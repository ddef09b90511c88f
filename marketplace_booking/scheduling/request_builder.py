"""
Assembles validated create-booking requests.

Two shapes are supported: a list of specific dates, or a weekly
recurring series over a number of weeks. Every check runs before
anything is sent, and the first violation aborts the whole request.

Usage:
    builder = SpecificDatesRequestBuilder(service.availability)
    builder.add({"date": "2024-06-03", "startTime": "10:00", "endTime": "11:00"})
    payload = builder.build().to_payload()
"""

import logging
from datetime import timedelta
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from marketplace_booking.config import settings
from marketplace_booking.errors import (
    BookingValidationError,
    DayNotAvailable,
    DuplicateEntry,
    EmptySelection,
    InvalidWeekCount,
    MissingStartDate,
    NoDaysSelected,
    StartDateNotSelected,
    UnexpectedTimeSlot,
)
from marketplace_booking.schemas.availability_schema import (
    TimeSlot,
    Weekday,
    WeeklyAvailability,
    raise_validation_error,
)
from marketplace_booking.schemas.booking_schema import (
    RecurringBookingSpec,
    RecurringRequest,
    SpecificDateEntry,
    SpecificDatesRequest,
)
from marketplace_booking.scheduling.validator import (
    is_within_window,
    validate_date_range,
    weekday_for,
)

logger = logging.getLogger(__name__)

EntryInput = Union[SpecificDateEntry, dict[str, Any]]
RecurringInput = Union[RecurringBookingSpec, dict[str, Any]]


def _as_entry(candidate: EntryInput) -> SpecificDateEntry:
    if isinstance(candidate, SpecificDateEntry):
        return candidate
    try:
        return SpecificDateEntry.model_validate(candidate)
    except ValidationError as exc:
        raise_validation_error(exc, BookingValidationError)
        raise


def _as_recurring(candidate: RecurringInput) -> RecurringBookingSpec:
    if isinstance(candidate, RecurringBookingSpec):
        return candidate
    try:
        return RecurringBookingSpec.model_validate(candidate)
    except ValidationError as exc:
        raise_validation_error(exc, BookingValidationError)
        raise


class SpecificDatesRequestBuilder:
    """
    Accumulates specific-date entries, validating each as it is added.

    A rejected entry leaves the accumulated set unchanged, so adding a
    duplicate raises DuplicateEntry and only the first copy is kept.
    """

    def __init__(self, availability: WeeklyAvailability) -> None:
        self.availability = availability
        self._entries: list[SpecificDateEntry] = []
        self._keys: set[tuple] = set()

    @property
    def entries(self) -> list[SpecificDateEntry]:
        return list(self._entries)

    def add(self, candidate: EntryInput) -> SpecificDateEntry:
        """Validate and append one entry; raise on the first violation."""
        entry = _as_entry(candidate)
        weekday = validate_date_range(
            self.availability, entry.date, entry.start_time, entry.end_time
        )
        if entry.key() in self._keys:
            logger.debug("Rejected duplicate entry %s", entry.key())
            raise DuplicateEntry(
                f"{weekday.value} {entry.date.isoformat()} "
                f"{entry.start_time}-{entry.end_time} is already selected"
            )
        self._entries.append(entry)
        self._keys.add(entry.key())
        return entry

    def remove(self, candidate: EntryInput) -> bool:
        """Drop a previously added entry. Returns False if it was not present."""
        entry = _as_entry(candidate)
        if entry.key() not in self._keys:
            return False
        self._keys.discard(entry.key())
        self._entries = [e for e in self._entries if e.key() != entry.key()]
        return True

    def clear(self) -> None:
        self._entries.clear()
        self._keys.clear()

    def build(self) -> SpecificDatesRequest:
        if not self._entries:
            raise EmptySelection("Please select at least one date.")
        return SpecificDatesRequest(specific_dates=self._entries)


def build_specific_dates_request(
    candidates: Iterable[EntryInput], availability: WeeklyAvailability
) -> SpecificDatesRequest:
    """Validate an ordered list of entries in one go and return the request body."""
    builder = SpecificDatesRequestBuilder(availability)
    for candidate in candidates:
        builder.add(candidate)
    request = builder.build()
    logger.info("Built specific-dates request with %d entries", len(request.specific_dates))
    return request


def _check_week_count(week_count: Optional[int]) -> int:
    limit = settings.scheduling.max_week_count
    if week_count is None or week_count < 1:
        raise InvalidWeekCount(
            f"Number of weeks must be a positive integer, got {week_count!r}"
        )
    if week_count > limit:
        raise InvalidWeekCount(f"Number of weeks cannot exceed {limit}, got {week_count}")
    return week_count


def build_recurring_spec(
    candidate: RecurringInput, availability: WeeklyAvailability
) -> RecurringBookingSpec:
    """
    Validate a recurring series and return its normalized form.

    Selected days keep their Sunday..Saturday order and duplicates are
    collapsed. A selected day without an explicit time slot gets that
    day's whole availability window. The start date must fall on one of
    the selected days. The returned spec carries ``end_date``, the date
    of the last occurrence.
    """
    spec = _as_recurring(candidate)

    if not spec.days:
        raise NoDaysSelected("Please select at least one day.")
    if spec.start_date is None:
        raise MissingStartDate("Please choose a start date.")
    week_count = _check_week_count(spec.week_count)

    selected = [day for day in Weekday if day in spec.days]
    for day in selected:
        if not availability.is_open(day):
            raise DayNotAvailable(day.value)

    for day in spec.time_slots:
        if day not in selected:
            raise UnexpectedTimeSlot(
                f"A time slot was given for {day.value}, which is not a selected day"
            )

    time_slots: dict[Weekday, TimeSlot] = {}
    for day in selected:
        slot = spec.time_slots.get(day) or availability.for_day(day).window()
        is_within_window(availability, day, slot.start_time, slot.end_time)
        time_slots[day] = slot

    start_day = weekday_for(spec.start_date)
    if not availability.is_open(start_day):
        raise DayNotAvailable(
            start_day.value,
            f"The start date {spec.start_date.isoformat()} is a {start_day.value}, "
            f"and {start_day.value} is not available",
        )
    if start_day not in selected:
        raise StartDateNotSelected(
            f"The start date {spec.start_date.isoformat()} is a {start_day.value}, "
            "which is not one of the selected days"
        )

    normalized = RecurringBookingSpec(
        days=selected,
        start_date=spec.start_date,
        week_count=week_count,
        time_slots=time_slots,
    )
    occurrences = expand_recurring(normalized)
    normalized = normalized.model_copy(update={"end_date": occurrences[-1].date})

    logger.info(
        "Built recurring spec: %s from %s for %d week(s), %d occurrence(s)",
        ", ".join(day.value for day in selected),
        spec.start_date.isoformat(), week_count, len(occurrences),
    )
    return normalized


def build_recurring_request(
    candidate: RecurringInput, availability: WeeklyAvailability
) -> RecurringRequest:
    """Validate a recurring series and wrap it as a create-booking body."""
    return RecurringRequest(recurring_details=build_recurring_spec(candidate, availability))


def expand_recurring(spec: RecurringBookingSpec) -> list[SpecificDateEntry]:
    """
    Expand a normalized series into dated occurrences.

    Week ``n`` is the seven days starting ``7 * n`` days after the start
    date; every selected weekday inside it becomes one occurrence.
    """
    if spec.start_date is None or not spec.week_count:
        return []

    occurrences = []
    for offset in range(spec.week_count * 7):
        day = spec.start_date + timedelta(days=offset)
        weekday = weekday_for(day)
        slot = spec.time_slots.get(weekday)
        if weekday in spec.days and slot is not None:
            occurrences.append(
                SpecificDateEntry(date=day, start_time=slot.start_time, end_time=slot.end_time)
            )
    return occurrences
