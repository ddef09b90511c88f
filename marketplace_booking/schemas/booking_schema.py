"""Booking request and booking record data models."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketplace_booking.errors import InvalidWeekCount
from marketplace_booking.schemas.availability_schema import TimeSlot, Weekday
from marketplace_booking.scheduling.time_math import canonical_time
from marketplace_booking.utils import parse_iso_date


class BookingStatus(str, Enum):
    """Booking status as stored by the booking API."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELED = "canceled"
    COMPLETED = "completed"


class SpecificDateEntry(BaseModel):
    """One concrete calendar-date occurrence of a booking."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: date
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> date:
        return parse_iso_date(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        return canonical_time(value)

    def key(self) -> tuple[date, str, str]:
        """Identity used to detect duplicate entries within one request."""
        return self.date, self.start_time, self.end_time


class RecurringBookingSpec(BaseModel):
    """
    A weekly series: selected weekdays, a start date and a number of weeks.

    Structural rules (non-empty days, start date present, positive week
    count) are enforced by the request builder so each one can surface
    its own error kind.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    days: list[Weekday] = Field(default_factory=list)
    start_date: Optional[date] = Field(default=None, alias="startDate")
    week_count: Optional[int] = Field(default=None, alias="weekCount")
    time_slots: dict[Weekday, TimeSlot] = Field(default_factory=dict, alias="timeSlots")
    end_date: Optional[date] = Field(default=None, alias="endDate")

    @field_validator("days", mode="before")
    @classmethod
    def _parse_days(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [Weekday.parse(day) for day in value]
        return value

    @field_validator("time_slots", mode="before")
    @classmethod
    def _parse_slot_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {Weekday.parse(day): slot for day, slot in value.items()}
        return value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Optional[date]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return parse_iso_date(value)

    @field_validator("week_count", mode="before")
    @classmethod
    def _parse_week_count(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        if isinstance(value, bool):
            raise InvalidWeekCount(f"Number of weeks must be a positive integer, got {value!r}")
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return int(value.strip())
        if isinstance(value, int):
            return value
        raise InvalidWeekCount(f"Number of weeks must be a positive integer, got {value!r}")


class SpecificDatesRequest(BaseModel):
    """Create-booking body for one or more explicit dates."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    specific_dates: list[SpecificDateEntry] = Field(alias="specificDates")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class RecurringRequest(BaseModel):
    """Create-booking body for a weekly recurring series."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_recurring: bool = Field(default=True, alias="isRecurring")
    recurring_details: RecurringBookingSpec = Field(alias="recurringDetails")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _ref_id(value: Any) -> Any:
    """Populated references arrive as objects; keep only their id."""
    if isinstance(value, dict):
        return value.get("_id") or value.get("id")
    return value


class Booking(BaseModel):
    """A booking record as returned by the booking API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    service_id: str = Field(alias="serviceId")
    seller_id: Optional[str] = Field(default=None, alias="sellerId")
    user_id: str = Field(alias="userId")
    status: BookingStatus = BookingStatus.PENDING
    is_recurring: bool = Field(default=False, alias="isRecurring")
    specific_dates: list[SpecificDateEntry] = Field(default_factory=list, alias="specificDates")
    recurring_details: Optional[RecurringBookingSpec] = Field(
        default=None, alias="recurringDetails"
    )
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
    completed_at: Optional[datetime] = Field(default=None, alias="completedAt")

    @field_validator("service_id", "seller_id", "user_id", mode="before")
    @classmethod
    def _unwrap_reference(cls, value: Any) -> Any:
        return _ref_id(value)

    @field_validator("recurring_details", mode="before")
    @classmethod
    def _empty_details_is_none(cls, value: Any) -> Any:
        if isinstance(value, dict) and not value.get("days"):
            return None
        return value
