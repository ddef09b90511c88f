"""Service availability data models."""

from enum import Enum
from typing import Any, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from marketplace_booking.errors import BookingValidationError, InvalidAvailability, InvalidWeekday
from marketplace_booking.scheduling.time_math import canonical_time


class Weekday(str, Enum):
    """Closed set of weekday keys used by availability maps."""

    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @classmethod
    def parse(cls, value: Any) -> "Weekday":
        """Accept an enum member or a weekday name in any letter case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().capitalize())
        except ValueError:
            raise InvalidWeekday(f"'{value}' is not a weekday") from None


def raise_validation_error(
    exc: ValidationError, fallback: Type[BookingValidationError]
) -> None:
    """Re-raise the first engine error wrapped inside a pydantic ValidationError.

    Validators raise engine errors (which are ValueErrors) and pydantic
    wraps them; callers get the original typed error back. Anything else
    becomes ``fallback`` with pydantic's own message.
    """
    for error in exc.errors():
        original = (error.get("ctx") or {}).get("error")
        if isinstance(original, BookingValidationError):
            raise original from None
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    raise fallback(f"{location}: {message}" if location else message) from None


def _check_time(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return canonical_time(value)


class TimeSlot(BaseModel):
    """A start/end pair within one weekday's window."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    check_times = field_validator("start_time", "end_time")(_check_time)


class DayAvailability(BaseModel):
    """Open/closed flag and time window for a single weekday."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    available: bool = False
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")

    check_times = field_validator("start_time", "end_time")(_check_time)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def window(self) -> Optional[TimeSlot]:
        """The open window, or None when the day is closed."""
        if not self.available:
            return None
        return TimeSlot(start_time=self.start_time, end_time=self.end_time)


class WeeklyAvailability(BaseModel):
    """
    Per-weekday availability for a service.

    Parses the wire shape directly: a mapping from weekday name to
    ``{available, startTime, endTime}``. Weekdays missing from the mapping
    are closed. At least one day must be open, and every open day needs
    both a start and an end time. Windows may cross midnight.
    """

    model_config = ConfigDict(frozen=True)

    days: dict[Weekday, DayAvailability] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_wire_mapping(cls, data: Any) -> Any:
        if isinstance(data, dict) and "days" not in data:
            data = {"days": data}
        if isinstance(data, dict) and isinstance(data.get("days"), dict):
            days = {Weekday.parse(key): value for key, value in data["days"].items()}
            for weekday in Weekday:
                days.setdefault(weekday, {"available": False})
            data = {**data, "days": days}
        return data

    @model_validator(mode="after")
    def _check_open_days(self) -> "WeeklyAvailability":
        open_days = [day for day, info in self.days.items() if info.available]
        if not open_days:
            raise InvalidAvailability("At least one day must be selected as available")
        for day in open_days:
            info = self.days[day]
            if info.start_time is None or info.end_time is None:
                raise InvalidAvailability(
                    f"{day.value} is marked available but has no start and end time"
                )
        return self

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "WeeklyAvailability":
        """Parse a wire mapping, raising engine errors instead of pydantic ones."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise_validation_error(exc, InvalidAvailability)
            raise

    def for_day(self, weekday: Any) -> DayAvailability:
        return self.days[Weekday.parse(weekday)]

    def is_open(self, weekday: Any) -> bool:
        return self.for_day(weekday).available

    def open_days(self) -> list[Weekday]:
        """Open weekdays in Sunday..Saturday order."""
        return [day for day in Weekday if self.days[day].available]

    def to_mapping(self) -> dict[str, dict[str, Any]]:
        """Serialize back to the wire shape keyed by weekday name."""
        return {
            day.value: self.days[day].model_dump(by_alias=True, exclude_none=True)
            for day in Weekday
        }


class Service(BaseModel):
    """The slice of a marketplace service the booking engine reads."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    shop_id: Optional[str] = Field(default=None, alias="shopId")
    name: str = ""
    availability: WeeklyAvailability
