"""Shared test fixtures and helpers."""

from typing import Any, Optional

import pytest

from marketplace_booking.schemas.availability_schema import Service, WeeklyAvailability
from marketplace_booking.schemas.booking_schema import Booking


def day(start: str = "09:00", end: str = "17:00", available: bool = True) -> dict[str, Any]:
    """Helper to create one weekday's wire entry."""
    return {"available": available, "startTime": start, "endTime": end}


def make_availability(**days: dict[str, Any]) -> WeeklyAvailability:
    """Build a WeeklyAvailability; weekdays not given are closed."""
    return WeeklyAvailability.from_mapping({name.capitalize(): info for name, info in days.items()})


def make_booking_json(
    booking_id: str = "bk-1",
    status: str = "pending",
    service_id: str = "svc-1",
    user_id: str = "user-1",
    **extra: Any,
) -> dict[str, Any]:
    """Helper to create a booking document as the API returns it."""
    body = {
        "_id": booking_id,
        "serviceId": service_id,
        "sellerId": "shop-1",
        "userId": user_id,
        "status": status,
        "isRecurring": False,
        "specificDates": [
            {"date": "2024-06-03T00:00:00.000Z", "startTime": "10:00", "endTime": "11:00"}
        ],
        "createdAt": "2024-06-01T12:00:00.000Z",
    }
    body.update(extra)
    return body


def make_booking(status: str = "pending", booking_id: Optional[str] = None) -> Booking:
    return Booking.model_validate(make_booking_json(booking_id or "bk-1", status))


@pytest.fixture
def weekday_availability():
    """Monday-Friday 09:00-17:00, weekend closed."""
    return make_availability(
        monday=day(),
        tuesday=day(),
        wednesday=day(),
        thursday=day(),
        friday=day(),
        saturday=day(available=False),
        sunday=day(available=False),
    )


@pytest.fixture
def evening_availability():
    """Friday until midnight, Saturday across midnight, Monday 09:00-17:00."""
    return make_availability(
        monday=day(),
        friday=day("20:00", "00:00"),
        saturday=day("22:00", "02:00"),
    )


@pytest.fixture
def service(weekday_availability):
    return Service(_id="svc-1", shopId="shop-1", name="Home Tutoring",
                   availability=weekday_availability)
