"""
Error taxonomy for availability checks and booking submission.

Every rejection carries a ``kind`` naming the rule that fired and a
message a UI can show as-is (e.g. "Tuesday is not available").
"""

from typing import Optional


class BookingError(Exception):
    """Base class for all booking engine errors."""

    kind: str = "BookingError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BookingValidationError(BookingError, ValueError):
    """A booking request or availability value failed local validation."""

    kind = "ValidationError"


class InvalidTimeFormat(BookingValidationError):
    kind = "InvalidTimeFormat"


class InvalidDateFormat(BookingValidationError):
    kind = "InvalidDateFormat"


class InvalidAvailability(BookingValidationError):
    kind = "InvalidAvailability"


class DayNotAvailable(BookingValidationError):
    kind = "DayNotAvailable"

    def __init__(self, weekday: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{weekday} is not available")
        self.weekday = weekday


class OutOfWindow(BookingValidationError):
    kind = "OutOfWindow"


class InvalidTimeOrder(BookingValidationError):
    kind = "InvalidTimeOrder"


class EmptySelection(BookingValidationError):
    kind = "EmptySelection"


class NoDaysSelected(BookingValidationError):
    kind = "NoDaysSelected"


class MissingStartDate(BookingValidationError):
    kind = "MissingStartDate"


class InvalidWeekCount(BookingValidationError):
    kind = "InvalidWeekCount"


class DuplicateEntry(BookingValidationError):
    kind = "DuplicateEntry"


class StartDateNotSelected(BookingValidationError):
    kind = "StartDateNotSelected"


class UnexpectedTimeSlot(BookingValidationError):
    kind = "UnexpectedTimeSlot"


class InvalidTransitionError(BookingError):
    """Raised when a lifecycle action is not valid from the current status."""

    kind = "InvalidTransition"


class BookingSubmissionFailed(BookingError):
    """The booking API rejected a request or could not be reached."""

    kind = "BookingSubmissionFailed"

    def __init__(self, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class InvalidWeekday(BookingValidationError):
    kind = "InvalidWeekday"
