"""
Validate-then-submit orchestration for customer and seller actions.

Requests are validated locally before any network call, and lifecycle
actions are refused locally when they are illegal from the booking's
current status. Nothing here caches bookings: callers update their own
lists only with what the API returns.
"""

from typing import Iterable, Optional

from marketplace_booking.errors import BookingSubmissionFailed, InvalidTransitionError
from marketplace_booking.logging_context import get_request_logger, new_request_id
from marketplace_booking.schemas.availability_schema import Service
from marketplace_booking.schemas.booking_schema import Booking, BookingStatus
from marketplace_booking.scheduling.lifecycle import Actor, BookingAction, BookingLifecycle
from marketplace_booking.scheduling.request_builder import (
    EntryInput,
    RecurringInput,
    build_recurring_request,
    build_specific_dates_request,
)
from marketplace_booking.tools.booking_api import BookingApiClient

logger = get_request_logger(__name__)


class BookingService:
    """Customer and seller booking operations on top of BookingApiClient."""

    def __init__(self, client: Optional[BookingApiClient] = None) -> None:
        self.client = client or BookingApiClient()

    async def book_specific_dates(
        self, service: Service, user_id: str, entries: Iterable[EntryInput]
    ) -> Booking:
        """Book one or more explicit dates on ``service`` for ``user_id``."""
        new_request_id()
        request = build_specific_dates_request(entries, service.availability)
        return await self._submit(service, user_id, request.to_payload())

    async def book_recurring(
        self, service: Service, user_id: str, spec: RecurringInput
    ) -> Booking:
        """Book a weekly recurring series on ``service`` for ``user_id``."""
        new_request_id()
        request = build_recurring_request(spec, service.availability)
        return await self._submit(service, user_id, request.to_payload())

    async def _submit(self, service: Service, user_id: str, payload: dict) -> Booking:
        logger.info("Submitting booking for service %s", service.id)
        booking = await self.client.create_booking(service.id, user_id, payload)
        if booking.status != BookingStatus.PENDING:
            logger.warning(
                "New booking %s came back as '%s'", booking.id, booking.status.value
            )
        return booking

    async def confirm(self, booking: Booking) -> Booking:
        return await self._act(booking, BookingAction.CONFIRM, Actor.SELLER)

    async def reject(self, booking: Booking) -> Booking:
        return await self._act(booking, BookingAction.REJECT, Actor.SELLER)

    async def cancel(self, booking: Booking) -> Booking:
        return await self._act(booking, BookingAction.CANCEL, Actor.CUSTOMER)

    async def _act(self, booking: Booking, action: BookingAction, actor: Actor) -> Booking:
        new_request_id()
        lifecycle = BookingLifecycle(booking.status)
        if not lifecycle.can_apply(action, actor):
            raise InvalidTransitionError(
                f"Cannot {action.value} booking {booking.id}: it is already "
                f"'{booking.status.value}'"
            )

        calls = {
            BookingAction.CONFIRM: self.client.confirm_booking,
            BookingAction.REJECT: self.client.reject_booking,
            BookingAction.CANCEL: self.client.cancel_booking,
        }
        updated = await calls[action](booking.id)

        try:
            lifecycle.validate_server_transition(updated.status, action)
        except InvalidTransitionError as exc:
            raise BookingSubmissionFailed(str(exc)) from exc
        logger.info("Booking %s is now %s", updated.id, updated.status.value)
        return updated

    async def seller_bookings(self, seller_id: str) -> list[Booking]:
        return await self.client.get_seller_bookings(seller_id)

    async def user_bookings(self, user_id: str) -> list[Booking]:
        return await self.client.get_user_bookings(user_id)
