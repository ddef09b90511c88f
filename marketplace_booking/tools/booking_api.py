"""
HTTP client for the marketplace booking API.

Routes mirror the backend's ``/book`` router. Any failure (timeout,
transport error, non-2xx status or ``success: false``) surfaces as
BookingSubmissionFailed carrying the server's message verbatim.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from marketplace_booking.config import settings
from marketplace_booking.errors import BookingSubmissionFailed
from marketplace_booking.logging_context import get_request_id, get_request_logger
from marketplace_booking.schemas.booking_schema import Booking

logger = get_request_logger(__name__)

GENERIC_FAILURE = "Something went wrong!"


def _failure_reason(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or GENERIC_FAILURE
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return GENERIC_FAILURE


class BookingApiClient:
    """Async client for create/confirm/reject/cancel and booking listings."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.api.server_url).rstrip("/")
        self.timeout = timeout or settings.api.request_timeout_sec
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )

    async def _request(
        self, method: str, path: str, json: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        headers = {"X-Request-ID": get_request_id()}
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json, headers=headers)
        except httpx.TimeoutException:
            logger.warning("%s %s timed out after %.1fs", method, path, self.timeout)
            raise BookingSubmissionFailed(
                f"The booking service did not respond within {self.timeout:g} seconds"
            ) from None
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise BookingSubmissionFailed(GENERIC_FAILURE) from exc

        if response.is_error:
            reason = _failure_reason(response)
            logger.warning(
                "%s %s returned %d: %s", method, path, response.status_code, reason
            )
            raise BookingSubmissionFailed(reason, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            raise BookingSubmissionFailed(
                "The booking service returned an unreadable response",
                status_code=response.status_code,
            ) from None

        if not isinstance(body, dict) or body.get("success") is False:
            reason = body.get("message") if isinstance(body, dict) else None
            raise BookingSubmissionFailed(
                reason or GENERIC_FAILURE, status_code=response.status_code
            )
        return body

    @staticmethod
    def _parse_booking(body: dict[str, Any]) -> Booking:
        try:
            return Booking.model_validate(body.get("booking"))
        except ValidationError as exc:
            logger.error("Unexpected booking payload: %s", exc)
            raise BookingSubmissionFailed(
                "The booking service returned an invalid booking"
            ) from exc

    @classmethod
    def _parse_bookings(cls, body: dict[str, Any]) -> list[Booking]:
        return [cls._parse_booking({"booking": item}) for item in body.get("bookings") or []]

    async def create_booking(
        self, service_id: str, user_id: str, payload: dict[str, Any]
    ) -> Booking:
        """POST a validated request body; returns the created booking."""
        body = await self._request(
            "POST",
            "/book/create-booking",
            json={"serviceId": service_id, "userId": user_id, **payload},
        )
        booking = self._parse_booking(body)
        logger.info("Booking %s created for service %s", booking.id, service_id)
        return booking

    async def confirm_booking(self, booking_id: str) -> Booking:
        return self._parse_booking(
            await self._request("PUT", f"/book/confirm-booking/{booking_id}")
        )

    async def reject_booking(self, booking_id: str) -> Booking:
        return self._parse_booking(
            await self._request("PUT", f"/book/reject-booking/{booking_id}")
        )

    async def cancel_booking(self, booking_id: str) -> Booking:
        return self._parse_booking(
            await self._request("PUT", f"/book/cancel-booking/{booking_id}")
        )

    async def get_seller_bookings(self, seller_id: str) -> list[Booking]:
        return self._parse_bookings(
            await self._request("GET", f"/book/seller-bookings/{seller_id}")
        )

    async def get_user_bookings(self, user_id: str) -> list[Booking]:
        return self._parse_bookings(
            await self._request("GET", f"/book/user-bookings/{user_id}")
        )
