"""
Finite state machine for booking status.

A booking starts pending. The seller who owns the service confirms or
rejects it, and the customer may cancel it; all three moves are only
legal from pending and every other status is terminal. The real guard
lives with the booking API: this module decides which actions to offer
and checks that statuses reported by the server are reachable.

Usage:
    lifecycle = BookingLifecycle()
    lifecycle.apply(BookingAction.CONFIRM, Actor.SELLER)
    assert lifecycle.status == BookingStatus.CONFIRMED
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from marketplace_booking.errors import InvalidTransitionError
from marketplace_booking.schemas.booking_schema import BookingStatus

logger = logging.getLogger(__name__)


class BookingAction(str, Enum):
    """Actions that move a booking between statuses."""
    CONFIRM = "confirm"
    REJECT = "reject"
    CANCEL = "cancel"


class Actor(str, Enum):
    """Who is attempting an action."""
    SELLER = "seller"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class Transition:
    """A single valid status transition."""
    from_status: BookingStatus
    to_status: BookingStatus
    action: BookingAction
    actor: Actor


@dataclass
class StatusEntry:
    """Recorded history entry for a status change."""
    status: BookingStatus
    entered_at: datetime
    action: Optional[BookingAction] = None
    actor: Optional[Actor] = None


TRANSITIONS: list[Transition] = [
    Transition(BookingStatus.PENDING, BookingStatus.CONFIRMED,
               BookingAction.CONFIRM, Actor.SELLER),
    Transition(BookingStatus.PENDING, BookingStatus.REJECTED,
               BookingAction.REJECT, Actor.SELLER),
    Transition(BookingStatus.PENDING, BookingStatus.CANCELED,
               BookingAction.CANCEL, Actor.CUSTOMER),
]

TERMINAL_STATUSES = frozenset({
    BookingStatus.CONFIRMED,
    BookingStatus.REJECTED,
    BookingStatus.CANCELED,
    BookingStatus.COMPLETED,
})


def find_transition(
    status: BookingStatus, action: BookingAction, actor: Optional[Actor] = None
) -> Optional[Transition]:
    for t in TRANSITIONS:
        if t.from_status == status and t.action == action:
            if actor is None or t.actor == actor:
                return t
    return None


def can_apply(
    status: BookingStatus, action: BookingAction, actor: Optional[Actor] = None
) -> bool:
    """Legal-transition predicate: may ``actor`` perform ``action`` now?"""
    return find_transition(status, action, actor) is not None


def available_actions(status: BookingStatus, actor: Optional[Actor] = None) -> list[BookingAction]:
    """Actions to offer from ``status``, optionally only those ``actor`` may take."""
    return [
        t.action for t in TRANSITIONS
        if t.from_status == status and (actor is None or t.actor == actor)
    ]


def is_terminal(status: BookingStatus) -> bool:
    return status in TERMINAL_STATUSES


class BookingLifecycle:
    """
    Status tracker for a single booking.

    Every transition must be listed in TRANSITIONS. Anything else is
    rejected with an error naming the actions that are allowed.
    """

    def __init__(self, status: BookingStatus = BookingStatus.PENDING) -> None:
        self._status = BookingStatus(status)
        self._history: list[StatusEntry] = [
            StatusEntry(status=self._status, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def status(self) -> BookingStatus:
        return self._status

    def can_apply(self, action: BookingAction, actor: Optional[Actor] = None) -> bool:
        return can_apply(self._status, action, actor)

    def available_actions(self, actor: Optional[Actor] = None) -> list[BookingAction]:
        return available_actions(self._status, actor)

    def apply(self, action: BookingAction, actor: Actor) -> BookingStatus:
        """
        Execute a transition.

        Returns:
            The new booking status.

        Raises:
            InvalidTransitionError: If ``actor`` may not perform ``action``
                from the current status.
        """
        t = find_transition(self._status, action, actor)
        if t is None:
            valid = [a.value for a in self.available_actions(actor)]
            raise InvalidTransitionError(
                f"Cannot {action.value} a booking that is '{self._status.value}' "
                f"as {actor.value}. Valid actions: {valid}"
            )
        self._record(t.to_status, action, actor)
        return self._status

    def validate_server_transition(
        self, reported: BookingStatus, action: Optional[BookingAction] = None
    ) -> BookingStatus:
        """
        Accept a status reported by the booking API.

        Without ``action`` an unchanged status is accepted as-is. Otherwise
        the reported status must be reachable from the current one, and
        must be the result of ``action`` when one is given.
        """
        reported = BookingStatus(reported)
        if reported == self._status and action is None:
            return reported

        for t in TRANSITIONS:
            if t.from_status == self._status and t.to_status == reported:
                if action is None or t.action == action:
                    self._record(reported, t.action, t.actor)
                    return reported

        raise InvalidTransitionError(
            f"Server reported '{reported.value}' for a booking that was "
            f"'{self._status.value}'"
            + (f" after {action.value}" if action else "")
        )

    def _record(
        self, status: BookingStatus, action: BookingAction, actor: Optional[Actor]
    ) -> None:
        old_status = self._status
        self._status = status
        self._history.append(StatusEntry(
            status=status,
            entered_at=datetime.now(timezone.utc),
            action=action,
            actor=actor,
        ))
        logger.debug(
            "Booking status: %s -> %s (action: %s)",
            old_status.value, status.value, action.value,
        )

    def get_history(self) -> list[StatusEntry]:
        """Return the full status history."""
        return list(self._history)

    def is_terminal(self) -> bool:
        return is_terminal(self._status)
