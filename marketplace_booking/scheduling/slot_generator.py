"""
Bookable time options between a window's start and end.

Options are emitted every ``slot_interval_minutes`` (30 by default),
starting at the window start and wrapping past midnight when the window
crosses it, e.g. 22:00 -> 02:00 yields 22:00, 22:30, ... 01:30, 02:00.
"""

import logging
from typing import Iterator, Optional

from marketplace_booking.config import MINUTES_PER_DAY, settings
from marketplace_booking.scheduling.time_math import (
    crosses_midnight,
    minutes_to_time,
    time_to_minutes,
)

logger = logging.getLogger(__name__)


def _step(step_minutes: Optional[int]) -> int:
    step = (
        step_minutes if step_minutes is not None
        else settings.scheduling.slot_interval_minutes
    )
    if step < 1:
        raise ValueError(f"Slot step must be positive, got {step}")
    return step


def iter_time_options(
    start_time: str, end_time: str, step_minutes: Optional[int] = None
) -> Iterator[str]:
    """Yield "HH:MM" options from ``start_time`` up to and including ``end_time``.

    The walk is capped at one full day of steps. It also stops before
    stepping past ``end_time`` when the window length is not a multiple
    of the step, so a misaligned window never wraps around the clock.
    """
    step = _step(step_minutes)
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    span = (end - start) % MINUTES_PER_DAY
    max_steps = MINUTES_PER_DAY // step

    current = start
    yield minutes_to_time(current)
    for _ in range(max_steps):
        if current == end:
            return
        offset = (current - start) % MINUTES_PER_DAY
        if offset + step > span:
            logger.debug(
                "Window %s-%s is not aligned to %d-minute steps; stopping at %s",
                start_time, end_time, step, minutes_to_time(current),
            )
            return
        current = (current + step) % MINUTES_PER_DAY
        yield minutes_to_time(current)


def generate_time_options(
    start_time: str, end_time: str, step_minutes: Optional[int] = None
) -> list[str]:
    """Return the bookable options for a window as a list.

    A window whose start equals its end yields just ``[start_time]``.
    """
    options = list(iter_time_options(start_time, end_time, step_minutes))
    logger.debug(
        "Generated %d options for %s-%s (crosses midnight: %s)",
        len(options), start_time, end_time, crosses_midnight(start_time, end_time),
    )
    return options


def generate_slots(
    start_time: str, end_time: str, step_minutes: Optional[int] = None
) -> list[tuple[str, str]]:
    """Consecutive ``(start, end)`` pairs covering the window, one step each."""
    options = generate_time_options(start_time, end_time, step_minutes)
    return list(zip(options, options[1:]))
