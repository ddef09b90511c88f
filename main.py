"""
Command-line entry point for inspecting availability and checking requests.

Usage:
    python main.py slots 20:00 00:00
    python main.py slots 09:00 17:00 --12h
    python main.py calendar availability.json 2024 6
    python main.py validate availability.json request.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from marketplace_booking.config import settings
from marketplace_booking.errors import BookingValidationError
from marketplace_booking.schemas.availability_schema import WeeklyAvailability
from marketplace_booking.scheduling.calendar_view import render_month
from marketplace_booking.scheduling.request_builder import (
    build_recurring_request,
    build_specific_dates_request,
)
from marketplace_booking.scheduling.slot_generator import generate_time_options
from marketplace_booking.scheduling.time_math import format_to_12_hour

logger = logging.getLogger(__name__)


def _load_json(path: str) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        sys.exit(1)
    return json.loads(file_path.read_text(encoding="utf-8"))


def _load_availability(path: str) -> WeeklyAvailability:
    data = _load_json(path)
    # accept either a bare availability map or a whole service document
    if isinstance(data, dict) and "availability" in data:
        data = data["availability"]
    return WeeklyAvailability.from_mapping(data)


def _cmd_slots(args: argparse.Namespace) -> int:
    options = generate_time_options(args.start, args.end)
    if args.twelve_hour:
        options = [format_to_12_hour(option) for option in options]
    sys.stdout.write("\n".join(options) + "\n")
    return 0


def _cmd_calendar(args: argparse.Namespace) -> int:
    availability = _load_availability(args.availability)
    sys.stdout.write(
        render_month(availability, args.year, args.month, args.first_weekday) + "\n"
    )
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    availability = _load_availability(args.availability)
    body = _load_json(args.request)
    if not isinstance(body, dict):
        raise BookingValidationError(
            f"{args.request} must hold a JSON object, got {type(body).__name__}"
        )

    if body.get("isRecurring"):
        request = build_recurring_request(body.get("recurringDetails") or {}, availability)
    else:
        request = build_specific_dates_request(body.get("specificDates") or [], availability)

    sys.stdout.write(json.dumps(request.to_payload(), indent=2) + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect service availability and validate booking requests."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    slots = subparsers.add_parser("slots", help="List bookable times in a window.")
    slots.add_argument("start", help="Window start, HH:MM.")
    slots.add_argument("end", help="Window end, HH:MM (00:00 means midnight).")
    slots.add_argument(
        "--12h",
        dest="twelve_hour",
        action="store_true",
        help="Print 12-hour labels instead of HH:MM.",
    )
    slots.set_defaults(handler=_cmd_slots)

    cal = subparsers.add_parser("calendar", help="Print a month of availability.")
    cal.add_argument("availability", help="Path to an availability (or service) JSON file.")
    cal.add_argument("year", type=int)
    cal.add_argument("month", type=int, choices=range(1, 13), metavar="MONTH")
    cal.add_argument(
        "--first-weekday",
        default=None,
        help=f"First column of the grid (default: {settings.scheduling.calendar_first_weekday}).",
    )
    cal.set_defaults(handler=_cmd_calendar)

    validate = subparsers.add_parser(
        "validate", help="Check a create-booking request body against availability."
    )
    validate.add_argument("availability", help="Path to an availability (or service) JSON file.")
    validate.add_argument("request", help="Path to the request body JSON file.")
    validate.set_defaults(handler=_cmd_validate)

    return parser


def main(argv: Any = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return args.handler(args)
    except BookingValidationError as exc:
        sys.stderr.write(f"{exc.kind}: {exc.message}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
