# backend/salon_booking/services/booking/validator.py
"""
Accept/reject decision for a proposed booking, made before any write.

Steps (first failure wins):
 1. salon exists
 2. employee belongs to the salon
 3. every requested service belongs to the salon
 4. time parses as HH:MM
 5. start is not in the past
 6. start day is within the booking horizon
 7. end = start + total service duration
 8. start/end fall inside operating hours (only if the salon has them set)
 9. no overlap with the employee's bookings
10. accept

Read-only: running it twice with no write in between gives the same answer.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Union

from .availability import max_booking_date
from .config import BookingRules, get_booking_rules
from .conflicts import booking_end, check_employee_conflict
from .duration import minute_of_day, parse_hour_minute, to_minutes
from .errors import BookingError, ErrorKind, rejection
from .lookup import resolve_selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingRequest:
    salon_id: int
    employee_id: int
    service_ids: list[int]
    date: date
    time: str  # "HH:MM"


@dataclass(frozen=True)
class ValidatedBooking:
    """Everything the transaction needs to commit the booking."""
    start: datetime
    end: datetime
    services: list

    @property
    def duration_min(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)


Validation = Union[ValidatedBooking, BookingError]


def booking_start(day: date, hour: int, minute: int) -> datetime:
    """Salon-local start instant; any time-of-day on the date is dropped."""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, datetime.min.time()).replace(hour=hour, minute=minute)


def check_operating_hours(salon, start: datetime, end: datetime) -> BookingError | None:
    """
    Operating-hours rule. Skipped entirely when the salon has no hours set.

    start must fall in [opening, closing) and end must not pass closing time
    on the start's calendar day.
    """
    if salon.opening_time is None or salon.closing_time is None:
        return None

    opening = to_minutes(salon.opening_time)
    closing = to_minutes(salon.closing_time)
    start_min = minute_of_day(start)

    if start_min < opening or start_min >= closing:
        return rejection(ErrorKind.OUTSIDE_OPERATING_HOURS)

    closing_at = datetime.combine(start.date(), datetime.min.time()) + timedelta(minutes=closing)
    if end > closing_at:
        return rejection(ErrorKind.EXCEEDS_CLOSING_TIME)

    return None


def validate_booking(
    repo,
    request: BookingRequest,
    now: datetime | None = None,
    rules: BookingRules | None = None,
) -> Validation:
    """Run all checks; return ValidatedBooking or the first BookingError."""
    rules = rules or get_booking_rules()
    now = now or datetime.now()

    # Steps 1-3
    selection = resolve_selection(repo, request.salon_id, request.employee_id, request.service_ids)
    if isinstance(selection, BookingError):
        return _reject(request, selection)

    # Step 4
    parsed = parse_hour_minute(request.time)
    if parsed is None:
        return _reject(request, BookingError(ErrorKind.INVALID_INPUT, "time"))
    start = booking_start(request.date, *parsed)

    # Step 5
    if start < now:
        return _reject(request, rejection(ErrorKind.PAST_BOOKING))

    # Step 6
    if start.date() > max_booking_date(now.date(), rules):
        return _reject(request, rejection(ErrorKind.TOO_FAR_AHEAD))

    # Step 7
    end = booking_end(start, selection.services)

    # Step 8
    hours_error = check_operating_hours(selection.salon, start, end)
    if hours_error is not None:
        return _reject(request, hours_error)

    # Step 9
    conflict = check_employee_conflict(repo, request.employee_id, start, end)
    if conflict.has_conflict:
        return _reject(request, rejection(ErrorKind.SLOT_TAKEN))

    return ValidatedBooking(start=start, end=end, services=selection.services)


def _reject(request: BookingRequest, error: BookingError) -> BookingError:
    logger.info(
        f"Booking rejected ({error.kind.value}): salon={request.salon_id}, "
        f"employee={request.employee_id}, services={list(request.service_ids)}, "
        f"at={request.date} {request.time}"
    )
    return error
