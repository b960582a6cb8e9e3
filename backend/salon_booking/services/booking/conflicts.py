# backend/salon_booking/services/booking/conflicts.py
"""
Interval overlap: the one rule every booking path uses.

Intervals are half-open, [start, end). Two intervals overlap iff
    b_start < a_end and b_end > a_start
so a booking ending at 10:45 and one starting at 10:45 do not conflict.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from .duration import total_minutes

logger = logging.getLogger(__name__)

# Look-back for conflict fetches: a booking that started the previous day can
# still be running after midnight.
LOOKBACK = timedelta(days=1)


@dataclass(frozen=True)
class ConflictCheck:
    has_conflict: bool
    conflicting_booking: Optional[object] = None


def overlaps(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    """Half-open interval overlap."""
    return b_start < a_end and b_end > a_start


def booking_end(start: datetime, services: Iterable) -> datetime:
    """Effective end instant: start + sum of service durations."""
    return start + timedelta(minutes=total_minutes(services))


def booking_interval(booking) -> tuple[datetime, datetime]:
    """[start, end) of a stored booking, from its linked services."""
    return booking.date, booking_end(booking.date, booking.services)


def find_conflict(
    start: datetime,
    end: datetime,
    bookings: Iterable,
) -> ConflictCheck:
    """First booking whose interval overlaps [start, end), if any."""
    for booking in bookings:
        existing_start, existing_end = booking_interval(booking)
        if overlaps(existing_start, existing_end, start, end):
            return ConflictCheck(True, booking)
    return ConflictCheck(False)


def conflict_window(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    """
    Fetch window for an employee's bookings that may overlap [start, end).

    Covers the calendar day of start, the day before it and everything up
    to end.
    """
    day_start = datetime.combine(start.date(), datetime.min.time())
    window_end = max(end, day_start + timedelta(days=1))
    return day_start - LOOKBACK, window_end


def check_employee_conflict(
    repo,
    employee_id: int,
    start: datetime,
    end: datetime,
) -> ConflictCheck:
    """Load the employee's nearby bookings and look for an overlap."""
    window_start, window_end = conflict_window(start, end)
    bookings = repo.get_employee_bookings(employee_id, window_start, window_end)
    check = find_conflict(start, end, bookings)
    if check.has_conflict:
        logger.debug(
            f"Conflict for employee={employee_id} "
            f"[{start:%Y-%m-%d %H:%M}, {end:%H:%M}) "
            f"with booking={check.conflicting_booking.id}"
        )
    return check
