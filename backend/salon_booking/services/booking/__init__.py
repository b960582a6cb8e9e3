# backend/salon_booking/services/booking/__init__.py
"""
Booking validation and conflict-resolution core.

duration      time-of-day <-> minutes
conflicts     half-open interval overlap
availability  valid start times and the UI grid
validator     accept/reject decision before any write
transaction   atomic re-check + insert
create        create_booking entry point
"""

from .availability import available_times, operating_window, slot_grid
from .config import BookingRules, get_booking_rules
from .conflicts import ConflictCheck, find_conflict, overlaps
from .create import create_booking
from .errors import BookingError, ErrorKind
from .queries import list_salon_bookings, next_upcoming_booking
from .repository import BookingRepository
from .transaction import BookingOutcome, commit_booking
from .validator import BookingRequest, ValidatedBooking, validate_booking

__all__ = [
    "BookingRules",
    "get_booking_rules",
    "BookingRepository",
    "BookingRequest",
    "ValidatedBooking",
    "BookingOutcome",
    "BookingError",
    "ErrorKind",
    "ConflictCheck",
    "overlaps",
    "find_conflict",
    "operating_window",
    "available_times",
    "slot_grid",
    "validate_booking",
    "commit_booking",
    "create_booking",
    "list_salon_bookings",
    "next_upcoming_booking",
]
