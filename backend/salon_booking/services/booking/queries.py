# backend/salon_booking/services/booking/queries.py
"""Read-side booking lookups for calendars and dashboards."""

from datetime import datetime
from typing import Optional

from .repository import BookingRepository


def list_salon_bookings(
    repo: BookingRepository,
    salon_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> list:
    """Salon bookings in [start, end], oldest first."""
    return repo.get_salon_bookings(salon_id, start, end)


def next_upcoming_booking(
    repo: BookingRepository,
    user,
    now: datetime | None = None,
):
    """The customer's next booking starting at or after now. None for non-customers."""
    if user is None or user.role != "CUSTOMER":
        return None
    return repo.get_next_booking_for_customer(user.id, now or datetime.now())
