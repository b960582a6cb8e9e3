# backend/salon_booking/services/booking/errors.py
"""
Booking rejection kinds and their user-facing messages.

Rejections are returned as values. Only SlotTakenError is raised, and only
inside the booking transaction to force a rollback.
"""

import enum
from dataclasses import dataclass
from typing import Optional


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    PAST_BOOKING = "past_booking"
    TOO_FAR_AHEAD = "too_far_ahead"
    OUTSIDE_OPERATING_HOURS = "outside_operating_hours"
    EXCEEDS_CLOSING_TIME = "exceeds_closing_time"
    SLOT_TAKEN = "slot_taken"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


# (kind, target) -> message. Consumers match on this text.
MESSAGES: dict[tuple[ErrorKind, Optional[str]], str] = {
    (ErrorKind.NOT_FOUND, "salon"): "Salon not found",
    (ErrorKind.NOT_FOUND, "employee"): "Employee not found or does not belong to this salon",
    (ErrorKind.NOT_FOUND, "service"): "One or more services not found or do not belong to this salon",
    (ErrorKind.INVALID_INPUT, "time"): "Invalid time format",
    (ErrorKind.PAST_BOOKING, None): "Cannot create bookings in the past",
    (ErrorKind.TOO_FAR_AHEAD, None): "Bookings can only be made up to 1 month in advance",
    (ErrorKind.OUTSIDE_OPERATING_HOURS, None): "Booking time is outside salon operating hours",
    (ErrorKind.EXCEEDS_CLOSING_TIME, None): "Selected time and services would exceed salon closing time",
    (ErrorKind.SLOT_TAKEN, None): "This time slot is already booked for the selected employee",
    (ErrorKind.UNAUTHENTICATED, None): "You must be logged in to create a booking",
    (ErrorKind.FORBIDDEN, None): "Only customers can create bookings",
}

# HTTP status per kind, used by the routers
HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_INPUT: 422,
    ErrorKind.PAST_BOOKING: 400,
    ErrorKind.TOO_FAR_AHEAD: 400,
    ErrorKind.OUTSIDE_OPERATING_HOURS: 400,
    ErrorKind.EXCEEDS_CLOSING_TIME: 400,
    ErrorKind.SLOT_TAKEN: 409,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
}


@dataclass(frozen=True)
class BookingError:
    kind: ErrorKind
    target: Optional[str] = None

    @property
    def message(self) -> str:
        return MESSAGES[(self.kind, self.target)]

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    @property
    def is_operating_hours(self) -> bool:
        """Both hour-related kinds are operating-hours rejections."""
        return self.kind in (ErrorKind.OUTSIDE_OPERATING_HOURS, ErrorKind.EXCEEDS_CLOSING_TIME)


def not_found(target: str) -> BookingError:
    return BookingError(ErrorKind.NOT_FOUND, target)


def rejection(kind: ErrorKind) -> BookingError:
    return BookingError(kind)


class SlotTakenError(Exception):
    """Raised inside the booking transaction when the re-check finds a conflict."""

    def __init__(self, employee_id: int, conflicting_booking_id: Optional[int] = None):
        self.employee_id = employee_id
        self.conflicting_booking_id = conflicting_booking_id
        super().__init__(
            f"Slot taken for employee={employee_id} "
            f"(conflicts with booking={conflicting_booking_id})"
        )
