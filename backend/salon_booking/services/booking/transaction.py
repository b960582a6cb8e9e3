# backend/salon_booking/services/booking/transaction.py
"""
Commit a validated booking.

Validation and commit are separate steps, so another request can book the
same employee in between. The transaction therefore:
1. serializes on the employee (row lock, or BEGIN IMMEDIATE on SQLite)
2. re-runs the conflict check inside the transaction
3. inserts the booking and its service rows, or rolls back with SLOT_TAKEN

A lost race and a slot that was already taken produce the same SLOT_TAKEN
result. Transient database errors are retried with exponential backoff;
anything still failing after the last attempt propagates.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from .config import BookingRules, get_booking_rules
from .conflicts import check_employee_conflict
from .errors import BookingError, ErrorKind, SlotTakenError, rejection
from .repository import BookingRepository
from .validator import BookingRequest, ValidatedBooking

logger = logging.getLogger(__name__)


@dataclass
class BookingOutcome:
    ok: bool
    booking: Optional[object] = None
    error: Optional[BookingError] = None

    @classmethod
    def success(cls, booking) -> "BookingOutcome":
        return cls(ok=True, booking=booking)

    @classmethod
    def failure(cls, error: BookingError) -> "BookingOutcome":
        return cls(ok=False, error=error)


def _insert_if_free(
    repo: BookingRepository,
    request: BookingRequest,
    validated: ValidatedBooking,
    customer_id: int,
):
    repo.lock_employee(request.employee_id)

    conflict = check_employee_conflict(
        repo, request.employee_id, validated.start, validated.end
    )
    if conflict.has_conflict:
        raise SlotTakenError(request.employee_id, conflict.conflicting_booking.id)

    return repo.add_booking(
        salon_id=request.salon_id,
        employee_id=request.employee_id,
        customer_id=customer_id,
        start=validated.start,
        service_ids=list(request.service_ids),
    )


def commit_booking(
    db: Session,
    request: BookingRequest,
    validated: ValidatedBooking,
    customer_id: int,
    rules: BookingRules | None = None,
) -> BookingOutcome:
    """Re-check and insert atomically; return the created booking or SLOT_TAKEN."""
    rules = rules or get_booking_rules()
    repo = BookingRepository(db)

    attempt = 0
    while True:
        attempt += 1

        # Close the read transaction left open by validation
        if db.in_transaction():
            db.rollback()

        try:
            with db.begin():
                booking = _insert_if_free(repo, request, validated, customer_id)
                booking_id = booking.id
            break
        except SlotTakenError as e:
            logger.warning(
                f"Booking lost race: employee={e.employee_id}, "
                f"start={validated.start:%Y-%m-%d %H:%M}, "
                f"conflicting_booking={e.conflicting_booking_id}"
            )
            return BookingOutcome.failure(rejection(ErrorKind.SLOT_TAKEN))
        except OperationalError:
            if attempt >= rules.max_attempts:
                logger.exception(
                    f"Booking transaction failed after {attempt} attempts: "
                    f"employee={request.employee_id}, start={validated.start:%Y-%m-%d %H:%M}"
                )
                raise
            delay = rules.backoff_seconds * (2 ** (attempt - 1))
            logger.warning(
                f"Booking transaction attempt {attempt} failed, retrying in {delay:.2f}s"
            )
            time.sleep(delay)

    logger.info(
        f"Booking created: booking_id={booking_id}, salon={request.salon_id}, "
        f"employee={request.employee_id}, customer={customer_id}, "
        f"[{validated.start:%Y-%m-%d %H:%M}, {validated.end:%H:%M})"
    )

    return BookingOutcome.success(repo.get_booking(booking_id))
