# backend/salon_booking/services/booking/create.py
"""
create_booking: the entry point request handlers call.

Never raises for business rules; the outcome carries either the booking or a
BookingError. Database faults propagate.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ..web_cache import invalidate_booking_pages
from .config import BookingRules, get_booking_rules
from .errors import BookingError, ErrorKind, rejection
from .repository import BookingRepository
from .transaction import BookingOutcome, commit_booking
from .validator import BookingRequest, validate_booking

logger = logging.getLogger(__name__)


def create_booking(
    db: Session,
    request: BookingRequest,
    user,
    now: datetime | None = None,
    rules: BookingRules | None = None,
    cache=None,
) -> BookingOutcome:
    """
    Validate and commit a booking for the current user.

    Args:
        db: Session used for both the validation reads and the write
        request: Salon, employee, services, date and "HH:MM" time
        user: Current user (None when not logged in)
        now: Clock override, defaults to datetime.now()
        rules: Booking rules, defaults to settings-derived rules
        cache: Redis client for page invalidation, defaults to the app client
    """
    if user is None:
        return BookingOutcome.failure(rejection(ErrorKind.UNAUTHENTICATED))
    if user.role != "CUSTOMER":
        return BookingOutcome.failure(rejection(ErrorKind.FORBIDDEN))
    customer_id = user.id

    rules = rules or get_booking_rules()
    repo = BookingRepository(db)

    validation = validate_booking(repo, request, now=now, rules=rules)
    if isinstance(validation, BookingError):
        return BookingOutcome.failure(validation)

    outcome = commit_booking(db, request, validation, customer_id, rules)

    if outcome.ok:
        invalidate_booking_pages(request.salon_id, customer_id, redis=cache)

    return outcome
