# backend/salon_booking/routers/bookings.py
# No reschedule/cancel flows: PATCH = 405, DELETE = 405

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ..auth import get_cache, get_current_user, get_now
from ..database import get_db
from ..schemas.bookings import (
    BookingCreate,
    BookingRead,
    BookingResult,
    UpcomingBookingResponse,
)
from ..services.booking import (
    BookingRepository,
    BookingRequest,
    BookingRules,
    create_booking,
    get_booking_rules,
    list_salon_bookings,
    next_upcoming_booking,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("/", response_model=BookingResult, status_code=status.HTTP_201_CREATED)
def create_booking_endpoint(
    data: BookingCreate,
    response: Response,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
    now: datetime = Depends(get_now),
    rules: BookingRules = Depends(get_booking_rules),
    cache=Depends(get_cache),
):
    request = BookingRequest(
        salon_id=data.salon_id,
        employee_id=data.employee_id,
        service_ids=data.service_ids,
        date=data.date,
        time=data.time,
    )
    outcome = create_booking(db, request, user, now=now, rules=rules, cache=cache)

    if not outcome.ok:
        response.status_code = outcome.error.status_code
        return BookingResult(ok=False, error=outcome.error.message)

    return BookingResult(ok=True, booking=BookingRead.from_booking(outcome.booking))


@router.get("/", response_model=list[BookingRead])
def list_bookings(
    salon_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    bookings = list_salon_bookings(BookingRepository(db), salon_id, start, end)
    return [BookingRead.from_booking(b) for b in bookings]


@router.get("/upcoming", response_model=UpcomingBookingResponse)
def get_upcoming_booking(
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    booking = next_upcoming_booking(BookingRepository(db), user, now)
    return UpcomingBookingResponse(
        booking=BookingRead.from_booking(booking) if booking else None
    )


@router.get("/{id}", response_model=BookingRead)
def get_booking(id: int, db: Session = Depends(get_db)):
    obj = BookingRepository(db).get_booking(id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return BookingRead.from_booking(obj)


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
