# backend/salon_booking/routers/slots.py
"""
Slots API endpoints.

GET /slots/day  - valid start times for an employee and a set of services
GET /slots/grid - fixed UI grid with per-cell availability
"""

from datetime import date, datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..auth import get_now
from ..database import get_db
from ..schemas.slots import GridSlotRead, SlotsDayResponse, SlotsGridResponse
from ..services.booking import (
    BookingRepository,
    BookingRules,
    available_times,
    get_booking_rules,
    slot_grid,
)
from ..services.booking.availability import max_booking_date


router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/day", response_model=SlotsDayResponse)
def get_slots_day(
    salon_id: int,
    employee_id: int,
    service_ids: list[int] = Query(...),
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    rules: BookingRules = Depends(get_booking_rules),
):
    """Available start times for the services with one employee on a day."""
    result = available_times(
        BookingRepository(db),
        salon_id=salon_id,
        employee_id=employee_id,
        service_ids=service_ids,
        day=target_date,
        now=now,
        rules=rules,
    )
    if not result.ok:
        raise HTTPException(status_code=result.error.status_code, detail=result.error.message)

    return SlotsDayResponse(
        salon_id=salon_id,
        employee_id=employee_id,
        service_ids=service_ids,
        date=target_date,
        duration_minutes=result.duration_min,
        available_times=result.times,
        slot_step_minutes=rules.availability_step_minutes,
    )


@router.get("/grid", response_model=SlotsGridResponse)
def get_slots_grid(
    salon_id: int,
    employee_id: int,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    rules: BookingRules = Depends(get_booking_rules),
):
    """Grid of fixed-length cells from opening to closing time."""
    cells = slot_grid(BookingRepository(db), salon_id, employee_id, target_date, now, rules)
    if cells is None:
        raise HTTPException(status_code=404, detail="Salon or employee not found")

    return SlotsGridResponse(
        salon_id=salon_id,
        employee_id=employee_id,
        date=target_date,
        slots=[GridSlotRead.model_validate(c) for c in cells],
        slot_step_minutes=rules.grid_step_minutes,
        max_booking_date=max_booking_date(now.date(), rules),
    )
