# backend/salon_booking/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from datetime import date
from pydantic import BaseModel, Field


class SlotsDayResponse(BaseModel):
    """Available start times for one employee and a set of services."""
    salon_id: int
    employee_id: int
    service_ids: list[int]
    date: date
    duration_minutes: int
    available_times: list[str] = Field(description='Start times as "HH:MM", ascending')
    slot_step_minutes: int


class GridSlotRead(BaseModel):
    """One cell of the UI grid."""
    time: str  # "HH:MM"
    available: bool

    model_config = {"from_attributes": True}


class SlotsGridResponse(BaseModel):
    """Fixed-step grid from opening to closing time."""
    salon_id: int
    employee_id: int
    date: date
    slots: list[GridSlotRead]
    slot_step_minutes: int
    max_booking_date: date
