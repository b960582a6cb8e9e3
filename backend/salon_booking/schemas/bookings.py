# backend/salon_booking/schemas/bookings.py

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from ..services.booking.conflicts import booking_end
from ..services.booking.duration import format_human, to_minutes


class BookingCreate(BaseModel):
    salon_id: int
    employee_id: int
    service_ids: list[int]
    date: date
    time: str = Field(description="Start time in HH:MM format")


class CategoryRead(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class ServiceRead(BaseModel):
    id: int
    name: str
    price: Decimal
    duration_minutes: int
    duration_label: str
    category: Optional[CategoryRead] = None

    @classmethod
    def from_service(cls, service) -> "ServiceRead":
        minutes = to_minutes(service.duration)
        category = service.category
        return cls(
            id=service.id,
            name=service.name,
            price=service.price,
            duration_minutes=minutes,
            duration_label=format_human(minutes),
            category=CategoryRead.model_validate(category) if category else None,
        )


class EmployeeRead(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class SalonSummary(BaseModel):
    id: int
    name: str
    currency: str

    model_config = {"from_attributes": True}


class CustomerSummary(BaseModel):
    id: int
    name: str
    email: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingRead(BaseModel):
    id: int
    date: datetime
    end: datetime
    duration_minutes: int

    salon_id: int
    employee_id: int
    customer_id: int

    salon: Optional[SalonSummary] = None
    employee: Optional[EmployeeRead] = None
    customer: Optional[CustomerSummary] = None
    services: list[ServiceRead] = []

    @classmethod
    def from_booking(cls, booking) -> "BookingRead":
        services = booking.services
        end = booking_end(booking.date, services)
        return cls(
            id=booking.id,
            date=booking.date,
            end=end,
            duration_minutes=int((end - booking.date).total_seconds() // 60),
            salon_id=booking.salon_id,
            employee_id=booking.employee_id,
            customer_id=booking.customer_id,
            salon=SalonSummary.model_validate(booking.salon) if booking.salon else None,
            employee=EmployeeRead.model_validate(booking.employee) if booking.employee else None,
            customer=CustomerSummary.model_validate(booking.customer) if booking.customer else None,
            services=[ServiceRead.from_service(s) for s in services],
        )


class BookingResult(BaseModel):
    ok: bool
    booking: Optional[BookingRead] = None
    error: Optional[str] = None


class UpcomingBookingResponse(BaseModel):
    ok: bool = True
    booking: Optional[BookingRead] = None
