# backend/salon_booking/services/booking/repository.py
"""
Data access for the booking core.

Every method reads current database state; nothing is cached between calls.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import BookingServices, Bookings, Employees, Salons, Services, Users


def _with_services():
    return selectinload(Bookings.booking_services).joinedload(BookingServices.service)


class BookingRepository:
    """Session-bound queries used by validation, availability and the transaction."""

    def __init__(self, db: Session):
        self.db = db

    # ── Read ─────────────────────────────────────────────────────────────

    def get_salon(self, salon_id: int) -> Optional[Salons]:
        """Salon with its employees and services."""
        return (
            self.db.query(Salons)
            .options(selectinload(Salons.employees), selectinload(Salons.services))
            .filter(Salons.id == salon_id)
            .first()
        )

    def get_user(self, user_id: int) -> Optional[Users]:
        return self.db.get(Users, user_id)

    def get_employee_bookings(
        self,
        employee_id: int,
        start: datetime,
        end: datetime,
    ) -> list[Bookings]:
        """Bookings of an employee starting in [start, end), with services, by start."""
        return (
            self.db.query(Bookings)
            .options(_with_services())
            .filter(
                Bookings.employee_id == employee_id,
                Bookings.date >= start,
                Bookings.date < end,
            )
            .order_by(Bookings.date)
            .all()
        )

    def get_salon_bookings(
        self,
        salon_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Bookings]:
        """Bookings of a salon with services, employee and customer (inclusive bounds)."""
        query = (
            self.db.query(Bookings)
            .options(
                _with_services(),
                joinedload(Bookings.employee),
                joinedload(Bookings.customer),
            )
            .filter(Bookings.salon_id == salon_id)
        )
        if start is not None:
            query = query.filter(Bookings.date >= start)
        if end is not None:
            query = query.filter(Bookings.date <= end)
        return query.order_by(Bookings.date).all()

    def get_next_booking_for_customer(
        self,
        customer_id: int,
        now: datetime,
    ) -> Optional[Bookings]:
        return (
            self.db.query(Bookings)
            .options(
                _with_services(),
                joinedload(Bookings.salon),
                joinedload(Bookings.employee),
            )
            .filter(Bookings.customer_id == customer_id, Bookings.date >= now)
            .order_by(Bookings.date)
            .first()
        )

    def get_booking(self, booking_id: int) -> Optional[Bookings]:
        return (
            self.db.query(Bookings)
            .options(
                selectinload(Bookings.booking_services)
                .joinedload(BookingServices.service)
                .joinedload(Services.category),
                joinedload(Bookings.salon),
                joinedload(Bookings.employee),
                joinedload(Bookings.customer),
            )
            .filter(Bookings.id == booking_id)
            .first()
        )

    # ── Write ────────────────────────────────────────────────────────────

    def lock_employee(self, employee_id: int) -> None:
        """
        Serialize booking writes for one employee.

        On SQLite the transaction already holds the write lock (BEGIN IMMEDIATE)
        and FOR UPDATE is not supported, so this is a no-op there.
        """
        if self.db.get_bind().dialect.name == "sqlite":
            return
        (
            self.db.query(Employees.id)
            .filter(Employees.id == employee_id)
            .with_for_update()
            .one_or_none()
        )

    def add_booking(
        self,
        salon_id: int,
        employee_id: int,
        customer_id: int,
        start: datetime,
        service_ids: list[int],
    ) -> Bookings:
        """Insert a booking plus one join row per service and flush."""
        booking = Bookings(
            date=start,
            salon_id=salon_id,
            employee_id=employee_id,
            customer_id=customer_id,
            booking_services=[BookingServices(service_id=sid) for sid in service_ids],
        )
        self.db.add(booking)
        self.db.flush()
        return booking
