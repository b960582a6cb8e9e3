from datetime import datetime, time, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon_booking.database import create_db_engine, init_db
from salon_booking.models import (
    BookingServices,
    Bookings,
    Employees,
    Salons,
    ServiceCategories,
    Services,
    Users,
)
from salon_booking.services.booking import BookingRules

# Tuesday morning; the booking horizon runs to 2026-04-10
NOW = datetime(2026, 3, 10, 8, 0)
TOMORROW = NOW.date() + timedelta(days=1)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def rules():
    return BookingRules(backoff_seconds=0)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def seed_salon(db) -> SimpleNamespace:
    """Salon open 09:00-18:00 with two employees, three services and users."""
    owner = Users(name="Owner", email="owner@test.com", role="OWNER")
    customer = Users(name="Customer", email="customer@test.com", role="CUSTOMER")
    db.add_all([owner, customer])
    db.flush()

    salon = Salons(
        name="Main Street Salon",
        owner_id=owner.id,
        currency="EUR",
        opening_time=time(9, 0),
        closing_time=time(18, 0),
    )
    other_salon = Salons(name="Other Salon", owner_id=owner.id)
    db.add_all([salon, other_salon])
    db.flush()

    category = ServiceCategories(salon_id=salon.id, name="Hair")
    db.add(category)
    db.flush()

    employee = Employees(salon_id=salon.id, name="Alex")
    colleague = Employees(salon_id=salon.id, name="Jordan")
    foreign_employee = Employees(salon_id=other_salon.id, name="Sam")
    cut = Services(salon_id=salon.id, category_id=category.id, name="Haircut",
                   price=Decimal("30.00"), duration=time(0, 30))
    blow_dry = Services(salon_id=salon.id, category_id=category.id, name="Blow Dry",
                        price=Decimal("20.00"), duration=time(0, 45))
    color = Services(salon_id=salon.id, category_id=category.id, name="Color",
                     price=Decimal("80.00"), duration=time(1, 0))
    foreign_service = Services(salon_id=other_salon.id, name="Massage",
                               price=Decimal("50.00"), duration=time(0, 30))
    db.add_all([employee, colleague, foreign_employee, cut, blow_dry, color, foreign_service])
    db.flush()

    # Read ids before commit so no transaction stays open on the shared connection
    ids = SimpleNamespace(
        owner_id=owner.id,
        customer_id=customer.id,
        salon_id=salon.id,
        other_salon_id=other_salon.id,
        employee_id=employee.id,
        colleague_id=colleague.id,
        foreign_employee_id=foreign_employee.id,
        cut_id=cut.id,
        blow_dry_id=blow_dry.id,
        color_id=color.id,
        foreign_service_id=foreign_service.id,
    )
    db.commit()
    return ids


@pytest.fixture
def data(db):
    return seed_salon(db)


def add_booking(db, data, start: datetime, service_ids, employee_id=None) -> int:
    """Insert a booking directly, bypassing validation."""
    booking = Bookings(
        date=start,
        salon_id=data.salon_id,
        employee_id=employee_id or data.employee_id,
        customer_id=data.customer_id,
        booking_services=[BookingServices(service_id=sid) for sid in service_ids],
    )
    db.add(booking)
    db.flush()
    booking_id = booking.id
    db.commit()
    return booking_id


class RecordingCache:
    """Stands in for the Redis page cache; remembers deleted keys."""

    def __init__(self, fail: bool = False):
        self.deleted: list[str] = []
        self.fail = fail

    def delete(self, *keys):
        if self.fail:
            raise ConnectionError("cache down")
        self.deleted.extend(keys)
        return len(keys)


@pytest.fixture
def cache():
    return RecordingCache()
