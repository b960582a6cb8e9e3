from datetime import datetime, time, timedelta

from conftest import NOW, TOMORROW, add_booking

from salon_booking.models import Users
from salon_booking.services.booking import list_salon_bookings, next_upcoming_booking
from salon_booking.services.booking.repository import BookingRepository


def at(hour, minute=0, day=TOMORROW):
    return datetime.combine(day, time(hour, minute))


def test_list_salon_bookings_in_range(db, data):
    early = add_booking(db, data, at(9), [data.cut_id])
    late = add_booking(db, data, at(15), [data.color_id], employee_id=data.colleague_id)
    add_booking(db, data, at(9, day=TOMORROW + timedelta(days=3)), [data.cut_id])

    repo = BookingRepository(db)
    bookings = list_salon_bookings(repo, data.salon_id, at(0), at(23, 59))

    assert [b.id for b in bookings] == [early, late]
    assert bookings[1].employee.name == "Jordan"
    assert bookings[0].customer.email == "customer@test.com"
    assert [s.name for s in bookings[1].services] == ["Color"]


def test_list_salon_bookings_bounds_are_inclusive(db, data):
    booking_id = add_booking(db, data, at(12), [data.cut_id])
    repo = BookingRepository(db)

    assert [b.id for b in list_salon_bookings(repo, data.salon_id, at(12), at(12))] == [booking_id]
    assert len(list_salon_bookings(repo, data.salon_id)) == 1
    assert list_salon_bookings(repo, data.other_salon_id) == []


def test_next_upcoming_booking(db, data):
    add_booking(db, data, NOW - timedelta(hours=2), [data.cut_id])
    later = add_booking(db, data, at(16), [data.cut_id])
    sooner = add_booking(db, data, at(10), [data.blow_dry_id], employee_id=data.colleague_id)

    repo = BookingRepository(db)
    customer = db.get(Users, data.customer_id)
    booking = next_upcoming_booking(repo, customer, NOW)

    assert booking.id == sooner
    assert booking.salon.name == "Main Street Salon"
    assert booking.id != later


def test_next_upcoming_booking_only_for_customers(db, data):
    add_booking(db, data, at(10), [data.cut_id])
    repo = BookingRepository(db)

    assert next_upcoming_booking(repo, None, NOW) is None
    assert next_upcoming_booking(repo, db.get(Users, data.owner_id), NOW) is None
