from datetime import date, datetime, time, timedelta

import pytest

from conftest import NOW, TOMORROW, add_booking

from salon_booking.models import Bookings, Employees, Salons, Services
from salon_booking.services.booking.errors import ErrorKind
from salon_booking.services.booking.repository import BookingRepository
from salon_booking.services.booking.validator import (
    BookingRequest,
    ValidatedBooking,
    validate_booking,
)


@pytest.fixture
def repo(db):
    return BookingRepository(db)


def request_for(data, when="10:00", day=TOMORROW, services=None, employee_id=None, salon_id=None):
    return BookingRequest(
        salon_id=salon_id or data.salon_id,
        employee_id=employee_id or data.employee_id,
        service_ids=services if services is not None else [data.cut_id],
        date=day,
        time=when,
    )


def test_valid_booking(repo, data, rules):
    result = validate_booking(repo, request_for(data), NOW, rules)

    assert isinstance(result, ValidatedBooking)
    assert result.start == datetime.combine(TOMORROW, time(10))
    assert result.end == datetime.combine(TOMORROW, time(10, 30))
    assert [s.id for s in result.services] == [data.cut_id]


def test_duration_is_sum_of_services(repo, data, rules):
    result = validate_booking(repo, request_for(data, services=[data.cut_id, data.blow_dry_id]), NOW, rules)

    assert result.duration_min == 75
    assert result.end == result.start + timedelta(minutes=75)


def test_date_time_component_is_ignored(repo, data, rules):
    req = request_for(data, day=datetime.combine(TOMORROW, time(23, 15)))
    result = validate_booking(repo, req, NOW, rules)
    assert result.start == datetime.combine(TOMORROW, time(10))


@pytest.mark.parametrize("field, target", [
    ("salon", "salon"),
    ("employee", "employee"),
    ("foreign_service", "service"),
    ("unknown_service", "service"),
    ("duplicate_service", "service"),
    ("no_services", "service"),
])
def test_not_found(repo, data, rules, field, target):
    req = {
        "salon": request_for(data, salon_id=999),
        "employee": request_for(data, employee_id=data.foreign_employee_id),
        "foreign_service": request_for(data, services=[data.cut_id, data.foreign_service_id]),
        "unknown_service": request_for(data, services=[999]),
        "duplicate_service": request_for(data, services=[data.cut_id, data.cut_id]),
        "no_services": request_for(data, services=[]),
    }[field]

    error = validate_booking(repo, req, NOW, rules)

    assert error.kind is ErrorKind.NOT_FOUND
    assert error.target == target


def test_not_found_messages(repo, data, rules):
    assert validate_booking(repo, request_for(data, salon_id=999), NOW, rules).message == "Salon not found"
    assert (
        validate_booking(repo, request_for(data, services=[999]), NOW, rules).message
        == "One or more services not found or do not belong to this salon"
    )


@pytest.mark.parametrize("when", ["24:00", "10:60", "ten", "", "10"])
def test_invalid_time(repo, data, rules, when):
    error = validate_booking(repo, request_for(data, when=when), NOW, rules)
    assert error.kind is ErrorKind.INVALID_INPUT
    assert error.message == "Invalid time format"


def test_checks_run_in_order(repo, data, rules):
    # Unknown salon wins over a malformed time and a past date
    req = request_for(data, salon_id=999, when="99:99", day=date(2020, 1, 1))
    assert validate_booking(repo, req, NOW, rules).target == "salon"

    # Malformed time wins over a past date
    req = request_for(data, when="99:99", day=date(2020, 1, 1))
    assert validate_booking(repo, req, NOW, rules).kind is ErrorKind.INVALID_INPUT


def test_start_exactly_now_is_accepted(repo, data, rules):
    now = datetime.combine(TOMORROW, time(10, 0))
    assert isinstance(validate_booking(repo, request_for(data), now, rules), ValidatedBooking)


def test_start_one_second_in_the_past_is_rejected(repo, data, rules):
    now = datetime.combine(TOMORROW, time(10, 0, 1))
    error = validate_booking(repo, request_for(data), now, rules)
    assert error.kind is ErrorKind.PAST_BOOKING
    assert error.message == "Cannot create bookings in the past"


def test_booking_on_last_day_of_horizon(repo, data, rules):
    last_day = date(2026, 4, 10)
    assert isinstance(validate_booking(repo, request_for(data, day=last_day, when="17:30"), NOW, rules), ValidatedBooking)

    error = validate_booking(repo, request_for(data, day=last_day + timedelta(days=1)), NOW, rules)
    assert error.kind is ErrorKind.TOO_FAR_AHEAD
    assert error.message == "Bookings can only be made up to 1 month in advance"


def test_booking_ending_at_closing_time_is_accepted(repo, data, rules):
    result = validate_booking(repo, request_for(data, when="17:30"), NOW, rules)
    assert result.end == datetime.combine(TOMORROW, time(18))


def test_booking_ending_after_closing_time_is_rejected(repo, data, rules):
    error = validate_booking(repo, request_for(data, when="17:31"), NOW, rules)
    assert error.is_operating_hours
    assert error.kind is ErrorKind.EXCEEDS_CLOSING_TIME
    assert error.message == "Selected time and services would exceed salon closing time"


@pytest.mark.parametrize("when", ["08:59", "18:00", "20:00"])
def test_start_outside_operating_hours(repo, data, rules, when):
    error = validate_booking(repo, request_for(data, when=when), NOW, rules)
    assert error.kind is ErrorKind.OUTSIDE_OPERATING_HOURS
    assert error.message == "Booking time is outside salon operating hours"


def test_operating_hours_skipped_when_unset(db, repo, data, rules):
    salon = db.get(Salons, data.other_salon_id)
    service = Services(salon_id=salon.id, name="Late Cut", price=10, duration=time(0, 30))
    db.add(service)
    db.commit()

    req = BookingRequest(
        salon_id=salon.id,
        employee_id=data.foreign_employee_id,
        service_ids=[service.id],
        date=TOMORROW,
        time="22:00",
    )
    result = validate_booking(repo, req, NOW, rules)
    assert isinstance(result, ValidatedBooking)


def test_slot_taken_scenario(db, repo, data, rules):
    add_booking(db, data, datetime.combine(TOMORROW, time(14)), [data.color_id])

    error = validate_booking(repo, request_for(data, when="13:45"), NOW, rules)
    assert error.kind is ErrorKind.SLOT_TAKEN
    assert error.message == "This time slot is already booked for the selected employee"

    assert isinstance(validate_booking(repo, request_for(data, when="15:00"), NOW, rules), ValidatedBooking)
    assert isinstance(validate_booking(repo, request_for(data, when="13:30"), NOW, rules), ValidatedBooking)


def test_adjacent_booking_is_not_a_conflict(db, repo, data, rules):
    add_booking(db, data, datetime.combine(TOMORROW, time(10)), [data.blow_dry_id])  # [10:00, 10:45)

    assert isinstance(validate_booking(repo, request_for(data, when="10:45"), NOW, rules), ValidatedBooking)
    assert validate_booking(repo, request_for(data, when="10:30"), NOW, rules).kind is ErrorKind.SLOT_TAKEN
    # Proposed booking fully contains the existing one
    req = request_for(data, when="09:45", services=[data.color_id])
    assert validate_booking(repo, req, NOW, rules).kind is ErrorKind.SLOT_TAKEN


def test_other_employee_is_free(db, repo, data, rules):
    add_booking(db, data, datetime.combine(TOMORROW, time(10)), [data.cut_id])
    req = request_for(data, employee_id=data.colleague_id)
    assert isinstance(validate_booking(repo, req, NOW, rules), ValidatedBooking)


def test_validation_is_idempotent(db, repo, data, rules):
    add_booking(db, data, datetime.combine(TOMORROW, time(14)), [data.color_id])

    for when in ("10:00", "14:15", "17:45", "bad"):
        req = request_for(data, when=when)
        assert validate_booking(repo, req, NOW, rules) == validate_booking(repo, req, NOW, rules)


def test_validation_does_not_write(db, repo, data, rules):
    validate_booking(repo, request_for(data), NOW, rules)
    assert db.query(Bookings).count() == 0
    assert db.get(Employees, data.employee_id) is not None
