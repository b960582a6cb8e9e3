# backend/salon_booking/services/booking/availability.py
"""
Available start times for an employee on a day.

A slot start is valid when:
- the whole service fits before closing time
- it is not in the past (only matters for today)
- the day lies inside the rolling booking horizon
- [start, start + duration) overlaps none of the employee's bookings

Overlap is decided by conflicts.find_conflict, the same check the booking
flow runs, so preview and booking never disagree.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Sequence

from dateutil.relativedelta import relativedelta

from .config import BookingRules, get_booking_rules
from .conflicts import conflict_window, find_conflict
from .duration import MINUTES_PER_DAY, minutes_to_time_str, to_minutes, total_minutes
from .errors import BookingError
from .lookup import resolve_selection

logger = logging.getLogger(__name__)


# ── Calendar rules ───────────────────────────────────────────────────────


def operating_window(salon, rules: BookingRules | None = None) -> tuple[int, int]:
    """
    (opening, closing) of a salon in minutes since midnight.

    Unset hours fall back to the defaults. If closing is not after opening,
    the window becomes opening + fallback_window_minutes (capped at midnight).
    """
    rules = rules or get_booking_rules()
    opening = (
        to_minutes(salon.opening_time)
        if salon.opening_time is not None
        else rules.default_opening_minutes
    )
    closing = (
        to_minutes(salon.closing_time)
        if salon.closing_time is not None
        else rules.default_closing_minutes
    )
    if closing <= opening:
        closing = min(opening + rules.fallback_window_minutes, MINUTES_PER_DAY)
    return opening, closing


def max_booking_date(today: date, rules: BookingRules | None = None) -> date:
    """Last bookable day: today + horizon in calendar months (clamped to month end)."""
    rules = rules or get_booking_rules()
    return today + relativedelta(months=rules.horizon_months)


def is_within_horizon(day: date, today: date, rules: BookingRules | None = None) -> bool:
    """today <= day <= max_booking_date(today)."""
    return today <= day <= max_booking_date(today, rules)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, datetime.min.time())
    return start, start + timedelta(days=1)


# ── Slot generation ──────────────────────────────────────────────────────


class AvailableSlots:
    """
    Lazy, finite sequence of valid slot starts (minutes since midnight).

    Iterating again restarts the generation from opening time. Results come
    out in ascending order.
    """

    def __init__(
        self,
        day: date,
        opening: int,
        closing: int,
        duration_min: int,
        bookings: Sequence,
        now: datetime,
        step: int,
        rules: BookingRules | None = None,
    ):
        self.day = day
        self.opening = opening
        self.closing = closing
        self.duration_min = duration_min
        self.bookings = list(bookings)
        self.now = now
        self.step = step
        self.rules = rules or get_booking_rules()

    def __iter__(self) -> Iterator[int]:
        if not is_within_horizon(self.day, self.now.date(), self.rules):
            return

        day_start, _ = day_bounds(self.day)
        is_today = self.day == self.now.date()

        t = self.opening
        while t + self.duration_min <= self.closing:
            slot_start = day_start + timedelta(minutes=t)
            slot_end = slot_start + timedelta(minutes=self.duration_min)

            if not (is_today and slot_start < self.now):
                if not find_conflict(slot_start, slot_end, self.bookings).has_conflict:
                    yield t

            t += self.step

    def as_time_strings(self) -> list[str]:
        return [minutes_to_time_str(t) for t in self]


@dataclass
class AvailabilityResult:
    ok: bool
    times: list[str] = field(default_factory=list)
    duration_min: int = 0
    error: Optional[BookingError] = None


def _employee_day_bookings(repo, employee_id: int, day: date) -> list:
    start, end = day_bounds(day)
    window_start, window_end = conflict_window(start, end)
    return repo.get_employee_bookings(employee_id, window_start, window_end)


def available_times(
    repo,
    salon_id: int,
    employee_id: int,
    service_ids: list[int],
    day: date,
    now: datetime | None = None,
    rules: BookingRules | None = None,
) -> AvailabilityResult:
    """Valid start times ("HH:MM") for the given services with one employee."""
    rules = rules or get_booking_rules()
    now = now or datetime.now()

    selection = resolve_selection(repo, salon_id, employee_id, service_ids)
    if isinstance(selection, BookingError):
        return AvailabilityResult(ok=False, error=selection)

    duration_min = total_minutes(selection.services)
    opening, closing = operating_window(selection.salon, rules)
    bookings = _employee_day_bookings(repo, employee_id, day)

    slots = AvailableSlots(
        day=day,
        opening=opening,
        closing=closing,
        duration_min=duration_min,
        bookings=bookings,
        now=now,
        step=rules.availability_step_minutes,
        rules=rules,
    )
    return AvailabilityResult(ok=True, times=slots.as_time_strings(), duration_min=duration_min)


# ── UI grid ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GridSlot:
    time: str
    available: bool


def grid_slots(
    day: date,
    opening: int,
    closing: int,
    bookings: Sequence,
    now: datetime,
    rules: BookingRules | None = None,
) -> list[GridSlot]:
    """
    Fixed grid from opening to closing, each cell one grid step long.

    A cell is unavailable when it is in the past (today only), outside the
    booking horizon or overlapping a booking.
    """
    rules = rules or get_booking_rules()
    step = rules.grid_step_minutes
    day_start, _ = day_bounds(day)
    in_horizon = is_within_horizon(day, now.date(), rules)
    is_today = day == now.date()

    cells = []
    for t in range(opening, closing, step):
        cell_start = day_start + timedelta(minutes=t)
        cell_end = cell_start + timedelta(minutes=step)
        available = (
            in_horizon
            and not (is_today and cell_start < now)
            and not find_conflict(cell_start, cell_end, bookings).has_conflict
        )
        cells.append(GridSlot(time=minutes_to_time_str(t), available=available))
    return cells


def slot_grid(
    repo,
    salon_id: int,
    employee_id: int,
    day: date,
    now: datetime | None = None,
    rules: BookingRules | None = None,
) -> Optional[list[GridSlot]]:
    """Grid for one employee, or None if salon or employee is unknown."""
    rules = rules or get_booking_rules()
    now = now or datetime.now()

    salon = repo.get_salon(salon_id)
    if salon is None or not any(e.id == employee_id for e in salon.employees):
        return None

    opening, closing = operating_window(salon, rules)
    bookings = _employee_day_bookings(repo, employee_id, day)
    return grid_slots(day, opening, closing, bookings, now, rules)
