# backend/salon_booking/services/booking/duration.py
"""
Time-of-day helpers.

Service durations and salon operating hours are stored as time-of-day values
where only hour and minute matter. They are always read in UTC terms: a naive
value is taken as already UTC, an aware one is converted to UTC first. Reading
them any other way shifts every duration by the host's UTC offset.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Iterable, Optional, Union

TimeValue = Union[time, datetime]

MINUTES_PER_DAY = 24 * 60

_EPOCH = date(1970, 1, 1)
_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{1,2})\s*$")


def _as_utc(value: TimeValue) -> TimeValue:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value
    if value.tzinfo is not None and value.utcoffset() is not None:
        anchored = datetime.combine(_EPOCH, value)
        return anchored.astimezone(timezone.utc).timetz()
    return value


def to_minutes(value: TimeValue) -> int:
    """Minutes since midnight of a stored time-of-day value (UTC reading)."""
    value = _as_utc(value)
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> time:
    """Build a minute-precision time-of-day value from minutes since midnight."""
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise ValueError(f"minutes must be in [0, {MINUTES_PER_DAY}), got {minutes}")
    return time(minutes // 60, minutes % 60)


def format_human(minutes: int) -> str:
    """
    Render a duration for people.

    45 -> "45 min", 60 -> "1h", 90 -> "1h 30min"
    """
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins:
        return f"{hours}h {mins}min"
    return f"{hours}h"


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_time_string(value: TimeValue) -> str:
    """Format a stored time-of-day value as "HH:MM" (for time inputs)."""
    return minutes_to_time_str(to_minutes(value))


def parse_hour_minute(value: str) -> Optional[tuple[int, int]]:
    """
    Parse "HH:MM" into (hour, minute).

    Returns None unless hour is in [0, 23] and minute in [0, 59].
    """
    match = _TIME_RE.match(value or "")
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def time_string_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight. Raises ValueError if malformed."""
    parsed = parse_hour_minute(value)
    if parsed is None:
        raise ValueError(f"Invalid time string: {value!r}")
    hour, minute = parsed
    return hour * 60 + minute


def parse_time_string(value: str) -> time:
    """Convert "HH:MM" to a time-of-day value for storage."""
    return from_minutes(time_string_to_minutes(value))


def minute_of_day(instant: datetime) -> int:
    """Minutes since midnight of a salon-local instant."""
    return instant.hour * 60 + instant.minute


def total_minutes(services: Iterable) -> int:
    """Sum of the durations of the given services."""
    return sum(to_minutes(service.duration) for service in services)
