# backend/salon_booking/services/booking/config.py
"""
Booking rules for validation and slot generation.
"""

from dataclasses import dataclass
from functools import lru_cache

from ...config import settings
from .duration import time_string_to_minutes

ALLOWED_STEPS = (5, 10, 15, 30, 60)


@dataclass(frozen=True)
class BookingRules:
    """
    Tunables of the booking core.

    Attributes:
        horizon_months: How many calendar months ahead a booking may be made
        availability_step_minutes: Step for available-times queries
        grid_step_minutes: Step for the UI slot grid
        default_opening_minutes: Opening time used when the salon has none
        default_closing_minutes: Closing time used when the salon has none
        fallback_window_minutes: Window length used when closing <= opening
        max_attempts: Attempts for the transactional write
        backoff_seconds: Base delay between attempts (doubled each time)
    """
    horizon_months: int = 1
    availability_step_minutes: int = 15
    grid_step_minutes: int = 30
    default_opening_minutes: int = 9 * 60
    default_closing_minutes: int = 17 * 60
    fallback_window_minutes: int = 8 * 60
    max_attempts: int = 3
    backoff_seconds: float = 0.1

    def __post_init__(self):
        for name in ("availability_step_minutes", "grid_step_minutes"):
            step = getattr(self, name)
            if step not in ALLOWED_STEPS:
                raise ValueError(f"{name} must be one of {ALLOWED_STEPS}, got {step}")
        if self.horizon_months < 1:
            raise ValueError(f"horizon_months must be >= 1, got {self.horizon_months}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")


@lru_cache
def get_booking_rules() -> BookingRules:
    """Booking rules built from application settings (singleton)."""
    return BookingRules(
        horizon_months=settings.booking_horizon_months,
        availability_step_minutes=settings.availability_step_minutes,
        grid_step_minutes=settings.grid_step_minutes,
        default_opening_minutes=time_string_to_minutes(settings.default_opening_time),
        default_closing_minutes=time_string_to_minutes(settings.default_closing_time),
        fallback_window_minutes=settings.fallback_window_minutes,
        max_attempts=settings.transaction_max_attempts,
        backoff_seconds=settings.transaction_backoff_seconds,
    )
