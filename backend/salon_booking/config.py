# backend/salon_booking/config.py

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/salon.db"
    redis_url: Optional[str] = None
    log_level: str = "INFO"

    # Booking rules
    booking_horizon_months: int = 1
    availability_step_minutes: int = 15
    grid_step_minutes: int = 30
    default_opening_time: str = "09:00"
    default_closing_time: str = "17:00"
    fallback_window_minutes: int = 8 * 60

    # Transactional write retries
    transaction_max_attempts: int = 3
    transaction_backoff_seconds: float = 0.1

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # relative path -> absolute, anchored at the repository root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
