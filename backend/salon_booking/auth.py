# backend/salon_booking/auth.py
"""
Request-scoped dependencies: current user, clock and page cache.

Authentication happens in the gateway; it forwards the resolved user id in
the X-User-ID header. The backend only looks the user up.
"""

from datetime import datetime
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .database import get_db
from .models import Users
from .redis_client import redis_client


def get_current_user(
    x_user_id: Optional[int] = Header(None, alias="X-User-ID"),
    db: Session = Depends(get_db),
) -> Optional[Users]:
    if x_user_id is None:
        return None
    return db.get(Users, x_user_id)


def get_now() -> datetime:
    return datetime.now()


def get_cache():
    return redis_client
