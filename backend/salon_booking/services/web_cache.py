"""Invalidation of gateway page caches affected by a new booking."""

import logging

from ..redis_client import redis_client

logger = logging.getLogger(__name__)

_SALON_KEY_PREFIX = "cache:web:salon"
_USER_KEY_PREFIX = "cache:web:user"
_DASHBOARD_KEY_PREFIX = "cache:web:dashboard"


def booking_page_keys(salon_id: int, customer_id: int) -> list[str]:
    return [
        f"{_SALON_KEY_PREFIX}:{salon_id}",
        f"{_USER_KEY_PREFIX}:{customer_id}",
        f"{_DASHBOARD_KEY_PREFIX}:{salon_id}",
    ]


def invalidate_booking_pages(salon_id: int, customer_id: int, redis=None) -> int:
    """
    Drop cached salon, customer and dashboard pages.

    Returns the number of deleted keys. Cache errors are logged and swallowed:
    the booking is already committed.
    """
    client = redis if redis is not None else redis_client
    if client is None:
        return 0
    try:
        return client.delete(*booking_page_keys(salon_id, customer_id))
    except Exception:
        logger.exception(
            "Failed to invalidate page cache for salon=%s customer=%s",
            salon_id, customer_id,
        )
        return 0
