# backend/salon_booking/redis_client.py

from typing import Optional

from redis import Redis

from .config import settings


def create_redis_client(url: Optional[str]) -> Optional[Redis]:
    """Redis client for the web page cache, or None when no URL is configured."""
    if not url:
        return None
    return Redis.from_url(url, socket_timeout=2.0, decode_responses=True)


redis_client = create_redis_client(settings.redis_url)
