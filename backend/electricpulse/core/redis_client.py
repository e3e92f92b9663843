"""
ElectricPulse Redis Client
Short-lived response caching for polled endpoints. A cache outage degrades
to a miss; the caller falls back to the database.
"""
import json
from typing import Any, Optional

import redis

from electricpulse.core.config import settings
from electricpulse.core.logging import get_logger

log = get_logger(__name__)

_pool = redis.ConnectionPool.from_url(
    settings.REDIS_URL,
    decode_responses=True,
    socket_connect_timeout=1,
    socket_timeout=1,
)


def get_redis() -> redis.Redis:
    return redis.Redis(connection_pool=_pool)


class CacheManager:
    def __init__(self, prefix: str = "electricpulse"):
        self._r = get_redis()
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: str) -> Optional[Any]:
        try:
            val = self._r.get(self._key(key))
        except redis.RedisError as e:
            log.warning("cache_unavailable", op="get", key=key, error=str(e))
            return None
        if val is None:
            return None
        try:
            return json.loads(val)
        except (json.JSONDecodeError, TypeError):
            return val

    def set(self, key: str, value: Any, ttl: int = 300) -> None:
        try:
            self._r.setex(self._key(key), ttl, json.dumps(value, default=str))
        except redis.RedisError as e:
            log.warning("cache_unavailable", op="set", key=key, error=str(e))

    def delete(self, key: str) -> None:
        try:
            self._r.delete(self._key(key))
        except redis.RedisError as e:
            log.warning("cache_unavailable", op="delete", key=key, error=str(e))


cache = CacheManager()
