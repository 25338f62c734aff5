from __future__ import annotations

import logging
import os

import redis

from rms.application.ports.cache import CacheStore, NullCacheStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 1.0


def redis_url() -> str | None:
    return os.getenv("REDIS_URL", "").strip() or None


def menu_cache_ttl_seconds() -> int:
    return int(os.getenv("MENU_CACHE_TTL_SECONDS", "300"))


class RedisCacheStore(CacheStore):
    """Cache store over one Redis connection pool.

    Timeouts are short; callers treat any command error as a miss.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> RedisCacheStore:
        return cls(
            redis.Redis.from_url(
                url,
                socket_connect_timeout=timeout_seconds,
                socket_timeout=timeout_seconds,
                decode_responses=True,
            )
        )

    def get(self, key: str) -> str | None:
        return self._client.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._client.set(name=key, value=value, ex=ttl_seconds)

    def incr(self, key: str) -> int:
        return int(self._client.incr(key))

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def close(self) -> None:
        self._client.close()


def build_cache_store() -> CacheStore:
    url = redis_url()
    if url is None:
        logger.info("menu_cache_disabled")
        return NullCacheStore()
    return RedisCacheStore.from_url(url)
