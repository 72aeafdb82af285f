"""
Key-value cache backends.

Both backends expose the same async contract (get / set / delete); any call
may raise, and callers decide whether a failure matters.
"""
import copy
import json
import time
import logging
from typing import Any, Callable, NamedTuple, Protocol

import redis.asyncio as redis
from cachetools import TLRUCache

logger = logging.getLogger(__name__)


class CacheBackend(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl: int) -> None: ...

    async def delete(self, key: str) -> None: ...


# =================================================================================================================
# In-process cache
# =================================================================================================================

class _Entry(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(key, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class MemoryCache:
    """
    Process-local cache on cachetools.TLRUCache.

    Every entry carries its own TTL. `timer` defaults to time.monotonic; tests
    pass a fake clock to move past expiry without sleeping.
    """

    def __init__(self, maxsize: int = 128, timer: Callable[[], float] = time.monotonic):
        self._store = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)

    async def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        # hand out a copy so callers cannot mutate the cached value in place
        return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        self._store[key] = _Entry(copy.deepcopy(value), ttl)

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    async def close(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


# =================================================================================================================
# Redis
# =================================================================================================================

class RedisCache:
    """Redis-backed cache; values are stored as JSON with `SET key value EX ttl`."""

    def __init__(self, redis_url: str, *, prefix: str = "club:", client: redis.Redis | None = None):
        self.redis_url = redis_url
        self.prefix = prefix
        self.redis = client or redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def get(self, key: str) -> Any | None:
        raw = await self.redis.get(self._key(key))
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        # dates and decimals are written as strings
        await self.redis.set(self._key(key), json.dumps(value, default=str), ex=ttl)

    async def delete(self, key: str) -> None:
        await self.redis.delete(self._key(key))

    async def close(self) -> None:
        await self.redis.aclose()
        logger.info("cache.redis.closed")


def build_cache(settings) -> MemoryCache | RedisCache:
    """Pick the backend named by settings.CACHE_BACKEND."""
    if settings.CACHE_BACKEND == "redis":
        logger.info("cache.backend.selected", extra={"backend": "redis"})
        return RedisCache(settings.REDIS_URL)
    logger.info("cache.backend.selected", extra={"backend": "memory"})
    return MemoryCache(maxsize=settings.CACHE_MAX_ENTRIES)
