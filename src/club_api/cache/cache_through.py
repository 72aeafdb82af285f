"""
Read-through cache for one collection, with invalidation on writes.

The cache is never allowed to fail a request: a failing get is a miss, a
failing set or delete is logged and ignored. Errors from `fetch` are the
caller's and propagate unchanged.

There is no locking between a miss-triggered fetch and an invalidation. A
fetch that started before a write can store the pre-write list after the
write invalidated the key; the stale entry then lives until its TTL runs out.
"""
import logging
from typing import Any, Awaitable, Callable

from .backends import CacheBackend

logger = logging.getLogger(__name__)


class CachedCollection:
    """
    One cache key holding a whole collection.

    Args:
        cache: the key-value backend
        key: cache key, e.g. "sports"
        ttl: lifetime of a written entry in seconds (fixed, not sliding)
        fetch: coroutine function loading the collection from the store
    """

    def __init__(self, cache: CacheBackend, key: str, ttl: int, fetch: Callable[[], Awaitable[Any]]):
        self.cache = cache
        self.key = key
        self.ttl = ttl
        self.fetch = fetch

    async def _safe_get(self) -> Any | None:
        try:
            return await self.cache.get(self.key)
        except Exception as exc:
            logger.warning("cache.get.failed", extra={"cache_key": self.key, "error": str(exc)})
            return None

    async def get(self) -> Any:
        cached = await self._safe_get()
        if cached is not None:
            logger.debug("cache.hit", extra={"cache_key": self.key})
            return cached

        logger.debug("cache.miss", extra={"cache_key": self.key})
        data = await self.fetch()

        try:
            await self.cache.set(self.key, data, self.ttl)
        except Exception as exc:
            logger.warning("cache.set.failed", extra={"cache_key": self.key, "error": str(exc)})

        return data

    async def invalidate(self) -> None:
        try:
            await self.cache.delete(self.key)
            logger.debug("cache.invalidated", extra={"cache_key": self.key})
        except Exception as exc:
            logger.warning("cache.delete.failed", extra={"cache_key": self.key, "error": str(exc)})

    async def refresh(self) -> Any:
        """Drop the entry and load it again from the store."""
        await self.invalidate()
        return await self.get()
