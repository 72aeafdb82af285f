import json
from unittest.mock import AsyncMock

import pytest

from club_api.cache.backends import MemoryCache, RedisCache, build_cache
from club_api.tests.test_fixtures.database import make_test_settings


def _redis_cache() -> tuple[RedisCache, AsyncMock]:
    client = AsyncMock()
    return RedisCache("redis://localhost:6379/0", client=client), client


@pytest.mark.asyncio
class TestRedisCache:

    async def test_set_writes_json_with_expiry(self):
        cache, client = _redis_cache()

        await cache.set("sports", [{"id": 1, "name": "Tennis"}], ttl=60)

        client.set.assert_awaited_once_with("club:sports", json.dumps([{"id": 1, "name": "Tennis"}]), ex=60)

    async def test_get_decodes_json(self):
        cache, client = _redis_cache()
        client.get.return_value = '[{"id": 1}]'

        assert await cache.get("sports") == [{"id": 1}]
        client.get.assert_awaited_once_with("club:sports")

    async def test_get_missing_key_is_none(self):
        cache, client = _redis_cache()
        client.get.return_value = None

        assert await cache.get("sports") is None

    async def test_delete_uses_prefixed_key(self):
        cache, client = _redis_cache()

        await cache.delete("sports")

        client.delete.assert_awaited_once_with("club:sports")


class TestBuildCache:

    def test_memory_backend_by_default(self):
        assert isinstance(build_cache(make_test_settings()), MemoryCache)

    def test_redis_backend_when_configured(self):
        cache = build_cache(make_test_settings(CACHE_BACKEND="REDIS", REDIS_URL="redis://cache:6379/1"))

        assert isinstance(cache, RedisCache)
        assert cache.redis_url == "redis://cache:6379/1"
