import json
import pytest
from unittest.mock import AsyncMock

from redis.exceptions import ConnectionError as RedisConnectionError

from infrastructure.cache import RedisCache


class TestRedisCache:
    @pytest.fixture
    def client(self):
        return AsyncMock()

    @pytest.fixture
    def cache(self, client):
        return RedisCache(client, key_prefix="test:", default_ttl=60)

    @pytest.mark.asyncio
    async def test_get_decodes_json(self, cache, client):
        client.get.return_value = json.dumps({"name": "Push Up"})

        assert await cache.get("exercises:id:1") == {"name": "Push Up"}
        client.get.assert_awaited_once_with("test:exercises:id:1")

    @pytest.mark.asyncio
    async def test_get_miss(self, cache, client):
        client.get.return_value = None

        assert await cache.get("missing") is None

    @pytest.mark.asyncio
    async def test_set_with_and_without_ttl(self, cache, client):
        await cache.set("a", [1, 2], ttl=30)
        client.setex.assert_awaited_once_with("test:a", 30, "[1, 2]")

        await cache.set("b", {"x": 1})
        client.set.assert_awaited_once_with("test:b", '{"x": 1}')

    @pytest.mark.asyncio
    async def test_keys_strip_prefix(self, cache, client):
        client.keys.return_value = [b"test:exercises:list:abc", "test:exercises:id:1"]

        assert await cache.keys("exercises:*") == ["exercises:list:abc", "exercises:id:1"]

    @pytest.mark.asyncio
    async def test_invalidate_single_key(self, cache, client):
        client.delete.return_value = 1

        assert await cache.invalidate("exercises:id:1") == 1
        client.delete.assert_awaited_once_with("test:exercises:id:1")

    @pytest.mark.asyncio
    async def test_invalidate_pattern(self, cache, client):
        client.keys.return_value = ["test:exercises:a", "test:exercises:b"]
        client.delete.return_value = 2

        assert await cache.invalidate("exercises:*") == 2
        client.delete.assert_awaited_once_with("test:exercises:a", "test:exercises:b")

    @pytest.mark.asyncio
    async def test_invalidate_pattern_without_matches(self, cache, client):
        client.keys.return_value = []

        assert await cache.invalidate("exercises:*") == 0
        client.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalidate_swallows_redis_errors(self, cache, client):
        client.keys.side_effect = RedisConnectionError("down")

        assert await cache.invalidate("exercises:*") == 0

    @pytest.mark.asyncio
    async def test_get_with_cache_hit(self, cache, client):
        client.get.return_value = json.dumps({"cached": True})
        fetch = AsyncMock()

        assert await cache.get_with_cache("k", fetch) == {"cached": True}
        fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_with_cache_miss_stores_value(self, cache, client):
        client.get.return_value = None
        fetch = AsyncMock(return_value={"fresh": True})

        assert await cache.get_with_cache("k", fetch) == {"fresh": True}
        client.setex.assert_awaited_once_with("test:k", 60, '{"fresh": true}')

    @pytest.mark.asyncio
    async def test_get_with_cache_does_not_store_none(self, cache, client):
        client.get.return_value = None
        fetch = AsyncMock(return_value=None)

        assert await cache.get_with_cache("k", fetch) is None
        client.setex.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_with_cache_falls_back_when_redis_is_down(self, cache, client):
        client.get.side_effect = RedisConnectionError("down")
        fetch = AsyncMock(return_value={"fresh": True})

        assert await cache.get_with_cache("k", fetch) == {"fresh": True}
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_with_cache_write_failure_still_returns(self, cache, client):
        client.get.return_value = None
        client.setex.side_effect = RedisConnectionError("down")
        fetch = AsyncMock(return_value=[1])

        assert await cache.get_with_cache("k", fetch, ttl=10) == [1]

    @pytest.mark.asyncio
    async def test_warm_up_uses_default_ttl(self, cache, client):
        await cache.warm_up("k", {"v": 1})

        client.setex.assert_awaited_once_with("test:k", 60, '{"v": 1}')
