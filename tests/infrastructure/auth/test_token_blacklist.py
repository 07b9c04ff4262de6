import hashlib
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from infrastructure.auth import (
    InMemoryTokenBlacklistRepository,
    RedisTokenBlacklistRepository,
)


class TestInMemoryTokenBlacklist:
    @pytest.fixture
    def blacklist(self):
        return InMemoryTokenBlacklistRepository()

    @pytest.mark.asyncio
    async def test_add_and_check(self, blacklist):
        expiry = datetime.now(timezone.utc) + timedelta(minutes=5)

        assert await blacklist.add_to_blacklist("token", expiry) is True
        assert await blacklist.is_blacklisted("token") is True
        assert await blacklist.is_blacklisted("other") is False

    @pytest.mark.asyncio
    async def test_expired_entry_is_dropped_on_lookup(self, blacklist):
        await blacklist.add_to_blacklist("token", datetime.now(timezone.utc) - timedelta(seconds=1))

        assert await blacklist.is_blacklisted("token") is False
        assert "token" not in blacklist.blacklisted_tokens

    @pytest.mark.asyncio
    async def test_remove_expired(self, blacklist):
        now = datetime.now(timezone.utc)
        await blacklist.add_to_blacklist("old", now - timedelta(minutes=1))
        await blacklist.add_to_blacklist("new", now + timedelta(minutes=1))

        assert await blacklist.remove_expired() == 1
        assert list(blacklist.blacklisted_tokens) == ["new"]


class TestRedisTokenBlacklist:
    @pytest.fixture
    def client(self):
        return AsyncMock()

    @pytest.fixture
    def blacklist(self, client):
        return RedisTokenBlacklistRepository(client, key_prefix="test:")

    @pytest.mark.asyncio
    async def test_add_stores_hashed_key_with_ttl(self, blacklist, client):
        expiry = datetime.now(timezone.utc) + timedelta(minutes=10)

        assert await blacklist.add_to_blacklist("token", expiry) is True

        key, ttl, value = client.setex.call_args[0]
        assert key == "test:blacklist:" + hashlib.sha256(b"token").hexdigest()
        assert 590 <= ttl <= 600
        assert value == "1"

    @pytest.mark.asyncio
    async def test_add_expired_token_is_noop(self, blacklist, client):
        await blacklist.add_to_blacklist("token", datetime.now(timezone.utc) - timedelta(seconds=5))

        client.setex.assert_not_called()

    @pytest.mark.asyncio
    async def test_is_blacklisted(self, blacklist, client):
        client.exists.return_value = 1
        assert await blacklist.is_blacklisted("token") is True

        client.exists.return_value = 0
        assert await blacklist.is_blacklisted("token") is False

    @pytest.mark.asyncio
    async def test_remove_expired_is_handled_by_redis(self, blacklist):
        assert await blacklist.remove_expired() == 0
