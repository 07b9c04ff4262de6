import json
from typing import Any, Awaitable, Callable, List, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from utils.logging_config import setup_logger
from core.interface import CacheInterface


class RedisCache(CacheInterface):
    """
    JSON cache over redis.asyncio with a shared key prefix.
    Cache failures are logged and never fail the request.
    """

    def __init__(self, client: Redis, key_prefix: str = "fitness-app:", default_ttl: int = 900):
        self.client = client
        self.key_prefix = key_prefix
        self.default_ttl = default_ttl
        self.logger = setup_logger("infrastructure.cache", "cache.log")

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Optional[Any]:
        raw = await self.client.get(self._key(key))
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        payload = json.dumps(value, default=str)
        if ttl:
            await self.client.setex(self._key(key), ttl, payload)
        else:
            await self.client.set(self._key(key), payload)
        return True

    async def delete(self, key: str) -> bool:
        return bool(await self.client.delete(self._key(key)))

    async def exists(self, key: str) -> bool:
        return bool(await self.client.exists(self._key(key)))

    async def keys(self, pattern: str) -> List[str]:
        """Matching keys without the prefix."""
        found = await self.client.keys(self._key(pattern))
        return [
            (k.decode("utf-8") if isinstance(k, bytes) else k)[len(self.key_prefix):]
            for k in found
        ]

    async def invalidate(self, key_or_pattern: str) -> int:
        try:
            if "*" not in key_or_pattern:
                return int(await self.delete(key_or_pattern))
            matches = await self.client.keys(self._key(key_or_pattern))
            if not matches:
                return 0
            deleted = await self.client.delete(*matches)
            self.logger.info(f"Invalidated {deleted} cache keys for {key_or_pattern}")
            return deleted
        except RedisError as e:
            self.logger.error(f"Cache invalidation failed for {key_or_pattern}: {e}")
            return 0

    async def get_with_cache(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
        ttl: Optional[int] = None,
    ) -> Any:
        try:
            cached = await self.get(key)
            if cached is not None:
                return cached
        except RedisError as e:
            self.logger.error(f"Cache read failed for {key}: {e}")
            return await fetch()

        value = await fetch()
        if value is not None:
            try:
                await self.set(key, value, ttl or self.default_ttl)
            except RedisError as e:
                self.logger.error(f"Cache write failed for {key}: {e}")
        return value

    async def warm_up(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        await self.set(key, value, ttl or self.default_ttl)
        self.logger.info(f"Cache warmed for {key}")

    async def ping(self) -> bool:
        return bool(await self.client.ping())

    async def close(self) -> None:
        await self.client.aclose()
