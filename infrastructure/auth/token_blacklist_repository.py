import hashlib
from datetime import datetime, timezone
from typing import Dict

from redis.asyncio import Redis

from core.interface.token_blacklist_interface import TokenBlacklistRepository


class InMemoryTokenBlacklistRepository(TokenBlacklistRepository):
    """
    In-memory implementation of token blacklist repository.
    Useful for development and testing.
    Not suitable for production as it doesn't persist across restarts.
    """

    def __init__(self):
        self.blacklisted_tokens: Dict[str, datetime] = {}

    async def add_to_blacklist(self, token: str, expiry: datetime) -> bool:
        """Add a token to the blacklist with its expiry time."""
        self.blacklisted_tokens[token] = expiry
        return True

    async def is_blacklisted(self, token: str) -> bool:
        """Check if a token is in the blacklist and not expired."""
        if token not in self.blacklisted_tokens:
            return False

        # Expired entries are dropped on lookup
        if self.blacklisted_tokens[token] < datetime.now(timezone.utc):
            del self.blacklisted_tokens[token]
            return False

        return True

    async def remove_expired(self) -> int:
        """Remove all expired tokens from the blacklist."""
        now = datetime.now(timezone.utc)
        expired_tokens = [
            token for token, expiry in self.blacklisted_tokens.items() if expiry < now
        ]

        for token in expired_tokens:
            del self.blacklisted_tokens[token]

        return len(expired_tokens)


class RedisTokenBlacklistRepository(TokenBlacklistRepository):
    """
    Token blacklist shared between workers.
    Entries expire in Redis together with the token they revoke.
    """

    def __init__(self, client: Redis, key_prefix: str = "fitness-app:"):
        self.client = client
        self.key_prefix = f"{key_prefix}blacklist:"

    def _key(self, token: str) -> str:
        return self.key_prefix + hashlib.sha256(token.encode("utf-8")).hexdigest()

    async def add_to_blacklist(self, token: str, expiry: datetime) -> bool:
        ttl = int((expiry - datetime.now(timezone.utc)).total_seconds())
        if ttl <= 0:
            return True
        await self.client.setex(self._key(token), ttl, "1")
        return True

    async def is_blacklisted(self, token: str) -> bool:
        return bool(await self.client.exists(self._key(token)))

    async def remove_expired(self) -> int:
        # Redis evicts expired keys itself
        return 0
