from abc import ABC, abstractmethod
from datetime import datetime


class TokenBlacklistRepository(ABC):
    """
    Revoked access tokens, kept until they would have expired anyway.
    """

    @abstractmethod
    async def add_to_blacklist(self, token: str, expiry: datetime) -> bool:
        """
        Revoke a token.

        Args:
            token: The token to revoke
            expiry: When the token expires naturally

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    async def is_blacklisted(self, token: str) -> bool:
        """
        Check if a token has been revoked and has not expired yet.

        Args:
            token: The token to check

        Returns:
            True if token is revoked, False otherwise
        """
        pass

    @abstractmethod
    async def remove_expired(self) -> int:
        """
        Drop entries whose tokens have expired.

        Returns:
            Number of entries removed
        """
        pass
