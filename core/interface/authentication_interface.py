from abc import ABC, abstractmethod
from typing import Optional

from core.entities.user_entity import UserEntity
from core.entities.auth_entity import TokenEntity, TokenDataEntity


class AuthenticationInterface(ABC):
    """
    Abstract interface for authentication services.
    Covers password hashing and the JWT access/refresh token pair.
    """

    @abstractmethod
    async def hash_password(self, password: str) -> str:
        """
        Securely hash a password using strong algorithms.

        Args:
            password: Plain text password to hash

        Returns:
            Securely hashed password
        """
        pass

    @abstractmethod
    async def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Hashed password to compare against

        Returns:
            True if password matches the hash, False otherwise
        """
        pass

    @abstractmethod
    async def create_tokens(self, user: UserEntity, remember_me: bool = False) -> TokenEntity:
        """
        Create an access and refresh token pair for a user.

        Args:
            user: The authenticated user
            remember_me: Issue a long-lived refresh token

        Returns:
            TokenEntity with both tokens
        """
        pass

    @abstractmethod
    async def verify_access_token(self, token: str) -> Optional[TokenDataEntity]:
        """
        Verify and decode an access token.

        Args:
            token: JWT access token

        Returns:
            Token payload, or None if the token is invalid, expired or revoked
        """
        pass

    @abstractmethod
    async def verify_refresh_token(self, token: str) -> Optional[TokenDataEntity]:
        """
        Verify and decode a refresh token.

        Args:
            token: JWT refresh token

        Returns:
            Token payload, or None if the token is not a valid refresh token
        """
        pass

    @abstractmethod
    async def revoke_token(self, token: str) -> bool:
        """
        Invalidate an access token until it expires.

        Args:
            token: JWT access token

        Returns:
            True if the token was revoked, False otherwise
        """
        pass
