from .authenticator import Authenticator
from .exceptions import (
    AuthError,
    TokenMissingError,
    TokenInvalidError,
    UserNotFoundError,
    InsufficientPermissionsError,
)
from .token_blacklist_repository import (
    InMemoryTokenBlacklistRepository,
    RedisTokenBlacklistRepository,
)

__all__ = [
    "Authenticator",
    "AuthError",
    "TokenMissingError",
    "TokenInvalidError",
    "UserNotFoundError",
    "InsufficientPermissionsError",
    "InMemoryTokenBlacklistRepository",
    "RedisTokenBlacklistRepository",
]
