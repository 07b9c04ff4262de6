from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from core.interface import TokenBlacklistRepository, AuthenticationInterface
from infrastructure.auth import Authenticator
from utils import get_app_settings, get_auth_settings

# auto_error is off so a missing token gets our own 401 message
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{get_app_settings().api_prefix}/auth/login", auto_error=False
)


def get_token_blacklist_repository(request: Request) -> TokenBlacklistRepository:
    """
    Get the token blacklist created in the application lifespan.

    In memory by default, Redis-backed when Redis is enabled.
    """
    return request.app.state.token_blacklist


async def get_current_user_token(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    """
    Get the bearer token from the Authorization header, if any.

    Returns:
        The JWT token string, or None when the header is missing.
    """
    return token


def get_authenticator(
    token_blacklist_repository: TokenBlacklistRepository = Depends(get_token_blacklist_repository),
) -> AuthenticationInterface:
    """
    Dependency for injecting an Authenticator.

    Args:
        token_blacklist_repository: An instance of TokenBlacklistRepository.

    Returns:
        An instance of Authenticator.
    """
    settings = get_auth_settings()
    return Authenticator(
        secret_key=settings.jwt_secret,
        refresh_secret_key=settings.jwt_refresh_secret,
        algorithm=settings.algorithm,
        access_token_expire_minutes=settings.access_token_expire_minutes,
        refresh_token_expire_days=settings.refresh_token_expire_days,
        remember_me_expire_days=settings.remember_me_expire_days,
        bcrypt_rounds=settings.bcrypt_rounds,
        token_blacklist_repository=token_blacklist_repository,
    )
