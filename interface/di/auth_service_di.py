from typing import Callable, Optional

from fastapi import Depends

from core.entities import UserEntity
from core.interface import AuthenticationInterface, UserRepositoryInterface
from core.usecase import AuthUseCase

from infrastructure.auth.exceptions import (
    InsufficientPermissionsError,
    TokenInvalidError,
    TokenMissingError,
    UserNotFoundError,
)
from infrastructure.di import get_authenticator, get_current_user_token, get_user_repository
from utils import get_auth_settings


def get_auth_service(
    auth_service: AuthenticationInterface = Depends(get_authenticator),
    user_repository: UserRepositoryInterface = Depends(get_user_repository),
) -> AuthUseCase:
    """
    Get the authentication use case with its service dependencies.
    """
    return AuthUseCase(
        auth_service=auth_service,
        user_repository=user_repository,
        reset_token_expire_minutes=get_auth_settings().reset_token_expire_minutes,
    )


async def get_current_user(
    token: Optional[str] = Depends(get_current_user_token),
    auth_usecase: AuthUseCase = Depends(get_auth_service),
) -> UserEntity:
    """
    Get the current authenticated user.

    This dependency validates the token and returns the associated user,
    or raises an appropriate exception if authentication fails.

    Args:
        token: The JWT token extracted from the request's Authorization header
        auth_usecase: The authentication use case

    Returns:
        The authenticated user entity

    Raises:
        HTTPException: If the token is missing or invalid, or the user is not found
    """
    if not token:
        raise TokenMissingError()

    valid, user, error = await auth_usecase.validate_token(token)
    if not valid:
        if error and "user" in error.lower():
            raise UserNotFoundError(detail=error)
        raise TokenInvalidError(detail=error or "Invalid or expired token")

    return user


async def get_optional_user(
    token: Optional[str] = Depends(get_current_user_token),
    auth_usecase: AuthUseCase = Depends(get_auth_service),
) -> Optional[UserEntity]:
    """Like get_current_user, but anonymous or invalid requests yield None."""
    if not token:
        return None
    valid, user, _ = await auth_usecase.validate_token(token)
    return user if valid else None


def require_roles(*roles: str) -> Callable:
    """
    Build a dependency that only admits users with one of the given roles.
    """

    async def check_role(user: UserEntity = Depends(get_current_user)) -> UserEntity:
        if user.role not in roles:
            raise InsufficientPermissionsError()
        return user

    return check_role
