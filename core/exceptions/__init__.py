from .auth import TokenError, AuthenticationError, PermissionDeniedError
from .domain import (
    NotFoundError,
    ConflictError,
    ValidationError,
    InvalidStateError,
    ExternalServiceError,
)

__all__ = [
    "TokenError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "InvalidStateError",
    "ExternalServiceError",
]
