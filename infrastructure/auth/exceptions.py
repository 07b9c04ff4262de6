from fastapi import HTTPException, status


class AuthError(HTTPException):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_401_UNAUTHORIZED,
        headers: dict = None,
    ):
        if headers is None:
            headers = {"WWW-Authenticate": "Bearer"}
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class TokenMissingError(AuthError):
    """Error raised when no bearer token is sent."""

    def __init__(self, detail: str = "Access token required"):
        super().__init__(detail=detail)


class TokenInvalidError(AuthError):
    """Error raised when token is invalid, expired or revoked."""

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(detail=detail)


class UserNotFoundError(AuthError):
    """Error raised when the token owner no longer exists."""

    def __init__(self, detail: str = "User not found"):
        super().__init__(detail=detail)


class InsufficientPermissionsError(AuthError):
    """Error raised when the user's role is not allowed."""

    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(detail=detail, status_code=status.HTTP_403_FORBIDDEN, headers={})
