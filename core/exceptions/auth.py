class TokenError(Exception):
    """Exception raised for errors in the token service."""
    pass


class AuthenticationError(Exception):
    """Exception raised for authentication errors."""
    pass


class PermissionDeniedError(Exception):
    """Exception raised when the user lacks the required role."""
    pass
