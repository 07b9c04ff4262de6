import re
import secrets

from core.entities.user_entity import USERNAME_PATTERN

RESET_TOKEN_PATTERN = re.compile(r"^[a-f0-9]{64}$")
OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def generate_token() -> str:
    """
    Generate a random token for email verification or password reset.

    Returns:
        str: 64 hex characters (32 random bytes)
    """
    return secrets.token_hex(32)


def validate_username(username: str) -> bool:
    """
    Validate a username.

    Args:
        username (str): The username to validate.

    Returns:
        bool: True if 3-30 letters, digits or underscores.
    """
    return re.match(USERNAME_PATTERN, username or "") is not None


def validate_password(password: str) -> bool:
    """Passwords need at least 6 characters."""
    return password is not None and len(password) >= 6


def validate_reset_token_format(token: str) -> bool:
    return RESET_TOKEN_PATTERN.match(token or "") is not None


def is_valid_object_id(value: str) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.match(value) is not None
