from .user_service import (
    generate_token,
    validate_username,
    validate_password,
    validate_reset_token_format,
    is_valid_object_id,
)
from .exercise_service import slugify, escape_regex, calculate_difficulty
from . import health_service, session_service

__all__ = [
    "generate_token",
    "validate_username",
    "validate_password",
    "validate_reset_token_format",
    "is_valid_object_id",
    "slugify",
    "escape_regex",
    "calculate_difficulty",
    "health_service",
    "session_service",
]
