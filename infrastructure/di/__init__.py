from .db import get_database
from .repositories import (
    get_user_repository,
    get_exercise_repository,
    get_workout_repository,
    get_workout_session_repository,
)
from .services import get_cache, get_chatbot_client, get_file_storage
from .auth import (
    get_authenticator,
    get_current_user_token,
    get_token_blacklist_repository,
)

__all__ = [
    "get_database",
    "get_user_repository",
    "get_exercise_repository",
    "get_workout_repository",
    "get_workout_session_repository",
    "get_cache",
    "get_chatbot_client",
    "get_file_storage",
    "get_authenticator",
    "get_current_user_token",
    "get_token_blacklist_repository",
]
