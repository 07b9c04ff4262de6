from interface.di.auth_service_di import (
    get_auth_service,
    get_current_user,
    get_optional_user,
    require_roles,
)
from interface.di.usecase_di import (
    get_account_usecase,
    get_exercise_usecase,
    get_workout_usecase,
    get_workout_session_usecase,
    get_chatbot_usecase,
    get_upload_usecase,
)

__all__ = [
    "get_auth_service",
    "get_current_user",
    "get_optional_user",
    "require_roles",
    "get_account_usecase",
    "get_exercise_usecase",
    "get_workout_usecase",
    "get_workout_session_usecase",
    "get_chatbot_usecase",
    "get_upload_usecase",
]
