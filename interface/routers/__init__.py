from interface.routers.auth_router import auth_router
from interface.routers.account_router import account_router
from interface.routers.exercise_router import exercise_router
from interface.routers.workout_router import workout_router
from interface.routers.workout_session_router import workout_session_router
from interface.routers.upload_router import upload_router
from interface.routers.chatbot_router import chatbot_router
from interface.routers.system_router import system_router

__all__ = [
    "auth_router",
    "account_router",
    "exercise_router",
    "workout_router",
    "workout_session_router",
    "upload_router",
    "chatbot_router",
    "system_router",
]
