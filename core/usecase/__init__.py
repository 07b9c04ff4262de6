from .auth_usecase import AuthUseCase
from .account_usecase import AccountUseCase
from .exercise_usecase import ExerciseUseCase
from .workout_usecase import WorkoutUseCase
from .workout_session_usecase import WorkoutSessionUseCase
from .chatbot_usecase import ChatbotUseCase
from .upload_usecase import UploadUseCase

__all__ = [
    "AuthUseCase",
    "AccountUseCase",
    "ExerciseUseCase",
    "WorkoutUseCase",
    "WorkoutSessionUseCase",
    "ChatbotUseCase",
    "UploadUseCase",
]
