from .user_repository import UserRepository
from .exercise_repository import ExerciseRepository
from .workout_repository import WorkoutRepository
from .workout_session_repository import WorkoutSessionRepository

__all__ = [
    "UserRepository",
    "ExerciseRepository",
    "WorkoutRepository",
    "WorkoutSessionRepository",
]
