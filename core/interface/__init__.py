from .authentication_interface import AuthenticationInterface
from .token_blacklist_interface import TokenBlacklistRepository
from .repository_interfaces import (
    UserRepositoryInterface,
    ExerciseRepositoryInterface,
    WorkoutRepositoryInterface,
    WorkoutSessionRepositoryInterface,
)
from .service_interfaces import CacheInterface, ChatbotInterface, FileStorageInterface

__all__ = [
    "AuthenticationInterface",
    "TokenBlacklistRepository",
    "UserRepositoryInterface",
    "ExerciseRepositoryInterface",
    "WorkoutRepositoryInterface",
    "WorkoutSessionRepositoryInterface",
    "CacheInterface",
    "ChatbotInterface",
    "FileStorageInterface",
]
