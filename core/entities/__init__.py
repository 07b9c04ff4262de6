from .base import CamelModel, DocumentEntity, PaginationEntity, utc_now
from .user_entity import (
    UserEntity,
    UserRole,
    Gender,
    FitnessGoal,
    ExperienceLevel,
    ProfileEntity,
    PreferencesEntity,
    SubscriptionEntity,
)
from .auth_entity import (
    TokenEntity,
    TokenDataEntity,
    CredentialsEntity,
)
from .exercise_entity import (
    ExerciseEntity,
    ExerciseCategory,
    Difficulty,
    MuscleGroup,
    Equipment,
)
from .workout_entity import WorkoutEntity, WorkoutExercise, WorkoutCategory
from .session_entity import (
    WorkoutSessionEntity,
    SessionStatus,
    Mood,
    CompletedExercise,
    CompletedSet,
    IN_PROGRESS_STATUSES,
    TERMINAL_STATUSES,
)

__all__ = [
    "CamelModel",
    "DocumentEntity",
    "PaginationEntity",
    "utc_now",
    "UserEntity",
    "UserRole",
    "Gender",
    "FitnessGoal",
    "ExperienceLevel",
    "ProfileEntity",
    "PreferencesEntity",
    "SubscriptionEntity",
    "TokenEntity",
    "TokenDataEntity",
    "CredentialsEntity",
    "ExerciseEntity",
    "ExerciseCategory",
    "Difficulty",
    "MuscleGroup",
    "Equipment",
    "WorkoutEntity",
    "WorkoutExercise",
    "WorkoutCategory",
    "WorkoutSessionEntity",
    "SessionStatus",
    "Mood",
    "CompletedExercise",
    "CompletedSet",
    "IN_PROGRESS_STATUSES",
    "TERMINAL_STATUSES",
]
