from fastapi import Depends

from infrastructure.database import MongoDatabase
from infrastructure.di.db import get_database
from infrastructure.repositories import (
    UserRepository,
    ExerciseRepository,
    WorkoutRepository,
    WorkoutSessionRepository,
)


def get_user_repository(database: MongoDatabase = Depends(get_database)) -> UserRepository:
    """
    Dependency for injecting a UserRepository.

    Args:
        database: The shared MongoDatabase.

    Returns:
        An instance of UserRepository.
    """
    return UserRepository(database=database)


def get_exercise_repository(database: MongoDatabase = Depends(get_database)) -> ExerciseRepository:
    return ExerciseRepository(database=database)


def get_workout_repository(database: MongoDatabase = Depends(get_database)) -> WorkoutRepository:
    return WorkoutRepository(database=database)


def get_workout_session_repository(
    database: MongoDatabase = Depends(get_database),
) -> WorkoutSessionRepository:
    return WorkoutSessionRepository(database=database)
