from typing import Optional

from fastapi import Depends

from core.interface import (
    CacheInterface,
    ChatbotInterface,
    ExerciseRepositoryInterface,
    FileStorageInterface,
    WorkoutRepositoryInterface,
    WorkoutSessionRepositoryInterface,
)
from core.usecase import (
    AccountUseCase,
    ChatbotUseCase,
    ExerciseUseCase,
    UploadUseCase,
    WorkoutSessionUseCase,
    WorkoutUseCase,
)
from infrastructure.di import (
    get_cache,
    get_chatbot_client,
    get_exercise_repository,
    get_file_storage,
    get_workout_repository,
    get_workout_session_repository,
)
from utils import get_upload_settings


def get_account_usecase() -> AccountUseCase:
    return AccountUseCase()


def get_exercise_usecase(
    exercise_repository: ExerciseRepositoryInterface = Depends(get_exercise_repository),
    cache: Optional[CacheInterface] = Depends(get_cache),
) -> ExerciseUseCase:
    return ExerciseUseCase(exercise_repository=exercise_repository, cache=cache)


def get_workout_usecase(
    workout_repository: WorkoutRepositoryInterface = Depends(get_workout_repository),
) -> WorkoutUseCase:
    return WorkoutUseCase(workout_repository=workout_repository)


def get_workout_session_usecase(
    session_repository: WorkoutSessionRepositoryInterface = Depends(get_workout_session_repository),
    workout_repository: WorkoutRepositoryInterface = Depends(get_workout_repository),
) -> WorkoutSessionUseCase:
    """
    Get the workout session use case.

    Returns:
        WorkoutSessionUseCase wired to the session and workout repositories
    """
    return WorkoutSessionUseCase(
        session_repository=session_repository, workout_repository=workout_repository
    )


def get_chatbot_usecase(
    chatbot: ChatbotInterface = Depends(get_chatbot_client),
) -> ChatbotUseCase:
    return ChatbotUseCase(chatbot=chatbot)


def get_upload_usecase(
    storage: FileStorageInterface = Depends(get_file_storage),
) -> UploadUseCase:
    settings = get_upload_settings()
    return UploadUseCase(
        storage=storage,
        image_types=settings.image_types,
        video_types=settings.video_types,
        max_image_size=settings.max_image_size,
        max_video_size=settings.max_video_size,
        max_batch=settings.max_batch,
    )
