from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from core.entities import UserEntity
from core.usecase import WorkoutSessionUseCase
from interface.di import get_current_user, get_workout_session_usecase
from interface.schemas import (
    CompleteExerciseRequest,
    StartSessionRequest,
    UpdateSessionRequest,
    success_response,
)

workout_session_router = APIRouter(
    prefix="/workout-sessions",
    tags=["workout-sessions"],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"description": "Authentication failed"},
        status.HTTP_404_NOT_FOUND: {"description": "Session not found"},
        status.HTTP_409_CONFLICT: {"description": "Session state conflict"},
    },
)


@workout_session_router.post("/start", status_code=status.HTTP_201_CREATED)
async def start_session(
    body: StartSessionRequest,
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    """
    Start a session for a workout. Only one session may be in progress per user.
    """
    session = await session_usecase.start_session(user.id, body.workout_id)
    return success_response(
        session, "Workout session started successfully", status.HTTP_201_CREATED
    )


@workout_session_router.get("/active")
async def get_active_session(
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    session = await session_usecase.get_active_session(user.id)
    return success_response(session, "Active session retrieved successfully")


@workout_session_router.get("/stats")
async def get_session_stats(
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    stats = await session_usecase.get_stats(user.id)
    return success_response(stats, "Session statistics retrieved successfully")


@workout_session_router.get("")
@workout_session_router.get("/")
async def list_sessions(
    page: int = Query(default=1),
    limit: int = Query(default=10),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    result = await session_usecase.list_sessions(user.id, page, limit, status_filter)
    return success_response(result, "Workout sessions retrieved successfully")


@workout_session_router.get("/{session_id}")
async def get_session(
    session_id: str,
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    session = await session_usecase.get_session(user.id, session_id)
    return success_response(session, "Workout session retrieved successfully")


@workout_session_router.put("/{session_id}")
async def update_session(
    session_id: str,
    body: UpdateSessionRequest,
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    session = await session_usecase.update_session(
        user.id, session_id, body.model_dump(exclude_unset=True)
    )
    return success_response(session, "Workout session updated successfully")


@workout_session_router.post("/{session_id}/complete-exercise")
async def complete_exercise(
    session_id: str,
    body: CompleteExerciseRequest,
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    """
    Record a finished exercise. The session completes after the last one.
    """
    session = await session_usecase.complete_exercise(
        user.id,
        session_id,
        exercise_id=body.exercise_id,
        exercise_index=body.exercise_index,
        sets=[s.model_dump() for s in body.sets],
        calories_burned=body.calories_burned,
        notes=body.notes,
    )
    return success_response(session, "Exercise completed successfully")


@workout_session_router.post("/{session_id}/toggle-pause")
async def toggle_pause(
    session_id: str,
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    session = await session_usecase.toggle_pause(user.id, session_id)
    message = "Workout session paused" if session.status == "paused" else "Workout session resumed"
    return success_response(session, message)


@workout_session_router.post("/{session_id}/stop")
async def stop_session(
    session_id: str,
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    session = await session_usecase.stop_session(user.id, session_id)
    return success_response(session, "Workout session stopped")


@workout_session_router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    user: UserEntity = Depends(get_current_user),
    session_usecase: WorkoutSessionUseCase = Depends(get_workout_session_usecase),
):
    await session_usecase.delete_session(user.id, session_id)
    return success_response(None, "Session deleted successfully")
