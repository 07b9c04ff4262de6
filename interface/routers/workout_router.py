from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from core.entities import UserEntity
from core.usecase import WorkoutUseCase
from interface.di import get_current_user, get_optional_user, get_workout_usecase
from interface.schemas import (
    CreateWorkoutRequest,
    ListRequest,
    MyWorkoutsRequest,
    success_response,
)

workout_router = APIRouter(
    prefix="/workouts",
    tags=["workouts"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Validation error"},
        status.HTTP_404_NOT_FOUND: {"description": "Workout not found"},
    },
)


@workout_router.post("/list")
async def list_workouts(
    body: ListRequest,
    viewer: Optional[UserEntity] = Depends(get_optional_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    """
    Filter, sort and paginate workouts. Only public workouts are listed
    unless the caller asks for their own.
    """
    result = await workout_usecase.list_workouts(
        page=body.page,
        limit=body.limit,
        filters=body.filters,
        sort=body.sort.model_dump() if body.sort else None,
        options=body.options,
        viewer_id=viewer.id if viewer else None,
    )
    return success_response(result, "Workouts retrieved successfully")


@workout_router.post("", status_code=status.HTTP_201_CREATED)
async def create_workout(
    body: CreateWorkoutRequest,
    user: UserEntity = Depends(get_current_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    workout = await workout_usecase.create_workout(
        user.id, body.model_dump(by_alias=True, exclude_none=True)
    )
    return success_response(workout, "Workout created successfully", status.HTTP_201_CREATED)


@workout_router.get("/my-workouts")
async def get_my_workouts(
    page: int = Query(default=1),
    limit: int = Query(default=12),
    category: Optional[str] = Query(default=None),
    difficulty: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    user: UserEntity = Depends(get_current_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    result = await workout_usecase.get_my_workouts(
        user.id, page, limit, category, difficulty, search
    )
    return success_response(result, "My workouts retrieved successfully")


@workout_router.post("/my-workouts")
async def search_my_workouts(
    body: MyWorkoutsRequest = Body(default_factory=MyWorkoutsRequest),
    user: UserEntity = Depends(get_current_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    result = await workout_usecase.get_my_workouts(
        user.id, body.page, body.limit, body.category, body.difficulty, body.search
    )
    return success_response(result, "My workouts retrieved successfully")


@workout_router.get("/my-stats")
async def get_my_stats(
    user: UserEntity = Depends(get_current_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    stats = await workout_usecase.get_my_stats(user.id)
    return success_response(stats, "Workout statistics retrieved successfully")


@workout_router.get("/{workout_id}")
async def get_workout(
    workout_id: str,
    viewer: Optional[UserEntity] = Depends(get_optional_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    workout = await workout_usecase.get_workout(workout_id, viewer.id if viewer else None)
    return success_response(workout, "Workout retrieved successfully")


@workout_router.post("/{workout_id}/like")
async def toggle_like(
    workout_id: str,
    user: UserEntity = Depends(get_current_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    result = await workout_usecase.toggle_like(workout_id, user.id)
    return success_response(result, "Workout liked" if result["isLiked"] else "Workout unliked")


@workout_router.post("/{workout_id}/save")
async def toggle_save(
    workout_id: str,
    user: UserEntity = Depends(get_current_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    result = await workout_usecase.toggle_save(workout_id, user.id)
    return success_response(result, "Workout saved" if result["isSaved"] else "Workout unsaved")


@workout_router.post("/{workout_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_workout(
    workout_id: str,
    user: UserEntity = Depends(get_current_user),
    workout_usecase: WorkoutUseCase = Depends(get_workout_usecase),
):
    copy = await workout_usecase.duplicate_workout(workout_id, user.id)
    return success_response(copy, "Workout duplicated successfully", status.HTTP_201_CREATED)
