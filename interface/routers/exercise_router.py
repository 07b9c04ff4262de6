from fastapi import APIRouter, Depends, status

from core.entities import UserEntity
from core.usecase import ExerciseUseCase
from interface.di import get_exercise_usecase, require_roles
from interface.schemas import CreateExerciseRequest, ListRequest, success_response

exercise_router = APIRouter(
    prefix="/exercises",
    tags=["exercises"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Validation error"},
        status.HTTP_404_NOT_FOUND: {"description": "Exercise not found"},
    },
)


@exercise_router.post("/list")
async def list_exercises(
    body: ListRequest,
    exercise_usecase: ExerciseUseCase = Depends(get_exercise_usecase),
):
    """
    Filter, sort and paginate the exercise catalog.
    """
    result = await exercise_usecase.list_exercises(
        page=body.page,
        limit=body.limit,
        filters=body.filters,
        sort=body.sort.model_dump() if body.sort else None,
        options=body.options,
    )
    return success_response(result, "Exercises retrieved successfully")


@exercise_router.post("", status_code=status.HTTP_201_CREATED)
async def create_exercise(
    body: CreateExerciseRequest,
    user: UserEntity = Depends(require_roles("trainer", "admin")),
    exercise_usecase: ExerciseUseCase = Depends(get_exercise_usecase),
):
    exercise = await exercise_usecase.create_exercise(
        body.model_dump(by_alias=True, exclude_none=True), created_by=user.id
    )
    return success_response(exercise, "Exercise created successfully", status.HTTP_201_CREATED)


@exercise_router.get("/slug/{slug}")
async def get_exercise_by_slug(
    slug: str, exercise_usecase: ExerciseUseCase = Depends(get_exercise_usecase)
):
    exercise = await exercise_usecase.get_exercise_by_slug(slug)
    return success_response(exercise, "Exercise retrieved successfully")


@exercise_router.get("/{exercise_id}")
async def get_exercise(
    exercise_id: str, exercise_usecase: ExerciseUseCase = Depends(get_exercise_usecase)
):
    exercise = await exercise_usecase.get_exercise(exercise_id)
    return success_response(exercise, "Exercise retrieved successfully")
