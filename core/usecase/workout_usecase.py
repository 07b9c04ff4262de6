import logging
from typing import Any, Dict, Optional

from core.entities import PaginationEntity, WorkoutEntity
from core.exceptions import NotFoundError, ValidationError
from core.interface import WorkoutRepositoryInterface
from core.service import is_valid_object_id
from core.usecase.exercise_usecase import normalize_sort

WORKOUT_SORT_FIELDS = {
    "name",
    "category",
    "difficulty",
    "estimatedDuration",
    "averageRating",
    "likeCount",
    "saveCount",
    "views",
    "createdAt",
}

# Counters and social fields reset on new and duplicated workouts
RESET_FIELDS = {
    "isSponsored": False,
    "likes": [],
    "likeCount": 0,
    "saves": [],
    "saveCount": 0,
    "views": 0,
    "completions": 0,
    "averageRating": 0,
    "totalRatings": 0,
}


class WorkoutUseCase:
    """
    Workout catalog, authoring and social interactions.
    """

    def __init__(self, workout_repository: WorkoutRepositoryInterface):
        self.workout_repository = workout_repository
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def _check_id(workout_id: str) -> None:
        if not is_valid_object_id(workout_id):
            raise ValidationError("Valid workout ID is required")

    async def _paginate(
        self,
        page: int,
        limit: int,
        filters: Dict[str, Any],
        sort: Dict[str, str],
        options: Dict[str, Any],
    ) -> Dict[str, Any]:
        items, total = await self.workout_repository.list_workouts(
            filters,
            sort,
            page,
            limit,
            include_user=bool(options.get("includeUserData")),
            include_exercises=bool(options.get("includeExerciseData")),
        )
        return {
            "data": items,
            "pagination": PaginationEntity.build(page, limit, total),
            "filters": filters,
            "sort": sort,
        }

    async def list_workouts(
        self,
        page: int = 1,
        limit: int = 10,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
        viewer_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Filter, sort and paginate workouts.

        Private workouts are only listed when the caller filters by their own userId.

        Args:
            page: 1-based page number
            limit: Items per page, clamped to 1..100
            filters: camelCase filter values
            sort: {field, order}, defaults to newest first
            options: {includeUserData, includeExerciseData}
            viewer_id: Authenticated caller, if any

        Returns:
            Dictionary with data, pagination, filters and sort
        """
        page = max(1, page)
        limit = max(1, min(100, limit))
        sort = normalize_sort(sort, WORKOUT_SORT_FIELDS, "createdAt", "desc")
        filters = dict(filters or {})
        if filters.get("includePrivate") and (not viewer_id or filters.get("userId") != viewer_id):
            filters["includePrivate"] = False
        return await self._paginate(page, limit, filters, sort, options or {})

    async def get_my_workouts(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 12,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        filters: Dict[str, Any] = {"userId": user_id, "includePrivate": True}
        if category:
            filters["category"] = category
        if difficulty:
            filters["difficulty"] = difficulty
        if search:
            filters["search"] = search
        return await self.list_workouts(
            page,
            limit,
            filters,
            {"field": "createdAt", "order": "desc"},
            {"includeExerciseData": True},
            viewer_id=user_id,
        )

    async def get_workout(
        self,
        workout_id: str,
        viewer_id: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> WorkoutEntity:
        """
        Fetch a workout and count the view.

        Private workouts are only visible to their owner.

        Raises:
            ValidationError: If the id is malformed
            NotFoundError: If the workout is missing or not visible
        """
        self._check_id(workout_id)
        options = options or {}
        workout = await self.workout_repository.get_workout_by_id(
            workout_id,
            include_user=options.get("includeUserData", True),
            include_exercises=options.get("includeExerciseData", True),
        )
        if not workout or (not workout.is_public and workout.user_id != viewer_id):
            raise NotFoundError("Workout not found")

        try:
            await self.workout_repository.increment_counter(workout_id, "views")
        except Exception as e:
            self.logger.error(f"Failed to increment views for workout {workout_id}: {e}")
        return workout

    async def create_workout(self, user_id: str, data: Dict[str, Any]) -> WorkoutEntity:
        payload = {**data, **RESET_FIELDS, "userId": user_id}
        try:
            workout = WorkoutEntity.model_validate(payload)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        created = await self.workout_repository.create_workout(workout)
        self.logger.info(f"Workout {created.id} created by user {user_id}")
        return created

    async def get_my_stats(self, user_id: str) -> Dict[str, Any]:
        stats = await self.workout_repository.get_user_stats(user_id)
        return {
            "totalWorkouts": stats.get("totalWorkouts", 0),
            "totalDuration": stats.get("totalDuration", 0),
            "totalExercises": stats.get("totalExercises", 0),
            "averageRating": stats.get("avgRating") or 0,
            "totalLikes": stats.get("totalLikes", 0),
            "totalSaves": stats.get("totalSaves", 0),
            "totalViews": stats.get("totalViews", 0),
            "totalCompletions": stats.get("totalCompletions", 0),
            "byCategory": stats.get("byCategory", {}),
            "byDifficulty": stats.get("byDifficulty", {}),
            "recentActivity": {
                "lastWorkoutDate": stats.get("lastWorkoutDate"),
                "workoutsThisWeek": stats.get("workoutsThisWeek", 0),
                "workoutsThisMonth": stats.get("workoutsThisMonth", 0),
            },
        }

    async def toggle_like(self, workout_id: str, user_id: str) -> Dict[str, Any]:
        self._check_id(workout_id)
        result = await self.workout_repository.toggle_member(
            workout_id, user_id, "likes", "likeCount"
        )
        if result is None:
            raise NotFoundError("Workout not found")
        is_liked, count = result
        return {"isLiked": is_liked, "likeCount": count}

    async def toggle_save(self, workout_id: str, user_id: str) -> Dict[str, Any]:
        self._check_id(workout_id)
        result = await self.workout_repository.toggle_member(
            workout_id, user_id, "saves", "saveCount"
        )
        if result is None:
            raise NotFoundError("Workout not found")
        is_saved, count = result
        return {"isSaved": is_saved, "saveCount": count}

    async def duplicate_workout(self, workout_id: str, user_id: str) -> WorkoutEntity:
        self._check_id(workout_id)
        original = await self.workout_repository.get_workout_by_id(workout_id)
        if not original or (not original.is_public and original.user_id != user_id):
            raise NotFoundError("Workout not found")

        data = original.model_dump(
            by_alias=True,
            exclude={"id", "created_at", "updated_at", "user", "exercise_details"},
        )
        data.update(RESET_FIELDS)
        data.update({"name": f"{original.name} (Copy)"[:100], "isPublic": False, "userId": user_id})
        copy = await self.workout_repository.create_workout(WorkoutEntity.model_validate(data))
        self.logger.info(f"Workout {workout_id} duplicated as {copy.id} for user {user_id}")
        return copy
