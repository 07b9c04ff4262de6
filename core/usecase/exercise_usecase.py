import hashlib
import json
import logging
from typing import Any, Dict, Optional

from core.entities import ExerciseEntity, PaginationEntity
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.interface import CacheInterface, ExerciseRepositoryInterface
from core.service import calculate_difficulty, is_valid_object_id, slugify

EXERCISE_SORT_FIELDS = {
    "name",
    "difficulty",
    "category",
    "caloriesPerMinute",
    "averageIntensity",
    "createdAt",
    "updatedAt",
}


def cache_key(namespace: str, payload: Any) -> str:
    """Stable key for a namespace and a JSON-serializable payload."""
    digest = hashlib.md5(
        json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    ).hexdigest()
    return f"{namespace}:{digest}"


def normalize_sort(sort: Optional[Dict[str, Any]], allowed: set, default_field: str, default_order: str) -> Dict[str, str]:
    sort = sort or {}
    field = sort.get("field") or default_field
    if field not in allowed:
        field = default_field
    order = sort.get("order") or default_order
    return {"field": field, "order": "desc" if order == "desc" else "asc"}


class ExerciseUseCase:
    """
    Catalog queries and authoring for exercises, cached when a cache is configured.
    """

    def __init__(
        self,
        exercise_repository: ExerciseRepositoryInterface,
        cache: Optional[CacheInterface] = None,
    ):
        self.exercise_repository = exercise_repository
        self.cache = cache
        self.logger = logging.getLogger(__name__)

    async def _cached(self, key: str, fetch):
        if self.cache is None:
            return await fetch()
        return await self.cache.get_with_cache(key, fetch)

    async def list_exercises(
        self,
        page: int = 1,
        limit: int = 10,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Filter, sort and paginate the exercise catalog.

        Args:
            page: 1-based page number
            limit: Items per page, clamped to 1..100
            filters: camelCase filter values
            sort: {field, order}
            options: {includeCreator}

        Returns:
            Dictionary with data, pagination, filters and sort
        """
        page = max(1, page)
        limit = max(1, min(100, limit))
        filters = dict(filters or {})
        filters.setdefault("isApproved", True)
        sort = normalize_sort(sort, EXERCISE_SORT_FIELDS, "name", "asc")
        include_creator = bool((options or {}).get("includeCreator"))

        async def fetch() -> Dict[str, Any]:
            items, total = await self.exercise_repository.list_exercises(
                filters, sort, page, limit, include_creator
            )
            return {
                "data": [item.model_dump(by_alias=True, mode="json") for item in items],
                "pagination": PaginationEntity.build(page, limit, total).model_dump(by_alias=True),
                "filters": filters,
                "sort": sort,
            }

        key = cache_key(
            "exercises:list",
            {"page": page, "limit": limit, "filters": filters, "sort": sort, "creator": include_creator},
        )
        return await self._cached(key, fetch)

    async def get_exercise(self, exercise_id: str) -> Dict[str, Any]:
        if not is_valid_object_id(exercise_id):
            raise ValidationError("Valid exercise ID is required")

        async def fetch() -> Optional[Dict[str, Any]]:
            exercise = await self.exercise_repository.get_exercise_by_id(
                exercise_id, include_creator=True
            )
            return exercise.model_dump(by_alias=True, mode="json") if exercise else None

        result = await self._cached(f"exercises:id:{exercise_id}", fetch)
        if not result:
            raise NotFoundError("Exercise not found")
        return result

    async def get_exercise_by_slug(self, slug: str) -> Dict[str, Any]:
        async def fetch() -> Optional[Dict[str, Any]]:
            exercise = await self.exercise_repository.get_exercise_by_slug(slug)
            return exercise.model_dump(by_alias=True, mode="json") if exercise else None

        result = await self._cached(f"exercises:slug:{slug}", fetch)
        if not result:
            raise NotFoundError("Exercise not found")
        return result

    async def create_exercise(self, data: Dict[str, Any], created_by: str) -> ExerciseEntity:
        """
        Create an exercise, deriving slug and difficulty when they are not given.

        Raises:
            ConflictError: If an exercise with the same slug exists
        """
        data = dict(data)
        if not data.get("difficulty"):
            data["difficulty"] = calculate_difficulty(data)
        data["slug"] = slugify(data["name"])
        data["createdBy"] = created_by

        try:
            exercise = ExerciseEntity.model_validate(data)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if await self.exercise_repository.get_exercise_by_slug(exercise.slug):
            raise ConflictError(f"name '{exercise.name}' already exists")

        created = await self.exercise_repository.create_exercise(exercise)
        if self.cache is not None:
            await self.cache.invalidate("exercises:*")
        self.logger.info(f"Exercise created: {created.slug} by {created_by}")
        return created
