import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

from pymongo import ReturnDocument

from core.entities import WorkoutEntity, utc_now
from core.interface import WorkoutRepositoryInterface
from core.service import escape_regex
from infrastructure.database import MongoDatabase, normalize_document, to_document, to_object_id
from infrastructure.repositories.exercise_repository import (
    as_list,
    build_sort_stage,
    facet_page,
    unpack_facet,
)

USER_LOOKUP = [
    {
        "$lookup": {
            "from": "users",
            "localField": "userId",
            "foreignField": "_id",
            "as": "user",
            "pipeline": [
                {
                    "$project": {
                        "username": 1,
                        "profile.firstName": 1,
                        "profile.lastName": 1,
                        "profile.avatar": 1,
                    }
                }
            ],
        }
    },
    {"$unwind": {"path": "$user", "preserveNullAndEmptyArrays": True}},
]

EXERCISE_LOOKUP = [
    {
        "$lookup": {
            "from": "exercises",
            "localField": "exercises.exerciseId",
            "foreignField": "_id",
            "as": "exerciseDetails",
            "pipeline": [
                {
                    "$project": {
                        "name": 1,
                        "slug": 1,
                        "category": 1,
                        "difficulty": 1,
                        "primaryMuscleGroups": 1,
                        "equipment": 1,
                        "images": 1,
                    }
                }
            ],
        }
    }
]

SEARCH_FIELDS = ("name", "description", "tags", "muscleGroups", "equipment")

# Fields that only exist on lookups
LOOKUP_FIELDS = {"id", "user", "exercise_details"}


def build_workout_match(filters: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate camelCase listing filters into a MongoDB $match stage body.
    """
    match: Dict[str, Any] = {}

    if filters.get("userId"):
        match["userId"] = to_object_id(filters["userId"]) or filters["userId"]
    if not filters.get("includePrivate"):
        match["isPublic"] = True

    for field in ("category", "difficulty", "muscleGroups", "equipment", "tags"):
        if filters.get(field):
            match[field] = {"$in": as_list(filters[field])}

    if filters.get("isSponsored") is not None:
        match["isSponsored"] = bool(filters["isSponsored"])

    duration = filters.get("duration")
    if isinstance(duration, dict):
        match["estimatedDuration"] = {
            "$gte": duration.get("min", 0),
            "$lte": duration.get("max", 300),
        }

    if filters.get("minRating") is not None:
        match["averageRating"] = {"$gte": filters["minRating"]}

    search = (filters.get("search") or "").strip()
    if search:
        pattern = {"$regex": escape_regex(search), "$options": "i"}
        match["$or"] = [{field: pattern} for field in SEARCH_FIELDS]

    return match


def lookup_stages(include_user: bool, include_exercises: bool) -> List[Dict[str, Any]]:
    stages: List[Dict[str, Any]] = []
    if include_user:
        stages.extend(USER_LOOKUP)
    if include_exercises:
        stages.extend(EXERCISE_LOOKUP)
    return stages


class WorkoutRepository(WorkoutRepositoryInterface):
    """
    Repository for workouts and their social counters in MongoDB.
    """

    def __init__(self, database: MongoDatabase):
        self.collection = database.workouts
        self.logger = logging.getLogger("workout_repository")

    @staticmethod
    def _to_entity(document: Optional[Dict[str, Any]]) -> Optional[WorkoutEntity]:
        if not document:
            return None
        return WorkoutEntity.model_validate(normalize_document(document))

    async def list_workouts(
        self,
        filters: Dict[str, Any],
        sort: Dict[str, str],
        page: int,
        limit: int,
        include_user: bool = False,
        include_exercises: bool = False,
    ) -> Tuple[List[WorkoutEntity], int]:
        pipeline: List[Dict[str, Any]] = [{"$match": build_workout_match(filters)}]
        pipeline.extend(lookup_stages(include_user, include_exercises))
        pipeline.append(build_sort_stage(sort))
        pipeline.append(facet_page(page, limit))

        result = await self.collection.aggregate(pipeline).to_list(length=1)
        documents, total = unpack_facet(result)
        return [self._to_entity(doc) for doc in documents], total

    async def get_workout_by_id(
        self, workout_id: str, include_user: bool = False, include_exercises: bool = False
    ) -> Optional[WorkoutEntity]:
        object_id = to_object_id(workout_id)
        if not object_id:
            return None
        stages = lookup_stages(include_user, include_exercises)
        if not stages:
            return self._to_entity(await self.collection.find_one({"_id": object_id}))

        documents = await self.collection.aggregate(
            [{"$match": {"_id": object_id}}, *stages]
        ).to_list(length=1)
        return self._to_entity(documents[0]) if documents else None

    async def create_workout(self, workout: WorkoutEntity) -> WorkoutEntity:
        document = to_document(workout, exclude=LOOKUP_FIELDS)
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return self._to_entity(document)

    async def toggle_member(
        self, workout_id: str, user_id: str, array_field: str, count_field: str
    ) -> Optional[Tuple[bool, int]]:
        """
        Add or remove the user and recount the array in a single update.
        """
        object_id = to_object_id(workout_id)
        member = to_object_id(user_id)
        if not object_id or not member:
            return None

        current = await self.collection.find_one({"_id": object_id}, {array_field: 1})
        if current is None:
            return None
        members = current.get(array_field) or []
        adding = member not in members

        operator = "$setUnion" if adding else "$setDifference"
        updated = await self.collection.find_one_and_update(
            {"_id": object_id},
            [
                {"$set": {array_field: {operator: [{"$ifNull": [f"${array_field}", []]}, [member]]}}},
                {"$set": {count_field: {"$size": f"${array_field}"}, "updatedAt": utc_now()}},
            ],
            projection={count_field: 1},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            return None
        return adding, max(0, updated.get(count_field, 0))

    async def increment_counter(self, workout_id: str, field: str, amount: int = 1) -> bool:
        object_id = to_object_id(workout_id)
        if not object_id:
            return False
        result = await self.collection.update_one({"_id": object_id}, {"$inc": {field: amount}})
        return result.matched_count > 0

    async def get_user_stats(self, user_id: str) -> Dict[str, Any]:
        """
        Aggregate totals, breakdowns and recent activity over a user's workouts.
        """
        object_id = to_object_id(user_id)
        if not object_id:
            return {}

        now = utc_now()
        pipeline = [
            {"$match": {"userId": object_id}},
            {
                "$facet": {
                    "totals": [
                        {
                            "$group": {
                                "_id": None,
                                "totalWorkouts": {"$sum": 1},
                                "totalDuration": {"$sum": {"$ifNull": ["$estimatedDuration", 0]}},
                                "totalExercises": {"$sum": {"$size": {"$ifNull": ["$exercises", []]}}},
                                "avgRating": {"$avg": "$averageRating"},
                                "totalLikes": {"$sum": "$likeCount"},
                                "totalSaves": {"$sum": "$saveCount"},
                                "totalViews": {"$sum": "$views"},
                                "totalCompletions": {"$sum": "$completions"},
                                "lastWorkoutDate": {"$max": "$createdAt"},
                            }
                        }
                    ],
                    "byCategory": [{"$group": {"_id": "$category", "count": {"$sum": 1}}}],
                    "byDifficulty": [{"$group": {"_id": "$difficulty", "count": {"$sum": 1}}}],
                    "thisWeek": [
                        {"$match": {"createdAt": {"$gte": now - timedelta(days=7)}}},
                        {"$count": "count"},
                    ],
                    "thisMonth": [
                        {"$match": {"createdAt": {"$gte": now - timedelta(days=30)}}},
                        {"$count": "count"},
                    ],
                }
            },
        ]

        result = await self.collection.aggregate(pipeline).to_list(length=1)
        if not result:
            return {}
        facet = result[0]
        stats = dict(facet["totals"][0]) if facet.get("totals") else {}
        stats.pop("_id", None)
        stats["byCategory"] = {
            group["_id"]: group["count"] for group in facet.get("byCategory", []) if group["_id"]
        }
        stats["byDifficulty"] = {
            group["_id"]: group["count"] for group in facet.get("byDifficulty", []) if group["_id"]
        }
        stats["workoutsThisWeek"] = facet["thisWeek"][0]["count"] if facet.get("thisWeek") else 0
        stats["workoutsThisMonth"] = facet["thisMonth"][0]["count"] if facet.get("thisMonth") else 0
        return stats
