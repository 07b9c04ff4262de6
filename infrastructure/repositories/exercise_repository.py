import logging
from typing import Any, Dict, List, Optional, Tuple

from pymongo.errors import DuplicateKeyError

from core.entities import ExerciseEntity
from core.exceptions import ConflictError
from core.interface import ExerciseRepositoryInterface
from core.service import escape_regex
from infrastructure.database import MongoDatabase, normalize_document, to_document, to_object_id

CREATOR_LOOKUP = [
    {
        "$lookup": {
            "from": "users",
            "localField": "createdBy",
            "foreignField": "_id",
            "as": "creator",
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
    {"$unwind": {"path": "$creator", "preserveNullAndEmptyArrays": True}},
]

SEARCH_FIELDS = (
    "name",
    "description",
    "primaryMuscleGroups",
    "secondaryMuscleGroups",
    "equipment",
    "instructions",
)


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else [value]


def range_query(bounds: Dict[str, Any]) -> Dict[str, Any]:
    query = {}
    if bounds.get("min") is not None:
        query["$gte"] = bounds["min"]
    if bounds.get("max") is not None:
        query["$lte"] = bounds["max"]
    return query


def build_exercise_match(filters: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate camelCase listing filters into a MongoDB $match stage body.
    """
    match: Dict[str, Any] = {}

    for field in ("category", "difficulty"):
        if filters.get(field):
            match[field] = filters[field]
    if filters.get("isApproved") is not None:
        match["isApproved"] = bool(filters["isApproved"])
    if filters.get("createdBy"):
        match["createdBy"] = to_object_id(filters["createdBy"]) or filters["createdBy"]

    for field in ("primaryMuscleGroups", "secondaryMuscleGroups", "equipment"):
        if filters.get(field):
            match[field] = {"$in": as_list(filters[field])}

    for field, target in (("caloriesRange", "caloriesPerMinute"), ("intensityRange", "averageIntensity")):
        bounds = filters.get(field)
        if isinstance(bounds, dict) and range_query(bounds):
            match[target] = range_query(bounds)

    search = (filters.get("search") or "").strip()
    if search:
        pattern = {"$regex": escape_regex(search), "$options": "i"}
        match["$or"] = [{field: pattern} for field in SEARCH_FIELDS]

    return match


def build_sort_stage(sort: Dict[str, str]) -> Dict[str, Any]:
    direction = -1 if sort.get("order") == "desc" else 1
    # _id keeps page boundaries stable between equal keys
    return {"$sort": {sort["field"]: direction, "_id": 1}}


def facet_page(page: int, limit: int) -> Dict[str, Any]:
    return {
        "$facet": {
            "data": [{"$skip": (page - 1) * limit}, {"$limit": limit}],
            "totalCount": [{"$count": "count"}],
        }
    }


def unpack_facet(result: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], int]:
    if not result:
        return [], 0
    facet = result[0]
    total = facet["totalCount"][0]["count"] if facet.get("totalCount") else 0
    return facet.get("data", []), total


class ExerciseRepository(ExerciseRepositoryInterface):
    """
    Repository for the exercise catalog in MongoDB.
    """

    def __init__(self, database: MongoDatabase):
        self.collection = database.exercises
        self.logger = logging.getLogger("exercise_repository")

    @staticmethod
    def _to_entity(document: Optional[Dict[str, Any]]) -> Optional[ExerciseEntity]:
        if not document:
            return None
        return ExerciseEntity.model_validate(normalize_document(document))

    async def list_exercises(
        self,
        filters: Dict[str, Any],
        sort: Dict[str, str],
        page: int,
        limit: int,
        include_creator: bool = False,
    ) -> Tuple[List[ExerciseEntity], int]:
        pipeline: List[Dict[str, Any]] = [{"$match": build_exercise_match(filters)}]
        if include_creator:
            pipeline.extend(CREATOR_LOOKUP)
        pipeline.append(build_sort_stage(sort))
        pipeline.append(facet_page(page, limit))

        result = await self.collection.aggregate(pipeline).to_list(length=1)
        documents, total = unpack_facet(result)
        return [self._to_entity(doc) for doc in documents], total

    async def get_exercise_by_id(
        self, exercise_id: str, include_creator: bool = False
    ) -> Optional[ExerciseEntity]:
        object_id = to_object_id(exercise_id)
        if not object_id:
            return None
        if not include_creator:
            return self._to_entity(await self.collection.find_one({"_id": object_id}))

        pipeline = [{"$match": {"_id": object_id}}, *CREATOR_LOOKUP]
        documents = await self.collection.aggregate(pipeline).to_list(length=1)
        return self._to_entity(documents[0]) if documents else None

    async def get_exercise_by_slug(self, slug: str) -> Optional[ExerciseEntity]:
        return self._to_entity(await self.collection.find_one({"slug": slug}))

    async def create_exercise(self, exercise: ExerciseEntity) -> ExerciseEntity:
        document = to_document(exercise, exclude={"id", "creator"})
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise ConflictError(f"name '{exercise.name}' already exists") from e
        document["_id"] = result.inserted_id
        return self._to_entity(document)
