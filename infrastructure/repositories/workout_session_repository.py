import logging
from typing import Any, Dict, List, Optional, Tuple

from core.entities import IN_PROGRESS_STATUSES, WorkoutSessionEntity
from core.exceptions import NotFoundError
from core.interface import WorkoutSessionRepositoryInterface
from infrastructure.database import MongoDatabase, normalize_document, to_document, to_object_id

SESSION_COMPUTED_FIELDS = {"id", "actual_duration", "calories_per_minute", "is_in_progress"}


class WorkoutSessionRepository(WorkoutSessionRepositoryInterface):
    """
    Repository for workout sessions in MongoDB. Every query is scoped to the owner.
    """

    def __init__(self, database: MongoDatabase):
        self.collection = database.workout_sessions
        self.logger = logging.getLogger("workout_session_repository")

    @staticmethod
    def _to_entity(document: Optional[Dict[str, Any]]) -> Optional[WorkoutSessionEntity]:
        if not document:
            return None
        return WorkoutSessionEntity.model_validate(normalize_document(document))

    @staticmethod
    def _owned(session_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(session_id)
        owner = to_object_id(user_id)
        if not object_id or not owner:
            return None
        return {"_id": object_id, "userId": owner}

    async def create_session(self, session: WorkoutSessionEntity) -> WorkoutSessionEntity:
        document = to_document(session, exclude=SESSION_COMPUTED_FIELDS)
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return self._to_entity(document)

    async def get_session(self, session_id: str, user_id: str) -> Optional[WorkoutSessionEntity]:
        query = self._owned(session_id, user_id)
        if not query:
            return None
        return self._to_entity(await self.collection.find_one(query))

    async def get_in_progress_session(self, user_id: str) -> Optional[WorkoutSessionEntity]:
        owner = to_object_id(user_id)
        if not owner:
            return None
        document = await self.collection.find_one(
            {"userId": owner, "status": {"$in": list(IN_PROGRESS_STATUSES)}},
            sort=[("startTime", -1)],
        )
        return self._to_entity(document)

    async def save_session(self, session: WorkoutSessionEntity) -> WorkoutSessionEntity:
        query = self._owned(session.id, session.user_id)
        if not query:
            raise NotFoundError("Workout session not found")

        document = to_document(session, exclude=SESSION_COMPUTED_FIELDS)
        result = await self.collection.replace_one(query, document)
        if result.matched_count == 0:
            raise NotFoundError("Workout session not found")
        document["_id"] = query["_id"]
        return self._to_entity(document)

    async def list_sessions(
        self, user_id: str, status: Optional[str], page: int, limit: int
    ) -> Tuple[List[WorkoutSessionEntity], int]:
        owner = to_object_id(user_id)
        if not owner:
            return [], 0
        query: Dict[str, Any] = {"userId": owner}
        if status:
            query["status"] = status

        cursor = (
            self.collection.find(query)
            .sort("startTime", -1)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        documents = await cursor.to_list(length=limit)
        total = await self.collection.count_documents(query)
        return [self._to_entity(doc) for doc in documents], total

    async def get_session_totals(self, user_id: str) -> Dict[str, Any]:
        owner = to_object_id(user_id)
        if not owner:
            return {}
        pipeline = [
            {"$match": {"userId": owner}},
            {
                "$group": {
                    "_id": None,
                    "totalSessions": {"$sum": 1},
                    "completedSessions": {
                        "$sum": {"$cond": [{"$eq": ["$status", "completed"]}, 1, 0]}
                    },
                    "totalDuration": {"$sum": "$totalDuration"},
                    "totalCalories": {"$sum": "$totalCaloriesBurned"},
                    "avgDuration": {"$avg": "$totalDuration"},
                    "avgCalories": {"$avg": "$totalCaloriesBurned"},
                }
            },
        ]
        result = await self.collection.aggregate(pipeline).to_list(length=1)
        if not result:
            return {}
        totals = dict(result[0])
        totals.pop("_id", None)
        return totals

    async def delete_session(self, session_id: str, user_id: str) -> int:
        query = self._owned(session_id, user_id)
        if not query:
            return 0
        result = await self.collection.delete_one(query)
        if result.deleted_count:
            self.logger.info(f"Session {session_id} deleted by user {user_id}")
        return result.deleted_count
