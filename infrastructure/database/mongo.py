from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, IndexModel

from utils.logging_config import setup_logger
from utils.database_settings import MongoDbSettings

# Reference fields stored as ObjectId and returned as strings
REF_FIELDS = ("_id", "userId", "workoutId", "exerciseId", "createdBy")
REF_ARRAY_FIELDS = ("likes", "saves")


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Convert a hex string to an ObjectId, or None if it is not one."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def encode_refs(value: Any) -> Any:
    """Recursively turn reference fields of a document into ObjectIds."""
    if isinstance(value, list):
        return [encode_refs(item) for item in value]
    if not isinstance(value, dict):
        return value

    encoded = {}
    for key, item in value.items():
        if key in REF_FIELDS and isinstance(item, str):
            encoded[key] = to_object_id(item) or item
        elif key in REF_ARRAY_FIELDS and isinstance(item, list):
            encoded[key] = [to_object_id(ref) or ref for ref in item]
        else:
            encoded[key] = encode_refs(item)
    return encoded


def normalize_document(value: Any) -> Any:
    """Recursively turn every ObjectId of a stored document into a string."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [normalize_document(item) for item in value]
    if isinstance(value, dict):
        return {key: normalize_document(item) for key, item in value.items()}
    return value


def to_document(entity, exclude: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Serialize an entity for storage.

    Args:
        entity: A DocumentEntity
        exclude: Extra fields (computed or lookup-only) to leave out

    Returns:
        camelCase document with ObjectId references and no empty _id
    """
    document = entity.model_dump(by_alias=True, exclude=exclude)
    if not document.get("_id"):
        document.pop("_id", None)
    return encode_refs(document)


class MongoDatabase:
    """
    Async MongoDB connection shared by the repositories.
    """

    def __init__(self, settings: MongoDbSettings):
        self.settings = settings
        self.client = AsyncIOMotorClient(
            settings.uri,
            tz_aware=True,
            minPoolSize=settings.min_pool_size,
            maxPoolSize=settings.max_pool_size,
            serverSelectionTimeoutMS=settings.timeout_ms,
        )
        self.db: AsyncIOMotorDatabase = self.client[settings.db_name]
        self.logger = setup_logger("infrastructure.database", "database.log")

        # Collections
        self.users = self.db.users
        self.exercises = self.db.exercises
        self.workouts = self.db.workouts
        self.workout_sessions = self.db.workout_sessions

    async def setup_indexes(self) -> None:
        """Create necessary indexes for uniqueness and query performance."""
        await self.users.create_indexes([
            IndexModel([("email", ASCENDING)], unique=True),
            IndexModel([("username", ASCENDING)], unique=True),
            IndexModel([("emailVerificationToken", ASCENDING)], sparse=True),
            IndexModel([("passwordResetToken", ASCENDING)], sparse=True),
        ])

        await self.exercises.create_indexes([
            IndexModel([("name", ASCENDING)], unique=True),
            IndexModel([("slug", ASCENDING)], unique=True),
            IndexModel([("category", ASCENDING), ("difficulty", ASCENDING)]),
            IndexModel([("primaryMuscleGroups", ASCENDING)]),
        ])

        await self.workouts.create_indexes([
            IndexModel([("userId", ASCENDING), ("createdAt", DESCENDING)]),
            IndexModel([("isPublic", ASCENDING), ("category", ASCENDING)]),
            IndexModel([("tags", ASCENDING)]),
        ])

        await self.workout_sessions.create_indexes([
            IndexModel([("userId", ASCENDING), ("status", ASCENDING)]),
            IndexModel([("userId", ASCENDING), ("startTime", DESCENDING)]),
            IndexModel([("workoutId", ASCENDING)]),
        ])

        self.logger.info("MongoDB indexes created")

    async def ping(self) -> bool:
        await self.client.admin.command("ping")
        return True

    def close(self) -> None:
        """Close database connection."""
        self.client.close()

