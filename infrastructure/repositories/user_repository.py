import logging
from typing import Any, Dict, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from core.entities import UserEntity, utc_now
from core.exceptions import ConflictError
from core.interface import UserRepositoryInterface
from infrastructure.database import MongoDatabase, normalize_document, to_document, to_object_id

# Derived values that are never persisted
USER_COMPUTED_FIELDS = {"profile": {"bmi", "full_name"}, "subscription": {"is_active"}}


class UserRepository(UserRepositoryInterface):
    """
    Repository for user-related operations with MongoDB.
    """

    def __init__(self, database: MongoDatabase):
        self.collection = database.users
        self.logger = logging.getLogger("user_repository")

    @staticmethod
    def _to_entity(document: Optional[Dict[str, Any]]) -> Optional[UserEntity]:
        if not document:
            return None
        return UserEntity.model_validate(normalize_document(document))

    async def get_user_by_id(self, user_id: str) -> Optional[UserEntity]:
        """
        Retrieve a user by ID.
        """
        object_id = to_object_id(user_id)
        if not object_id:
            return None
        return self._to_entity(await self.collection.find_one({"_id": object_id}))

    async def get_user_by_email(self, email: str) -> Optional[UserEntity]:
        return self._to_entity(await self.collection.find_one({"email": email.lower()}))

    async def get_user_by_username(self, username: str) -> Optional[UserEntity]:
        return self._to_entity(await self.collection.find_one({"username": username.lower()}))

    async def find_user(self, query: Dict[str, Any]) -> Optional[UserEntity]:
        return self._to_entity(await self.collection.find_one(query))

    async def create_user(self, user: UserEntity) -> UserEntity:
        """
        Insert a new user.
        """
        document = to_document(user, exclude={"id": True, **USER_COMPUTED_FIELDS})
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            self.logger.warning(f"Duplicate user rejected: {user.email}")
            raise ConflictError("Email or username already exists") from e
        document["_id"] = result.inserted_id
        return self._to_entity(document)

    async def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[UserEntity]:
        """
        Set the given camelCase fields; None values are removed from the document.
        """
        object_id = to_object_id(user_id)
        if not object_id:
            return None

        to_set = {key: value for key, value in fields.items() if value is not None}
        to_unset = {key: "" for key, value in fields.items() if value is None}
        to_set["updatedAt"] = utc_now()
        update: Dict[str, Any] = {"$set": to_set}
        if to_unset:
            update["$unset"] = to_unset

        document = await self.collection.find_one_and_update(
            {"_id": object_id}, update, return_document=ReturnDocument.AFTER
        )
        return self._to_entity(document)
