from functools import lru_cache

from .app_settings import AppSettings
from .auth_settings import AuthSettings
from .cache_settings import RedisSettings
from .chatbot_settings import ChatbotSettings
from .cors_settings import CorsSettings
from .database_settings import MongoDbSettings
from .upload_settings import UploadSettings


@lru_cache
def get_app_settings() -> AppSettings:
    return AppSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    return AuthSettings()


@lru_cache
def get_mongo_settings() -> MongoDbSettings:
    return MongoDbSettings()


@lru_cache
def get_redis_settings() -> RedisSettings:
    return RedisSettings()


@lru_cache
def get_chatbot_settings() -> ChatbotSettings:
    return ChatbotSettings()


@lru_cache
def get_upload_settings() -> UploadSettings:
    return UploadSettings()


__all__ = [
    "AppSettings",
    "AuthSettings",
    "CorsSettings",
    "MongoDbSettings",
    "RedisSettings",
    "ChatbotSettings",
    "UploadSettings",
    "get_app_settings",
    "get_auth_settings",
    "get_mongo_settings",
    "get_redis_settings",
    "get_chatbot_settings",
    "get_upload_settings",
]
