from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI
from pymongo.errors import PyMongoError

from infrastructure.auth import (
    InMemoryTokenBlacklistRepository,
    RedisTokenBlacklistRepository,
)
from infrastructure.cache import RedisCache
from infrastructure.chatbot import ChatbotClient
from infrastructure.database import MongoDatabase
from infrastructure.storage import LocalFileStorage
from utils import (
    get_chatbot_settings,
    get_mongo_settings,
    get_redis_settings,
    get_upload_settings,
)
from utils.logging_config import setup_logger

# Setup logger
logger = setup_logger("lifespan", "lifespan.log")


async def teardown_services(app: FastAPI):
    """
    Close every client stored on the app state.
    """
    chatbot = getattr(app.state, "chatbot", None)
    if chatbot is not None:
        await chatbot.close()
        logger.info("Chatbot client closed")

    cache = getattr(app.state, "cache", None)
    if cache is not None:
        await cache.close()
        logger.info("Redis connection closed")

    database = getattr(app.state, "database", None)
    if database is not None:
        database.close()
        logger.info("MongoDB connection closed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI application.

    Opens the MongoDB connection, the optional Redis cache, the chatbot client
    and the upload storage, and makes them available through the app state.

    Args:
        app: FastAPI application instance
    """
    mongo_settings = get_mongo_settings()
    redis_settings = get_redis_settings()
    chatbot_settings = get_chatbot_settings()
    upload_settings = get_upload_settings()

    database = MongoDatabase(mongo_settings)
    app.state.database = database
    try:
        await database.setup_indexes()
    except PyMongoError as e:
        logger.error(f"Error creating MongoDB indexes: {e}")
    logger.info(f"MongoDB connected to database {mongo_settings.db_name}")

    if redis_settings.enabled:
        client = aioredis.from_url(redis_settings.url, decode_responses=True)
        app.state.cache = RedisCache(
            client,
            key_prefix=redis_settings.key_prefix,
            default_ttl=redis_settings.default_ttl,
        )
        app.state.token_blacklist = RedisTokenBlacklistRepository(
            client, key_prefix=redis_settings.key_prefix
        )
        logger.info("Redis cache enabled")
    else:
        app.state.cache = None
        app.state.token_blacklist = InMemoryTokenBlacklistRepository()
        logger.info("Redis cache disabled, using in-memory token blacklist")

    app.state.chatbot = ChatbotClient(
        api_url=chatbot_settings.api_url,
        api_token=chatbot_settings.api_token,
        timeout_seconds=chatbot_settings.timeout_seconds,
        max_retries=chatbot_settings.max_retries,
    )
    app.state.storage = LocalFileStorage(
        upload_settings.directory, base_url=f"/{upload_settings.directory}"
    )

    yield  # Application runs here

    logger.info("Shutting down services...")
    await teardown_services(app)
    logger.info("All services shut down successfully")
