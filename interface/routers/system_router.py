import platform
import time
from datetime import datetime, timezone
from typing import Optional

import psutil
from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError
from redis.exceptions import RedisError

from core.exceptions import ValidationError
from core.service.health_service import (
    ACTIVITY_DESCRIPTIONS,
    ACTIVITY_LEVELS,
    BMI_CATEGORIES,
    BMI_FORMULA,
    bmi_examples,
    calculate_bmi,
    generate_health_insights,
    get_bmi_category,
    get_bmi_range,
    get_bmi_recommendations,
)
from infrastructure.cache import RedisCache
from infrastructure.database import MongoDatabase
from infrastructure.di import get_cache, get_database
from interface.schemas import BmiRequest, HealthInsightsRequest, success_response
from utils import get_app_settings
from utils.logging_config import setup_logger

system_router = APIRouter(tags=["system"])

logger = setup_logger("interface.system", "system.log")
START_TIME = time.time()


def uptime_seconds() -> int:
    return int(time.time() - START_TIME)


def memory_usage() -> dict:
    memory = psutil.Process().memory_info()
    virtual = psutil.virtual_memory()
    return {
        "rss": round(memory.rss / 1024 / 1024, 2),
        "vms": round(memory.vms / 1024 / 1024, 2),
        "systemTotal": round(virtual.total / 1024 / 1024, 2),
        "systemAvailable": round(virtual.available / 1024 / 1024, 2),
    }


async def database_status(database: MongoDatabase) -> str:
    try:
        await database.ping()
        return "connected"
    except PyMongoError as e:
        logger.error(f"Database ping failed: {e}")
        return "disconnected"


async def cache_status(cache: Optional[RedisCache]) -> str:
    if cache is None:
        return "disabled"
    try:
        await cache.ping()
        return "connected"
    except RedisError as e:
        logger.error(f"Cache ping failed: {e}")
        return "disconnected"


@system_router.get("/health")
async def health():
    settings = get_app_settings()
    return success_response(
        {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc),
            "environment": settings.environment,
            "version": settings.version,
        },
        "Server is running",
    )


@system_router.get("/system/health")
async def system_health(
    database: MongoDatabase = Depends(get_database),
    cache: Optional[RedisCache] = Depends(get_cache),
):
    """
    Report uptime, memory and the state of the backing services.
    """
    db_state = await database_status(database)
    cache_state = await cache_status(cache)
    return success_response(
        {
            "status": "healthy" if db_state == "connected" else "degraded",
            "timestamp": datetime.now(timezone.utc),
            "uptime": uptime_seconds(),
            "memory": memory_usage(),
            "database": {"status": db_state},
            "cache": {"status": cache_state},
            "services": {
                "api": "running",
                "database": db_state,
                "cache": cache_state,
            },
        },
        "System health retrieved successfully",
    )


@system_router.get("/system/status")
async def system_status(database: MongoDatabase = Depends(get_database)):
    settings = get_app_settings()
    try:
        collections = await database.db.list_collection_names()
    except PyMongoError as e:
        logger.error(f"Could not list collections: {e}")
        collections = []

    return success_response(
        {
            "server": {
                "pythonVersion": platform.python_version(),
                "platform": platform.platform(),
                "uptime": uptime_seconds(),
            },
            "database": {
                "name": database.settings.db_name,
                "collections": collections,
            },
            "memory": memory_usage(),
            "environment": settings.environment,
        },
        "System status retrieved successfully",
    )


@system_router.get("/system/bmi-tool")
async def bmi_tool():
    return success_response(
        {
            "categories": BMI_CATEGORIES,
            "examples": bmi_examples(),
            "activityLevels": {
                name: {"multiplier": value, "description": ACTIVITY_DESCRIPTIONS[name]}
                for name, value in ACTIVITY_LEVELS.items()
            },
            "formula": BMI_FORMULA,
            "usage": "POST /system/calculate-bmi with weight (kg) and height (cm)",
        },
        "BMI tool information retrieved successfully",
    )


@system_router.post("/system/calculate-bmi")
async def calculate_bmi_route(body: BmiRequest):
    """
    Calculate BMI for a weight in kg and a height in cm.
    """
    if body.weight <= 0 or body.height <= 0:
        raise ValidationError("Weight and height must be positive numbers")
    if body.weight < 20 or body.weight > 500:
        raise ValidationError("Weight must be between 20kg and 500kg")
    if body.height < 100 or body.height > 250:
        raise ValidationError("Height must be between 100cm and 250cm")

    bmi = calculate_bmi(body.weight, body.height)
    category = get_bmi_category(bmi)
    return success_response(
        {
            "input": {"weight": body.weight, "height": body.height},
            "bmi": bmi,
            "category": category,
            "interpretation": {
                "status": category,
                "range": get_bmi_range(category),
                "recommendations": get_bmi_recommendations(bmi),
            },
        },
        "BMI calculated successfully",
    )


@system_router.post("/system/health-insights")
async def health_insights(body: HealthInsightsRequest):
    if body.activity_level not in ACTIVITY_LEVELS:
        raise ValidationError(
            f"Invalid activity level. Must be one of: {', '.join(ACTIVITY_LEVELS)}"
        )
    try:
        insights = generate_health_insights(
            weight=body.weight,
            height=body.height,
            age=body.age,
            gender=body.gender,
            activity_level=ACTIVITY_LEVELS[body.activity_level],
            fitness_goals=body.fitness_goals,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e
    return success_response(insights, "Health insights generated successfully")
