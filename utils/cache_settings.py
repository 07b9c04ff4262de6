from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    """Configuration settings for the Redis cache."""

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    enabled: bool = Field(default=False, description="Enable the Redis cache")
    url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    key_prefix: str = Field(default="fitness-app:", description="Prefix for every cache key")
    default_ttl: int = Field(default=900, description="Default TTL in seconds")
