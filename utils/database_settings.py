from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoDbSettings(BaseSettings):
    """Configuration settings for MongoDB."""

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    db_name: str = Field(default="fitness_app", description="MongoDB database name")
    min_pool_size: int = Field(
        default=0, description="MongoDB minimum connection pool size"
    )
    max_pool_size: int = Field(
        default=10, description="MongoDB maximum connection pool size"
    )
    timeout_ms: int = Field(
        default=5000, description="MongoDB server selection timeout in milliseconds"
    )
