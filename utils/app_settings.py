from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Configuration settings model using Pydantic for validation.
    Loads configuration from environment variables and .env file.
    """

    # Basic settings
    name: str = Field(default="FitTrack API", description="Name of the application")
    debug_mode: bool = Field(default=False, description="Enable debug mode")
    version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Deployment environment")

    # Server settings
    host: str = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=5000, description="Server port")
    api_prefix: str = Field(default="/api/v1", description="Prefix for all API routes")

    # Rate limiting
    rate_limit: str = Field(
        default="100/15minutes", description="Default rate limit per client address"
    )

    class Config:
        """Pydantic configuration."""
        env_prefix = "APP_"  # Environment variables prefix
        case_sensitive = False
        validate_assignment = True
        extra = "ignore"  # Ignore extra attributes
        env_file = ".env"  # Specify the .env file to load
        env_file_encoding = "utf-8"
