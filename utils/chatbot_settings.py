from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class ChatbotSettings(BaseSettings):
    """Configuration settings for the upstream chatbot API."""

    api_url: str = Field(default="http://localhost:8000", description="Chatbot API base URL")
    api_token: Optional[str] = Field(
        default=None, description="Token sent in the x-auth-token header"
    )
    timeout_seconds: float = Field(default=30.0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, description="Retries for failed requests")

    class Config:
        """Pydantic configuration."""
        env_prefix = "CHATBOT_"
        case_sensitive = False
        validate_assignment = True
        extra = "ignore"
        env_file = ".env"
        env_file_encoding = "utf-8"
