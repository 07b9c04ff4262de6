from pydantic import Field
from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    """JWT and password hashing settings."""

    jwt_secret: str = Field(
        default="default_secret_key_for_development_only",
        description="Secret used to sign access tokens",
    )
    jwt_refresh_secret: str = Field(
        default="default_refresh_secret_for_development_only",
        description="Secret used to sign refresh tokens",
    )
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=15, description="Access token lifetime in minutes"
    )
    refresh_token_expire_days: int = Field(
        default=1, description="Refresh token lifetime in days"
    )
    remember_me_expire_days: int = Field(
        default=30, description="Refresh token lifetime in days when remember me is set"
    )
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor")
    reset_token_expire_minutes: int = Field(
        default=15, description="Password reset token lifetime in minutes"
    )

    class Config:
        env_prefix = "AUTH_"
        case_sensitive = False
        validate_assignment = True
        extra = "ignore"
        env_file = ".env"
        env_file_encoding = "utf-8"
