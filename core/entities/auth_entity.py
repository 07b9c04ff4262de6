from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from core.entities.base import CamelModel


class TokenEntity(CamelModel):
    """
    Token pair issued on login, registration and refresh.
    """
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(..., description="Access token expiration time")


class TokenDataEntity(BaseModel):
    """
    Token data entity representing the payload of a JWT token.
    """
    user_id: str = Field(..., description="Identifier of the token owner")
    email: Optional[str] = Field(default=None, description="Email of the token owner")
    role: Optional[str] = Field(default=None, description="Role of the token owner")
    token_type: str = Field(default="access", description="access or refresh")
    exp: datetime = Field(..., description="Token expiration timestamp")


class CredentialsEntity(BaseModel):
    """
    Credentials entity for authentication requests.
    """
    email: str = Field(..., description="Email for authentication")
    password: str = Field(..., description="Password for authentication")
    remember_me: bool = Field(default=False, description="Issue a long-lived refresh token")
