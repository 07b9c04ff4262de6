from typing import Optional

from pydantic import EmailStr, Field

from core.entities import CamelModel, ProfileEntity


class RegisterRequest(CamelModel):
    email: EmailStr
    username: str
    password: str
    confirm_password: str
    profile: Optional[ProfileEntity] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str
    remember_me: bool = False


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str
    confirm_new_password: str


class EmailRequest(CamelModel):
    email: EmailStr


class UsernameRequest(CamelModel):
    username: str


class TokenRequest(CamelModel):
    token: str = Field(..., min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class ResetPasswordRequest(CamelModel):
    token: str
    new_password: str
    confirm_new_password: str
