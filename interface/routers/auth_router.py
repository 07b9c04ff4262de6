from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from core.entities import CredentialsEntity, UserEntity
from core.usecase import AuthUseCase
from infrastructure.auth.exceptions import TokenMissingError
from infrastructure.di import get_current_user_token
from interface.di import get_auth_service, get_current_user
from interface.schemas import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenRequest,
    UsernameRequest,
    success_response,
)

PROFILE_COMPUTED_FIELDS = {"bmi", "full_name"}

# Create auth router
auth_router = APIRouter(
    prefix="/auth",
    tags=["authentication"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Validation error"},
        status.HTTP_401_UNAUTHORIZED: {"description": "Authentication failed"},
    },
)


@auth_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    auth_usecase: AuthUseCase = Depends(get_auth_service),
):
    """
    Create an account and sign the user in.
    """
    profile = (
        body.profile.model_dump(by_alias=True, exclude=PROFILE_COMPUTED_FIELDS, exclude_unset=True)
        if body.profile
        else {}
    )
    user, tokens = await auth_usecase.register_user(
        {
            "email": body.email,
            "username": body.username,
            "password": body.password,
            "confirm_password": body.confirm_password,
            "profile": profile,
        }
    )
    return success_response(
        {"user": user, "tokens": tokens},
        "User registered successfully",
        status.HTTP_201_CREATED,
    )


@auth_router.post("/login")
async def login(body: LoginRequest, auth_usecase: AuthUseCase = Depends(get_auth_service)):
    """
    Authenticate with email and password and receive a token pair.
    """
    credentials = CredentialsEntity(
        email=body.email, password=body.password, remember_me=body.remember_me
    )
    user, tokens = await auth_usecase.login(credentials)
    return success_response({"user": user, "tokens": tokens}, "Login successful")


@auth_router.get("/me")
async def me(user: UserEntity = Depends(get_current_user)):
    return success_response({"user": user}, "User profile retrieved successfully")


@auth_router.put("/profile")
async def update_profile(
    profile: Dict[str, Any] = Body(...),
    user: UserEntity = Depends(get_current_user),
    auth_usecase: AuthUseCase = Depends(get_auth_service),
):
    """
    Partially update the current user's profile.
    """
    updated = await auth_usecase.update_profile(user, profile)
    return success_response({"user": updated}, "Profile updated successfully")


@auth_router.put("/change-password")
async def change_password(
    body: ChangePasswordRequest,
    user: UserEntity = Depends(get_current_user),
    auth_usecase: AuthUseCase = Depends(get_auth_service),
):
    await auth_usecase.change_password(
        user.id, body.current_password, body.new_password, body.confirm_new_password
    )
    return success_response(None, "Password changed successfully")


@auth_router.post("/check-email")
async def check_email(body: EmailRequest, auth_usecase: AuthUseCase = Depends(get_auth_service)):
    available = await auth_usecase.is_email_available(body.email)
    return success_response(
        {"available": available}, "Email available" if available else "Email already exists"
    )


@auth_router.post("/check-username")
async def check_username(
    body: UsernameRequest, auth_usecase: AuthUseCase = Depends(get_auth_service)
):
    available = await auth_usecase.is_username_available(body.username)
    return success_response(
        {"available": available}, "Username available" if available else "Username already taken"
    )


@auth_router.post("/verify-email")
async def verify_email(body: TokenRequest, auth_usecase: AuthUseCase = Depends(get_auth_service)):
    user = await auth_usecase.verify_email(body.token)
    return success_response({"user": user}, "Email verified successfully")


@auth_router.post("/resend-verification")
async def resend_verification(
    body: EmailRequest, auth_usecase: AuthUseCase = Depends(get_auth_service)
):
    await auth_usecase.resend_verification(body.email)
    return success_response(None, "Verification email sent successfully")


@auth_router.post("/logout")
async def logout(
    user: UserEntity = Depends(get_current_user),
    token: str = Depends(get_current_user_token),
    auth_usecase: AuthUseCase = Depends(get_auth_service),
):
    """
    Log out by invalidating the current access token.
    """
    if not token:
        raise TokenMissingError()
    await auth_usecase.logout(token)
    return success_response(None, "Logged out successfully")


@auth_router.delete("/deactivate")
async def deactivate(
    user: UserEntity = Depends(get_current_user),
    auth_usecase: AuthUseCase = Depends(get_auth_service),
):
    await auth_usecase.deactivate_account(user.id)
    return success_response(None, "Account deactivated successfully")


@auth_router.get("/health-insights")
async def health_insights(
    user: UserEntity = Depends(get_current_user),
    auth_usecase: AuthUseCase = Depends(get_auth_service),
):
    insights = await auth_usecase.get_health_insights(user)
    return success_response(insights, "Health insights retrieved successfully")


@auth_router.post("/refresh")
async def refresh(body: RefreshRequest, auth_usecase: AuthUseCase = Depends(get_auth_service)):
    """
    Exchange a refresh token for a new token pair.
    """
    tokens = await auth_usecase.refresh_tokens(body.refresh_token)
    return success_response({"tokens": tokens}, "Token refreshed successfully")


@auth_router.post("/forgot-password")
async def forgot_password(
    body: EmailRequest, auth_usecase: AuthUseCase = Depends(get_auth_service)
):
    message = await auth_usecase.forgot_password(body.email)
    return success_response(None, message)


@auth_router.post("/reset-password")
async def reset_password(
    body: ResetPasswordRequest, auth_usecase: AuthUseCase = Depends(get_auth_service)
):
    message = await auth_usecase.reset_password(
        body.token, body.new_password, body.confirm_new_password
    )
    return success_response(None, message)


@auth_router.get("/validate-reset-token/{token}")
async def validate_reset_token(token: str, auth_usecase: AuthUseCase = Depends(get_auth_service)):
    result = await auth_usecase.validate_reset_token(token)
    return success_response(result, result["message"])
