import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

from core.entities import (
    CredentialsEntity,
    ProfileEntity,
    TokenEntity,
    UserEntity,
    utc_now,
)
from core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    TokenError,
    ValidationError,
)
from core.interface import AuthenticationInterface, UserRepositoryInterface
from core.service import (
    generate_token,
    validate_password,
    validate_reset_token_format,
    validate_username,
)
from core.service.health_service import (
    calculate_bmi,
    calculate_bmr,
    get_bmi_category,
    round_int,
    validate_bmi_for_goals,
)

FORGOT_PASSWORD_MESSAGE = (
    "If the email exists, a password reset link will be sent within a few minutes."
)
INVALID_LOGIN_ACCOUNT = "Email does not exist or the account has been deactivated"

ACTIVITY_PLANS = {
    "beginner": ("3-4 times per week", ["Walking", "Light cardio", "Bodyweight exercises"]),
    "intermediate": (
        "4-5 times per week",
        ["Weight training", "Moderate cardio", "Flexibility training"],
    ),
    "advanced": (
        "5-6 times per week",
        ["Intense training", "Sport-specific exercises", "Advanced techniques"],
    ),
}

GOAL_FOCUS_AREAS = {
    "weight_loss": ["Cardio training", "Caloric deficit", "High-intensity intervals"],
    "muscle_gain": ["Resistance training", "Progressive overload", "Adequate protein intake"],
    "strength": ["Compound movements", "Heavy lifting", "Rest and recovery"],
}


def build_fitness_recommendations(
    goals: List[str], experience_level: Optional[str], bmi: float
) -> Dict[str, Any]:
    frequency, activities = ACTIVITY_PLANS.get(experience_level, ("", []))
    focus_areas: List[str] = []
    for goal, areas in GOAL_FOCUS_AREAS.items():
        if goal in goals:
            focus_areas.extend(areas)

    caution_notes: List[str] = []
    if bmi < 18.5:
        caution_notes = [
            "Focus on healthy weight gain through muscle building",
            "Consult healthcare provider before intense training",
        ]
    elif bmi > 30:
        caution_notes = [
            "Start with low-impact exercises",
            "Focus on gradual weight loss",
            "Consider medical supervision",
        ]

    return {
        "workoutFrequency": frequency,
        "focusAreas": focus_areas,
        "cautionNotes": caution_notes,
        "suggestedActivities": list(activities),
    }


class AuthUseCase:
    """
    Use case for authentication-related operations.
    Implements account lifecycle and token handling on top of the
    authentication service and the user repository.
    """

    def __init__(
        self,
        auth_service: AuthenticationInterface,
        user_repository: UserRepositoryInterface,
        reset_token_expire_minutes: int = 15,
    ):
        self.auth_service = auth_service
        self.user_repository = user_repository
        self.reset_token_expire_minutes = reset_token_expire_minutes
        self.logger = logging.getLogger(__name__)

    async def _notify(self, email: str, purpose: str, token: str) -> None:
        # Email delivery is handled outside this service
        self.logger.info(f"Queued {purpose} email for {email} (token {token[:8]}...)")

    async def register_user(self, user_data: Dict[str, Any]) -> Tuple[UserEntity, TokenEntity]:
        """
        Register a new user with validation.

        Args:
            user_data: email, username, password, confirmPassword and profile

        Returns:
            Tuple containing (user_entity, token_entity)

        Raises:
            ValidationError: If the input is invalid
            ConflictError: If the email or username is taken
        """
        password = user_data.get("password") or ""
        if not validate_password(password):
            raise ValidationError("Password must be at least 6 characters")
        if password != user_data.get("confirm_password"):
            raise ValidationError("Passwords do not match")
        username = (user_data.get("username") or "").strip()
        if not validate_username(username):
            raise ValidationError(
                "Username must be 3-30 characters and contain only letters, numbers and underscores"
            )

        email = user_data["email"].strip().lower()
        if await self.user_repository.get_user_by_email(email):
            raise ConflictError("Email already registered")
        if await self.user_repository.get_user_by_username(username.lower()):
            raise ConflictError("Username already taken")

        user = UserEntity(
            email=email,
            username=username,
            password=await self.auth_service.hash_password(password),
            profile=ProfileEntity.model_validate(user_data.get("profile") or {}),
            email_verification_token=generate_token(),
        )
        created = await self.user_repository.create_user(user)
        await self._notify(created.email, "verification", created.email_verification_token)
        tokens = await self.auth_service.create_tokens(created)
        self.logger.info(f"User registered: {created.username}")
        return created, tokens

    async def login(self, credentials: CredentialsEntity) -> Tuple[UserEntity, TokenEntity]:
        """
        Authenticate a user and generate a token pair.

        Args:
            credentials: Login credentials

        Returns:
            Tuple containing (user_entity, token_entity)

        Raises:
            AuthenticationError: If the account is unknown, inactive or the password is wrong
        """
        user = await self.user_repository.get_user_by_email(credentials.email.strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError(INVALID_LOGIN_ACCOUNT)
        if not await self.auth_service.verify_password(credentials.password, user.password or ""):
            raise AuthenticationError("Incorrect password")

        updated = await self.user_repository.update_user(user.id, {"lastLoginAt": utc_now()})
        tokens = await self.auth_service.create_tokens(user, credentials.remember_me)
        return updated or user, tokens

    async def validate_token(self, token: str) -> Tuple[bool, Optional[UserEntity], Optional[str]]:
        """
        Validate an access token and get the associated user.

        Args:
            token: JWT token to validate

        Returns:
            Tuple containing (is_valid, user_entity, error_message)
        """
        token_data = await self.auth_service.verify_access_token(token)
        if not token_data:
            return False, None, "Invalid or expired token"

        user = await self.user_repository.get_user_by_id(token_data.user_id)
        if not user or not user.is_active:
            return False, None, "User not found"

        return True, user, None

    async def refresh_tokens(self, refresh_token: str) -> TokenEntity:
        token_data = await self.auth_service.verify_refresh_token(refresh_token)
        if not token_data:
            raise TokenError("Invalid refresh token")
        user = await self.user_repository.get_user_by_id(token_data.user_id)
        if not user or not user.is_active:
            raise TokenError("Invalid refresh token")
        return await self.auth_service.create_tokens(user)

    async def logout(self, token: str) -> bool:
        return await self.auth_service.revoke_token(token)

    async def update_profile(self, user: UserEntity, profile_data: Dict[str, Any]) -> UserEntity:
        """
        Merge partial profile data into the user's profile.

        Raises:
            ValidationError: If the merged profile is out of range
        """
        merged = user.profile.model_dump(by_alias=True, exclude={"bmi", "full_name"})
        merged.update(profile_data)
        try:
            profile = ProfileEntity.model_validate(merged)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        stored = profile.model_dump(by_alias=True, exclude={"bmi", "full_name"})
        updated = await self.user_repository.update_user(user.id, {"profile": stored})
        if not updated:
            raise NotFoundError("User not found")
        return updated

    async def change_password(
        self, user_id: str, current_password: str, new_password: str, confirm_password: str
    ) -> None:
        if not validate_password(new_password):
            raise ValidationError("New password must be at least 6 characters")
        if new_password != confirm_password:
            raise ValidationError("Passwords do not match")

        user = await self.user_repository.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if not await self.auth_service.verify_password(current_password, user.password or ""):
            raise ValidationError("Current password is incorrect")

        hashed = await self.auth_service.hash_password(new_password)
        await self.user_repository.update_user(user_id, {"password": hashed})

    async def is_email_available(self, email: str) -> bool:
        return await self.user_repository.get_user_by_email(email.strip().lower()) is None

    async def is_username_available(self, username: str) -> bool:
        username = (username or "").strip()
        if len(username) < 3:
            raise ValidationError("Username must be at least 3 characters")
        return await self.user_repository.get_user_by_username(username.lower()) is None

    async def verify_email(self, token: str) -> UserEntity:
        user = await self.user_repository.find_user({"emailVerificationToken": token}) if token else None
        if not user:
            raise ValidationError("Invalid verification token")
        return await self.user_repository.update_user(
            user.id, {"isEmailVerified": True, "emailVerificationToken": None}
        )

    async def resend_verification(self, email: str) -> None:
        user = await self.user_repository.get_user_by_email(email.strip().lower())
        if not user:
            raise NotFoundError("User not found")
        if user.is_email_verified:
            raise ValidationError("Email already verified")
        token = generate_token()
        await self.user_repository.update_user(user.id, {"emailVerificationToken": token})
        await self._notify(user.email, "verification", token)

    async def deactivate_account(self, user_id: str) -> None:
        await self.user_repository.update_user(user_id, {"isActive": False})
        self.logger.info(f"Account deactivated: {user_id}")

    async def get_health_insights(self, user: UserEntity) -> Dict[str, Any]:
        """
        Build health metrics and training recommendations from the user's profile.

        Raises:
            ValidationError: If weight, height or age is missing from the profile
        """
        profile = user.profile
        if not (profile.weight and profile.height and profile.age):
            raise ValidationError("Profile weight, height and age are required for health insights")

        bmi = calculate_bmi(profile.weight, profile.height)
        bmr = calculate_bmr(profile.weight, profile.height, profile.age, profile.gender)
        goals = list(profile.fitness_goals)
        multipliers = {
            "sedentary": 1.2,
            "light": 1.375,
            "moderate": 1.55,
            "active": 1.725,
            "veryActive": 1.9,
        }
        return {
            "healthMetrics": {
                "bmi": bmi,
                "bmiCategory": get_bmi_category(bmi),
                "weight": profile.weight,
                "height": profile.height,
                "age": profile.age,
                "estimatedBMR": bmr,
            },
            "calorieRecommendations": {
                name: round_int(bmr * factor) for name, factor in multipliers.items()
            },
            "fitnessProfile": {
                "experienceLevel": profile.experience_level,
                "fitnessGoals": goals,
                "warnings": validate_bmi_for_goals(bmi, goals),
            },
            "recommendations": build_fitness_recommendations(
                goals, profile.experience_level, bmi
            ),
        }

    async def forgot_password(self, email: str) -> str:
        user = await self.user_repository.get_user_by_email(email.strip().lower())
        if user and user.is_active:
            token = generate_token()
            expires = utc_now() + timedelta(minutes=self.reset_token_expire_minutes)
            await self.user_repository.update_user(
                user.id, {"passwordResetToken": token, "passwordResetExpires": expires}
            )
            await self._notify(user.email, "password reset", token)
        else:
            self.logger.info("Password reset requested for unknown or inactive email")
        return FORGOT_PASSWORD_MESSAGE

    async def reset_password(self, token: str, new_password: str, confirm_password: str) -> str:
        if not validate_password(new_password):
            raise ValidationError("New password must be at least 6 characters")
        if new_password != confirm_password:
            raise ValidationError("Passwords do not match")

        user = await self.user_repository.find_user(
            {"passwordResetToken": token, "passwordResetExpires": {"$gt": utc_now()}}
        )
        if not validate_reset_token_format(token) or not user:
            raise ValidationError("Token is invalid or has expired")

        await self.user_repository.update_user(
            user.id,
            {
                "password": await self.auth_service.hash_password(new_password),
                "passwordResetToken": None,
                "passwordResetExpires": None,
            },
        )
        self.logger.info(f"Password reset for user {user.id}")
        return "Password updated successfully"

    async def validate_reset_token(self, token: str) -> Dict[str, Any]:
        if not validate_reset_token_format(token):
            return {"isValid": False, "message": "Token format is invalid"}

        user = await self.user_repository.find_user({"passwordResetToken": token})
        if not user:
            return {"isValid": False, "message": "Token does not exist or has already been used"}

        now = utc_now()
        expires_at = user.password_reset_expires
        if not expires_at or expires_at <= now:
            return {"isValid": False, "message": "Token has expired", "expiresAt": expires_at}

        return {
            "isValid": True,
            "message": "Token is valid",
            "expiresAt": expires_at,
            "timeRemaining": int((expires_at - now).total_seconds()),
        }
