from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field, computed_field, field_validator

from core.entities.base import CamelModel, DocumentEntity, utc_now

USERNAME_PATTERN = r"^[a-zA-Z0-9_]{3,30}$"


class UserRole(str, Enum):
    USER = "user"
    TRAINER = "trainer"
    ADMIN = "admin"
    SPONSOR = "sponsor"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class FitnessGoal(str, Enum):
    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"
    GENERAL_FITNESS = "general_fitness"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Visibility(str, Enum):
    PUBLIC = "public"
    FRIENDS = "friends"
    PRIVATE = "private"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class SubscriptionPlan(str, Enum):
    FREE = "free"
    PREMIUM = "premium"
    PRO = "pro"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class ProfileEntity(CamelModel):
    """Personal and physical data used for health calculations."""

    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    age: Optional[int] = Field(default=None, ge=13, le=120, description="Age in years")
    gender: Optional[Gender] = None
    weight: Optional[float] = Field(default=None, ge=20, le=500, description="Weight in kg")
    height: Optional[float] = Field(default=None, ge=100, le=250, description="Height in cm")
    fitness_goals: List[FitnessGoal] = Field(
        default_factory=lambda: [FitnessGoal.GENERAL_FITNESS.value]
    )
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    avatar: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)

    @field_validator("first_name", "last_name", "bio")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if isinstance(value, str) else value

    @computed_field
    @property
    def bmi(self) -> Optional[float]:
        if self.weight and self.height:
            # Local import keeps entities free of service imports at module load
            from core.service.health_service import calculate_bmi

            return calculate_bmi(self.weight, self.height)
        return None

    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class NotificationPreferences(CamelModel):
    workout_reminders: bool = True
    new_content: bool = True
    sponsored_offers: bool = False
    social_updates: bool = True
    email: bool = True
    push: bool = True


class PrivacyPreferences(CamelModel):
    profile_visibility: Visibility = Visibility.PUBLIC
    workout_visibility: Visibility = Visibility.PUBLIC
    show_in_leaderboards: bool = True
    allow_direct_messages: bool = True


class PreferencesEntity(CamelModel):
    content_types: List[str] = Field(default_factory=list)
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)
    privacy: PrivacyPreferences = Field(default_factory=PrivacyPreferences)
    theme: Theme = Theme.AUTO


class SubscriptionEntity(CamelModel):
    plan: SubscriptionPlan = SubscriptionPlan.FREE
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    start_date: datetime = Field(default_factory=utc_now)
    end_date: Optional[datetime] = None
    features: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def is_active(self) -> bool:
        if self.status != SubscriptionStatus.ACTIVE.value:
            return False
        return self.end_date is None or self.end_date > utc_now()


# Fields never returned to clients
PRIVATE_USER_FIELDS = {
    "password",
    "email_verification_token",
    "password_reset_token",
    "password_reset_expires",
}


class UserEntity(DocumentEntity):
    """
    User entity model representing an account in the system.
    """

    email: EmailStr = Field(..., description="User's email address")
    username: str = Field(..., pattern=USERNAME_PATTERN, description="User's username")
    password: Optional[str] = Field(default=None, description="bcrypt password hash")
    role: UserRole = Field(default=UserRole.USER, description="Authorization role")
    profile: ProfileEntity = Field(default_factory=ProfileEntity)
    preferences: PreferencesEntity = Field(default_factory=PreferencesEntity)
    subscription: SubscriptionEntity = Field(default_factory=SubscriptionEntity)
    is_email_verified: bool = False
    email_verification_token: Optional[str] = None
    password_reset_token: Optional[str] = None
    password_reset_expires: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    is_active: bool = True

    @field_validator("email", "username", mode="before")
    @classmethod
    def normalize_identity(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    def can_access_premium(self) -> bool:
        return (
            self.subscription.is_active
            and self.subscription.plan in (SubscriptionPlan.PREMIUM.value, SubscriptionPlan.PRO.value)
        )

    def to_public(self) -> Dict[str, Any]:
        """Serialize the user for API responses without credentials or tokens."""
        return self.model_dump(by_alias=True, mode="json", exclude=PRIVATE_USER_FIELDS)
