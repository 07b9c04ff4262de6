from typing import Any, Dict, Optional

from core.entities import UserEntity
from core.service.health_service import calculate_bmi, get_bmi_category, validate_bmi_for_goals


class AccountUseCase:
    """Read model for the account page."""

    async def get_profile_summary(self, user: UserEntity) -> Dict[str, Any]:
        """
        Summarize account status, health metrics and fitness profile.

        BMI fields are None when the profile lacks weight or height.
        """
        profile = user.profile
        bmi: Optional[float] = None
        if profile.weight and profile.height:
            bmi = calculate_bmi(profile.weight, profile.height)
        goals = list(profile.fitness_goals)

        return {
            "joinDate": user.created_at,
            "lastLogin": user.last_login_at,
            "isEmailVerified": user.is_email_verified,
            "subscriptionPlan": user.subscription.plan,
            "subscriptionStatus": user.subscription.status,
            "healthMetrics": {
                "bmi": bmi,
                "bmiCategory": get_bmi_category(bmi) if bmi is not None else None,
                "weight": profile.weight,
                "height": profile.height,
                "age": profile.age,
            },
            "fitnessProfile": {
                "experienceLevel": profile.experience_level,
                "fitnessGoals": goals,
                "bmiWarnings": validate_bmi_for_goals(bmi, goals) if bmi is not None else [],
            },
        }
