import pytest

from core.entities import ProfileEntity, UserEntity
from core.usecase import AccountUseCase


@pytest.fixture
def user():
    return UserEntity(
        id="64b7f0c2a1b2c3d4e5f60001",
        email="test@example.com",
        username="testuser",
        profile=ProfileEntity(weight=50, height=175, fitness_goals=["weight_loss"]),
    )


@pytest.mark.asyncio
async def test_profile_summary_with_health_metrics(user):
    summary = await AccountUseCase().get_profile_summary(user)

    assert summary["subscriptionPlan"] == "free"
    assert summary["subscriptionStatus"] == "active"
    assert summary["isEmailVerified"] is False
    assert summary["healthMetrics"]["bmi"] == 16.3
    assert summary["healthMetrics"]["bmiCategory"] == "Underweight"
    assert len(summary["fitnessProfile"]["bmiWarnings"]) == 1


@pytest.mark.asyncio
async def test_profile_summary_without_measurements(user):
    user.profile = ProfileEntity()

    summary = await AccountUseCase().get_profile_summary(user)

    assert summary["healthMetrics"]["bmi"] is None
    assert summary["healthMetrics"]["bmiCategory"] is None
    assert summary["fitnessProfile"]["fitnessGoals"] == ["general_fitness"]
    assert summary["fitnessProfile"]["bmiWarnings"] == []
