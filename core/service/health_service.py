"""
Health calculations: BMI, BMR, TDEE, body fat, calorie and water recommendations.

All rounding is half-up so results match the values shown in client apps.
"""
import math
from typing import Any, Dict, List, Optional, Sequence

ACTIVITY_LEVELS: Dict[str, float] = {
    "SEDENTARY": 1.2,
    "LIGHT": 1.375,
    "MODERATE": 1.55,
    "ACTIVE": 1.725,
    "VERY_ACTIVE": 1.9,
}

ACTIVITY_DESCRIPTIONS: Dict[str, str] = {
    "SEDENTARY": "Little to no exercise, desk job",
    "LIGHT": "Light exercise 1-3 days/week",
    "MODERATE": "Moderate exercise 3-5 days/week",
    "ACTIVE": "Heavy exercise 6-7 days/week",
    "VERY_ACTIVE": "Very heavy exercise, physical job",
}

BMI_CATEGORIES: Dict[str, str] = {
    "underweight": "BMI < 18.5",
    "normal": "BMI 18.5 - 24.9",
    "overweight": "BMI 25 - 29.9",
    "obese": "BMI ≥ 30",
}

BMI_FORMULA = "BMI = weight(kg) / height(m)²"


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_bmi(weight: float, height: float) -> float:
    """
    Calculate BMI from weight in kg and height in cm.

    Raises:
        ValueError: If weight or height is not positive
    """
    if weight <= 0 or height <= 0:
        raise ValueError("Weight and height must be positive numbers")
    height_m = height / 100
    return round_half_up(weight / (height_m * height_m), 1)


def get_bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def get_bmi_risk_level(bmi: float) -> str:
    if bmi < 16:
        return "Severe underweight - High risk"
    if bmi < 18.5:
        return "Underweight - Moderate risk"
    if bmi < 25:
        return "Normal weight - Low risk"
    if bmi < 30:
        return "Overweight - Moderate risk"
    if bmi < 35:
        return "Obese Class I - High risk"
    if bmi < 40:
        return "Obese Class II - Very high risk"
    return "Obese Class III - Extremely high risk"


def calculate_bmr(weight: float, height: float, age: float, gender: Optional[str]) -> float:
    """Mifflin-St Jeor basal metabolic rate in kcal/day."""
    base = 10 * weight + 6.25 * height - 5 * age
    return base + 5 if gender == "male" else base - 161


def calculate_tdee(bmr: float, activity_level: float) -> int:
    return round_int(bmr * activity_level)


def validate_bmi_for_goals(bmi: float, fitness_goals: Sequence[str]) -> List[str]:
    """
    Return warnings about goals that do not suit the given BMI.

    Args:
        bmi: BMI value
        fitness_goals: The user's fitness goals

    Returns:
        List of warning messages, empty when nothing applies
    """
    warnings = []
    if bmi < 18.5 and "weight_loss" in fitness_goals:
        warnings.append("BMI indicates underweight. Weight loss goals may not be appropriate.")
    if bmi > 30 and "muscle_gain" in fitness_goals:
        warnings.append("Consider combining muscle gain with weight management goals.")
    if bmi > 35:
        warnings.append(
            "BMI indicates severe obesity. Consult healthcare provider before starting intense exercise."
        )
    if bmi < 16:
        warnings.append("BMI indicates severe underweight. Medical supervision recommended.")
    return warnings


def calculate_ideal_weight_range(height: float) -> Dict[str, float]:
    height_m = height / 100
    return {
        "min": round_half_up(18.5 * height_m * height_m, 1),
        "max": round_half_up(24.9 * height_m * height_m, 1),
    }


def estimate_body_fat(bmi: float, age: float, gender: Optional[str]) -> float:
    """Rough body fat percentage estimate from BMI and age."""
    offset = 16.2 if gender == "male" else 5.4
    body_fat = 1.2 * bmi + 0.23 * age - offset
    return max(0, round_half_up(body_fat, 1))


def get_body_fat_category(body_fat: float, gender: Optional[str]) -> str:
    if gender == "male":
        limits = ((6, "Essential fat"), (14, "Athletic"), (18, "Fitness"), (25, "Average"))
    else:
        limits = ((14, "Essential fat"), (21, "Athletic"), (25, "Fitness"), (32, "Average"))
    for limit, label in limits:
        if body_fat < limit:
            return label
    return "Obese"


def get_calorie_recommendations(tdee: float, goal: Optional[str]) -> Dict[str, Any]:
    if goal == "weight_loss":
        return {
            "calories": round_int(tdee * 0.8),
            "description": "Moderate caloric deficit for sustainable weight loss",
            "macroSplit": {"protein": 35, "carbs": 35, "fats": 30},
        }
    if goal == "muscle_gain":
        return {
            "calories": round_int(tdee * 1.15),
            "description": "Moderate caloric surplus for muscle building",
            "macroSplit": {"protein": 30, "carbs": 45, "fats": 25},
        }
    if goal == "strength":
        return {
            "calories": round_int(tdee * 1.05),
            "description": "Small caloric surplus to support strength gains",
            "macroSplit": {"protein": 25, "carbs": 50, "fats": 25},
        }
    if goal == "endurance":
        return {
            "calories": round_int(tdee * 1.1),
            "description": "Adequate calories to fuel endurance training",
            "macroSplit": {"protein": 20, "carbs": 60, "fats": 20},
        }
    return {
        "calories": tdee,
        "description": "Maintenance calories for general fitness",
        "macroSplit": {"protein": 25, "carbs": 45, "fats": 30},
    }


def calculate_water_intake(weight: float, activity_level: float) -> float:
    """Daily water intake in liters, 35 ml per kg adjusted for activity."""
    water = weight * 0.035
    if activity_level >= ACTIVITY_LEVELS["ACTIVE"]:
        water *= 1.3
    elif activity_level >= ACTIVITY_LEVELS["MODERATE"]:
        water *= 1.15
    return round_half_up(water, 1)


def activity_level_name(multiplier: float) -> str:
    for name, value in ACTIVITY_LEVELS.items():
        if value == multiplier:
            return name
    return "MODERATE"


def generate_health_insights(
    weight: float,
    height: float,
    age: float,
    gender: Optional[str],
    activity_level: float,
    fitness_goals: Sequence[str],
) -> Dict[str, Any]:
    """
    Combine every calculation into a single health report.

    Args:
        weight: Weight in kg
        height: Height in cm
        age: Age in years
        gender: male, female or other
        activity_level: Activity multiplier from ACTIVITY_LEVELS
        fitness_goals: The user's goals, the first one is treated as primary

    Returns:
        Dictionary with bmi, metabolism, bodyComposition, recommendations,
        warnings and fitnessGoals sections
    """
    goals = list(fitness_goals)
    bmi = calculate_bmi(weight, height)
    bmr = calculate_bmr(weight, height, age, gender)
    tdee = calculate_tdee(bmr, activity_level)
    body_fat = estimate_body_fat(bmi, age, gender)
    water = calculate_water_intake(weight, activity_level)
    primary_goal = goals[0] if goals else "general_fitness"

    return {
        "bmi": {
            "value": bmi,
            "category": get_bmi_category(bmi),
            "riskLevel": get_bmi_risk_level(bmi),
            "idealWeightRange": calculate_ideal_weight_range(height),
        },
        "metabolism": {
            "bmr": bmr,
            "tdee": tdee,
            "activityLevel": activity_level_name(activity_level),
        },
        "bodyComposition": {
            "estimatedBodyFat": body_fat,
            "bodyFatCategory": get_body_fat_category(body_fat, gender),
        },
        "recommendations": {
            "calories": get_calorie_recommendations(tdee, primary_goal),
            "waterIntake": {
                "liters": water,
                "description": f"{water:g}L daily, adjust based on climate and sweat rate",
            },
        },
        "warnings": validate_bmi_for_goals(bmi, goals),
        "fitnessGoals": goals,
    }


def get_bmi_range(category: str) -> str:
    return {
        "Underweight": "< 18.5",
        "Normal weight": "18.5 - 24.9",
        "Overweight": "25 - 29.9",
        "Obese": "≥ 30",
    }.get(category, "Unknown")


def get_bmi_recommendations(bmi: float) -> List[str]:
    if bmi < 18.5:
        return [
            "Consider consulting a healthcare provider for weight gain guidance",
            "Focus on nutrient-dense foods and strength training",
            "Monitor your health regularly",
        ]
    if bmi < 25:
        return [
            "Maintain your current healthy weight",
            "Continue regular physical activity",
            "Follow a balanced diet",
        ]
    if bmi < 30:
        return [
            "Consider gradual weight loss through diet and exercise",
            "Increase physical activity to 150+ minutes per week",
            "Focus on portion control and healthy food choices",
        ]
    return [
        "Consult healthcare provider for weight management plan",
        "Start with low-impact exercises",
        "Consider professional nutritional guidance",
        "Monitor health markers regularly",
    ]


def bmi_examples() -> List[Dict[str, Any]]:
    examples = []
    for weight, height in ((50, 170), (70, 175), (80, 180), (100, 170)):
        bmi = calculate_bmi(weight, height)
        examples.append(
            {"weight": weight, "height": height, "bmi": bmi, "category": get_bmi_category(bmi)}
        )
    return examples
