import re
from typing import Any, Dict


def slugify(name: str) -> str:
    """Lowercase the name and join alphanumeric runs with dashes."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def escape_regex(text: str) -> str:
    return re.escape(text.strip())


def calculate_difficulty(exercise: Dict[str, Any]) -> str:
    """
    Estimate an exercise's difficulty from its complexity.

    Args:
        exercise: Exercise data using camelCase keys

    Returns:
        beginner, intermediate or advanced
    """
    score = 0.0
    instructions = exercise.get("instructions") or []
    if len(instructions) > 5:
        score += 1
    if len(instructions) > 8:
        score += 1

    equipment = exercise.get("equipment") or []
    if "bodyweight" in equipment:
        score += 0
    elif "dumbbells" in equipment:
        score += 1
    elif "machine" in equipment:
        score += 2
    else:
        score += 1.5

    muscles = len(exercise.get("primaryMuscleGroups") or []) + len(
        exercise.get("secondaryMuscleGroups") or []
    )
    if muscles >= 3:
        score += 1

    if exercise.get("precautions") or exercise.get("contraindications"):
        score += 0.5

    if (exercise.get("averageIntensity") or 0) >= 8:
        score += 1

    if score <= 2:
        return "beginner"
    if score <= 4:
        return "intermediate"
    return "advanced"
