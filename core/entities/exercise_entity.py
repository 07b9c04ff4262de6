from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from core.entities.base import CamelModel, DocumentEntity


class ExerciseCategory(str, Enum):
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    CORE = "core"
    ABS = "abs"
    OBLIQUES = "obliques"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    CARDIO = "cardio"
    FULL_BODY = "full_body"


class Equipment(str, Enum):
    BODYWEIGHT = "bodyweight"
    DUMBBELLS = "dumbbells"
    BARBELL = "barbell"
    MACHINE = "machine"
    RESISTANCE_BANDS = "resistance_bands"
    KETTLEBELL = "kettlebell"
    CABLE = "cable"
    PULL_UP_BAR = "pull_up_bar"
    MEDICINE_BALL = "medicine_ball"
    FOAM_ROLLER = "foam_roller"


class DifficultyModifier(str, Enum):
    EASIER = "easier"
    HARDER = "harder"
    VARIATION = "variation"


class ExerciseVariation(CamelModel):
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    difficulty_modifier: DifficultyModifier = DifficultyModifier.VARIATION
    instructions: List[str] = Field(default_factory=list)


class ExerciseEntity(DocumentEntity):
    """
    Catalog exercise with instructions, targeted muscles and intensity data.
    """

    name: str = Field(..., min_length=1, max_length=100, description="Unique exercise name")
    slug: Optional[str] = Field(default=None, description="URL-friendly name")
    description: str = Field(..., max_length=1000)
    instructions: List[str] = Field(..., min_length=1, description="Step by step instructions")
    category: ExerciseCategory
    primary_muscle_groups: List[MuscleGroup] = Field(..., min_length=1)
    secondary_muscle_groups: List[MuscleGroup] = Field(default_factory=list)
    equipment: List[Equipment] = Field(
        default_factory=lambda: [Equipment.BODYWEIGHT.value]
    )
    difficulty: Difficulty = Difficulty.BEGINNER
    images: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    gif_url: Optional[str] = None
    calories_per_minute: Optional[float] = Field(default=None, ge=0, le=50)
    average_intensity: float = Field(default=5, ge=1, le=10)
    variations: List[ExerciseVariation] = Field(default_factory=list)
    precautions: List[str] = Field(default_factory=list)
    contraindications: List[str] = Field(default_factory=list)
    is_approved: bool = False
    created_by: Optional[str] = Field(default=None, description="Creator user id")
    creator: Optional[dict] = Field(default=None, description="Creator summary from a lookup")

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("precautions", "contraindications")
    @classmethod
    def limit_notes(cls, value: List[str]) -> List[str]:
        for item in value:
            if len(item) > 200:
                raise ValueError("Each item must be at most 200 characters")
        return value
