from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from core.entities.base import CamelModel, DocumentEntity
from core.entities.exercise_entity import Difficulty


class WorkoutCategory(str, Enum):
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    HIIT = "hiit"
    CROSSTRAINING = "crosstraining"
    SPORTS = "sports"
    RECOVERY = "recovery"


class WorkoutExercise(CamelModel):
    """One exercise slot inside a workout plan."""

    exercise_id: str = Field(..., pattern=r"^[0-9a-fA-F]{24}$", description="Exercise id")
    order: int = Field(..., ge=1)
    sets: Optional[int] = Field(default=None, ge=1, le=20)
    reps: Optional[int] = Field(default=None, ge=1, le=100)
    duration: Optional[int] = Field(default=None, ge=1, le=3600, description="Seconds")
    weight: Optional[float] = Field(default=None, ge=0, le=1000, description="kg")
    rest_time: int = Field(default=60, ge=0, le=600, description="Seconds")
    notes: Optional[str] = Field(default=None, max_length=200)


class WorkoutEntity(DocumentEntity):
    """
    A user-authored workout plan made of ordered exercises.
    """

    user_id: str = Field(..., description="Owner user id")
    name: str = Field(..., min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: Optional[WorkoutCategory] = None
    difficulty: Difficulty
    estimated_duration: Optional[int] = Field(default=None, ge=5, le=480, description="Minutes")
    tags: List[str] = Field(default_factory=list)
    is_public: bool = False
    exercises: List[WorkoutExercise] = Field(..., min_length=1, max_length=50)
    muscle_groups: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    calories_burned: Optional[float] = Field(default=None, ge=0)
    is_sponsored: bool = False
    likes: List[str] = Field(default_factory=list)
    like_count: int = Field(default=0, ge=0)
    saves: List[str] = Field(default_factory=list)
    save_count: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    completions: int = Field(default=0, ge=0)
    average_rating: float = Field(default=0, ge=0, le=5)
    total_ratings: int = Field(default=0, ge=0)
    user: Optional[Dict[str, Any]] = Field(default=None, description="Owner summary from a lookup")
    exercise_details: Optional[List[Dict[str, Any]]] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        tags: List[str] = []
        for tag in value:
            tag = str(tag).strip().lower()
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    @field_validator("tags")
    @classmethod
    def limit_tags(cls, value: List[str]) -> List[str]:
        if len(value) > 10:
            raise ValueError("Maximum 10 tags allowed")
        for tag in value:
            if len(tag) > 20:
                raise ValueError("Each tag must be at most 20 characters")
        return value

    @model_validator(mode="after")
    def unique_exercise_order(self) -> "WorkoutEntity":
        seen = set()
        for exercise in self.exercises:
            if exercise.order in seen:
                raise ValueError(f"Exercise order {exercise.order} is already used")
            seen.add(exercise.order)
        return self
