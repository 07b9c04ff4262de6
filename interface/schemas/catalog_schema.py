from typing import Any, Dict, List, Optional

from pydantic import Field

from core.entities import CamelModel, WorkoutExercise


class SortRequest(CamelModel):
    field: Optional[str] = None
    order: Optional[str] = None


class ListRequest(CamelModel):
    """Body of the catalog listing endpoints."""

    page: int = 1
    limit: int = 10
    filters: Dict[str, Any] = Field(default_factory=dict)
    sort: Optional[SortRequest] = None
    options: Dict[str, Any] = Field(default_factory=dict)


class MyWorkoutsRequest(CamelModel):
    page: int = 1
    limit: int = 12
    category: Optional[str] = None
    difficulty: Optional[str] = None
    search: Optional[str] = None


class CreateWorkoutRequest(CamelModel):
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    difficulty: str
    estimated_duration: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    is_public: bool = False
    exercises: List[WorkoutExercise]
    muscle_groups: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    calories_burned: Optional[float] = None


class CreateExerciseRequest(CamelModel):
    name: str
    description: Optional[str] = None
    instructions: List[str]
    category: str
    primary_muscle_groups: List[str]
    secondary_muscle_groups: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    difficulty: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    gif_url: Optional[str] = None
    calories_per_minute: Optional[float] = None
    average_intensity: Optional[int] = None
    variations: List[Dict[str, Any]] = Field(default_factory=list)
    precautions: List[str] = Field(default_factory=list)
    contraindications: List[str] = Field(default_factory=list)
    is_approved: bool = False
