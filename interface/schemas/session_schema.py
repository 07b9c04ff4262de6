from typing import List, Optional

from pydantic import Field

from core.entities import CamelModel, CompletedSet, Mood, SessionStatus


class StartSessionRequest(CamelModel):
    workout_id: str


class UpdateSessionRequest(CamelModel):
    current_exercise_index: Optional[int] = Field(default=None, ge=0)
    status: Optional[SessionStatus] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    mood: Optional[Mood] = None
    average_heart_rate: Optional[int] = Field(default=None, ge=30, le=220)
    max_heart_rate: Optional[int] = Field(default=None, ge=30, le=220)


class CompleteExerciseRequest(CamelModel):
    exercise_id: str
    exercise_index: int = Field(..., ge=0)
    sets: List[CompletedSet] = Field(default_factory=list)
    calories_burned: float = Field(default=0, ge=0)
    notes: Optional[str] = Field(default=None, max_length=200)
