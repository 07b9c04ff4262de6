from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, computed_field

from core.entities.base import CamelModel, DocumentEntity, utc_now


class SessionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    STOPPED = "stopped"


IN_PROGRESS_STATUSES = (SessionStatus.ACTIVE.value, SessionStatus.PAUSED.value)
TERMINAL_STATUSES = (SessionStatus.COMPLETED.value, SessionStatus.STOPPED.value)


class Mood(str, Enum):
    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    TIRED = "tired"
    POOR = "poor"


class CompletedSet(CamelModel):
    set_index: int = Field(..., ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0, le=1000)
    duration: int = Field(default=0, ge=0, description="Seconds")
    rest_time: Optional[int] = Field(default=None, ge=0)
    completed_at: datetime = Field(default_factory=utc_now)
    notes: Optional[str] = Field(default=None, max_length=200)


class CompletedExercise(CamelModel):
    exercise_id: str
    exercise_index: int = Field(..., ge=0)
    sets: List[CompletedSet] = Field(default_factory=list)
    total_duration: int = Field(default=0, ge=0)
    calories_burned: float = Field(default=0, ge=0)
    is_completed: bool = True
    notes: Optional[str] = Field(default=None, max_length=200)
    started_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime = Field(default_factory=utc_now)


class WorkoutSessionEntity(DocumentEntity):
    """
    One execution of a workout by a user.

    Status moves active <-> paused until it reaches completed or stopped,
    which are terminal.
    """

    user_id: str
    workout_id: str
    start_time: datetime = Field(default_factory=utc_now)
    end_time: Optional[datetime] = None
    total_duration: int = Field(default=0, ge=0, description="Seconds, excluding pauses")
    paused_duration: int = Field(default=0, ge=0, description="Seconds spent paused")
    paused_at: Optional[datetime] = None
    current_exercise_index: int = Field(default=0, ge=0)
    total_exercises: int = Field(..., ge=1)
    completed_exercises: List[CompletedExercise] = Field(default_factory=list)
    total_calories_burned: float = Field(default=0, ge=0)
    average_heart_rate: Optional[int] = Field(default=None, ge=30, le=220)
    max_heart_rate: Optional[int] = Field(default=None, ge=30, le=220)
    status: SessionStatus = SessionStatus.ACTIVE
    completion_percentage: int = Field(default=0, ge=0, le=100)
    notes: Optional[str] = Field(default=None, max_length=1000)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    mood: Optional[Mood] = None

    @computed_field
    @property
    def actual_duration(self) -> int:
        # total_duration is already net of paused time
        return self.total_duration

    @computed_field
    @property
    def calories_per_minute(self) -> float:
        if self.actual_duration <= 0:
            return 0
        return self.total_calories_burned / (self.actual_duration / 60)

    @computed_field
    @property
    def is_in_progress(self) -> bool:
        return self.status in IN_PROGRESS_STATUSES
