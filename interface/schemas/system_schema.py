from typing import List, Optional

from pydantic import BaseModel, Field

from core.entities import CamelModel


class BmiRequest(BaseModel):
    weight: float
    height: float


class HealthInsightsRequest(CamelModel):
    weight: float
    height: float
    age: int
    gender: str
    activity_level: str
    fitness_goals: List[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    message: Optional[str] = None
    conversation_id: Optional[str] = None


class DeleteFilesRequest(CamelModel):
    public_ids: List[str] = Field(default_factory=list)
