from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TemplateCreate(BaseModel):
    name: str = Field(min_length=1)
    category: Optional[str] = None


class TemplateRead(TemplateCreate):
    id: int
    last_used_date: datetime

    model_config = ConfigDict(from_attributes=True)


class ExerciseCreate(BaseModel):
    template_id: int


class SetCreate(BaseModel):
    reps: int = Field(ge=1)
    weight: float = Field(ge=0)


class SetUpdate(BaseModel):
    """All fields optional; only provided ones change."""

    reps: Optional[int] = Field(default=None, ge=1)
    weight: Optional[float] = Field(default=None, ge=0)


class SetRead(BaseModel):
    order: int
    reps: int
    weight: float

    model_config = ConfigDict(from_attributes=True)


class ExerciseRead(BaseModel):
    id: int
    workout_id: int
    template_id: int
    date: date
    sets: list[SetRead] = []
