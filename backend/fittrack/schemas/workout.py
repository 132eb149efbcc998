from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkoutKind(str, Enum):
    strength = "strength"
    cardio = "cardio"


class SplitRead(BaseModel):
    index: int
    pace: float  # min/km
    duration_seconds: float


class CardioSummaryRead(BaseModel):
    distance_km: float
    duration_seconds: float
    average_pace: float
    pace: Optional[str] = None  # "M:SS" per km
    best_pace: Optional[float] = None
    elevation_gain_m: Optional[float] = None
    elevation_loss_m: Optional[float] = None
    splits: Optional[list[SplitRead]] = None

    model_config = ConfigDict(from_attributes=True)


class ManualCardioCreate(BaseModel):
    """Cardio logged by hand: no route, so no splits/elevation/best pace."""

    date: date
    name: str
    notes: Optional[str] = None
    template_id: Optional[int] = None
    distance_km: float = Field(ge=0)
    duration: str  # "HH:MM:SS"


class StrengthWorkoutCreate(BaseModel):
    date: date
    name: str
    notes: Optional[str] = None


class WorkoutRead(BaseModel):
    id: int
    date: date
    name: str
    notes: Optional[str] = None
    kind: WorkoutKind
    finalized: bool
    distance_km: Optional[float] = None
    duration: Optional[str] = None  # "HH:MM:SS"
    route_id: Optional[int] = None
    template_id: Optional[int] = None
    cardio: Optional[CardioSummaryRead] = None
