from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

from fittrack.services.ledger import MetricKind
from fittrack.schemas.workout import SplitRead


class MetricRead(BaseModel):
    id: int
    template_id: int
    kind: MetricKind
    value: float
    date: date

    model_config = ConfigDict(from_attributes=True)


class MetricCreate(BaseModel):
    kind: MetricKind
    value: float
    date: date


class RecordResult(BaseModel):
    recorded: bool
    metric: Optional[MetricRead] = None
    best: Optional[MetricRead] = None


class StrengthSnapshotRead(BaseModel):
    exercise_id: int
    template_id: int
    date: date
    max_weight: float
    max_reps: int
    total_volume: float
    average_weight: float
    one_rep_max: float

    model_config = ConfigDict(from_attributes=True)


class CardioProgressRead(BaseModel):
    workout_id: int
    route_id: Optional[int] = None
    template_id: Optional[int] = None
    date: date
    distance_km: float
    duration_seconds: int
    average_pace: float
    best_pace: Optional[float] = None
    elevation_gain_m: Optional[float] = None
    elevation_loss_m: Optional[float] = None
    splits: Optional[list[SplitRead]] = None

    model_config = ConfigDict(from_attributes=True)


class SeriesPoint(BaseModel):
    date: date
    value: float
