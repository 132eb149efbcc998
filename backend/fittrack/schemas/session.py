from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from fittrack.services.tracking import GeoSample, LocationAuthorization, SessionState


class SessionStart(BaseModel):
    name: Optional[str] = None
    template_id: Optional[int] = None


class GeoSampleIn(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    elevation: Optional[float] = None  # meters
    timestamp: datetime

    def to_sample(self) -> GeoSample:
        return GeoSample(
            latitude=self.latitude,
            longitude=self.longitude,
            timestamp=self.timestamp,
            elevation=self.elevation,
        )


class SampleBatch(BaseModel):
    samples: list[GeoSampleIn]


class SampleAck(BaseModel):
    accepted: int
    distance_km: float


class AuthorizationUpdate(BaseModel):
    status: LocationAuthorization


class GeoPointRead(BaseModel):
    sequence: int
    latitude: float
    longitude: float
    elevation: Optional[float] = None
    timestamp: datetime


class SessionRead(BaseModel):
    """Live view of the current tracking session."""

    state: SessionState
    name: Optional[str] = None
    template_id: Optional[int] = None
    distance_km: float
    elapsed_seconds: float
    paused_seconds: float
    duration: str  # "HH:MM:SS" of elapsed
    points_count: int
    error: Optional[str] = None
