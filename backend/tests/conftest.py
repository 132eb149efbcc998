import os
from datetime import datetime, timedelta, timezone

# Use in-memory sqlite for tests; must be set before fittrack.db builds the engine
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient

from fittrack.db import Base, SessionLocal, engine
from fittrack.main import create_app
from fittrack.services.route_track import GeoPoint
from fittrack.services.tracking import GeoSample, TrackingSession

T0 = datetime(2026, 3, 14, 7, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


def point(lat, lon=-122.0, seconds=0, sequence=1, elevation=None) -> GeoPoint:
    return GeoPoint(
        latitude=lat,
        longitude=lon,
        timestamp=T0 + timedelta(seconds=seconds),
        sequence=sequence,
        elevation=elevation,
    )


def sample(lat, lon=-122.0, seconds=0, elevation=None) -> GeoSample:
    return GeoSample(
        latitude=lat,
        longitude=lon,
        timestamp=T0 + timedelta(seconds=seconds),
        elevation=elevation,
    )


def sample_json(lat, lon=-122.0, seconds=0, elevation=None) -> dict:
    return {
        "latitude": lat,
        "longitude": lon,
        "elevation": elevation,
        "timestamp": (T0 + timedelta(seconds=seconds)).isoformat(),
    }


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(clock):
    def factory(**kwargs):
        return TrackingSession(clock=clock, split_km=0.111, best_segment_km=0.2, **kwargs)

    with TestClient(create_app(session_factory=factory)) as c:
        yield c
