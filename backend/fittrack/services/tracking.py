"""Live GPS tracking session: state machine over a RouteTrack."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import AsyncIterable, Callable

from loguru import logger

from fittrack.core.constants import LOCATION_DENIED_MESSAGE
from fittrack.core.errors import AlreadyActiveError, InvalidStateError
from fittrack.core.time_utils import utc_now
from fittrack.services.cardio import CardioSummary, derive_cardio
from fittrack.services.route_track import GeoPoint, RouteTrack


class SessionState(str, Enum):
    ready = "ready"
    tracking = "tracking"
    paused = "paused"
    completed = "completed"


class LocationAuthorization(str, Enum):
    not_determined = "not_determined"
    authorized = "authorized"
    denied = "denied"
    restricted = "restricted"


@dataclass(frozen=True, slots=True)
class GeoSample:
    """A raw location fix as delivered by the transport (no sequence yet)."""

    latitude: float
    longitude: float
    timestamp: datetime
    elevation: float | None = None


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    state: SessionState
    distance_km: float
    elapsed_seconds: float
    paused_seconds: float
    points: tuple[GeoPoint, ...]
    error: str | None


class TrackingSession:
    """Records one cardio route.

    All mutation goes through the session lock, so samples can be fed from
    transport callbacks while readers take snapshots. The route is sealed and
    summarized exactly once, on stop().
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utc_now,
        split_km: float | None = None,
        best_segment_km: float | None = None,
        name: str | None = None,
        template_id: int | None = None,
    ):
        self._clock = clock
        self._lock = threading.RLock()
        self._split_km = split_km
        self._best_segment_km = best_segment_km
        self.name = name
        self.template_id = template_id

        self.state = SessionState.ready
        self.route: RouteTrack | None = None
        self.total_paused = timedelta(0)
        self.last_pause_start: datetime | None = None
        self.summary: CardioSummary | None = None
        self.error: str | None = None

    @property
    def is_active(self) -> bool:
        return self.state in (SessionState.tracking, SessionState.paused)

    @property
    def distance_km(self) -> float:
        return self.route.distance_km if self.route else 0.0

    def start(self) -> None:
        with self._lock:
            if self.state != SessionState.ready:
                raise AlreadyActiveError(f"Session already {self.state.value}")
            self.route = RouteTrack(start_time=self._clock())
            self.state = SessionState.tracking
        logger.info(f"Tracking started at {self.route.start_time.isoformat()}")

    def pause(self) -> None:
        with self._lock:
            self._require(SessionState.tracking, "pause")
            self.last_pause_start = self._clock()
            self.state = SessionState.paused
        logger.info("Tracking paused")

    def resume(self) -> None:
        with self._lock:
            self._require(SessionState.paused, "resume")
            self.total_paused += self._clock() - self.last_pause_start
            self.last_pause_start = None
            self.state = SessionState.tracking
        logger.info(f"Tracking resumed (paused {self.total_paused.total_seconds():.0f}s total)")

    def stop(self) -> CardioSummary:
        with self._lock:
            if not self.is_active:
                raise InvalidStateError(f"Cannot stop a session that is {self.state.value}")
            now = self._clock()
            if self.state == SessionState.paused:
                self.total_paused += now - self.last_pause_start
                self.last_pause_start = None
            self.route.seal(now)
            self.state = SessionState.completed
            self.summary = derive_cardio(
                self.route,
                self.elapsed(now).total_seconds(),
                split_km=self._split_km,
                best_segment_km=self._best_segment_km,
            )
        logger.info(
            f"Tracking stopped: {self.summary.distance_km:.3f} km in "
            f"{self.summary.duration_seconds:.0f}s over {len(self.route)} points"
        )
        return self.summary

    def ingest(self, sample: GeoSample) -> bool:
        """Append a sample to the route if tracking; returns whether it was accepted."""
        with self._lock:
            if self.state != SessionState.tracking:
                logger.debug(f"Ignoring location sample while {self.state.value}")
                return False
            self.route.append(
                GeoPoint(
                    latitude=sample.latitude,
                    longitude=sample.longitude,
                    timestamp=sample.timestamp,
                    sequence=self.route.next_sequence,
                    elevation=sample.elevation,
                )
            )
            return True

    async def consume(self, samples: AsyncIterable[GeoSample]) -> int:
        """Feed an async sample stream until it ends or the session completes."""
        accepted = 0
        async for sample in samples:
            if self.state == SessionState.completed:
                break
            if self.ingest(sample):
                accepted += 1
        return accepted

    def authorization_changed(self, status: LocationAuthorization) -> None:
        if status not in (LocationAuthorization.denied, LocationAuthorization.restricted):
            return
        with self._lock:
            self.error = LOCATION_DENIED_MESSAGE
            logger.warning(f"Location authorization {status.value}")
            if self.is_active:
                self.stop()

    def paused_duration(self, now: datetime | None = None) -> timedelta:
        with self._lock:
            paused = self.total_paused
            if self.state == SessionState.paused:
                paused += (now or self._clock()) - self.last_pause_start
            return paused

    def elapsed(self, now: datetime | None = None) -> timedelta:
        """Active time: wall time since start minus every pause span."""
        with self._lock:
            if self.route is None:
                return timedelta(0)
            end = self.route.end_time or now or self._clock()
            return end - self.route.start_time - self.paused_duration(end)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            now = self._clock()
            return SessionSnapshot(
                state=self.state,
                distance_km=self.distance_km,
                elapsed_seconds=self.elapsed(now).total_seconds(),
                paused_seconds=self.paused_duration(now).total_seconds(),
                points=self.route.points if self.route else (),
                error=self.error,
            )

    def _require(self, state: SessionState, action: str) -> None:
        if self.state != state:
            raise InvalidStateError(f"Cannot {action} a session that is {self.state.value}")


class SessionSlot:
    """Holds the device's single tracking session.

    Owned by the application and handed to request handlers. Starting a new
    session is refused while one is held: an active one, or a completed one
    that has not been saved or discarded yet (its route would be lost).
    """

    def __init__(self, factory: Callable[..., TrackingSession] = TrackingSession):
        self._factory = factory
        self._lock = threading.Lock()
        self._current: TrackingSession | None = None

    @property
    def current(self) -> TrackingSession | None:
        return self._current

    def begin(self, **kwargs) -> TrackingSession:
        with self._lock:
            current = self._current
            if current is not None and current.is_active:
                raise AlreadyActiveError("A tracking session is already active")
            if current is not None:
                raise AlreadyActiveError("The completed session must be saved or discarded first")
            session = self._factory(**kwargs)
            session.start()
            self._current = session
            return session

    def require(self) -> TrackingSession:
        session = self._current
        if session is None:
            raise InvalidStateError("No tracking session")
        return session

    def clear(self) -> None:
        with self._lock:
            self._current = None
