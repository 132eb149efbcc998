"""Ordered GPS route with incrementally maintained distance."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator

from fittrack.core.errors import InvalidOrderError, InvalidStateError
from fittrack.services.geo import distance


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A single accepted location sample.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        timestamp: Time the sample was taken (as reported by the transport).
        sequence: Position within the route, assigned on acceptance.
        elevation: Elevation in meters, when the device reports one.
    """

    latitude: float
    longitude: float
    timestamp: datetime
    sequence: int
    elevation: float | None = None


@dataclass(frozen=True, slots=True)
class Split:
    """Pace over one full reference distance of a route.

    `pace` is elapsed minutes divided by the reference distance (min/km).
    """

    index: int
    pace: float
    duration_seconds: float


class RouteTrack:
    """Append-only sequence of GeoPoints owning the cumulative distance.

    `distance_km` is updated by exactly one leg per append and never
    recomputed. Readers get tuple snapshots of the points.
    """

    def __init__(self, start_time: datetime):
        self.start_time = start_time
        self.end_time: datetime | None = None
        self.distance_km = 0.0
        self._points: list[GeoPoint] = []
        # _legs[i] is the distance from point i-1 to point i (0.0 for the first)
        self._legs: list[float] = []

    @classmethod
    def from_points(cls, start_time: datetime, points: Iterable[GeoPoint]) -> "RouteTrack":
        route = cls(start_time)
        for point in points:
            route.append(point)
        return route

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> tuple[GeoPoint, ...]:
        return tuple(self._points)

    @property
    def last_sequence(self) -> int:
        return self._points[-1].sequence if self._points else 0

    @property
    def next_sequence(self) -> int:
        return self.last_sequence + 1

    @property
    def sealed(self) -> bool:
        return self.end_time is not None

    def append(self, point: GeoPoint) -> None:
        if self.sealed:
            raise InvalidStateError("Route is sealed")
        if point.sequence < self.next_sequence:
            raise InvalidOrderError(
                f"Point sequence {point.sequence} must be greater than {self.last_sequence}"
            )
        leg = distance(self._points[-1], point) if self._points else 0.0
        self._points.append(point)
        self._legs.append(leg)
        self.distance_km += leg

    def seal(self, end_time: datetime) -> None:
        if self.sealed:
            raise InvalidStateError("Route is already sealed")
        self.end_time = end_time

    def splits(self, unit_km: float) -> Iterator[Split]:
        """Yield one Split per full `unit_km` covered; a trailing partial unit is dropped.

        Units whose timestamps do not move forward (out-of-order or repeated fixes)
        carry no pace and are skipped; the index still counts them.
        """
        if unit_km <= 0:
            raise ValueError("unit_km must be > 0")
        points, legs = self.points, tuple(self._legs)
        if len(points) < 2:
            return

        index = 1
        covered = 0.0
        segment_start = points[0].timestamp
        for point, leg in zip(points[1:], legs[1:]):
            covered += leg
            if covered >= unit_km:
                seconds = (point.timestamp - segment_start).total_seconds()
                if seconds > 0:
                    yield Split(index=index, pace=seconds / 60.0 / unit_km, duration_seconds=seconds)
                index += 1
                covered = 0.0
                segment_start = point.timestamp

    def best_pace_segment(self, min_km: float) -> float | None:
        """Fastest pace (min/km) over any stretch covering at least `min_km`.

        Sliding window over a deque of (point, leg) pairs; each point enters and
        leaves the window once, so the scan is O(n). Windows with no forward
        elapsed time are ignored.
        """
        if min_km <= 0:
            raise ValueError("min_km must be > 0")

        best: float | None = None
        window: deque[tuple[GeoPoint, float]] = deque()
        covered = 0.0
        for point, leg in zip(self.points, tuple(self._legs)):
            if window:
                covered += leg
            window.append((point, leg))
            while len(window) > 1 and covered >= min_km:
                first = window[0][0]
                minutes = (point.timestamp - first.timestamp).total_seconds() / 60.0
                if minutes > 0:
                    pace = minutes / covered
                    if best is None or pace < best:
                        best = pace
                window.popleft()
                covered = max(covered - window[0][1], 0.0)
        return best

    def elevation_change(self) -> tuple[float, float]:
        """Return (gain, loss) in meters over consecutive points that both report elevation."""
        gain = 0.0
        loss = 0.0
        points = self.points
        for prev, point in zip(points, points[1:]):
            if prev.elevation is None or point.elevation is None:
                continue
            delta = point.elevation - prev.elevation
            if delta > 0:
                gain += delta
            else:
                loss += -delta
        return gain, loss
