"""Cardio summaries derived from a sealed route or a manual entry."""

from __future__ import annotations

from dataclasses import dataclass

from fittrack.core.config import settings
from fittrack.services.route_track import RouteTrack, Split


@dataclass(frozen=True, slots=True)
class CardioSummary:
    """Derived cardio metrics. Paces are minutes per km.

    Route-only fields (best pace, elevation, splits) are None for manual entries.
    """

    distance_km: float
    duration_seconds: float
    average_pace: float
    best_pace: float | None = None
    elevation_gain_m: float | None = None
    elevation_loss_m: float | None = None
    splits: tuple[Split, ...] | None = None

    @property
    def has_route(self) -> bool:
        return self.splits is not None


def average_pace(distance_km: float, duration_seconds: float) -> float:
    """Minutes per km; 0 when no distance was covered."""
    if distance_km <= 0:
        return 0.0
    return duration_seconds / 60.0 / distance_km


def derive_cardio(
    route: RouteTrack,
    duration_seconds: float | None = None,
    *,
    split_km: float | None = None,
    best_segment_km: float | None = None,
) -> CardioSummary:
    """Summarize a finished route.

    `duration_seconds` is the pause-adjusted elapsed time of the session; when
    omitted it falls back to end_time - start_time.
    """
    if duration_seconds is None:
        end = route.end_time or (route.points[-1].timestamp if len(route) else route.start_time)
        duration_seconds = max((end - route.start_time).total_seconds(), 0.0)

    split_km = split_km or settings.split_distance_km
    best_segment_km = best_segment_km or settings.best_pace_segment_km
    gain, loss = route.elevation_change()

    return CardioSummary(
        distance_km=route.distance_km,
        duration_seconds=duration_seconds,
        average_pace=average_pace(route.distance_km, duration_seconds),
        best_pace=route.best_pace_segment(best_segment_km),
        elevation_gain_m=gain,
        elevation_loss_m=loss,
        splits=tuple(route.splits(split_km)),
    )


def derive_manual_cardio(distance_km: float, duration_seconds: float) -> CardioSummary:
    if distance_km < 0 or duration_seconds < 0:
        raise ValueError("distance and duration must be >= 0")
    return CardioSummary(
        distance_km=distance_km,
        duration_seconds=duration_seconds,
        average_pace=average_pace(distance_km, duration_seconds),
    )
