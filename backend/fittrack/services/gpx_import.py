"""Build a sealed RouteTrack from a GPX document."""

from __future__ import annotations

from datetime import timezone
from typing import IO

import gpxpy
import gpxpy.gpx
from loguru import logger

from fittrack.services.route_track import GeoPoint, RouteTrack


def route_from_gpx(source: str | IO[str]) -> RouteTrack:
    """Parse GPX text (or a text file object) into a sealed route.

    Track points are taken in file order across all tracks and segments;
    sequence numbers are assigned here, never read from the file. Points
    without a timestamp are skipped since splits and pace need one.

    Raises:
        ValueError: If the document is not valid GPX or holds no timed points.
    """
    try:
        gpx = gpxpy.parse(source)
    except gpxpy.gpx.GPXException as exc:
        raise ValueError(f"Invalid GPX file: {exc}") from exc

    route: RouteTrack | None = None
    skipped = 0
    for track in gpx.tracks:
        for segment in track.segments:
            for p in segment.points:
                if p.time is None:
                    skipped += 1
                    continue
                ts = p.time if p.time.tzinfo else p.time.replace(tzinfo=timezone.utc)
                if route is None:
                    route = RouteTrack(start_time=ts)
                route.append(
                    GeoPoint(
                        latitude=p.latitude,
                        longitude=p.longitude,
                        timestamp=ts,
                        sequence=route.next_sequence,
                        elevation=p.elevation,
                    )
                )

    if route is None:
        raise ValueError("GPX file has no timestamped track points")
    if skipped:
        logger.debug(f"Skipped {skipped} GPX points without timestamps")

    route.seal(route.points[-1].timestamp)
    return route
