"""Metric history per exercise template, with the personal-best ratchet."""

from __future__ import annotations

from datetime import date
from enum import Enum

from loguru import logger
from sqlalchemy.orm import Session

from fittrack.models.progress import ProgressMetric, StrengthProgress


class MetricKind(str, Enum):
    # strength
    one_rep_max = "one_rep_max"
    max_weight = "max_weight"
    max_reps = "max_reps"
    total_volume = "total_volume"
    average_weight = "average_weight"
    # cardio
    distance = "distance"
    duration = "duration"
    average_pace = "average_pace"
    elevation_gain = "elevation_gain"
    longest_distance = "longest_distance"
    longest_duration = "longest_duration"
    best_pace = "best_pace"

    @property
    def lower_is_better(self) -> bool:
        return self in (MetricKind.average_pace, MetricKind.best_pace)


STRENGTH_BEST_KINDS = (MetricKind.one_rep_max, MetricKind.max_weight, MetricKind.max_reps)
CARDIO_BEST_KINDS = (MetricKind.longest_distance, MetricKind.longest_duration, MetricKind.best_pace)


def is_improvement(kind: MetricKind, value: float, current: float | None) -> bool:
    """Strictly better than the current best; ties never count."""
    if current is None:
        return True
    if kind.lower_is_better:
        return value < current
    return value > current


class ProgressLedger:
    """Reads and appends ProgressMetric rows.

    Rows are flushed, not committed; the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        template_id: int,
        kind: MetricKind,
        value: float,
        on: date,
        workout_id: int | None = None,
    ) -> ProgressMetric:
        metric = ProgressMetric(
            template_id=template_id,
            kind=MetricKind(kind).value,
            value=float(value),
            date=on,
            workout_id=workout_id,
        )
        self.db.add(metric)
        self.db.flush()
        return metric

    def record_if_best(
        self,
        template_id: int,
        kind: MetricKind,
        value: float,
        on: date,
        workout_id: int | None = None,
    ) -> ProgressMetric | None:
        kind = MetricKind(kind)
        if kind.lower_is_better and value <= 0:
            # a zero or negative pace means no elapsed time, not a fast run
            logger.debug(f"Ignoring non-positive {kind.value}={value} for template {template_id}")
            return None
        current = self.personal_best(template_id, kind)
        if not is_improvement(kind, value, current.value if current else None):
            return None
        logger.info(f"New personal best for template {template_id}: {kind.value}={value}")
        return self.record(template_id, kind, value, on, workout_id)

    def personal_best(self, template_id: int, kind: MetricKind) -> ProgressMetric | None:
        kind = MetricKind(kind)
        order = ProgressMetric.value.asc() if kind.lower_is_better else ProgressMetric.value.desc()
        return (
            self.db.query(ProgressMetric)
            .filter(ProgressMetric.template_id == template_id)
            .filter(ProgressMetric.kind == kind.value)
            .order_by(order, ProgressMetric.date, ProgressMetric.id)
            .first()
        )

    def personal_bests(self, template_id: int) -> dict[MetricKind, ProgressMetric]:
        """Current best for every ratcheted kind that has one."""
        bests = {}
        for kind in STRENGTH_BEST_KINDS + CARDIO_BEST_KINDS:
            best = self.personal_best(template_id, kind)
            if best is not None:
                bests[kind] = best
        return bests

    def history(
        self,
        template_id: int,
        kind: MetricKind,
        since: date | None = None,
    ) -> list[ProgressMetric]:
        query = (
            self.db.query(ProgressMetric)
            .filter(ProgressMetric.template_id == template_id)
            .filter(ProgressMetric.kind == MetricKind(kind).value)
        )
        if since is not None:
            query = query.filter(ProgressMetric.date >= since)
        return query.order_by(ProgressMetric.date, ProgressMetric.id).all()

    def latest(self, template_id: int) -> StrengthProgress | None:
        return (
            self.db.query(StrengthProgress)
            .filter(StrengthProgress.template_id == template_id)
            .order_by(StrengthProgress.date.desc(), StrengthProgress.id.desc())
            .first()
        )
