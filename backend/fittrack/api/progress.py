from datetime import date
from enum import Enum
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fittrack.core.config import settings
from fittrack.db import commit, get_db
from fittrack.models.exercise_template import ExerciseTemplate
from fittrack.models.progress import CardioProgress
from fittrack.schemas.progress import (
    CardioProgressRead,
    MetricCreate,
    MetricRead,
    RecordResult,
    SeriesPoint,
    StrengthSnapshotRead,
)
from fittrack.services.ledger import MetricKind, ProgressLedger

router = APIRouter(prefix="/progress", tags=["progress"])


class CardioSeries(str, Enum):
    distance = "distance"
    duration = "duration"  # minutes
    average_pace = "average_pace"
    best_pace = "best_pace"
    total_distance = "total_distance"  # running sum
    elevation_gain = "elevation_gain"


def _require_template(db: Session, template_id: int) -> ExerciseTemplate:
    template = db.get(ExerciseTemplate, template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


# --------- Cardio --------- #

@router.get("/cardio/recent", response_model=list[CardioProgressRead])
def recent_cardio(limit: Optional[int] = Query(None, ge=1), db: Session = Depends(get_db)):
    return (
        db.query(CardioProgress)
        .order_by(CardioProgress.date.desc(), CardioProgress.id.desc())
        .limit(limit or settings.recent_cardio_limit)
        .all()
    )


@router.get("/cardio/{template_id}/series", response_model=list[SeriesPoint])
def cardio_series(
    template_id: int,
    metric: CardioSeries = Query(...),
    since: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    _require_template(db, template_id)
    query = db.query(CardioProgress).filter(CardioProgress.template_id == template_id)
    if since is not None:
        query = query.filter(CardioProgress.date >= since)
    rows = query.order_by(CardioProgress.date, CardioProgress.id).all()

    points: list[SeriesPoint] = []
    running_km = 0.0
    for row in rows:
        if metric == CardioSeries.distance:
            value = row.distance_km
        elif metric == CardioSeries.duration:
            value = row.duration_seconds / 60
        elif metric == CardioSeries.average_pace:
            value = row.average_pace
        elif metric == CardioSeries.best_pace:
            value = row.best_pace
        elif metric == CardioSeries.elevation_gain:
            value = row.elevation_gain_m
        else:
            running_km += row.distance_km
            value = running_km
        # manual entries carry no route-derived values
        if value is None:
            continue
        points.append(SeriesPoint(date=row.date, value=value))
    return points


# --------- Ledger --------- #

@router.get("/{template_id}/history", response_model=list[MetricRead])
def metric_history(
    template_id: int,
    kind: MetricKind = Query(...),
    since: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    _require_template(db, template_id)
    return ProgressLedger(db).history(template_id, kind, since)


@router.get("/{template_id}/latest", response_model=StrengthSnapshotRead)
def latest_snapshot(template_id: int, db: Session = Depends(get_db)):
    _require_template(db, template_id)
    snapshot = ProgressLedger(db).latest(template_id)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No progress recorded")
    return snapshot


@router.get("/{template_id}/bests", response_model=list[MetricRead])
def personal_bests(template_id: int, db: Session = Depends(get_db)):
    _require_template(db, template_id)
    return list(ProgressLedger(db).personal_bests(template_id).values())


@router.post("/{template_id}/bests", response_model=RecordResult)
def record_personal_best(template_id: int, payload: MetricCreate, db: Session = Depends(get_db)):
    """Append the value only if it beats the current best for this kind."""
    _require_template(db, template_id)
    ledger = ProgressLedger(db)
    metric = ledger.record_if_best(template_id, payload.kind, payload.value, payload.date)
    commit(db)
    best = ledger.personal_best(template_id, payload.kind)
    return RecordResult(
        recorded=metric is not None,
        metric=MetricRead.model_validate(metric) if metric is not None else None,
        best=MetricRead.model_validate(best) if best is not None else None,
    )
