"""Persists finished workouts and feeds their metrics into the ledger."""

from __future__ import annotations

from datetime import date

from loguru import logger
from sqlalchemy.orm import Session

from fittrack.core.config import settings
from fittrack.core.errors import InvalidStateError
from fittrack.core.time_utils import to_local_datetime, utc_now
from fittrack.db import commit
from fittrack.models.exercise import Exercise, ExerciseSet
from fittrack.models.exercise_template import ExerciseTemplate
from fittrack.models.progress import CardioProgress, ProgressMetric, StrengthProgress
from fittrack.models.route import Route, RoutePoint
from fittrack.models.workout import Workout
from fittrack.services.cardio import CardioSummary
from fittrack.services.ledger import MetricKind, ProgressLedger
from fittrack.services.route_track import RouteTrack
from fittrack.services.strength import derive_strength, reindex
from fittrack.services.tracking import SessionState, TrackingSession


# --------- Cardio --------- #

def _save_route(db: Session, route: RouteTrack) -> Route:
    row = Route(
        start_time=route.start_time,
        end_time=route.end_time,
        distance_km=route.distance_km,
        points_count=len(route),
    )
    db.add(row)
    db.flush()
    db.add_all(
        RoutePoint(
            route_id=row.id,
            sequence=p.sequence,
            latitude=p.latitude,
            longitude=p.longitude,
            elevation=p.elevation,
            timestamp=p.timestamp,
        )
        for p in route.points
    )
    return row


def _record_cardio_metrics(db: Session, template_id: int, summary: CardioSummary, on: date, workout_id: int):
    ledger = ProgressLedger(db)
    ledger.record(template_id, MetricKind.distance, summary.distance_km, on, workout_id)
    ledger.record(template_id, MetricKind.duration, summary.duration_seconds, on, workout_id)
    ledger.record(template_id, MetricKind.average_pace, summary.average_pace, on, workout_id)
    if summary.elevation_gain_m is not None:
        ledger.record(template_id, MetricKind.elevation_gain, summary.elevation_gain_m, on, workout_id)

    ledger.record_if_best(template_id, MetricKind.longest_distance, summary.distance_km, on, workout_id)
    ledger.record_if_best(template_id, MetricKind.longest_duration, summary.duration_seconds, on, workout_id)
    if summary.best_pace is not None:
        ledger.record_if_best(template_id, MetricKind.best_pace, summary.best_pace, on, workout_id)


def save_cardio(
    db: Session,
    *,
    name: str,
    on: date,
    summary: CardioSummary,
    route: RouteTrack | None = None,
    template_id: int | None = None,
    notes: str | None = None,
) -> Workout:
    """Store a cardio workout, its route (if any) and its derived metrics in one commit."""
    route_row = _save_route(db, route) if route is not None else None

    workout = Workout(
        date=on,
        name=name,
        notes=notes,
        kind="cardio",
        distance_km=summary.distance_km,
        duration_seconds=int(round(summary.duration_seconds)),
        route_id=route_row.id if route_row else None,
        template_id=template_id,
        finalized=True,
    )
    db.add(workout)
    db.flush()

    db.add(
        CardioProgress(
            workout_id=workout.id,
            route_id=workout.route_id,
            template_id=template_id,
            date=on,
            distance_km=summary.distance_km,
            duration_seconds=workout.duration_seconds,
            average_pace=summary.average_pace,
            best_pace=summary.best_pace,
            elevation_gain_m=summary.elevation_gain_m,
            elevation_loss_m=summary.elevation_loss_m,
            splits=(
                [
                    {"index": s.index, "pace": s.pace, "duration_seconds": s.duration_seconds}
                    for s in summary.splits
                ]
                if summary.splits is not None
                else None
            ),
        )
    )

    if template_id is not None:
        _record_cardio_metrics(db, template_id, summary, on, workout.id)
        touch_template(db, template_id)

    commit(db)
    db.refresh(workout)
    logger.info(f"Saved cardio workout {workout.id} ({summary.distance_km:.3f} km)")
    return workout


def local_date(moment) -> date:
    """Calendar day of `moment` in the configured timezone."""
    return to_local_datetime(moment, settings.timezone).date()


def save_tracked_session(db: Session, session: TrackingSession, notes: str | None = None) -> Workout:
    if session.state != SessionState.completed or session.summary is None:
        raise InvalidStateError("Only a completed session can be saved")
    return save_cardio(
        db,
        name=session.name or "Cardio",
        on=local_date(session.route.start_time),
        summary=session.summary,
        route=session.route,
        template_id=session.template_id,
        notes=notes,
    )


# --------- Strength --------- #

def touch_template(db: Session, template_id: int) -> None:
    template = db.get(ExerciseTemplate, template_id)
    if template is not None:
        template.last_used_date = utc_now()


def _require_editable(workout: Workout) -> None:
    if workout.kind != "strength":
        raise InvalidStateError("Exercises can only be added to strength workouts")
    if workout.finalized:
        raise InvalidStateError(f"Workout {workout.id} is already finished")


def create_strength_workout(db: Session, name: str, on: date, notes: str | None = None) -> Workout:
    workout = Workout(date=on, name=name, notes=notes, kind="strength", finalized=False)
    db.add(workout)
    commit(db)
    db.refresh(workout)
    return workout


def add_exercise(db: Session, workout: Workout, template: ExerciseTemplate) -> Exercise:
    _require_editable(workout)
    exercise = Exercise(workout_id=workout.id, template_id=template.id, date=workout.date)
    db.add(exercise)
    template.last_used_date = utc_now()
    commit(db)
    db.refresh(exercise)
    return exercise


def exercise_sets(db: Session, exercise_id: int) -> list[ExerciseSet]:
    return (
        db.query(ExerciseSet)
        .filter(ExerciseSet.exercise_id == exercise_id)
        .order_by(ExerciseSet.order)
        .all()
    )


def _editable_exercise(db: Session, exercise: Exercise) -> None:
    _require_editable(db.get(Workout, exercise.workout_id))


def _set_at(db: Session, exercise: Exercise, order: int) -> ExerciseSet | None:
    return (
        db.query(ExerciseSet)
        .filter(ExerciseSet.exercise_id == exercise.id, ExerciseSet.order == order)
        .first()
    )


def add_set(db: Session, exercise: Exercise, reps: int, weight: float) -> ExerciseSet:
    _editable_exercise(db, exercise)
    count = db.query(ExerciseSet).filter(ExerciseSet.exercise_id == exercise.id).count()
    row = ExerciseSet(exercise_id=exercise.id, order=count, reps=reps, weight=weight)
    db.add(row)
    commit(db)
    db.refresh(row)
    return row


def update_set(
    db: Session,
    exercise: Exercise,
    order: int,
    reps: int | None = None,
    weight: float | None = None,
) -> ExerciseSet | None:
    _editable_exercise(db, exercise)
    row = _set_at(db, exercise, order)
    if row is None:
        return None
    if reps is not None:
        row.reps = reps
    if weight is not None:
        row.weight = weight
    commit(db)
    db.refresh(row)
    return row


def remove_set(db: Session, exercise: Exercise, order: int) -> bool:
    """Delete one set and close the gap in the ordering."""
    _editable_exercise(db, exercise)
    row = _set_at(db, exercise, order)
    if row is None:
        return False
    db.delete(row)
    db.flush()
    reindex(exercise_sets(db, exercise.id))
    commit(db)
    return True


def finish_strength_workout(
    db: Session,
    workout: Workout,
    rep_cap: int | None = None,
) -> list[StrengthProgress]:
    """Seal the workout and derive one progress snapshot per exercise with sets."""
    _require_editable(workout)
    rep_cap = rep_cap or settings.one_rep_max_rep_cap
    ledger = ProgressLedger(db)
    snapshots = []

    exercises = db.query(Exercise).filter(Exercise.workout_id == workout.id).order_by(Exercise.id).all()
    for exercise in exercises:
        sets = exercise_sets(db, exercise.id)
        if not sets:
            continue
        summary = derive_strength(sets, rep_cap)
        snapshot = StrengthProgress(
            exercise_id=exercise.id,
            template_id=exercise.template_id,
            date=workout.date,
            max_weight=summary.max_weight,
            max_reps=summary.max_reps,
            total_volume=summary.total_volume,
            average_weight=summary.average_weight,
            one_rep_max=summary.one_rep_max,
        )
        db.add(snapshot)
        snapshots.append(snapshot)

        tid, on = exercise.template_id, workout.date
        ledger.record(tid, MetricKind.total_volume, summary.total_volume, on, workout.id)
        ledger.record(tid, MetricKind.average_weight, summary.average_weight, on, workout.id)
        ledger.record_if_best(tid, MetricKind.one_rep_max, summary.one_rep_max, on, workout.id)
        ledger.record_if_best(tid, MetricKind.max_weight, summary.max_weight, on, workout.id)
        ledger.record_if_best(tid, MetricKind.max_reps, summary.max_reps, on, workout.id)
        touch_template(db, tid)

    workout.finalized = True
    commit(db)
    for snapshot in snapshots:
        db.refresh(snapshot)
    logger.info(f"Finished strength workout {workout.id} with {len(snapshots)} exercises")
    return snapshots


# --------- Deletion --------- #

def delete_workout(db: Session, workout: Workout) -> None:
    """Remove a workout and everything hanging off it. Metric history stays."""
    workout_id, route_id = workout.id, workout.route_id
    exercise_ids = [row.id for row in db.query(Exercise.id).filter(Exercise.workout_id == workout_id)]
    if exercise_ids:
        db.query(ExerciseSet).filter(ExerciseSet.exercise_id.in_(exercise_ids)).delete(synchronize_session=False)
        db.query(StrengthProgress).filter(StrengthProgress.exercise_id.in_(exercise_ids)).delete(synchronize_session=False)
        db.query(Exercise).filter(Exercise.id.in_(exercise_ids)).delete(synchronize_session=False)

    db.query(CardioProgress).filter(CardioProgress.workout_id == workout_id).delete(synchronize_session=False)
    db.query(ProgressMetric).filter(ProgressMetric.workout_id == workout_id).update(
        {ProgressMetric.workout_id: None}, synchronize_session=False
    )

    db.delete(workout)
    db.flush()
    if route_id is not None:
        db.query(RoutePoint).filter(RoutePoint.route_id == route_id).delete(synchronize_session=False)
        db.query(Route).filter(Route.id == route_id).delete(synchronize_session=False)
    commit(db)
    logger.info(f"Deleted workout {workout_id}")
