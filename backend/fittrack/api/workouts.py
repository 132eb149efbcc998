from datetime import date
from typing import Optional
import os

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from fittrack.core.time_utils import format_pace, hhmmss_to_seconds, seconds_to_hhmmss
from fittrack.db import get_db
from fittrack.models.exercise import Exercise
from fittrack.models.exercise_template import ExerciseTemplate
from fittrack.models.progress import CardioProgress
from fittrack.models.route import RoutePoint
from fittrack.models.workout import Workout
from fittrack.schemas.exercise import ExerciseCreate, ExerciseRead, SetRead
from fittrack.schemas.progress import StrengthSnapshotRead
from fittrack.schemas.session import GeoPointRead
from fittrack.schemas.workout import (
    CardioSummaryRead,
    ManualCardioCreate,
    StrengthWorkoutCreate,
    WorkoutKind,
    WorkoutRead,
)
from fittrack.services import recorder
from fittrack.services.cardio import derive_cardio, derive_manual_cardio
from fittrack.services.gpx_import import route_from_gpx

router = APIRouter(prefix="/workouts", tags=["workouts"])


def get_workout_or_404(db: Session, workout_id: int) -> Workout:
    workout = db.query(Workout).filter(Workout.id == workout_id).first()
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


def _require_template(db: Session, template_id: Optional[int]) -> None:
    if template_id is not None and db.get(ExerciseTemplate, template_id) is None:
        raise HTTPException(status_code=404, detail="Template not found")


def workout_read(db: Session, workout: Workout) -> WorkoutRead:
    cardio = None
    if workout.kind == WorkoutKind.cardio.value:
        progress = db.query(CardioProgress).filter(CardioProgress.workout_id == workout.id).first()
        if progress is not None:
            cardio = CardioSummaryRead.model_validate(progress)
            cardio.pace = format_pace(progress.average_pace)

    return WorkoutRead(
        id=workout.id,
        date=workout.date,
        name=workout.name,
        notes=workout.notes,
        kind=workout.kind,
        finalized=workout.finalized,
        distance_km=workout.distance_km,
        duration=(
            seconds_to_hhmmss(workout.duration_seconds)
            if workout.duration_seconds is not None
            else None
        ),
        route_id=workout.route_id,
        template_id=workout.template_id,
        cardio=cardio,
    )


def exercise_read(db: Session, exercise: Exercise) -> ExerciseRead:
    return ExerciseRead(
        id=exercise.id,
        workout_id=exercise.workout_id,
        template_id=exercise.template_id,
        date=exercise.date,
        sets=[SetRead.model_validate(s) for s in recorder.exercise_sets(db, exercise.id)],
    )


@router.get("/", response_model=list[WorkoutRead])
def list_workouts(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    kind: Optional[WorkoutKind] = Query(None),
    db: Session = Depends(get_db),
):
    query = db.query(Workout)
    if start_date is not None:
        query = query.filter(Workout.date >= start_date)
    if end_date is not None:
        query = query.filter(Workout.date <= end_date)
    if kind is not None:
        query = query.filter(Workout.kind == kind.value)

    # Most recent first
    workouts = query.order_by(Workout.date.desc(), Workout.id.desc()).all()
    return [workout_read(db, w) for w in workouts]


@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: int, db: Session = Depends(get_db)):
    return workout_read(db, get_workout_or_404(db, workout_id))


@router.delete("/{workout_id}")
def delete_workout(workout_id: int, db: Session = Depends(get_db)):
    recorder.delete_workout(db, get_workout_or_404(db, workout_id))
    return {"message": "Workout deleted"}


@router.get("/{workout_id}/route", response_model=list[GeoPointRead])
def get_workout_route(workout_id: int, db: Session = Depends(get_db)):
    workout = get_workout_or_404(db, workout_id)
    if workout.route_id is None:
        raise HTTPException(status_code=404, detail="Workout has no route")
    points = (
        db.query(RoutePoint)
        .filter(RoutePoint.route_id == workout.route_id)
        .order_by(RoutePoint.sequence)
        .all()
    )
    return [
        GeoPointRead(
            sequence=p.sequence,
            latitude=p.latitude,
            longitude=p.longitude,
            elevation=p.elevation,
            timestamp=p.timestamp,
        )
        for p in points
    ]


# --------- Cardio --------- #

@router.post("/cardio", response_model=WorkoutRead)
def create_manual_cardio(payload: ManualCardioCreate, db: Session = Depends(get_db)):
    try:
        duration_seconds = hhmmss_to_seconds(payload.duration)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    _require_template(db, payload.template_id)

    workout = recorder.save_cardio(
        db,
        name=payload.name,
        on=payload.date,
        summary=derive_manual_cardio(payload.distance_km, duration_seconds),
        template_id=payload.template_id,
        notes=payload.notes,
    )
    return workout_read(db, workout)


@router.post("/cardio/import", response_model=WorkoutRead)
def import_gpx_route(
    file: UploadFile = File(...),
    name: Optional[str] = Query(None),
    template_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    filename = file.filename or "import.gpx"
    if os.path.splitext(filename)[1].lower() != ".gpx":
        raise HTTPException(status_code=400, detail="Only .gpx files are supported")
    _require_template(db, template_id)

    data = file.file.read()
    try:
        route = route_from_gpx(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid file: {e}")

    workout = recorder.save_cardio(
        db,
        name=name or os.path.splitext(filename)[0] or "GPX import",
        on=recorder.local_date(route.start_time),
        summary=derive_cardio(route),
        route=route,
        template_id=template_id,
    )
    return workout_read(db, workout)


# --------- Strength --------- #

@router.post("/strength", response_model=WorkoutRead)
def create_strength_workout(payload: StrengthWorkoutCreate, db: Session = Depends(get_db)):
    workout = recorder.create_strength_workout(db, payload.name, payload.date, payload.notes)
    return workout_read(db, workout)


@router.get("/{workout_id}/exercises", response_model=list[ExerciseRead])
def list_exercises(workout_id: int, db: Session = Depends(get_db)):
    workout = get_workout_or_404(db, workout_id)
    exercises = db.query(Exercise).filter(Exercise.workout_id == workout.id).order_by(Exercise.id).all()
    return [exercise_read(db, e) for e in exercises]


@router.post("/{workout_id}/exercises", response_model=ExerciseRead)
def add_exercise(workout_id: int, payload: ExerciseCreate, db: Session = Depends(get_db)):
    workout = get_workout_or_404(db, workout_id)
    template = db.get(ExerciseTemplate, payload.template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return exercise_read(db, recorder.add_exercise(db, workout, template))


@router.post("/{workout_id}/finish", response_model=list[StrengthSnapshotRead])
def finish_workout(workout_id: int, db: Session = Depends(get_db)):
    workout = get_workout_or_404(db, workout_id)
    return recorder.finish_strength_workout(db, workout)
