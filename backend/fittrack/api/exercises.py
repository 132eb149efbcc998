from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fittrack.api.workouts import exercise_read
from fittrack.db import get_db
from fittrack.models.exercise import Exercise
from fittrack.schemas.exercise import ExerciseRead, SetCreate, SetRead, SetUpdate
from fittrack.services import recorder

router = APIRouter(prefix="/exercises", tags=["exercises"])


def get_exercise_or_404(db: Session, exercise_id: int) -> Exercise:
    exercise = db.query(Exercise).filter(Exercise.id == exercise_id).first()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db)):
    return exercise_read(db, get_exercise_or_404(db, exercise_id))


@router.post("/{exercise_id}/sets", response_model=SetRead)
def add_set(exercise_id: int, payload: SetCreate, db: Session = Depends(get_db)):
    exercise = get_exercise_or_404(db, exercise_id)
    return recorder.add_set(db, exercise, payload.reps, payload.weight)


@router.put("/{exercise_id}/sets/{order}", response_model=SetRead)
def update_set(exercise_id: int, order: int, payload: SetUpdate, db: Session = Depends(get_db)):
    exercise = get_exercise_or_404(db, exercise_id)
    row = recorder.update_set(db, exercise, order, reps=payload.reps, weight=payload.weight)
    if row is None:
        raise HTTPException(status_code=404, detail="Set not found")
    return row


@router.delete("/{exercise_id}/sets/{order}", response_model=ExerciseRead)
def remove_set(exercise_id: int, order: int, db: Session = Depends(get_db)):
    exercise = get_exercise_or_404(db, exercise_id)
    if not recorder.remove_set(db, exercise, order):
        raise HTTPException(status_code=404, detail="Set not found")
    return exercise_read(db, exercise)
