from sqlalchemy import Column, Integer, Float, Date, ForeignKey
from fittrack.db import Base


class Exercise(Base):
    """One performance of a template within a strength workout."""

    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("exercise_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)


class ExerciseSet(Base):
    __tablename__ = "exercise_sets"

    id = Column(Integer, primary_key=True, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True)

    order = Column(Integer, nullable=False)  # dense, 0-based
    reps = Column(Integer, nullable=False)
    weight = Column(Float, nullable=False)
