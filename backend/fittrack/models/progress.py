from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey, JSON
from fittrack.db import Base


class ProgressMetric(Base):
    """Append-only metric history; personal bests are derived from it."""

    __tablename__ = "progress_metrics"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("exercise_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    kind = Column(String(32), nullable=False, index=True)
    value = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="SET NULL"), nullable=True)


class StrengthProgress(Base):
    """Snapshot of one exercise performance, used for "last time" stats."""

    __tablename__ = "strength_progress"

    id = Column(Integer, primary_key=True, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("exercise_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)

    max_weight = Column(Float, nullable=False)
    max_reps = Column(Integer, nullable=False)
    total_volume = Column(Float, nullable=False)
    average_weight = Column(Float, nullable=False)
    one_rep_max = Column(Float, nullable=False)


class CardioProgress(Base):
    __tablename__ = "cardio_progress"

    id = Column(Integer, primary_key=True, index=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    route_id = Column(Integer, ForeignKey("routes.id", ondelete="SET NULL"), nullable=True)
    template_id = Column(Integer, ForeignKey("exercise_templates.id", ondelete="SET NULL"), nullable=True)
    date = Column(Date, nullable=False)

    distance_km = Column(Float, nullable=False)
    duration_seconds = Column(Integer, nullable=False)
    average_pace = Column(Float, nullable=False)  # min/km

    # Route-derived; NULL for manual entries
    best_pace = Column(Float, nullable=True)
    elevation_gain_m = Column(Float, nullable=True)
    elevation_loss_m = Column(Float, nullable=True)
    splits = Column(JSON, nullable=True)  # [{index, pace, duration_seconds}]
