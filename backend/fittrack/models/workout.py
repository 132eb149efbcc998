from sqlalchemy import Column, Integer, String, Date, DateTime, Float, Boolean, ForeignKey
from sqlalchemy.sql import func
from fittrack.db import Base


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)

    date = Column(Date, nullable=False)
    name = Column(String, nullable=False)
    notes = Column(String, nullable=True)

    kind = Column(String(20), nullable=False)  # strength, cardio

    # Cardio only. Distance in km, duration is active (pause-adjusted) seconds.
    distance_km = Column(Float, nullable=True)
    duration_seconds = Column(Integer, nullable=True)
    route_id = Column(Integer, ForeignKey("routes.id", ondelete="SET NULL"), nullable=True)
    template_id = Column(Integer, ForeignKey("exercise_templates.id", ondelete="SET NULL"), nullable=True)

    # Strength workouts are editable until finished; cardio is finished on save
    finalized = Column(Boolean, nullable=False, default=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
