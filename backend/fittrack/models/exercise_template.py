from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from fittrack.db import Base


class ExerciseTemplate(Base):
    __tablename__ = "exercise_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    category = Column(String, nullable=True)  # e.g. "Chest", "Run"

    last_used_date = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
