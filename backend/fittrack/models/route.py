from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, UniqueConstraint
from fittrack.db import Base


class Route(Base):
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    distance_km = Column(Float, nullable=False, default=0.0)
    points_count = Column(Integer, nullable=False, default=0)


class RoutePoint(Base):
    __tablename__ = "route_points"
    __table_args__ = (UniqueConstraint("route_id", "sequence", name="uq_route_points_sequence"),)

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id", ondelete="CASCADE"), nullable=False, index=True)

    sequence = Column(Integer, nullable=False)  # 1-based acceptance order
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    elevation = Column(Float, nullable=True)  # meters
    timestamp = Column(DateTime(timezone=True), nullable=False)
