"""Check-in model."""
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class CheckIn(Base):
    __tablename__ = "checkins"

    id = Column(String(32), primary_key=True, default=generate_id)
    athlete_id = Column(String(32), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False)
    host_id = Column(String(32), ForeignKey("hosts.id", ondelete="CASCADE"), nullable=False)
    location_id = Column(String(32), ForeignKey("locations.id", ondelete="CASCADE"), nullable=False)
    activity_id = Column(String(32), ForeignKey("activities.id"), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    # Start of the admission week containing timestamp; one check-in per athlete, host and week
    week_start = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    athlete = relationship("Athlete", back_populates="check_ins")

    __table_args__ = (
        Index("idx_checkins_athlete_time", "athlete_id", "timestamp"),
        Index("idx_checkins_host_time", "host_id", "timestamp"),
        UniqueConstraint("athlete_id", "host_id", "week_start", name="uq_checkin_athlete_host_week"),
    )
