"""Disclaimer signature model."""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class DisclaimerSignature(Base):
    __tablename__ = "disclaimer_signatures"

    id = Column(String(32), primary_key=True, default=generate_id)
    athlete_id = Column(String(32), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False)
    host_id = Column(String(32), ForeignKey("hosts.id", ondelete="CASCADE"), nullable=False)
    signed_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    athlete = relationship("Athlete", back_populates="disclaimers")

    __table_args__ = (
        UniqueConstraint("athlete_id", "host_id", name="uq_disclaimer_athlete_host"),
    )
