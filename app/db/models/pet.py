"""Pet model."""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class Pet(Base):
    __tablename__ = "pets"

    id = Column(String(32), primary_key=True, default=generate_id)
    athlete_id = Column(String(32), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    name_key = Column(String(100), nullable=False)  # Lowercased name for per-athlete uniqueness
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    athlete = relationship("Athlete", back_populates="pets")
    check_ins = relationship("PetCheckIn", back_populates="pet", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("athlete_id", "name_key", name="uq_pet_athlete_name"),
    )
