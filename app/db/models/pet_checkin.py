"""Pet check-in model."""
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class PetCheckIn(Base):
    __tablename__ = "pet_checkins"

    id = Column(String(32), primary_key=True, default=generate_id)
    athlete_id = Column(String(32), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False)
    pet_id = Column(String(32), ForeignKey("pets.id", ondelete="CASCADE"), nullable=False)
    host_id = Column(String(32), ForeignKey("hosts.id", ondelete="CASCADE"), nullable=False)
    location_id = Column(String(32), ForeignKey("locations.id", ondelete="CASCADE"), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    pet = relationship("Pet", back_populates="check_ins")

    __table_args__ = (
        Index("idx_pet_checkins_pet_time", "pet_id", "timestamp"),
        Index("idx_pet_checkins_host_time", "host_id", "timestamp"),
    )
