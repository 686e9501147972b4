"""Athlete model."""
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Index
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class Athlete(Base):
    __tablename__ = "athletes"

    id = Column(String(32), primary_key=True, default=generate_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    middle_initial = Column(String(1), nullable=True)
    email = Column(String(254), nullable=False, index=True)
    employer = Column(String(100), nullable=True)
    shirt_gender = Column(String(20), nullable=True)
    shirt_size = Column(String(10), nullable=True)
    emergency_name = Column(String(100), nullable=True)
    emergency_phone = Column(String(30), nullable=True)
    legacy_count = Column(Integer, nullable=False, default=0)  # Carried over from the paper punch cards
    deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    pets = relationship("Pet", back_populates="athlete", cascade="all, delete-orphan")
    check_ins = relationship("CheckIn", back_populates="athlete")
    disclaimers = relationship("DisclaimerSignature", back_populates="athlete", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_athletes_name", "last_name", "first_name"),
    )
