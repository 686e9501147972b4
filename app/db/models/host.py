"""Host model."""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class Host(Base):
    __tablename__ = "hosts"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    email = Column(String(254), nullable=False)
    admin_secret = Column(String(255), nullable=False)  # Argon2 hash
    subject_id = Column(String(128), unique=True, nullable=True, index=True)  # Identity provider "sub"
    disclaimer = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    locations = relationship("Location", back_populates="host", cascade="all, delete-orphan")
    rewards = relationship("Reward", back_populates="host", cascade="all, delete-orphan")
