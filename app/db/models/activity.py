"""Activity model."""
from sqlalchemy import Column, String, Boolean, DateTime

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    icon = Column(String(64), nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
