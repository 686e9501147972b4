"""Location model."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class Location(Base):
    __tablename__ = "locations"

    id = Column(String(32), primary_key=True, default=generate_id)
    host_id = Column(String(32), ForeignKey("hosts.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    address = Column(String(300), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    host = relationship("Host", back_populates="locations")
    activity_links = relationship(
        "LocationActivity",
        back_populates="location",
        cascade="all, delete-orphan",
        order_by="LocationActivity.position",
    )

    __table_args__ = (
        Index("idx_locations_host", "host_id"),
    )

    @property
    def activity_ids(self):
        return [link.activity_id for link in self.activity_links]


class LocationActivity(Base):
    __tablename__ = "location_activities"

    location_id = Column(String(32), ForeignKey("locations.id", ondelete="CASCADE"), primary_key=True)
    activity_id = Column(String(32), ForeignKey("activities.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, nullable=False, default=0)

    location = relationship("Location", back_populates="activity_links")
    activity = relationship("Activity")
