"""Reward model."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class Reward(Base):
    __tablename__ = "rewards"

    id = Column(String(32), primary_key=True, default=generate_id)
    required_count = Column(Integer, nullable=False)
    name = Column(String(100), nullable=False)
    icon = Column(String(64), nullable=False)
    reward_type = Column(String(10), nullable=False)  # global, host, pet
    host_id = Column(String(32), ForeignKey("hosts.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    host = relationship("Host", back_populates="rewards")
    claims = relationship("RewardClaim", back_populates="reward", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_rewards_type", "reward_type"),
        Index("idx_rewards_host", "host_id"),
        CheckConstraint("required_count > 0", name="ck_reward_positive_count"),
        CheckConstraint(
            "(reward_type = 'host' AND host_id IS NOT NULL) OR "
            "(reward_type IN ('global', 'pet') AND host_id IS NULL)",
            name="ck_reward_host_scope",
        ),
    )
