"""Reward claim model."""
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.core.utils import generate_id, utcnow


class RewardClaim(Base):
    __tablename__ = "reward_claims"

    id = Column(String(32), primary_key=True, default=generate_id)
    athlete_id = Column(String(32), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False, index=True)
    reward_id = Column(String(32), ForeignKey("rewards.id", ondelete="CASCADE"), nullable=False)
    host_id = Column(String(32), ForeignKey("hosts.id", ondelete="CASCADE"), nullable=False)
    location_id = Column(String(32), ForeignKey("locations.id", ondelete="CASCADE"), nullable=False)
    pet_id = Column(String(32), ForeignKey("pets.id", ondelete="CASCADE"), nullable=True)
    claimant_id = Column(String(32), nullable=False)  # pet_id for pet rewards, athlete_id otherwise
    claimed_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    reward = relationship("Reward", back_populates="claims")

    __table_args__ = (
        Index("idx_reward_claims_host_time", "host_id", "claimed_at"),
        UniqueConstraint("claimant_id", "reward_id", name="uq_claim_claimant_reward"),
    )
