"""Reward claim business logic."""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.constants import REWARD_TYPE_HOST, REWARD_TYPE_PET
from app.core.errors import InvalidInputError, PolicyDeclinedError
from app.core.logging_config import get_logger
from app.db.models import RewardClaim
from app.services.eligibility import evaluate_reward
from app.services.utils import (
    require_athlete,
    require_host,
    require_location,
    require_pet,
    require_reward,
)

logger = get_logger(__name__)

ALREADY_CLAIMED = "reward_already_claimed"
THRESHOLD_NOT_MET = "threshold_not_met"


def get_athlete_claims(db: Session, athlete_id: str) -> List[RewardClaim]:
    """All claims made by an athlete, including those for their pets."""
    require_athlete(db, athlete_id, include_deleted=True)
    return db.query(RewardClaim).filter(
        RewardClaim.athlete_id == athlete_id
    ).order_by(RewardClaim.claimed_at.desc()).all()


def get_host_claims(db: Session, host_id: str, limit: Optional[int] = None) -> List[RewardClaim]:
    require_host(db, host_id)
    return db.query(RewardClaim).filter(
        RewardClaim.host_id == host_id
    ).order_by(RewardClaim.claimed_at.desc()).limit(limit or settings.HISTORY_LIMIT).all()


def _existing_claim(db: Session, claimant_id: str, reward_id: str) -> Optional[RewardClaim]:
    return db.query(RewardClaim).filter(
        RewardClaim.claimant_id == claimant_id,
        RewardClaim.reward_id == reward_id,
    ).first()


def claim_reward(
    db: Session,
    athlete_id: str,
    reward_id: str,
    host_id: str,
    location_id: str,
    pet_id: Optional[str] = None,
) -> RewardClaim:
    """
    Redeem a reward for an athlete, or for one of their pets.

    The claim is only written when the participant has reached the
    threshold and has not claimed the reward before. The claimant/reward
    unique key backs up the pre-check against concurrent claims.

    Raises:
        NotFoundError: athlete, reward, host, location or pet missing
        InvalidInputError: reward/host/location/pet linkage is wrong
        PolicyDeclinedError: already claimed, or threshold not reached
    """
    require_athlete(db, athlete_id)
    reward = require_reward(db, reward_id)
    require_host(db, host_id)
    location = require_location(db, location_id)

    if location.host_id != host_id:
        raise InvalidInputError("Location does not belong to the specified host", code="location_host_mismatch")

    if reward.reward_type == REWARD_TYPE_HOST and reward.host_id != host_id:
        raise InvalidInputError(
            "Host-specific reward does not belong to the claiming host",
            code="reward_host_mismatch",
        )

    if reward.reward_type == REWARD_TYPE_PET:
        if not pet_id:
            raise InvalidInputError("petId is required for pet rewards", code="missing_pet_id")
        pet = require_pet(db, pet_id)
        if pet.athlete_id != athlete_id:
            raise InvalidInputError("Pet does not belong to the specified athlete", code="pet_not_owned_by_athlete")
    elif pet_id:
        raise InvalidInputError("petId is only allowed for pet rewards", code="unexpected_pet_id")

    claimant_id = pet_id if reward.reward_type == REWARD_TYPE_PET else athlete_id
    if _existing_claim(db, claimant_id, reward_id):
        raise PolicyDeclinedError("Reward has already been claimed", code=ALREADY_CLAIMED)

    progress = evaluate_reward(db, reward, athlete_id, pet_id)
    if not progress.eligible:
        raise PolicyDeclinedError(
            f"Reward requires {progress.required} check-ins; {progress.current_count} recorded",
            code=THRESHOLD_NOT_MET,
        )

    claim = RewardClaim(
        athlete_id=athlete_id,
        reward_id=reward_id,
        host_id=host_id,
        location_id=location_id,
        pet_id=pet_id,
        claimant_id=claimant_id,
    )
    try:
        db.add(claim)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise PolicyDeclinedError("Reward has already been claimed", code=ALREADY_CLAIMED)

    db.refresh(claim)
    logger.info(
        "reward_claimed",
        claim_id=claim.id,
        reward_id=reward_id,
        claimant_id=claimant_id,
        host_id=host_id,
    )
    return claim
