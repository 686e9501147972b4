"""Reward catalog business logic."""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from app.core.constants import (
    DEFAULT_GLOBAL_REWARDS,
    DEFAULT_PET_REWARDS,
    REWARD_TYPE_GLOBAL,
    REWARD_TYPE_HOST,
    REWARD_TYPE_PET,
    REWARD_TYPES,
)
from app.core.errors import InvalidInputError
from app.core.logging_config import get_logger
from app.db.models import Reward
from app.services.utils import require_host, require_reward

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"name", "icon", "required_count"}


def _catalog(db: Session, reward_type: str, host_id: Optional[str] = None) -> List[Reward]:
    query = db.query(Reward).filter(Reward.reward_type == reward_type)
    if host_id is not None:
        query = query.filter(Reward.host_id == host_id)
    return query.order_by(Reward.required_count, Reward.name).all()


def list_global_rewards(db: Session) -> List[Reward]:
    return _catalog(db, REWARD_TYPE_GLOBAL)


def list_pet_rewards(db: Session) -> List[Reward]:
    return _catalog(db, REWARD_TYPE_PET)


def list_host_rewards(db: Session, host_id: str) -> List[Reward]:
    require_host(db, host_id)
    return _catalog(db, REWARD_TYPE_HOST, host_id)


def get_reward(db: Session, reward_id: str) -> Reward:
    return require_reward(db, reward_id)


def create_reward(
    db: Session,
    name: str,
    icon: str,
    required_count: int,
    reward_type: str,
    host_id: Optional[str] = None,
) -> Reward:
    """
    Create a reward.

    Host rewards must name an existing host; global and pet rewards must not
    name one.
    """
    if reward_type not in REWARD_TYPES:
        raise InvalidInputError(f"Unknown reward type: {reward_type}", code="invalid_reward_type")

    if required_count < 1:
        raise InvalidInputError("Required count must be at least 1", code="invalid_required_count")

    if reward_type == REWARD_TYPE_HOST:
        if not host_id:
            raise InvalidInputError("hostId is required for host rewards", code="missing_host_id")
        require_host(db, host_id)
    elif host_id:
        raise InvalidInputError(f"{reward_type.capitalize()} rewards cannot belong to a host", code="unexpected_host_id")

    reward = Reward(
        name=name,
        icon=icon,
        required_count=required_count,
        reward_type=reward_type,
        host_id=host_id,
    )
    db.add(reward)
    db.commit()
    db.refresh(reward)

    logger.info("reward_created", reward_id=reward.id, reward_type=reward_type, host_id=host_id)
    return reward


def update_reward(db: Session, reward_id: str, changes: Dict) -> Reward:
    reward = require_reward(db, reward_id)

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidInputError(f"Unknown reward fields: {', '.join(sorted(unknown))}")

    if changes.get("required_count") is not None and changes["required_count"] < 1:
        raise InvalidInputError("Required count must be at least 1", code="invalid_required_count")

    for key, value in changes.items():
        setattr(reward, key, value)

    db.commit()
    db.refresh(reward)
    return reward


def delete_reward(db: Session, reward_id: str) -> None:
    """Delete a reward together with its claims."""
    reward = require_reward(db, reward_id)
    db.delete(reward)
    db.commit()
    logger.info("reward_deleted", reward_id=reward_id)


def _create_defaults(db: Session, reward_type: str, defaults: List[Dict]) -> List[Reward]:
    existing = _catalog(db, reward_type)
    if existing:
        return existing

    rewards = [Reward(reward_type=reward_type, **item) for item in defaults]
    db.add_all(rewards)
    db.flush()
    return rewards


def create_default_rewards(db: Session) -> Dict[str, List[Reward]]:
    """Create the default global tiers and pet reward where none of that type exist."""
    global_rewards = _create_defaults(db, REWARD_TYPE_GLOBAL, DEFAULT_GLOBAL_REWARDS)
    pet_rewards = _create_defaults(db, REWARD_TYPE_PET, DEFAULT_PET_REWARDS)
    db.commit()

    for reward in global_rewards + pet_rewards:
        db.refresh(reward)

    logger.info("default_rewards_ensured", global_count=len(global_rewards), pet_count=len(pet_rewards))
    return {"global": global_rewards, "pet": pet_rewards}
