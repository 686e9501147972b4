"""Global and pet reward endpoints. Host rewards live under /hosts."""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal, get_db, require_super_admin
from app.schemas import (
    DefaultRewardsResponse,
    RewardCreate,
    RewardResponse,
    RewardUpdate,
    SuccessResponse,
)
from app.schemas.common import ERROR_RESPONSES
from app.services.reward import (
    create_default_rewards,
    create_reward,
    delete_reward,
    get_reward,
    list_global_rewards,
    list_pet_rewards,
    update_reward,
)

router = APIRouter(dependencies=[Depends(get_current_principal)], responses=ERROR_RESPONSES)


@router.get("/global", response_model=List[RewardResponse])
async def list_global_rewards_endpoint(db: Session = Depends(get_db)):
    """Global rewards, lowest threshold first."""
    return list_global_rewards(db)


@router.get("/pet", response_model=List[RewardResponse])
async def list_pet_rewards_endpoint(db: Session = Depends(get_db)):
    return list_pet_rewards(db)


@router.post(
    "/defaults",
    response_model=DefaultRewardsResponse,
    dependencies=[Depends(require_super_admin)],
)
async def create_default_rewards_endpoint(db: Session = Depends(get_db)):
    """
    Seed the default reward tiers.

    Each reward type is only seeded when it has no rewards yet, so calling
    this again returns the existing catalog unchanged.
    """
    defaults = create_default_rewards(db)
    return DefaultRewardsResponse(
        global_rewards=[RewardResponse.model_validate(reward) for reward in defaults["global"]],
        pet_rewards=[RewardResponse.model_validate(reward) for reward in defaults["pet"]],
    )


@router.get("/{reward_id}", response_model=RewardResponse)
async def get_reward_endpoint(reward_id: str, db: Session = Depends(get_db)):
    return get_reward(db, reward_id)


@router.post(
    "",
    response_model=RewardResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_super_admin)],
)
async def create_reward_endpoint(reward: RewardCreate, db: Session = Depends(get_db)):
    return create_reward(
        db,
        name=reward.name,
        icon=reward.icon,
        required_count=reward.required_count,
        reward_type=reward.reward_type,
    )


@router.patch(
    "/{reward_id}",
    response_model=RewardResponse,
    dependencies=[Depends(require_super_admin)],
)
async def update_reward_endpoint(reward_id: str, changes: RewardUpdate, db: Session = Depends(get_db)):
    return update_reward(db, reward_id, changes.model_dump(exclude_unset=True))


@router.delete(
    "/{reward_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_super_admin)],
)
async def delete_reward_endpoint(reward_id: str, db: Session = Depends(get_db)):
    """Delete a reward and every claim made against it."""
    delete_reward(db, reward_id)
    return SuccessResponse(message="Reward deleted")
