"""Reward claim endpoints."""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.api.deps import ensure_host_access, get_db, require_host_or_super_admin
from app.core.rate_limit import limiter, RATE_LIMITS
from app.core.security import Principal
from app.schemas import RewardClaimCreate, RewardClaimResponse
from app.schemas.common import ERROR_RESPONSES
from app.services.claim import claim_reward

router = APIRouter(responses=ERROR_RESPONSES)


@router.post("", response_model=RewardClaimResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["claim"])
async def claim_reward_endpoint(
    request: Request,
    body: RewardClaimCreate,
    principal: Principal = Depends(require_host_or_super_admin),
    db: Session = Depends(get_db)
):
    """
    Redeem a reward at a host location.

    Pet rewards need ``pet_id`` and are counted over the pet's check-ins.
    Host rewards can only be claimed at their own host. Claiming a reward
    twice, or before the threshold, returns 409.
    """
    ensure_host_access(db, principal, body.host_id)
    return claim_reward(
        db,
        athlete_id=body.athlete_id,
        reward_id=body.reward_id,
        host_id=body.host_id,
        location_id=body.location_id,
        pet_id=body.pet_id,
    )
