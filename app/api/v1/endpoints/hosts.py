"""Host endpoints: host records, locations, host rewards and host reports."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import (
    get_accessible_host,
    get_current_principal,
    get_db,
    require_super_admin,
)
from app.core.constants import DEFAULT_RECENT_LIMIT, REWARD_TYPE_HOST
from app.core.errors import ForbiddenError, NotFoundError
from app.core.security import Principal
from app.db.models import Host, Reward
from app.schemas import (
    AdminSecretRequest,
    CheckInResponse,
    HostCreate,
    HostResponse,
    HostRewardCreate,
    HostUpdate,
    LocationActivitiesUpdate,
    LocationCreate,
    LocationResponse,
    LocationUpdate,
    OneAwayResponse,
    PetCheckInResponse,
    RewardClaimResponse,
    RewardResponse,
    RewardUpdate,
    SuccessResponse,
)
from app.schemas.common import ERROR_RESPONSES
from app.services.checkin import get_host_check_ins, get_host_pet_check_ins
from app.services.claim import get_host_claims
from app.services.eligibility import get_one_away_report
from app.services.host import (
    create_host,
    delete_host,
    get_host_by_subject,
    list_hosts,
    update_host,
    verify_admin_secret,
)
from app.services.location import (
    create_location,
    delete_location,
    list_locations,
    set_location_activities,
    update_location,
)
from app.services.reward import (
    create_reward,
    delete_reward,
    get_reward,
    list_host_rewards,
    update_reward,
)

router = APIRouter(dependencies=[Depends(get_current_principal)], responses=ERROR_RESPONSES)


def _host_reward(db: Session, host: Host, reward_id: str) -> Reward:
    reward = get_reward(db, reward_id)
    if reward.reward_type != REWARD_TYPE_HOST or reward.host_id != host.id:
        raise NotFoundError("Reward not found for this host", code="reward_not_found")
    return reward


@router.post(
    "",
    response_model=HostResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_super_admin)],
)
async def create_host_endpoint(host: HostCreate, db: Session = Depends(get_db)):
    """
    Create a host (super admin only).

    ``subject_id`` links the host to the identity-provider account that
    signs in for it. The admin secret is stored hashed.
    """
    return create_host(db, **host.model_dump())


@router.get("", response_model=List[HostResponse])
async def list_hosts_endpoint(db: Session = Depends(get_db)):
    return list_hosts(db)


@router.get("/me", response_model=HostResponse)
async def get_my_host_endpoint(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """The host linked to the signed-in host account."""
    host = get_host_by_subject(db, principal.subject)
    if host is None:
        raise NotFoundError("No host is linked to this account", code="host_not_found")
    return host


@router.get("/{host_id}", response_model=HostResponse)
async def get_host_endpoint(host: Host = Depends(get_accessible_host)):
    return host


@router.patch("/{host_id}", response_model=HostResponse)
async def update_host_endpoint(
    changes: HostUpdate,
    host: Host = Depends(get_accessible_host),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """Update only the fields present in the request body. Relinking an account needs a super admin."""
    data = changes.model_dump(exclude_unset=True)
    if "subject_id" in data and not principal.is_super_admin:
        raise ForbiddenError("Only super admins can relink a host account", code="super_admin_required")
    return update_host(db, host.id, data)


@router.delete(
    "/{host_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_super_admin)],
)
async def delete_host_endpoint(host_id: str, db: Session = Depends(get_db)):
    delete_host(db, host_id)
    return SuccessResponse(message="Host deleted")


@router.post("/{host_id}/verify-secret", response_model=SuccessResponse)
async def verify_admin_secret_endpoint(
    body: AdminSecretRequest,
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    """
    Check a host admin secret, used to unlock admin screens on a kiosk.

    Returns ``success: false`` for a wrong secret rather than an error.
    """
    valid = verify_admin_secret(db, host.id, body.secret)
    return SuccessResponse(success=valid, message=None if valid else "Invalid admin secret")


# Locations

@router.get("/{host_id}/locations", response_model=List[LocationResponse])
async def list_locations_endpoint(host: Host = Depends(get_accessible_host), db: Session = Depends(get_db)):
    return list_locations(db, host.id)


@router.post(
    "/{host_id}/locations",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_location_endpoint(
    location: LocationCreate,
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    return create_location(db, host.id, location.name, location.address, location.activity_ids)


@router.patch("/{host_id}/locations/{location_id}", response_model=LocationResponse)
async def update_location_endpoint(
    location_id: str,
    changes: LocationUpdate,
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    return update_location(db, host.id, location_id, changes.model_dump(exclude_unset=True))


@router.put("/{host_id}/locations/{location_id}/activities", response_model=LocationResponse)
async def set_location_activities_endpoint(
    location_id: str,
    body: LocationActivitiesUpdate,
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    """Replace the activities offered at a location (at most three, in display order)."""
    return set_location_activities(db, host.id, location_id, body.activity_ids)


@router.delete("/{host_id}/locations/{location_id}", response_model=SuccessResponse)
async def delete_location_endpoint(
    location_id: str,
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    delete_location(db, host.id, location_id)
    return SuccessResponse(message="Location deleted")


# Recent activity

@router.get("/{host_id}/checkins", response_model=List[CheckInResponse])
async def recent_check_ins_endpoint(
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=1000),
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    return get_host_check_ins(db, host.id, limit=limit)


@router.get("/{host_id}/pet-checkins", response_model=List[PetCheckInResponse])
async def recent_pet_check_ins_endpoint(
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=1000),
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    return get_host_pet_check_ins(db, host.id, limit=limit)


@router.get("/{host_id}/claims", response_model=List[RewardClaimResponse])
async def host_claims_endpoint(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    return get_host_claims(db, host.id, limit=limit)


@router.get("/{host_id}/one-away", response_model=OneAwayResponse)
async def one_away_endpoint(host: Host = Depends(get_accessible_host), db: Session = Depends(get_db)):
    """
    Athletes exactly one check-in short of an unclaimed reward.

    Built from the host's most recent check-ins (``ONE_AWAY_CHECKIN_WINDOW``),
    split into global rewards and this host's own rewards.
    """
    report = get_one_away_report(db, host.id)
    return OneAwayResponse(
        global_one_away=[entry.to_dict() for entry in report.global_one_away],
        host_one_away=[entry.to_dict() for entry in report.host_one_away],
    )


# Host rewards

@router.get("/{host_id}/rewards", response_model=List[RewardResponse])
async def list_host_rewards_endpoint(host: Host = Depends(get_accessible_host), db: Session = Depends(get_db)):
    return list_host_rewards(db, host.id)


@router.post(
    "/{host_id}/rewards",
    response_model=RewardResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_host_reward_endpoint(
    reward: HostRewardCreate,
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    return create_reward(
        db,
        name=reward.name,
        icon=reward.icon,
        required_count=reward.required_count,
        reward_type=REWARD_TYPE_HOST,
        host_id=host.id,
    )


@router.patch("/{host_id}/rewards/{reward_id}", response_model=RewardResponse)
async def update_host_reward_endpoint(
    reward_id: str,
    changes: RewardUpdate,
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    _host_reward(db, host, reward_id)
    return update_reward(db, reward_id, changes.model_dump(exclude_unset=True))


@router.delete("/{host_id}/rewards/{reward_id}", response_model=SuccessResponse)
async def delete_host_reward_endpoint(
    reward_id: str,
    host: Host = Depends(get_accessible_host),
    db: Session = Depends(get_db)
):
    _host_reward(db, host, reward_id)
    delete_reward(db, reward_id)
    return SuccessResponse(message="Reward deleted")
