"""Athlete endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal, get_db, require_host_or_super_admin
from app.core.constants import DEFAULT_RECENT_LIMIT
from app.core.rate_limit import limiter, RATE_LIMITS
from app.db.models import Athlete
from app.schemas import (
    AthleteCreate,
    AthleteProgressResponse,
    AthleteResponse,
    AthleteUpdate,
    CheckInResponse,
    CountResponse,
    DisclaimerStatus,
    PetCreate,
    PetExistsResponse,
    PetResponse,
    RewardClaimResponse,
    SuccessResponse,
)
from app.schemas.common import ERROR_RESPONSES
from app.services.athlete import (
    get_athlete,
    get_disclaimer_status,
    register_athlete,
    search_athletes,
    sign_disclaimer,
    soft_delete_athlete,
    update_athlete,
)
from app.services.checkin import count_active_weeks, count_athlete_check_ins, get_athlete_check_ins
from app.services.claim import get_athlete_claims
from app.services.eligibility import get_athlete_progress
from app.services.pet import create_pet, list_pets, pet_name_exists

router = APIRouter(dependencies=[Depends(get_current_principal)], responses=ERROR_RESPONSES)


def _athlete_response(db: Session, athlete: Athlete) -> AthleteResponse:
    return AthleteResponse.model_validate(athlete).model_copy(
        update={"weeks_active": count_active_weeks(db, athlete.id)}
    )


@router.post("", response_model=AthleteResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["register"])
async def register_athlete_endpoint(
    request: Request,
    athlete: AthleteCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new athlete.

    Emails are unique among active athletes; registering a taken email
    returns 409 with code ``email_taken``.
    """
    created = register_athlete(db, **athlete.model_dump(exclude_none=True))
    return _athlete_response(db, created)


@router.get("/search", response_model=List[AthleteResponse])
@limiter.limit(RATE_LIMITS["search"])
async def search_athletes_endpoint(
    request: Request,
    last_name: Optional[str] = Query(None, max_length=100),
    first_name: Optional[str] = Query(None, max_length=100),
    email: Optional[str] = Query(None, max_length=254),
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=200),
    db: Session = Depends(get_db)
):
    """
    Search active athletes.

    An email match wins over a name search. Names are matched as
    case-insensitive prefixes, so ``last_name=sm`` finds Smith and Smythe.
    """
    athletes = search_athletes(db, last_name=last_name, first_name=first_name, email=email, limit=limit)
    return [_athlete_response(db, athlete) for athlete in athletes]


@router.get("/{athlete_id}", response_model=AthleteResponse)
async def get_athlete_endpoint(athlete_id: str, db: Session = Depends(get_db)):
    return _athlete_response(db, get_athlete(db, athlete_id))


@router.patch("/{athlete_id}", response_model=AthleteResponse)
async def update_athlete_endpoint(
    athlete_id: str,
    changes: AthleteUpdate,
    db: Session = Depends(get_db)
):
    """Update only the fields present in the request body."""
    updated = update_athlete(db, athlete_id, changes.model_dump(exclude_unset=True))
    return _athlete_response(db, updated)


@router.delete(
    "/{athlete_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_host_or_super_admin)],
)
async def delete_athlete_endpoint(athlete_id: str, db: Session = Depends(get_db)):
    """Soft-delete an athlete. History and claims are kept."""
    soft_delete_athlete(db, athlete_id)
    return SuccessResponse(message="Athlete deleted")


@router.get("/{athlete_id}/checkins", response_model=List[CheckInResponse])
async def list_athlete_check_ins_endpoint(
    athlete_id: str,
    host_id: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    return get_athlete_check_ins(db, athlete_id, host_id=host_id, limit=limit)


@router.get("/{athlete_id}/checkins/count", response_model=CountResponse)
async def count_athlete_check_ins_endpoint(
    athlete_id: str,
    host_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    return CountResponse(count=count_athlete_check_ins(db, athlete_id, host_id=host_id))


@router.get("/{athlete_id}/disclaimers/{host_id}", response_model=DisclaimerStatus)
async def get_disclaimer_status_endpoint(athlete_id: str, host_id: str, db: Session = Depends(get_db)):
    return get_disclaimer_status(db, athlete_id, host_id)


@router.post("/{athlete_id}/disclaimers/{host_id}", response_model=DisclaimerStatus)
async def sign_disclaimer_endpoint(athlete_id: str, host_id: str, db: Session = Depends(get_db)):
    """Sign a host's disclaimer. Signing twice keeps the first signature."""
    sign_disclaimer(db, athlete_id, host_id)
    return get_disclaimer_status(db, athlete_id, host_id)


@router.get("/{athlete_id}/progress", response_model=AthleteProgressResponse)
async def get_athlete_progress_endpoint(
    athlete_id: str,
    host_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Progress towards every global reward, plus the given host's rewards.

    Each item reports the participant's current count, the reward's
    threshold and whether it can be claimed right now.
    """
    progress = get_athlete_progress(db, athlete_id, host_id=host_id)
    return AthleteProgressResponse(
        global_rewards=[item.to_dict() for item in progress["global"]],
        host_rewards=[item.to_dict() for item in progress["host"]],
    )


@router.get("/{athlete_id}/claims", response_model=List[RewardClaimResponse])
async def list_athlete_claims_endpoint(athlete_id: str, db: Session = Depends(get_db)):
    return get_athlete_claims(db, athlete_id)


@router.get("/{athlete_id}/pets", response_model=List[PetResponse])
async def list_pets_endpoint(athlete_id: str, db: Session = Depends(get_db)):
    return list_pets(db, athlete_id)


@router.post("/{athlete_id}/pets", response_model=PetResponse, status_code=status.HTTP_201_CREATED)
async def create_pet_endpoint(athlete_id: str, pet: PetCreate, db: Session = Depends(get_db)):
    return create_pet(db, athlete_id, pet.name)


@router.get("/{athlete_id}/pets/exists", response_model=PetExistsResponse)
async def pet_name_exists_endpoint(
    athlete_id: str,
    name: str = Query(..., min_length=1, max_length=100),
    db: Session = Depends(get_db)
):
    """Whether the athlete already has a pet by this name (case-insensitive)."""
    return PetExistsResponse(exists=pet_name_exists(db, athlete_id, name))

