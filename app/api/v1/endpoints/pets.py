"""Pet endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal, get_db
from app.schemas import (
    CountResponse,
    PetCheckInResponse,
    PetProgressResponse,
    PetResponse,
    PetUpdate,
    SuccessResponse,
)
from app.schemas.common import ERROR_RESPONSES
from app.services.checkin import count_pet_check_ins, get_pet_check_ins
from app.services.eligibility import get_pet_progress
from app.services.pet import delete_pet, get_pet, rename_pet

router = APIRouter(dependencies=[Depends(get_current_principal)], responses=ERROR_RESPONSES)


@router.get("/{pet_id}", response_model=PetResponse)
async def get_pet_endpoint(pet_id: str, db: Session = Depends(get_db)):
    return get_pet(db, pet_id)


@router.patch("/{pet_id}", response_model=PetResponse)
async def rename_pet_endpoint(pet_id: str, pet: PetUpdate, db: Session = Depends(get_db)):
    """Rename a pet. Names stay unique per owner, ignoring case."""
    return rename_pet(db, pet_id, pet.name)


@router.delete("/{pet_id}", response_model=SuccessResponse)
async def delete_pet_endpoint(pet_id: str, db: Session = Depends(get_db)):
    delete_pet(db, pet_id)
    return SuccessResponse(message="Pet deleted")


@router.get("/{pet_id}/checkins", response_model=List[PetCheckInResponse])
async def list_pet_check_ins_endpoint(
    pet_id: str,
    host_id: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    return get_pet_check_ins(db, pet_id, host_id=host_id, limit=limit)


@router.get("/{pet_id}/checkins/count", response_model=CountResponse)
async def count_pet_check_ins_endpoint(
    pet_id: str,
    host_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    return CountResponse(count=count_pet_check_ins(db, pet_id, host_id=host_id))


@router.get("/{pet_id}/progress", response_model=PetProgressResponse)
async def get_pet_progress_endpoint(
    pet_id: str,
    host_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Progress towards every pet reward.

    Pet rewards count the pet's own check-ins. Passing ``host_id`` narrows
    the count to check-ins at that host.
    """
    progress = get_pet_progress(db, pet_id, host_id=host_id)
    return PetProgressResponse(pet_rewards=[item.to_dict() for item in progress])
