"""Check-in endpoints."""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.api.deps import ensure_host_access, get_db, require_host_or_super_admin
from app.core.rate_limit import limiter, RATE_LIMITS
from app.core.security import Principal
from app.schemas import (
    CheckInCreate,
    CheckInReassign,
    CheckInRecorded,
    CheckInResponse,
    PetCheckInCreate,
    PetCheckInResponse,
    SuccessResponse,
)
from app.schemas.common import ERROR_RESPONSES
from app.services.checkin import (
    delete_check_in,
    get_check_in,
    reassign_activity,
    record_check_in,
    record_pet_check_in,
)

router = APIRouter(responses=ERROR_RESPONSES)


@router.post(
    "/checkins",
    response_model=CheckInRecorded,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(RATE_LIMITS["check_in"])
async def create_check_in_endpoint(
    request: Request,
    body: CheckInCreate,
    principal: Principal = Depends(require_host_or_super_admin),
    db: Session = Depends(get_db)
):
    """
    Check an athlete in at a host location.

    An athlete may check in once per host per week; weeks start Sunday
    00:00 in the configured timezone. A second check-in at the same host
    in the same week returns 409 with code ``already_checked_in_this_week``.
    Checking in also requires the host's disclaimer to be signed.

    The week is always the current one. A timestamp only places the
    check-in within it: one from another week returns 400
    ``timestamp_outside_current_week`` and one in the future returns 400
    ``timestamp_in_future``.

    Args:
        request: FastAPI Request (for rate limiting)
        body: athlete, host, location, activity and an optional timestamp
              (epoch milliseconds or ISO-8601 with an offset)

    Returns:
        The stored check-in. ``first_of_week`` is true when this is the
        athlete's first check-in of the week at any host, i.e. the check-in
        that adds a week to their global streak.

    Example:
        Request:
            POST /api/v1/checkins
            {
                "athlete_id": "5f0c...",
                "host_id": "a81b...",
                "location_id": "77d2...",
                "activity_id": "0c4e..."
            }

        Response (409):
            {
                "success": false,
                "error": {
                    "code": "already_checked_in_this_week",
                    "message": "Athlete has already checked in at this host this week"
                }
            }
    """
    ensure_host_access(db, principal, body.host_id)
    check_in, first_of_week = record_check_in(
        db,
        athlete_id=body.athlete_id,
        host_id=body.host_id,
        location_id=body.location_id,
        activity_id=body.activity_id,
        timestamp=body.timestamp,
    )
    return CheckInRecorded.model_validate(check_in).model_copy(update={"first_of_week": first_of_week})


@router.patch("/checkins/{check_in_id}", response_model=CheckInResponse)
async def reassign_activity_endpoint(
    check_in_id: str,
    body: CheckInReassign,
    principal: Principal = Depends(require_host_or_super_admin),
    db: Session = Depends(get_db)
):
    """Change the activity recorded on a check-in."""
    ensure_host_access(db, principal, get_check_in(db, check_in_id).host_id)
    return reassign_activity(db, check_in_id, body.activity_id)


@router.delete("/checkins/{check_in_id}", response_model=SuccessResponse)
async def delete_check_in_endpoint(
    check_in_id: str,
    principal: Principal = Depends(require_host_or_super_admin),
    db: Session = Depends(get_db)
):
    """Delete a check-in. The athlete may then check in at that host again the same week."""
    ensure_host_access(db, principal, get_check_in(db, check_in_id).host_id)
    delete_check_in(db, check_in_id)
    return SuccessResponse(message="Check-in deleted")


@router.post(
    "/pet-checkins",
    response_model=PetCheckInResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(RATE_LIMITS["pet_check_in"])
async def create_pet_check_in_endpoint(
    request: Request,
    body: PetCheckInCreate,
    principal: Principal = Depends(require_host_or_super_admin),
    db: Session = Depends(get_db)
):
    """
    Check a pet in alongside its owner.

    The owner must already be checked in at the same host this week
    (409 ``athlete_not_checked_in``), and the pet must belong to the owner
    (400 ``pet_not_owned_by_athlete``). Timestamps follow the same
    current-week rule as athlete check-ins.
    """
    ensure_host_access(db, principal, body.host_id)
    return record_pet_check_in(
        db,
        athlete_id=body.athlete_id,
        pet_id=body.pet_id,
        host_id=body.host_id,
        location_id=body.location_id,
        timestamp=body.timestamp,
    )
