"""Activity endpoints."""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal, get_db, require_super_admin
from app.schemas import ActivityCreate, ActivityResponse, ActivityUpdate, SuccessResponse
from app.schemas.common import ERROR_RESPONSES
from app.services.activity import (
    create_activity,
    create_default_activities,
    delete_activity,
    get_activity,
    list_activities,
    update_activity,
)

router = APIRouter(dependencies=[Depends(get_current_principal)], responses=ERROR_RESPONSES)


@router.get("", response_model=List[ActivityResponse])
async def list_activities_endpoint(include_disabled: bool = False, db: Session = Depends(get_db)):
    """Enabled activities, or every activity with ``include_disabled=true``."""
    return list_activities(db, include_disabled=include_disabled)


@router.post(
    "/defaults",
    response_model=List[ActivityResponse],
    dependencies=[Depends(require_super_admin)],
)
async def create_default_activities_endpoint(db: Session = Depends(get_db)):
    """Seed the standard activities when none exist yet."""
    return create_default_activities(db)


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity_endpoint(activity_id: str, db: Session = Depends(get_db)):
    return get_activity(db, activity_id)


@router.post(
    "",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_super_admin)],
)
async def create_activity_endpoint(activity: ActivityCreate, db: Session = Depends(get_db)):
    return create_activity(db, activity.name, activity.icon, activity.enabled)


@router.patch(
    "/{activity_id}",
    response_model=ActivityResponse,
    dependencies=[Depends(require_super_admin)],
)
async def update_activity_endpoint(activity_id: str, changes: ActivityUpdate, db: Session = Depends(get_db)):
    return update_activity(db, activity_id, changes.model_dump(exclude_unset=True))


@router.delete(
    "/{activity_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_super_admin)],
)
async def delete_activity_endpoint(activity_id: str, db: Session = Depends(get_db)):
    """Delete an activity. Activities already used by check-ins are kept (409)."""
    delete_activity(db, activity_id)
    return SuccessResponse(message="Activity deleted")
