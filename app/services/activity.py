"""Activity business logic."""
from typing import Dict, List
from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_ACTIVITIES
from app.core.errors import InvalidInputError, PolicyDeclinedError
from app.core.logging_config import get_logger
from app.db.models import Activity, CheckIn
from app.services.utils import require_activity

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"name", "icon", "enabled"}


def list_activities(db: Session, include_disabled: bool = False) -> List[Activity]:
    query = db.query(Activity)
    if not include_disabled:
        query = query.filter(Activity.enabled.is_(True))
    return query.order_by(Activity.name).all()


def get_activity(db: Session, activity_id: str) -> Activity:
    return require_activity(db, activity_id)


def create_activity(db: Session, name: str, icon: str, enabled: bool = True) -> Activity:
    activity = Activity(name=name, icon=icon, enabled=enabled)
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


def update_activity(db: Session, activity_id: str, changes: Dict) -> Activity:
    activity = require_activity(db, activity_id)

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidInputError(f"Unknown activity fields: {', '.join(sorted(unknown))}")

    for key, value in changes.items():
        setattr(activity, key, value)

    db.commit()
    db.refresh(activity)
    return activity


def delete_activity(db: Session, activity_id: str) -> None:
    """Delete an activity that has never been checked in with."""
    activity = require_activity(db, activity_id)

    in_use = db.query(CheckIn.id).filter(CheckIn.activity_id == activity_id).first()
    if in_use:
        raise PolicyDeclinedError(
            "Activity has check-ins; disable it instead",
            code="activity_in_use",
        )

    db.delete(activity)
    db.commit()
    logger.info("activity_deleted", activity_id=activity_id)


def create_default_activities(db: Session) -> List[Activity]:
    """Create the default activities unless any activity exists."""
    existing = db.query(Activity).order_by(Activity.name).all()
    if existing:
        return existing

    activities = [Activity(name=item["name"], icon=item["icon"], enabled=True) for item in DEFAULT_ACTIVITIES]
    db.add_all(activities)
    db.commit()
    for activity in activities:
        db.refresh(activity)

    logger.info("default_activities_created", count=len(activities))
    return activities
