"""Location business logic."""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from app.core.constants import MAX_LOCATION_ACTIVITIES
from app.core.errors import InvalidInputError, NotFoundError
from app.core.logging_config import get_logger
from app.db.models import Activity, Location, LocationActivity
from app.services.utils import require_host, require_location

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"name", "address"}


def _validate_activity_ids(db: Session, activity_ids: List[str]) -> List[str]:
    if len(activity_ids) > MAX_LOCATION_ACTIVITIES:
        raise InvalidInputError(
            f"A location can offer at most {MAX_LOCATION_ACTIVITIES} activities",
            code="too_many_activities",
        )
    if len(set(activity_ids)) != len(activity_ids):
        raise InvalidInputError("Duplicate activity ids", code="duplicate_activities")

    if activity_ids:
        found = {
            activity_id
            for (activity_id,) in db.query(Activity.id).filter(Activity.id.in_(activity_ids)).all()
        }
        missing = [activity_id for activity_id in activity_ids if activity_id not in found]
        if missing:
            raise NotFoundError(f"Activity not found: {', '.join(missing)}", code="activity_not_found")

    return activity_ids


def create_location(
    db: Session,
    host_id: str,
    name: str,
    address: str = "",
    activity_ids: Optional[List[str]] = None,
) -> Location:
    require_host(db, host_id)
    activity_ids = _validate_activity_ids(db, activity_ids or [])

    location = Location(host_id=host_id, name=name, address=address)
    location.activity_links = [
        LocationActivity(activity_id=activity_id, position=position)
        for position, activity_id in enumerate(activity_ids)
    ]
    db.add(location)
    db.commit()
    db.refresh(location)

    logger.info("location_created", location_id=location.id, host_id=host_id)
    return location


def list_locations(db: Session, host_id: Optional[str] = None) -> List[Location]:
    query = db.query(Location)
    if host_id:
        require_host(db, host_id)
        query = query.filter(Location.host_id == host_id)
    return query.order_by(Location.name).all()


def get_host_location(db: Session, host_id: str, location_id: str) -> Location:
    """Get a location, insisting it belongs to the given host."""
    location = require_location(db, location_id)
    if location.host_id != host_id:
        raise NotFoundError("Location not found for this host", code="location_not_found")
    return location


def update_location(db: Session, host_id: str, location_id: str, changes: Dict) -> Location:
    location = get_host_location(db, host_id, location_id)

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidInputError(f"Unknown location fields: {', '.join(sorted(unknown))}")

    for key, value in changes.items():
        setattr(location, key, value)

    db.commit()
    db.refresh(location)
    return location


def set_location_activities(db: Session, host_id: str, location_id: str, activity_ids: List[str]) -> Location:
    """Replace the location's activities, keeping the given order."""
    location = get_host_location(db, host_id, location_id)
    activity_ids = _validate_activity_ids(db, activity_ids)

    location.activity_links.clear()
    db.flush()
    for position, activity_id in enumerate(activity_ids):
        location.activity_links.append(LocationActivity(activity_id=activity_id, position=position))

    db.commit()
    db.refresh(location)
    return location


def delete_location(db: Session, host_id: str, location_id: str) -> None:
    location = get_host_location(db, host_id, location_id)
    db.delete(location)
    db.commit()
    logger.info("location_deleted", location_id=location_id, host_id=host_id)
