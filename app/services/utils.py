"""Shared lookups for the service layer."""
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models import Activity, Athlete, Host, Location, Pet, Reward


def require_athlete(db: Session, athlete_id: str, include_deleted: bool = False) -> Athlete:
    """Get an athlete or raise NotFoundError. Soft-deleted athletes are hidden by default."""
    athlete = db.query(Athlete).filter(Athlete.id == athlete_id).first()
    if not athlete or (athlete.deleted and not include_deleted):
        raise NotFoundError("Athlete not found", code="athlete_not_found")
    return athlete


def require_host(db: Session, host_id: str) -> Host:
    host = db.query(Host).filter(Host.id == host_id).first()
    if not host:
        raise NotFoundError("Host not found", code="host_not_found")
    return host


def require_location(db: Session, location_id: str) -> Location:
    location = db.query(Location).filter(Location.id == location_id).first()
    if not location:
        raise NotFoundError("Location not found", code="location_not_found")
    return location


def require_activity(db: Session, activity_id: str) -> Activity:
    activity = db.query(Activity).filter(Activity.id == activity_id).first()
    if not activity:
        raise NotFoundError("Activity not found", code="activity_not_found")
    return activity


def require_pet(db: Session, pet_id: str) -> Pet:
    pet = db.query(Pet).filter(Pet.id == pet_id).first()
    if not pet:
        raise NotFoundError("Pet not found", code="pet_not_found")
    return pet


def require_reward(db: Session, reward_id: str) -> Reward:
    reward = db.query(Reward).filter(Reward.id == reward_id).first()
    if not reward:
        raise NotFoundError("Reward not found", code="reward_not_found")
    return reward
