"""Pet business logic."""
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.core.errors import PolicyDeclinedError
from app.core.logging_config import get_logger
from app.db.models import Pet
from app.services.utils import require_athlete, require_pet

logger = get_logger(__name__)


def _name_key(name: str) -> str:
    return name.strip().lower()


def pet_name_exists(db: Session, athlete_id: str, name: str) -> bool:
    return db.query(Pet).filter(
        Pet.athlete_id == athlete_id,
        Pet.name_key == _name_key(name)
    ).first() is not None


def create_pet(db: Session, athlete_id: str, name: str) -> Pet:
    """Register a pet. Names are unique per athlete, ignoring case."""
    require_athlete(db, athlete_id)

    if pet_name_exists(db, athlete_id, name):
        raise PolicyDeclinedError("Athlete already has a pet with this name", code="pet_name_taken")

    pet = Pet(athlete_id=athlete_id, name=name, name_key=_name_key(name))
    try:
        db.add(pet)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise PolicyDeclinedError("Athlete already has a pet with this name", code="pet_name_taken")

    db.refresh(pet)
    logger.info("pet_created", pet_id=pet.id, athlete_id=athlete_id)
    return pet


def get_pet(db: Session, pet_id: str) -> Pet:
    return require_pet(db, pet_id)


def list_pets(db: Session, athlete_id: str) -> List[Pet]:
    require_athlete(db, athlete_id)
    return db.query(Pet).filter(Pet.athlete_id == athlete_id).order_by(Pet.name).all()


def rename_pet(db: Session, pet_id: str, name: str) -> Pet:
    pet = require_pet(db, pet_id)

    if _name_key(name) != pet.name_key and pet_name_exists(db, pet.athlete_id, name):
        raise PolicyDeclinedError("Athlete already has a pet with this name", code="pet_name_taken")

    pet.name = name
    pet.name_key = _name_key(name)
    db.commit()
    db.refresh(pet)
    return pet


def delete_pet(db: Session, pet_id: str) -> None:
    pet = require_pet(db, pet_id)
    db.delete(pet)
    db.commit()
    logger.info("pet_deleted", pet_id=pet_id)
