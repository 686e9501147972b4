"""Athlete business logic."""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.core.errors import InvalidInputError, PolicyDeclinedError
from app.core.logging_config import get_logger
from app.core.utils import utcnow
from app.db.models import Athlete, DisclaimerSignature
from app.services.utils import require_athlete, require_host

logger = get_logger(__name__)

UPDATABLE_FIELDS = {
    "first_name",
    "last_name",
    "middle_initial",
    "email",
    "employer",
    "shirt_gender",
    "shirt_size",
    "emergency_name",
    "emergency_phone",
    "legacy_count",
}


def _email_taken(db: Session, email: str, exclude_id: Optional[str] = None) -> bool:
    query = db.query(Athlete).filter(Athlete.email == email, Athlete.deleted.is_(False))
    if exclude_id:
        query = query.filter(Athlete.id != exclude_id)
    return query.first() is not None


def register_athlete(db: Session, first_name: str, last_name: str, email: str, **profile) -> Athlete:
    """Register a new athlete. Emails are unique among active athletes."""
    if _email_taken(db, email):
        raise PolicyDeclinedError("An athlete with this email already exists", code="email_taken")

    unknown = set(profile) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidInputError(f"Unknown athlete fields: {', '.join(sorted(unknown))}")

    athlete = Athlete(first_name=first_name, last_name=last_name, email=email, **profile)
    db.add(athlete)
    db.commit()
    db.refresh(athlete)

    logger.info("athlete_registered", athlete_id=athlete.id)
    return athlete


def get_athlete(db: Session, athlete_id: str) -> Athlete:
    return require_athlete(db, athlete_id)


def update_athlete(db: Session, athlete_id: str, changes: Dict) -> Athlete:
    """Apply a validated partial update."""
    athlete = require_athlete(db, athlete_id)

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidInputError(f"Unknown athlete fields: {', '.join(sorted(unknown))}")

    if "email" in changes and _email_taken(db, changes["email"], exclude_id=athlete_id):
        raise PolicyDeclinedError("An athlete with this email already exists", code="email_taken")

    for key, value in changes.items():
        setattr(athlete, key, value)

    db.commit()
    db.refresh(athlete)
    return athlete


def soft_delete_athlete(db: Session, athlete_id: str) -> None:
    athlete = require_athlete(db, athlete_id)
    athlete.deleted = True
    db.commit()
    logger.info("athlete_soft_deleted", athlete_id=athlete_id)


def search_athletes(
    db: Session,
    last_name: Optional[str] = None,
    first_name: Optional[str] = None,
    email: Optional[str] = None,
    limit: int = 50,
) -> List[Athlete]:
    """
    Search active athletes by email, or by last name with an optional first name.

    Name matching is a case-insensitive prefix match, the way the kiosk
    search box narrows results while typing.
    """
    query = db.query(Athlete).filter(Athlete.deleted.is_(False))

    if email:
        query = query.filter(Athlete.email == email.strip().lower())
    elif last_name:
        query = query.filter(Athlete.last_name.ilike(f"{last_name.strip()}%"))
        if first_name:
            query = query.filter(Athlete.first_name.ilike(f"{first_name.strip()}%"))
    else:
        raise InvalidInputError("Provide lastName or email to search", code="missing_search_term")

    return query.order_by(Athlete.last_name, Athlete.first_name).limit(limit).all()


def sign_disclaimer(db: Session, athlete_id: str, host_id: str) -> DisclaimerSignature:
    """Record that the athlete signed the host's disclaimer (idempotent)."""
    require_athlete(db, athlete_id)
    require_host(db, host_id)

    existing = get_disclaimer_signature(db, athlete_id, host_id)
    if existing:
        return existing

    signature = DisclaimerSignature(athlete_id=athlete_id, host_id=host_id, signed_at=utcnow())
    try:
        db.add(signature)
        db.commit()
    except IntegrityError:
        # Another request signed first
        db.rollback()
        return get_disclaimer_signature(db, athlete_id, host_id)

    db.refresh(signature)
    logger.info("disclaimer_signed", athlete_id=athlete_id, host_id=host_id)
    return signature


def get_disclaimer_signature(db: Session, athlete_id: str, host_id: str) -> Optional[DisclaimerSignature]:
    return db.query(DisclaimerSignature).filter(
        DisclaimerSignature.athlete_id == athlete_id,
        DisclaimerSignature.host_id == host_id
    ).first()


def get_disclaimer_status(db: Session, athlete_id: str, host_id: str) -> Dict:
    require_athlete(db, athlete_id)
    host = require_host(db, host_id)
    signature = get_disclaimer_signature(db, athlete_id, host_id)
    return {
        "host_id": host_id,
        "signed": signature is not None,
        "signed_at": signature.signed_at if signature else None,
        "disclaimer": host.disclaimer,
    }
