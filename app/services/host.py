"""Host business logic."""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.core.errors import InvalidInputError, PolicyDeclinedError
from app.core.logging_config import get_logger
from app.core.security import get_password_hash, verify_host_secret
from app.db.models import Host
from app.services.utils import require_host

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"name", "email", "admin_secret", "subject_id", "disclaimer"}


def create_host(
    db: Session,
    name: str,
    email: str,
    admin_secret: str,
    subject_id: Optional[str] = None,
    disclaimer: Optional[str] = None,
) -> Host:
    """Create a host. The admin secret is stored as an Argon2 hash."""
    host = Host(
        name=name,
        email=email,
        admin_secret=get_password_hash(admin_secret),
        subject_id=subject_id,
        disclaimer=disclaimer,
    )
    try:
        db.add(host)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise PolicyDeclinedError("Another host is linked to this identity", code="subject_taken")

    db.refresh(host)
    logger.info("host_created", host_id=host.id)
    return host


def list_hosts(db: Session) -> List[Host]:
    return db.query(Host).order_by(Host.name).all()


def get_host(db: Session, host_id: str) -> Host:
    return require_host(db, host_id)


def get_host_by_subject(db: Session, subject_id: str) -> Optional[Host]:
    """Find the host linked to an identity-provider subject."""
    return db.query(Host).filter(Host.subject_id == subject_id).first()


def update_host(db: Session, host_id: str, changes: Dict) -> Host:
    host = require_host(db, host_id)

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidInputError(f"Unknown host fields: {', '.join(sorted(unknown))}")

    for key, value in changes.items():
        if key == "admin_secret":
            value = get_password_hash(value)
        setattr(host, key, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise PolicyDeclinedError("Another host is linked to this identity", code="subject_taken")

    db.refresh(host)
    return host


def delete_host(db: Session, host_id: str) -> None:
    """Delete a host with its locations and host-specific rewards."""
    host = require_host(db, host_id)
    db.delete(host)
    db.commit()
    logger.info("host_deleted", host_id=host_id)


def verify_admin_secret(db: Session, host_id: str, secret: str) -> bool:
    host = require_host(db, host_id)
    valid = verify_host_secret(secret, host.admin_secret)
    if not valid:
        logger.warning("host_admin_secret_rejected", host_id=host_id)
    return valid
