"""Check-in business logic."""
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.constants import MAX_CLOCK_SKEW_SECONDS
from app.core.errors import InvalidInputError, NotFoundError, PolicyDeclinedError
from app.core.logging_config import get_logger
from app.core.utils import to_utc, utcnow
from app.db.models import Activity, CheckIn, Location, PetCheckIn
from app.services.admission import (
    ALREADY_CHECKED_IN,
    PET_NOT_OWNED,
    REASON_MESSAGES,
    can_check_in,
    can_pet_check_in,
    should_increment_global_count,
)
from app.services.athlete import get_disclaimer_signature
from app.services.utils import (
    require_activity,
    require_athlete,
    require_host,
    require_location,
    require_pet,
)
from app.services.week import WeekBoundary, start_of_week

logger = get_logger(__name__)

CLOCK_SKEW = timedelta(seconds=MAX_CLOCK_SKEW_SECONDS)


def _require_site(db: Session, host_id: str, location_id: str) -> Location:
    """The host must exist and own the location."""
    require_host(db, host_id)
    location = require_location(db, location_id)
    if location.host_id != host_id:
        raise InvalidInputError(
            "Location does not belong to the specified host",
            code="location_host_mismatch",
        )
    return location


def _require_offered_activity(db: Session, activity_id: str, location: Location) -> Activity:
    activity = require_activity(db, activity_id)
    if not activity.enabled:
        raise InvalidInputError("Activity is not enabled", code="activity_disabled")
    if activity_id not in location.activity_ids:
        raise InvalidInputError(
            "Activity is not available at the specified location",
            code="activity_not_offered",
        )
    return activity


def _resolve_check_in_time(timestamp: Optional[datetime], now: datetime) -> Tuple[datetime, WeekBoundary]:
    """
    Admission is always judged on the week containing ``now``.

    A client timestamp only records when, within that week, the check-in
    happened. Future timestamps and timestamps from another week are rejected.
    """
    week = start_of_week(now)
    if timestamp is None:
        return now, week

    checked_in_at = to_utc(timestamp)
    if checked_in_at > now + CLOCK_SKEW:
        raise InvalidInputError("Timestamp is in the future", code="timestamp_in_future")
    if not week.contains(checked_in_at):
        raise InvalidInputError(
            "Timestamp is outside the current week",
            code="timestamp_outside_current_week",
        )
    return checked_in_at, week


def _athlete_check_ins_between(
    db: Session,
    athlete_id: str,
    start: datetime,
    end: datetime,
    host_id: Optional[str] = None,
) -> List[CheckIn]:
    query = db.query(CheckIn).filter(
        CheckIn.athlete_id == athlete_id,
        CheckIn.timestamp >= start,
        CheckIn.timestamp < end
    )
    if host_id:
        query = query.filter(CheckIn.host_id == host_id)
    return query.all()


def get_check_in(db: Session, check_in_id: str) -> CheckIn:
    check_in = db.query(CheckIn).filter(CheckIn.id == check_in_id).first()
    if not check_in:
        raise NotFoundError("Check-in not found", code="checkin_not_found")
    return check_in


def get_athlete_check_ins(
    db: Session,
    athlete_id: str,
    host_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[CheckIn]:
    """An athlete's check-ins, newest first."""
    require_athlete(db, athlete_id)
    query = db.query(CheckIn).filter(CheckIn.athlete_id == athlete_id)
    if host_id:
        query = query.filter(CheckIn.host_id == host_id)
    return query.order_by(CheckIn.timestamp.desc()).limit(limit or settings.HISTORY_LIMIT).all()


def count_athlete_check_ins(db: Session, athlete_id: str, host_id: Optional[str] = None) -> int:
    require_athlete(db, athlete_id)
    query = db.query(func.count(CheckIn.id)).filter(CheckIn.athlete_id == athlete_id)
    if host_id:
        query = query.filter(CheckIn.host_id == host_id)
    return query.scalar() or 0


def count_active_weeks(db: Session, athlete_id: str) -> int:
    """Weeks in which the athlete checked in anywhere; each week counts once."""
    return db.query(func.count(distinct(CheckIn.week_start))).filter(
        CheckIn.athlete_id == athlete_id
    ).scalar() or 0


def get_host_check_ins(db: Session, host_id: str, limit: Optional[int] = None) -> List[CheckIn]:
    """A host's most recent check-ins, newest first."""
    require_host(db, host_id)
    return db.query(CheckIn).filter(
        CheckIn.host_id == host_id
    ).order_by(CheckIn.timestamp.desc()).limit(limit or settings.HISTORY_LIMIT).all()


def record_check_in(
    db: Session,
    athlete_id: str,
    host_id: str,
    location_id: str,
    activity_id: str,
    timestamp: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Tuple[CheckIn, bool]:
    """
    Record an athlete check-in, once per host per week.

    The weekly limit is checked up front and then enforced by the
    (athlete, host, week) unique key, so a concurrent duplicate loses at
    insert time instead of slipping through.

    Returns:
        (check_in, first_of_week) where first_of_week is True when this is
        the athlete's first check-in of the week at any host

    Raises:
        NotFoundError: athlete, host, location or activity missing
        InvalidInputError: location/activity do not fit the host, or the
            timestamp is in the future or outside the current week
        PolicyDeclinedError: weekly limit used or disclaimer not signed
    """
    require_athlete(db, athlete_id)
    location = _require_site(db, host_id, location_id)
    _require_offered_activity(db, activity_id, location)

    now = to_utc(now) if now else utcnow()
    checked_in_at, week = _resolve_check_in_time(timestamp, now)
    this_week = _athlete_check_ins_between(db, athlete_id, week.start, week.end)

    decision = can_check_in(athlete_id, host_id, this_week, now=now)
    if not decision:
        logger.info("checkin_declined", athlete_id=athlete_id, host_id=host_id, reason=decision.reason)
        raise PolicyDeclinedError(decision.message, code=decision.reason)

    if not get_disclaimer_signature(db, athlete_id, host_id):
        raise PolicyDeclinedError(
            "Athlete has not signed the disclaimer for this host",
            code="disclaimer_required",
        )

    first_of_week = should_increment_global_count(athlete_id, this_week, now=now)

    check_in = CheckIn(
        athlete_id=athlete_id,
        host_id=host_id,
        location_id=location_id,
        activity_id=activity_id,
        timestamp=checked_in_at,
        week_start=week.start,
    )
    try:
        db.add(check_in)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("checkin_declined", athlete_id=athlete_id, host_id=host_id, reason="concurrent_duplicate")
        raise PolicyDeclinedError(REASON_MESSAGES[ALREADY_CHECKED_IN], code=ALREADY_CHECKED_IN)

    db.refresh(check_in)
    logger.info(
        "checkin_recorded",
        checkin_id=check_in.id,
        athlete_id=athlete_id,
        host_id=host_id,
        location_id=location_id,
        first_of_week=first_of_week,
    )
    return check_in, first_of_week


def reassign_activity(db: Session, check_in_id: str, activity_id: str) -> CheckIn:
    """Change the activity on an existing check-in."""
    check_in = get_check_in(db, check_in_id)
    location = require_location(db, check_in.location_id)
    _require_offered_activity(db, activity_id, location)

    check_in.activity_id = activity_id
    db.commit()
    db.refresh(check_in)

    logger.info("checkin_activity_reassigned", checkin_id=check_in_id, activity_id=activity_id)
    return check_in


def delete_check_in(db: Session, check_in_id: str) -> None:
    """Delete a check-in, which frees that host's slot for its week."""
    check_in = get_check_in(db, check_in_id)
    db.delete(check_in)
    db.commit()
    logger.info("checkin_deleted", checkin_id=check_in_id)


def get_pet_check_ins(
    db: Session,
    pet_id: str,
    host_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[PetCheckIn]:
    require_pet(db, pet_id)
    query = db.query(PetCheckIn).filter(PetCheckIn.pet_id == pet_id)
    if host_id:
        query = query.filter(PetCheckIn.host_id == host_id)
    return query.order_by(PetCheckIn.timestamp.desc()).limit(limit or settings.HISTORY_LIMIT).all()


def count_pet_check_ins(db: Session, pet_id: str, host_id: Optional[str] = None) -> int:
    require_pet(db, pet_id)
    query = db.query(func.count(PetCheckIn.id)).filter(PetCheckIn.pet_id == pet_id)
    if host_id:
        query = query.filter(PetCheckIn.host_id == host_id)
    return query.scalar() or 0


def get_host_pet_check_ins(db: Session, host_id: str, limit: Optional[int] = None) -> List[PetCheckIn]:
    require_host(db, host_id)
    return db.query(PetCheckIn).filter(
        PetCheckIn.host_id == host_id
    ).order_by(PetCheckIn.timestamp.desc()).limit(limit or settings.HISTORY_LIMIT).all()


def record_pet_check_in(
    db: Session,
    athlete_id: str,
    pet_id: str,
    host_id: str,
    location_id: str,
    timestamp: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> PetCheckIn:
    """
    Record a pet check-in alongside its owner's check-in this week.

    Raises:
        NotFoundError: athlete, pet, host or location missing
        InvalidInputError: pet not owned by athlete, location/host mismatch,
            or the timestamp is in the future or outside the current week
        PolicyDeclinedError: owner has not checked in at this host this week
    """
    require_athlete(db, athlete_id)
    pet = require_pet(db, pet_id)
    _require_site(db, host_id, location_id)

    now = to_utc(now) if now else utcnow()
    checked_in_at, week = _resolve_check_in_time(timestamp, now)
    owner_week = _athlete_check_ins_between(db, athlete_id, week.start, week.end, host_id=host_id)

    decision = can_pet_check_in(athlete_id, host_id, pet, owner_week, now=now)
    if not decision:
        logger.info("pet_checkin_declined", pet_id=pet_id, host_id=host_id, reason=decision.reason)
        error = InvalidInputError if decision.reason == PET_NOT_OWNED else PolicyDeclinedError
        raise error(decision.message, code=decision.reason)

    pet_check_in = PetCheckIn(
        athlete_id=athlete_id,
        pet_id=pet_id,
        host_id=host_id,
        location_id=location_id,
        timestamp=checked_in_at,
    )
    db.add(pet_check_in)
    db.commit()
    db.refresh(pet_check_in)

    logger.info("pet_checkin_recorded", pet_checkin_id=pet_check_in.id, pet_id=pet_id, host_id=host_id)
    return pet_check_in
