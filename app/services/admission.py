"""Check-in admission rules.

These functions only decide; they never write. A declined admission is a
normal result, returned as an ``AdmissionDecision`` with ``allowed=False``.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple

from app.core.utils import to_utc
from app.services.week import start_of_week

ALREADY_CHECKED_IN = "already_checked_in_this_week"
PET_NOT_OWNED = "pet_not_owned_by_athlete"
ATHLETE_NOT_CHECKED_IN = "athlete_not_checked_in"

REASON_MESSAGES = {
    ALREADY_CHECKED_IN: "Athlete has already checked in at this host this week",
    PET_NOT_OWNED: "Pet does not belong to the specified athlete",
    ATHLETE_NOT_CHECKED_IN: "Athlete must check in before their pet can check in",
}


@dataclass(frozen=True)
class AdmissionDecision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed

    @property
    def message(self) -> Optional[str]:
        return REASON_MESSAGES.get(self.reason)


ALLOWED = AdmissionDecision(allowed=True)


def latest_check_in(athlete_id: str, host_id: str, history: Iterable):
    """Most recent check-in for the athlete at the host, or None."""
    latest = None
    for record in history:
        if record.athlete_id != athlete_id or record.host_id != host_id:
            continue
        if latest is None or to_utc(record.timestamp) > to_utc(latest.timestamp):
            latest = record
    return latest


def last_check_in_marker(athlete_id: str, host_id: str, history: Iterable) -> Optional[Tuple[datetime, str]]:
    """(timestamp, activity_id) of the athlete's last check-in at the host."""
    record = latest_check_in(athlete_id, host_id, history)
    if record is None:
        return None
    return to_utc(record.timestamp), record.activity_id


def can_check_in(
    athlete_id: str,
    host_id: str,
    history: Iterable,
    now: Optional[datetime] = None,
) -> AdmissionDecision:
    """
    Decide whether the athlete may check in at the host this week.

    The limit is per host: a check-in at one host never blocks another.
    """
    latest = latest_check_in(athlete_id, host_id, history)
    if latest is None:
        return ALLOWED

    if start_of_week(now).contains(latest.timestamp):
        return AdmissionDecision(allowed=False, reason=ALREADY_CHECKED_IN)

    return ALLOWED


def should_increment_global_count(athlete_id: str, history: Iterable, now: Optional[datetime] = None) -> bool:
    """True iff this would be the athlete's first check-in of the week at any host."""
    week = start_of_week(now)
    return not any(
        record.athlete_id == athlete_id and week.contains(record.timestamp)
        for record in history
    )


def can_pet_check_in(
    athlete_id: str,
    host_id: str,
    pet,
    athlete_check_ins: Iterable,
    now: Optional[datetime] = None,
) -> AdmissionDecision:
    """
    Decide whether a pet may check in alongside its owner.

    Pets have no weekly limit of their own; they follow the owner, who must
    already hold a check-in at this host in the current week.
    """
    if pet.athlete_id != athlete_id:
        return AdmissionDecision(allowed=False, reason=PET_NOT_OWNED)

    week = start_of_week(now)
    has_qualifying = any(
        record.athlete_id == athlete_id
        and record.host_id == host_id
        and week.contains(record.timestamp)
        for record in athlete_check_ins
    )
    if not has_qualifying:
        return AdmissionDecision(allowed=False, reason=ATHLETE_NOT_CHECKED_IN)

    return ALLOWED
