"""Reward progress and one-away reports backed by the database."""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.constants import REWARD_TYPE_HOST, REWARD_TYPE_PET
from app.db.models import CheckIn, PetCheckIn, Reward, RewardClaim
from app.services.one_away import OneAwayReport, count_by_participant, find_one_away
from app.services.progress import RewardProgress, evaluate
from app.services.reward import list_global_rewards, list_host_rewards, list_pet_rewards
from app.services.utils import require_athlete, require_host, require_pet


def _claims_for(db: Session, claimant_ids: List[str], reward_ids: Optional[List[str]] = None) -> List[RewardClaim]:
    if not claimant_ids:
        return []
    query = db.query(RewardClaim).filter(RewardClaim.claimant_id.in_(claimant_ids))
    if reward_ids is not None:
        query = query.filter(RewardClaim.reward_id.in_(reward_ids))
    return query.all()


def _athlete_history(db: Session, athlete_id: str) -> List[CheckIn]:
    return db.query(CheckIn).filter(
        CheckIn.athlete_id == athlete_id
    ).order_by(CheckIn.timestamp.desc()).limit(settings.HISTORY_LIMIT).all()


def _pet_history(db: Session, pet_id: str) -> List[PetCheckIn]:
    return db.query(PetCheckIn).filter(
        PetCheckIn.pet_id == pet_id
    ).order_by(PetCheckIn.timestamp.desc()).limit(settings.HISTORY_LIMIT).all()


def get_athlete_progress(db: Session, athlete_id: str, host_id: Optional[str] = None) -> Dict[str, List[RewardProgress]]:
    """
    Progress towards global rewards, and towards a host's rewards when asked.

    Global rewards count check-ins at every host; host rewards only count
    check-ins at that host.
    """
    require_athlete(db, athlete_id)
    history = _athlete_history(db, athlete_id)
    claims = _claims_for(db, [athlete_id])

    result = {"global": evaluate(athlete_id, list_global_rewards(db), history, claims), "host": []}
    if host_id:
        result["host"] = evaluate(athlete_id, list_host_rewards(db, host_id), history, claims, scope_host_id=host_id)
    return result


def get_pet_progress(db: Session, pet_id: str, host_id: Optional[str] = None) -> List[RewardProgress]:
    """Progress towards pet rewards, counted over the pet's own check-ins."""
    require_pet(db, pet_id)
    return evaluate(
        pet_id,
        list_pet_rewards(db),
        _pet_history(db, pet_id),
        _claims_for(db, [pet_id]),
        scope_host_id=host_id,
    )


def evaluate_reward(db: Session, reward: Reward, athlete_id: str, pet_id: Optional[str] = None) -> RewardProgress:
    """Progress of one participant towards one reward, scoped by the reward's type."""
    if reward.reward_type == REWARD_TYPE_PET:
        participant_id, history = pet_id, _pet_history(db, pet_id)
    else:
        participant_id, history = athlete_id, _athlete_history(db, athlete_id)

    scope_host_id = reward.host_id if reward.reward_type == REWARD_TYPE_HOST else None
    [progress] = evaluate(
        participant_id,
        [reward],
        history,
        _claims_for(db, [participant_id], [reward.id]),
        scope_host_id=scope_host_id,
    )
    return progress


def get_one_away_report(db: Session, host_id: str) -> OneAwayReport:
    """Athletes one check-in short of a global or host reward, from the host's recent check-ins."""
    require_host(db, host_id)

    recent = db.query(CheckIn).filter(
        CheckIn.host_id == host_id
    ).order_by(CheckIn.timestamp.desc()).limit(settings.ONE_AWAY_CHECKIN_WINDOW).all()

    catalog = list_global_rewards(db) + list_host_rewards(db, host_id)
    participants = list(count_by_participant(recent))
    claims = _claims_for(db, participants, [reward.id for reward in catalog])

    return find_one_away(host_id, catalog, recent, claims)
