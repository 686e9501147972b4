"""Reward progress evaluation.

Pure snapshot computation over records supplied by the caller. Records are
read by attribute, so ORM rows and plain objects both work:

- check-ins: ``athlete_id``, ``host_id`` and, for pet check-ins, ``pet_id``
- claims: ``athlete_id``, ``reward_id`` and, for pet claims, ``pet_id``
- rewards: ``id``, ``required_count``
"""
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional, Set


@dataclass(frozen=True)
class RewardProgress:
    reward_id: str
    current_count: int
    required: int
    eligible: bool

    def to_dict(self) -> dict:
        return asdict(self)


def participant_of(record) -> str:
    """The participant a check-in or claim belongs to: the pet if any, else the athlete."""
    return getattr(record, "pet_id", None) or record.athlete_id


def count_check_ins(participant_id: str, history: Iterable, scope_host_id: Optional[str] = None) -> int:
    return sum(
        1
        for record in history
        if participant_of(record) == participant_id
        and (scope_host_id is None or record.host_id == scope_host_id)
    )


def claimed_reward_ids(participant_id: str, claims: Iterable) -> Set[str]:
    return {claim.reward_id for claim in claims if participant_of(claim) == participant_id}


def evaluate(
    participant_id: str,
    reward_catalog: Iterable,
    check_in_history: Iterable,
    prior_claims: Iterable,
    scope_host_id: Optional[str] = None,
) -> List[RewardProgress]:
    """
    Compute progress towards each reward in the catalog.

    A reward is eligible iff the participant's count reaches the threshold
    and the participant has not already claimed it. Results keep catalog
    order.

    Args:
        participant_id: Athlete id, or pet id for pet rewards
        reward_catalog: Rewards to evaluate
        check_in_history: Check-ins (or pet check-ins) to count
        prior_claims: Existing reward claims
        scope_host_id: Only count check-ins at this host when given
    """
    history = list(check_in_history)
    current_count = count_check_ins(participant_id, history, scope_host_id)
    claimed = claimed_reward_ids(participant_id, prior_claims)

    return [
        RewardProgress(
            reward_id=reward.id,
            current_count=current_count,
            required=reward.required_count,
            eligible=current_count >= reward.required_count and reward.id not in claimed,
        )
        for reward in reward_catalog
    ]
