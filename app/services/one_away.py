"""One-away report: participants exactly one check-in short of a reward."""
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List

from app.core.constants import REWARD_TYPE_GLOBAL, REWARD_TYPE_HOST
from app.services.progress import participant_of


@dataclass(frozen=True)
class OneAwayEntry:
    participant_id: str
    reward_id: str
    current_count: int
    required_count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class OneAwayReport:
    global_one_away: List[OneAwayEntry] = field(default_factory=list)
    host_one_away: List[OneAwayEntry] = field(default_factory=list)


def count_by_participant(check_ins: Iterable) -> Dict[str, int]:
    return dict(Counter(participant_of(record) for record in check_ins))


def _one_away_for(reward, counts: Dict[str, int], claimed) -> List[OneAwayEntry]:
    return [
        OneAwayEntry(
            participant_id=participant_id,
            reward_id=reward.id,
            current_count=count,
            required_count=reward.required_count,
        )
        for participant_id, count in counts.items()
        if count == reward.required_count - 1 and (participant_id, reward.id) not in claimed
    ]


def find_one_away(host_id: str, reward_catalog: Iterable, recent_check_ins: Iterable, all_prior_claims: Iterable) -> OneAwayReport:
    """
    Find participants whose count is exactly one below a reward threshold.

    Counts come from ``recent_check_ins`` only, which callers bound to the
    host's most recent records; this is a dashboard approximation, not a
    lifetime count. Host rewards belonging to other hosts and pet rewards
    are skipped.
    """
    counts = count_by_participant(recent_check_ins)
    claimed = {(participant_of(claim), claim.reward_id) for claim in all_prior_claims}

    report = OneAwayReport()
    for reward in reward_catalog:
        if reward.reward_type == REWARD_TYPE_GLOBAL:
            report.global_one_away.extend(_one_away_for(reward, counts, claimed))
        elif reward.reward_type == REWARD_TYPE_HOST and reward.host_id == host_id:
            report.host_one_away.extend(_one_away_for(reward, counts, claimed))

    return report
