from .admission import AdmissionDecision, can_check_in, can_pet_check_in, should_increment_global_count
from .one_away import OneAwayEntry, OneAwayReport, find_one_away
from .progress import RewardProgress, evaluate
from .week import WeekBoundary, is_within_week, start_of_week

__all__ = [
    # week
    "WeekBoundary",
    "start_of_week",
    "is_within_week",
    # admission
    "AdmissionDecision",
    "can_check_in",
    "can_pet_check_in",
    "should_increment_global_count",
    # progress
    "RewardProgress",
    "evaluate",
    # one-away
    "OneAwayEntry",
    "OneAwayReport",
    "find_one_away",
]
