"""Unit tests for the one-away report."""
import pytest
from types import SimpleNamespace

from app.services.one_away import OneAwayEntry, count_by_participant, find_one_away


def reward(reward_id, required_count, reward_type="host", host_id="H"):
    if reward_type != "host":
        host_id = None
    return SimpleNamespace(id=reward_id, required_count=required_count, reward_type=reward_type, host_id=host_id)


def check_ins(counts, host_id="H"):
    records = []
    for athlete_id, count in counts.items():
        records += [SimpleNamespace(athlete_id=athlete_id, host_id=host_id, pet_id=None) for _ in range(count)]
    return records


def claim(athlete_id, reward_id):
    return SimpleNamespace(athlete_id=athlete_id, reward_id=reward_id, pet_id=None)


@pytest.mark.unit
class TestFindOneAway:
    """Participants exactly one check-in short of a reward."""

    def test_only_required_minus_one_appears(self):
        """Counts {9, 10, 8} against a threshold of 10."""
        report = find_one_away(
            "H",
            [reward("R", 10)],
            check_ins({"nine": 9, "ten": 10, "eight": 8}),
            [],
        )

        assert report.host_one_away == [
            OneAwayEntry(participant_id="nine", reward_id="R", current_count=9, required_count=10)
        ]
        assert report.global_one_away == []

    @pytest.mark.parametrize("count,expected", [(3, False), (4, True), (5, False), (6, False)])
    def test_exactness(self, count, expected):
        report = find_one_away("H", [reward("R", 5)], check_ins({"A": count}), [])
        assert bool(report.host_one_away) is expected

    def test_claimed_reward_is_excluded(self):
        report = find_one_away("H", [reward("R", 5)], check_ins({"A": 4, "B": 4}), [claim("A", "R")])
        assert [entry.participant_id for entry in report.host_one_away] == ["B"]

    def test_global_and_host_rewards_are_split(self):
        catalog = [reward("G8", 8, reward_type="global"), reward("H3", 3)]
        report = find_one_away("H", catalog, check_ins({"A": 7, "B": 2}), [])

        assert [(e.participant_id, e.reward_id) for e in report.global_one_away] == [("A", "G8")]
        assert [(e.participant_id, e.reward_id) for e in report.host_one_away] == [("B", "H3")]

    def test_other_hosts_rewards_are_skipped(self):
        report = find_one_away("H", [reward("R", 5, host_id="G")], check_ins({"A": 4}), [])
        assert report.host_one_away == []
        assert report.global_one_away == []

    def test_pet_rewards_are_skipped(self):
        report = find_one_away("H", [reward("P1", 2, reward_type="pet")], check_ins({"A": 1}), [])
        assert report.host_one_away == [] and report.global_one_away == []

    def test_participant_one_away_from_several_rewards(self):
        catalog = [reward("G", 5, reward_type="global"), reward("H", 5)]
        report = find_one_away("H", catalog, check_ins({"A": 4}), [])

        assert len(report.global_one_away) == 1
        assert len(report.host_one_away) == 1

    def test_empty_inputs(self):
        report = find_one_away("H", [], [], [])
        assert report.global_one_away == [] and report.host_one_away == []

    def test_entry_to_dict(self):
        entry = OneAwayEntry(participant_id="A", reward_id="R", current_count=4, required_count=5)
        assert entry.to_dict() == {"participant_id": "A", "reward_id": "R", "current_count": 4, "required_count": 5}


@pytest.mark.unit
def test_count_by_participant_separates_pets():
    records = check_ins({"A": 2}) + [SimpleNamespace(athlete_id="A", host_id="H", pet_id="P")]
    assert count_by_participant(records) == {"A": 2, "P": 1}
