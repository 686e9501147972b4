"""Unit tests for admission week boundaries."""
import pytest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from app.services.week import WEEK, WeekBoundary, is_within_week, start_of_week

NEW_YORK = ZoneInfo("America/New_York")


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.mark.unit
class TestStartOfWeek:
    """Weeks start Sunday 00:00 local time and last up to seven elapsed days."""

    @pytest.mark.parametrize("reference", [
        utc(2024, 6, 5, 15, 0),       # Wednesday afternoon
        utc(2024, 6, 2, 4, 0),        # Sunday 00:00 EDT exactly
        utc(2024, 6, 2, 3, 59, 59),   # Saturday 23:59:59 EDT
        utc(2024, 3, 10, 7, 30),      # Spring-forward Sunday
        utc(2024, 3, 17, 4, 30),      # Sunday after spring-forward
        utc(2024, 11, 3, 6, 30),      # Fall-back Sunday
        utc(2024, 11, 10, 4, 30),     # Last hour of the fall-back week
        utc(2024, 12, 31, 23, 59),    # Year end
    ])
    def test_reference_falls_inside_its_week(self, reference):
        """start <= t < start + 7 days for any instant."""
        week = start_of_week(reference, NEW_YORK)
        assert week.start <= reference < week.end
        assert reference < week.start + WEEK
        assert week.end - week.start <= WEEK

    def test_midweek_reference(self):
        """Wednesday resolves to the previous Sunday midnight Eastern."""
        week = start_of_week(utc(2024, 6, 5, 15, 0), NEW_YORK)

        assert week.start == utc(2024, 6, 2, 4, 0)
        assert week.end == utc(2024, 6, 9, 4, 0)
        assert week.start.astimezone(NEW_YORK).weekday() == 6
        assert week.start.astimezone(NEW_YORK).hour == 0

    def test_sunday_midnight_opens_new_week(self):
        """Sunday 00:00 local belongs to the week it starts."""
        week = start_of_week(utc(2024, 6, 9, 4, 0), NEW_YORK)
        assert week.start == utc(2024, 6, 9, 4, 0)

    def test_saturday_night_stays_in_previous_week(self):
        """Saturday 23:59 local is still in the week that began six days earlier."""
        week = start_of_week(utc(2024, 6, 9, 3, 59), NEW_YORK)
        assert week.start == utc(2024, 6, 2, 4, 0)

    def test_winter_offset(self):
        """Sunday midnight EST is 05:00 UTC."""
        week = start_of_week(utc(2024, 1, 10, 12, 0), NEW_YORK)
        assert week.start == utc(2024, 1, 7, 5, 0)

    def test_fall_back_trailing_hour_opens_next_window(self):
        """
        The fall-back week lasts 169 elapsed hours. The last hour is past
        start + 7 days, so it gets a one-hour window of its own.
        """
        reference = utc(2024, 11, 10, 4, 30)  # Saturday 23:30 EST
        week = start_of_week(reference, NEW_YORK)

        assert week.start == utc(2024, 11, 10, 4, 0)
        assert week.end == utc(2024, 11, 10, 5, 0)

    def test_sunday_after_fall_back_does_not_overlap(self):
        """Sunday 00:30 EST starts a fresh week right where the trailing hour ends."""
        trailing = start_of_week(utc(2024, 11, 10, 4, 30), NEW_YORK)
        week = start_of_week(utc(2024, 11, 10, 5, 30), NEW_YORK)

        assert week.start == utc(2024, 11, 10, 5, 0) == trailing.end
        assert week.end == utc(2024, 11, 17, 5, 0)
        assert not week.contains(utc(2024, 11, 10, 4, 30))

    def test_spring_forward_week_ends_at_next_sunday(self):
        """The 167-hour week ends at Sunday 00:00 EDT, where the next one begins."""
        week = start_of_week(utc(2024, 3, 13, 12, 0), NEW_YORK)
        following = start_of_week(utc(2024, 3, 17, 4, 30), NEW_YORK)

        assert week.start == utc(2024, 3, 10, 5, 0)
        assert week.end == utc(2024, 3, 17, 4, 0) == following.start
        assert not week.contains(utc(2024, 3, 17, 4, 30))

    def test_naive_reference_is_treated_as_utc(self):
        aware = start_of_week(utc(2024, 6, 5, 15, 0), NEW_YORK)
        naive = start_of_week(datetime(2024, 6, 5, 15, 0), NEW_YORK)
        assert aware == naive

    def test_timezone_override(self):
        week = start_of_week(utc(2024, 6, 5, 15, 0), ZoneInfo("UTC"))
        assert week.start == utc(2024, 6, 2, 0, 0)

    def test_defaults_to_configured_timezone(self):
        reference = utc(2024, 6, 5, 15, 0)
        assert start_of_week(reference) == start_of_week(reference, NEW_YORK)

    def test_defaults_to_now(self):
        now = datetime.now(timezone.utc)
        week = start_of_week()
        assert week.start <= now + timedelta(seconds=5)
        assert now - timedelta(seconds=5) < week.end


@pytest.mark.unit
class TestIsWithinWeek:
    """Half-open interval membership."""

    def test_start_is_inclusive_end_is_exclusive(self):
        boundary = WeekBoundary(start=utc(2024, 6, 2, 4, 0), end=utc(2024, 6, 9, 4, 0))

        assert is_within_week(boundary.start, boundary)
        assert is_within_week(boundary.end - timedelta(microseconds=1), boundary)
        assert not is_within_week(boundary.end, boundary)
        assert not is_within_week(boundary.start - timedelta(microseconds=1), boundary)

    def test_contains_accepts_naive_storage_values(self):
        """SQLite hands back naive UTC datetimes."""
        boundary = start_of_week(utc(2024, 6, 5, 15, 0), NEW_YORK)
        assert boundary.contains(datetime(2024, 6, 5, 15, 0))
