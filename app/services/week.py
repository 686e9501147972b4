"""Admission week calculation.

A week starts on Sunday 00:00 in the configured local timezone and lasts
seven days of elapsed time. All boundaries are returned in UTC.
"""
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.core.constants import WEEK_SECONDS, WEEK_START_WEEKDAY
from app.core.utils import to_utc, utcnow

WEEK = timedelta(seconds=WEEK_SECONDS)


@dataclass(frozen=True)
class WeekBoundary:
    start: datetime
    end: datetime

    def contains(self, timestamp: datetime) -> bool:
        return is_within_week(timestamp, self)


def local_timezone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def start_of_week(reference: Optional[datetime] = None, tz: Optional[ZoneInfo] = None) -> WeekBoundary:
    """
    Get the admission week containing ``reference``.

    Args:
        reference: Instant to locate (defaults to now; naive values are UTC)
        tz: Timezone whose Sunday midnight starts the week (defaults to TIMEZONE)

    Returns:
        WeekBoundary with UTC ``start`` and ``end``; ``end`` is at most
        ``start + 7 days`` and never past the next local Sunday midnight
    """
    tz = tz or local_timezone()
    reference = to_utc(reference) if reference is not None else utcnow()

    local = reference.astimezone(tz)
    days_since_start = (local.weekday() - WEEK_START_WEEKDAY) % 7
    local_start = datetime.combine(local.date() - timedelta(days=days_since_start), time.min, tzinfo=tz)

    start = local_start.astimezone(timezone.utc)
    next_start = datetime.combine(local_start.date() + timedelta(days=7), time.min, tzinfo=tz).astimezone(timezone.utc)

    # Spring-forward weeks end early at the next local Sunday midnight. A
    # fall-back week runs 169 elapsed hours, so its last hour gets a window
    # of its own. Either way windows never overlap.
    end = min(start + WEEK, next_start)
    if reference >= end:
        start, end = end, next_start

    return WeekBoundary(start=start, end=end)


def is_within_week(timestamp: datetime, boundary: WeekBoundary) -> bool:
    """True iff ``boundary.start <= timestamp < boundary.end``."""
    return boundary.start <= to_utc(timestamp) < boundary.end
