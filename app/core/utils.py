"""General utility functions."""
import uuid
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo


def generate_id() -> str:
    """Generate an opaque record id."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone (SQLite drops tzinfo on the way back)
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_timezone(dt: datetime, tz: ZoneInfo) -> datetime:
    """Convert datetime to specified timezone."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def isoformat(dt: Optional[datetime], tz: ZoneInfo) -> Optional[str]:
    """Render a stored timestamp in the configured timezone."""
    if dt is None:
        return None
    return to_timezone(dt, tz).isoformat()
