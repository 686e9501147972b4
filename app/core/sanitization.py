"""Input sanitization utilities."""
import re
from datetime import datetime, timezone
from typing import Optional, Union

from app.core.constants import MIN_EPOCH_MILLIS


# Maximum length constraints for security
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 254
MAX_ICON_LENGTH = 64
MAX_ADDRESS_LENGTH = 300
MAX_DISCLAIMER_LENGTH = 20000
MAX_ID_LENGTH = 64

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize text input to prevent XSS attacks.

    Note: This function strips HTML tags and normalizes whitespace, but does NOT
    escape HTML entities because React automatically escapes output when rendering.

    Args:
        text: The input text to sanitize
        max_length: Optional maximum length to enforce
        strip_html: Whether to strip HTML tags (default True)

    Returns:
        Sanitized text with HTML tags removed and whitespace normalized

    Raises:
        ValueError: If text exceeds max_length or contains dangerous patterns
    """
    if not isinstance(text, str):
        raise ValueError("Input must be a string")

    sanitized = text.strip()

    # Enforce maximum length before processing to prevent length-based attacks
    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Reject inputs that still contain HTML-like patterns after stripping
    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def sanitize_name(name: str, field: str = "Name") -> str:
    """Sanitize a person, pet, host, location or reward name."""
    sanitized = sanitize_text(name, max_length=MAX_NAME_LENGTH)

    if not sanitized:
        raise ValueError(f"{field} cannot be empty")

    return sanitized


def sanitize_email(email: str) -> str:
    """Trim, lowercase and validate an email address."""
    if not isinstance(email, str):
        raise ValueError("Email must be a string")

    sanitized = email.strip().lower()

    if len(sanitized) > MAX_EMAIL_LENGTH:
        raise ValueError(f"Email exceeds maximum length of {MAX_EMAIL_LENGTH} characters")

    if not EMAIL_PATTERN.match(sanitized):
        raise ValueError("Email address is invalid")

    return sanitized


def sanitize_icon(icon: str) -> str:
    """Icons are Material icon names: lowercase letters, digits and underscores."""
    if not isinstance(icon, str):
        raise ValueError("Icon must be a string")

    sanitized = icon.strip()

    if not sanitized:
        raise ValueError("Icon cannot be empty")

    if len(sanitized) > MAX_ICON_LENGTH:
        raise ValueError(f"Icon exceeds maximum length of {MAX_ICON_LENGTH} characters")

    if not re.match(r'^[a-z0-9_]+$', sanitized):
        raise ValueError("Icon can only contain lowercase letters, numbers, and underscores")

    return sanitized


def validate_id_format(value: str) -> str:
    """Ids are opaque hex/uuid-like strings; reject anything else early."""
    if not isinstance(value, str):
        raise ValueError("Id must be a string")

    value = value.strip()

    if not value:
        raise ValueError("Id cannot be empty")

    if len(value) > MAX_ID_LENGTH:
        raise ValueError(f"Id exceeds maximum length of {MAX_ID_LENGTH} characters")

    if not re.match(r'^[A-Za-z0-9_-]+$', value):
        raise ValueError("Id format is invalid")

    return value


def parse_timestamp(value: Union[int, float, str, datetime, None]) -> Optional[datetime]:
    """
    Normalize a client-supplied timestamp to an aware UTC datetime.

    Accepts epoch milliseconds or an ISO-8601 string/datetime that carries a
    UTC offset. Epoch seconds and naive datetimes are rejected rather than
    guessed at.

    Raises:
        ValueError: If the value is in the wrong unit, out of range, or has no timezone
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise ValueError("Timestamp must be epoch milliseconds or an ISO-8601 string")

    if isinstance(value, (int, float)):
        if value < MIN_EPOCH_MILLIS:
            raise ValueError("Timestamp must be in epoch milliseconds, not seconds")
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValueError("Timestamp is out of range")

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("Timestamp is not a valid ISO-8601 string")

    if not isinstance(value, datetime):
        raise ValueError("Timestamp must be epoch milliseconds or an ISO-8601 string")

    if value.tzinfo is None:
        raise ValueError("Timestamp must include a timezone offset")

    return value.astimezone(timezone.utc)
