"""Rate limiting configuration."""
import hashlib

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings


def get_client_ip(request) -> str:
    """Get client IP for rate limiting, considering proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


def get_rate_limit_key(request) -> str:
    """
    Bucket requests by caller.

    Kiosk tablets at one location share an IP, so signed-in callers are
    bucketed by a digest of their bearer token and only anonymous requests
    fall back to the client IP.
    """
    authorization = request.headers.get("Authorization")
    if authorization:
        return "token:" + hashlib.sha256(authorization.encode()).hexdigest()[:32]
    return "ip:" + get_client_ip(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=["100/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window"
)

RATE_LIMITS = {
    "check_in": "120/minute",
    "pet_check_in": "120/minute",
    "claim": "60/minute",
    "search": "120/minute",
    "register": "30/minute",
}
