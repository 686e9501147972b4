"""Security and authentication utilities."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import List, Optional
import argon2
import jwt

from app.core import config
from app.core.errors import UnauthorizedError

# Argon2 hasher for host admin secrets
ph = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16
)


@dataclass(frozen=True)
class Principal:
    """Verified caller identity taken from a bearer token."""

    subject: str
    email: Optional[str] = None
    groups: List[str] = field(default_factory=list)

    def in_group(self, group: str) -> bool:
        return group in self.groups

    @property
    def is_super_admin(self) -> bool:
        return self.in_group(config.settings.SUPER_ADMIN_GROUP)

    @property
    def is_host(self) -> bool:
        return self.in_group(config.settings.HOST_GROUP)


def get_password_hash(password: str) -> str:
    """Hash a secret using Argon2."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a secret against its Argon2 hash."""
    try:
        ph.verify(password_hash, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False


def verify_host_secret(secret: str, stored_secret: str) -> bool:
    """Verify a host admin secret.

    Secrets saved through the API are Argon2 hashes. Values imported from
    older records may still be plaintext and are compared directly.
    """
    if stored_secret.startswith("$argon2"):
        return verify_password(secret, stored_secret)
    return secret == stored_secret


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a locally signed JWT (development and tests only)."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)
    return encoded_jwt


@lru_cache(maxsize=4)
def _jwks_client(url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(url)


def decode_token(token: str) -> dict:
    """Decode and verify a bearer token, returning its claims."""
    settings = config.settings
    options = {"verify_aud": settings.AUTH_AUDIENCE is not None}

    if settings.AUTH_JWKS_URL:
        signing_key = _jwks_client(settings.AUTH_JWKS_URL).get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=settings.AUTH_AUDIENCE,
            issuer=settings.AUTH_ISSUER,
            options=options,
        )

    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        audience=settings.AUTH_AUDIENCE,
        options=options,
    )


def verify_bearer_token(authorization: Optional[str]) -> Principal:
    """Verify an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise UnauthorizedError("No authorization header", code="missing_token")

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        raise UnauthorizedError("Invalid authorization header", code="invalid_token")

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired", code="token_expired")
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid token", code="invalid_token")

    subject = payload.get("sub")
    if not subject:
        raise UnauthorizedError("Token has no subject", code="invalid_token")

    groups = payload.get(config.settings.AUTH_GROUPS_CLAIM) or []
    if isinstance(groups, str):
        groups = [groups]
    return Principal(subject=subject, email=payload.get("email"), groups=list(groups))
