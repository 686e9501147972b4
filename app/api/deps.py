"""Shared API dependencies."""
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError
from app.core.security import Principal, verify_bearer_token
from app.db import get_db, get_db_context
from app.db.models import Host
from app.services.host import get_host, get_host_by_subject

__all__ = [
    "get_db",
    "get_db_context",
    "get_current_principal",
    "require_super_admin",
    "require_host_or_super_admin",
    "ensure_host_access",
    "get_accessible_host",
]


def get_current_principal(authorization: Optional[str] = Header(None)) -> Principal:
    """Verify the bearer token on the request."""
    return verify_bearer_token(authorization)


def require_super_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_super_admin:
        raise ForbiddenError("Super admin access required", code="super_admin_required")
    return principal


def require_host_or_super_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not (principal.is_super_admin or principal.is_host):
        raise ForbiddenError("Host access required", code="host_required")
    return principal


def ensure_host_access(db: Session, principal: Principal, host_id: str) -> None:
    """
    Allow super admins everywhere and hosts only on their own host record.

    A host principal is matched to a host by the token subject.
    """
    if principal.is_super_admin:
        return

    if principal.is_host:
        host = get_host_by_subject(db, principal.subject)
        if host is not None and host.id == host_id:
            return

    raise ForbiddenError("Not allowed to act for this host", code="host_access_denied")


def get_accessible_host(
    host_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Host:
    """Resolve the ``host_id`` path parameter, checking the caller may act for it."""
    host = get_host(db, host_id)
    ensure_host_access(db, principal, host_id)
    return host
