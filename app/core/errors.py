"""Service error taxonomy and its mapping to HTTP responses.

Services raise one of the ``ServiceError`` subclasses below. The mapping to a
transport status code happens exactly once, in ``service_error_handler``.
"""
from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.logging_config import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    POLICY_DECLINED = "policy_declined"
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"


STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.POLICY_DECLINED: 409,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
}


class ServiceError(Exception):
    """Base class for expected, caller-visible failures."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.kind.value

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class PolicyDeclinedError(ServiceError):
    """Expected business outcome: weekly limit used, reward already claimed, ..."""

    kind = ErrorKind.POLICY_DECLINED


class InvalidInputError(ServiceError):
    kind = ErrorKind.INVALID_INPUT


class UnauthorizedError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ServiceError):
    kind = ErrorKind.FORBIDDEN


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError as the standard ErrorResponse body."""
    logger.info(
        "service_error",
        kind=exc.kind.value,
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": {"code": exc.code, "message": exc.message},
        },
        headers=headers,
    )
