"""Request logging middleware."""
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.logging_config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = frozenset({"/health"})
SLOW_REQUEST_MS = 1000


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request with a request id.

    The id is taken from an incoming ``X-Request-ID`` header when a proxy or
    kiosk client sent one, otherwise generated, and echoed back on the
    response. It is bound to structlog's context so service-level events
    (check-ins, claims, declines) carry it too.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )

        quiet = request.url.path in QUIET_PATHS
        log_start = logger.debug if quiet else logger.info
        log_start(
            "request_started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request_failed",
                exception_type=type(exc).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id

        if response.status_code >= 500:
            log_end = logger.error
        elif duration_ms >= SLOW_REQUEST_MS:
            log_end = logger.warning
        elif quiet:
            log_end = logger.debug
        else:
            log_end = logger.info

        log_end("request_completed", status_code=response.status_code, duration_ms=duration_ms)
        return response
