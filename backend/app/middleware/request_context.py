"""
Contacts API — Request Context Middleware
===========================================

What:  Gives every request an ID, answers uncaught failures with the 500
       error body, and writes one access log line per request.
Why:   The fallback handler registered for Exception runs outside the
       user middleware stack, so a 500 produced there would reach the
       client without X-Request-ID or CORS headers and without an access
       line. Catching here keeps failed requests traceable.
How:   The ID is the client's X-Request-ID when sent, otherwise a short
       uuid4, kept on request.state for the exception handlers.

Access line:
    POST /contacts 201 3.2ms [a1b2c3d4] from 127.0.0.1
    GET /contacts/boom 500 0.8ms [a1b2c3d4] from 127.0.0.1 (RuntimeError)

Request bodies are never logged: they carry names, phones and emails.
"""

import logging
import time
import traceback
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings

logger = logging.getLogger("contacts.access")

QUIET_PATHS = frozenset({"/health"})


def internal_error_response(exc: Exception) -> JSONResponse:
    """
    Build the 500 body for an exception nothing else handled.

    The message is always generic. With ENVIRONMENT=development the
    traceback is attached as a list of lines under "stack".
    """
    content = {"error": "InternalServerError", "message": "Internal server error"}
    if settings.is_development:
        content["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        ).splitlines()
    return JSONResponse(status_code=500, content=content)


def _status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request ID, uncaught-error boundary and access log for every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars is enough for correlation and stays readable in logs
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = rid

        started = time.perf_counter()
        failure: Optional[Exception] = None
        try:
            response = await call_next(request)
        except Exception as exc:
            failure = exc
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid, request.method, request.url.path, exc, exc_info=exc,
            )
            response = internal_error_response(exc)

        response.headers["X-Request-ID"] = rid
        if request.url.path not in QUIET_PATHS:
            self._log_access(request, response.status_code, started, rid, failure)
        return response

    @staticmethod
    def _log_access(
        request: Request,
        status: int,
        started: float,
        rid: str,
        failure: Optional[Exception],
    ) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        client_ip = request.client.host if request.client else "unknown"
        suffix = f" ({type(failure).__name__})" if failure is not None else ""
        logger.log(
            _status_level(status),
            "%s %s %d %.1fms [%s] from %s%s",
            request.method, request.url.path, status, duration_ms, rid, client_ip, suffix,
            extra={"request_id": rid, "status": status, "duration_ms": round(duration_ms, 2)},
        )
