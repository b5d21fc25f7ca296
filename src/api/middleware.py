"""Request logging middleware: one structured log line per HTTP request."""

from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("api.access")


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def _log_request(request: Request, status: int, duration_ms: float) -> None:
    method = request.method
    path = request.url.path
    logger.log(
        _level_for(status),
        "%s %s %d",
        method,
        path,
        status,
        extra={
            "method": method,
            "path": path,
            "status": status,
            "duration_ms": duration_ms,
            "ip": request.headers.get("x-forwarded-for") or request.headers.get("x-real-ip"),
            "user_agent": request.headers.get("user-agent"),
        },
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration, client IP and user agent."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Unhandled errors become a 500 further out; log them as one.
            _log_request(request, 500, round((time.perf_counter() - start) * 1000, 2))
            raise

        _log_request(request, response.status_code, round((time.perf_counter() - start) * 1000, 2))
        return response
