"""
QuickNotes Backend - Request Logging Middleware
================================================

What:  One access log line for every HTTP request, in the same plain format
       as the rest of the application log:
           GET /api/notes 200 1.3ms [3f2a9c1e] from 127.0.0.1
When:  Inside RequestIDMiddleware, so the request ID is already set.

Unhandled exceptions escape this middleware before a response exists; the
500 is built further out by the catch-all handler in main.py. The line is
therefore written here with status 500 and the exception re-raised.

Request bodies are never logged (note contents are user data).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("quicknotes.access")


def _level_for(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING (client mistakes, not server faults), else INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access log line once the final status is known."""

    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, start_time)
            raise

        self._log(request, response.status_code, start_time)
        return response

    @staticmethod
    def _log(request: Request, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            request_id_var.get(""),
            client_ip,
        )
