"""
Points API — Request Logging Middleware
=========================================

What:  One access-log line per HTTP request: method, path, status, duration.
When:  Runs inside RequestIDMiddleware, so the request ID is available.

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from points_api.middleware.request_id import request_id_var

logger = logging.getLogger("points_api.access")


def _level_for(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, anything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the /points routes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            # Exceptions that escape every handler are logged as 500 here
            # and re-raised unchanged.
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.log(
                _level_for(status),
                "%s %s %d %.1fms [%s]",
                request.method,
                request.url.path,
                status,
                elapsed_ms,
                request_id_var.get(""),
            )
