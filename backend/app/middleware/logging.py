"""
VenueAtlas Backend — Access Log Middleware
============================================

What:  One log line per HTTP request: method, path, status, duration, caller.
How:   Times the downstream call and picks the level from the status class:
       5xx → ERROR, 4xx → WARNING, otherwise INFO. The caller is the raw
       identity header value (not verified here; verification happens in the
       route's access control dependencies).

Not logged: request bodies (phone numbers and emails are personal data).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.middleware.request_id import request_id_var

logger = logging.getLogger("venueatlas.access")

# Probe endpoints are polled every few seconds and would drown the log
QUIET_PATHS = frozenset({"/health"})


def status_log_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        rid = request_id_var.get("")
        caller = request.headers.get(settings.user_id_header, "-")
        client_ip = request.client.host if request.client else "unknown"
        status = response.status_code

        logger.log(
            status_log_level(status),
            "%s %s %d %.1fms [%s] caller=%s from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            caller,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "caller": caller,
                "client_ip": client_ip,
            },
        )
        return response
