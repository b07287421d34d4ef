"""
Bars API Backend - Request Logging Middleware
==============================================

What:  One structured access-log line per HTTP request.
How:   Measures duration around call_next and logs method, path, status,
       duration, request id and client IP on the `bars_api.access` logger.
       The structured fields are also passed via `extra` for handlers that
       emit JSON.

Log level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

What we log vs what we DON'T log:
    ✅ method, path, status, duration, IP, request ID
    ❌ request bodies (passwords), the Authorization header (bearer tokens)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bars_api.middleware.request_id import request_id_var

logger = logging.getLogger("bars_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request/response pair; /health is skipped as probe noise."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
