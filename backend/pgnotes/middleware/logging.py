"""
pgnotes: Request Logging Middleware
=====================================

What:  One access-log line per HTTP request.
Why:   Replaces uvicorn's access log (silenced in setup_logging) with a line
       that carries the request ID and the handling duration.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Log line:
    POST /submit 302 4.2ms [a1b2c3d4] from 172.18.0.1

What we DON'T log here: form bodies (note content is logged once, by the
repository, when it is saved).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pgnotes.middleware.request_id import request_id_var

logger = logging.getLogger("pgnotes.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status code, duration, request ID and client IP.

    Log level follows the status class:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    /health is skipped; container probes would drown out real traffic.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

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
