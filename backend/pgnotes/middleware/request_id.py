"""
pgnotes: Request ID Middleware
================================

What:  Tags each request with a short correlation ID and echoes it back.
Why:   A StorageError reaches the browser as an opaque 500; the X-Request-ID
       header lets that response be matched to the logged traceback.
How:   Reuses an inbound X-Request-ID header or generates one, stores it in
       a ContextVar and on request.state, and sets the response header.
When:  Outermost middleware (runs before all other processing).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request ID for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if present
        2. Otherwise generate the first 8 characters of a UUID4
        3. Store in request_id_var (loggers) and request.state (handlers)
        4. Add to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
