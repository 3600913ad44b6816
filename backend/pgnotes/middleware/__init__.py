# Middleware package init
"""
pgnotes: Middleware Package
=============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: records method, path, status and duration with that ID
    3. GZip: compresses the HTML pages on the way out

    The order is reversed for responses, so the access log sees the final
    status code and the request ID header is set last.
"""
