"""
Request Context Middleware

Binds a request id and the request path into the structlog context for the
duration of each request, so every log line a request produces carries them.

The id is taken from the ``X-Request-ID`` header when the caller sends one,
and echoed back in the response.

Usage:
======
    from cluster_dashboard.api.middleware.request_context import RequestContextMiddleware

    app.add_middleware(RequestContextMiddleware)
"""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from cluster_dashboard.shared.core.logging import clear_log_context, get_logger, log_context


logger = get_logger("api.requests")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach request-scoped logging context and log one line per request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        log_context(request_id=request_id, path=request.url.path)
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request completed",
                method=request.method,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response
        finally:
            clear_log_context()
