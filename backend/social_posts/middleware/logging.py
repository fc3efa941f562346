"""
Social Posts Backend — Request Logging Middleware
==================================================

What:  Access log for every request, and the last line of defense for faults.
How:   Logs method, path, status and duration once the response is known.
       Anything that escaped the exception handlers is logged with its
       traceback and answered with an empty 500, so no fault ever reaches
       the ASGI server.
When:  Runs inside RequestIDMiddleware (uses its request id).

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, client IP, request ID
    ❌ Don't log: query strings (post content travels there)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from social_posts.middleware.request_id import request_id_var
from social_posts.responses import send_response

logger = logging.getLogger("social_posts.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request and converts unhandled faults into 500s.

    Log levels by status:
        5xx → ERROR, 4xx → WARNING, 2xx/3xx → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        # Why: a fault that escapes here would reach the ASGI server and drop the
        # connection; the client must always get a status line
        try:
            response = await call_next(request)
        except Exception:
            logger.error("[%s] Unhandled error on %s %s", rid, method, path, exc_info=True)
            response = send_response(status_code=500)

        duration_ms = (time.perf_counter() - start_time) * 1000

        # Why: Different levels enable severity-based alerting
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
