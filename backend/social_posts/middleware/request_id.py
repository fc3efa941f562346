"""
Social Posts Backend — Request ID Middleware
=============================================

What:  Assigns an id to each incoming request and returns it in X-Request-ID.
Why:   Every log line for one request (access log, store errors, close
       failures) can be correlated through the same id.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID;
       stores it in a ContextVar and on request.state.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request id
# Why ContextVar: concurrent requests share one thread under asyncio
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if it sent one
        2. Otherwise generate an 8-character id
        3. Store it in the ContextVar for loggers and exception handlers
        4. Echo it in the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        # Why: Client can quote this id when reporting a failed request
        response.headers["X-Request-ID"] = rid
        return response
