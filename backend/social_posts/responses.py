"""
Social Posts Backend — Response Helpers
========================================

What:  The two ways a handler (or error handler) answers a request.
How:   Starlette builds the header list when the Response object is
       constructed, so headers are always in place before the status line
       and body are sent.

    send_response  → any status, optional headers, optional raw body
    send_json      → 200 (by default) with Content-Type: application/json
"""

from typing import Any, Mapping, Optional, Union

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response


def send_response(
    status_code: int = 200,
    headers: Optional[Mapping[str, str]] = None,
    body: Optional[Union[str, bytes]] = None,
) -> Response:
    """Generic response: status code, headers, and an optional body (empty when None)."""
    return Response(
        content=body if body is not None else b"",
        status_code=status_code,
        headers=dict(headers) if headers else None,
    )


def send_json(payload: Any, status_code: int = 200) -> JSONResponse:
    """
    JSON response with `Content-Type: application/json`.

    Pydantic models and datetimes are encoded by FastAPI's jsonable_encoder,
    so `created` goes out as an ISO 8601 string.
    """
    return JSONResponse(content=jsonable_encoder(payload), status_code=status_code)
