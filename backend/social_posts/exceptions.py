"""
Social Posts Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the three error classes the API knows.
Why:   Services raise typed errors; global handlers (registered in main.py)
       turn them into status-only responses without leaking internals.
How:   Each exception carries a message and an optional context dict.
       Message and context are logged server-side only; every error
       response body is empty.

Exception Hierarchy:
    PostsServiceError (base)
    ├── ValidationError  → 400 Bad Request (missing or malformed query parameter)
    ├── NotFoundError    → 404 Not Found (no post in the expected state)
    └── DatabaseError    → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, Optional


class PostsServiceError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable error description (logged)
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostsServiceError):
    """
    Raised when a query parameter is missing or does not parse.

    When:    Checked by the route handler before any store access.
    HTTP:    400 Bad Request, empty body
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PostsServiceError):
    """
    Raised when no post exists in the state an operation expects.

    When:    get/edit/delete/like/dislike on a missing or removed post,
             restore on a missing or non-removed post.
    HTTP:    404 Not Found, empty body

    SQLAlchemy returns None for missing records; the service layer converts
    that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(PostsServiceError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error, empty body

    Detailed error info (original exception type, post id) is logged
    server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
