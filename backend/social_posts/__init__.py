"""
Social Posts Backend — Application Package Initializer
=======================================================

What: Marks the `social_posts` directory as a Python package.
Why:  Enables module imports like `from social_posts.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is deliberately small but keeps a layered shape:

    ┌─────────────────────────────────────┐
    │     Middleware (request id, log)    │  ← Tracing, fault barrier
    ├─────────────────────────────────────┤
    │     Routes (static route table)     │  ← Query params → status codes
    ├─────────────────────────────────────┤
    │     Services (post operations)      │  ← Store reads/writes, not-found
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │      Database (store client)        │  ← Engine + per-request sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
