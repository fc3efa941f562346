"""
Social Posts Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes store client construction, middleware registration,
       route mounting, and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn social_posts.main:app) or the
       `social-posts` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────────────────┐          │
    │  │ Req ID   │→│ Logging / fault barrier  │          │
    │  └──────────┘ └──────────────────────────┘          │
    │                                                     │
    │  Routes (static table, any method):                 │
    │  /posts.get  /posts.getById  /posts.post            │
    │  /posts.edit /posts.delete   /posts.restore         │
    │  /posts.like /posts.dislike                         │
    │                                                     │
    │  Exception Handlers (all bodies empty):             │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ DB/other→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Construction: the store client (Database) is built and attached to
    app.state, so it exists even when the ASGI lifespan is not run (tests).
    Startup: configure logging.
    Shutdown: dispose the store client's engine.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from social_posts import __version__
from social_posts.config import Settings, settings
from social_posts.database import Database
from social_posts.exceptions import (
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from social_posts.middleware.logging import RequestLoggingMiddleware
from social_posts.middleware.request_id import RequestIDMiddleware, request_id_var
from social_posts.responses import send_response
from social_posts.routes import posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,  # Override any existing logging config
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle.

    Startup:  configure logging, log where the server listens.
    Shutdown: dispose the store client (close all pooled connections).
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Social Posts backend %s starting up...", __version__)
    logger.info(
        "Listening on http://%s:%d (schema=%s)",
        app_settings.backend_host,
        app_settings.backend_port,
        app_settings.db_schema or "<default>",
    )

    yield  # Application runs here

    logger.info("Social Posts backend shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status-only responses.

    Handler hierarchy:
        ValidationError          → 400
        RequestValidationError   → 400
        NotFoundError            → 404
        StarletteHTTPException   → its own status (404 for unknown paths)
        DatabaseError            → 500
        Exception (fallback)     → 500 (only reached from RequestIDMiddleware)

    Every body is empty; details are logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent a missing or malformed query parameter."""
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return send_response(status_code=400)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation error: %s", rid, exc.errors())
        return send_response(status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """No post in the state the operation expects."""
        rid = request_id_var.get("")
        logger.info("[%s] %s", rid, exc.message)
        return send_response(status_code=404)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown path (404) and other framework-level HTTP errors."""
        return send_response(status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Store failure: empty 500, context logged server-side."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return send_response(status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for errors raised outside RequestLoggingMiddleware.

        Faults from routes and inner middleware are already answered by the
        logging middleware's fault barrier, so in practice this only sees
        failures inside RequestIDMiddleware. Stack trace logged, never returned.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return send_response(status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded singleton)
        database: Store client to use (defaults to one built from app_settings)

    Returns: Fully configured FastAPI instance ready to receive requests.

    Only the post routes are exposed: no /docs, /redoc or /openapi.json, so
    every other path answers 404.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Social Posts API",
        description="CRUD, soft delete and like counters for social posts.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        # Why: "/posts.get/" is an unknown path (404), not a redirect to "/posts.get"
        redirect_slashes=False,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.database = database or Database(app_settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(posts.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""
    import uvicorn

    uvicorn.run(
        "social_posts.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `social_posts.main:app` to be importable
app = create_app()
