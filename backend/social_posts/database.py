"""
Social Posts Backend — Database Session Management
===================================================

What:  The store client (async SQLAlchemy engine + session factory) and the
       FastAPI dependency that hands each request its own session.
Why:   Centralizes all database connection logic in one place.
How:   `Database` is constructed explicitly by the application factory and
       attached to `app.state`. `get_db_session` opens a session per request,
       rolls back on error and always closes it.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created with the app; sessions are created per-request.

Schema mapping:
    The `posts` table is declared in the `social` schema. The engine carries a
    `schema_translate_map` so that deployments can rename the schema and
    SQLite (which has no schemas) can map it to the default one.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from social_posts.config import Settings

logger = logging.getLogger(__name__)

# Schema name used in the model declarations
POSTS_SCHEMA = "social"


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which tests use to create tables.
    """
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured store.

    Pool sizing only applies to server databases; SQLite drivers pick their
    own pool class and reject the sizing arguments.
    """
    options: Dict[str, Any] = {
        "echo": settings.log_level == "DEBUG",
        "execution_options": {
            "schema_translate_map": {POSTS_SCHEMA: settings.db_schema or None},
        },
    }
    # Why: SQLite has no server pool; aiosqlite rejects pool_size/max_overflow
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
        )
    return create_async_engine(settings.database_url, **options)


class Database:
    """
    Store client: owns the engine and derives one session per request.

    Constructed once by `create_app()` and disposed by the lifespan shutdown
    hook. Tests construct their own instance against SQLite.
    """

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.settings = settings
        self.engine = engine if engine is not None else build_engine(settings)
        # Why expire_on_commit=False: services build responses from rows after commit;
        # expired attributes would trigger a lazy load outside the async context
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        """Open a new, unshared session."""
        return self.session_factory()

    async def create_tables(self) -> None:
        """Create all mapped tables (used by tests and local experiments)."""
        # Models register with Base.metadata only once imported
        from social_posts.models import post  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """
        Gracefully close all connections in the pool.

        Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's store client
        2. Yields it to the route handler (services commit their own writes)
        3. On error: rolls back the transaction and re-raises
        4. Always: closes the session; a close failure is logged, not raised,
           because the response has already been decided

    Example usage in a route:
        async def get_posts(db: AsyncSession = Depends(get_db_session)):
            return send_json(await post_service.list_posts(db))
    """
    database: Database = request.app.state.database
    session = database.session()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise  # Re-raise so the global error handler can respond appropriately
    finally:
        try:
            await session.close()
        except Exception:
            logger.error("Failed to close database session", exc_info=True)
