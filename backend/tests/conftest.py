"""
Social Posts Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mocked DB session, SQLite-backed
       app, HTTP client).

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── sample_post: object shaped like a Post row
    ├── database: Store client on a fresh SQLite file with tables created
    ├── app: Application built by create_app() around that store client
    └── test_client: HTTPX AsyncClient talking to the app via ASGITransport
"""

import os
import tempfile
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports
# Why: Prevents the import-time app from pointing at a real database
_default_db = os.path.join(tempfile.mkdtemp(prefix="social_posts_test_"), "default.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_default_db}"
os.environ["DB_SCHEMA"] = ""
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from httpx import ASGITransport, AsyncClient  # noqa: E402

from social_posts.config import Settings  # noqa: E402
from social_posts.database import Database  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
            result = await post_service.get_post(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_post():
    """An object with the attributes of a visible Post row."""
    return SimpleNamespace(
        id=1,
        content="hello",
        likes=3,
        created=datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        removed=False,
    )


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a fresh SQLite file in the test's temp dir."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'posts.db'}",
        db_schema="",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """Store client with the posts table created; disposed after the test."""
    db = Database(test_settings)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def app(test_settings, database):
    from social_posts.main import create_app
    return create_app(app_settings=test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/posts.get")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
