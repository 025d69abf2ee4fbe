"""
Flavors API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.

Fixtures:
    mock_db_session:  AsyncMock standing in for AsyncSession (no database)
    flavor_row:       Factory for attribute objects shaped like a Flavor row
    sqlite_engine:    In-memory aiosqlite engine, freshly reset and seeded
    test_settings:    Settings pointing at the in-memory store
    test_client:      HTTPX AsyncClient wired to an app using sqlite_engine
"""

import os
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RESET_DB_ON_STARTUP"] = "false"

from flavors_api.config import Settings  # noqa: E402
from flavors_api.main import create_app  # noqa: E402
from flavors_api.seed import reset_schema  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def flavor_row():
    """Builds objects the repository can validate into FlavorResponse."""
    def _make(id=1, name="Vanilla", is_favorite=True):
        ts = datetime(2024, 1, 15, 12, 0, 0)
        return SimpleNamespace(
            id=id,
            name=name,
            is_favorite=is_favorite,
            created_at=ts,
            updated_at=ts,
        )
    return _make


@pytest_asyncio.fixture
async def sqlite_engine():
    """
    In-memory SQLite engine holding the four seed flavors.

    StaticPool keeps the single in-memory connection alive across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await reset_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_settings():
    return Settings(database_url="sqlite+aiosqlite://", log_level="WARNING")


@pytest_asyncio.fixture
async def test_client(test_settings, sqlite_engine):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    ASGITransport does not run the lifespan, so the engine is injected
    through create_app().
    """
    app = create_app(settings=test_settings, engine=sqlite_engine)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
