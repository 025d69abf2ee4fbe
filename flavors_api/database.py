"""
Flavors API — Database Engine & Session Management
===================================================

What:  Async SQLAlchemy engine factory, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   The app lifespan builds one engine and one session factory and stores
       them on `app.state`; `get_db_session` opens a session per request that
       commits on success and rolls back on error.

Why no module-level engine:
    The engine is a handle passed explicitly to whoever needs it (lifespan,
    seed step, CLI, tests). Tests swap in an in-memory SQLite engine without
    patching globals.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from flavors_api.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object so the schema initializer can drop and
    create every registered table.
    """
    pass


# ── Engine / Session Factories ────────────────────────────────────────────
def create_engine(settings: Settings) -> AsyncEngine:
    """
    Builds the async engine for the configured store.

    pool_pre_ping: Validates connections before use (catches a restarted database)
    echo:          SQL statement logging, off unless DB_ECHO or LOG_LEVEL=DEBUG
    """
    return create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        echo=settings.db_echo or settings.log_level == "DEBUG",
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows stay readable after commit for serialization
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory stored on app.state
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back, then re-raises for the exception handlers
        5. Always: closes the session (returns connection to pool)
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine(engine: AsyncEngine) -> None:
    """Gracefully closes all pooled connections at shutdown."""
    await engine.dispose()
