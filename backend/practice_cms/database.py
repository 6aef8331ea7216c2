"""
Practice CMS Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Transaction Boundary:
    One request = one session = one transaction. A reorder call issues one
    UPDATE per (id, order) pair, and all of them become visible to other
    readers together at commit, or not at all on rollback.
"""

import asyncio
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from practice_cms.config import settings


def _engine_options() -> Dict[str, Any]:
    """Pool options for the configured backend (SQLite uses its own pool class)."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
        )
    return options


# ── Failure Classes ───────────────────────────────────────────────────────
# asyncpg raises socket errors (ConnectionRefusedError, ...) and timeouts
# without a SQLAlchemy wrapper when the server cannot be reached
DATABASE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: Response models are built from ORM objects after
# the handler returns, i.e. after get_db_session has committed
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations
    and the test suite uses for `create_all`.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/api/faq")
        async def list_faq(db: AsyncSession = Depends(get_db_session)):
            return await faq_service.list_active(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (called on shutdown)."""
    await engine.dispose()
