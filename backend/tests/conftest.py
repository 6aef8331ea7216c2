"""
Practice CMS Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Services and routes are exercised against a real SQL database, since
       ordering, upserts and transaction boundaries are the behavior under test.
How:   Each test gets a fresh SQLite file (aiosqlite) under tmp_path with
       every table created from Base.metadata.

Fixture Hierarchy (all function-scoped):
    engine            → async engine on a fresh SQLite file
    ├── session_factory → async_sessionmaker bound to that engine
    │   └── db_session  → one open session (service tests)
    └── test_client     → HTTPX AsyncClient with get_db_session overridden
        admin_client    → same, plus the admin bearer token
"""

import os
import tempfile

# Override settings for testing BEFORE any practice_cms import
# Why: config.settings and database.engine are built at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="practice_cms_test_"), "app.db"
)
os.environ["ADMIN_API_TOKEN"] = "test-admin-token-0123456789"
os.environ["LOG_LEVEL"] = "WARNING"
# One app instance serves the whole suite, so its limiter sees every admin write
os.environ["ADMIN_RATE_LIMIT_REQUESTS"] = "10000"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

import practice_cms.models  # noqa: E402,F401
from practice_cms.database import Base, get_db_session  # noqa: E402

ADMIN_TOKEN = os.environ["ADMIN_API_TOKEN"]


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine(tmp_path):
    """Async engine on an empty SQLite file with the full schema created."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    One session for service-level tests.

    Services flush but never commit, so everything a test writes is visible
    to later calls on the same session.
    """
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

def _override_session(factory):
    """Same commit/rollback contract as database.get_db_session, on the test engine."""

    async def override() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Anonymous HTTP client talking to the app through ASGITransport.

    Usage:
        async def test_faq(test_client):
            response = await test_client.get("/api/faq")
            assert response.status_code == 200
    """
    from practice_cms.main import app

    app.dependency_overrides[get_db_session] = _override_session(session_factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_client(session_factory):
    """Like test_client, but every request carries the admin bearer token."""
    from practice_cms.main import app

    app.dependency_overrides[get_db_session] = _override_session(session_factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {ADMIN_TOKEN}"},
    ) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def faq_payloads():
    """Three FAQ entries, created in this order by tests that need a collection."""
    return [
        {"question": "Do you see couples?", "answer": "Yes, on Tuesdays."},
        {"question": "Is the first session free?", "answer": "It is a 20 minute call."},
        {"question": "Do you accept insurance?", "answer": "We provide receipts for reimbursement."},
    ]
