"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Environment is set before any showcase module reads settings
    - Every test gets a fresh in-memory SQLite database
    - bcrypt runs at the minimum work factor

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for service
      and route tests (PostgreSQL-specific features not exercised here)
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from showcase.db.base import Base  # noqa: E402
import showcase.models  # noqa: E402,F401
from showcase.infrastructure.repositories import Store  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def store(test_db):
    """Unit of work over the test session, with a generous time bound."""
    return Store(test_db, timeout_seconds=5.0)
