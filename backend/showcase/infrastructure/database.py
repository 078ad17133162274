"""Database Session Manager — one AsyncSession per request, bounded store calls, readiness.

Invariants:
    - A request's session is rolled back when the handler raises, then closed
    - Driver-level SQLAlchemy failures reach callers as DatabaseError (503),
      never as raw driver text
    - bounded() puts a time limit on a single store call; expiry is a
      StoreUnavailableError, never a hung request
    - SQLite URLs (tests) get no pool sizing; every other URL gets a
      pre-pinged, recycled pool

Design Decisions:
    - Module-level db_manager set by the lifespan hook: no engine is created
      at import time, and tests can swap the manager out
    - expire_on_commit=False: views render entities after commit without an
      async lazy-load
"""

import asyncio
import logging
from collections.abc import Awaitable
from contextlib import asynccontextmanager
from typing import AsyncGenerator, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from showcase.core.errors import DatabaseError, ShowcaseError, StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAILURE_MODES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Translate a SQLAlchemy failure into the caller-safe DatabaseError."""
    for kind, message, operation in _FAILURE_MODES:
        if isinstance(exc, kind):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


async def bounded(awaitable: Awaitable[T], operation: str, timeout_seconds: float) -> T:
    """Await a store call with a deadline. Timeout -> StoreUnavailableError (503)."""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.error(
            f"Store call timed out after {timeout_seconds}s: {operation}",
            extra={"error_code": "SERVICE_UNAVAILABLE", "resource": operation},
        )
        raise StoreUnavailableError(operation, timeout_seconds)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll it back if the caller raises."""
        db = self._session_factory()
        try:
            yield db
        except ShowcaseError:
            await db.rollback()
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"{type(e).__name__} escaped the unit of work: {e}")
            raise to_database_error(e)
        finally:
            await db.close()

    async def health_check(self) -> bool:
        """True when a trivial round-trip to the database succeeds."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: the request's AsyncSession."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as db:
        yield db
