"""API test fixtures — FastAPI test client and signed-in principals.

Invariants:
    - get_db dependency overridden to use the test DB session factory
    - db_manager patched so the readiness probe hits the test engine
    - Each named client keeps its own cookie jar (its own signed session)

Design Decisions:
    - Two-client fixtures (alice, bob) for ownership tests: a request from the
      wrong principal goes through the same gate a second browser would
"""

import pytest
from httpx import ASGITransport, AsyncClient

from showcase.infrastructure.database import get_db, DatabaseSessionManager
import showcase.infrastructure.database as db_module
from showcase.main import app
from tests.api.session_helpers import flashes, signup


def _new_client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness probe uses db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with _new_client() as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def alice(client):
    """Signed-in client for account 'alice', flash queue drained."""
    resp = await signup(client, "alice")
    assert resp.status_code == 303
    await flashes(client)
    return client


@pytest.fixture
async def bob(client):
    """Signed-in client for account 'bob', with its own cookie jar."""
    async with _new_client() as c:
        resp = await signup(c, "bob")
        assert resp.status_code == 303
        await flashes(c)
        yield c
