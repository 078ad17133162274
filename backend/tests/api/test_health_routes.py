"""Health Routes — tests for liveness and readiness probes.

Tests cover:
    - /health answers without a session
    - /health/ready checks the database through db_manager
"""


async def test_liveness(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_readiness(client):
    resp = await client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"]["database"] == "healthy"
