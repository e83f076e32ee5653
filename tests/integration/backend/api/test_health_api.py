"""
Integration Tests for the health endpoints.

The database probe is patched; these tests cover how its result is
reported.
"""

from unittest.mock import AsyncMock, patch

HEALTHY = {"status": "healthy", "latency_ms": 3}
UNHEALTHY = {"status": "unhealthy", "error": "connection refused"}


async def test_liveness(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_ready(client):
    with patch("kashmir_tours.backend.api.health.check_database", AsyncMock(return_value=HEALTHY)):
        response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == HEALTHY


async def test_not_ready(client):
    with patch("kashmir_tours.backend.api.health.check_database", AsyncMock(return_value=UNHEALTHY)):
        response = await client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["detail"]["checks"]["database"]["error"] == "connection refused"


async def test_detailed(client):
    pools = {"database": {"class": "AsyncAdaptedQueuePool", "status": "ok"}}
    with patch("kashmir_tours.backend.api.health.check_database", AsyncMock(return_value=UNHEALTHY)), \
         patch("kashmir_tours.backend.api.health._get_pool_status", return_value=pools):
        response = await client.get("/health/detailed")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["application"]["name"] == "ExploreKashmirTours API"
    assert body["pools"] == pools
