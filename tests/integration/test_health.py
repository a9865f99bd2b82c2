import pytest
from httpx import AsyncClient

from clarity import __version__


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """Test basic health check."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}


@pytest.mark.asyncio
async def test_health_ready(client: AsyncClient):
    """Test readiness check with database connection."""
    response = await client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "connected"}


@pytest.mark.asyncio
async def test_request_id_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_request_id_generated(client: AsyncClient):
    response = await client.get("/health")
    assert response.headers.get("X-Request-ID")


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/health", "/api/health/ready"])
async def test_health_under_api_prefix(client: AsyncClient, path: str):
    response = await client.get(path)
    assert response.status_code == 200
    assert response.json()["status"] in ("ok", "ready")
