"""
Integration tests for health endpoints and app-wide middleware.
"""

import pytest
from httpx import AsyncClient

REQUEST_ID = "3f2b6c1e-8d4a-4e5b-9c7f-2a1d0e9b8c76"


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_health_db(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health/db")
    assert response.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_readiness_without_redis(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health/ready")

    assert response.json() == {"ready": True, "database": "ok", "redis": "not configured"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health/live", headers={"X-Request-ID": REQUEST_ID})
    assert response.headers["X-Request-ID"] == REQUEST_ID


@pytest.mark.asyncio
async def test_oversized_body_rejected(async_client: AsyncClient, auth_headers):
    response = await async_client.post(
        "/api/v1/comments",
        content=b"x" * (1024 * 1024 + 1),
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 413


@pytest.mark.asyncio
async def test_non_uuid_request_id_is_replaced(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health/live", headers={"X-Request-ID": "not a uuid"})
    assert response.headers["X-Request-ID"] != "not a uuid"
