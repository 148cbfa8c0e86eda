"""Tests for the standardized error responses."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from procurement.api.dependencies import get_mat_store
from procurement.api.main import app
from procurement.core.exceptions import DatabaseError


@pytest.fixture
def failing_store():
    store = AsyncMock()
    store.get_material.side_effect = DatabaseError("get_material", "database is locked")
    return store


@pytest.fixture
async def client(failing_store):
    app.dependency_overrides[get_mat_store] = lambda: failing_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_mat_store, None)


class TestErrorResponses:
    async def test_storage_error_is_500(self, client: AsyncClient):
        response = await client.get("/api/materials/1")
        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "DATABASE_ERROR"
        assert data["path"] == "/api/materials/1"
        assert data["hint"]

    async def test_request_validation_is_422(self, client: AsyncClient):
        response = await client.post("/api/payments", json={"invoice_id": "five"})
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert "invoice_id" in data["detail"]

    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    async def test_path_parameter_type(self, client: AsyncClient):
        response = await client.get("/api/materials/abc")
        assert response.status_code == 422
