"""API tests for payment endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from procurement.api.dependencies import (
    get_inv_store,
    get_record_payment_use_case,
    get_update_payment_use_case,
)
from procurement.api.main import app
from procurement.application.use_cases import RecordPaymentUseCase, UpdatePaymentUseCase
from procurement.core.entities import Invoice
from procurement.core.services import PaymentAllocator


@pytest.fixture
def mock_invoice_store(sample_invoice: Invoice):
    payments = {p.id: p for p in sample_invoice.payments}
    store = AsyncMock()
    store.get_invoice.side_effect = lambda iid: sample_invoice if iid == sample_invoice.id else None
    store.get_payment.side_effect = lambda pid: payments.get(pid)
    store.list_payments.return_value = sample_invoice.payments
    store.count_payments.return_value = 2
    store.add_payment.side_effect = lambda p: p.model_copy(update={"id": 13})
    store.update_payment.side_effect = lambda p: p
    store.delete_payment.side_effect = lambda pid: pid in payments
    return store


@pytest.fixture
async def client(mock_invoice_store):
    app.dependency_overrides[get_inv_store] = lambda: mock_invoice_store
    app.dependency_overrides[get_record_payment_use_case] = lambda: RecordPaymentUseCase(
        invoice_store=mock_invoice_store, allocator=PaymentAllocator()
    )
    app.dependency_overrides[get_update_payment_use_case] = lambda: UpdatePaymentUseCase(
        invoice_store=mock_invoice_store, allocator=PaymentAllocator()
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_inv_store, None)
    app.dependency_overrides.pop(get_record_payment_use_case, None)
    app.dependency_overrides.pop(get_update_payment_use_case, None)


class TestPaymentsAPI:
    async def test_record_settling_payment(self, client: AsyncClient):
        response = await client.post(
            "/api/payments",
            json={"invoice_id": 5, "payment_date": "2024-06-20", "amount": 300},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["payment"]["id"] == 13
        assert data["outstanding"] == 0
        assert data["settles_invoice"] is True

    async def test_overpayment_is_reported(self, client: AsyncClient):
        response = await client.post(
            "/api/payments",
            json={"invoice_id": 5, "payment_date": "2024-06-20", "amount": 500},
        )
        assert response.status_code == 201
        assert response.json()["overpaid_by"] == 200

    async def test_non_positive_amount(self, client: AsyncClient):
        response = await client.post(
            "/api/payments",
            json={"invoice_id": 5, "payment_date": "2024-06-20", "amount": 0},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_future_date(self, client: AsyncClient):
        response = await client.post(
            "/api/payments",
            json={"invoice_id": 5, "payment_date": "2999-01-01", "amount": 10},
        )
        assert response.status_code == 400

    async def test_unknown_invoice(self, client: AsyncClient):
        response = await client.post(
            "/api/payments",
            json={"invoice_id": 99, "payment_date": "2024-06-20", "amount": 10},
        )
        assert response.status_code == 404

    async def test_update_replaces_old_amount(self, client: AsyncClient):
        response = await client.put(
            "/api/payments/11",
            json={"payment_date": "2024-06-05", "amount": 700},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total_paid"] == 1000
        assert data["outstanding"] == 0

    async def test_list(self, client: AsyncClient):
        response = await client.get("/api/payments", params={"invoice_id": 5})
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["has_more"] is False

    async def test_get_and_delete(self, client: AsyncClient):
        assert (await client.get("/api/payments/12")).json()["amount"] == 300
        assert (await client.get("/api/payments/99")).status_code == 404
        assert (await client.delete("/api/payments/12")).status_code == 204
        assert (await client.delete("/api/payments/99")).status_code == 404
