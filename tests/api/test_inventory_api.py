"""API tests for inventory endpoints."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from procurement.api.dependencies import (
    get_create_inventory_record_use_case,
    get_record_movement_use_case,
    get_reverse_movement_use_case,
    get_stock_store,
    get_update_inventory_record_use_case,
    get_verify_inventory_use_case,
)
from procurement.api.main import app
from procurement.application.use_cases import (
    CreateInventoryRecordUseCase,
    RecordMovementUseCase,
    ReverseMovementUseCase,
    UpdateInventoryRecordUseCase,
    VerifyInventoryUseCase,
)
from procurement.core.entities import InventoryMovement, InventoryRecord, Material, MovementType
from procurement.core.exceptions import StaleRecordError
from procurement.core.services import InventoryLedger


@pytest.fixture
def stored_movement() -> InventoryMovement:
    return InventoryMovement(
        id=20,
        inventory_record_id=3,
        material_id=7,
        movement_type=MovementType.IN,
        quantity=10,
        movement_date=date(2024, 6, 1),
        balance_after=50,
    )


@pytest.fixture
def mock_inventory_store(sample_record: InventoryRecord, stored_movement: InventoryMovement):
    store = AsyncMock()
    store.list_records.return_value = [sample_record]
    store.get_record_by_material.side_effect = (
        lambda mid: sample_record if mid == sample_record.material_id else None
    )
    store.get_movement.side_effect = lambda mid: stored_movement if mid == stored_movement.id else None
    store.get_movements.return_value = [stored_movement]
    store.list_movements.return_value = [stored_movement]
    store.append_movement.side_effect = lambda record, movement, expected_version: (
        record,
        movement.model_copy(update={"id": 21}),
    )
    store.update_thresholds.side_effect = lambda record: record
    store.create_record.side_effect = lambda record: record.model_copy(update={"id": 4})
    store.find_reversal.return_value = None
    return store


@pytest.fixture
def mock_material_store():
    store = AsyncMock()
    store.get_material.side_effect = lambda mid: (
        Material(id=mid, name="Sand", unit_of_measure="t") if mid < 100 else None
    )
    return store


@pytest.fixture
async def client(mock_inventory_store, mock_material_store):
    ledger = InventoryLedger()
    overrides = {
        get_stock_store: lambda: mock_inventory_store,
        get_create_inventory_record_use_case: lambda: CreateInventoryRecordUseCase(
            inventory_store=mock_inventory_store, material_store=mock_material_store, ledger=ledger
        ),
        get_update_inventory_record_use_case: lambda: UpdateInventoryRecordUseCase(
            inventory_store=mock_inventory_store, ledger=ledger
        ),
        get_record_movement_use_case: lambda: RecordMovementUseCase(
            inventory_store=mock_inventory_store, ledger=ledger, max_retries=2
        ),
        get_reverse_movement_use_case: lambda: ReverseMovementUseCase(
            inventory_store=mock_inventory_store, ledger=ledger, max_retries=2
        ),
        get_verify_inventory_use_case: lambda: VerifyInventoryUseCase(
            inventory_store=mock_inventory_store, ledger=ledger
        ),
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dep in overrides:
        app.dependency_overrides.pop(dep, None)


def _movement_body(movement_type: str, quantity: float, material_id: int = 7) -> dict:
    return {
        "material_id": material_id,
        "movement_type": movement_type,
        "quantity": quantity,
        "movement_date": "2024-06-10",
    }


class TestInventoryAPI:
    async def test_status(self, client: AsyncClient):
        response = await client.get("/api/inventory")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["stock_status"] == "Normal"

    async def test_open_record(self, client: AsyncClient):
        response = await client.post(
            "/api/inventory",
            json={"material_id": 9, "current_stock": 5, "minimum_stock": 10},
        )
        assert response.status_code == 201
        assert response.json()["stock_status"] == "Low"

    async def test_open_duplicate_record(self, client: AsyncClient):
        response = await client.post(
            "/api/inventory",
            json={"material_id": 7, "current_stock": 5, "minimum_stock": 10},
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_INVENTORY_RECORD"

    async def test_open_for_unknown_material(self, client: AsyncClient):
        response = await client.post(
            "/api/inventory",
            json={"material_id": 500, "current_stock": 5, "minimum_stock": 10},
        )
        assert response.status_code == 404

    async def test_record_out_movement(self, client: AsyncClient):
        response = await client.post("/api/inventory/movements", json=_movement_body("Out", 40))
        assert response.status_code == 201
        data = response.json()
        assert data["movement"]["balance_after"] == 10
        assert data["record"]["current_stock"] == 10
        assert data["record"]["stock_status"] == "Low"

    async def test_out_beyond_stock(self, client: AsyncClient, mock_inventory_store):
        response = await client.post("/api/inventory/movements", json=_movement_body("Out", 60))
        assert response.status_code == 409
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"
        mock_inventory_store.append_movement.assert_not_called()

    async def test_zero_quantity(self, client: AsyncClient):
        response = await client.post("/api/inventory/movements", json=_movement_body("In", 0))
        assert response.status_code == 400

    async def test_unknown_movement_type(self, client: AsyncClient):
        response = await client.post("/api/inventory/movements", json=_movement_body("Transfer", 1))
        assert response.status_code == 422

    async def test_movement_without_record(self, client: AsyncClient):
        response = await client.post(
            "/api/inventory/movements", json=_movement_body("In", 1, material_id=8)
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "INVENTORY_RECORD_NOT_FOUND"

    async def test_conflict_after_retries(self, client: AsyncClient, mock_inventory_store):
        mock_inventory_store.append_movement.side_effect = StaleRecordError("InventoryRecord", 3, 0)
        response = await client.post("/api/inventory/movements", json=_movement_body("In", 1))
        assert response.status_code == 409
        assert response.json()["error_code"] == "STALE_RECORD"

    async def test_reverse(self, client: AsyncClient):
        response = await client.post(
            "/api/inventory/movements/20/reverse", json={"performed_by": "storekeeper"}
        )
        assert response.status_code == 201
        movement = response.json()["movement"]
        assert movement["movement_type"] == "Adjustment"
        assert movement["quantity"] == -10
        assert movement["reference_type"] == "InventoryMovement"

    async def test_reverse_without_body(self, client: AsyncClient):
        response = await client.post("/api/inventory/movements/20/reverse")
        assert response.status_code == 201
        assert response.json()["movement"]["notes"] == "Reversal of movement 20"

    async def test_reverse_unknown(self, client: AsyncClient):
        response = await client.post("/api/inventory/movements/99/reverse")
        assert response.status_code == 404

    async def test_reverse_twice(self, client: AsyncClient, mock_inventory_store, stored_movement: InventoryMovement):
        mock_inventory_store.find_reversal.return_value = stored_movement.model_copy(
            update={"id": 21, "reference_type": "InventoryMovement", "reference_id": 20}
        )
        response = await client.post("/api/inventory/movements/20/reverse")
        assert response.status_code == 409
        assert response.json()["error_code"] == "MOVEMENT_ALREADY_REVERSED"
        mock_inventory_store.append_movement.assert_not_called()

    async def test_update_thresholds(self, client: AsyncClient):
        response = await client.put(
            "/api/inventory/7", json={"minimum_stock": 60, "maximum_stock": 200}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["current_stock"] == 50
        assert data["stock_status"] == "Low"

    async def test_movement_history(self, client: AsyncClient):
        response = await client.get("/api/inventory/7/movements")
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == [20]
        assert (await client.get("/api/inventory/8/movements")).status_code == 404

    async def test_verify(self, client: AsyncClient):
        response = await client.get("/api/inventory/7/verify")
        assert response.status_code == 200
        data = response.json()
        # Opening stock 50 plus one In of 10 replays to 60 against a cached 50
        assert data["replayed_stock"] == 60
        assert data["has_drift"] is True
        assert data["first_bad_snapshot"] == 0
