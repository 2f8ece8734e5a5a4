"""Tests for record parsing with FleetRecord + FleetEnum."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from fleetdash.models import (
    Alert,
    AlertSeverity,
    Client,
    ClientCreate,
    ClientPriority,
    ClientType,
    ApprovalCreate,
    ApprovalDecision,
    ApprovalStatus,
    ClientUpdate,
    DashboardMetrics,
    DeliveryRoute,
    Driver,
    DriverCreate,
    FuelLog,
    FuelLogCreate,
    InventoryItemCreate,
    InventoryItemUpdate,
    Order,
    OrderCreate,
    OrderStatus,
    OrderUpdate,
    Vehicle,
    VehicleCreate,
    VehicleStatus,
    VehicleType,
    VehicleUpdate,
)

# ------------------------------------------------------------------
# FleetEnum
# ------------------------------------------------------------------


class TestFleetEnum:
    def test_unknown_value_falls_back(self) -> None:
        assert VehicleStatus("parked") == VehicleStatus.UNKNOWN

    def test_known_value(self) -> None:
        assert VehicleStatus("warning") == VehicleStatus.WARNING

    def test_case_insensitive(self) -> None:
        assert OrderStatus("IN_TRANSIT") == OrderStatus.IN_TRANSIT


# ------------------------------------------------------------------
# Records
# ------------------------------------------------------------------


class TestVehicle:
    def test_camel_case_payload(self) -> None:
        vehicle = Vehicle.model_validate(
            {
                "id": "v1",
                "plate": "ABC-123",
                "type": "refrigerated",
                "status": "active",
                "capacity": "10.00",
                "currentLoad": "7.50",
                "driverName": "Carlos",
                "lastLocation": {"lat": 4.7, "lng": -74.0, "timestamp": "2025-03-14T10:00:00Z"},
                "updatedAt": 1_741_946_400_000,
            }
        )
        assert vehicle.status is VehicleStatus.ACTIVE
        assert vehicle.type is VehicleType.REFRIGERATED
        assert vehicle.is_refrigerated
        assert vehicle.capacity == 10.0
        assert vehicle.current_load == 7.5
        assert vehicle.driver_name == "Carlos"
        assert vehicle.last_location is not None
        assert vehicle.last_location.timestamp == datetime(2025, 3, 14, 10, 0, tzinfo=UTC)
        assert vehicle.updated_at == datetime.fromtimestamp(1_741_946_400, tz=UTC)

    def test_nulls_and_empty_strings_use_defaults(self) -> None:
        vehicle = Vehicle.model_validate({"id": "v1", "status": None, "plate": "", "capacity": None})
        assert vehicle.status is VehicleStatus.IDLE
        assert vehicle.plate == ""
        assert vehicle.capacity is None

    def test_unmapped_status_is_unknown(self) -> None:
        assert Vehicle.model_validate({"id": "v1", "status": "teleporting"}).status is VehicleStatus.UNKNOWN

    def test_numeric_id_is_string(self) -> None:
        assert Vehicle.model_validate({"id": 42}).id == "42"

    def test_raw_keeps_payload(self) -> None:
        payload = {"id": "v1", "futureField": 1}
        vehicle = Vehicle.model_validate(payload)
        assert vehicle.raw == payload
        assert "raw" not in vehicle.model_dump()

    def test_missing_id_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Vehicle.model_validate({"plate": "ABC-123"})

    def test_records_are_immutable(self) -> None:
        vehicle = Vehicle.model_validate({"id": "v1"})
        with pytest.raises(ValidationError):
            vehicle.plate = "X"  # type: ignore[misc]


def test_order_products_and_timestamps() -> None:
    order = Order.model_validate(
        {
            "id": "o1",
            "status": "in_transit",
            "products": [{"name": "Papa", "quantity": "100"}],
            "scheduledDelivery": "2025-03-14T12:45:00",
        }
    )
    assert order.status is OrderStatus.IN_TRANSIT
    assert order.products[0].quantity == 100.0
    assert order.scheduled_delivery == datetime(2025, 3, 14, 12, 45, tzinfo=UTC)


def test_route_order_ids_are_strings() -> None:
    route = DeliveryRoute.model_validate({"id": 1, "orderIds": [1, "2"], "stops": [{"address": "A", "type": "pickup"}]})
    assert route.id == "1"
    assert route.order_ids == ["1", "2"]
    assert route.stops[0].address == "A"


def test_driver_dates() -> None:
    driver = Driver.model_validate({"id": "d1", "licenseExpiry": "2025-04-01", "salary": "1500.50"})
    assert driver.license_expiry == date(2025, 4, 1)
    assert driver.salary == 1500.5


def test_fuel_log_decimals() -> None:
    log = FuelLog.model_validate({"id": "f1", "liters": "45.5", "totalCost": "190.20", "odometer": "120500"})
    assert log.liters == 45.5
    assert log.total_cost == 190.2
    assert log.odometer == 120500


def test_alert_severity() -> None:
    alert = Alert.model_validate({"id": "a1", "severity": "CRITICAL", "isRead": True})
    assert alert.severity is AlertSeverity.CRITICAL
    assert alert.is_read


def test_dashboard_metrics_all_optional() -> None:
    metrics = DashboardMetrics.model_validate({})
    assert metrics.active_vehicles is None
    assert metrics.compliance is None


def test_client_parse() -> None:
    client = Client.model_validate({"id": 7, "name": "Agro", "clientType": "distributor"})
    assert client.id == "7"
    assert client.client_type is ClientType.DISTRIBUTOR
    assert client.priority is ClientPriority.NORMAL


# ------------------------------------------------------------------
# Inputs
# ------------------------------------------------------------------


class TestClientCreate:
    def test_payload_is_camel_case_with_default_priority(self) -> None:
        payload = ClientCreate(name=" Agro ", address="Calle 1", client_type=ClientType.CUSTOMER).to_payload()
        assert payload == {"name": "Agro", "address": "Calle 1", "clientType": "customer", "priority": "normal"}

    def test_accepts_wire_names(self) -> None:
        client = ClientCreate.model_validate(
            {"name": "Agro", "address": "Calle 1", "clientType": "supplier", "email": "a@b.co"}
        )
        assert client.client_type is ClientType.SUPPLIER
        assert client.to_payload()["email"] == "a@b.co"

    @pytest.mark.parametrize(
        "payload",
        [
            {"address": "Calle 1", "clientType": "customer"},
            {"name": "", "address": "Calle 1", "clientType": "customer"},
            {"name": "Agro", "address": "Calle 1", "clientType": "customer", "email": "not-an-email"},
            {"name": "Agro", "address": "Calle 1", "clientType": "martian"},
            {"name": "Agro", "address": "Calle 1", "clientType": "customer", "unexpected": 1},
        ],
    )
    def test_rejects_invalid_payloads(self, payload: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            ClientCreate.model_validate(payload)


def test_client_update_sends_only_set_fields() -> None:
    patch = ClientUpdate.model_validate({"name": "Nuevo", "priority": "high"})
    assert patch.to_payload() == {"name": "Nuevo", "priority": "high"}


def test_client_update_rejects_blank_name() -> None:
    with pytest.raises(ValidationError):
        ClientUpdate.model_validate({"name": "   "})


ORDER = {
    "clientId": "1",
    "clientName": "Agro Andes",
    "pickupAddress": "Bodega 4",
    "deliveryAddress": "Plaza de mercado",
    "products": [{"name": "Papa", "quantity": 100, "unit": "kg"}],
}


class TestOrderInputs:
    def test_new_orders_are_pending_with_medium_priority(self) -> None:
        payload = OrderCreate.model_validate(ORDER).to_payload()
        assert payload["status"] == "pending"
        assert payload["priority"] == "medium"
        assert payload["products"] == [{"name": "Papa", "quantity": 100.0, "unit": "kg"}]
        assert "scheduledPickup" not in payload

    def test_schedule_is_sent_as_iso_strings(self) -> None:
        order = OrderCreate.model_validate(
            {**ORDER, "scheduledPickup": "2025-03-14T08:00:00Z", "scheduledDelivery": "2025-03-14T12:00:00"}
        )
        payload = order.to_payload()
        assert payload["scheduledPickup"] == "2025-03-14T08:00:00Z"
        assert payload["scheduledDelivery"] == "2025-03-14T12:00:00"

    @pytest.mark.parametrize(
        "changes",
        [
            {"products": []},
            {"products": [{"name": "Papa", "quantity": 0, "unit": "kg"}]},
            {"clientName": ""},
            {"priority": "whenever"},
            {"scheduledPickup": "2025-03-14T12:00:00Z", "scheduledDelivery": "2025-03-14T08:00:00"},
        ],
    )
    def test_rejects_invalid_orders(self, changes: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            OrderCreate.model_validate({**ORDER, **changes})

    def test_update_accepts_known_statuses_only(self) -> None:
        assert OrderUpdate.model_validate({"status": "in_transit"}).to_payload() == {"status": "in_transit"}
        with pytest.raises(ValidationError):
            OrderUpdate.model_validate({"status": "lost"})


class TestVehicleInputs:
    def test_create_payload_is_camel_case(self) -> None:
        vehicle = VehicleCreate(plate="XYZ-999", type=VehicleType.REFRIGERATED, capacity=8, fuel_level=75)
        assert vehicle.to_payload() == {"plate": "XYZ-999", "type": "refrigerated", "capacity": 8.0, "fuelLevel": 75.0}

    @pytest.mark.parametrize(
        "patch",
        [
            {"fuelLevel": 101},
            {"fuelLevel": -1},
            {"capacity": 0},
            {"capacity": float("inf")},
            {"currentLoad": float("nan")},
            {"status": "unknown"},
            {"odometer": 12},
        ],
    )
    def test_update_rejects_invalid_patches(self, patch: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            VehicleUpdate.model_validate(patch)


def test_driver_requires_license_and_valid_email() -> None:
    driver = DriverCreate.model_validate({"name": "Ana", "licenseNumber": "LIC-1", "hireDate": "2024-02-01"})
    assert driver.to_payload() == {"name": "Ana", "licenseNumber": "LIC-1", "hireDate": "2024-02-01"}
    with pytest.raises(ValidationError):
        DriverCreate.model_validate({"name": "Ana"})
    with pytest.raises(ValidationError):
        DriverCreate.model_validate({"name": "Ana", "licenseNumber": "LIC-1", "email": "ana"})


def test_fuel_log_total_cost_is_derived() -> None:
    payload = FuelLogCreate(vehicle_id="v1", liters=40, cost_per_liter=1.255).to_payload()
    assert payload["totalCost"] == 50.2

    explicit = FuelLogCreate(vehicle_id="v1", liters=40, cost_per_liter=1.25, total_cost=49).to_payload()
    assert explicit["totalCost"] == 49.0


def test_inventory_stock_bounds() -> None:
    with pytest.raises(ValidationError):
        InventoryItemCreate.model_validate(
            {"itemName": "Filtro", "category": "spare_parts", "sku": "F-1", "minStock": 10, "maxStock": 5}
        )
    assert InventoryItemUpdate.model_validate({"minStock": 150}).to_payload() == {"minStock": 150}
    with pytest.raises(ValidationError):
        InventoryItemUpdate.model_validate({"minStock": 20, "maxStock": 10})


def test_approvals_start_pending_and_decisions_are_final() -> None:
    request = ApprovalCreate(type="expense", entity_id="e1", requested_by="Ana", description="Peajes")
    assert request.to_payload()["status"] == "pending"

    decision = ApprovalDecision.model_validate({"status": "approved", "approvedBy": "Luis"})
    assert decision.status is ApprovalStatus.APPROVED
    with pytest.raises(ValidationError):
        ApprovalDecision.model_validate({"status": "pending", "approvedBy": "Luis"})
