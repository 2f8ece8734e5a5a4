from __future__ import annotations

import asyncio
import copy
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import pytest

from fleetdash._cache import QueryCache
from fleetdash.api import FleetApi
from fleetdash.config import DashboardConfig
from fleetdash.exceptions import FleetHTTPError, FleetTransportError
from fleetdash.notifications import NotificationCenter
from fleetdash.widgets import PageContext

NOW = datetime(2025, 3, 14, 12, 0, tzinfo=UTC)

SAMPLE_METRICS: dict[str, Any] = {
    "activeVehicles": 12,
    "dailyDeliveries": 48,
    "pendingOrders": 7,
    "compliance": 94.5,
}


def sample_collections() -> dict[str, list[dict[str, Any]]]:
    return {
        "vehicles": [
            {
                "id": "v1",
                "plate": "ABC-123",
                "type": "truck",
                "status": "active",
                "capacity": "10.00",
                "currentLoad": "7.50",
                "driverName": "Carlos Pérez",
                "lastLocation": {"lat": 4.711, "lng": -74.072},
            },
            {"id": "v2", "plate": "DEF-456", "type": "van", "status": "idle", "capacity": "3.00"},
            {
                "id": "v3",
                "plate": "GHI-789",
                "type": "refrigerated",
                "status": "warning",
                "temperature": "4.5",
                "lastLocation": {"lat": 6.244, "lng": -75.581},
            },
            {"id": "v4", "plate": "JKL-012", "type": "truck", "status": "maintenance"},
            {"id": "v5", "plate": "MNO-345", "type": "truck", "status": "active"},
        ],
        "clients": [
            {
                "id": 1,
                "name": "Agro Andes",
                "email": "compras@agroandes.co",
                "address": "Cra 7 # 12-34",
                "clientType": "customer",
                "priority": "high",
            },
        ],
        "orders": [
            {
                "id": "o1",
                "clientName": "Agro Andes",
                "status": "in_transit",
                "scheduledDelivery": "2025-03-14T12:45:00Z",
                "products": [{"name": "Papa", "quantity": 100}, {"name": "Maíz", "quantity": 50}],
            },
            {"id": "o2", "clientName": "Frutas del Valle", "status": "pending"},
            {"id": "o3", "clientName": "Lácteos Sur", "status": "delivered"},
        ],
        "alerts": [
            {"id": "a1", "type": "delay", "severity": "high", "title": "Retraso", "createdAt": "2025-03-14T11:30:00Z"},
            {"id": "a2", "type": "traffic", "severity": "low", "title": "Tráfico"},
        ],
        "routes": [],
        "deliveries": [],
        "inventory": [],
        "drivers": [],
        "maintenance": [],
        "fuel": [],
        "suppliers": [],
        "expenses": [],
        "approvals": [],
    }


class FakeFleetBackend:
    """In-memory REST API implementing the transport protocol.

    ``gates`` block GETs of a key until the event is set; ``failures`` maps
    ``(method, endpoint)`` to an exception to raise instead of answering.
    """

    def __init__(
        self,
        collections: Mapping[str, list[dict[str, Any]]] | None = None,
        metrics: Mapping[str, Any] | None = None,
    ) -> None:
        self.collections = copy.deepcopy(dict(collections if collections is not None else sample_collections()))
        self.metrics = dict(metrics if metrics is not None else SAMPLE_METRICS)
        self.calls: list[tuple[str, str, Any]] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.failures: dict[tuple[str, str], FleetTransportError] = {}
        self._next_id = 100

    def gets(self, endpoint: str) -> int:
        return sum(1 for method, ep, _ in self.calls if method == "GET" and ep == endpoint)

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        self.calls.append((method, endpoint, copy.deepcopy(dict(payload)) if payload is not None else None))
        gate = self.gates.get(endpoint)
        if gate is not None:
            await gate.wait()
        failure = self.failures.get((method, endpoint))
        if failure is not None:
            raise failure

        if endpoint == "/api/dashboard/metrics" and method == "GET":
            return dict(self.metrics)

        parts = endpoint.removeprefix("/api/").split("/")
        name = parts[0]
        if name not in self.collections:
            raise FleetHTTPError(f"HTTP 404 Not Found from {method} {endpoint}", status_code=404, status_text="Not Found")
        items = self.collections[name]

        if len(parts) == 1:
            if method == "GET":
                return copy.deepcopy(items)
            if method == "POST":
                self._next_id += 1
                created = {**dict(payload or {}), "id": self._next_id}
                items.append(created)
                return copy.deepcopy(created)

        record = next((item for item in items if str(item["id"]) == parts[1]), None)
        if record is None:
            raise FleetHTTPError(f"HTTP 404 Not Found from {method} {endpoint}", status_code=404, status_text="Not Found")
        if len(parts) == 3 and method == "PATCH":
            record["isRead" if parts[2] == "read" else "isResolved"] = True
            return copy.deepcopy(record)
        if method == "GET":
            return copy.deepcopy(record)
        if method == "PATCH":
            record.update(payload or {})
            return copy.deepcopy(record)
        if method == "DELETE":
            items.remove(record)
            return None
        raise FleetHTTPError(f"HTTP 405 from {method} {endpoint}", status_code=405)


@pytest.fixture
def backend() -> FakeFleetBackend:
    return FakeFleetBackend()


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def notifications() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture
def api(backend: FakeFleetBackend, cache: QueryCache, notifications: NotificationCenter) -> FleetApi:
    return FleetApi(backend, cache, notifications=notifications)


@pytest.fixture
def context(api: FleetApi, notifications: NotificationCenter) -> PageContext:
    return PageContext(api, notifications, config=DashboardConfig(), clock=lambda: NOW)
