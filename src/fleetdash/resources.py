"""Registry of REST resources consumed by the dashboard.

A *resource key* is the collection path (``/api/vehicles``). It is both the
request target and the cache key; ``key/:id`` paths belong to the same
resource for invalidation purposes.
"""

from __future__ import annotations

from dataclasses import dataclass

from fleetdash import _constants as c
from fleetdash.exceptions import FleetDashError
from fleetdash.models import (
    Alert,
    Approval,
    ApprovalCreate,
    ApprovalDecision,
    Client,
    ClientCreate,
    ClientUpdate,
    DashboardMetrics,
    Delivery,
    DeliveryRoute,
    Driver,
    DriverCreate,
    Expense,
    ExpenseCreate,
    FleetInput,
    FleetRecord,
    FuelLog,
    FuelLogCreate,
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
    MaintenanceCreate,
    MaintenanceRecord,
    Order,
    OrderCreate,
    OrderUpdate,
    Supplier,
    Vehicle,
    VehicleCreate,
    VehicleUpdate,
)

ResourceKey = str


@dataclass(frozen=True, slots=True)
class Resource:
    """A REST collection and the record model its items parse into.

    ``create_model`` and ``update_model`` validate mutation payloads before
    they are sent; a resource without one accepts any mapping.
    """

    name: str
    key: ResourceKey
    model: type[FleetRecord]
    many: bool = True
    create_model: type[FleetInput] | None = None
    update_model: type[FleetInput] | None = None

    def item_key(self, record_id: str) -> ResourceKey:
        if not record_id:
            raise FleetDashError(f"{self.name}: record id must be non-empty")
        return f"{self.key}/{record_id}"

    @property
    def label_key(self) -> str:
        return f"resource.{self.name}"


VEHICLES = Resource("vehicles", c.VEHICLES_KEY, Vehicle, create_model=VehicleCreate, update_model=VehicleUpdate)
CLIENTS = Resource("clients", c.CLIENTS_KEY, Client, create_model=ClientCreate, update_model=ClientUpdate)
ORDERS = Resource("orders", c.ORDERS_KEY, Order, create_model=OrderCreate, update_model=OrderUpdate)
ROUTES = Resource("routes", c.ROUTES_KEY, DeliveryRoute)
ALERTS = Resource("alerts", c.ALERTS_KEY, Alert)
DELIVERIES = Resource("deliveries", c.DELIVERIES_KEY, Delivery)
INVENTORY = Resource(
    "inventory",
    c.INVENTORY_KEY,
    InventoryItem,
    create_model=InventoryItemCreate,
    update_model=InventoryItemUpdate,
)
DRIVERS = Resource("drivers", c.DRIVERS_KEY, Driver, create_model=DriverCreate)
MAINTENANCE = Resource("maintenance", c.MAINTENANCE_KEY, MaintenanceRecord, create_model=MaintenanceCreate)
FUEL = Resource("fuel", c.FUEL_KEY, FuelLog, create_model=FuelLogCreate)
SUPPLIERS = Resource("suppliers", c.SUPPLIERS_KEY, Supplier)
EXPENSES = Resource("expenses", c.EXPENSES_KEY, Expense, create_model=ExpenseCreate)
APPROVALS = Resource("approvals", c.APPROVALS_KEY, Approval, create_model=ApprovalCreate, update_model=ApprovalDecision)
DASHBOARD_METRICS = Resource("dashboard_metrics", c.DASHBOARD_METRICS_KEY, DashboardMetrics, many=False)

ALL_RESOURCES: tuple[Resource, ...] = (
    VEHICLES,
    CLIENTS,
    ORDERS,
    ROUTES,
    ALERTS,
    DELIVERIES,
    INVENTORY,
    DRIVERS,
    MAINTENANCE,
    FUEL,
    SUPPLIERS,
    EXPENSES,
    APPROVALS,
    DASHBOARD_METRICS,
)

_BY_KEY: dict[ResourceKey, Resource] = {res.key: res for res in ALL_RESOURCES}
_BY_NAME: dict[str, Resource] = {res.name: res for res in ALL_RESOURCES}


def resolve_key(key: ResourceKey) -> tuple[Resource, str | None]:
    """Map a resource key to its resource and, for ``key/:id``, the record id.

    Raises :class:`FleetDashError` for empty or unknown keys.
    """
    if not key:
        raise FleetDashError("Resource key must be non-empty")
    path = key.rstrip("/") or key
    exact = _BY_KEY.get(path)
    if exact is not None:
        return exact, None
    parent, _, record_id = path.rpartition("/")
    resource = _BY_KEY.get(parent)
    if resource is None or not resource.many or not record_id:
        raise FleetDashError(f"Unknown resource key: {key!r}")
    return resource, record_id


def get_resource(name_or_key: str) -> Resource:
    """Look up a resource by name (``"clients"``) or key (``"/api/clients"``)."""
    resource = _BY_NAME.get(name_or_key) or _BY_KEY.get(name_or_key)
    if resource is None:
        raise FleetDashError(f"Unknown resource: {name_or_key!r}")
    return resource
