"""Typed record models for the dashboard REST API."""

from fleetdash.models._base import FleetEnum, FleetInput, FleetRecord, GeoPoint
from fleetdash.models.alert import Alert, AlertSeverity, AlertType
from fleetdash.models.client import Client, ClientCreate, ClientPriority, ClientType, ClientUpdate
from fleetdash.models.driver import Driver, DriverCreate, DriverStatus
from fleetdash.models.finance import (
    Approval,
    ApprovalCreate,
    ApprovalDecision,
    ApprovalStatus,
    Expense,
    ExpenseCreate,
    ExpenseType,
)
from fleetdash.models.fuel import FuelLog, FuelLogCreate
from fleetdash.models.inventory import InventoryCategory, InventoryItem, InventoryItemCreate, InventoryItemUpdate
from fleetdash.models.maintenance import MaintenanceCreate, MaintenanceRecord, MaintenanceStatus, MaintenanceType
from fleetdash.models.metrics import DashboardMetrics
from fleetdash.models.order import (
    Delivery,
    DeliveryStatus,
    Order,
    OrderCreate,
    OrderProduct,
    OrderProductInput,
    OrderStatus,
    OrderUpdate,
)
from fleetdash.models.route import DeliveryRoute, RouteStatus, RouteStop, StopType
from fleetdash.models.supplier import Supplier, SupplierStatus, SupplierType
from fleetdash.models.vehicle import Vehicle, VehicleCreate, VehicleStatus, VehicleType, VehicleUpdate

__all__ = [
    "Alert",
    "AlertSeverity",
    "AlertType",
    "Approval",
    "ApprovalCreate",
    "ApprovalDecision",
    "ApprovalStatus",
    "Client",
    "ClientCreate",
    "ClientPriority",
    "ClientType",
    "ClientUpdate",
    "DashboardMetrics",
    "Delivery",
    "DeliveryRoute",
    "DeliveryStatus",
    "Driver",
    "DriverCreate",
    "DriverStatus",
    "Expense",
    "ExpenseCreate",
    "ExpenseType",
    "FleetEnum",
    "FleetInput",
    "FleetRecord",
    "FuelLog",
    "FuelLogCreate",
    "GeoPoint",
    "InventoryCategory",
    "InventoryItem",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "MaintenanceCreate",
    "MaintenanceRecord",
    "MaintenanceStatus",
    "MaintenanceType",
    "Order",
    "OrderCreate",
    "OrderProduct",
    "OrderProductInput",
    "OrderStatus",
    "OrderUpdate",
    "RouteStatus",
    "RouteStop",
    "StopType",
    "Supplier",
    "SupplierStatus",
    "SupplierType",
    "Vehicle",
    "VehicleCreate",
    "VehicleStatus",
    "VehicleType",
    "VehicleUpdate",
]
