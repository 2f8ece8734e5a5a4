"""fleetdash - Async client and data views for a fleet logistics dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fleetdash")
except PackageNotFoundError:
    __version__ = "0+local"
from fleetdash._cache import QueryCache
from fleetdash.api import FleetApi
from fleetdash.client import FleetDashboard
from fleetdash.config import DashboardConfig
from fleetdash.exceptions import (
    FleetConfigError,
    FleetConnectionError,
    FleetDashError,
    FleetDecodeError,
    FleetHTTPError,
    FleetTransportError,
)
from fleetdash.fetch import FetchState, FetchStatus, ResourceFetch
from fleetdash.models import (
    Alert,
    Client,
    ClientCreate,
    ClientUpdate,
    DashboardMetrics,
    Order,
    OrderCreate,
    OrderUpdate,
    Vehicle,
    VehicleCreate,
    VehicleStatus,
    VehicleUpdate,
)
from fleetdash.notifications import NotificationCenter, Toast
from fleetdash.router import RouteDispatcher

__all__ = [
    "__version__",
    "Alert",
    "Client",
    "ClientCreate",
    "ClientUpdate",
    "DashboardConfig",
    "DashboardMetrics",
    "FetchState",
    "FetchStatus",
    "FleetApi",
    "FleetConfigError",
    "FleetConnectionError",
    "FleetDashError",
    "FleetDashboard",
    "FleetDecodeError",
    "FleetHTTPError",
    "FleetTransportError",
    "NotificationCenter",
    "Order",
    "OrderCreate",
    "OrderUpdate",
    "QueryCache",
    "ResourceFetch",
    "RouteDispatcher",
    "Toast",
    "Vehicle",
    "VehicleCreate",
    "VehicleStatus",
    "VehicleUpdate",
]
