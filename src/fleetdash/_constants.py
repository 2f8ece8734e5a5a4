"""Internal constants shared across the library."""

BASE_URL = "http://localhost:5000"
USER_AGENT = "fleetdash/0.1"

DASHBOARD_METRICS_KEY = "/api/dashboard/metrics"

# Resource keys consumed by the dashboard pages.
VEHICLES_KEY = "/api/vehicles"
CLIENTS_KEY = "/api/clients"
ORDERS_KEY = "/api/orders"
ROUTES_KEY = "/api/routes"
ALERTS_KEY = "/api/alerts"
DELIVERIES_KEY = "/api/deliveries"
INVENTORY_KEY = "/api/inventory"
DRIVERS_KEY = "/api/drivers"
MAINTENANCE_KEY = "/api/maintenance"
FUEL_KEY = "/api/fuel"
SUPPLIERS_KEY = "/api/suppliers"
EXPENSES_KEY = "/api/expenses"
APPROVALS_KEY = "/api/approvals"

# ------------------------------------------------------------------
# Dashboard derivation rules
# ------------------------------------------------------------------

FEATURED_VEHICLE_STATUSES: frozenset[str] = frozenset({"active", "warning"})
PRIORITY_ALERT_SEVERITIES: frozenset[str] = frozenset({"high", "critical"})

# Weight of a vehicle in warning status when computing overall fleet efficiency.
WARNING_EFFICIENCY_WEIGHT = 0.6

# Stock at or below ``min_stock * LOW_STOCK_FACTOR`` (but above min) is "low".
LOW_STOCK_FACTOR = 1.5

# Facet value that disables a filter.
FILTER_ALL = "all"
