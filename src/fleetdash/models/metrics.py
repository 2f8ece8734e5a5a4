"""Dashboard metrics record."""

from __future__ import annotations

from fleetdash.models._base import FleetNumber, FleetRecord


class DashboardMetrics(FleetRecord):
    """Flat record from ``GET /api/dashboard/metrics``.

    Every field is optional; the metric tiles substitute their own defaults.
    """

    active_vehicles: FleetNumber = None
    daily_deliveries: FleetNumber = None
    pending_orders: FleetNumber = None
    compliance: FleetNumber = None
    """Percentage of on-time deliveries."""
