"""Alert model."""

from __future__ import annotations

from fleetdash.models._base import FleetEnum, FleetId, FleetRecord, FleetTimestamp


class AlertType(FleetEnum):
    DELAY = "delay"
    TEMPERATURE = "temperature"
    CAPACITY = "capacity"
    MAINTENANCE = "maintenance"
    TRAFFIC = "traffic"
    UNKNOWN = "unknown"


class AlertSeverity(FleetEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


class Alert(FleetRecord):
    """An operational alert raised against a vehicle, route or order."""

    id: FleetId
    type: AlertType = AlertType.UNKNOWN
    severity: AlertSeverity = AlertSeverity.LOW
    title: str = ""
    description: str = ""
    vehicle_id: str | None = None
    route_id: str | None = None
    order_id: str | None = None
    is_read: bool = False
    is_resolved: bool = False
    created_at: FleetTimestamp = None
