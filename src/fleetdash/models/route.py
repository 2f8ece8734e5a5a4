"""Delivery route model."""

from __future__ import annotations

from pydantic import Field

from fleetdash.models._base import (
    FleetEnum,
    FleetId,
    FleetInt,
    FleetNumber,
    FleetRecord,
    FleetTimestamp,
    GeoPoint,
)


class RouteStatus(FleetEnum):
    PLANNED = "planned"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class StopType(FleetEnum):
    PICKUP = "pickup"
    DELIVERY = "delivery"
    UNKNOWN = "unknown"


class RouteStop(FleetRecord):
    order_id: str | None = None
    address: str = ""
    location: GeoPoint | None = None
    type: StopType = StopType.UNKNOWN
    estimated_time: FleetTimestamp = None


class DeliveryRoute(FleetRecord):
    """A planned route (``GET /api/routes``).

    Named ``DeliveryRoute`` so it does not collide with UI routes.
    """

    id: FleetId
    name: str = ""
    vehicle_id: str | None = None
    driver_id: str | None = None
    order_ids: list[FleetId] = Field(default_factory=list)
    stops: list[RouteStop] = Field(default_factory=list)
    status: RouteStatus = RouteStatus.PLANNED
    total_distance: FleetNumber = None
    estimated_duration: FleetInt = None
    """Minutes."""
    efficiency: FleetNumber = None
    """Percentage."""
    start_time: FleetTimestamp = None
    end_time: FleetTimestamp = None
    created_at: FleetTimestamp = None
    updated_at: FleetTimestamp = None
