"""Vehicle model and its create/update payloads."""

from __future__ import annotations

from typing import Annotated

from fleetdash.models._base import (
    FleetEnum,
    FleetId,
    FleetInput,
    FleetNumber,
    FleetRecord,
    FleetTimestamp,
    GeoPoint,
    Known,
    NonNegativeNumber,
    Percentage,
    PositiveNumber,
    RequiredText,
)


class VehicleStatus(FleetEnum):
    """Operational status shown on fleet cards and map markers."""

    IDLE = "idle"
    ACTIVE = "active"
    WARNING = "warning"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"
    UNKNOWN = "unknown"


class VehicleType(FleetEnum):
    TRUCK = "truck"
    VAN = "van"
    REFRIGERATED = "refrigerated"
    UNKNOWN = "unknown"


class Vehicle(FleetRecord):
    """A fleet vehicle as returned by ``GET /api/vehicles``."""

    id: FleetId
    plate: str = ""
    type: VehicleType = VehicleType.UNKNOWN
    capacity: FleetNumber = None
    """Load capacity in tons."""
    current_load: FleetNumber = None
    """Current load in tons."""
    status: VehicleStatus = VehicleStatus.IDLE
    driver_id: str | None = None
    driver_name: str | None = None
    last_location: GeoPoint | None = None
    fuel_level: FleetNumber = None
    """Fuel level in percent."""
    fuel_type: str | None = None
    temperature: FleetNumber = None
    """Cargo temperature in °C (refrigerated vehicles only)."""
    maintenance_status: str | None = None
    location: str | None = None
    last_maintenance: str | None = None
    next_maintenance: str | None = None
    insurance_expiry: str | None = None
    registration_expiry: str | None = None
    notes: str | None = None
    created_at: FleetTimestamp = None
    updated_at: FleetTimestamp = None

    @property
    def is_refrigerated(self) -> bool:
        return self.type is VehicleType.REFRIGERATED


class VehicleCreate(FleetInput):
    """Payload for ``POST /api/vehicles``.

    ``plate``, ``type`` and ``capacity`` are required.
    """

    plate: RequiredText
    type: Annotated[VehicleType, Known]
    capacity: PositiveNumber
    status: Annotated[VehicleStatus, Known] = VehicleStatus.IDLE
    fuel_type: str | None = None
    fuel_level: Percentage | None = None
    driver_id: str | None = None
    location: str | None = None
    last_maintenance: str | None = None
    next_maintenance: str | None = None
    insurance_expiry: str | None = None
    registration_expiry: str | None = None
    notes: str | None = None


class VehicleUpdate(FleetInput):
    """Partial payload for ``PATCH /api/vehicles/:id``; only set fields are sent."""

    plate: RequiredText | None = None
    type: Annotated[VehicleType, Known] | None = None
    capacity: PositiveNumber | None = None
    current_load: NonNegativeNumber | None = None
    status: Annotated[VehicleStatus, Known] | None = None
    driver_id: str | None = None
    driver_name: str | None = None
    fuel_type: str | None = None
    fuel_level: Percentage | None = None
    temperature: float | None = None
    maintenance_status: str | None = None
    location: str | None = None
    last_maintenance: str | None = None
    next_maintenance: str | None = None
    insurance_expiry: str | None = None
    registration_expiry: str | None = None
    notes: str | None = None
