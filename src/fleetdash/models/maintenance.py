"""Maintenance record model and its create payload."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal

from fleetdash.models._base import (
    FleetDate,
    FleetEnum,
    FleetId,
    FleetInput,
    FleetInt,
    FleetNumber,
    FleetRecord,
    FleetTimestamp,
    Known,
    NonNegativeInt,
    NonNegativeNumber,
    RequiredText,
)


class MaintenanceType(FleetEnum):
    PREVENTIVE = "preventive"
    CORRECTIVE = "corrective"
    INSPECTION = "inspection"
    UNKNOWN = "unknown"


class MaintenanceStatus(FleetEnum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class MaintenanceRecord(FleetRecord):
    id: FleetId
    vehicle_id: str = ""
    type: MaintenanceType = MaintenanceType.UNKNOWN
    description: str = ""
    scheduled_date: FleetDate = None
    completed_date: FleetDate = None
    cost: FleetNumber = None
    mileage: FleetInt = None
    service_provider: str | None = None
    status: MaintenanceStatus = MaintenanceStatus.SCHEDULED
    priority: str = "normal"
    created_at: FleetTimestamp = None
    updated_at: FleetTimestamp = None


class MaintenanceCreate(FleetInput):
    """Payload for ``POST /api/maintenance``."""

    vehicle_id: RequiredText
    type: Annotated[MaintenanceType, Known]
    description: RequiredText
    scheduled_date: date
    cost: NonNegativeNumber | None = None
    mileage: NonNegativeInt | None = None
    service_provider: str | None = None
    priority: Literal["low", "normal", "high", "urgent"] = "normal"
