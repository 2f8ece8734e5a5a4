"""Driver model and its create payload."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fleetdash.models._base import (
    Email,
    FleetDate,
    FleetEnum,
    FleetId,
    FleetInput,
    FleetNumber,
    FleetRecord,
    FleetTimestamp,
    Known,
    NonNegativeNumber,
    RequiredText,
)


class DriverStatus(FleetEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    UNKNOWN = "unknown"


class Driver(FleetRecord):
    """A driver; the license fields drive the expiry warnings."""

    id: FleetId
    name: str = ""
    email: str | None = None
    phone: str | None = None
    license_number: str = ""
    license_class: str | None = None
    license_expiry: FleetDate = None
    medical_cert_expiry: FleetDate = None
    status: DriverStatus = DriverStatus.ACTIVE
    hire_date: FleetDate = None
    salary: FleetNumber = None
    address: str | None = None
    created_at: FleetTimestamp = None
    updated_at: FleetTimestamp = None


class DriverCreate(FleetInput):
    """Payload for ``POST /api/drivers``; a driver needs a name and a license."""

    name: RequiredText
    license_number: RequiredText
    license_class: str | None = None
    license_expiry: date | None = None
    medical_cert_expiry: date | None = None
    email: Email | None = None
    phone: str | None = None
    address: str | None = None
    hire_date: date | None = None
    salary: NonNegativeNumber | None = None
    status: Annotated[DriverStatus, Known] = DriverStatus.ACTIVE
