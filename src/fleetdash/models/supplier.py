"""Supplier model."""

from __future__ import annotations

from fleetdash.models._base import FleetDate, FleetEnum, FleetId, FleetInt, FleetRecord, FleetTimestamp


class SupplierType(FleetEnum):
    FUEL = "fuel"
    PARTS = "parts"
    MAINTENANCE = "maintenance"
    INSURANCE = "insurance"
    UNKNOWN = "unknown"


class SupplierStatus(FleetEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    UNKNOWN = "unknown"


class Supplier(FleetRecord):
    id: FleetId
    name: str = ""
    type: SupplierType = SupplierType.UNKNOWN
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    rating: FleetInt = 5
    """1-5 stars."""
    contract_start: FleetDate = None
    contract_end: FleetDate = None
    status: SupplierStatus = SupplierStatus.ACTIVE
    payment_terms: str | None = None
    created_at: FleetTimestamp = None
    updated_at: FleetTimestamp = None
