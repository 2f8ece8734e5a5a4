"""Fuel log model and its create payload."""

from __future__ import annotations

from datetime import datetime

from fleetdash.models._base import (
    FleetId,
    FleetInput,
    FleetInt,
    FleetNumber,
    FleetRecord,
    FleetTimestamp,
    NonNegativeInt,
    PositiveNumber,
    RequiredText,
)
from fleetdash.normalize import js_round


class FuelLog(FleetRecord):
    """One refuelling of a vehicle."""

    id: FleetId
    vehicle_id: str = ""
    driver_id: str | None = None
    liters: FleetNumber = None
    cost_per_liter: FleetNumber = None
    total_cost: FleetNumber = None
    odometer: FleetInt = None
    fuel_station: str | None = None
    receipt_number: str | None = None
    filled_at: FleetTimestamp = None
    created_at: FleetTimestamp = None


class FuelLogCreate(FleetInput):
    """Payload for ``POST /api/fuel``.

    ``totalCost`` is derived from liters and price when not given.
    """

    vehicle_id: RequiredText
    liters: PositiveNumber
    cost_per_liter: PositiveNumber
    total_cost: PositiveNumber | None = None
    driver_id: str | None = None
    odometer: NonNegativeInt | None = None
    fuel_station: str | None = None
    receipt_number: str | None = None
    filled_at: datetime | None = None

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        if self.total_cost is None:
            payload["totalCost"] = js_round(self.liters * self.cost_per_liter * 100) / 100
        return payload
