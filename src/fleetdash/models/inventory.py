"""Inventory item model and its create/update payloads."""

from __future__ import annotations

from typing import Annotated, Self

from pydantic import model_validator

from fleetdash.models._base import (
    FleetEnum,
    FleetId,
    FleetInput,
    FleetNumber,
    FleetRecord,
    FleetTimestamp,
    Known,
    NonNegativeInt,
    NonNegativeNumber,
    RequiredText,
)


class InventoryCategory(FleetEnum):
    SPARE_PARTS = "spare_parts"
    FUEL = "fuel"
    SUPPLIES = "supplies"
    TOOLS = "tools"
    UNKNOWN = "unknown"


class InventoryItem(FleetRecord):
    id: FleetId
    item_name: str = ""
    category: InventoryCategory = InventoryCategory.UNKNOWN
    sku: str = ""
    current_stock: int = 0
    min_stock: int = 0
    max_stock: int = 100
    unit_cost: FleetNumber = None
    supplier: str | None = None
    location: str | None = None
    created_at: FleetTimestamp = None
    updated_at: FleetTimestamp = None


def _check_stock_bounds(min_stock: int | None, max_stock: int | None) -> None:
    if min_stock is not None and max_stock is not None and min_stock > max_stock:
        raise ValueError("minStock is greater than maxStock")


class InventoryItemCreate(FleetInput):
    """Payload for ``POST /api/inventory``."""

    item_name: RequiredText
    category: Annotated[InventoryCategory, Known]
    sku: RequiredText
    current_stock: NonNegativeInt = 0
    min_stock: NonNegativeInt = 0
    max_stock: NonNegativeInt = 100
    unit_cost: NonNegativeNumber | None = None
    supplier: str | None = None
    location: str | None = None

    @model_validator(mode="after")
    def _stock_bounds(self) -> Self:
        _check_stock_bounds(self.min_stock, self.max_stock)
        return self


class InventoryItemUpdate(FleetInput):
    """Partial payload for ``PATCH /api/inventory/:id``.

    Stock bounds are only cross-checked when both are part of the patch.
    """

    item_name: RequiredText | None = None
    category: Annotated[InventoryCategory, Known] | None = None
    current_stock: NonNegativeInt | None = None
    min_stock: NonNegativeInt | None = None
    max_stock: NonNegativeInt | None = None
    unit_cost: NonNegativeNumber | None = None
    supplier: str | None = None
    location: str | None = None

    @model_validator(mode="after")
    def _stock_bounds(self) -> Self:
        _check_stock_bounds(self.min_stock, self.max_stock)
        return self
