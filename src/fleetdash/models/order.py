"""Order and delivery models, with the order create/update payloads."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Literal, Self

from pydantic import Field, model_validator

from fleetdash.models._base import (
    FleetEnum,
    FleetId,
    FleetInput,
    FleetNumber,
    FleetRecord,
    FleetTimestamp,
    GeoPoint,
    Known,
    PositiveNumber,
    RequiredText,
)

OrderPriority = Literal["low", "medium", "high", "urgent"]


class OrderStatus(FleetEnum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class OrderProduct(FleetRecord):
    """A line of an order."""

    name: str = ""
    quantity: FleetNumber = None
    unit: str | None = None
    temperature: FleetNumber = None


class Order(FleetRecord):
    """A transport order from ``GET /api/orders``."""

    id: FleetId
    client_id: str | None = None
    client_name: str = ""
    products: list[OrderProduct] = Field(default_factory=list)
    total_weight: FleetNumber = None
    priority: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    pickup_address: str = ""
    delivery_address: str = ""
    pickup_location: GeoPoint | None = None
    delivery_location: GeoPoint | None = None
    scheduled_pickup: FleetTimestamp = None
    scheduled_delivery: FleetTimestamp = None
    actual_pickup: FleetTimestamp = None
    actual_delivery: FleetTimestamp = None
    special_instructions: str | None = None
    created_at: FleetTimestamp = None
    updated_at: FleetTimestamp = None


class DeliveryStatus(FleetEnum):
    SCHEDULED = "scheduled"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    FAILED = "failed"
    UNKNOWN = "unknown"


class Delivery(FleetRecord):
    """Proof-of-delivery record for an order."""

    id: FleetId
    order_id: str = ""
    route_id: str | None = None
    vehicle_id: str | None = None
    status: DeliveryStatus = DeliveryStatus.SCHEDULED
    estimated_arrival: FleetTimestamp = None
    actual_arrival: FleetTimestamp = None
    delivery_notes: str | None = None
    signature: str | None = None
    photos: list[str] = Field(default_factory=list)
    created_at: FleetTimestamp = None
    updated_at: FleetTimestamp = None


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


class OrderProductInput(FleetInput):
    name: RequiredText
    quantity: PositiveNumber
    unit: RequiredText
    temperature: float | None = None


class OrderCreate(FleetInput):
    """Payload for ``POST /api/orders``.

    An order needs a client, both addresses and at least one product. The
    scheduled delivery may not be earlier than the scheduled pickup.
    """

    client_id: RequiredText
    client_name: RequiredText
    pickup_address: RequiredText
    delivery_address: RequiredText
    products: list[OrderProductInput] = Field(min_length=1)
    priority: OrderPriority = "medium"
    total_weight: PositiveNumber | None = None
    scheduled_pickup: datetime | None = None
    scheduled_delivery: datetime | None = None
    special_instructions: str | None = None

    @model_validator(mode="after")
    def _delivery_after_pickup(self) -> Self:
        pickup, delivery = self.scheduled_pickup, self.scheduled_delivery
        if pickup is None or delivery is None:
            return self
        # Naive times count as UTC.
        if _as_utc(delivery) < _as_utc(pickup):
            raise ValueError("scheduled delivery is before scheduled pickup")
        return self

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        payload.setdefault("priority", self.priority)
        payload.setdefault("status", OrderStatus.PENDING.value)
        return payload


class OrderUpdate(FleetInput):
    """Partial payload for ``PATCH /api/orders/:id``; only set fields are sent."""

    status: Annotated[OrderStatus, Known] | None = None
    vehicle_id: str | None = None
    driver_id: str | None = None
    priority: OrderPriority | None = None
    scheduled_delivery: datetime | None = None
    actual_pickup: datetime | None = None
    actual_delivery: datetime | None = None
    special_instructions: str | None = None
