"""Client models and their create/update payloads."""

from __future__ import annotations

from typing import Annotated

from fleetdash.models._base import (
    Email,
    FleetEnum,
    FleetId,
    FleetInput,
    FleetRecord,
    FleetTimestamp,
    GeoPoint,
    Known,
    RequiredText,
)


class ClientType(FleetEnum):
    CUSTOMER = "customer"
    SUPPLIER = "supplier"
    DISTRIBUTOR = "distributor"
    UNKNOWN = "unknown"


class ClientPriority(FleetEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


class Client(FleetRecord):
    """A customer, supplier or distributor served by the fleet."""

    id: FleetId
    name: str = ""
    email: str | None = None
    phone: str | None = None
    address: str = ""
    location: GeoPoint | None = None
    client_type: ClientType = ClientType.UNKNOWN
    priority: ClientPriority = ClientPriority.NORMAL
    created_at: FleetTimestamp = None


class ClientCreate(FleetInput):
    """Payload for ``POST /api/clients``.

    ``name``, ``address`` and ``client_type`` are required; ``priority``
    defaults to ``normal`` and is always sent.
    """

    name: RequiredText
    address: RequiredText
    client_type: Annotated[ClientType, Known]
    email: Email | None = None
    phone: str | None = None
    priority: Annotated[ClientPriority, Known] = ClientPriority.NORMAL

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        payload.setdefault("priority", self.priority.value)
        return payload


class ClientUpdate(FleetInput):
    """Partial payload for ``PATCH /api/clients/:id``; only set fields are sent."""

    name: RequiredText | None = None
    address: RequiredText | None = None
    client_type: Annotated[ClientType, Known] | None = None
    email: Email | None = None
    phone: str | None = None
    priority: Annotated[ClientPriority, Known] | None = None
