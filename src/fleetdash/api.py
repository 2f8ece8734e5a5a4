"""REST resource API: typed CRUD over the dashboard endpoints."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from fleetdash._cache import QueryCache
from fleetdash._transport import Transport
from fleetdash.exceptions import FleetDashError, FleetDecodeError, FleetTransportError
from fleetdash.messages import message
from fleetdash.models import (
    Alert,
    Approval,
    ApprovalDecision,
    Client,
    ClientCreate,
    ClientUpdate,
    DashboardMetrics,
    FleetInput,
    FleetRecord,
    Order,
    OrderCreate,
    OrderUpdate,
    Vehicle,
    VehicleCreate,
    VehicleUpdate,
)
from fleetdash.notifications import NotificationCenter
from fleetdash.resources import (
    ALERTS,
    APPROVALS,
    CLIENTS,
    DASHBOARD_METRICS,
    ORDERS,
    VEHICLES,
    Resource,
    ResourceKey,
    resolve_key,
)

_logger = logging.getLogger(__name__)

_PAST_TENSE = {"create": "created", "update": "updated", "delete": "deleted"}


def _to_payload(
    resource: Resource,
    model: type[FleetInput] | None,
    payload: FleetInput | Mapping[str, Any],
) -> dict[str, Any]:
    """Validate *payload* against *model* and serialize it for the wire.

    Mappings are validated first, so a rejected payload raises
    :class:`pydantic.ValidationError` before anything is sent.
    """
    if isinstance(payload, FleetInput):
        if model is not None and not isinstance(payload, model):
            raise FleetDashError(
                f"{resource.name}: expected {model.__name__}, got {type(payload).__name__}"
            )
        return payload.to_payload()
    if model is None:
        return dict(payload)
    return model.model_validate(payload).to_payload()


def parse_record(resource: Resource, raw: Any, endpoint: str) -> FleetRecord:
    """Validate one record against the resource schema."""
    if not isinstance(raw, dict):
        raise FleetDecodeError(
            f"Expected an object from {endpoint}, got {type(raw).__name__}",
            endpoint=endpoint,
        )
    try:
        return resource.model.model_validate(raw)
    except ValidationError as exc:
        raise FleetDecodeError(
            f"Response from {endpoint} does not match {resource.model.__name__}: {exc.error_count()} error(s)",
            endpoint=endpoint,
        ) from exc
    except (ValueError, TypeError, OverflowError) as exc:
        raise FleetDecodeError(
            f"Response from {endpoint} could not be read as {resource.model.__name__}: {exc}",
            endpoint=endpoint,
        ) from exc


def parse_collection(resource: Resource, raw: Any, endpoint: str) -> tuple[FleetRecord, ...]:
    """Validate a collection response; order is preserved."""
    if not isinstance(raw, list):
        raise FleetDecodeError(
            f"Expected a list from {endpoint}, got {type(raw).__name__}",
            endpoint=endpoint,
        )
    return tuple(parse_record(resource, item, endpoint) for item in raw)


class FleetApi:
    """CRUD operations over the registered REST resources.

    Reads go through the injected :class:`QueryCache`; every successful
    mutation invalidates its resource key (and therefore all ``key/:id``
    entries) and publishes a toast.
    """

    def __init__(
        self,
        transport: Transport,
        cache: QueryCache,
        *,
        notifications: NotificationCenter | None = None,
        language: str = "es",
    ) -> None:
        self._transport = transport
        self._cache = cache
        self._notifications = notifications
        self._language = language

    @property
    def cache(self) -> QueryCache:
        return self._cache

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def query(self, key: ResourceKey) -> Any:
        """Load and validate the data behind *key*, bypassing the cache.

        Collection keys return a tuple of records, ``key/:id`` keys and the
        metrics key return a single record.
        """
        resource, record_id = resolve_key(key)
        raw = await self._transport.request_json("GET", key)
        if resource.many and record_id is None:
            return parse_collection(resource, raw, key)
        return parse_record(resource, raw, key)

    async def fetch(self, key: ResourceKey) -> Any:
        """Like :meth:`query` but served from / stored in the cache."""
        return await self._cache.fetch(key, lambda: self.query(key))

    async def list(self, resource: Resource) -> tuple[FleetRecord, ...]:
        result: tuple[FleetRecord, ...] = await self.fetch(resource.key)
        return result

    async def get(self, resource: Resource, record_id: str) -> FleetRecord:
        result: FleetRecord = await self.fetch(resource.item_key(record_id))
        return result

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, resource: Resource, payload: FleetInput | Mapping[str, Any]) -> FleetRecord:
        """``POST key``; returns the created record with its server-assigned id."""
        body = _to_payload(resource, resource.create_model, payload)
        raw = await self._mutate(resource, "create", "POST", resource.key, body)
        return parse_record(resource, raw, resource.key)

    async def update(
        self,
        resource: Resource,
        record_id: str,
        patch: FleetInput | Mapping[str, Any],
    ) -> FleetRecord:
        """``PATCH key/:id`` with only the given fields; returns the updated record."""
        endpoint = resource.item_key(record_id)
        body = _to_payload(resource, resource.update_model, patch)
        raw = await self._mutate(resource, "update", "PATCH", endpoint, body)
        return parse_record(resource, raw, endpoint)

    async def delete(self, resource: Resource, record_id: str) -> None:
        await self._mutate(resource, "delete", "DELETE", resource.item_key(record_id), None)

    async def _mutate(
        self,
        resource: Resource,
        action: str,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None,
    ) -> Any:
        label = message(resource.label_key, self._language)
        try:
            raw = await self._transport.request_json(method, endpoint, payload)
        except FleetTransportError as exc:
            _logger.warning("%s %s failed: %s", method, endpoint, exc)
            if self._notifications is not None:
                self._notifications.error(
                    message("toast.error", self._language),
                    message(f"toast.{action}_failed", self._language, label=label),
                )
            raise

        self._cache.invalidate(resource.key)
        if self._notifications is not None:
            done = _PAST_TENSE[action]
            self._notifications.toast(
                message(f"toast.{done}", self._language, label=label),
                message(f"toast.{done}_body", self._language),
            )
        return raw

    # ------------------------------------------------------------------
    # Typed helpers
    # ------------------------------------------------------------------

    async def get_dashboard_metrics(self) -> DashboardMetrics:
        result: DashboardMetrics = await self.fetch(DASHBOARD_METRICS.key)
        return result

    async def get_vehicles(self) -> tuple[Vehicle, ...]:
        result: tuple[Vehicle, ...] = await self.fetch(VEHICLES.key)
        return result

    async def create_vehicle(self, vehicle: VehicleCreate | Mapping[str, Any]) -> Vehicle:
        result = await self.create(VEHICLES, vehicle)
        assert isinstance(result, Vehicle)  # noqa: S101
        return result

    async def update_vehicle(self, vehicle_id: str, patch: VehicleUpdate | Mapping[str, Any]) -> Vehicle:
        """Validate *patch* and ``PATCH /api/vehicles/:id`` with the set fields only."""
        result = await self.update(VEHICLES, vehicle_id, patch)
        assert isinstance(result, Vehicle)  # noqa: S101
        return result

    async def get_clients(self) -> tuple[Client, ...]:
        result: tuple[Client, ...] = await self.fetch(CLIENTS.key)
        return result

    async def get_client(self, client_id: str) -> Client:
        result = await self.get(CLIENTS, client_id)
        assert isinstance(result, Client)  # noqa: S101
        return result

    async def create_client(self, client: ClientCreate | Mapping[str, Any]) -> Client:
        """Validate *client* and ``POST /api/clients``."""
        result = await self.create(CLIENTS, client)
        assert isinstance(result, Client)  # noqa: S101
        return result

    async def update_client(self, client_id: str, patch: ClientUpdate | Mapping[str, Any]) -> Client:
        """Validate *patch* and ``PATCH /api/clients/:id`` with the set fields only."""
        result = await self.update(CLIENTS, client_id, patch)
        assert isinstance(result, Client)  # noqa: S101
        return result

    async def get_orders(self) -> tuple[Order, ...]:
        result: tuple[Order, ...] = await self.fetch(ORDERS.key)
        return result

    async def create_order(self, order: OrderCreate | Mapping[str, Any]) -> Order:
        """Validate *order* and ``POST /api/orders``; new orders start as pending."""
        result = await self.create(ORDERS, order)
        assert isinstance(result, Order)  # noqa: S101
        return result

    async def update_order(self, order_id: str, patch: OrderUpdate | Mapping[str, Any]) -> Order:
        result = await self.update(ORDERS, order_id, patch)
        assert isinstance(result, Order)  # noqa: S101
        return result

    async def decide_approval(self, approval_id: str, decision: ApprovalDecision | Mapping[str, Any]) -> Approval:
        """Approve or reject a pending request."""
        result = await self.update(APPROVALS, approval_id, decision)
        assert isinstance(result, Approval)  # noqa: S101
        return result

    async def mark_alert_read(self, alert_id: str) -> Alert:
        return await self._alert_action(alert_id, "read")

    async def mark_alert_resolved(self, alert_id: str) -> Alert:
        return await self._alert_action(alert_id, "resolve")

    async def _alert_action(self, alert_id: str, action: str) -> Alert:
        endpoint = f"{ALERTS.item_key(alert_id)}/{action}"
        raw = await self._mutate(ALERTS, "update", "PATCH", endpoint, None)
        result = parse_record(ALERTS, raw, endpoint)
        assert isinstance(result, Alert)  # noqa: S101
        return result
