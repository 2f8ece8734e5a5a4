"""Page composers.

A page lays out independent widgets in named regions, mounts them all at
once and owns only transient UI state (mobile menu, search text, facet
filters, map layer). Nothing on a page is derived from another widget's
fetch, except page-level summaries computed at render time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, ClassVar

from fleetdash import _constants as c
from fleetdash.exceptions import FleetDashError
from fleetdash.fetch import FetchState
from fleetdash.models import (
    ClientPriority,
    ClientType,
    DriverStatus,
    ExpenseType,
    InventoryCategory,
    MaintenanceStatus,
    OrderStatus,
    RouteStatus,
    SupplierType,
    VehicleStatus,
)
from fleetdash.models._base import FleetEnum
from fleetdash.resources import (
    ALERTS,
    APPROVALS,
    CLIENTS,
    DASHBOARD_METRICS,
    DRIVERS,
    EXPENSES,
    FUEL,
    INVENTORY,
    MAINTENANCE,
    ORDERS,
    ROUTES,
    SUPPLIERS,
    VEHICLES,
    Resource,
)
from fleetdash.views import derive
from fleetdash.views.components import ListView, Rendered
from fleetdash.widgets import PageContext, Widget

_logger = logging.getLogger(__name__)

MAP_LAYERS: frozenset[str] = frozenset({"traffic", "weather"})


@dataclass(frozen=True, slots=True)
class RegionView:
    name: str
    widgets: tuple[Rendered, ...]


@dataclass(frozen=True, slots=True)
class PageView:
    """Everything needed to draw one page."""

    path: str
    title: str
    regions: tuple[RegionView, ...]
    mobile_menu_open: bool = False
    summary: Mapping[str, Any] = field(default_factory=dict)
    message: str = ""

    def region(self, name: str) -> RegionView:
        for region in self.regions:
            if region.name == name:
                return region
        raise KeyError(name)


PageListener = Callable[["PageComposer", Widget, FetchState], None]


class PageComposer:
    """Base page: named regions of widgets plus transient UI state."""

    path: ClassVar[str] = ""
    title_key: ClassVar[str] = ""

    def __init__(self, context: PageContext) -> None:
        self._context = context
        self._regions: dict[str, tuple[Widget, ...]] = self._build_regions()
        self._mounted = False
        self._on_change: PageListener | None = None
        self.mobile_menu_open = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    def _build_regions(self) -> dict[str, tuple[Widget, ...]]:
        return {}

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def context(self) -> PageContext:
        return self._context

    @property
    def title(self) -> str:
        return self._context.text(self.title_key)

    @property
    def regions(self) -> Mapping[str, tuple[Widget, ...]]:
        return dict(self._regions)

    @property
    def widgets(self) -> tuple[Widget, ...]:
        return tuple(w for region in self._regions.values() for w in region)

    def widget(self, name: str) -> Widget:
        for w in self.widgets:
            if w.name == name:
                return w
        raise KeyError(name)

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    # ------------------------------------------------------------------
    # Transient UI state
    # ------------------------------------------------------------------

    def toggle_mobile_menu(self) -> bool:
        self.mobile_menu_open = not self.mobile_menu_open
        return self.mobile_menu_open

    def close_mobile_menu(self) -> None:
        self.mobile_menu_open = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self, on_change: PageListener | None = None) -> None:
        """Mount every widget; their requests run concurrently."""
        if self._mounted:
            raise FleetDashError(f"{self!r} is already mounted")
        self._mounted = True
        self._on_change = on_change
        for w in self.widgets:
            w.mount(self._context, on_change=self._widget_changed)
        _logger.debug("Mounted %r with %d widgets", self, len(self.widgets))

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._mounted = False
        self._on_change = None
        for w in self.widgets:
            w.unmount()
        _logger.debug("Unmounted %r", self)

    async def wait_until_settled(self) -> None:
        """Wait for every widget's current request to finish."""
        await asyncio.gather(*(w.wait() for w in self.widgets))

    def _widget_changed(self, widget: Widget, state: FetchState) -> None:
        if self._on_change is not None:
            self._on_change(self, widget, state)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def summary(self) -> dict[str, Any]:
        """Page-level aggregates; empty for most pages."""
        return {}

    def render(self) -> PageView:
        return PageView(
            path=self.path,
            title=self.title,
            regions=tuple(
                RegionView(name, tuple(w.render() for w in widgets)) for name, widgets in self._regions.items()
            ),
            mobile_menu_open=self.mobile_menu_open,
            summary=self.summary(),
        )

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def _list_widget(
        self,
        name: str,
        resource: Resource,
        derivation: Callable[[Any], Sequence[Any]],
        *,
        title_key: str,
        empty_key: str | Callable[[], str],
        placeholders: int = 3,
        item_key: Callable[[Any], str] | None = None,
        present: Callable[[Any], Any] | None = None,
    ) -> Widget:
        ctx = self._context
        empty: str | Callable[[], str] = ctx.text(empty_key) if isinstance(empty_key, str) else empty_key
        kwargs: dict[str, Any] = {"present": present}
        if item_key is not None:
            kwargs["item_key"] = item_key
        view = ListView(ctx.text(title_key), placeholder_count=placeholders, empty_message=empty, **kwargs)
        return Widget(name, resource.key, view, derivation)

    def _data(self, widget_name: str) -> Any:
        state = self.widget(widget_name).state
        return state.data if state.is_ready else None


# ----------------------------------------------------------------------
# Dashboard
# ----------------------------------------------------------------------


class DashboardPage(PageComposer):
    """Metrics row; map with alerts and critical deliveries; performance and featured vehicles."""

    path = "/"
    title_key = "nav.dashboard"

    def __init__(self, context: PageContext) -> None:
        super().__init__(context)
        self.map_layer: str | None = None

    def _build_regions(self) -> dict[str, tuple[Widget, ...]]:
        ctx = self._context
        cfg = ctx.config
        lang = ctx.language
        window = timedelta(minutes=cfg.critical_delivery_window_minutes)

        metrics = self._list_widget(
            "metrics",
            DASHBOARD_METRICS,
            lambda data: derive.metric_summary(data, language=lang),
            title_key="title.metrics",
            empty_key="empty.generic",
            placeholders=4,
            item_key=lambda tile: tile.key,
        )
        fleet_map = self._list_widget(
            "fleet_map",
            VEHICLES,
            derive.map_markers,
            title_key="title.fleet_map",
            empty_key="empty.fleet_map",
            placeholders=1,
        )
        alerts = self._list_widget(
            "priority_alerts",
            ALERTS,
            lambda data: derive.priority_alerts(data, ctx.now(), limit=cfg.priority_alert_limit, language=lang),
            title_key="title.priority_alerts",
            empty_key="empty.priority_alerts",
            placeholders=3,
        )
        deliveries = self._list_widget(
            "critical_deliveries",
            ORDERS,
            lambda data: derive.critical_deliveries(
                data, ctx.now(), window=window, limit=cfg.critical_delivery_limit, language=lang
            ),
            title_key="title.critical_deliveries",
            empty_key="empty.critical_deliveries",
            placeholders=2,
        )
        performance = self._list_widget(
            "fleet_performance",
            VEHICLES,
            lambda data: (derive.fleet_performance(data),),
            title_key="title.fleet_performance",
            empty_key="empty.generic",
            placeholders=1,
            item_key=lambda _: "fleet-performance",
        )
        featured = self._list_widget(
            "featured_vehicles",
            VEHICLES,
            lambda data: derive.featured_vehicles(data, cfg.featured_vehicle_limit),
            title_key="title.featured_vehicles",
            empty_key="empty.featured_vehicles",
            placeholders=2,
            present=derive.vehicle_card,
        )
        return {
            "metrics": (metrics,),
            "map_panel": (fleet_map, alerts, deliveries),
            "summary": (performance, featured),
        }

    def toggle_map_layer(self, layer: str) -> str | None:
        """Select *layer*, or clear it when it is already selected."""
        if layer not in MAP_LAYERS:
            raise FleetDashError(f"Unknown map layer: {layer!r}")
        self.map_layer = None if self.map_layer == layer else layer
        return self.map_layer

    def summary(self) -> dict[str, Any]:
        return {"map_layer": self.map_layer}


# ----------------------------------------------------------------------
# List pages
# ----------------------------------------------------------------------


def _facet_values(enum_cls: type[FleetEnum]) -> frozenset[str]:
    return frozenset(m.value for m in enum_cls if m.name != "UNKNOWN")


class ListPage(PageComposer):
    """A searchable, filterable list of one resource, plus optional side regions.

    ``facets`` maps a record field to its allowed values; ``None`` accepts
    any value (e.g. a vehicle id).
    """

    resource: ClassVar[Resource]
    list_name: ClassVar[str] = "list"
    empty_key: ClassVar[str] = "empty.generic"
    search_fields: ClassVar[tuple[str, ...]] = ()
    facets: ClassVar[Mapping[str, frozenset[str] | None]] = {}
    placeholders: ClassVar[int] = 3

    def __init__(self, context: PageContext) -> None:
        self.search_query = ""
        self.filters: dict[str, str] = {name: c.FILTER_ALL for name in self.facets}
        super().__init__(context)

    @property
    def is_filtered(self) -> bool:
        return bool(self.search_query.strip()) or any(v != c.FILTER_ALL for v in self.filters.values())

    def set_search(self, query: str) -> None:
        self.search_query = query

    def set_filter(self, facet: str, value: str) -> None:
        if facet not in self.facets:
            raise FleetDashError(f"{self!r} has no {facet!r} filter")
        allowed = self.facets[facet]
        if value != c.FILTER_ALL and allowed is not None and value not in allowed:
            raise FleetDashError(f"Invalid value {value!r} for filter {facet!r}")
        self.filters[facet] = value

    def clear_filters(self) -> None:
        self.search_query = ""
        self.filters = {name: c.FILTER_ALL for name in self.facets}

    def filtered(self, records: Sequence[Any] | None) -> tuple[Any, ...]:
        return derive.filter_records(
            records, query=self.search_query, search_fields=self.search_fields, facets=self.filters
        )

    def _present(self, record: Any) -> Any:
        return record

    def _empty_text(self) -> str:
        return self._context.text("empty.filtered" if self.is_filtered else self.empty_key)

    def _main_widget(self) -> Widget:
        return self._list_widget(
            self.list_name,
            self.resource,
            self.filtered,
            title_key=self.title_key,
            empty_key=self._empty_text,
            placeholders=self.placeholders,
            present=self._present,
        )

    def _side_regions(self) -> dict[str, tuple[Widget, ...]]:
        return {}

    def _build_regions(self) -> dict[str, tuple[Widget, ...]]:
        return {"list": (self._main_widget(),), **self._side_regions()}


class FleetPage(ListPage):
    path = "/fleet"
    title_key = "nav.fleet"
    resource = VEHICLES
    list_name = "vehicles"
    empty_key = "empty.vehicles"
    search_fields = ("plate", "driver_name")
    facets = {"status": _facet_values(VehicleStatus)}
    placeholders = 6

    def _present(self, record: Any) -> Any:
        return derive.vehicle_card(record)


class RoutesPage(ListPage):
    path = "/routes"
    title_key = "nav.routes"
    resource = ROUTES
    list_name = "routes"
    empty_key = "empty.routes"
    search_fields = ("name",)
    facets = {"status": _facet_values(RouteStatus)}

    def _side_regions(self) -> dict[str, tuple[Widget, ...]]:
        pending = self._list_widget(
            "pending_orders",
            ORDERS,
            derive.pending_orders,
            title_key="title.pending_orders",
            empty_key="empty.pending_orders",
        )
        return {"pending_orders": (pending,)}


class OrdersPage(ListPage):
    path = "/orders"
    title_key = "nav.orders"
    resource = ORDERS
    list_name = "orders"
    empty_key = "empty.orders"
    search_fields = ("client_name", "pickup_address", "delivery_address")
    facets = {"status": _facet_values(OrderStatus)}


class ClientsPage(ListPage):
    path = "/clients"
    title_key = "nav.clients"
    resource = CLIENTS
    list_name = "clients"
    empty_key = "empty.clients"
    search_fields = ("name", "address", "email")
    facets = {"client_type": _facet_values(ClientType), "priority": _facet_values(ClientPriority)}


class InventoryPage(ListPage):
    path = "/inventory"
    title_key = "nav.inventory"
    resource = INVENTORY
    list_name = "inventory"
    empty_key = "empty.inventory"
    search_fields = ("item_name", "sku")
    facets = {"category": _facet_values(InventoryCategory)}

    def _side_regions(self) -> dict[str, tuple[Widget, ...]]:
        low = self._list_widget(
            "low_stock",
            INVENTORY,
            derive.low_stock_items,
            title_key="title.low_stock",
            empty_key="empty.low_stock",
        )
        return {"low_stock": (low,)}


class DriversPage(ListPage):
    path = "/drivers"
    title_key = "nav.drivers"
    resource = DRIVERS
    list_name = "drivers"
    empty_key = "empty.drivers"
    search_fields = ("name", "license_number")
    facets = {"status": _facet_values(DriverStatus)}

    def _side_regions(self) -> dict[str, tuple[Widget, ...]]:
        ctx = self._context
        expiring = self._list_widget(
            "expiring_licenses",
            DRIVERS,
            lambda data: derive.expiring_licenses(
                data, ctx.today(), warning_days=ctx.config.license_expiry_warning_days
            ),
            title_key="title.expiring_licenses",
            empty_key="empty.expiring_licenses",
        )
        return {"expiring_licenses": (expiring,)}


class MaintenancePage(ListPage):
    path = "/maintenance"
    title_key = "nav.maintenance"
    resource = MAINTENANCE
    list_name = "maintenance"
    empty_key = "empty.maintenance"
    search_fields = ("description",)
    facets = {"status": _facet_values(MaintenanceStatus)}


class FuelPage(ListPage):
    path = "/fuel"
    title_key = "nav.fuel"
    resource = FUEL
    list_name = "fuel"
    empty_key = "empty.fuel"
    search_fields = ("fuel_station", "receipt_number")
    facets = {"vehicle_id": None}

    def summary(self) -> dict[str, Any]:
        return {"fuel": derive.fuel_summary(self._data(self.list_name))}


class SuppliersPage(ListPage):
    path = "/suppliers"
    title_key = "nav.suppliers"
    resource = SUPPLIERS
    list_name = "suppliers"
    empty_key = "empty.suppliers"
    search_fields = ("name", "contact_person")
    facets = {"type": _facet_values(SupplierType)}


class FinancesPage(ListPage):
    """Expenses and approvals share one search box; the type filter applies to expenses."""

    path = "/finances"
    title_key = "nav.finances"
    resource = EXPENSES
    list_name = "expenses"
    empty_key = "empty.expenses"
    search_fields = ("description",)
    facets = {"type": _facet_values(ExpenseType)}

    def _side_regions(self) -> dict[str, tuple[Widget, ...]]:
        approvals = self._list_widget(
            "approvals",
            APPROVALS,
            lambda data: derive.filter_records(data, query=self.search_query, search_fields=self.search_fields),
            title_key="title.approvals",
            empty_key=lambda: self._context.text("empty.filtered" if self.search_query.strip() else "empty.approvals"),
        )
        return {"approvals": (approvals,)}

    def summary(self) -> dict[str, Any]:
        return {
            "finance": derive.finance_summary(
                self._data("expenses"), self._data("approvals"), self._context.today()
            ),
        }


# ----------------------------------------------------------------------
# Reports and fallback
# ----------------------------------------------------------------------


class ReportsPage(PageComposer):
    path = "/reports"
    title_key = "nav.reports"

    def _build_regions(self) -> dict[str, tuple[Widget, ...]]:
        lang = self._context.language
        metrics = self._list_widget(
            "metrics",
            DASHBOARD_METRICS,
            lambda data: derive.metric_summary(data, language=lang),
            title_key="title.metrics",
            empty_key="empty.generic",
            placeholders=4,
            item_key=lambda tile: tile.key,
        )
        performance = self._list_widget(
            "fleet_performance",
            VEHICLES,
            lambda data: (derive.fleet_performance(data),),
            title_key="title.fleet_performance",
            empty_key="empty.generic",
            placeholders=1,
            item_key=lambda _: "fleet-performance",
        )
        delivered = self._list_widget(
            "delivered_orders",
            ORDERS,
            lambda data: derive.filter_records(data, facets={"status": OrderStatus.DELIVERED.value}),
            title_key="kpi.completed_orders",
            empty_key="empty.orders",
        )
        return {"metrics": (metrics,), "performance": (performance, delivered)}

    def summary(self) -> dict[str, Any]:
        return {
            "kpis": derive.report_summary(
                self._data("fleet_performance"), self._data("delivered_orders"), language=self._context.language
            )
        }

    def generate_report(self, report_type: str) -> derive.GeneratedReport:
        report = derive.generate_report(report_type, self._context.now(), language=self._context.language)
        _logger.info("Generated report %s", report.filename)
        return report


class NotFoundPage(PageComposer):
    """Terminal page for unmatched paths; mounts nothing."""

    title_key = "page.not_found"

    def __init__(self, context: PageContext, path: str = "") -> None:
        super().__init__(context)
        self.requested_path = path

    def render(self) -> PageView:
        return PageView(
            path=self.requested_path,
            title=self.title,
            regions=(),
            mobile_menu_open=self.mobile_menu_open,
            message=self._context.text("page.not_found_body"),
        )
