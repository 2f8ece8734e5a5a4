"""Route dispatcher: one URL path -> exactly one mounted page."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from urllib.parse import urlsplit

from fleetdash.exceptions import FleetDashError
from fleetdash.pages import (
    ClientsPage,
    DashboardPage,
    DriversPage,
    FinancesPage,
    FleetPage,
    FuelPage,
    InventoryPage,
    MaintenancePage,
    NotFoundPage,
    OrdersPage,
    PageComposer,
    PageListener,
    PageView,
    ReportsPage,
    RoutesPage,
    SuppliersPage,
)
from fleetdash.widgets import PageContext

_logger = logging.getLogger(__name__)

PageFactory = Callable[[PageContext], PageComposer]

DEFAULT_ROUTES: tuple[tuple[str, PageFactory], ...] = (
    ("/", DashboardPage),
    ("/fleet", FleetPage),
    ("/routes", RoutesPage),
    ("/orders", OrdersPage),
    ("/clients", ClientsPage),
    ("/inventory", InventoryPage),
    ("/drivers", DriversPage),
    ("/maintenance", MaintenancePage),
    ("/fuel", FuelPage),
    ("/suppliers", SuppliersPage),
    ("/finances", FinancesPage),
    ("/reports", ReportsPage),
)

# (path, label key, icon name) in sidebar order.
NAVIGATION: tuple[tuple[str, str, str], ...] = (
    ("/", "nav.dashboard", "layout-dashboard"),
    ("/fleet", "nav.fleet", "truck"),
    ("/routes", "nav.routes", "route"),
    ("/orders", "nav.orders", "package"),
    ("/clients", "nav.clients", "users"),
    ("/inventory", "nav.inventory", "package-2"),
    ("/drivers", "nav.drivers", "user-check"),
    ("/maintenance", "nav.maintenance", "wrench"),
    ("/fuel", "nav.fuel", "fuel"),
    ("/suppliers", "nav.suppliers", "building"),
    ("/finances", "nav.finances", "dollar-sign"),
    ("/reports", "nav.reports", "bar-chart-3"),
)


@dataclass(frozen=True, slots=True)
class NavItem:
    path: str
    label: str
    icon: str
    active: bool = False


def navigation_items(context: PageContext, current_path: str | None = None) -> tuple[NavItem, ...]:
    return tuple(
        NavItem(path=path, label=context.text(label_key), icon=icon, active=path == current_path)
        for path, label_key, icon in NAVIGATION
    )


def normalize_path(location: str) -> str:
    """Strip query string and fragment; an empty path is ``/``."""
    return urlsplit(location).path or "/"


class RouteDispatcher:
    """Ordered ``(path, page factory)`` table; the first exact match wins.

    Exactly one page is mounted at a time. Unmatched paths mount a
    :class:`NotFoundPage`.
    """

    def __init__(
        self,
        context: PageContext,
        routes: Iterable[tuple[str, PageFactory]] = DEFAULT_ROUTES,
        *,
        on_change: PageListener | None = None,
    ) -> None:
        self._context = context
        self._routes: list[tuple[str, PageFactory]] = []
        self._on_change = on_change
        self._current: PageComposer | None = None
        for path, factory in routes:
            self.add(path, factory)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(path for path, _ in self._routes)

    @property
    def current_page(self) -> PageComposer | None:
        return self._current

    def add(self, path: str, factory: PageFactory) -> None:
        if not path.startswith("/"):
            raise FleetDashError(f"Route path must start with '/': {path!r}")
        if path in self.paths:
            raise FleetDashError(f"Duplicate route path: {path!r}")
        self._routes.append((path, factory))

    def resolve(self, location: str) -> PageFactory | None:
        path = normalize_path(location)
        for candidate, factory in self._routes:
            if candidate == path:
                return factory
        return None

    def navigate(self, location: str) -> PageComposer:
        """Unmount the current page and mount the one for *location*."""
        path = normalize_path(location)
        factory = self.resolve(path)
        if factory is None:
            _logger.info("No route for %s", path)
            page: PageComposer = NotFoundPage(self._context, path)
        else:
            page = factory(self._context)

        previous, self._current = self._current, None
        if previous is not None:
            previous.unmount()
        page.mount(self._on_change)
        self._current = page
        _logger.debug("Navigated to %s (%r)", path, page)
        return page

    def render(self) -> PageView:
        if self._current is None:
            raise FleetDashError("No page mounted; call navigate() first")
        return self._current.render()

    def close(self) -> None:
        if self._current is not None:
            self._current.unmount()
            self._current = None
