"""High-level async entry point wiring the dashboard together."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import aiohttp

from fleetdash._cache import QueryCache
from fleetdash._transport import HttpTransport, Transport
from fleetdash.api import FleetApi
from fleetdash.config import DashboardConfig
from fleetdash.exceptions import FleetDashError
from fleetdash.notifications import NotificationCenter
from fleetdash.pages import PageComposer, PageListener, PageView
from fleetdash.router import NavItem, RouteDispatcher, navigation_items
from fleetdash.widgets import PageContext

_logger = logging.getLogger(__name__)


class FleetDashboard:
    """Async dashboard client.

    Usage::

        async with FleetDashboard(DashboardConfig.from_env()) as dash:
            page = dash.navigate("/fleet")
            await page.wait_until_settled()
            view = dash.render()

    A custom *transport* replaces HTTP entirely (no aiohttp session is
    opened); otherwise an external *session* may be supplied and is left
    open on exit.
    """

    def __init__(
        self,
        config: DashboardConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        clock: Callable[[], datetime] | None = None,
        on_change: PageListener | None = None,
    ) -> None:
        self._config = config or DashboardConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._owns_transport = transport is None
        self._clock = clock
        self._on_change = on_change
        self._notifications = NotificationCenter(history=self._config.notification_history)
        self._cache = QueryCache(stale_time=self._config.stale_time)
        self._api: FleetApi | None = None
        self._context: PageContext | None = None
        self._dispatcher: RouteDispatcher | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FleetDashboard:
        if self._owns_transport:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        assert self._transport is not None  # noqa: S101

        self._api = FleetApi(
            self._transport,
            self._cache,
            notifications=self._notifications,
            language=self._config.language,
        )
        context_kwargs: dict[str, Any] = {"config": self._config}
        if self._clock is not None:
            context_kwargs["clock"] = self._clock
        self._context = PageContext(self._api, self._notifications, **context_kwargs)
        self._dispatcher = RouteDispatcher(self._context, on_change=self._on_change)
        _logger.debug("Dashboard opened against %s", self._config.base_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._dispatcher is not None:
            self._dispatcher.close()
            self._dispatcher = None
        self._cache.clear()
        if self._owns_transport:
            self._transport = None
            if not self._external_session and self._http_session is not None:
                await self._http_session.close()
                self._http_session = None
        self._api = None
        self._context = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> DashboardConfig:
        return self._config

    @property
    def cache(self) -> QueryCache:
        return self._cache

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    @property
    def api(self) -> FleetApi:
        if self._api is None:
            raise FleetDashError("Dashboard not opened; use 'async with FleetDashboard(...)'")
        return self._api

    @property
    def current_page(self) -> PageComposer | None:
        return self._dispatcher.current_page if self._dispatcher is not None else None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, path: str) -> PageComposer:
        return self._require_dispatcher().navigate(path)

    def render(self) -> PageView:
        return self._require_dispatcher().render()

    def navigation(self) -> tuple[NavItem, ...]:
        page = self.current_page
        return navigation_items(self._require_context(), page.path if page is not None else None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_dispatcher(self) -> RouteDispatcher:
        if self._dispatcher is None:
            raise FleetDashError("Dashboard not opened; use 'async with FleetDashboard(...)'")
        return self._dispatcher

    def _require_context(self) -> PageContext:
        if self._context is None:
            raise FleetDashError("Dashboard not opened; use 'async with FleetDashboard(...)'")
        return self._context
