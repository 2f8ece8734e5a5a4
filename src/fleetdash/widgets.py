"""Data-bound widgets.

A widget is one resource key, one derivation and one :class:`ListView`.
Widgets never read each other's state; every widget owns its own
:class:`~fleetdash.fetch.ResourceFetch` for as long as it is mounted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

from fleetdash._cache import QueryCache
from fleetdash.api import FleetApi
from fleetdash.config import DashboardConfig
from fleetdash.exceptions import FleetDashError, FleetTransportError
from fleetdash.fetch import FetchState, ResourceFetch
from fleetdash.messages import message
from fleetdash.notifications import NotificationCenter
from fleetdash.resources import ResourceKey
from fleetdash.views.components import ListView, Rendered

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class PageContext:
    """Collaborators shared by every page and widget of one dashboard."""

    api: FleetApi
    notifications: NotificationCenter
    config: DashboardConfig = field(default_factory=DashboardConfig)
    clock: Callable[[], datetime] = _utcnow

    @property
    def cache(self) -> QueryCache:
        return self.api.cache

    @property
    def language(self) -> str:
        return self.config.language

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        return self.clock().date()

    def text(self, key: str, /, **params: Any) -> str:
        return message(key, self.config.language, **params)

    def report_error(self, key: ResourceKey, error: FleetTransportError) -> None:
        """Surface a failed fetch as a toast."""
        self.notifications.error(self.text("toast.error"), self.text("toast.fetch_failed", key=key))


Derivation = Callable[[Any], Sequence[Any]]


class Widget:
    """One resource key rendered through one derivation and one list view."""

    def __init__(self, name: str, key: ResourceKey, view: ListView, derive: Derivation) -> None:
        self.name = name
        self.key = key
        self.view = view
        self._derive = derive
        self._fetch: ResourceFetch | None = None

    def __repr__(self) -> str:
        return f"Widget({self.name!r}, {self.key!r})"

    @property
    def is_mounted(self) -> bool:
        return self._fetch is not None and self._fetch.is_mounted

    @property
    def state(self) -> FetchState:
        if self._fetch is None:
            return FetchState.loading()
        return self._fetch.state

    def mount(
        self,
        context: PageContext,
        *,
        on_change: Callable[[Widget, FetchState], None] | None = None,
    ) -> FetchState:
        """Start this widget's fetch; returns without waiting for it."""
        if self._fetch is not None and self._fetch.is_mounted:
            raise FleetDashError(f"{self!r} is already mounted")

        def _changed(state: FetchState) -> None:
            if on_change is not None:
                on_change(self, state)

        self._fetch = ResourceFetch(
            self.key,
            loader=context.api.query,
            cache=context.cache,
            on_change=_changed,
            on_error=context.report_error,
        )
        return self._fetch.mount()

    def unmount(self) -> None:
        if self._fetch is not None:
            self._fetch.unmount()
            self._fetch = None

    def refetch(self) -> FetchState:
        if self._fetch is None:
            raise FleetDashError(f"{self!r} is not mounted")
        return self._fetch.refetch()

    async def wait(self) -> FetchState:
        if self._fetch is None:
            return self.state
        return await self._fetch.wait()

    def derived(self) -> Sequence[Any]:
        """The derivation of the current data; failures derive from ``None``."""
        state = self.state
        return self._derive(state.data if state.is_ready else None)

    def render(self) -> Rendered:
        state = self.state
        if state.is_loading:
            return self.view.render(state, ())
        return self.view.render(state, self.derived())
