"""Resource fetch hook.

A :class:`ResourceFetch` binds one resource key to one mounted widget. It
never blocks the caller: :meth:`ResourceFetch.mount` returns the current
:class:`FetchState` immediately and the request completes on the event
loop, after which ``on_change`` fires.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from fleetdash._cache import QueryCache
from fleetdash.exceptions import FleetDashError, FleetDecodeError, FleetTransportError

_logger = logging.getLogger(__name__)

Loader = Callable[[str], Awaitable[Any]]
ErrorReporter = Callable[[str, FleetTransportError], None]


class FetchStatus(StrEnum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class FetchState:
    """Tagged state of one request: Loading, Error(error) or Ready(data)."""

    status: FetchStatus
    data: Any = None
    error: FleetTransportError | None = None

    @classmethod
    def loading(cls) -> FetchState:
        return cls(FetchStatus.LOADING)

    @classmethod
    def ready(cls, data: Any) -> FetchState:
        return cls(FetchStatus.READY, data=data)

    @classmethod
    def failed(cls, error: FleetTransportError) -> FetchState:
        return cls(FetchStatus.ERROR, error=error)

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is FetchStatus.ERROR

    @property
    def is_ready(self) -> bool:
        return self.status is FetchStatus.READY


class ResourceFetch:
    """Fetch state for one resource key over one mount.

    Parameters
    ----------
    key : str
        Resource key; fixed for the lifetime of the instance.
    loader : callable
        ``async loader(key)`` returning validated data (typically
        :meth:`fleetdash.api.FleetApi.query`).
    cache : QueryCache
        Shared cache used to reuse and deduplicate requests. Invalidating
        the key while mounted starts a new request.
    on_change : callable, optional
        Called with the new state after every transition while mounted.
    on_error : callable, optional
        Called with ``(key, error)`` when a request fails, e.g. to show a
        toast. Failures are not retried.
    """

    def __init__(
        self,
        key: str,
        *,
        loader: Loader,
        cache: QueryCache,
        on_change: Callable[[FetchState], None] | None = None,
        on_error: ErrorReporter | None = None,
    ) -> None:
        if not key:
            raise FleetDashError("Resource key must be non-empty")
        self._key = key
        self._loader = loader
        self._cache = cache
        self._on_change = on_change
        self._on_error = on_error
        self._state = FetchState.loading()
        self._task: asyncio.Task[None] | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._mounted = False
        self._request_id = 0

    @property
    def key(self) -> str:
        return self._key

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> FetchState:
        """Start observing the key and return the state to render right now.

        Must be called from a running event loop.
        """
        if self._mounted:
            return self._state
        self._mounted = True
        self._unsubscribe = self._cache.subscribe(self._key, self._on_invalidated)

        cached = self._cache.peek(self._key)
        if cached is not None:
            self._state = FetchState.ready(cached.data)
        else:
            self._start_request()
        return self._state

    def unmount(self) -> None:
        """Stop observing; any in-flight completion is discarded."""
        if not self._mounted:
            return
        self._mounted = False
        self._request_id += 1
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def refetch(self) -> FetchState:
        """Start a new request for the key (new Loading state)."""
        if not self._mounted:
            raise FleetDashError(f"Cannot refetch {self._key}: not mounted")
        self._start_request()
        return self._state

    async def wait(self) -> FetchState:
        """Wait for the current request (if any) and return the resulting state."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})
        return self._state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_invalidated(self, _key: str) -> None:
        if self._mounted:
            _logger.debug("Refetching %s after invalidation", self._key)
            self._start_request()

    def _start_request(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._request_id += 1
        self._set_state(FetchState.loading())
        self._task = asyncio.get_running_loop().create_task(self._run(self._request_id))

    async def _run(self, request_id: int) -> None:
        try:
            data = await self._cache.fetch(self._key, lambda: self._loader(self._key))
        except FleetTransportError as exc:
            self._fail(request_id, exc)
            return
        except Exception as exc:
            # Any other loader failure still ends the request in Error.
            error = FleetDecodeError(f"Could not load {self._key}: {exc!r}", endpoint=self._key)
            error.__cause__ = exc
            self._fail(request_id, error)
            return
        if self._is_current(request_id):
            self._set_state(FetchState.ready(data))

    def _fail(self, request_id: int, exc: FleetTransportError) -> None:
        if not self._is_current(request_id):
            return
        _logger.warning("Fetching %s failed: %s", self._key, exc, exc_info=exc)
        self._set_state(FetchState.failed(exc))
        if self._on_error is not None:
            self._on_error(self._key, exc)

    def _is_current(self, request_id: int) -> bool:
        return self._mounted and request_id == self._request_id

    def _set_state(self, state: FetchState) -> None:
        previous = self._state
        if previous.status is not FetchStatus.LOADING and not state.is_loading:
            raise FleetDashError(f"Invalid fetch transition {previous.status} -> {state.status} for {self._key}")
        self._state = state
        if self._mounted and self._on_change is not None and state != previous:
            self._on_change(state)
