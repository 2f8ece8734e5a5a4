"""List/card rendering.

A :class:`ListView` turns a fetch state and its derived view into one of
three render states: loading placeholders, an empty message, or one item per
element keyed by the element's identifier.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from fleetdash.exceptions import FleetDashError
from fleetdash.fetch import FetchState

_logger = logging.getLogger(__name__)


class RenderState(StrEnum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True, slots=True)
class RenderedItem:
    key: str
    view: Any


@dataclass(frozen=True, slots=True)
class Rendered:
    """Output of one widget render pass."""

    title: str
    state: RenderState
    placeholders: int = 0
    items: tuple[RenderedItem, ...] = ()
    message: str = ""

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(item.key for item in self.items)


def _default_key(element: Any) -> str:
    return str(element.id)


class ListView:
    """Renders a sequence-shaped view.

    Parameters
    ----------
    title : str
        Widget heading.
    placeholder_count : int
        Skeleton blocks shown while loading.
    empty_message : str or callable
        Localized text for an empty view; a callable is evaluated on each
        render (e.g. to pick the filtered variant).
    item_key : callable, optional
        Unique identifier of an element; defaults to ``element.id``.
    present : callable, optional
        Maps an element to what is displayed for it.
    """

    def __init__(
        self,
        title: str,
        *,
        placeholder_count: int,
        empty_message: str | Callable[[], str],
        item_key: Callable[[Any], str] = _default_key,
        present: Callable[[Any], Any] | None = None,
    ) -> None:
        if placeholder_count < 0:
            raise FleetDashError("placeholder_count must not be negative")
        self.title = title
        self.placeholder_count = placeholder_count
        self._empty_message = empty_message
        self._item_key = item_key
        self._present = present

    @property
    def empty_message(self) -> str:
        if callable(self._empty_message):
            return self._empty_message()
        return self._empty_message

    def render(self, state: FetchState, view: Sequence[Any]) -> Rendered:
        """Render *view*, the derivation of *state*.

        Error states render like an empty result; the failure itself is
        reported through notifications, not here.
        """
        if state.is_loading:
            return Rendered(self.title, RenderState.LOADING, placeholders=self.placeholder_count)
        if not view:
            return Rendered(self.title, RenderState.EMPTY, message=self.empty_message)

        items: list[RenderedItem] = []
        seen: set[str] = set()
        for element in view:
            key = self._item_key(element)
            if key in seen:
                _logger.warning("Duplicate item key %r in %s", key, self.title)
            seen.add(key)
            items.append(RenderedItem(key, self._present(element) if self._present else element))
        return Rendered(self.title, RenderState.POPULATED, items=tuple(items))
