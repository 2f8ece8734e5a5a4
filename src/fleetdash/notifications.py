"""User-visible notifications (toasts).

Failed fetches and mutation outcomes are surfaced here rather than by the
widgets themselves. Front ends subscribe to display them.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

_logger = logging.getLogger(__name__)


class ToastVariant(StrEnum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True, slots=True)
class Toast:
    title: str
    description: str = ""
    variant: ToastVariant = ToastVariant.DEFAULT
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


ToastListener = Callable[[Toast], None]


class NotificationCenter:
    """Keeps the most recent toasts and fans them out to listeners."""

    def __init__(self, *, history: int = 50) -> None:
        self._toasts: deque[Toast] = deque(maxlen=history or None)
        self._listeners: list[ToastListener] = []

    @property
    def toasts(self) -> tuple[Toast, ...]:
        return tuple(self._toasts)

    def subscribe(self, listener: ToastListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def toast(
        self,
        title: str,
        description: str = "",
        *,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> Toast:
        item = Toast(title=title, description=description, variant=variant)
        self._toasts.append(item)
        for listener in list(self._listeners):
            try:
                listener(item)
            except Exception:
                # A broken display must not break the data flow that raised the toast.
                _logger.exception("Toast listener failed")
        return item

    def error(self, title: str, description: str = "") -> Toast:
        return self.toast(title, description, variant=ToastVariant.DESTRUCTIVE)

    def clear(self) -> None:
        self._toasts.clear()
