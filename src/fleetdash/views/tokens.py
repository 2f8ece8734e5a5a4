"""Style tokens and icons.

Presentation is dispatched through enumerations instead of free-form class
strings. :data:`STYLE_CLASSES` is the only place tokens become CSS classes.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Final

from fleetdash.models import AlertSeverity, AlertType, VehicleStatus

# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class StyleToken(StrEnum):
    """Dashboard palette."""

    AGRO_PRIMARY = "agro-primary"
    LOGISTICS_BLUE = "logistics-blue"
    WARNING_AMBER = "warning-amber"
    SUCCESS_GREEN = "success-green"
    ALERT_RED = "alert-red"
    NEUTRAL = "gray-400"


class Icon(StrEnum):
    TRUCK = "truck"
    PACKAGE = "package"
    CLOCK = "clock"
    TRENDING_UP = "trending-up"
    TRENDING_DOWN = "trending-down"
    THERMOMETER = "thermometer"
    ALERT_TRIANGLE = "alert-triangle"
    ARROW_RIGHT = "arrow-right"


class TrendDirection(StrEnum):
    UP = "up"
    DOWN = "down"


# ------------------------------------------------------------------
# Lookup tables
# ------------------------------------------------------------------

STYLE_CLASSES: Final = MappingProxyType(
    {
        StyleToken.AGRO_PRIMARY: ("text-agro-primary", "bg-agro-primary"),
        StyleToken.LOGISTICS_BLUE: ("text-logistics-blue", "bg-logistics-blue"),
        StyleToken.WARNING_AMBER: ("text-warning-amber", "bg-warning-amber"),
        StyleToken.SUCCESS_GREEN: ("text-success-green", "bg-success-green"),
        StyleToken.ALERT_RED: ("text-alert-red", "bg-alert-red"),
        StyleToken.NEUTRAL: ("text-gray-400", "bg-gray-400"),
    }
)
"""Token -> (text class, background class)."""

_MARKER_TOKENS: Final = MappingProxyType(
    {
        VehicleStatus.ACTIVE: StyleToken.SUCCESS_GREEN,
        VehicleStatus.WARNING: StyleToken.WARNING_AMBER,
    }
)

_SEVERITY_TOKENS: Final = MappingProxyType(
    {
        AlertSeverity.CRITICAL: StyleToken.ALERT_RED,
        AlertSeverity.HIGH: StyleToken.ALERT_RED,
    }
)

_ALERT_ICONS: Final = MappingProxyType(
    {
        AlertType.DELAY: Icon.CLOCK,
        AlertType.TEMPERATURE: Icon.THERMOMETER,
    }
)

TREND_TOKENS: Final = MappingProxyType(
    {
        TrendDirection.UP: (Icon.TRENDING_UP, StyleToken.SUCCESS_GREEN),
        TrendDirection.DOWN: (Icon.TRENDING_DOWN, StyleToken.ALERT_RED),
    }
)


def text_class(token: StyleToken) -> str:
    return STYLE_CLASSES[token][0]


def bg_class(token: StyleToken) -> str:
    return STYLE_CLASSES[token][1]


def marker_token(status: VehicleStatus) -> StyleToken:
    """Map marker color; anything but active/warning is neutral."""
    return _MARKER_TOKENS.get(status, StyleToken.NEUTRAL)


def severity_token(severity: AlertSeverity) -> StyleToken:
    return _SEVERITY_TOKENS.get(severity, StyleToken.WARNING_AMBER)


def alert_icon(alert_type: AlertType) -> Icon:
    return _ALERT_ICONS.get(alert_type, Icon.ALERT_TRIANGLE)
