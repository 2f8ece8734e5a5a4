"""Client configuration for fleetdash."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from fleetdash import _constants as c
from fleetdash.exceptions import FleetConfigError

SUPPORTED_LANGUAGES: frozenset[str] = frozenset({"es", "en"})


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_optional_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise FleetConfigError(f"Expected a number, got {value!r}") from exc
    return parsed if parsed > 0 else None


@dataclasses.dataclass(frozen=True)
class DashboardConfig:
    """Dashboard client configuration.

    Parameters
    ----------
    base_url : str
        REST API base URL. Resource keys (``/api/...``) are appended to it.
    language : str
        Language of user-visible messages (``"es"`` or ``"en"``).
    request_timeout : float or None
        Total per-request timeout in seconds. ``None`` disables the timeout,
        so a hung request keeps its widget loading.
    stale_time : float or None
        Seconds a cached collection stays fresh. ``None`` keeps entries
        until they are explicitly invalidated.
    featured_vehicle_limit : int
        Maximum number of featured vehicles on the dashboard.
    priority_alert_limit : int
        Maximum number of priority alerts on the dashboard.
    critical_delivery_limit : int
        Maximum number of critical deliveries on the dashboard.
    critical_delivery_window_minutes : int
        Look-ahead window for critical deliveries.
    license_expiry_warning_days : int
        Driver licenses expiring within this many days are flagged.
    notification_history : int
        Number of toasts kept by the notification center.
    api_trace_enabled : bool
        Log redacted request and response bodies at DEBUG level.
    """

    base_url: str = c.BASE_URL
    language: str = "es"
    request_timeout: float | None = None
    stale_time: float | None = None
    featured_vehicle_limit: int = 2
    priority_alert_limit: int = 3
    critical_delivery_limit: int = 3
    critical_delivery_window_minutes: int = 120
    license_expiry_warning_days: int = 30
    notification_history: int = 50
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url:
            raise FleetConfigError("base_url must be non-empty")
        if self.language not in SUPPORTED_LANGUAGES:
            raise FleetConfigError(f"Unsupported language {self.language!r}")
        for name in (
            "featured_vehicle_limit",
            "priority_alert_limit",
            "critical_delivery_limit",
            "critical_delivery_window_minutes",
            "license_expiry_warning_days",
            "notification_history",
        ):
            if getattr(self, name) < 0:
                raise FleetConfigError(f"{name} must not be negative")
        # Normalise so resource keys can be appended verbatim.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> DashboardConfig:
        """Create configuration from ``FLEETDASH_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "FLEETDASH_API_URL": "base_url",
            "FLEETDASH_LANGUAGE": "language",
        }
        _ENV_INT_MAP = {
            "FLEETDASH_FEATURED_VEHICLE_LIMIT": "featured_vehicle_limit",
            "FLEETDASH_PRIORITY_ALERT_LIMIT": "priority_alert_limit",
            "FLEETDASH_CRITICAL_DELIVERY_LIMIT": "critical_delivery_limit",
            "FLEETDASH_CRITICAL_DELIVERY_WINDOW": "critical_delivery_window_minutes",
            "FLEETDASH_LICENSE_EXPIRY_DAYS": "license_expiry_warning_days",
            "FLEETDASH_NOTIFICATION_HISTORY": "notification_history",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.strip()

        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = int(val)
            except ValueError as exc:
                raise FleetConfigError(f"{env_key} must be an integer, got {val!r}") from exc

        if "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_optional_float(env.get("FLEETDASH_REQUEST_TIMEOUT"))
        if "stale_time" not in overrides:
            config_kwargs["stale_time"] = _env_optional_float(env.get("FLEETDASH_STALE_TIME"))
        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("FLEETDASH_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
