"""View derivations.

Pure functions from fetched records to what a widget displays. None of them
mutate their input, and each accepts ``None`` (no data, or a failed fetch)
and returns its empty form. Anything time-dependent takes ``now`` or
``today`` explicitly.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import StrEnum
from typing import Any, TypeVar

from fleetdash import _constants as c
from fleetdash.messages import message
from fleetdash.models import (
    Alert,
    Approval,
    ApprovalStatus,
    DashboardMetrics,
    Driver,
    Expense,
    FleetRecord,
    FuelLog,
    InventoryItem,
    Order,
    OrderProduct,
    OrderStatus,
    Vehicle,
    VehicleStatus,
)
from fleetdash.normalize import js_round
from fleetdash.views.tokens import Icon, StyleToken, TrendDirection, alert_icon, marker_token, severity_token

R = TypeVar("R", bound=FleetRecord)

_WHITESPACE_RE = re.compile(r"\s+")


def _number(value: float | None) -> int | float:
    """Missing -> 0; whole floats display without a decimal part."""
    if value is None:
        return 0
    if float(value).is_integer():
        return int(value)
    return value


# ------------------------------------------------------------------
# Dashboard: metric tiles
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MetricTile:
    key: str
    title: str
    value: int | float | str
    change: str
    trend: TrendDirection
    icon: Icon
    token: StyleToken


# (key, field, change, trend, icon, token); order is the display order.
_METRIC_TILES: tuple[tuple[str, str, str, TrendDirection, Icon, StyleToken], ...] = (
    ("active_vehicles", "active_vehicles", "+12%", TrendDirection.UP, Icon.TRUCK, StyleToken.AGRO_PRIMARY),
    ("daily_deliveries", "daily_deliveries", "+8%", TrendDirection.UP, Icon.PACKAGE, StyleToken.LOGISTICS_BLUE),
    ("pending_orders", "pending_orders", "-5%", TrendDirection.DOWN, Icon.CLOCK, StyleToken.WARNING_AMBER),
    ("compliance", "compliance", "+2.1%", TrendDirection.UP, Icon.TRENDING_UP, StyleToken.SUCCESS_GREEN),
)


def metric_summary(
    metrics: DashboardMetrics | Mapping[str, Any] | None,
    *,
    language: str = "es",
) -> tuple[MetricTile, ...]:
    """Four fixed tiles; every tile is present whatever the input holds.

    Missing counts show ``0`` and a missing compliance shows ``"0%"``.
    """
    if metrics is None:
        record = DashboardMetrics()
    elif isinstance(metrics, DashboardMetrics):
        record = metrics
    else:
        record = DashboardMetrics.model_validate(dict(metrics))

    tiles: list[MetricTile] = []
    for key, field_name, change, trend, icon, token in _METRIC_TILES:
        number = _number(getattr(record, field_name))
        value: int | float | str = f"{number}%" if key == "compliance" else number
        tiles.append(
            MetricTile(
                key=key,
                title=message(f"metric.{key}", language),
                value=value,
                change=change,
                trend=trend,
                icon=icon,
                token=token,
            )
        )
    return tuple(tiles)


# ------------------------------------------------------------------
# Vehicles
# ------------------------------------------------------------------


def featured_vehicles(vehicles: Sequence[Vehicle] | None, limit: int = 2) -> tuple[Vehicle, ...]:
    """Active or warning vehicles, in their original order, at most *limit*."""
    if not vehicles or limit <= 0:
        return ()
    featured = [v for v in vehicles if v.status.value in c.FEATURED_VEHICLE_STATUSES]
    return tuple(featured[:limit])


def capacity_percentage(vehicle: Vehicle) -> float:
    """Current load as a percentage of capacity (may exceed 100)."""
    capacity = vehicle.capacity or 0.0
    if capacity <= 0:
        return 0.0
    return (vehicle.current_load or 0.0) / capacity * 100


@dataclass(frozen=True, slots=True)
class VehicleCard:
    id: str
    plate: str
    driver_name: str | None
    status: VehicleStatus
    token: StyleToken
    load: str
    capacity_percentage: float
    over_capacity: bool
    fuel_level: float | None
    temperature: float | None


def vehicle_card(vehicle: Vehicle) -> VehicleCard:
    percentage = capacity_percentage(vehicle)
    return VehicleCard(
        id=vehicle.id,
        plate=vehicle.plate,
        driver_name=vehicle.driver_name,
        status=vehicle.status,
        token=marker_token(vehicle.status),
        load=f"{_number(vehicle.current_load)}/{_number(vehicle.capacity)} Ton",
        capacity_percentage=percentage,
        over_capacity=percentage > 100,
        fuel_level=vehicle.fuel_level,
        temperature=vehicle.temperature if vehicle.is_refrigerated else None,
    )


@dataclass(frozen=True, slots=True)
class MapMarker:
    id: str
    plate: str
    status: VehicleStatus
    token: StyleToken
    lat: float
    lng: float
    pulse: bool


def map_markers(vehicles: Sequence[Vehicle] | None) -> tuple[MapMarker, ...]:
    """One marker per vehicle with a known last location."""
    if not vehicles:
        return ()
    return tuple(
        MapMarker(
            id=v.id,
            plate=v.plate,
            status=v.status,
            token=marker_token(v.status),
            lat=v.last_location.lat,
            lng=v.last_location.lng,
            pulse=v.status is VehicleStatus.ACTIVE,
        )
        for v in vehicles
        if v.last_location is not None
    )


@dataclass(frozen=True, slots=True)
class FleetPerformance:
    total: int
    optimal: int
    warning: int
    critical: int
    optimal_percentage: int
    warning_percentage: int
    critical_percentage: int
    efficiency: int


def fleet_performance(vehicles: Sequence[Vehicle] | None) -> FleetPerformance:
    """Share of optimal (active), warning and critical (maintenance) vehicles.

    ``efficiency`` weighs warning vehicles at 0.6 of an optimal one.
    """
    vehicles = vehicles or ()
    total = len(vehicles)
    optimal = sum(1 for v in vehicles if v.status is VehicleStatus.ACTIVE)
    warning = sum(1 for v in vehicles if v.status is VehicleStatus.WARNING)
    critical = sum(1 for v in vehicles if v.status is VehicleStatus.MAINTENANCE)

    def pct(value: float) -> int:
        return js_round(value / total * 100) if total else 0

    return FleetPerformance(
        total=total,
        optimal=optimal,
        warning=warning,
        critical=critical,
        optimal_percentage=pct(optimal),
        warning_percentage=pct(warning),
        critical_percentage=pct(critical),
        efficiency=pct(optimal + c.WARNING_EFFICIENCY_WEIGHT * warning),
    )


# ------------------------------------------------------------------
# Alerts and deliveries
# ------------------------------------------------------------------


def format_time_ago(created_at: datetime | None, now: datetime, *, language: str = "es") -> str:
    if created_at is None:
        return message("time.just_now", language)
    minutes = max(0, math.floor((now - created_at).total_seconds() / 60))
    if minutes < 60:
        return message("time.minutes_ago", language, minutes=minutes)
    return message("time.hours_ago", language, hours=minutes // 60)


@dataclass(frozen=True, slots=True)
class AlertView:
    id: str
    title: str
    description: str
    time_ago: str
    icon: Icon
    token: StyleToken


def priority_alerts(
    alerts: Sequence[Alert] | None,
    now: datetime,
    *,
    limit: int = 3,
    language: str = "es",
) -> tuple[AlertView, ...]:
    """High and critical alerts, in their original order, at most *limit*."""
    if not alerts or limit <= 0:
        return ()
    selected = [a for a in alerts if a.severity.value in c.PRIORITY_ALERT_SEVERITIES][:limit]
    return tuple(
        AlertView(
            id=a.id,
            title=a.title,
            description=a.description,
            time_ago=format_time_ago(a.created_at, now, language=language),
            icon=alert_icon(a.type),
            token=severity_token(a.severity),
        )
        for a in selected
    )


def time_remaining(scheduled: datetime, now: datetime, *, language: str = "es") -> str:
    minutes = math.floor((scheduled - now).total_seconds() / 60)
    if minutes < 60:
        return message("time.remaining_minutes", language, minutes=minutes)
    return message("time.remaining_hours", language, hours=minutes // 60, minutes=minutes % 60)


def products_description(products: Sequence[OrderProduct], *, language: str = "es") -> str:
    if not products:
        return message("products.none", language)
    if len(products) == 1:
        return products[0].name
    return message("products.more", language, first=products[0].name, rest=len(products) - 1)


@dataclass(frozen=True, slots=True)
class DeliveryView:
    id: str
    client_name: str
    products: str
    time_remaining: str


def critical_deliveries(
    orders: Sequence[Order] | None,
    now: datetime,
    *,
    window: timedelta = timedelta(minutes=120),
    limit: int = 3,
    language: str = "es",
) -> tuple[DeliveryView, ...]:
    """In-transit orders due within ``(now, now + window]``, at most *limit*."""
    if not orders or limit <= 0:
        return ()
    deadline = now + window
    selected = [
        o
        for o in orders
        if o.status is OrderStatus.IN_TRANSIT
        and o.scheduled_delivery is not None
        and now < o.scheduled_delivery <= deadline
    ][:limit]
    return tuple(
        DeliveryView(
            id=o.id,
            client_name=o.client_name,
            products=products_description(o.products, language=language),
            # Narrowed by the filter above.
            time_remaining=time_remaining(o.scheduled_delivery, now, language=language),  # type: ignore[arg-type]
        )
        for o in selected
    )


def pending_orders(orders: Sequence[Order] | None) -> tuple[Order, ...]:
    if not orders:
        return ()
    return tuple(o for o in orders if o.status is OrderStatus.PENDING)


# ------------------------------------------------------------------
# List pages
# ------------------------------------------------------------------


def _field_text(record: FleetRecord, field_name: str) -> str:
    value = getattr(record, field_name, None)
    if value is None:
        return ""
    return str(value)


def filter_records(
    records: Sequence[R] | None,
    *,
    query: str = "",
    search_fields: Sequence[str] = (),
    facets: Mapping[str, str] | None = None,
) -> tuple[R, ...]:
    """Case-insensitive substring search plus exact-match facets.

    A record matches the query when any of *search_fields* contains it; an
    empty query matches everything. A facet set to ``"all"`` is ignored.
    """
    if not records:
        return ()
    needle = query.strip().lower()
    active = {k: v for k, v in (facets or {}).items() if v and v != c.FILTER_ALL}

    def matches(record: R) -> bool:
        if needle and not any(needle in _field_text(record, f).lower() for f in search_fields):
            return False
        return all(_field_text(record, k) == v for k, v in active.items())

    return tuple(r for r in records if matches(r))


class StockLevel(StrEnum):
    CRITICAL = "critical"
    LOW = "low"
    NORMAL = "normal"


_STOCK_TOKENS = {
    StockLevel.CRITICAL: StyleToken.ALERT_RED,
    StockLevel.LOW: StyleToken.WARNING_AMBER,
    StockLevel.NORMAL: StyleToken.SUCCESS_GREEN,
}


@dataclass(frozen=True, slots=True)
class StockStatus:
    level: StockLevel
    label: str
    token: StyleToken


def stock_status(item: InventoryItem, *, language: str = "es") -> StockStatus:
    if item.current_stock <= item.min_stock:
        level = StockLevel.CRITICAL
    elif item.current_stock <= item.min_stock * c.LOW_STOCK_FACTOR:
        level = StockLevel.LOW
    else:
        level = StockLevel.NORMAL
    return StockStatus(level=level, label=message(f"stock.{level}", language), token=_STOCK_TOKENS[level])


def stock_percentage(item: InventoryItem) -> float:
    return min(item.current_stock / max(item.max_stock, 1) * 100, 100.0)


def low_stock_items(items: Sequence[InventoryItem] | None) -> tuple[InventoryItem, ...]:
    """Items at or below their minimum stock."""
    if not items:
        return ()
    return tuple(i for i in items if i.current_stock <= i.min_stock)


class LicenseStatus(StrEnum):
    EXPIRED = "expired"
    EXPIRING = "expiring"
    VALID = "valid"


def license_status(driver: Driver, today: date, *, warning_days: int = 30) -> LicenseStatus | None:
    """``None`` when the driver has no recorded license expiry."""
    if driver.license_expiry is None:
        return None
    days = (driver.license_expiry - today).days
    if days < 0:
        return LicenseStatus.EXPIRED
    if days <= warning_days:
        return LicenseStatus.EXPIRING
    return LicenseStatus.VALID


def expiring_licenses(
    drivers: Sequence[Driver] | None,
    today: date,
    *,
    warning_days: int = 30,
) -> tuple[Driver, ...]:
    """Drivers whose license expires within the next *warning_days* days."""
    if not drivers:
        return ()
    return tuple(
        d for d in drivers if license_status(d, today, warning_days=warning_days) is LicenseStatus.EXPIRING
    )


@dataclass(frozen=True, slots=True)
class FuelSummary:
    total_spent: float
    total_liters: float
    average_cost_per_liter: float
    records: int


def fuel_summary(logs: Sequence[FuelLog] | None) -> FuelSummary:
    logs = logs or ()
    spent = sum(log.total_cost or 0.0 for log in logs)
    liters = sum(log.liters or 0.0 for log in logs)
    return FuelSummary(
        total_spent=spent,
        total_liters=liters,
        average_cost_per_liter=spent / liters if liters > 0 else 0.0,
        records=len(logs),
    )


def pending_approvals(approvals: Sequence[Approval] | None) -> tuple[Approval, ...]:
    if not approvals:
        return ()
    return tuple(a for a in approvals if a.status is ApprovalStatus.PENDING)


@dataclass(frozen=True, slots=True)
class FinanceSummary:
    total_expenses: float
    monthly_expenses: float
    pending_approvals: int


def finance_summary(
    expenses: Sequence[Expense] | None,
    approvals: Sequence[Approval] | None,
    today: date,
) -> FinanceSummary:
    """Total spend, spend in the month of *today* and the pending approval count."""
    expenses = expenses or ()
    monthly = sum(
        e.amount or 0.0
        for e in expenses
        if e.expense_date is not None
        and (e.expense_date.year, e.expense_date.month) == (today.year, today.month)
    )
    return FinanceSummary(
        total_expenses=sum(e.amount or 0.0 for e in expenses),
        monthly_expenses=monthly,
        pending_approvals=len(pending_approvals(approvals)),
    )


# ------------------------------------------------------------------
# Reports
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class KpiTile:
    key: str
    label: str
    value: int


def report_summary(
    vehicles: Sequence[Vehicle] | None,
    orders: Sequence[Order] | None,
    *,
    language: str = "es",
) -> tuple[KpiTile, ...]:
    vehicles = vehicles or ()
    orders = orders or ()
    values = (
        ("total_vehicles", len(vehicles)),
        ("active_vehicles", sum(1 for v in vehicles if v.status is VehicleStatus.ACTIVE)),
        ("total_orders", len(orders)),
        ("completed_orders", sum(1 for o in orders if o.status is OrderStatus.DELIVERED)),
    )
    return tuple(KpiTile(key=k, label=message(f"kpi.{k}", language), value=v) for k, v in values)


REPORT_TYPES: tuple[str, ...] = ("fleet", "performance", "delivery", "financial")


@dataclass(frozen=True, slots=True)
class GeneratedReport:
    filename: str
    content: str
    media_type: str = "text/plain"


def _local_date(day: date, language: str) -> str:
    if language == "en":
        return f"{day.month}/{day.day}/{day.year}"
    return f"{day.day}/{day.month}/{day.year}"


def generate_report(report_type: str, now: datetime, *, language: str = "es") -> GeneratedReport:
    """Build the downloadable text report for *report_type*.

    Unknown types fall back to a generic report name.
    """
    key = f"report.{report_type}" if report_type in REPORT_TYPES else "report.generic"
    name = message(key, language)
    slug = _WHITESPACE_RE.sub("-", name.lower())
    stamp = int(now.timestamp() * 1000)
    return GeneratedReport(
        filename=f"{slug}-{stamp}.txt",
        content=message("report.generated_on", language, name=name, date=_local_date(now.date(), language)),
    )
