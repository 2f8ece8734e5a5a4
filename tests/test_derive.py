"""Tests for the pure view derivations."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest
from conftest import NOW, sample_collections

from fleetdash.models import (
    Alert,
    Approval,
    DashboardMetrics,
    Driver,
    Expense,
    FuelLog,
    InventoryItem,
    Order,
    OrderProduct,
    Vehicle,
    VehicleStatus,
)
from fleetdash.views import derive
from fleetdash.views.tokens import Icon, StyleToken, TrendDirection, bg_class, text_class


def _vehicles(*statuses: str) -> tuple[Vehicle, ...]:
    return tuple(Vehicle.model_validate({"id": f"v{i}", "status": s}) for i, s in enumerate(statuses, 1))


def _sample_vehicles() -> tuple[Vehicle, ...]:
    return tuple(Vehicle.model_validate(v) for v in sample_collections()["vehicles"])


# ------------------------------------------------------------------
# Featured vehicles
# ------------------------------------------------------------------


class TestFeaturedVehicles:
    def test_selects_active_and_warning_in_order(self) -> None:
        vehicles = _vehicles("idle", "warning", "maintenance", "active", "active")
        assert [v.id for v in derive.featured_vehicles(vehicles)] == ["v2", "v4"]

    @pytest.mark.parametrize(
        "statuses",
        [
            (),
            ("idle", "inactive"),
            ("active",),
            ("warning", "warning", "warning"),
            ("active", "idle", "warning", "unknown", "active", "maintenance"),
        ],
    )
    def test_length_membership_and_order(self, statuses: tuple[str, ...]) -> None:
        vehicles = _vehicles(*statuses)
        featured = derive.featured_vehicles(vehicles)

        assert len(featured) <= 2
        assert all(v.status in (VehicleStatus.ACTIVE, VehicleStatus.WARNING) for v in featured)
        positions = [vehicles.index(v) for v in featured]
        assert positions == sorted(positions)

    def test_does_not_mutate_and_is_idempotent(self) -> None:
        vehicles = list(_vehicles("active", "warning", "active"))
        snapshot = list(vehicles)
        assert derive.featured_vehicles(vehicles) == derive.featured_vehicles(vehicles)
        assert vehicles == snapshot

    def test_none_is_empty(self) -> None:
        assert derive.featured_vehicles(None) == ()

    def test_limit(self) -> None:
        assert len(derive.featured_vehicles(_vehicles("active", "active", "active"), limit=3)) == 3


# ------------------------------------------------------------------
# Metric tiles
# ------------------------------------------------------------------


class TestMetricSummary:
    def test_full_record(self) -> None:
        tiles = derive.metric_summary(
            DashboardMetrics.model_validate(
                {"activeVehicles": 12, "dailyDeliveries": 48, "pendingOrders": 7, "compliance": 94.5}
            )
        )
        assert [t.title for t in tiles] == ["Vehículos Activos", "Entregas Hoy", "Pedidos Pendientes", "% Cumplimiento"]
        assert [t.value for t in tiles] == [12, 48, 7, "94.5%"]
        assert [t.change for t in tiles] == ["+12%", "+8%", "-5%", "+2.1%"]
        assert [t.trend for t in tiles] == [TrendDirection.UP, TrendDirection.UP, TrendDirection.DOWN, TrendDirection.UP]
        assert tiles[0].icon is Icon.TRUCK
        assert tiles[3].token is StyleToken.SUCCESS_GREEN

    @pytest.mark.parametrize("metrics", [None, {}, {"activeVehicles": 3}, DashboardMetrics()])
    def test_missing_fields_use_defaults(self, metrics: object) -> None:
        tiles = derive.metric_summary(metrics)  # type: ignore[arg-type]

        assert len(tiles) == 4
        assert tiles[1].value == 0
        assert tiles[2].value == 0
        assert tiles[3].value == "0%"

    def test_whole_percentages_have_no_decimal(self) -> None:
        assert derive.metric_summary({"compliance": 95})[3].value == "95%"

    def test_english_labels(self) -> None:
        tiles = derive.metric_summary(None, language="en")
        assert tiles[0].title == "Active Vehicles"


# ------------------------------------------------------------------
# Alerts, deliveries, performance, map
# ------------------------------------------------------------------


def test_priority_alerts() -> None:
    alerts = [
        Alert.model_validate({"id": "a1", "type": "delay", "severity": "high", "createdAt": NOW - timedelta(minutes=30)}),
        Alert.model_validate({"id": "a2", "severity": "low"}),
        Alert.model_validate({"id": "a3", "type": "temperature", "severity": "critical", "createdAt": NOW - timedelta(hours=3)}),
        Alert.model_validate({"id": "a4", "type": "capacity", "severity": "critical"}),
        Alert.model_validate({"id": "a5", "severity": "high"}),
    ]

    views = derive.priority_alerts(alerts, NOW)

    assert [v.id for v in views] == ["a1", "a3", "a4"]
    assert [v.time_ago for v in views] == ["Hace 30 min", "Hace 3 h", "Hace un momento"]
    assert [v.icon for v in views] == [Icon.CLOCK, Icon.THERMOMETER, Icon.ALERT_TRIANGLE]
    assert all(v.token is StyleToken.ALERT_RED for v in views)


def test_critical_deliveries_window() -> None:
    def order(oid: str, status: str, minutes: int | None) -> Order:
        payload: dict[str, object] = {"id": oid, "status": status, "clientName": oid}
        if minutes is not None:
            payload["scheduledDelivery"] = NOW + timedelta(minutes=minutes)
        return Order.model_validate(payload)

    orders = [
        order("past", "in_transit", -5),
        order("now", "in_transit", 0),
        order("soon", "in_transit", 45),
        order("pending", "pending", 30),
        order("edge", "in_transit", 120),
        order("late", "in_transit", 121),
        order("unscheduled", "in_transit", None),
        order("later", "in_transit", 90),
    ]

    views = derive.critical_deliveries(orders, NOW)

    assert [v.id for v in views] == ["soon", "edge", "later"]
    assert [v.time_remaining for v in views] == ["45min", "2h 0min", "1h 30min"]


def test_products_description() -> None:
    products = [OrderProduct(name="Papa"), OrderProduct(name="Maíz"), OrderProduct(name="Yuca")]
    assert derive.products_description([]) == "Sin productos"
    assert derive.products_description(products[:1]) == "Papa"
    assert derive.products_description(products) == "Papa +2 más"


def test_fleet_performance() -> None:
    perf = derive.fleet_performance(_vehicles("active", "active", "warning", "maintenance", "idle", "idle"))

    assert (perf.total, perf.optimal, perf.warning, perf.critical) == (6, 2, 1, 1)
    assert perf.optimal_percentage == 33
    assert perf.warning_percentage == 17
    assert perf.critical_percentage == 17
    # (2 + 0.6) / 6 = 43.3%
    assert perf.efficiency == 43


def test_fleet_performance_rounds_half_up() -> None:
    perf = derive.fleet_performance(_vehicles("active", "idle", "idle", "idle", "idle", "idle", "idle", "idle"))
    assert perf.optimal_percentage == 13  # 12.5


def test_fleet_performance_empty() -> None:
    perf = derive.fleet_performance(None)
    assert perf.total == 0
    assert perf.efficiency == 0


def test_map_markers_need_location() -> None:
    markers = derive.map_markers(_sample_vehicles())
    assert [m.id for m in markers] == ["v1", "v3"]
    assert markers[0].token is StyleToken.SUCCESS_GREEN
    assert markers[0].pulse
    assert markers[1].token is StyleToken.WARNING_AMBER
    assert bg_class(markers[1].token) == "bg-warning-amber"


def test_vehicle_card() -> None:
    card = derive.vehicle_card(_sample_vehicles()[0])
    assert card.load == "7.5/10 Ton"
    assert card.capacity_percentage == 75.0
    assert not card.over_capacity
    assert card.temperature is None
    assert text_class(card.token) == "text-success-green"


def test_capacity_over_and_zero() -> None:
    over = Vehicle.model_validate({"id": "v", "capacity": "2", "currentLoad": "3"})
    assert derive.vehicle_card(over).over_capacity
    assert derive.capacity_percentage(Vehicle.model_validate({"id": "v"})) == 0.0


# ------------------------------------------------------------------
# List pages
# ------------------------------------------------------------------


def test_filter_records_search_and_facets() -> None:
    vehicles = _sample_vehicles()

    assert [v.id for v in derive.filter_records(vehicles, query="abc", search_fields=("plate",))] == ["v1"]
    assert [v.id for v in derive.filter_records(vehicles, query="PÉREZ", search_fields=("plate", "driver_name"))] == ["v1"]
    assert [v.id for v in derive.filter_records(vehicles, facets={"status": "active"})] == ["v1", "v5"]
    assert len(derive.filter_records(vehicles, facets={"status": "all"})) == 5
    assert derive.filter_records(vehicles, query="zzz", search_fields=("plate",)) == ()
    assert derive.filter_records(None, query="x") == ()


def test_stock_status() -> None:
    def item(current: int, minimum: int) -> InventoryItem:
        return InventoryItem.model_validate({"id": "i", "currentStock": current, "minStock": minimum})

    assert derive.stock_status(item(5, 5)).level is derive.StockLevel.CRITICAL
    assert derive.stock_status(item(7, 5)).level is derive.StockLevel.LOW
    assert derive.stock_status(item(8, 5)).label == "Normal"
    assert derive.stock_status(item(0, 5)).token is StyleToken.ALERT_RED
    assert [i.current_stock for i in derive.low_stock_items([item(2, 5), item(9, 5)])] == [2]


def test_expiring_licenses() -> None:
    today = date(2025, 3, 14)
    drivers = [
        Driver.model_validate({"id": "expired", "licenseExpiry": "2025-03-13"}),
        Driver.model_validate({"id": "today", "licenseExpiry": "2025-03-14"}),
        Driver.model_validate({"id": "soon", "licenseExpiry": "2025-04-13"}),
        Driver.model_validate({"id": "later", "licenseExpiry": "2025-04-14"}),
        Driver.model_validate({"id": "none"}),
    ]
    assert [d.id for d in derive.expiring_licenses(drivers, today)] == ["today", "soon"]
    assert derive.license_status(drivers[0], today) is derive.LicenseStatus.EXPIRED
    assert derive.license_status(drivers[4], today) is None


def test_fuel_summary() -> None:
    logs = [
        FuelLog.model_validate({"id": "f1", "liters": "40", "totalCost": "160.00"}),
        FuelLog.model_validate({"id": "f2", "liters": "10", "totalCost": "45.00"}),
    ]
    summary = derive.fuel_summary(logs)
    assert summary.total_liters == 50
    assert summary.total_spent == 205
    assert summary.average_cost_per_liter == pytest.approx(4.1)
    assert derive.fuel_summary(None).average_cost_per_liter == 0


def test_finance_summary() -> None:
    expenses = [
        Expense.model_validate({"id": "e1", "amount": "100.50", "expenseDate": "2025-03-02"}),
        Expense.model_validate({"id": "e2", "amount": "20", "expenseDate": "2025-02-27"}),
        Expense.model_validate({"id": "e3", "amount": "5"}),
    ]
    approvals = [
        Approval.model_validate({"id": "p1", "status": "pending"}),
        Approval.model_validate({"id": "p2", "status": "approved"}),
    ]
    summary = derive.finance_summary(expenses, approvals, date(2025, 3, 14))
    assert summary.total_expenses == pytest.approx(125.5)
    assert summary.monthly_expenses == pytest.approx(100.5)
    assert summary.pending_approvals == 1


def test_pending_orders() -> None:
    orders = [Order.model_validate(o) for o in sample_collections()["orders"]]
    assert [o.id for o in derive.pending_orders(orders)] == ["o2"]


# ------------------------------------------------------------------
# Reports
# ------------------------------------------------------------------


def test_report_summary() -> None:
    orders = [Order.model_validate(o) for o in sample_collections()["orders"]]
    kpis = derive.report_summary(_sample_vehicles(), orders)
    assert [(k.label, k.value) for k in kpis] == [
        ("Total de Vehículos", 5),
        ("Vehículos en Ruta", 2),
        ("Total de Pedidos", 3),
        ("Pedidos Entregados", 1),
    ]


def test_generate_report() -> None:
    now = datetime(2025, 3, 4, 9, 30, tzinfo=UTC)
    report = derive.generate_report("fleet", now)

    assert report.filename == f"reporte-de-flota-{int(now.timestamp() * 1000)}.txt"
    assert report.content == "Reporte de Flota - Generado el 4/3/2025"
    assert report.media_type == "text/plain"


def test_generate_report_unknown_type_and_english() -> None:
    now = datetime(2025, 3, 4, 9, 30, tzinfo=UTC)
    assert derive.generate_report("weekly", now).content.startswith("Reporte - ")
    assert derive.generate_report("financial", now, language="en").content == "Financial Report - Generated on 3/4/2025"
