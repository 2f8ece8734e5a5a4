from __future__ import annotations

import logging

import pytest

from fleetdash.exceptions import FleetConnectionError, FleetDashError
from fleetdash.fetch import FetchState
from fleetdash.models import Vehicle
from fleetdash.views import ListView, RenderState
from fleetdash.views.derive import featured_vehicles, metric_summary, vehicle_card


def _view(**kwargs: object) -> ListView:
    return ListView("Vehículos Destacados", placeholder_count=2, empty_message="No hay vehículos destacados", **kwargs)  # type: ignore[arg-type]


def _vehicles() -> tuple[Vehicle, ...]:
    return (
        Vehicle.model_validate({"id": "v1", "status": "active"}),
        Vehicle.model_validate({"id": "v2", "status": "warning"}),
    )


def test_loading_renders_placeholders() -> None:
    rendered = _view().render(FetchState.loading(), ())
    assert rendered.state is RenderState.LOADING
    assert rendered.placeholders == 2
    assert rendered.items == ()


def test_ready_with_empty_view_renders_message() -> None:
    rendered = _view().render(FetchState.ready(()), featured_vehicles(()))
    assert rendered.state is RenderState.EMPTY
    assert rendered.message == "No hay vehículos destacados"


def test_error_renders_as_empty() -> None:
    rendered = _view().render(FetchState.failed(FleetConnectionError("down")), featured_vehicles(None))
    assert rendered.state is RenderState.EMPTY


def test_populated_items_are_keyed_by_id() -> None:
    vehicles = _vehicles()
    rendered = _view(present=vehicle_card).render(FetchState.ready(vehicles), featured_vehicles(vehicles))

    assert rendered.state is RenderState.POPULATED
    assert rendered.keys == ("v1", "v2")
    assert rendered.items[0].view.id == "v1"


def test_metric_tiles_keyed_by_tile_key() -> None:
    view = ListView("Métricas", placeholder_count=4, empty_message="Sin datos", item_key=lambda t: t.key)
    rendered = view.render(FetchState.ready(None), metric_summary(None))
    assert rendered.keys == ("active_vehicles", "daily_deliveries", "pending_orders", "compliance")


def test_callable_empty_message_is_evaluated_per_render() -> None:
    texts = iter(["primero", "segundo"])
    view = ListView("x", placeholder_count=1, empty_message=lambda: next(texts))
    assert view.render(FetchState.ready(()), ()).message == "primero"
    assert view.render(FetchState.ready(()), ()).message == "segundo"


def test_duplicate_keys_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    vehicles = (Vehicle.model_validate({"id": "v1"}), Vehicle.model_validate({"id": "v1"}))
    with caplog.at_level(logging.WARNING, logger="fleetdash.views.components"):
        rendered = _view().render(FetchState.ready(vehicles), vehicles)
    assert len(rendered.items) == 2
    assert "Duplicate item key" in caplog.text


def test_negative_placeholder_count_is_rejected() -> None:
    with pytest.raises(FleetDashError):
        ListView("x", placeholder_count=-1, empty_message="")
