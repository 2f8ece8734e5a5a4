from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import field_validator

from fleetdash.api import parse_record
from fleetdash.exceptions import FleetDecodeError
from fleetdash.models import FleetRecord
from fleetdash.normalize import js_round, parse_timestamp, safe_float, safe_int
from fleetdash.resources import Resource


def test_decimal_strings_become_floats() -> None:
    assert safe_float("7.50") == 7.5
    assert safe_int("12.9") == 12


@pytest.mark.parametrize("value", [None, "", "n/a", True, float("nan"), float("inf"), "1e400", 10**400])
def test_unusable_numbers_become_none(value: object) -> None:
    assert safe_float(value) is None
    assert safe_int(value) is None


def test_timestamps_accept_iso_seconds_and_millis() -> None:
    expected = datetime(2025, 3, 14, 12, 0, tzinfo=UTC)
    assert parse_timestamp("2025-03-14T12:00:00Z") == expected
    assert parse_timestamp(expected.timestamp()) == expected
    assert parse_timestamp(expected.timestamp() * 1000) == expected


@pytest.mark.parametrize("value", [float("inf"), float("nan"), 1e20, -1e20, "mañana"])
def test_out_of_range_timestamps_become_none(value: object) -> None:
    assert parse_timestamp(value) is None


def test_js_round_rounds_half_up() -> None:
    assert js_round(62.5) == 63
    assert js_round(-0.5) == 0


class _Gauge(FleetRecord):
    id: str

    @field_validator("id")
    @classmethod
    def _overflow(cls, value: str) -> str:
        raise OverflowError("reading out of range")


def test_non_validation_errors_are_decode_errors() -> None:
    gauges = Resource("gauges", "/api/gauges", _Gauge)
    with pytest.raises(FleetDecodeError) as exc_info:
        parse_record(gauges, {"id": "g1"}, "/api/gauges")
    assert exc_info.value.endpoint == "/api/gauges"
    assert isinstance(exc_info.value.__cause__, OverflowError)
