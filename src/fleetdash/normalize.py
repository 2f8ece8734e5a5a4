"""Normalization helpers.

Centralizes lenient parsing of wire values: the API serializes decimals as
strings (``"3.50"``) and timestamps as ISO strings or epoch numbers.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime
from typing import Any

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def parse_timestamp(value: Any) -> datetime | None:
    """Convert an ISO string or epoch number (seconds or ms) to an aware UTC datetime.

    Returns ``None`` for missing or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = safe_float(value)
        if ts is None:
            return None
        if ts >= _MS_THRESHOLD:
            ts /= 1000.0
        try:
            return datetime.fromtimestamp(ts, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def parse_date(value: Any) -> date | None:
    """Convert ``YYYY-MM-DD`` (or a full timestamp) to a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def js_round(value: float) -> int:
    """Round half up, the way dashboard percentages are displayed."""
    return math.floor(value + 0.5)
