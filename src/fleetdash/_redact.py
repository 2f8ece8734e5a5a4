"""Masking of personal data in debug logs.

Client and driver records carry contact details, license numbers and
salaries. Request and response bodies pass through :func:`redact_for_log`
before they reach a DEBUG log line. Contact fields keep a short hint (the
e-mail domain, the last digits of a phone) so traces stay useful.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

_MASK = "<redacted>"

# Keys are compared lower-cased with underscores removed.
_HIDDEN_KEYS: frozenset[str] = frozenset(
    {"salary", "password", "token", "authorization", "cookie", "signature"}
)
_HINTED_KEYS: frozenset[str] = frozenset(
    {"email", "phone", "address", "pickupaddress", "deliveryaddress", "licensenumber"}
)
_MASKED_KEYS = _HIDDEN_KEYS | _HINTED_KEYS


def _normalize_key(key: Any) -> str:
    return str(key).lower().replace("_", "")


def mask_value(key: str, value: Any) -> Any:
    """Mask *value* according to the field *key* it was found under."""
    if value is None:
        return None
    normalized = _normalize_key(key)
    if normalized in _HIDDEN_KEYS:
        return _MASK
    if normalized not in _HINTED_KEYS:
        return value
    text = str(value)
    if normalized == "email" and "@" in text:
        return "***@" + text.rsplit("@", 1)[1]
    if len(text) <= 4:
        return _MASK
    return "***" + text[-4:]


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* that is safe to write to debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude={"raw"})
    elif isinstance(value, enum.Enum):
        return value.value
    elif isinstance(value, (datetime, date)):
        return value.isoformat()

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"

    if isinstance(value, Mapping):
        return {
            str(k): mask_value(str(k), v)
            if _normalize_key(k) in _MASKED_KEYS
            else redact_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]
    return repr(value)
