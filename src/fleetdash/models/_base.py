"""Base model and enum for dashboard API records.

Every record model inherits from :class:`FleetRecord` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``null`` and empty-string
  values (so the field default is used) and coerces enumerated fields
  through their enum's ``_missing_`` hook.
* A ``raw`` dict that captures the original payload.

Status enums inherit from :class:`FleetEnum` which adds an ``UNKNOWN``
member and a ``_missing_`` hook that returns ``UNKNOWN`` for any value
without a mapped member.

Input models (create/update payloads) inherit from :class:`FleetInput`,
which forbids unknown keys and serializes by alias without unset fields.
"""

from __future__ import annotations

import re
import types
import typing
from datetime import date, datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from fleetdash.normalize import parse_date, parse_timestamp, safe_float, safe_int


def _coerce_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


FleetId = Annotated[str, BeforeValidator(_coerce_id)]
"""Record identifier; numeric ids are normalised to strings."""

FleetNumber = Annotated[float | None, BeforeValidator(safe_float)]
"""Decimal column; the API sends these as strings such as ``"3.50"``."""

FleetInt = Annotated[int | None, BeforeValidator(safe_int)]

FleetTimestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
"""Annotated type that coerces ISO strings or epoch numbers to UTC datetimes."""

FleetDate = Annotated[date | None, BeforeValidator(parse_date)]


class FleetEnum(StrEnum):
    """Base for enumerated record fields.

    Every subclass **must** define ``UNKNOWN = "unknown"``.
    Values the API sends that have no mapped member automatically
    resolve to ``UNKNOWN`` instead of raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> FleetEnum:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        unknown: FleetEnum = cls["UNKNOWN"]
        return unknown


def _enum_type(annotation: Any) -> type[FleetEnum] | None:
    """Return the FleetEnum class of a field annotation (``X`` or ``X | None``)."""
    if isinstance(annotation, type) and issubclass(annotation, FleetEnum):
        return annotation
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        for arg in typing.get_args(annotation):
            if isinstance(arg, type) and issubclass(arg, FleetEnum):
                return arg
    return None


class FleetRecord(BaseModel):
    """Base for API record models (immutable snapshots as received)."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop empty values, coerce enums and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value

        for name, field in cls.model_fields.items():
            enum_cls = _enum_type(field.annotation)
            if enum_cls is None:
                continue
            for key in {field.alias or name, name}:
                if key in cleaned and not isinstance(cleaned[key], enum_cls):
                    cleaned[key] = enum_cls(str(cleaned[key]))

        # Only auto-stash raw when not explicitly provided.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned


class FleetInput(BaseModel):
    """Base for create/update payloads validated before they are sent."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize by alias, leaving out fields the caller never set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class GeoPoint(FleetRecord):
    """A latitude/longitude pair, optionally stamped with the fix time."""

    lat: float
    lng: float
    timestamp: FleetTimestamp = None


# ------------------------------------------------------------------
# Input field types
# ------------------------------------------------------------------

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    if not _EMAIL_RE.match(value):
        raise ValueError("invalid email address")
    return value


def _known_member(value: Any) -> Any:
    if isinstance(value, FleetEnum) and value.name == "UNKNOWN":
        raise ValueError("unsupported value")
    return value


RequiredText = Annotated[str, Field(min_length=1)]
"""Non-blank text; surrounding whitespace is stripped before the check."""

Email = Annotated[str, AfterValidator(_check_email)]

Known = AfterValidator(_known_member)
"""Rejects the ``UNKNOWN`` member: ``Annotated[VehicleType, Known]``."""

PositiveNumber = Annotated[float, Field(gt=0)]
NonNegativeNumber = Annotated[float, Field(ge=0)]
NonNegativeInt = Annotated[int, Field(ge=0)]
Percentage = Annotated[float, Field(ge=0, le=100)]
