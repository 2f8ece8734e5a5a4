"""Expense and approval models, with their payloads."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal

from pydantic import field_validator

from fleetdash.models._base import (
    FleetDate,
    FleetEnum,
    FleetId,
    FleetInput,
    FleetNumber,
    FleetRecord,
    FleetTimestamp,
    Known,
    PositiveNumber,
    RequiredText,
)


class ExpenseType(FleetEnum):
    FUEL = "fuel"
    MAINTENANCE = "maintenance"
    TOLLS = "tolls"
    PARKING = "parking"
    OTHER = "other"
    UNKNOWN = "unknown"


class Expense(FleetRecord):
    id: FleetId
    type: ExpenseType = ExpenseType.UNKNOWN
    vehicle_id: str | None = None
    route_id: str | None = None
    amount: FleetNumber = None
    description: str = ""
    receipt_number: str | None = None
    category: str = "operational"
    expense_date: FleetDate = None
    approval_id: str | None = None
    created_at: FleetTimestamp = None


class ApprovalStatus(FleetEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class Approval(FleetRecord):
    """A request (expense, purchase, route change) awaiting sign-off."""

    id: FleetId
    type: str = ""
    entity_id: str = ""
    requested_by: str = ""
    approved_by: str | None = None
    amount: FleetNumber = None
    description: str = ""
    status: ApprovalStatus = ApprovalStatus.PENDING
    priority: str = "normal"
    requested_at: FleetTimestamp = None
    approved_at: FleetTimestamp = None
    comments: str | None = None


class ExpenseCreate(FleetInput):
    """Payload for ``POST /api/expenses``."""

    type: Annotated[ExpenseType, Known]
    amount: PositiveNumber
    description: RequiredText
    expense_date: date
    vehicle_id: str | None = None
    route_id: str | None = None
    receipt_number: str | None = None
    category: str | None = None


class ApprovalCreate(FleetInput):
    """Payload for ``POST /api/approvals``; new requests start as pending."""

    type: RequiredText
    entity_id: RequiredText
    requested_by: RequiredText
    description: RequiredText
    amount: PositiveNumber | None = None
    priority: Literal["low", "normal", "high", "urgent"] = "normal"

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        payload.setdefault("priority", self.priority)
        payload["status"] = ApprovalStatus.PENDING.value
        return payload


class ApprovalDecision(FleetInput):
    """Sign-off on a pending approval (``PATCH /api/approvals/:id``)."""

    status: ApprovalStatus
    approved_by: RequiredText
    comments: str | None = None

    @field_validator("status")
    @classmethod
    def _final_status(cls, value: ApprovalStatus) -> ApprovalStatus:
        if value not in (ApprovalStatus.APPROVED, ApprovalStatus.REJECTED):
            raise ValueError("a decision must approve or reject")
        return value
