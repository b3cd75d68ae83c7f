# backend/rentmaster/domain/alerts.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Sequence, Union

from ..schemas import RoomIn, SupplierIn, TenantIn, TransactionIn
from .aggregates import property_matches
from .money import clean_amount
from .periods import as_date


@dataclass(frozen=True)
class Alert:
    id: str
    type: str  # "rent" | "expense"
    title: str
    subtitle: str
    amount: float
    due_day: int
    linked_entity: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AlertReport:
    alerts: list[Alert]
    pending_total: float


def _paid_in_month(
    transactions: Sequence[TransactionIn],
    *,
    txn_type: str,
    year: int,
    month: int,
    tenant_id: Optional[str] = None,
    supplier_id: Optional[str] = None,
) -> bool:
    for tr in transactions:
        if tr.type != txn_type:
            continue
        if tr.date.year != year or tr.date.month != month:
            continue
        if tenant_id is not None and tr.tenant_id == tenant_id:
            return True
        if supplier_id is not None and tr.supplier_id == supplier_id:
            return True
    return False


def detect_overdue(
    *,
    tenants: Sequence[TenantIn],
    rooms: Sequence[RoomIn],
    suppliers: Sequence[SupplierIn],
    transactions: Sequence[TransactionIn],
    now: Union[date, datetime],
    property_filter: Optional[str] = "all",
) -> AlertReport:
    """
    Obligations of the current month that are past their due day and have
    no matching payment yet.

    - rent: every active tenant whose room exists and passes the property filter
    - expense: every supplier with a due day (no property, or matching one)

    Only rent feeds pending_total. Tenants come before suppliers; no sort.
    """
    today = as_date(now)
    rooms_by_id = {r.id: r for r in rooms}

    alerts: list[Alert] = []
    pending = 0.0

    for t in tenants:
        if not t.is_active:
            continue
        room = rooms_by_id.get(t.room_id) if t.room_id else None
        if room is None or not property_matches(room.property_id, property_filter):
            continue

        paid = _paid_in_month(transactions, txn_type="revenue", year=today.year, month=today.month, tenant_id=t.id)
        if not paid and today.day > t.due_day:
            alerts.append(
                Alert(
                    id=f"alert-rent-{t.id}",
                    type="rent",
                    title=t.name,
                    subtitle=f"Aluguel • {room.number}",
                    amount=float(room.price),
                    due_day=t.due_day,
                    linked_entity={"tenant": t, "room": room},
                )
            )
            pending += float(room.price)

    for s in suppliers:
        if not s.due_day:
            continue
        if s.property_id and not property_matches(s.property_id, property_filter):
            continue

        paid = _paid_in_month(transactions, txn_type="expense", year=today.year, month=today.month, supplier_id=s.id)
        if not paid and today.day > s.due_day:
            alerts.append(
                Alert(
                    id=f"alert-exp-{s.id}",
                    type="expense",
                    title=s.name,
                    subtitle=s.specialty or s.category,
                    amount=float(s.base_value or 0.0),
                    due_day=s.due_day,
                    linked_entity={"supplier": s},
                )
            )

    return AlertReport(alerts=alerts, pending_total=clean_amount(pending))
