# backend/rentmaster/domain/prefill.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence, Union

from ..schemas import RoomIn, SupplierIn, TenantIn, TransactionIn
from .periods import add_months, as_date, clamped_date, month_year_label

DEFAULT_CATEGORY = {"revenue": "Aluguel", "expense": "Utilidade"}


@dataclass(frozen=True)
class TransactionPrefill:
    """A new-transaction form prefilled with the most urgent obligation."""

    type: str
    date: date
    category: str
    description: Optional[str] = None
    amount: Optional[float] = None
    tenant_id: Optional[str] = None
    room_id: Optional[str] = None
    supplier_id: Optional[str] = None
    property_id: Optional[str] = None


def _paid_in_month(
    transactions: Sequence[TransactionIn],
    *,
    entity: str,
    entity_id: str,
    year: int,
    month: int,
) -> bool:
    for t in transactions:
        if t.date.year != year or t.date.month != month:
            continue
        if entity == "tenant" and t.tenant_id == entity_id and t.type == "revenue":
            return True
        if entity == "supplier" and t.supplier_id == entity_id and t.type == "expense":
            return True
    return False


def _target_month(paid_this_month: bool, year: int, month: int) -> tuple[int, int]:
    if paid_this_month:
        return add_months(year, month, 1)
    return year, month


def next_expected_transaction(
    txn_type: str,
    *,
    tenants: Sequence[TenantIn],
    rooms: Sequence[RoomIn],
    suppliers: Sequence[SupplierIn],
    transactions: Sequence[TransactionIn],
    now: Union[date, datetime],
) -> TransactionPrefill:
    """
    revenue: each active tenant with a known room is due this month, or next
             month once this month's rent is recorded.
    expense: same rule for suppliers that have both a due day and a base value.

    The earliest candidate wins (first one on ties). Without candidates the
    form gets today's date and the type's default category.
    """
    today = as_date(now)
    candidates: list[TransactionPrefill] = []

    if txn_type == "revenue":
        rooms_by_id = {r.id: r for r in rooms}
        for t in tenants:
            if not t.is_active:
                continue
            room = rooms_by_id.get(t.room_id) if t.room_id else None
            if room is None:
                continue

            paid = _paid_in_month(transactions, entity="tenant", entity_id=t.id, year=today.year, month=today.month)
            y, m = _target_month(paid, today.year, today.month)
            due = clamped_date(y, m, t.due_day)
            candidates.append(
                TransactionPrefill(
                    type="revenue",
                    description=f"Aluguel {t.first_name} - {month_year_label(due)}",
                    amount=float(room.price),
                    category="Aluguel",
                    date=due,
                    tenant_id=t.id,
                    room_id=room.id,
                    property_id=room.property_id,
                )
            )
    else:
        for s in suppliers:
            if not s.is_scheduled:
                continue

            paid = _paid_in_month(transactions, entity="supplier", entity_id=s.id, year=today.year, month=today.month)
            y, m = _target_month(paid, today.year, today.month)
            due = clamped_date(y, m, int(s.due_day or 1))
            candidates.append(
                TransactionPrefill(
                    type="expense",
                    description=f"{s.name} - {month_year_label(due)}",
                    amount=float(s.base_value or 0.0),
                    category=s.category,
                    date=due,
                    supplier_id=s.id,
                    property_id=s.property_id,
                )
            )

    if not candidates:
        return TransactionPrefill(
            type=txn_type,
            date=today,
            category=DEFAULT_CATEGORY.get(txn_type, "Utilidade"),
        )

    # min() keeps the first of equal dates
    return min(candidates, key=lambda c: c.date)
