# backend/rentmaster/domain/forecast.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence, Union

from ..schemas import RoomIn, SupplierIn, TenantIn, TransactionIn
from .aggregates import property_matches
from .periods import as_date

FORECAST_DAYS = 6
RENT_CATEGORY = "Aluguel"


@dataclass(frozen=True)
class ForecastItem:
    type: str  # "revenue" | "expense"
    description: str
    amount: float
    date: date
    category: str
    tenant_id: Optional[str] = None
    room_id: Optional[str] = None
    supplier_id: Optional[str] = None
    property_id: Optional[str] = None


def build_forecast(
    *,
    tenants: Sequence[TenantIn],
    rooms: Sequence[RoomIn],
    suppliers: Sequence[SupplierIn],
    transactions: Sequence[TransactionIn],
    now: Union[date, datetime],
    property_filter: Optional[str] = "all",
    days: int = FORECAST_DAYS,
) -> list[ForecastItem]:
    """
    Rent and bills expected from today through today + (days - 1).

    An obligation lands on the day whose day-of-month equals its due day.
    It is skipped when a transaction for the same tenant/supplier already
    exists on exactly that date.
    """
    today = as_date(now)
    rooms_by_id = {r.id: r for r in rooms}

    paid_tenant_days = {(tr.tenant_id, tr.date) for tr in transactions if tr.tenant_id}
    paid_supplier_days = {(tr.supplier_id, tr.date) for tr in transactions if tr.supplier_id}

    upcoming: list[ForecastItem] = []
    for offset in range(days):
        target = today + timedelta(days=offset)

        for t in tenants:
            if not t.is_active or t.due_day != target.day:
                continue
            room = rooms_by_id.get(t.room_id) if t.room_id else None
            if room is None or not property_matches(room.property_id, property_filter):
                continue
            if (t.id, target) in paid_tenant_days:
                continue
            upcoming.append(
                ForecastItem(
                    type="revenue",
                    description=f"Aluguel {t.first_name}",
                    amount=float(room.price),
                    date=target,
                    category=RENT_CATEGORY,
                    tenant_id=t.id,
                    room_id=room.id,
                    property_id=room.property_id,
                )
            )

        for s in suppliers:
            if not s.due_day or s.due_day != target.day:
                continue
            if s.property_id and not property_matches(s.property_id, property_filter):
                continue
            if (s.id, target) in paid_supplier_days:
                continue
            upcoming.append(
                ForecastItem(
                    type="expense",
                    description=s.name,
                    amount=float(s.base_value or 0.0),
                    date=target,
                    category=s.category,
                    supplier_id=s.id,
                    property_id=s.property_id,
                )
            )

    # already in date order; sorted() is stable
    return sorted(upcoming, key=lambda i: i.date)
