# backend/rentmaster/domain/seed_generator.py
from __future__ import annotations

import random
from datetime import date, datetime
from typing import Iterator, Optional, Sequence, Union

from ..schemas import PropertyIn, RoomIn, SupplierIn, TenantIn, TransactionIn
from .money import clean_amount
from .periods import add_months, as_date, clamped_date, month_year_label

DEFAULT_REFERENCE_YEAR = 2024
VARIABLE_COST_SPREAD = 0.10  # +/-10%


def _months_between(start: date, end: date) -> Iterator[tuple[int, int]]:
    """(year, month) from start's month through end's month, inclusive."""
    y, m = start.year, start.month
    while (y, m) <= (end.year, end.month):
        yield y, m
        y, m = add_months(y, m, 1)


def generate_rent_transactions(
    *,
    tenants: Sequence[TenantIn],
    rooms: Sequence[RoomIn],
    properties: Sequence[PropertyIn],
    now: Union[date, datetime],
) -> list[TransactionIn]:
    """One rent per month for each tenant, due dates inside [entry, exit or now]."""
    today = as_date(now)
    rooms_by_id = {r.id: r for r in rooms}
    property_ids = {p.id for p in properties}

    out: list[TransactionIn] = []
    for t in tenants:
        room = rooms_by_id.get(t.room_id) if t.room_id else None
        if room is None:
            continue
        property_id: Optional[str] = room.property_id if room.property_id in property_ids else None

        end = t.exit_date or today
        for y, m in _months_between(t.entry_date, end):
            due = clamped_date(y, m, t.due_day)
            if due < t.entry_date or due > end or due > today:
                continue
            out.append(
                TransactionIn(
                    id=f"gen-rent-{t.id}-{due.isoformat()}",
                    description=f"{t.first_name} - Aluguel {month_year_label(due)}",
                    amount=float(room.price),
                    date=due,
                    type="revenue",
                    category="Aluguel",
                    tenant_id=t.id,
                    room_id=room.id,
                    property_id=property_id,
                )
            )
    return out


def generate_supplier_transactions(
    *,
    suppliers: Sequence[SupplierIn],
    now: Union[date, datetime],
    rng: random.Random,
    reference_year: int = DEFAULT_REFERENCE_YEAR,
) -> list[TransactionIn]:
    """
    One bill per month for each scheduled supplier, from January of the
    reference year through today. Variable costs drift +/-10% around the
    base value, drawn from `rng`.
    """
    today = as_date(now)
    start = date(reference_year, 1, 1)

    out: list[TransactionIn] = []
    for s in suppliers:
        if not s.is_scheduled:
            continue

        for y, m in _months_between(start, today):
            due = clamped_date(y, m, int(s.due_day or 1))
            if due < start or due > today:
                continue

            amount = float(s.base_value or 0.0)
            if s.cost_type == "variable":
                variation = rng.random() * (2 * VARIABLE_COST_SPREAD) - VARIABLE_COST_SPREAD
                amount = amount * (1 + variation)

            out.append(
                TransactionIn(
                    id=f"gen-util-{s.id}-{due.isoformat()}",
                    description=f"{s.name} - {month_year_label(due)}",
                    amount=clean_amount(amount),
                    date=due,
                    type="expense",
                    category=s.category,
                    property_id=s.property_id,
                    supplier_id=s.id,
                )
            )
    return out


def generate_seed_transactions(
    *,
    tenants: Sequence[TenantIn],
    rooms: Sequence[RoomIn],
    properties: Sequence[PropertyIn],
    suppliers: Sequence[SupplierIn],
    now: Union[date, datetime],
    rng: Optional[random.Random] = None,
    reference_year: int = DEFAULT_REFERENCE_YEAR,
) -> list[TransactionIn]:
    """Rent history plus supplier bills, newest first."""
    rng = rng or random.Random()
    trans = generate_rent_transactions(tenants=tenants, rooms=rooms, properties=properties, now=now)
    trans += generate_supplier_transactions(suppliers=suppliers, now=now, rng=rng, reference_year=reference_year)
    return sorted(trans, key=lambda t: t.date, reverse=True)
