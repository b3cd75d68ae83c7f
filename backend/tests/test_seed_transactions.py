# backend/tests/test_seed_transactions.py
from __future__ import annotations

import random
from datetime import date

from rentmaster.domain.seed_generator import (
    generate_rent_transactions,
    generate_seed_transactions,
    generate_supplier_transactions,
)
from rentmaster.schemas import PropertyIn, RoomIn, SupplierIn, TenantIn
from rentmaster.seed.demo_seed import demo_properties, demo_rooms, demo_suppliers, demo_tenants

TODAY = date(2026, 10, 19)


def _demo(rng_seed=7):
    return generate_seed_transactions(
        tenants=demo_tenants(),
        rooms=demo_rooms(),
        properties=demo_properties(),
        suppliers=demo_suppliers(),
        now=TODAY,
        rng=random.Random(rng_seed),
    )


def test_nothing_after_today_and_no_rent_before_entry():
    txns = _demo()
    tenants = {t.id: t for t in demo_tenants()}

    assert txns
    assert all(t.date <= TODAY for t in txns)
    for t in txns:
        if t.type == "revenue":
            assert t.date >= tenants[t.tenant_id].entry_date


def test_newest_first():
    dates = [t.date for t in _demo()]
    assert dates == sorted(dates, reverse=True)


def test_monthly_rent_per_tenant():
    txns = [t for t in _demo() if t.tenant_id == "t1"]
    # entry 2024-01-15, due on the 8th: Feb/24 .. Oct/26
    assert len(txns) == 33
    assert txns[-1].date == date(2024, 2, 8)
    assert txns[-1].id == "gen-rent-t1-2024-02-08"
    assert txns[-1].description == "Lia - Aluguel Fev/24"
    assert all(t.amount == 700.0 and t.property_id == "p1" and t.room_id == "r1" for t in txns)


def test_rent_stops_at_exit_date():
    tenants = [TenantIn(id="t1", name="Ana", entry_date=date(2024, 1, 15), exit_date=date(2024, 3, 20), due_day=8, room_id="r1")]
    rooms = [RoomIn(id="r1", property_id="p1", number="C1", price=700)]
    out = generate_rent_transactions(tenants=tenants, rooms=rooms, properties=[PropertyIn(id="p1", name="Casa")], now=TODAY)
    assert [t.date for t in out] == [date(2024, 2, 8), date(2024, 3, 8)]


def test_fixed_bills_use_base_value_and_variable_bills_stay_within_ten_percent():
    txns = _demo()
    fixed = [t for t in txns if t.supplier_id == "s2"]
    assert fixed and all(t.amount == 99.9 for t in fixed)
    # Jan/24 .. Oct/26, due on the 10th
    assert len(fixed) == 34
    assert fixed[0].id == "gen-util-s2-2026-10-10"
    assert fixed[0].description == "IPTU - Centro - Out/26"

    water = [t for t in txns if t.supplier_id == "s1"]
    assert all(423.0 <= t.amount <= 517.0 for t in water)
    assert len({t.amount for t in water}) > 1


def test_event_based_suppliers_get_no_bills():
    assert not [t for t in _demo() if t.supplier_id in ("s8a", "s9", "s10", "s11")]


def test_same_seed_same_history():
    assert _demo(3) == _demo(3)


def test_due_day_31_lands_on_month_end():
    suppliers = [SupplierIn(id="s1", name="Condominio", due_day=31, base_value=100)]
    out = generate_supplier_transactions(suppliers=suppliers, now=date(2024, 3, 31), rng=random.Random(0))
    assert [t.date for t in out] == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]
