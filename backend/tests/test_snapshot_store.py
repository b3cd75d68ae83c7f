# backend/tests/test_snapshot_store.py
from __future__ import annotations

import random
from datetime import date, datetime

import pytest
from fastapi import HTTPException

from rentmaster.schemas import (
    PropertyCreate,
    PropertyIn,
    RoomCreate,
    Snapshot,
    SupplierCreate,
    TenantCreate,
    TransactionCreate,
    TransactionIn,
)
from rentmaster.services.snapshot_store import (
    create_entity,
    create_transaction,
    delete_supplier,
    delete_transaction,
    ensure_seeded,
    load_snapshot,
    new_id,
    new_transaction_id,
    replace_snapshot,
    reset_store,
    update_entity,
    update_transaction,
)

NOW = datetime(2026, 10, 19, 10, 0, 0)


def test_seeds_only_an_empty_store(db):
    assert ensure_seeded(db, now=NOW, rng=random.Random(1)) is True
    assert ensure_seeded(db, now=NOW, rng=random.Random(1)) is False

    snap = load_snapshot(db)
    assert len(snap.properties) == 2
    assert len(snap.rooms) == 12
    assert len(snap.tenants) == 11
    assert len(snap.suppliers) == 11
    assert snap.transactions
    assert all(t.date <= NOW.date() for t in snap.transactions)


def test_load_keeps_written_order(db):
    snap = Snapshot(
        properties=[PropertyIn(id="p9", name="Z"), PropertyIn(id="p1", name="A"), PropertyIn(id="p5", name="M")]
    )
    replace_snapshot(db, snap, tables=["properties"])
    assert [p.id for p in load_snapshot(db).properties] == ["p9", "p1", "p5"]


def test_replace_only_touches_listed_tables(seeded_db):
    before = load_snapshot(seeded_db)
    counts = replace_snapshot(seeded_db, Snapshot(), tables=["transactions"])

    after = load_snapshot(seeded_db)
    assert counts == {"transactions": 0}
    assert after.transactions == []
    assert after.rooms == before.rooms
    assert after.tenants == before.tenants


def test_replace_rejects_unknown_table(db):
    with pytest.raises(ValueError):
        replace_snapshot(db, Snapshot(), tables=["leases"])


def test_round_trips_optional_fields(db):
    snap = Snapshot(
        transactions=[
            TransactionIn(id="a", amount=10, date=date(2026, 1, 2), type="expense", supplier_id="s1"),
        ]
    )
    replace_snapshot(db, snap)
    t = load_snapshot(db).transactions[0]
    assert t.supplier_id == "s1"
    assert t.tenant_id is None
    assert t.description == ""


def test_create_cleans_amount_and_goes_first(seeded_db):
    payload = TransactionCreate(
        description="Reparo", amount=10.005, date=date(2026, 10, 18), type="expense", category="Profissional"
    )
    row = create_transaction(seeded_db, payload, now=NOW)

    assert row.id == new_transaction_id(NOW)
    assert row.id.startswith("tr-")
    assert row.amount == 10.01
    assert load_snapshot(seeded_db).transactions[0].id == row.id


def test_update_and_delete(seeded_db):
    row = create_transaction(
        seeded_db,
        TransactionCreate(amount=50, date=date(2026, 10, 18), type="expense"),
        now=NOW,
    )
    upd = update_transaction(
        seeded_db,
        row.id,
        TransactionCreate(amount=60.333, date=date(2026, 10, 17), type="expense", description="Gás"),
    )
    assert (upd.amount, upd.date, upd.description) == (60.33, date(2026, 10, 17), "Gás")

    delete_transaction(seeded_db, row.id)
    assert row.id not in [t.id for t in load_snapshot(seeded_db).transactions]


def test_unknown_transaction_is_404(db):
    with pytest.raises(HTTPException) as e:
        delete_transaction(db, "tr-missing")
    assert e.value.status_code == 404


def test_entity_ids_follow_table_prefix(seeded_db):
    prop = create_entity(seeded_db, "properties", PropertyCreate(name="Kitnet Ingá", type="Kitnet"), now=NOW)
    room = create_entity(seeded_db, "rooms", RoomCreate(property_id=prop.id, number="K1", price=650), now=NOW)
    tenant = create_entity(
        seeded_db,
        "tenants",
        TenantCreate(name="Rui Prado", entry_date=date(2026, 10, 1), due_day=5, room_id=room.id),
        now=NOW,
    )
    supplier = create_entity(seeded_db, "suppliers", SupplierCreate(name="Copel"), now=NOW)

    assert prop.id == new_id("properties", NOW)
    assert prop.id.startswith("p-")
    assert room.id.startswith("r-")
    assert tenant.id.startswith("t-")
    assert supplier.id.startswith("s-")

    snap = load_snapshot(seeded_db)
    assert snap.properties[-1].id == prop.id
    assert snap.rooms[-1].id == room.id
    assert snap.tenants[-1].id == tenant.id
    assert snap.suppliers[-1].id == supplier.id


def test_new_room_starts_unoccupied(db):
    room = create_entity(
        db, "rooms", RoomCreate(property_id="p1", number="C9", is_occupied=True, tenant_id="t1"), now=NOW
    )
    assert room.is_occupied is False


def test_new_supplier_defaults_to_monthly(db):
    assert create_entity(db, "suppliers", SupplierCreate(name="Sanepar"), now=NOW).frequency == "Mensal"
    weekly = create_entity(db, "suppliers", SupplierCreate(name="Jardim", frequency="Semanal"), now=NOW)
    assert weekly.frequency == "Semanal"


def test_same_millisecond_ids_do_not_collide(db):
    a = create_entity(db, "properties", PropertyCreate(name="A"), now=NOW)
    b = create_entity(db, "properties", PropertyCreate(name="B"), now=NOW)
    assert a.id != b.id
    assert b.id == f"{a.id}-1"


def test_update_entity_keeps_id(seeded_db):
    tenant = load_snapshot(seeded_db).tenants[0]
    form = TenantCreate(**tenant.model_dump(exclude={"id", "exit_date"}), exit_date=date(2026, 9, 30))
    upd = update_entity(seeded_db, "tenants", tenant.id, form)
    assert upd.id == tenant.id
    assert upd.exit_date == date(2026, 9, 30)

    supplier = load_snapshot(seeded_db).suppliers[0]
    upd = update_entity(
        seeded_db, "suppliers", supplier.id, SupplierCreate(**supplier.model_dump(exclude={"id", "due_day"}), due_day=12)
    )
    assert upd.due_day == 12


def test_unknown_entity_is_404(db):
    with pytest.raises(HTTPException) as e:
        update_entity(db, "rooms", "r-missing", RoomCreate(property_id="p1", number="X"))
    assert e.value.status_code == 404
    assert e.value.detail == "room not found"


def test_delete_supplier(seeded_db):
    supplier_id = load_snapshot(seeded_db).suppliers[0].id
    delete_supplier(seeded_db, supplier_id)
    assert supplier_id not in [s.id for s in load_snapshot(seeded_db).suppliers]

    with pytest.raises(HTTPException) as e:
        delete_supplier(seeded_db, supplier_id)
    assert e.value.status_code == 404


def test_reset_empties_store_and_blocks_reseed(seeded_db):
    counts = reset_store(seeded_db, now=NOW)
    assert counts == {"properties": 0, "rooms": 0, "tenants": 0, "transactions": 0, "suppliers": 0}
    assert load_snapshot(seeded_db) == Snapshot()

    assert ensure_seeded(seeded_db, now=NOW, rng=random.Random(1)) is False
    assert load_snapshot(seeded_db) == Snapshot()


def test_store_with_data_is_never_seeded(db):
    replace_snapshot(db, Snapshot(properties=[PropertyIn(id="p1", name="Casa")]))
    assert ensure_seeded(db, now=NOW, rng=random.Random(1)) is False
    assert [p.id for p in load_snapshot(db).properties] == ["p1"]
