# backend/rentmaster/services/snapshot_store.py
from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Iterable, Optional

from fastapi import HTTPException
from pydantic import BaseModel
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..domain.money import clean_amount
from ..domain.seed_generator import generate_seed_transactions
from ..models import TABLE_MODELS, StoreMeta, Transaction
from ..schemas import (
    SNAPSHOT_TABLES,
    PropertyIn,
    RoomIn,
    Snapshot,
    SupplierIn,
    TenantIn,
    TransactionCreate,
    TransactionIn,
)
from ..seed.demo_seed import demo_properties, demo_rooms, demo_suppliers, demo_tenants

log = logging.getLogger(__name__)

SCHEMA_BY_TABLE: dict[str, type[BaseModel]] = {
    "properties": PropertyIn,
    "rooms": RoomIn,
    "tenants": TenantIn,
    "suppliers": SupplierIn,
    "transactions": TransactionIn,
}

# id prefixes for entities created from the forms: p-<ms>, r-<ms>, ...
ID_PREFIX = {
    "properties": "p",
    "rooms": "r",
    "tenants": "t",
    "suppliers": "s",
    "transactions": "tr",
}

ENTITY_LABEL = {
    "properties": "property",
    "rooms": "room",
    "tenants": "tenant",
    "suppliers": "supplier",
    "transactions": "transaction",
}

INITIALIZED_KEY = "initialized_at"


def _row_to_dict(row) -> dict:
    return {c.key: getattr(row, c.key) for c in row.__table__.columns if c.key != "position"}


def load_table(db: Session, table: str) -> list:
    model = TABLE_MODELS[table]
    schema = SCHEMA_BY_TABLE[table]
    rows = db.scalars(select(model).order_by(model.position, model.id)).all()
    return [schema.model_validate(_row_to_dict(r)) for r in rows]


def load_snapshot(db: Session) -> Snapshot:
    """Read every table into one immutable snapshot, in stored order."""
    return Snapshot(**{table: load_table(db, table) for table in SNAPSHOT_TABLES})


def replace_snapshot(
    db: Session,
    snapshot: Snapshot,
    *,
    tables: Optional[Iterable[str]] = None,
    source: str = "local",
) -> dict[str, int]:
    """
    Replace the given tables (all by default) with the snapshot's lists.
    One commit for the whole replacement; tables not listed are untouched.
    """
    targets = list(tables) if tables is not None else list(SNAPSHOT_TABLES)
    counts: dict[str, int] = {}

    # rows loaded earlier in this session would clash with re-inserted ids
    db.expunge_all()

    for table in targets:
        if table not in TABLE_MODELS:
            raise ValueError(f"unknown table: {table}")
        model = TABLE_MODELS[table]
        items = getattr(snapshot, table)

        db.execute(delete(model))
        for pos, item in enumerate(items):
            db.add(model(**item.model_dump(), position=pos))
        counts[table] = len(items)

    db.commit()
    log.info("snapshot replaced", extra={"source": source, "rows": counts})
    return counts


def is_empty(db: Session) -> bool:
    for model in TABLE_MODELS.values():
        if db.scalar(select(func.count()).select_from(model)):
            return False
    return True


def _mark_initialized(db: Session, now: datetime) -> None:
    if db.get(StoreMeta, INITIALIZED_KEY) is None:
        db.add(StoreMeta(key=INITIALIZED_KEY, value=now.isoformat()))


def is_initialized(db: Session) -> bool:
    return db.get(StoreMeta, INITIALIZED_KEY) is not None


def build_demo_snapshot(
    *,
    now: datetime,
    rng: Optional[random.Random] = None,
    reference_year: int = 2024,
) -> Snapshot:
    properties = demo_properties()
    rooms = demo_rooms()
    tenants = demo_tenants()
    suppliers = demo_suppliers()
    transactions = generate_seed_transactions(
        tenants=tenants,
        rooms=rooms,
        properties=properties,
        suppliers=suppliers,
        now=now,
        rng=rng,
        reference_year=reference_year,
    )
    return Snapshot(
        properties=properties,
        rooms=rooms,
        tenants=tenants,
        suppliers=suppliers,
        transactions=transactions,
    )


def ensure_seeded(
    db: Session,
    *,
    now: datetime,
    rng: Optional[random.Random] = None,
    reference_year: int = 2024,
) -> bool:
    """
    Load the demo portfolio into a store that was never initialized.
    A store emptied by reset_store stays empty. Returns True if it seeded.
    """
    if is_initialized(db):
        return False
    if not is_empty(db):
        _mark_initialized(db, now)
        db.commit()
        return False

    snap = build_demo_snapshot(now=now, rng=rng, reference_year=reference_year)
    replace_snapshot(db, snap, source="seed")
    _mark_initialized(db, now)
    db.commit()
    return True


def reset_store(db: Session, *, now: datetime) -> dict[str, int]:
    """Wipe every table. The demo portfolio is not loaded again afterwards."""
    counts = replace_snapshot(db, Snapshot(), source="reset")
    _mark_initialized(db, now)
    db.commit()
    return counts


# -------------------- Row lookup / ids --------------------

def must_get_row(db: Session, table: str, row_id: str):
    model = TABLE_MODELS[table]
    row = db.scalar(select(model).where(model.id == row_id))
    if not row:
        raise HTTPException(status_code=404, detail=f"{ENTITY_LABEL[table]} not found")
    return row


def must_get_transaction(db: Session, transaction_id: str) -> Transaction:
    return must_get_row(db, "transactions", transaction_id)


def new_id(table: str, now: datetime) -> str:
    return f"{ID_PREFIX[table]}-{int(now.timestamp() * 1000)}"


def new_transaction_id(now: datetime) -> str:
    return new_id("transactions", now)


def _free_id(db: Session, table: str, now: datetime) -> str:
    model = TABLE_MODELS[table]
    row_id = new_id(table, now)
    while db.scalar(select(model.id).where(model.id == row_id)):
        row_id = f"{row_id}-1"
    return row_id


def _as_out(table: str, row) -> BaseModel:
    return SCHEMA_BY_TABLE[table].model_validate(_row_to_dict(row))


# -------------------- Entity forms --------------------

def create_entity(db: Session, table: str, payload: BaseModel, *, now: datetime) -> BaseModel:
    """New properties, rooms, tenants and suppliers go to the end of their list."""
    data = payload.model_dump(exclude={"id"})

    if table == "rooms":
        # occupancy is set when a tenant moves in, not on the room form
        data["is_occupied"] = False
    if table == "suppliers" and not data.get("frequency"):
        data["frequency"] = "Mensal"

    model = TABLE_MODELS[table]
    bottom = db.scalar(select(func.max(model.position)))
    row = model(id=_free_id(db, table, now), position=(bottom + 1) if bottom is not None else 0, **data)
    db.add(row)
    db.commit()
    db.refresh(row)

    log.info("entity created", extra={"table": table})
    return _as_out(table, row)


def update_entity(db: Session, table: str, row_id: str, payload: BaseModel) -> BaseModel:
    row = must_get_row(db, table, row_id)

    for k, v in payload.model_dump(exclude={"id"}).items():
        setattr(row, k, v)

    db.add(row)
    db.commit()
    db.refresh(row)

    log.info("entity updated", extra={"table": table})
    return _as_out(table, row)


def delete_entity(db: Session, table: str, row_id: str) -> None:
    row = must_get_row(db, table, row_id)
    db.delete(row)
    db.commit()
    log.info("entity deleted", extra={"table": table})


def delete_supplier(db: Session, supplier_id: str) -> None:
    delete_entity(db, "suppliers", supplier_id)


# -------------------- Transaction entry --------------------

def create_transaction(db: Session, payload: TransactionCreate, *, now: datetime) -> TransactionIn:
    """New entries go to the top of the list, amount cleaned."""
    data = payload.model_dump()
    data["amount"] = clean_amount(data["amount"])

    top = db.scalar(select(func.min(Transaction.position)))
    row = Transaction(
        id=_free_id(db, "transactions", now),
        position=(top - 1) if top is not None else 0,
        **data,
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    log.info("transaction created", extra={"property_id": row.property_id})
    return TransactionIn.model_validate(_row_to_dict(row))


def update_transaction(db: Session, transaction_id: str, payload: TransactionCreate) -> TransactionIn:
    row = must_get_transaction(db, transaction_id)

    data = payload.model_dump()
    data["amount"] = clean_amount(data["amount"])
    for k, v in data.items():
        setattr(row, k, v)

    db.add(row)
    db.commit()
    db.refresh(row)
    return TransactionIn.model_validate(_row_to_dict(row))


def delete_transaction(db: Session, transaction_id: str) -> None:
    delete_entity(db, "transactions", transaction_id)
