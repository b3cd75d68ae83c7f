# backend/rentmaster/routers/transactions.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_now, get_snapshot
from ..domain.aggregates import property_matches
from ..schemas import Snapshot, TransactionCreate, TransactionIn, TransactionPrefillOut
from ..services.dashboard_service import prefill_view
from ..services.snapshot_store import create_transaction, delete_transaction, update_transaction

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("/prefill", response_model=TransactionPrefillOut)
def prefill(
    type: Literal["revenue", "expense"] = Query(default="revenue"),
    snap: Snapshot = Depends(get_snapshot),
    now: datetime = Depends(get_now),
):
    """New-transaction form values for the most urgent pending rent or bill."""
    return prefill_view(snap, txn_type=type, now=now)


@router.get("", response_model=list[TransactionIn])
def list_txns(
    property_id: str = Query(default="all"),
    type: Optional[Literal["revenue", "expense"]] = Query(default=None),
    limit: int = Query(default=2000, ge=1, le=10000),
    snap: Snapshot = Depends(get_snapshot),
):
    out = [
        t
        for t in snap.transactions
        if property_matches(t.property_id, property_id) and (type is None or t.type == type)
    ]
    return out[:limit]


@router.post("", response_model=TransactionIn)
def create_txn(
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    return create_transaction(db, payload, now=now)


@router.put("/{transaction_id}", response_model=TransactionIn)
def update_txn(transaction_id: str, payload: TransactionCreate, db: Session = Depends(get_db)):
    return update_transaction(db, transaction_id, payload)


@router.delete("/{transaction_id}")
def delete_txn(transaction_id: str, db: Session = Depends(get_db)):
    delete_transaction(db, transaction_id)
    return {"ok": True, "id": transaction_id}
