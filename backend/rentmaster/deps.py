# backend/rentmaster/deps.py
from __future__ import annotations

from datetime import datetime

from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_db
from .schemas import Snapshot
from .services.snapshot_store import load_snapshot


def get_now() -> datetime:
    # overridden in tests to pin "today"
    return datetime.now()


def get_snapshot(db: Session = Depends(get_db)) -> Snapshot:
    return load_snapshot(db)
