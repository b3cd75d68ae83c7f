# backend/rentmaster/services/cloud_sync.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..clients.supabase_rest import SupabaseRestClient
from ..schemas import SNAPSHOT_TABLES, Snapshot
from .snapshot_store import replace_snapshot

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullResult:
    ok: bool
    enabled: bool
    counts: dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None


def pull_snapshot(client: SupabaseRestClient) -> Snapshot:
    """Fetch every table; the first failing table aborts the pull."""
    data = {}
    for table in SNAPSHOT_TABLES:
        data[table] = client.fetch_table(table)
        log.info("remote table fetched", extra={"table": table, "rows": len(data[table])})
    return Snapshot.model_validate(data)


def pull_and_replace(db: Session, client: Optional[SupabaseRestClient] = None) -> PullResult:
    """
    One-shot pull from the cloud copy. Local data is only touched when
    every table was fetched and validated.
    """
    client = client or SupabaseRestClient()
    if not client.enabled():
        return PullResult(ok=False, enabled=False, error="supabase not configured")

    try:
        snap = pull_snapshot(client)
    except (httpx.HTTPError, ValueError, ValidationError) as e:
        log.warning("remote pull failed: %s", e, extra={"source": "supabase"})
        return PullResult(ok=False, enabled=True, error=str(e))

    try:
        counts = replace_snapshot(db, snap, source="supabase")
    except IntegrityError as e:
        db.rollback()
        log.warning("remote snapshot rejected by the store: %s", e, extra={"source": "supabase"})
        return PullResult(ok=False, enabled=True, error=str(e.orig))

    return PullResult(ok=True, enabled=True, counts=counts)
