# backend/rentmaster/routers/data.py
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_now, get_snapshot
from ..schemas import RestoreResultOut, Snapshot, SyncResultOut
from ..services.cloud_sync import pull_and_replace
from ..services.data_export import (
    BackupFormatError,
    backup_filename,
    backup_payload,
    export_table_tsv,
    restore_backup,
)
from ..services.snapshot_store import reset_store

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/backup")
def backup(snap: Snapshot = Depends(get_snapshot), now: datetime = Depends(get_now)):
    return JSONResponse(
        content=backup_payload(snap),
        headers={"Content-Disposition": f'attachment; filename="{backup_filename(now)}"'},
    )


@router.post("/restore", response_model=RestoreResultOut)
def restore(file: UploadFile = File(...), db: Session = Depends(get_db)):
    """
    Upload a backup file as produced by GET /data/backup. Each table in
    the file replaces the stored one; tables missing from it stay as they are.
    """
    raw = file.file.read()
    try:
        return restore_backup(db, raw)
    except BackupFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/reset")
def reset(db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    """Erase every table. The demo portfolio is not reloaded on the next start."""
    return {"ok": True, "counts": reset_store(db, now=now)}


@router.get("/export/{table}")
def export_table(
    table: Literal["properties", "rooms", "tenants", "transactions", "suppliers"],
    snap: Snapshot = Depends(get_snapshot),
):
    filename, content = export_table_tsv(snap, table)
    if not content:
        return Response(status_code=204)
    return Response(
        content=content,
        media_type="text/tab-separated-values; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/sync", response_model=SyncResultOut)
def sync(db: Session = Depends(get_db)):
    return SyncResultOut(**asdict(pull_and_replace(db)))
