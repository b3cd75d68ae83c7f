# backend/rentmaster/services/data_export.py
from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any, Iterable, Union

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..domain.periods import as_date
from ..schemas import SNAPSHOT_TABLES, RestoreResultOut, Snapshot
from .snapshot_store import replace_snapshot

log = logging.getLogger(__name__)

BACKUP_ERROR_MESSAGE = "Erro ao processar arquivo de backup."

# export file names the spreadsheet users know
TSV_EXPORT_NAMES = {
    "properties": "imoveis",
    "rooms": "quartos",
    "tenants": "inquilinos",
    "transactions": "transacoes",
    "suppliers": "fornecedores",
}


class BackupFormatError(ValueError):
    def __init__(self, message: str = BACKUP_ERROR_MESSAGE) -> None:
        super().__init__(message)


def backup_filename(now: Union[date, datetime]) -> str:
    return f"rentmaster_backup_{as_date(now).isoformat()}.json"


def table_rows(snap: Snapshot, table: str) -> list[dict[str, Any]]:
    return [item.model_dump(by_alias=True, mode="json") for item in getattr(snap, table)]


def backup_payload(snap: Snapshot) -> dict[str, list[dict[str, Any]]]:
    return {table: table_rows(snap, table) for table in SNAPSHOT_TABLES}


def dump_backup(snap: Snapshot) -> str:
    return json.dumps(backup_payload(snap), ensure_ascii=False, indent=2)


def parse_backup(raw: Union[str, bytes]) -> tuple[Snapshot, list[str]]:
    """
    Parse a backup file. Returns the snapshot and the tables it carries;
    tables absent (or null) in the file are not part of the restore.
    """
    try:
        data = json.loads(raw)
    except (ValueError, TypeError) as e:
        raise BackupFormatError() from e
    if not isinstance(data, dict):
        raise BackupFormatError()

    present = [t for t in SNAPSHOT_TABLES if data.get(t) is not None]
    try:
        snap = Snapshot.model_validate({t: data[t] for t in present})
    except ValidationError as e:
        raise BackupFormatError() from e
    return snap, present


def restore_backup(db: Session, raw: Union[str, bytes]) -> RestoreResultOut:
    snap, present = parse_backup(raw)
    try:
        counts = replace_snapshot(db, snap, tables=present, source="backup") if present else {}
    except IntegrityError as e:
        db.rollback()
        raise BackupFormatError() from e
    log.info("backup restored", extra={"source": "backup", "rows": counts})
    return RestoreResultOut(ok=True, replaced=present, counts=counts)


def _cell(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v).replace("\t", " ")


def export_tsv(rows: Iterable[dict[str, Any]]) -> str:
    """Header from the first row's keys; an empty table exports nothing."""
    rows = list(rows)
    if not rows:
        return ""
    headers = list(rows[0].keys())
    lines = ["\t".join(headers)]
    lines += ["\t".join(_cell(r.get(h)) for h in headers) for r in rows]
    return "\n".join(lines)


def export_table_tsv(snap: Snapshot, table: str) -> tuple[str, str]:
    """(file name, content) for one table."""
    if table not in TSV_EXPORT_NAMES:
        raise KeyError(table)
    return f"{TSV_EXPORT_NAMES[table]}.tsv", export_tsv(table_rows(snap, table))
