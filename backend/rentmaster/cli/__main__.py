# backend/rentmaster/cli/__main__.py
from __future__ import annotations

import argparse
import json
import random
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from rentmaster.config import settings
from rentmaster.db import SessionLocal, init_db
from rentmaster.logging_config import configure_logging
from rentmaster.services.cloud_sync import pull_and_replace
from rentmaster.services.dashboard_service import alerts_view, dashboard_view, forecast_view
from rentmaster.services.data_export import (
    TSV_EXPORT_NAMES,
    BackupFormatError,
    backup_filename,
    dump_backup,
    export_table_tsv,
    restore_backup,
)
from rentmaster.services.snapshot_store import (
    build_demo_snapshot,
    ensure_seeded,
    load_snapshot,
    replace_snapshot,
    reset_store,
)


def _print(obj) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2, default=str))


def cmd_seed(db, args, now: datetime) -> int:
    rng = random.Random(args.random_seed if args.random_seed is not None else settings.seed_random_seed)
    if args.force:
        snap = build_demo_snapshot(now=now, rng=rng, reference_year=args.reference_year)
        counts = replace_snapshot(db, snap, source="seed")
        _print({"ok": True, "seeded": True, "counts": counts})
        return 0

    seeded = ensure_seeded(db, now=now, rng=rng, reference_year=args.reference_year)
    _print({"ok": True, "seeded": seeded})
    return 0


def cmd_dashboard(db, args, now: datetime) -> int:
    snap = load_snapshot(db)
    out = {
        "dashboard": dashboard_view(snap, period=args.period, now=now, property_id=args.property_id).model_dump(
            by_alias=True, mode="json"
        ),
        "alerts": alerts_view(snap, now=now, property_id=args.property_id).model_dump(by_alias=True, mode="json"),
        "forecast": [
            i.model_dump(by_alias=True, mode="json") for i in forecast_view(snap, now=now, property_id=args.property_id)
        ],
    }
    _print(out)
    return 0


def cmd_backup(db, args, now: datetime) -> int:
    path = Path(args.out) if args.out else Path(settings.export_dir) / backup_filename(now)
    path.write_text(dump_backup(load_snapshot(db)), encoding="utf-8")
    _print({"ok": True, "file": str(path)})
    return 0


def cmd_restore(db, args, now: datetime) -> int:
    try:
        res = restore_backup(db, Path(args.file).read_bytes())
    except BackupFormatError as e:
        _print({"ok": False, "error": str(e)})
        return 1
    _print(res.model_dump())
    return 0


def cmd_export(db, args, now: datetime) -> int:
    snap = load_snapshot(db)
    out_dir = Path(args.out_dir or settings.export_dir)
    tables = [args.table] if args.table else list(TSV_EXPORT_NAMES)

    written = []
    for table in tables:
        filename, content = export_table_tsv(snap, table)
        if not content:
            continue
        path = out_dir / filename
        path.write_text(content, encoding="utf-8")
        written.append(str(path))

    _print({"ok": True, "files": written})
    return 0


def cmd_reset(db, args, now: datetime) -> int:
    if not args.yes:
        _print({"ok": False, "error": "pass --yes to erase every table"})
        return 1
    _print({"ok": True, "counts": reset_store(db, now=now)})
    return 0


def cmd_sync(db, args, now: datetime) -> int:
    res = pull_and_replace(db)
    _print(asdict(res))
    return 0 if res.ok else 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rentmaster")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("seed", help="load the demo portfolio into an empty store")
    s.add_argument("--force", action="store_true", help="replace existing data")
    s.add_argument("--reference-year", type=int, default=settings.seed_reference_year)
    s.add_argument("--random-seed", type=int, default=None)
    s.set_defaults(func=cmd_seed)

    d = sub.add_parser("dashboard", help="print stats, alerts and forecast as JSON")
    d.add_argument("--period", default="current", choices=["all", "current", "last"])
    d.add_argument("--property-id", default="all")
    d.set_defaults(func=cmd_dashboard)

    b = sub.add_parser("backup", help="write a JSON backup file")
    b.add_argument("--out", default=None)
    b.set_defaults(func=cmd_backup)

    r = sub.add_parser("restore", help="restore tables from a JSON backup file")
    r.add_argument("file")
    r.set_defaults(func=cmd_restore)

    e = sub.add_parser("export", help="write TSV exports")
    e.add_argument("--table", default=None, choices=list(TSV_EXPORT_NAMES))
    e.add_argument("--out-dir", default=None)
    e.set_defaults(func=cmd_export)

    z = sub.add_parser("reset", help="erase every table (no demo reseed afterwards)")
    z.add_argument("--yes", action="store_true")
    z.set_defaults(func=cmd_reset)

    y = sub.add_parser("sync", help="pull every table from Supabase and replace local data")
    y.set_defaults(func=cmd_sync)

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    init_db()

    db = SessionLocal()
    try:
        return args.func(db, args, datetime.now())
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
