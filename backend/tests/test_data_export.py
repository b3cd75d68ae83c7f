# backend/tests/test_data_export.py
from __future__ import annotations

import json
from datetime import date, datetime

import pytest

from rentmaster.schemas import PropertyIn, RoomIn, Snapshot
from rentmaster.services.data_export import (
    BackupFormatError,
    backup_filename,
    backup_payload,
    dump_backup,
    export_table_tsv,
    export_tsv,
    parse_backup,
    restore_backup,
)
from rentmaster.services.snapshot_store import load_snapshot


def test_backup_file_name():
    assert backup_filename(datetime(2026, 10, 19, 23, 59)) == "rentmaster_backup_2026-10-19.json"


def test_backup_uses_camel_case_keys(seeded_db):
    payload = backup_payload(load_snapshot(seeded_db))
    assert set(payload) == {"properties", "rooms", "tenants", "transactions", "suppliers"}
    room = payload["rooms"][0]
    assert room["propertyId"] == "p1"
    assert "isOccupied" in room
    assert payload["tenants"][0]["entryDate"] == "2024-01-15"


def test_backup_restores_to_the_same_snapshot(seeded_db):
    snap = load_snapshot(seeded_db)
    parsed, present = parse_backup(dump_backup(snap))
    assert present == ["properties", "rooms", "tenants", "transactions", "suppliers"]
    assert parsed == snap


def test_restore_replaces_only_present_tables(seeded_db):
    rooms_before = load_snapshot(seeded_db).rooms
    raw = json.dumps({"properties": [{"id": "p7", "name": "Kitnet Ingá", "type": "Kitnet", "address": ""}]})

    res = restore_backup(seeded_db, raw)
    assert res.ok is True
    assert res.replaced == ["properties"]

    snap = load_snapshot(seeded_db)
    assert [p.id for p in snap.properties] == ["p7"]
    assert snap.rooms == rooms_before


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '{"rooms": [{"id": "r1"}]}'])
def test_bad_backup_raises_with_user_message(raw):
    with pytest.raises(BackupFormatError) as e:
        parse_backup(raw)
    assert str(e.value) == "Erro ao processar arquivo de backup."


def test_tsv_header_from_first_row_and_tabs_flattened():
    rows = [
        {"id": "t1", "description": "Aluguel\tLia", "amount": 700.0, "tenantId": None},
        {"id": "t2", "description": "Luz", "amount": 99.9, "tenantId": "t9"},
    ]
    assert export_tsv(rows) == "id\tdescription\tamount\ttenantId\nt1\tAluguel Lia\t700.0\t\nt2\tLuz\t99.9\tt9"


def test_empty_table_exports_nothing():
    assert export_tsv([]) == ""
    name, content = export_table_tsv(Snapshot(), "suppliers")
    assert (name, content) == ("fornecedores.tsv", "")


def test_table_export_uses_portuguese_file_names():
    snap = Snapshot(
        properties=[PropertyIn(id="p1", name="Casa Centro")],
        rooms=[RoomIn(id="r1", property_id="p1", number="C1", is_occupied=True, price=700)],
    )
    name, content = export_table_tsv(snap, "rooms")
    assert name == "quartos.tsv"
    header, row = content.split("\n")
    assert header.split("\t")[:3] == ["id", "propertyId", "number"]
    assert "true" in row.split("\t")

    assert export_table_tsv(snap, "properties")[0] == "imoveis.tsv"
    with pytest.raises(KeyError):
        export_table_tsv(snap, "leases")


def test_restore_dates_parse(db):
    raw = json.dumps(
        {
            "tenants": [
                {"id": "t1", "name": "Lia", "entryDate": "2024-01-15", "dueDay": 8, "roomId": "r1", "exitDate": ""}
            ]
        }
    )
    restore_backup(db, raw)
    t = load_snapshot(db).tenants[0]
    assert t.entry_date == date(2024, 1, 15)
    assert t.exit_date is None


def test_duplicate_ids_are_a_format_error(seeded_db):
    before = load_snapshot(seeded_db)
    raw = json.dumps({"properties": [{"id": "p1", "name": "A"}, {"id": "p1", "name": "B"}]})

    with pytest.raises(BackupFormatError) as e:
        restore_backup(seeded_db, raw)
    assert str(e.value) == "Erro ao processar arquivo de backup."
    assert load_snapshot(seeded_db) == before


def test_store_rejection_is_a_format_error(seeded_db, monkeypatch):
    from sqlalchemy.exc import IntegrityError

    from rentmaster.services import data_export

    def reject(*args, **kwargs):
        raise IntegrityError("INSERT INTO properties", {}, Exception("UNIQUE constraint failed: properties.id"))

    monkeypatch.setattr(data_export, "replace_snapshot", reject)
    with pytest.raises(BackupFormatError):
        restore_backup(seeded_db, json.dumps({"properties": [{"id": "p9", "name": "Nova"}]}))
    assert len(load_snapshot(seeded_db).properties) == 2
