# backend/tests/test_cloud_sync.py
from __future__ import annotations

import httpx

from rentmaster.clients.supabase_rest import SupabaseRestClient
from rentmaster.services.cloud_sync import pull_and_replace
from rentmaster.services.snapshot_store import load_snapshot

REMOTE = {
    "properties": [{"id": "p1", "name": "Casa Centro", "type": "Casa", "address": "Rua A"}],
    "rooms": [{"id": "r1", "property_id": "p1", "number": "C1", "area": 15, "is_occupied": True, "tenant_id": "t1", "price": 700}],
    "tenants": [{"id": "t1", "name": "Lia", "entry_date": "2024-01-15", "due_day": 8, "room_id": "r1", "exit_date": None}],
    "transactions": [
        {"id": "tr-1", "description": "Aluguel", "amount": 700, "date": "2026-10-08", "type": "revenue", "category": "Aluguel", "tenantId": "t1"}
    ],
    "suppliers": [],
}


def _client(handler) -> SupabaseRestClient:
    return SupabaseRestClient(
        base_url="https://example.supabase.co/",
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )


def _ok(request: httpx.Request) -> httpx.Response:
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"
    assert request.url.params["select"] == "*"
    table = request.url.path.rsplit("/", 1)[-1]
    return httpx.Response(200, json=REMOTE[table])


def test_not_configured_is_disabled(db):
    res = pull_and_replace(db, SupabaseRestClient(base_url="", api_key=""))
    assert res.ok is False
    assert res.enabled is False


def test_successful_pull_replaces_everything(seeded_db):
    res = pull_and_replace(seeded_db, _client(_ok))
    assert res.ok is True
    assert res.counts == {"properties": 1, "rooms": 1, "tenants": 1, "transactions": 1, "suppliers": 0}

    snap = load_snapshot(seeded_db)
    assert [r.id for r in snap.rooms] == ["r1"]
    assert snap.transactions[0].tenant_id == "t1"
    assert snap.suppliers == []


def test_any_failing_table_aborts_the_pull(seeded_db):
    before = load_snapshot(seeded_db)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/transactions"):
            return httpx.Response(500, json={"message": "boom"})
        return _ok(request)

    res = pull_and_replace(seeded_db, _client(handler))
    assert res.ok is False
    assert res.enabled is True
    assert res.error

    assert load_snapshot(seeded_db) == before


def test_malformed_rows_abort_the_pull(seeded_db):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/tenants"):
            return httpx.Response(200, json=[{"id": "t1"}])
        return _ok(request)

    res = pull_and_replace(seeded_db, _client(handler))
    assert res.ok is False
    assert len(load_snapshot(seeded_db).tenants) == 11


def test_duplicate_remote_ids_abort_the_pull(seeded_db):
    before = load_snapshot(seeded_db)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/properties"):
            return httpx.Response(200, json=[{"id": "p1", "name": "A"}, {"id": "p1", "name": "B"}])
        return _ok(request)

    res = pull_and_replace(seeded_db, _client(handler))
    assert res.ok is False
    assert res.enabled is True
    assert "duplicate id" in res.error
    assert load_snapshot(seeded_db) == before


def test_store_rejection_is_reported(seeded_db, monkeypatch):
    from sqlalchemy.exc import IntegrityError

    from rentmaster.services import cloud_sync

    def reject(*args, **kwargs):
        raise IntegrityError("INSERT INTO rooms", {}, Exception("UNIQUE constraint failed: rooms.id"))

    monkeypatch.setattr(cloud_sync, "replace_snapshot", reject)
    res = pull_and_replace(seeded_db, _client(_ok))
    assert res.ok is False
    assert res.enabled is True
    assert "UNIQUE" in res.error
