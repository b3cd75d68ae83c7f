# backend/rentmaster/routers/entities.py
from __future__ import annotations

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_now, get_snapshot
from ..domain.aggregates import property_matches
from ..schemas import (
    PropertyCreate,
    PropertyIn,
    RoomCreate,
    RoomIn,
    Snapshot,
    SupplierCreate,
    SupplierIn,
    TenantCreate,
    TenantIn,
)
from ..services.snapshot_store import create_entity, delete_supplier, update_entity

router = APIRouter(tags=["entities"])


# -------------------- Properties --------------------

@router.get("/properties", response_model=list[PropertyIn])
def list_properties(snap: Snapshot = Depends(get_snapshot)):
    return snap.properties


@router.post("/properties", response_model=PropertyIn)
def create_property(payload: PropertyCreate, db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    return create_entity(db, "properties", payload, now=now)


@router.put("/properties/{property_id}", response_model=PropertyIn)
def update_property(property_id: str, payload: PropertyCreate, db: Session = Depends(get_db)):
    return update_entity(db, "properties", property_id, payload)


# -------------------- Rooms --------------------

@router.get("/rooms", response_model=list[RoomIn])
def list_rooms(
    property_id: str = Query(default="all"),
    snap: Snapshot = Depends(get_snapshot),
):
    return [r for r in snap.rooms if property_matches(r.property_id, property_id)]


@router.post("/rooms", response_model=RoomIn)
def create_room(payload: RoomCreate, db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    """New rooms start unoccupied."""
    return create_entity(db, "rooms", payload, now=now)


@router.put("/rooms/{room_id}", response_model=RoomIn)
def update_room(room_id: str, payload: RoomCreate, db: Session = Depends(get_db)):
    return update_entity(db, "rooms", room_id, payload)


# -------------------- Tenants --------------------

@router.get("/tenants", response_model=list[TenantIn])
def list_tenants(
    view: Literal["active", "all"] = Query(default="active"),
    snap: Snapshot = Depends(get_snapshot),
):
    """`active` hides tenants with a recorded exit date."""
    if view == "active":
        return [t for t in snap.tenants if t.is_active]
    return snap.tenants


@router.post("/tenants", response_model=TenantIn)
def create_tenant(payload: TenantCreate, db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    return create_entity(db, "tenants", payload, now=now)


@router.put("/tenants/{tenant_id}", response_model=TenantIn)
def update_tenant(tenant_id: str, payload: TenantCreate, db: Session = Depends(get_db)):
    return update_entity(db, "tenants", tenant_id, payload)


# -------------------- Suppliers --------------------

@router.get("/suppliers", response_model=list[SupplierIn])
def list_suppliers(
    property_id: str = Query(default="all"),
    snap: Snapshot = Depends(get_snapshot),
):
    # suppliers without a property serve every property
    return [s for s in snap.suppliers if not s.property_id or property_matches(s.property_id, property_id)]


@router.post("/suppliers", response_model=SupplierIn)
def create_supplier(payload: SupplierCreate, db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    return create_entity(db, "suppliers", payload, now=now)


@router.put("/suppliers/{supplier_id}", response_model=SupplierIn)
def update_supplier(supplier_id: str, payload: SupplierCreate, db: Session = Depends(get_db)):
    return update_entity(db, "suppliers", supplier_id, payload)


@router.delete("/suppliers/{supplier_id}")
def remove_supplier(supplier_id: str, db: Session = Depends(get_db)):
    delete_supplier(db, supplier_id)
    return {"ok": True, "id": supplier_id}
