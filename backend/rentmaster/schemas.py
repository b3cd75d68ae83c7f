# backend/rentmaster/schemas.py
from __future__ import annotations

import datetime as dt
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel


TransactionType = Literal["revenue", "expense"]
PeriodMode = Literal["all", "current", "last"]


class CamelModel(BaseModel):
    """
    Wire format keeps the camelCase keys of the JSON snapshots
    (propertyId, dueDay, entryDate, ...). Python code uses snake_case.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_blank(cls, v: Any, info: ValidationInfo) -> Any:
        # forms send "" and remote rows send null for unset fields
        field = cls.model_fields.get(info.field_name or "")
        if field is None:
            return v
        if isinstance(v, str) and v.strip() == "" and not field.is_required() and field.default is None:
            return None
        if v is None and isinstance(field.default, str):
            return field.default
        return v


# -------------------- Entities --------------------

class PropertyIn(CamelModel):
    id: str
    name: str
    type: str = "Casa"  # Casa|Apartamento|Kitnet
    address: str = ""
    description: Optional[str] = None


class RoomIn(CamelModel):
    id: str
    property_id: str
    number: str
    area: float = 0.0
    description: Optional[str] = None
    is_occupied: bool = False
    tenant_id: Optional[str] = None
    price: float = Field(default=0.0, ge=0)


class TenantIn(CamelModel):
    id: str
    name: str
    nickname: Optional[str] = None
    cpf: Optional[str] = None
    profession: Optional[str] = None
    whatsapp: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    entry_date: dt.date
    exit_date: Optional[dt.date] = None
    due_day: int = Field(ge=1, le=31)
    room_id: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def _exit_after_entry(self) -> "TenantIn":
        if self.exit_date is not None and self.exit_date < self.entry_date:
            raise ValueError("exitDate cannot be before entryDate")
        return self

    @property
    def is_active(self) -> bool:
        return self.exit_date is None

    @property
    def first_name(self) -> str:
        parts = (self.name or "").split(" ")
        return parts[0] if parts else ""


class SupplierIn(CamelModel):
    id: str
    name: str
    category: str = "Utilidade"  # Utilidade|Profissional
    specialty: Optional[str] = None
    frequency: Optional[str] = None
    due_day: Optional[int] = None
    base_value: Optional[float] = None
    cost_type: str = "fixed"  # fixed|variable
    phone: Optional[str] = None
    address: Optional[str] = None
    whatsapp: Optional[str] = None
    account_number: Optional[str] = None
    obs: Optional[str] = None
    property_id: Optional[str] = None

    @field_validator("due_day", mode="after")
    @classmethod
    def _due_day_in_month(cls, v: Optional[int]) -> Optional[int]:
        # out-of-range due days make the supplier event-based
        if v is None or v < 1 or v > 31:
            return None
        return v

    @property
    def is_scheduled(self) -> bool:
        return bool(self.due_day) and bool(self.base_value)


class TransactionIn(CamelModel):
    id: str
    description: str = ""
    amount: float
    date: dt.date
    type: TransactionType
    category: str = ""
    property_id: Optional[str] = None
    tenant_id: Optional[str] = None
    room_id: Optional[str] = None
    supplier_id: Optional[str] = None


class TransactionCreate(CamelModel):
    description: str = ""
    amount: float = Field(ge=0)
    date: dt.date
    type: TransactionType
    category: str = ""
    property_id: Optional[str] = None
    tenant_id: Optional[str] = None
    room_id: Optional[str] = None
    supplier_id: Optional[str] = None


# Entity forms: same fields, id assigned by the store
class PropertyCreate(PropertyIn):
    id: Optional[str] = None


class RoomCreate(RoomIn):
    id: Optional[str] = None


class TenantCreate(TenantIn):
    id: Optional[str] = None


class SupplierCreate(SupplierIn):
    id: Optional[str] = None


# -------------------- Snapshot --------------------

SNAPSHOT_TABLES = ("properties", "rooms", "tenants", "transactions", "suppliers")


class Snapshot(CamelModel):
    """Immutable per-invocation view of every stored entity list."""

    properties: list[PropertyIn] = Field(default_factory=list)
    rooms: list[RoomIn] = Field(default_factory=list)
    tenants: list[TenantIn] = Field(default_factory=list)
    suppliers: list[SupplierIn] = Field(default_factory=list)
    transactions: list[TransactionIn] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _unique_ids(self) -> "Snapshot":
        for table in SNAPSHOT_TABLES:
            seen: set[str] = set()
            for item in getattr(self, table):
                if item.id in seen:
                    raise ValueError(f"duplicate id in {table}: {item.id}")
                seen.add(item.id)
        return self


# -------------------- Derived outputs --------------------

class TrendPointOut(CamelModel):
    month: str
    label: str
    profit: float
    is_current: bool


class DashboardStatsOut(CamelModel):
    curr_profit: float
    curr_rev: float
    curr_exp: float
    curr_occupancy: int
    chart_data: list[TrendPointOut]


class DashboardOut(CamelModel):
    period: PeriodMode
    property_id: str
    label: str
    start: dt.date
    end: dt.date
    stats: DashboardStatsOut
    movements: list[TransactionIn]


class AlertOut(CamelModel):
    id: str
    type: Literal["rent", "expense"]
    title: str
    subtitle: str
    amount: float
    due_day: int
    linked_entity: dict[str, Any]


class AlertReportOut(CamelModel):
    alerts: list[AlertOut]
    pending_total: float


class ForecastItemOut(CamelModel):
    type: TransactionType
    description: str
    amount: float
    date: dt.date
    category: str
    tenant_id: Optional[str] = None
    room_id: Optional[str] = None
    supplier_id: Optional[str] = None
    property_id: Optional[str] = None


class TransactionPrefillOut(CamelModel):
    type: TransactionType
    date: dt.date
    category: str
    description: Optional[str] = None
    amount: Optional[float] = None
    tenant_id: Optional[str] = None
    room_id: Optional[str] = None
    supplier_id: Optional[str] = None
    property_id: Optional[str] = None


class RestoreResultOut(BaseModel):
    ok: bool
    replaced: list[str]
    counts: dict[str, int]


class SyncResultOut(BaseModel):
    ok: bool
    enabled: bool
    counts: dict[str, int] = Field(default_factory=dict)
    error: Optional[str] = None
