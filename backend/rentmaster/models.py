# backend/rentmaster/models.py
from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy import Boolean, Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


# -----------------------------
# Local snapshot tables
# -----------------------------
# Foreign keys are plain strings: a lookup that misses is "no match".
# `position` keeps the order the snapshot was written in.

class Property(Base):
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(160), nullable=False)
    type: Mapped[str] = mapped_column(String(40), nullable=False, default="Casa")  # Casa|Apartamento|Kitnet
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    number: Mapped[str] = mapped_column(String(40), nullable=False)
    area: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_occupied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    tenant_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Tenant(Base):
    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(160), nullable=False)
    nickname: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    cpf: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    profession: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    whatsapp: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    entry_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    exit_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    due_day: Mapped[int] = mapped_column(Integer, nullable=False)

    room_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Supplier(Base):
    __tablename__ = "suppliers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(160), nullable=False)
    category: Mapped[str] = mapped_column(String(40), nullable=False, default="Utilidade")  # Utilidade|Profissional
    specialty: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    frequency: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)

    due_day: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    base_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    cost_type: Mapped[str] = mapped_column(String(20), nullable=False, default="fixed")  # fixed|variable

    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    whatsapp: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    account_number: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    obs: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    property_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # revenue|expense
    category: Mapped[str] = mapped_column(String(80), nullable=False, default="")

    property_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    tenant_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    room_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    supplier_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class StoreMeta(Base):
    """Store-level markers (e.g. when the store was first initialized)."""

    __tablename__ = "store_meta"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False, default="")


TABLE_MODELS = {
    "properties": Property,
    "rooms": Room,
    "tenants": Tenant,
    "suppliers": Supplier,
    "transactions": Transaction,
}
