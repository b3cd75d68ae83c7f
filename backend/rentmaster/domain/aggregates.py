# backend/rentmaster/domain/aggregates.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Union

from ..schemas import RoomIn, TenantIn, TransactionIn
from .intervals import days_in_period, intersection_days
from .money import clean_amount, sum_amounts
from .periods import Period, add_months, as_date, month_abbrev, month_key

ALL_PROPERTIES = "all"
TREND_MONTHS = 12


@dataclass(frozen=True)
class TrendPoint:
    month: str  # YYYY-MM
    label: str  # "Out"
    profit: float
    is_current: bool


@dataclass(frozen=True)
class DashboardStats:
    curr_profit: float
    curr_rev: float
    curr_exp: float
    curr_occupancy: int
    chart_data: list[TrendPoint]


def property_matches(property_id: Optional[str], property_filter: Optional[str]) -> bool:
    if not property_filter or property_filter == ALL_PROPERTIES:
        return True
    return property_id == property_filter


def in_period(txn_date: date, period: Period, now: Union[date, datetime]) -> bool:
    """
    current: same month as now and not after today (future-dated entries
             of this month do not count yet)
    last:    any day of the previous month
    all:     no restriction
    """
    today = as_date(now)
    if period.mode == "current":
        return txn_date.year == today.year and txn_date.month == today.month and txn_date.day <= today.day
    if period.mode == "last":
        return txn_date.year == period.start.year and txn_date.month == period.start.month
    return True


def filter_transactions(
    transactions: Iterable[TransactionIn],
    *,
    property_filter: Optional[str],
    period: Period,
    now: Union[date, datetime],
) -> list[TransactionIn]:
    return [
        t
        for t in transactions
        if property_matches(t.property_id, property_filter) and in_period(t.date, period, now)
    ]


def revenue_and_expense(transactions: Iterable[TransactionIn]) -> tuple[float, float]:
    txns = list(transactions)
    rev = sum_amounts(t.amount for t in txns if t.type == "revenue")
    exp = sum_amounts(t.amount for t in txns if t.type == "expense")
    return rev, exp


def occupancy_rate(
    rooms: Sequence[RoomIn],
    tenants: Sequence[TenantIn],
    *,
    property_filter: Optional[str],
    period: Period,
    now: Union[date, datetime],
) -> int:
    """
    Occupied tenant-days over available room-days, as a rounded percent.

    Every tenant ever assigned to a room contributes its own overlap with
    the period. Overlapping tenancies on one room are summed as-is, so the
    result can go above 100.
    """
    today = as_date(now)
    relevant_rooms = [r for r in rooms if property_matches(r.property_id, property_filter)]

    total_potential = len(relevant_rooms) * days_in_period(period.start, period.end)
    if total_potential <= 0:
        return 0

    total_occupied = 0
    for r in relevant_rooms:
        for tn in tenants:
            if tn.room_id != r.id:
                continue
            tenant_end = tn.exit_date or today
            total_occupied += intersection_days(period.start, period.end, tn.entry_date, tenant_end)

    return int(math.floor(100.0 * total_occupied / total_potential + 0.5))


def build_trend_series(
    transactions: Sequence[TransactionIn],
    *,
    property_filter: Optional[str],
    now: Union[date, datetime],
    months: int = TREND_MONTHS,
) -> list[TrendPoint]:
    """Monthly profit for the trailing `months` calendar months, oldest first."""
    today = as_date(now)
    out: list[TrendPoint] = []
    for i in range(months - 1, -1, -1):
        y, m = add_months(today.year, today.month, -i)
        bucket = [
            t
            for t in transactions
            if property_matches(t.property_id, property_filter) and t.date.year == y and t.date.month == m
        ]
        rev, exp = revenue_and_expense(bucket)
        out.append(
            TrendPoint(
                month=month_key(y, m),
                label=month_abbrev(m),
                profit=clean_amount(rev - exp),
                is_current=(i == 0),
            )
        )
    return out


def compute_dashboard_stats(
    *,
    transactions: Sequence[TransactionIn],
    rooms: Sequence[RoomIn],
    tenants: Sequence[TenantIn],
    period: Period,
    now: Union[date, datetime],
    property_filter: Optional[str] = ALL_PROPERTIES,
) -> DashboardStats:
    filtered = filter_transactions(transactions, property_filter=property_filter, period=period, now=now)
    rev, exp = revenue_and_expense(filtered)
    curr_rev = clean_amount(rev)
    curr_exp = clean_amount(exp)

    return DashboardStats(
        curr_profit=clean_amount(curr_rev - curr_exp),
        curr_rev=curr_rev,
        curr_exp=curr_exp,
        curr_occupancy=occupancy_rate(rooms, tenants, property_filter=property_filter, period=period, now=now),
        chart_data=build_trend_series(transactions, property_filter=property_filter, now=now),
    )


def period_movements(
    transactions: Sequence[TransactionIn],
    *,
    property_filter: Optional[str],
    period: Period,
    now: Union[date, datetime],
) -> list[TransactionIn]:
    """Filtered transactions, newest first (stable for same-day entries)."""
    filtered = filter_transactions(transactions, property_filter=property_filter, period=period, now=now)
    return sorted(filtered, key=lambda t: t.date, reverse=True)
