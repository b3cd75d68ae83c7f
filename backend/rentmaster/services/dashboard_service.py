# backend/rentmaster/services/dashboard_service.py
from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from ..config import settings
from ..domain.aggregates import ALL_PROPERTIES, compute_dashboard_stats, period_movements
from ..domain.alerts import detect_overdue
from ..domain.forecast import build_forecast
from ..domain.periods import Period, resolve_period
from ..domain.prefill import next_expected_transaction
from ..schemas import (
    AlertOut,
    AlertReportOut,
    DashboardOut,
    DashboardStatsOut,
    ForecastItemOut,
    Snapshot,
    TransactionPrefillOut,
    TrendPointOut,
)

log = logging.getLogger(__name__)


def period_for(mode: str, now: datetime) -> Period:
    return resolve_period(
        mode,
        now,
        history_start=settings.history_start,
        history_end=settings.history_end,
    )


def _linked(entity: dict[str, Any]) -> dict[str, Any]:
    return {k: v.model_dump(by_alias=True, mode="json") if isinstance(v, BaseModel) else v for k, v in entity.items()}


def dashboard_view(
    snap: Snapshot,
    *,
    period: str,
    now: datetime,
    property_id: Optional[str] = ALL_PROPERTIES,
) -> DashboardOut:
    """Headline numbers, the 12-month trend and the period's movements."""
    pf = property_id or ALL_PROPERTIES
    per = period_for(period, now)

    stats = compute_dashboard_stats(
        transactions=snap.transactions,
        rooms=snap.rooms,
        tenants=snap.tenants,
        period=per,
        now=now,
        property_filter=pf,
    )
    movements = period_movements(snap.transactions, property_filter=pf, period=per, now=now)

    log.info("dashboard computed", extra={"property_id": pf, "period": per.mode, "rows": len(movements)})

    return DashboardOut(
        period=per.mode,
        property_id=pf,
        label=per.label,
        start=per.start,
        end=per.end,
        stats=DashboardStatsOut(
            curr_profit=stats.curr_profit,
            curr_rev=stats.curr_rev,
            curr_exp=stats.curr_exp,
            curr_occupancy=stats.curr_occupancy,
            chart_data=[TrendPointOut(**asdict(p)) for p in stats.chart_data],
        ),
        movements=movements,
    )


def alerts_view(snap: Snapshot, *, now: datetime, property_id: Optional[str] = ALL_PROPERTIES) -> AlertReportOut:
    report = detect_overdue(
        tenants=snap.tenants,
        rooms=snap.rooms,
        suppliers=snap.suppliers,
        transactions=snap.transactions,
        now=now,
        property_filter=property_id or ALL_PROPERTIES,
    )
    return AlertReportOut(
        alerts=[
            AlertOut(
                id=a.id,
                type=a.type,
                title=a.title,
                subtitle=a.subtitle,
                amount=a.amount,
                due_day=a.due_day,
                linked_entity=_linked(a.linked_entity),
            )
            for a in report.alerts
        ],
        pending_total=report.pending_total,
    )


def forecast_view(
    snap: Snapshot,
    *,
    now: datetime,
    property_id: Optional[str] = ALL_PROPERTIES,
    days: Optional[int] = None,
) -> list[ForecastItemOut]:
    items = build_forecast(
        tenants=snap.tenants,
        rooms=snap.rooms,
        suppliers=snap.suppliers,
        transactions=snap.transactions,
        now=now,
        property_filter=property_id or ALL_PROPERTIES,
        days=days or settings.forecast_days,
    )
    return [ForecastItemOut(**asdict(i)) for i in items]


def prefill_view(snap: Snapshot, *, txn_type: str, now: datetime) -> TransactionPrefillOut:
    pre = next_expected_transaction(
        txn_type,
        tenants=snap.tenants,
        rooms=snap.rooms,
        suppliers=snap.suppliers,
        transactions=snap.transactions,
        now=now,
    )
    return TransactionPrefillOut(**asdict(pre))
