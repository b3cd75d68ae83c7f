# backend/rentmaster/routers/dashboard.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_now, get_snapshot
from ..schemas import AlertReportOut, DashboardOut, ForecastItemOut, Snapshot
from ..services.dashboard_service import alerts_view, dashboard_view, forecast_view

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
def dashboard(
    period: Literal["all", "current", "last"] = Query(default="current"),
    property_id: str = Query(default="all"),
    snap: Snapshot = Depends(get_snapshot),
    now: datetime = Depends(get_now),
):
    """
    Headline cards for the selected period and property:
    profit, revenue, expense, occupancy %, the 12-month profit trend and
    the period's movements (newest first).
    """
    return dashboard_view(snap, period=period, now=now, property_id=property_id)


@router.get("/alerts", response_model=AlertReportOut)
def overdue_alerts(
    property_id: str = Query(default="all"),
    snap: Snapshot = Depends(get_snapshot),
    now: datetime = Depends(get_now),
):
    return alerts_view(snap, now=now, property_id=property_id)


@router.get("/forecast", response_model=list[ForecastItemOut])
def upcoming_payments(
    property_id: str = Query(default="all"),
    days: Optional[int] = Query(default=None, ge=1, le=31),
    snap: Snapshot = Depends(get_snapshot),
    now: datetime = Depends(get_now),
):
    return forecast_view(snap, now=now, property_id=property_id, days=days)
