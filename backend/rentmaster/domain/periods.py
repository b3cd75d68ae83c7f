# backend/rentmaster/domain/periods.py
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

MONTH_ABBREV = ("Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez")

PERIOD_MODES = ("all", "current", "last")

HISTORY_START = date(2023, 1, 1)
HISTORY_END = date(2030, 12, 31)


def as_date(v: Union[date, datetime]) -> date:
    if isinstance(v, datetime):
        return v.date()
    return v


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Shift (year, month 1-12) by delta months with explicit year carry."""
    idx = year * 12 + (month - 1) + delta
    return idx // 12, idx % 12 + 1


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def clamped_date(year: int, month: int, day: int) -> date:
    """Due day 31 in a 30-day month lands on the 30th."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(int(day), last_day)))


def month_key(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


def month_abbrev(month: int) -> str:
    return MONTH_ABBREV[month - 1]


def month_year_label(d: date) -> str:
    # "Out/26"
    return f"{month_abbrev(d.month)}/{str(d.year)[2:]}"


@dataclass(frozen=True)
class Period:
    mode: str
    start: date
    end: date
    label: str

    def contains_month(self, year: int, month: int) -> bool:
        s_key = (self.start.year, self.start.month)
        e_key = (self.end.year, self.end.month)
        return s_key <= (year, month) <= e_key


def resolve_period(
    mode: str,
    now: Union[date, datetime],
    *,
    history_start: date = HISTORY_START,
    history_end: date = HISTORY_END,
) -> Period:
    """
    current: first day of now's month -> today (month to date)
    last:    the whole previous calendar month
    all:     fixed wide window covering every plausible record

    Unknown modes fall back to "all".

    Bounds are calendar dates. A timestamped window (current ending at
    `now`, last ending at 23:59:59) would count one extra day under the
    ceil rule in days_in_period, so occupancy for partial tenancies reads
    slightly lower here than with timestamp bounds.
    """
    today = as_date(now)
    m = (mode or "all").strip().lower()

    if m == "current":
        start, _ = month_bounds(today.year, today.month)
        return Period(mode="current", start=start, end=today, label=f"Atual ({month_abbrev(today.month)})")

    if m == "last":
        y, mo = add_months(today.year, today.month, -1)
        start, end = month_bounds(y, mo)
        return Period(mode="last", start=start, end=end, label=f"Passado ({month_abbrev(mo)})")

    return Period(mode="all", start=history_start, end=history_end, label="Histórico Geral")
