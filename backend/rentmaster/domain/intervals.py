# backend/rentmaster/domain/intervals.py
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime]

_SECONDS_PER_DAY = 86400.0


def days_in_period(start: DateLike, end: DateLike) -> int:
    """
    Inclusive day count between two points, never negative.

    Calendar dates count whole days: (end - start).days + 1.
    Datetimes keep the partial-day rule: ceil(elapsed days) + 1.
    An end before start yields 0 (or a small count for sub-day inversions).
    """
    if isinstance(start, datetime) or isinstance(end, datetime):
        s = start if isinstance(start, datetime) else datetime(start.year, start.month, start.day)
        e = end if isinstance(end, datetime) else datetime(end.year, end.month, end.day)
        elapsed = (e - s).total_seconds() / _SECONDS_PER_DAY
        return max(0, math.ceil(elapsed) + 1)

    return max(0, (end - start).days + 1)


def intersection_days(
    a_start: DateLike,
    a_end: DateLike,
    b_start: DateLike,
    b_end: DateLike,
) -> int:
    """
    Inclusive overlap of [a_start, a_end] and [b_start, b_end] in days.
    Disjoint ranges give 0.
    """
    s = max(_comparable(a_start), _comparable(b_start))
    e = min(_comparable(a_end), _comparable(b_end))
    if s <= e:
        return days_in_period(s, e)
    return 0


def _comparable(v: DateLike) -> datetime:
    # date and datetime do not compare with each other
    if isinstance(v, datetime):
        return v
    return datetime(v.year, v.month, v.day)
