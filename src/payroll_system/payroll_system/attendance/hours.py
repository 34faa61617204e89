from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ..common.money import to_decimal
from .model import TimeEntry

_MINUTES_PER_DAY = 24 * 60


def worked_minutes(entry: TimeEntry) -> int:
    """(out - in) - break_minutes, not below 0.

    A time out earlier than the time in is an overnight shift.
    """
    if not entry.time_in or not entry.time_out:
        return 0
    start = datetime.combine(entry.date, entry.time_in)
    end = datetime.combine(entry.date, entry.time_out)
    minutes = int((end - start).total_seconds() // 60)
    if minutes < 0:
        minutes += _MINUTES_PER_DAY
    minutes -= int(entry.break_minutes or 0)
    return max(minutes, 0)


def worked_hours(entry: TimeEntry) -> Decimal:
    if entry.total_hours is not None:
        return to_decimal(entry.total_hours)
    return Decimal(worked_minutes(entry)) / Decimal(60)
