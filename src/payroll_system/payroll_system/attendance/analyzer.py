"""Reconcile raw time entries against the expected working days of a period."""

from __future__ import annotations

import logging
from datetime import date, time
from decimal import Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import format_iso_date, iter_dates
from ..common.money import to_decimal
from ..core.enums import SaturdayMode
from ..workdays.calendar import working_hours_factor
from ..workdays.model import WorkingDaysConfig
from .hours import worked_hours
from .model import TimeEntry, TimeEntryAnalysis

logger = logging.getLogger(__name__)


def group_entries_by_date(entries: Iterable[TimeEntry], start: date, end: date) -> dict[str, list[TimeEntry]]:
    """ISO date -> entries on that date, in input order. Entries outside [start, end] are dropped."""
    grouped: dict[str, list[TimeEntry]] = {}
    for entry in entries:
        if start <= entry.date <= end:
            grouped.setdefault(format_iso_date(entry.date), []).append(entry)
    return grouped


def _first_time_in(day_entries: list[TimeEntry]) -> Optional[time]:
    starts = [e.time_in for e in day_entries if e.time_in is not None]
    return min(starts) if starts else None


def analyze_time_entries(
    entries: Iterable[TimeEntry],
    start: date,
    end: date,
    config: WorkingDaysConfig,
    *,
    expected_start_time: Optional[time] = None,
    saturday_mode: Optional[SaturdayMode] = None,
) -> TimeEntryAnalysis:
    grouped = group_entries_by_date(entries, start, end)
    hours_per_day = to_decimal(config.hours_per_day)

    total_hours = Decimal("0")
    overtime_hours = Decimal("0")
    weekend_hours = Decimal("0")
    holiday_hours = Decimal("0")
    worked_units = Decimal("0")
    unpaid_units = Decimal("0")
    days_worked = late = half_days = absences = paid = unpaid = 0

    for day in iter_dates(start, end):
        day_entries = grouped.get(format_iso_date(day), [])

        # 1 for a full day, 0.5 for a half-day Saturday, 0 for an off day
        factor = working_hours_factor(day, config, saturday_mode)
        if factor == 0:
            weekend_hours += sum((worked_hours(e) for e in day_entries if not e.is_leave), Decimal("0"))
            continue

        expected_hours = hours_per_day * factor

        if not day_entries:
            absences += 1
            unpaid_units += factor
            continue

        leave_entry = next((e for e in day_entries if e.is_leave), None)
        if leave_entry is not None:
            if leave_entry.leave.is_paid:
                paid += 1
            else:
                unpaid += 1
                unpaid_units += factor
            continue

        day_hours = sum((worked_hours(e) for e in day_entries), Decimal("0"))
        total_hours += day_hours
        days_worked += 1
        worked_units += factor

        if 0 < day_hours < expected_hours / 2 + 1:
            half_days += 1
            unpaid_units += factor / 2
        if day_hours > expected_hours:
            overtime_hours += day_hours - expected_hours

        holiday_hours += sum((worked_hours(e) for e in day_entries if e.is_holiday_work), Decimal("0"))

        if expected_start_time is not None:
            first_in = _first_time_in(day_entries)
            if first_in is not None and first_in > expected_start_time:
                late += 1

    logger.debug(
        "attendance %s..%s: worked=%s absent=%s paid_leave=%s unpaid_leave=%s half=%s late=%s",
        start, end, days_worked, absences, paid, unpaid, half_days, late,
    )
    return TimeEntryAnalysis(
        total_hours_worked=total_hours,
        total_days_worked=days_worked,
        overtime_hours=overtime_hours,
        weekend_hours=weekend_hours,
        holiday_hours=holiday_hours,
        late_arrivals=late,
        half_days=half_days,
        absences=absences,
        paid_leaves=paid,
        unpaid_leaves=unpaid,
        worked_day_units=worked_units,
        unpaid_day_units=unpaid_units,
        entries_by_date={k: tuple(v) for k, v in grouped.items()},
    )
