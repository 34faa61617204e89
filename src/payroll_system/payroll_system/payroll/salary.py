from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ..common.money import Number, round2, safe_divide, to_decimal
from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER, MONTHS_PER_YEAR
from ..core.enums import SalaryType
from ..cycles.model import SalaryCycle
from .model import OvertimeSettings, SalaryRecord, WorkingConfig


def monthly_amount(salary_type: SalaryType, amount: Number) -> Decimal:
    amount = to_decimal(amount)
    if salary_type == SalaryType.ANNUAL:
        return amount / MONTHS_PER_YEAR
    return amount


def hourly_from_salary(salary_type: SalaryType, amount: Number, working: WorkingConfig) -> Decimal:
    """Hourly rate from a salary and its working-hours snapshot, 0 if hours are not positive."""
    hours_per_month = to_decimal(working.hours_per_day) * to_decimal(working.days_per_month)
    if hours_per_month <= 0:
        return round2(0)
    return round2(safe_divide(monthly_amount(salary_type, amount), hours_per_month))


def compute_earnings_with_overtime(
    total_hours: Number,
    hourly_rate: Number,
    overtime: Optional[OvertimeSettings] = None,
) -> Decimal:
    """Earnings for a single day's hours.

    Hours above the daily threshold are paid at the overtime multiplier when
    overtime is enabled.
    """
    total_hours = to_decimal(total_hours)
    hourly_rate = to_decimal(hourly_rate)
    if overtime is None or not overtime.enabled:
        return round2(total_hours * hourly_rate)

    threshold = to_decimal(overtime.threshold_hours_per_day)
    multiplier = to_decimal(overtime.regular_multiplier)
    if multiplier <= 0:
        multiplier = DEFAULT_OVERTIME_MULTIPLIER

    base_hours = min(total_hours, threshold)
    extra_hours = max(Decimal("0"), total_hours - threshold)
    return round2(base_hours * hourly_rate + extra_hours * hourly_rate * multiplier)


def _sorted_records(records: Iterable[SalaryRecord]) -> list[SalaryRecord]:
    return sorted(records or [], key=lambda r: r.effective_from)


def pick_effective_salary_record(records: Iterable[SalaryRecord], on_date: date) -> Optional[SalaryRecord]:
    """Latest record whose ``effective_from`` is on or before ``on_date``."""
    effective: Optional[SalaryRecord] = None
    for record in _sorted_records(records):
        if record.effective_from > on_date:
            break
        effective = record
    return effective


def salary_record_for_cycle(records: Iterable[SalaryRecord], cycle: SalaryCycle) -> Optional[SalaryRecord]:
    """Record in force at the end of ``cycle``; falls back to the earliest record."""
    ordered = _sorted_records(records)
    if not ordered:
        return None
    return pick_effective_salary_record(ordered, cycle.end_date) or ordered[0]
