"""Payslip calculation.

The steps below are shared by the configuration-driven entry point
(``calculate_pay_slip``) and the attendance-driven one in ``service``:

1. pro-rata factor for mid-cycle joins/exits
2. daily/hourly rate by pay type and salary basis
3. unpaid leave (half days count 0.5)
4. base pay
5. allowances, scaled by a proration ratio
6. overtime in three tiers (regular, weekend, holiday)
7. bonuses
8. gross = base + allowances + overtime + bonuses
9. deductions, in a fixed order against gross
10. net = max(0, gross - deductions)

Every money line is rounded half-up to 2 places when it is computed, and
totals are sums of the rounded lines. Division by a zero divisor yields a
zero rate rather than an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import days_between
from ..common.money import ZERO, Number, percent_of, round2, safe_divide, to_decimal, total
from ..core.constants import CALENDAR_MONTH_DAYS
from ..core.enums import SalaryBasis, SalaryPayType
from ..cycles.model import SalaryCycle
from ..workdays.calendar import calculate_working_days
from .model import (
    AllowanceConfig,
    AttendanceSummary,
    BonusBreakdown,
    BonusConfig,
    DeductionConfig,
    DeductionsBreakdown,
    EarningsBreakdown,
    OvertimeRules,
    PaySlipBreakdown,
    PaySlipInput,
    PaySlipOutput,
    PeriodSummary,
)

logger = logging.getLogger(__name__)

_HALF = Decimal("0.5")
_FACTOR_PLACES = Decimal("0.0001")


@dataclass(frozen=True)
class ProRata:
    factor: Decimal
    effective_start: date
    effective_end: date
    effective_days: int
    total_days: int


@dataclass(frozen=True)
class Rates:
    daily: Decimal
    hourly: Decimal


@dataclass(frozen=True)
class BasePay:
    amount: Decimal
    unpaid_leave_days: Decimal
    unpaid_leave_deduction: Decimal
    actual_days_worked: Decimal


@dataclass(frozen=True)
class AllowanceAmounts:
    hra: Decimal
    da: Decimal
    transport: Decimal
    medical: Decimal
    special: Decimal
    other: Decimal
    total: Decimal


@dataclass(frozen=True)
class OvertimeAmounts:
    regular: Decimal
    weekend: Decimal
    holiday: Decimal
    total: Decimal


def compute_pro_rata(
    cycle: SalaryCycle,
    joining_date: Optional[date] = None,
    leaving_date: Optional[date] = None,
) -> ProRata:
    """Share of the cycle between joining and leaving dates, in [0, 1]."""
    start = joining_date if joining_date and joining_date > cycle.start_date else cycle.start_date
    end = leaving_date if leaving_date and leaving_date < cycle.end_date else cycle.end_date

    total_days = cycle.total_days
    effective_days = days_between(start, end) if start <= end else 0
    factor = Decimal(effective_days) / Decimal(total_days) if total_days > 0 else Decimal("1")
    return ProRata(
        factor=factor,
        effective_start=start,
        effective_end=end,
        effective_days=effective_days,
        total_days=total_days,
    )


def derive_rates(
    pay_type: SalaryPayType,
    basis: SalaryBasis,
    salary: Number,
    *,
    pro_rata_factor: Number,
    effective_days: Number,
    working_days: Number,
    hours_per_day: Number,
) -> Rates:
    salary = to_decimal(salary)
    hours_per_day = to_decimal(hours_per_day)

    if pay_type == SalaryPayType.FIXED_MONTHLY:
        prorated = salary * to_decimal(pro_rata_factor)
        divisor = {
            SalaryBasis.CALENDAR_MONTH: CALENDAR_MONTH_DAYS,
            SalaryBasis.CYCLE_DAYS: to_decimal(effective_days),
            SalaryBasis.WORKING_DAYS_ONLY: to_decimal(working_days),
        }[basis]
        daily = safe_divide(prorated, divisor)
        hourly = safe_divide(daily, hours_per_day)
    elif pay_type == SalaryPayType.DAILY_WAGE:
        daily = salary
        hourly = safe_divide(daily, hours_per_day)
    else:
        hourly = salary
        daily = hourly * hours_per_day

    if salary and not (daily and hourly):
        logger.warning(
            "rate degraded to zero (pay_type=%s basis=%s working_days=%s hours_per_day=%s)",
            pay_type.value, basis.value, working_days, hours_per_day,
        )
    return Rates(daily=daily, hourly=hourly)


def unpaid_leave_days(unpaid_leave_taken: Number, half_days_taken: Number) -> Decimal:
    return to_decimal(unpaid_leave_taken) + to_decimal(half_days_taken) * _HALF


def compute_base_pay(
    pay_type: SalaryPayType,
    salary: Number,
    rates: Rates,
    *,
    pro_rata_factor: Number,
    working_days: Number,
    unpaid_days: Number,
    hours_per_day: Number,
) -> BasePay:
    unpaid_days = to_decimal(unpaid_days)
    deduction = round2(rates.daily * unpaid_days)
    actual_days = max(ZERO, to_decimal(working_days) - unpaid_days)

    if pay_type == SalaryPayType.FIXED_MONTHLY:
        amount = round2(to_decimal(salary) * to_decimal(pro_rata_factor)) - deduction
    elif pay_type == SalaryPayType.DAILY_WAGE:
        amount = round2(rates.daily * actual_days)
    else:
        amount = round2(rates.hourly * actual_days * to_decimal(hours_per_day))

    return BasePay(
        amount=amount,
        unpaid_leave_days=unpaid_days,
        unpaid_leave_deduction=deduction,
        actual_days_worked=actual_days,
    )


def prorate_allowances(allowances: AllowanceConfig, ratio: Number) -> AllowanceAmounts:
    ratio = to_decimal(ratio)
    hra = round2(to_decimal(allowances.hra) * ratio)
    da = round2(to_decimal(allowances.da) * ratio)
    transport = round2(to_decimal(allowances.transport) * ratio)
    medical = round2(to_decimal(allowances.medical) * ratio)
    special = round2(to_decimal(allowances.special) * ratio)
    other = round2(total(item.amount for item in allowances.other) * ratio)
    return AllowanceAmounts(
        hra=hra,
        da=da,
        transport=transport,
        medical=medical,
        special=special,
        other=other,
        total=hra + da + transport + medical + special + other,
    )


def _tier_pay(hourly_rate: Decimal, multiplier: Number, hours: Number) -> Decimal:
    hours = to_decimal(hours)
    if hours <= 0:
        return round2(ZERO)
    return round2(hourly_rate * to_decimal(multiplier) * hours)


def compute_overtime_pay(rules: OvertimeRules, hourly_rate: Number) -> OvertimeAmounts:
    if not rules.enabled:
        zero = round2(ZERO)
        return OvertimeAmounts(regular=zero, weekend=zero, holiday=zero, total=zero)

    hourly_rate = to_decimal(hourly_rate)
    regular = _tier_pay(hourly_rate, rules.multiplier, rules.overtime_hours)
    weekend = _tier_pay(hourly_rate, rules.weekend_multiplier, rules.weekend_overtime_hours)
    holiday = _tier_pay(hourly_rate, rules.holiday_multiplier, rules.holiday_overtime_hours)
    return OvertimeAmounts(regular=regular, weekend=weekend, holiday=holiday, total=regular + weekend + holiday)


def compute_bonuses(bonuses: BonusConfig) -> BonusBreakdown:
    performance = round2(bonuses.performance)
    attendance = round2(bonuses.attendance)
    other = round2(total(item.amount for item in bonuses.other))
    return BonusBreakdown(
        performance=performance,
        attendance=attendance,
        other=other,
        total=performance + attendance + other,
    )


def apply_deductions(
    config: DeductionConfig,
    *,
    gross: Decimal,
    pf_base: Decimal,
    late_arrivals: int,
    unpaid_leave: Decimal,
) -> DeductionsBreakdown:
    fixed = round2(config.fixed)
    percentage = round2(percent_of(gross, config.percentage))
    late = round2(to_decimal(config.late_deduction_per_arrival) * late_arrivals)
    professional_tax = round2(config.professional_tax)
    provident_fund = round2(percent_of(pf_base, config.pf_percentage))

    income_tax = to_decimal(config.income_tax)
    if config.tax_enabled:
        income_tax += percent_of(gross, config.income_tax_percentage)
    income_tax = round2(income_tax)

    health_insurance = round2(config.health_insurance)
    other = total(
        round2(percent_of(gross, item.amount)) if item.is_percentage else round2(item.amount)
        for item in config.other
    )

    return DeductionsBreakdown(
        fixed=fixed,
        percentage=percentage,
        late_deduction=late,
        unpaid_leave=round2(unpaid_leave),
        professional_tax=professional_tax,
        provident_fund=provident_fund,
        income_tax=income_tax,
        health_insurance=health_insurance,
        other=other,
        total=fixed + percentage + late + professional_tax + provident_fund + income_tax + health_insurance + other,
    )


def net_salary(gross: Decimal, total_deductions: Decimal) -> Decimal:
    net = gross - total_deductions
    if net < 0:
        logger.warning("deductions %s exceed gross %s, net floored at zero", total_deductions, gross)
        return round2(ZERO)
    return round2(net)


def build_earnings(base: BasePay, allowances: AllowanceAmounts, overtime: OvertimeAmounts, bonuses: BonusBreakdown) -> EarningsBreakdown:
    return EarningsBreakdown(
        base_pay=base.amount,
        hra=allowances.hra,
        da=allowances.da,
        transport_allowance=allowances.transport,
        medical_allowance=allowances.medical,
        special_allowance=allowances.special,
        other_allowances=allowances.other,
        total_allowances=allowances.total,
        overtime_pay=overtime.regular,
        weekend_overtime_pay=overtime.weekend,
        holiday_overtime_pay=overtime.holiday,
        total_overtime_pay=overtime.total,
        bonuses=bonuses,
        gross_earnings=base.amount + allowances.total + overtime.total + bonuses.total,
    )


def calculate_pay_slip(data: PaySlipInput) -> PaySlipOutput:
    """Configuration-driven payslip: every attendance figure comes from ``data``."""
    work_config = data.working_days
    pro_rata = compute_pro_rata(data.cycle, data.joining_date, data.leaving_date)
    days = calculate_working_days(pro_rata.effective_start, pro_rata.effective_end, work_config)

    rates = derive_rates(
        data.salary_pay_type,
        data.salary_basis,
        data.base_salary,
        pro_rata_factor=pro_rata.factor,
        effective_days=pro_rata.effective_days,
        working_days=days.working_days,
        hours_per_day=work_config.hours_per_day,
    )
    logger.debug("rates daily=%s hourly=%s pro_rata=%s", rates.daily, rates.hourly, pro_rata.factor)

    base = compute_base_pay(
        data.salary_pay_type,
        data.base_salary,
        rates,
        pro_rata_factor=pro_rata.factor,
        working_days=days.working_days,
        unpaid_days=unpaid_leave_days(data.leaves.unpaid_leave_taken, data.leaves.half_days_taken),
        hours_per_day=work_config.hours_per_day,
    )
    allowances = prorate_allowances(data.allowances, pro_rata.factor)
    overtime = compute_overtime_pay(data.overtime, rates.hourly)
    bonuses = compute_bonuses(data.bonuses)
    earnings = build_earnings(base, allowances, overtime, bonuses)
    gross = earnings.gross_earnings

    deductions = apply_deductions(
        data.deductions,
        gross=gross,
        pf_base=gross,
        late_arrivals=data.late_arrivals,
        unpaid_leave=base.unpaid_leave_deduction,
    )
    net = net_salary(gross, deductions.total)

    breakdown = PaySlipBreakdown(
        period=PeriodSummary(
            start=pro_rata.effective_start,
            end=pro_rata.effective_end,
            total_days=pro_rata.effective_days,
            working_days=days.working_days,
            weekly_offs=days.weekly_offs,
            half_days=days.half_days,
        ),
        earnings=earnings,
        deductions=deductions,
        attendance=AttendanceSummary(
            days_worked=round2(base.actual_days_worked),
            paid_leave_limit=to_decimal(data.leaves.paid_leave_limit),
            paid_leave_taken=to_decimal(data.leaves.paid_leave_taken),
            unpaid_leave_taken=to_decimal(data.leaves.unpaid_leave_taken),
            half_days=to_decimal(data.leaves.half_days_taken),
            overtime_hours=to_decimal(data.overtime.overtime_hours),
            weekend_overtime_hours=to_decimal(data.overtime.weekend_overtime_hours),
            holiday_overtime_hours=to_decimal(data.overtime.holiday_overtime_hours),
            late_arrivals=data.late_arrivals,
        ),
    )

    return PaySlipOutput(
        gross_salary=gross,
        working_days=days.working_days,
        actual_days_worked=round2(base.actual_days_worked),
        base_pay=base.amount,
        total_allowances=allowances.total,
        overtime_pay=overtime.total,
        deductions=deductions.total,
        bonuses=bonuses.total,
        net_salary=net,
        daily_rate=round2(rates.daily),
        hourly_rate=round2(rates.hourly),
        pro_rata_factor=pro_rata.factor.quantize(_FACTOR_PLACES),
        breakdown=breakdown,
        currency=data.currency,
    )
