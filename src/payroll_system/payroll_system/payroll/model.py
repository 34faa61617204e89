from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from ..core.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_CYCLE_START_DAY,
    DEFAULT_DAYS_PER_MONTH,
    DEFAULT_HOURS_PER_DAY,
    DEFAULT_LATE_DEDUCTION_PER_ARRIVAL,
    DEFAULT_LOCALE,
    DEFAULT_PAYMENT_MODE,
)
from ..core.enums import SalaryBasis, SalaryPayType, SalaryType, SaturdayMode
from ..cycles.model import SalaryCycle
from ..workdays.model import WorkingDaysConfig

_ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExtraItem:
    """Open-ended named line item (allowance, bonus or deduction)."""

    description: str
    amount: Decimal
    is_percentage: bool = False


@dataclass(frozen=True)
class LeaveConfig:
    """Leave taken in the period.

    ``paid_leave_limit`` is the monthly paid-leave allowance. It is reported
    back in the breakdown and does not change pay: leave is paid or unpaid
    by its type, not by the limit.
    """

    paid_leave_limit: Decimal = Decimal("2")
    paid_leave_taken: Decimal = _ZERO
    unpaid_leave_taken: Decimal = _ZERO
    half_days_taken: Decimal = _ZERO


@dataclass(frozen=True)
class OvertimeRules:
    """Overtime multipliers plus the hours worked in each tier for the period."""

    enabled: bool = False
    threshold_hours_per_day: Decimal = Decimal("8")
    multiplier: Decimal = Decimal("1.5")
    weekend_multiplier: Decimal = Decimal("2")
    holiday_multiplier: Decimal = Decimal("2.5")
    overtime_hours: Decimal = _ZERO
    weekend_overtime_hours: Decimal = _ZERO
    holiday_overtime_hours: Decimal = _ZERO


@dataclass(frozen=True)
class DeductionConfig:
    """Deduction line items, applied in field order against gross earnings.

    ``percentage``, ``pf_percentage`` and ``income_tax_percentage`` are in
    percent (10 means 10%). ``income_tax`` is a fixed amount that is always
    applied; the percentage part only when ``tax_enabled`` is set.
    """

    fixed: Decimal = _ZERO
    percentage: Decimal = _ZERO
    late_deduction_per_arrival: Decimal = _ZERO
    professional_tax: Decimal = _ZERO
    pf_percentage: Decimal = _ZERO
    income_tax: Decimal = _ZERO
    tax_enabled: bool = False
    income_tax_percentage: Decimal = _ZERO
    health_insurance: Decimal = _ZERO
    other: tuple[ExtraItem, ...] = ()


@dataclass(frozen=True)
class AllowanceConfig:
    hra: Decimal = _ZERO
    da: Decimal = _ZERO
    transport: Decimal = _ZERO
    medical: Decimal = _ZERO
    special: Decimal = _ZERO
    other: tuple[ExtraItem, ...] = ()


@dataclass(frozen=True)
class BonusConfig:
    performance: Decimal = _ZERO
    attendance: Decimal = _ZERO
    other: tuple[ExtraItem, ...] = ()


@dataclass(frozen=True)
class PaySlipInput:
    base_salary: Decimal
    salary_pay_type: SalaryPayType
    salary_basis: SalaryBasis
    cycle: SalaryCycle
    working_days: WorkingDaysConfig = field(default_factory=WorkingDaysConfig)
    leaves: LeaveConfig = field(default_factory=LeaveConfig)
    overtime: OvertimeRules = field(default_factory=OvertimeRules)
    deductions: DeductionConfig = field(default_factory=DeductionConfig)
    allowances: AllowanceConfig = field(default_factory=AllowanceConfig)
    bonuses: BonusConfig = field(default_factory=BonusConfig)
    joining_date: Optional[date] = None
    leaving_date: Optional[date] = None
    late_arrivals: int = 0
    currency: str = DEFAULT_CURRENCY


# ---------------------------------------------------------------------------
# Salary records and per-user payment configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkingConfig:
    """Working hours snapshot stored with a salary record."""

    hours_per_day: Decimal = DEFAULT_HOURS_PER_DAY
    days_per_month: int = DEFAULT_DAYS_PER_MONTH


@dataclass(frozen=True)
class SalaryRecord:
    salary_type: SalaryType
    amount: Decimal
    effective_from: date
    working: WorkingConfig = field(default_factory=WorkingConfig)
    pay_type: SalaryPayType = SalaryPayType.FIXED_MONTHLY
    note: Optional[str] = None


@dataclass(frozen=True)
class WeeklyOffSettings:
    off_days: frozenset[int] = frozenset({0})
    saturday_mode: SaturdayMode = SaturdayMode.WORKING
    second_saturday_off: bool = False
    fourth_saturday_off: bool = False


@dataclass(frozen=True)
class OvertimeSettings:
    enabled: bool = False
    threshold_hours_per_day: Decimal = Decimal("8")
    regular_multiplier: Decimal = Decimal("1.5")
    weekend_multiplier: Decimal = Decimal("2")
    holiday_multiplier: Decimal = Decimal("2.5")
    max_overtime_hours_per_month: Optional[Decimal] = None


@dataclass(frozen=True)
class PaymentConfig:
    cycle_start_day: int = DEFAULT_CYCLE_START_DAY
    weekly_offs: WeeklyOffSettings = field(default_factory=WeeklyOffSettings)
    expected_start_time: Optional[time] = None
    salary_basis: SalaryBasis = SalaryBasis.WORKING_DAYS_ONLY
    overtime: OvertimeSettings = field(default_factory=OvertimeSettings)
    deductions: DeductionConfig = field(
        default_factory=lambda: DeductionConfig(late_deduction_per_arrival=DEFAULT_LATE_DEDUCTION_PER_ARRIVAL)
    )
    allowances: AllowanceConfig = field(default_factory=AllowanceConfig)
    bonuses: BonusConfig = field(default_factory=BonusConfig)
    currency: str = DEFAULT_CURRENCY
    locale: str = DEFAULT_LOCALE
    payment_mode: str = DEFAULT_PAYMENT_MODE


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PeriodSummary:
    start: date
    end: date
    total_days: int
    working_days: Decimal
    weekly_offs: int
    half_days: int
    holidays: int = 0


@dataclass(frozen=True)
class BonusBreakdown:
    performance: Decimal
    attendance: Decimal
    other: Decimal
    total: Decimal


@dataclass(frozen=True)
class EarningsBreakdown:
    base_pay: Decimal
    hra: Decimal
    da: Decimal
    transport_allowance: Decimal
    medical_allowance: Decimal
    special_allowance: Decimal
    other_allowances: Decimal
    total_allowances: Decimal
    overtime_pay: Decimal
    weekend_overtime_pay: Decimal
    holiday_overtime_pay: Decimal
    total_overtime_pay: Decimal
    bonuses: BonusBreakdown
    gross_earnings: Decimal


@dataclass(frozen=True)
class DeductionsBreakdown:
    """Deduction lines.

    ``unpaid_leave`` is reported for reference only: it is already netted
    out of base pay and is not part of ``total``.
    """

    fixed: Decimal
    percentage: Decimal
    late_deduction: Decimal
    unpaid_leave: Decimal
    professional_tax: Decimal
    provident_fund: Decimal
    income_tax: Decimal
    health_insurance: Decimal
    other: Decimal
    total: Decimal


@dataclass(frozen=True)
class AttendanceSummary:
    days_worked: Decimal
    paid_leave_limit: Decimal
    paid_leave_taken: Decimal
    unpaid_leave_taken: Decimal
    half_days: Decimal
    overtime_hours: Decimal
    weekend_overtime_hours: Decimal
    holiday_overtime_hours: Decimal
    late_arrivals: int


@dataclass(frozen=True)
class PaySlipBreakdown:
    period: PeriodSummary
    earnings: EarningsBreakdown
    deductions: DeductionsBreakdown
    attendance: AttendanceSummary


@dataclass(frozen=True)
class PaySlipOutput:
    gross_salary: Decimal
    working_days: Decimal
    actual_days_worked: Decimal
    base_pay: Decimal
    total_allowances: Decimal
    overtime_pay: Decimal
    deductions: Decimal
    bonuses: Decimal
    net_salary: Decimal
    daily_rate: Decimal
    hourly_rate: Decimal
    pro_rata_factor: Decimal
    breakdown: PaySlipBreakdown
    currency: str


@dataclass(frozen=True)
class PayslipAttendance:
    days_present: int
    days_absent: int
    half_days: int
    late_arrivals: int
    paid_leave: int
    unpaid_leave: int
    overtime_hours: Decimal
    weekend_work_days: int
    total_hours_worked: Decimal
    expected_hours: Decimal


@dataclass(frozen=True)
class PayslipSummary:
    gross_salary: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    payment_mode: str


@dataclass(frozen=True)
class PayslipData:
    id: str
    user_id: str
    period_start: date
    period_end: date
    generated_at: datetime
    period: PeriodSummary
    attendance: PayslipAttendance
    earnings: EarningsBreakdown
    deductions: DeductionsBreakdown
    summary: PayslipSummary
    daily_rate: Decimal
    hourly_rate: Decimal
    currency: str
