from __future__ import annotations

import logging
import math
from datetime import MAXYEAR, MINYEAR, date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from ..attendance.analyzer import analyze_time_entries
from ..attendance.model import TimeEntry, TimeEntryAnalysis
from ..common.datetime_utils import now_local
from ..common.money import round2, safe_divide, to_decimal
from ..core.constants import DEFAULT_LAST_CYCLES
from ..core.exceptions import ValidationError
from ..cycles.model import SalaryCycle
from ..cycles.resolver import create_monthly_cycle, get_current_salary_cycle, get_last_n_cycles
from ..workdays.calendar import calculate_working_days
from ..workdays.model import WorkingDaysConfig
from .calculator import (
    apply_deductions,
    build_earnings,
    calculate_pay_slip,
    compute_base_pay,
    compute_bonuses,
    compute_overtime_pay,
    derive_rates,
    net_salary,
    prorate_allowances,
)
from .model import (
    OvertimeRules,
    OvertimeSettings,
    PaymentConfig,
    PayslipAttendance,
    PayslipData,
    PayslipSummary,
    PaySlipInput,
    PaySlipOutput,
    PeriodSummary,
    SalaryRecord,
)
from .salary import monthly_amount, salary_record_for_cycle

logger = logging.getLogger(__name__)


def working_days_config(payment_config: PaymentConfig, hours_per_day: Decimal) -> WorkingDaysConfig:
    offs = payment_config.weekly_offs
    return WorkingDaysConfig(
        hours_per_day=hours_per_day,
        weekly_offs=frozenset(offs.off_days),
        saturday_mode=offs.saturday_mode,
        second_saturday_off=offs.second_saturday_off,
        fourth_saturday_off=offs.fourth_saturday_off,
    )


def overtime_rules_from_analysis(settings: OvertimeSettings, analysis: TimeEntryAnalysis) -> OvertimeRules:
    regular_hours = analysis.overtime_hours
    if settings.max_overtime_hours_per_month is not None:
        regular_hours = min(regular_hours, to_decimal(settings.max_overtime_hours_per_month))
    return OvertimeRules(
        enabled=settings.enabled,
        threshold_hours_per_day=settings.threshold_hours_per_day,
        multiplier=settings.regular_multiplier,
        weekend_multiplier=settings.weekend_multiplier,
        holiday_multiplier=settings.holiday_multiplier,
        overtime_hours=regular_hours,
        weekend_overtime_hours=analysis.weekend_hours,
        holiday_overtime_hours=analysis.holiday_hours,
    )


def payslip_id(user_id: str, cycle: SalaryCycle) -> str:
    return f"PS-{user_id[-6:]}-{cycle.start_date.strftime('%Y%m%d')}"


def generate_payslip_from_entries(
    entries: Iterable[TimeEntry],
    salary_record: SalaryRecord,
    payment_config: PaymentConfig,
    cycle: SalaryCycle,
    user_id: str,
    *,
    generated_at: Optional[datetime] = None,
) -> PayslipData:
    """Attendance-driven payslip.

    Differences from ``calculate_pay_slip``: allowances scale with the
    attendance ratio (days worked / working days) instead of a pro-rata
    factor, and provident fund is a percentage of base pay, not gross.
    Absences and unpaid leave are both unpaid days; on a half-day Saturday
    they cost half a day.
    """
    hours_per_day = to_decimal(salary_record.working.hours_per_day)
    work_config = working_days_config(payment_config, hours_per_day)

    analysis = analyze_time_entries(
        entries,
        cycle.start_date,
        cycle.end_date,
        work_config,
        expected_start_time=payment_config.expected_start_time,
    )
    days = calculate_working_days(cycle.start_date, cycle.end_date, work_config)
    salary = monthly_amount(salary_record.salary_type, salary_record.amount)

    rates = derive_rates(
        salary_record.pay_type,
        payment_config.salary_basis,
        salary,
        pro_rata_factor=1,
        effective_days=cycle.total_days,
        working_days=days.working_days,
        hours_per_day=hours_per_day,
    )
    base = compute_base_pay(
        salary_record.pay_type,
        salary,
        rates,
        pro_rata_factor=1,
        working_days=days.working_days,
        unpaid_days=analysis.unpaid_day_units,
        hours_per_day=hours_per_day,
    )

    attendance_ratio = safe_divide(analysis.worked_day_units, days.working_days)
    allowances = prorate_allowances(payment_config.allowances, attendance_ratio)
    overtime = compute_overtime_pay(overtime_rules_from_analysis(payment_config.overtime, analysis), rates.hourly)
    bonuses = compute_bonuses(payment_config.bonuses)
    earnings = build_earnings(base, allowances, overtime, bonuses)
    gross = earnings.gross_earnings

    deductions = apply_deductions(
        payment_config.deductions,
        gross=gross,
        pf_base=base.amount,
        late_arrivals=analysis.late_arrivals,
        unpaid_leave=base.unpaid_leave_deduction,
    )
    net = net_salary(gross, deductions.total)

    weekend_work_days = math.ceil(analysis.weekend_hours / hours_per_day) if hours_per_day > 0 else 0

    logger.info(
        "payslip generated user=%s cycle=%s..%s gross=%s net=%s",
        user_id, cycle.start_date, cycle.end_date, gross, net,
    )
    return PayslipData(
        id=payslip_id(user_id, cycle),
        user_id=user_id,
        period_start=cycle.start_date,
        period_end=cycle.end_date,
        generated_at=generated_at or now_local(),
        period=PeriodSummary(
            start=cycle.start_date,
            end=cycle.end_date,
            total_days=cycle.total_days,
            working_days=days.working_days,
            weekly_offs=days.weekly_offs,
            half_days=days.half_days,
        ),
        attendance=PayslipAttendance(
            days_present=analysis.total_days_worked,
            days_absent=analysis.absences,
            half_days=analysis.half_days,
            late_arrivals=analysis.late_arrivals,
            paid_leave=analysis.paid_leaves,
            unpaid_leave=analysis.unpaid_leaves,
            overtime_hours=round2(analysis.overtime_hours),
            weekend_work_days=weekend_work_days,
            total_hours_worked=round2(analysis.total_hours_worked),
            expected_hours=round2(days.working_days * hours_per_day),
        ),
        earnings=earnings,
        deductions=deductions,
        summary=PayslipSummary(
            gross_salary=gross,
            total_deductions=deductions.total,
            net_salary=net,
            payment_mode=payment_config.payment_mode,
        ),
        daily_rate=round2(rates.daily),
        hourly_rate=round2(rates.hourly),
        currency=payment_config.currency,
    )


class PayslipService:
    """Resolves the pay period and salary record, then runs the engine.

    ``clock`` is injected so "current cycle" requests stay reproducible.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = now_local,
        default_payment_config: Optional[PaymentConfig] = None,
    ):
        self._clock = clock
        self._default_config = default_payment_config or PaymentConfig()

    @property
    def default_payment_config(self) -> PaymentConfig:
        return self._default_config

    def _today(self) -> date:
        return self._clock().date()

    def calculate(self, data: PaySlipInput) -> PaySlipOutput:
        return calculate_pay_slip(data)

    def resolve_cycle(
        self,
        *,
        cycle_start_day: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> SalaryCycle:
        if start is not None or end is not None:
            if start is None or end is None:
                raise ValidationError("start and end must be given together")
            if end < start:
                raise ValidationError("end must not be before start")
            return SalaryCycle(start_date=start, end_date=end)
        if year is not None or month is not None:
            if year is None or month is None:
                raise ValidationError("year and month must be given together")
            if not 1 <= month <= 12:
                raise ValidationError("month must be between 1 and 12")
            # cycles may end in the following year
            if not MINYEAR < year < MAXYEAR:
                raise ValidationError(f"year must be between {MINYEAR + 1} and {MAXYEAR - 1}")
            return create_monthly_cycle(year, month, cycle_start_day)
        return get_current_salary_cycle(cycle_start_day, today=self._today())

    def last_cycles(self, n: int = DEFAULT_LAST_CYCLES, *, cycle_start_day: int = 1) -> list[SalaryCycle]:
        return get_last_n_cycles(n, cycle_start_day, today=self._today())

    def generate(
        self,
        *,
        user_id: str,
        entries: Sequence[TimeEntry],
        salary_records: Sequence[SalaryRecord],
        payment_config: Optional[PaymentConfig] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> PayslipData:
        config = payment_config or self._default_config
        if not salary_records:
            raise ValidationError("No salary records found")

        cycle = self.resolve_cycle(
            cycle_start_day=config.cycle_start_day, start=start, end=end, year=year, month=month
        )
        record = salary_record_for_cycle(salary_records, cycle)
        if record is None:
            raise ValidationError("No applicable salary record found for this period")

        return generate_payslip_from_entries(
            entries, record, config, cycle, user_id, generated_at=self._clock()
        )
