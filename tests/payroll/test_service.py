from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.attendance.model import LeaveEntry, TimeEntry
from src.payroll_system.payroll_system.common.datetime_utils import iter_dates, weekday_index
from src.payroll_system.payroll_system.core.enums import LeaveType, SalaryType, SaturdayMode
from src.payroll_system.payroll_system.core.exceptions import ValidationError
from src.payroll_system.payroll_system.cycles.resolver import create_monthly_cycle
from src.payroll_system.payroll_system.payroll.model import (
    AllowanceConfig,
    DeductionConfig,
    OvertimeSettings,
    PaymentConfig,
    SalaryRecord,
    WeeklyOffSettings,
)
from src.payroll_system.payroll_system.payroll.service import PayslipService, generate_payslip_from_entries

MAY_2024 = create_monthly_cycle(2024, 5, 1)
GENERATED_AT = datetime(2024, 6, 1, 9, 0)
RECORD = SalaryRecord(salary_type=SalaryType.MONTHLY, amount=Decimal("30000"), effective_from=date(2024, 1, 1))


def _full_month(last_day: int = 31, hours: str = "8") -> list[TimeEntry]:
    """8h on every working day of May 2024 (Sundays off) up to ``last_day``."""
    return [
        TimeEntry(date=d, total_hours=Decimal(hours), time_in=time(9, 0))
        for d in iter_dates(date(2024, 5, 1), date(2024, 5, last_day))
        if weekday_index(d) != 0
    ]


def _generate(entries, config: PaymentConfig = None, record: SalaryRecord = RECORD):
    return generate_payslip_from_entries(
        entries, record, config or PaymentConfig(), MAY_2024, "user-000123", generated_at=GENERATED_AT
    )


def test_full_attendance_pays_full_salary():
    payslip = _generate(_full_month())

    assert payslip.id == "PS-000123-20240501"
    assert payslip.generated_at == GENERATED_AT
    assert payslip.period.working_days == Decimal("27")
    assert payslip.daily_rate == Decimal("1111.11")
    assert payslip.hourly_rate == Decimal("138.89")
    assert payslip.earnings.base_pay == Decimal("30000.00")
    assert payslip.summary.net_salary == Decimal("30000.00")
    assert payslip.summary.payment_mode == "Bank Transfer"
    assert payslip.attendance.days_present == 27
    assert payslip.attendance.expected_hours == Decimal("216.00")
    assert payslip.attendance.total_hours_worked == Decimal("216.00")


def test_absence_is_unpaid_and_scales_allowances():
    config = PaymentConfig(
        allowances=AllowanceConfig(hra=Decimal("2700")),
        deductions=DeductionConfig(pf_percentage=Decimal("10")),
    )
    payslip = _generate(_full_month(last_day=30), config)

    assert payslip.attendance.days_absent == 1
    assert payslip.attendance.days_present == 26
    assert payslip.deductions.unpaid_leave == Decimal("1111.11")
    assert payslip.earnings.base_pay == Decimal("28888.89")
    assert payslip.earnings.hra == Decimal("2600.00")
    # provident fund is taken from base pay here, not gross
    assert payslip.deductions.provident_fund == Decimal("2888.89")
    assert payslip.summary.gross_salary == Decimal("31488.89")
    assert payslip.summary.net_salary == Decimal("28600.00")


def test_paid_leave_is_paid_and_unpaid_leave_is_not():
    entries = [e for e in _full_month() if e.date not in (date(2024, 5, 2), date(2024, 5, 3))]
    entries.append(TimeEntry(date=date(2024, 5, 2), leave=LeaveEntry(True, LeaveType.SICK)))
    entries.append(TimeEntry(date=date(2024, 5, 3), leave=LeaveEntry(True, LeaveType.PERSONAL)))

    payslip = _generate(entries)

    assert payslip.attendance.paid_leave == 1
    assert payslip.attendance.unpaid_leave == 1
    assert payslip.earnings.base_pay == Decimal("28888.89")


def test_late_arrivals_are_charged_per_arrival():
    entries = _full_month()
    entries[0] = replace(entries[0], time_in=time(9, 30))
    entries[1] = replace(entries[1], time_in=time(10, 5))
    config = PaymentConfig(expected_start_time=time(9, 15))

    payslip = _generate(entries, config)

    assert payslip.attendance.late_arrivals == 2
    assert payslip.deductions.late_deduction == Decimal("100.00")
    assert payslip.summary.net_salary == Decimal("29900.00")


def test_overtime_is_capped_per_month():
    entries = _full_month()
    for i in range(3):
        entries[i] = replace(entries[i], total_hours=Decimal("10"))
    config = PaymentConfig(
        overtime=OvertimeSettings(enabled=True, max_overtime_hours_per_month=Decimal("2")),
    )

    payslip = _generate(entries, config)

    assert payslip.attendance.overtime_hours == Decimal("6.00")
    assert payslip.earnings.overtime_pay == Decimal("416.67")


def test_weekend_work_is_paid_at_weekend_rate():
    entries = _full_month() + [TimeEntry(date=date(2024, 5, 5), total_hours=Decimal("5"))]
    config = PaymentConfig(overtime=OvertimeSettings(enabled=True))

    payslip = _generate(entries, config)

    assert payslip.attendance.weekend_work_days == 1
    assert payslip.earnings.weekend_overtime_pay == Decimal("1388.89")


def test_annual_salary_record():
    record = SalaryRecord(salary_type=SalaryType.ANNUAL, amount=Decimal("360000"), effective_from=date(2024, 1, 1))
    payslip = _generate(_full_month(), record=record)
    assert payslip.daily_rate == Decimal("1111.11")
    assert payslip.earnings.base_pay == Decimal("30000.00")


def _service(today: datetime = datetime(2024, 5, 20, 10, 0)) -> PayslipService:
    return PayslipService(clock=lambda: today)


def test_service_uses_current_cycle_by_default():
    payslip = _service().generate(user_id="u1", entries=_full_month(), salary_records=[RECORD])
    assert payslip.period_start == date(2024, 5, 1)
    assert payslip.period_end == date(2024, 5, 31)
    assert payslip.generated_at == datetime(2024, 5, 20, 10, 0)


def test_service_resolves_cycle_from_year_and_month():
    config = PaymentConfig(cycle_start_day=19)
    payslip = _service().generate(
        user_id="u1", entries=[], salary_records=[RECORD], payment_config=config, year=2024, month=3
    )
    assert payslip.period_start == date(2024, 3, 19)
    assert payslip.period_end == date(2024, 4, 18)


def test_service_accepts_explicit_period():
    payslip = _service().generate(
        user_id="u1",
        entries=[],
        salary_records=[RECORD],
        start=date(2024, 5, 6),
        end=date(2024, 5, 12),
    )
    assert payslip.period.total_days == 7
    assert payslip.attendance.days_absent == 6


def test_service_picks_record_in_force_at_cycle_end():
    raise_record = replace(RECORD, amount=Decimal("32400"), effective_from=date(2024, 5, 15))
    payslip = _service().generate(user_id="u1", entries=_full_month(), salary_records=[RECORD, raise_record])
    assert payslip.daily_rate == Decimal("1200.00")


def test_service_requires_salary_records():
    with pytest.raises(ValidationError):
        _service().generate(user_id="u1", entries=[], salary_records=[])


def test_service_rejects_reversed_period():
    with pytest.raises(ValidationError):
        _service().resolve_cycle(cycle_start_day=1, start=date(2024, 5, 10), end=date(2024, 5, 1))


def test_service_lists_recent_cycles():
    cycles = _service().last_cycles(3)
    assert [c.start_date for c in cycles] == [date(2024, 3, 1), date(2024, 4, 1), date(2024, 5, 1)]


def test_service_rejects_start_without_end():
    with pytest.raises(ValidationError):
        _service().resolve_cycle(cycle_start_day=1, start=date(2024, 5, 1))
    with pytest.raises(ValidationError):
        _service().resolve_cycle(cycle_start_day=1, end=date(2024, 5, 31))


@pytest.mark.parametrize(
    "year, month",
    [(2024, 0), (2024, 13), (None, 5), (2024, None), (0, 5), (9999, 12)],
)
def test_service_rejects_incomplete_or_out_of_range_month(year, month):
    with pytest.raises(ValidationError):
        _service().resolve_cycle(cycle_start_day=1, year=year, month=month)


HALF_SATURDAYS = PaymentConfig(
    weekly_offs=WeeklyOffSettings(saturday_mode=SaturdayMode.HALF_DAY),
    allowances=AllowanceConfig(hra=Decimal("1000")),
)


def _half_saturday_month() -> list[TimeEntry]:
    """8h Monday to Friday and 4h every Saturday of May 2024."""
    return [
        replace(e, total_hours=Decimal("4")) if weekday_index(e.date) == 6 else e
        for e in _full_month()
    ]


def test_half_day_saturdays_worked_in_full_pay_full_salary():
    payslip = _generate(_half_saturday_month(), HALF_SATURDAYS)

    assert payslip.period.working_days == Decimal("25")
    assert payslip.period.half_days == 4
    assert payslip.daily_rate == Decimal("1200.00")
    assert payslip.attendance.half_days == 0
    assert payslip.attendance.overtime_hours == Decimal("0.00")
    assert payslip.earnings.base_pay == Decimal("30000.00")
    assert payslip.earnings.hra == Decimal("1000.00")
    assert payslip.summary.gross_salary == Decimal("31000.00")


def test_missed_half_day_saturday_costs_half_a_day():
    entries = [e for e in _half_saturday_month() if e.date != date(2024, 5, 11)]
    payslip = _generate(entries, HALF_SATURDAYS)

    assert payslip.attendance.days_absent == 1
    assert payslip.deductions.unpaid_leave == Decimal("600.00")
    assert payslip.earnings.base_pay == Decimal("29400.00")
    # 24.5 of 25 working days attended
    assert payslip.earnings.hra == Decimal("980.00")
