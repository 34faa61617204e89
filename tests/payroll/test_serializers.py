from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.core.enums import LeaveType, SalaryPayType, SalaryType, SaturdayMode
from src.payroll_system.payroll_system.core.exceptions import ValidationError
from src.payroll_system.payroll_system.cycles.model import SalaryCycle
from src.payroll_system.payroll_system.payroll.model import PaymentConfig
from src.payroll_system.payroll_system.payroll.serializers import (
    parse_pay_slip_input,
    parse_payment_config,
    parse_salary_record,
    parse_time_entry,
    to_json,
)


def _calc_payload(**overrides) -> dict:
    payload = {
        "base_salary": 30000,
        "salary_pay_type": "fixed_monthly",
        "salary_basis": "working_days_only",
        "cycle": {"start_date": "2024-05-01", "end_date": "2024-05-31"},
    }
    payload.update(overrides)
    return payload


def test_parse_pay_slip_input_minimal():
    data = parse_pay_slip_input(_calc_payload(), default_currency="INR")
    assert data.base_salary == Decimal("30000")
    assert data.salary_pay_type == SalaryPayType.FIXED_MONTHLY
    assert data.cycle == SalaryCycle(date(2024, 5, 1), date(2024, 5, 31))
    assert data.working_days.weekly_offs == frozenset({0})
    assert data.currency == "INR"


def test_parse_pay_slip_input_nested_configs():
    data = parse_pay_slip_input(
        _calc_payload(
            working_days={"weekly_offs": [0, 6], "saturday_mode": "half-day", "hours_per_day": "7.5"},
            overtime={"enabled": True, "overtime_hours": 4.5},
            deductions={"other": [{"description": "Loan", "amount": "1000"}]},
            joining_date="2024-05-16",
            currency="USD",
        ),
        default_currency="INR",
    )
    assert data.working_days.weekly_offs == frozenset({0, 6})
    assert data.working_days.saturday_mode == SaturdayMode.HALF_DAY
    assert data.working_days.hours_per_day == Decimal("7.5")
    assert data.overtime.enabled is True
    assert data.overtime.overtime_hours == Decimal("4.5")
    assert data.deductions.other[0].amount == Decimal("1000")
    assert data.joining_date == date(2024, 5, 16)
    assert data.currency == "USD"


@pytest.mark.parametrize(
    "overrides",
    [
        {"salary_pay_type": "weekly"},
        {"base_salary": "lots"},
        {"base_salary": None},
        {"base_salary": "NaN"},
        {"base_salary": "Infinity"},
        {"base_salary": float("inf")},
        {"overtime": {"enabled": True, "overtime_hours": "-Infinity"}},
        {"cycle": {"start_date": "2024-05-31", "end_date": "2024-05-01"}},
        {"cycle": {"start_date": "31/05/2024", "end_date": "2024-06-30"}},
        {"working_days": {"weekly_offs": [7]}},
        {"overtime": {"enabled": "yes"}},
    ],
)
def test_invalid_payloads_raise_validation_error(overrides):
    with pytest.raises(ValidationError):
        parse_pay_slip_input(_calc_payload(**overrides), default_currency="INR")


def test_parse_time_entry_with_leave():
    entry = parse_time_entry({"date": "2024-05-02", "is_leave": True, "leave_type": "Sick"})
    assert entry.is_leave
    assert entry.leave.leave_type == LeaveType.SICK
    assert entry.leave.is_paid


def test_parse_time_entry_with_clock_times():
    entry = parse_time_entry({"date": "2024-05-02", "time_in": "09:00", "time_out": "18:00", "break_minutes": 60})
    assert entry.time_in == time(9, 0)
    assert entry.total_hours is None
    assert not entry.is_leave


def test_parse_salary_record_defaults():
    record = parse_salary_record({"amount": 360000, "salary_type": "annual", "effective_from": "2024-01-01"})
    assert record.salary_type == SalaryType.ANNUAL
    assert record.pay_type == SalaryPayType.FIXED_MONTHLY
    assert record.working.hours_per_day == Decimal("8")
    assert record.working.days_per_month == 22


def test_payment_config_overlays_defaults():
    default = PaymentConfig()
    config = parse_payment_config(
        {"weekly_offs": {"saturday_mode": "alternate-2-4"}, "expected_start_time": "09:15"},
        default,
    )
    assert config.weekly_offs.saturday_mode == SaturdayMode.ALTERNATE_2_4
    assert config.weekly_offs.off_days == frozenset({0})
    assert config.expected_start_time == time(9, 15)
    assert config.deductions.late_deduction_per_arrival == Decimal("50")

    assert parse_payment_config(None, default) is default


def test_to_json():
    rendered = to_json(
        {
            "cycle": SalaryCycle(date(2024, 5, 1), date(2024, 5, 31)),
            "amount": Decimal("1111.11"),
            "at": datetime(2024, 6, 1, 9, 0),
            "mode": SaturdayMode.WORKING,
            "offs": frozenset({6, 0}),
        }
    )
    assert rendered == {
        "cycle": {"start_date": "2024-05-01", "end_date": "2024-05-31"},
        "amount": "1111.11",
        "at": "2024-06-01T09:00:00",
        "mode": "working",
        "offs": [0, 6],
    }


def test_non_finite_hours_are_rejected():
    with pytest.raises(ValidationError, match="total_hours must be a finite number"):
        parse_time_entry({"date": "2024-05-02", "total_hours": "nan"})
