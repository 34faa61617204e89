"""JSON payloads <-> payroll dataclasses.

Keys mirror the dataclass field names. Money and hour values are accepted as
numbers or numeric strings and returned as strings so no precision is lost.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from ..attendance.model import LeaveEntry, TimeEntry
from ..common.validators import (
    optional_date,
    optional_time,
    require_date,
    require_decimal,
    require_enum,
    require_field,
    require_int,
    require_mapping,
)
from ..core.constants import MAX_CYCLE_START_DAY
from ..core.enums import LeaveType, SalaryBasis, SalaryPayType, SalaryType, SaturdayMode
from ..core.exceptions import ValidationError
from ..cycles.model import SalaryCycle
from ..workdays.model import WorkingDaysConfig
from .model import (
    AllowanceConfig,
    BonusConfig,
    DeductionConfig,
    ExtraItem,
    LeaveConfig,
    OvertimeRules,
    OvertimeSettings,
    PaymentConfig,
    PaySlipInput,
    SalaryRecord,
    WeeklyOffSettings,
    WorkingConfig,
)


def _decimal(data: Mapping[str, Any], name: str, default: Decimal) -> Decimal:
    if data.get(name) is None:
        return default
    return require_decimal(data[name], name)


def _flag(data: Mapping[str, Any], name: str, default: bool) -> bool:
    value = data.get(name, default)
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be true or false")
    return value


def _list(value: Any, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{name} must be a list")
    return value


def _weekdays(value: Any, name: str) -> frozenset[int]:
    days = frozenset(require_int(v, name) for v in _list(value, name))
    if any(d < 0 or d > 6 for d in days):
        raise ValidationError(f"{name} must contain weekday numbers 0 (Sunday) to 6 (Saturday)")
    return days


def parse_cycle_start_day(value: Any) -> int:
    day = require_int(value, "cycle_start_day")
    if not 1 <= day <= MAX_CYCLE_START_DAY:
        raise ValidationError(f"cycle_start_day must be between 1 and {MAX_CYCLE_START_DAY}")
    return day


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_cycle(value: Any) -> SalaryCycle:
    data = require_mapping(value, "cycle")
    start = require_date(require_field(data, "start_date"), "cycle.start_date")
    end = require_date(require_field(data, "end_date"), "cycle.end_date")
    if end < start:
        raise ValidationError("cycle.end_date must not be before cycle.start_date")
    return SalaryCycle(start_date=start, end_date=end)


def parse_extra_items(value: Any, name: str) -> tuple[ExtraItem, ...]:
    items = []
    for raw in _list(value, name):
        data = require_mapping(raw, name)
        items.append(
            ExtraItem(
                description=str(data.get("description", "")),
                amount=require_decimal(require_field(data, "amount"), f"{name}.amount"),
                is_percentage=_flag(data, "is_percentage", False),
            )
        )
    return tuple(items)


def parse_working_days_config(value: Any) -> WorkingDaysConfig:
    data = require_mapping(value, "working_days")
    default = WorkingDaysConfig()
    mode = data.get("saturday_mode")
    return WorkingDaysConfig(
        hours_per_day=_decimal(data, "hours_per_day", default.hours_per_day),
        weekly_offs=_weekdays(data["weekly_offs"], "weekly_offs") if "weekly_offs" in data else default.weekly_offs,
        saturday_mode=require_enum(SaturdayMode, mode, "saturday_mode") if mode else default.saturday_mode,
        second_saturday_off=_flag(data, "second_saturday_off", False),
        fourth_saturday_off=_flag(data, "fourth_saturday_off", False),
    )


def parse_leave_config(value: Any) -> LeaveConfig:
    data = require_mapping(value, "leaves")
    default = LeaveConfig()
    return LeaveConfig(
        paid_leave_limit=_decimal(data, "paid_leave_limit", default.paid_leave_limit),
        paid_leave_taken=_decimal(data, "paid_leave_taken", default.paid_leave_taken),
        unpaid_leave_taken=_decimal(data, "unpaid_leave_taken", default.unpaid_leave_taken),
        half_days_taken=_decimal(data, "half_days_taken", default.half_days_taken),
    )


def parse_overtime_rules(value: Any) -> OvertimeRules:
    data = require_mapping(value, "overtime")
    default = OvertimeRules()
    return OvertimeRules(
        enabled=_flag(data, "enabled", default.enabled),
        threshold_hours_per_day=_decimal(data, "threshold_hours_per_day", default.threshold_hours_per_day),
        multiplier=_decimal(data, "multiplier", default.multiplier),
        weekend_multiplier=_decimal(data, "weekend_multiplier", default.weekend_multiplier),
        holiday_multiplier=_decimal(data, "holiday_multiplier", default.holiday_multiplier),
        overtime_hours=_decimal(data, "overtime_hours", default.overtime_hours),
        weekend_overtime_hours=_decimal(data, "weekend_overtime_hours", default.weekend_overtime_hours),
        holiday_overtime_hours=_decimal(data, "holiday_overtime_hours", default.holiday_overtime_hours),
    )


def parse_deduction_config(value: Any, default: Optional[DeductionConfig] = None) -> DeductionConfig:
    data = require_mapping(value, "deductions")
    default = default or DeductionConfig()
    return DeductionConfig(
        fixed=_decimal(data, "fixed", default.fixed),
        percentage=_decimal(data, "percentage", default.percentage),
        late_deduction_per_arrival=_decimal(data, "late_deduction_per_arrival", default.late_deduction_per_arrival),
        professional_tax=_decimal(data, "professional_tax", default.professional_tax),
        pf_percentage=_decimal(data, "pf_percentage", default.pf_percentage),
        income_tax=_decimal(data, "income_tax", default.income_tax),
        tax_enabled=_flag(data, "tax_enabled", default.tax_enabled),
        income_tax_percentage=_decimal(data, "income_tax_percentage", default.income_tax_percentage),
        health_insurance=_decimal(data, "health_insurance", default.health_insurance),
        other=parse_extra_items(data["other"], "deductions.other") if "other" in data else default.other,
    )


def parse_allowance_config(value: Any) -> AllowanceConfig:
    data = require_mapping(value, "allowances")
    zero = Decimal("0")
    return AllowanceConfig(
        hra=_decimal(data, "hra", zero),
        da=_decimal(data, "da", zero),
        transport=_decimal(data, "transport", zero),
        medical=_decimal(data, "medical", zero),
        special=_decimal(data, "special", zero),
        other=parse_extra_items(data.get("other"), "allowances.other"),
    )


def parse_bonus_config(value: Any) -> BonusConfig:
    data = require_mapping(value, "bonuses")
    zero = Decimal("0")
    return BonusConfig(
        performance=_decimal(data, "performance", zero),
        attendance=_decimal(data, "attendance", zero),
        other=parse_extra_items(data.get("other"), "bonuses.other"),
    )


def parse_pay_slip_input(payload: Any, *, default_currency: str) -> PaySlipInput:
    data = require_mapping(payload, "body")
    return PaySlipInput(
        base_salary=require_decimal(require_field(data, "base_salary"), "base_salary"),
        salary_pay_type=require_enum(SalaryPayType, require_field(data, "salary_pay_type"), "salary_pay_type"),
        salary_basis=require_enum(SalaryBasis, require_field(data, "salary_basis"), "salary_basis"),
        cycle=parse_cycle(require_field(data, "cycle")),
        working_days=parse_working_days_config(data.get("working_days")),
        leaves=parse_leave_config(data.get("leaves")),
        overtime=parse_overtime_rules(data.get("overtime")),
        deductions=parse_deduction_config(data.get("deductions")),
        allowances=parse_allowance_config(data.get("allowances")),
        bonuses=parse_bonus_config(data.get("bonuses")),
        joining_date=optional_date(data.get("joining_date"), "joining_date"),
        leaving_date=optional_date(data.get("leaving_date"), "leaving_date"),
        late_arrivals=require_int(data.get("late_arrivals", 0), "late_arrivals"),
        currency=str(data.get("currency") or default_currency),
    )


def parse_time_entry(value: Any) -> TimeEntry:
    data = require_mapping(value, "entries[]")
    leave = None
    if data.get("is_leave"):
        leave_type = data.get("leave_type")
        leave = LeaveEntry(
            is_leave=True,
            leave_type=require_enum(LeaveType, leave_type, "leave_type") if leave_type else None,
            leave_reason=data.get("leave_reason"),
        )
    return TimeEntry(
        date=require_date(require_field(data, "date"), "date"),
        time_in=optional_time(data.get("time_in"), "time_in"),
        time_out=optional_time(data.get("time_out"), "time_out"),
        total_hours=None if data.get("total_hours") is None else require_decimal(data["total_hours"], "total_hours"),
        break_minutes=require_int(data.get("break_minutes") or 0, "break_minutes"),
        leave=leave,
        is_holiday_work=_flag(data, "is_holiday_work", False),
        user_id=data.get("user_id"),
        work_description=str(data.get("work_description") or ""),
        project=data.get("project"),
        client=data.get("client"),
    )


def parse_salary_record(value: Any) -> SalaryRecord:
    data = require_mapping(value, "salary_records[]")
    working = require_mapping(data.get("working"), "working")
    default_working = WorkingConfig()
    pay_type = data.get("pay_type")
    return SalaryRecord(
        salary_type=require_enum(SalaryType, data.get("salary_type", SalaryType.MONTHLY.value), "salary_type"),
        amount=require_decimal(require_field(data, "amount"), "amount"),
        effective_from=require_date(require_field(data, "effective_from"), "effective_from"),
        working=WorkingConfig(
            hours_per_day=_decimal(working, "hours_per_day", default_working.hours_per_day),
            days_per_month=require_int(working.get("days_per_month", default_working.days_per_month), "days_per_month"),
        ),
        pay_type=require_enum(SalaryPayType, pay_type, "pay_type") if pay_type else SalaryPayType.FIXED_MONTHLY,
        note=data.get("note"),
    )


def parse_payment_config(value: Any, default: PaymentConfig) -> PaymentConfig:
    """Overlay a JSON payment config on ``default``; absent keys keep the default."""
    data = require_mapping(value, "payment_config")
    if not data:
        return default

    offs = require_mapping(data.get("weekly_offs"), "weekly_offs")
    mode = offs.get("saturday_mode")
    weekly_offs = WeeklyOffSettings(
        off_days=_weekdays(offs["off_days"], "off_days") if "off_days" in offs else default.weekly_offs.off_days,
        saturday_mode=require_enum(SaturdayMode, mode, "saturday_mode") if mode else default.weekly_offs.saturday_mode,
        second_saturday_off=_flag(offs, "second_saturday_off", default.weekly_offs.second_saturday_off),
        fourth_saturday_off=_flag(offs, "fourth_saturday_off", default.weekly_offs.fourth_saturday_off),
    )

    ot = require_mapping(data.get("overtime"), "overtime")
    ot_default = default.overtime
    cap = ot.get("max_overtime_hours_per_month", ot_default.max_overtime_hours_per_month)
    overtime = OvertimeSettings(
        enabled=_flag(ot, "enabled", ot_default.enabled),
        threshold_hours_per_day=_decimal(ot, "threshold_hours_per_day", ot_default.threshold_hours_per_day),
        regular_multiplier=_decimal(ot, "regular_multiplier", ot_default.regular_multiplier),
        weekend_multiplier=_decimal(ot, "weekend_multiplier", ot_default.weekend_multiplier),
        holiday_multiplier=_decimal(ot, "holiday_multiplier", ot_default.holiday_multiplier),
        max_overtime_hours_per_month=None if cap is None else require_decimal(cap, "max_overtime_hours_per_month"),
    )

    basis = data.get("salary_basis")
    expected_start = data.get("expected_start_time")
    return PaymentConfig(
        cycle_start_day=parse_cycle_start_day(data.get("cycle_start_day", default.cycle_start_day)),
        weekly_offs=weekly_offs,
        expected_start_time=optional_time(expected_start, "expected_start_time") if expected_start else default.expected_start_time,
        salary_basis=require_enum(SalaryBasis, basis, "salary_basis") if basis else default.salary_basis,
        overtime=overtime,
        deductions=parse_deduction_config(data.get("deductions"), default.deductions),
        allowances=parse_allowance_config(data["allowances"]) if "allowances" in data else default.allowances,
        bonuses=parse_bonus_config(data["bonuses"]) if "bonuses" in data else default.bonuses,
        currency=str(data.get("currency") or default.currency),
        locale=str(data.get("locale") or default.locale),
        payment_mode=str(data.get("payment_mode") or default.payment_mode),
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def to_json(value: Any) -> Any:
    """Convert engine results into JSON-friendly structures."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (frozenset, set)):
        return sorted(to_json(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): to_json(v) for k, v in value.items()}
    return value
