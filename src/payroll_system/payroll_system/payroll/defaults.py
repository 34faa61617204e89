"""Baseline configuration objects.

Callers start from these and override fields with ``dataclasses.replace``.
"""

from __future__ import annotations

from decimal import Decimal

from ..core.constants import DEFAULT_HOURS_PER_DAY, SATURDAY, SUNDAY
from ..workdays.model import WorkingDaysConfig
from .model import AllowanceConfig, BonusConfig, DeductionConfig, LeaveConfig, OvertimeRules, PaymentConfig


def get_default_working_days_config() -> WorkingDaysConfig:
    """6-day week (Monday to Saturday), 8 hours per day, Sunday off."""
    return WorkingDaysConfig(hours_per_day=DEFAULT_HOURS_PER_DAY, weekly_offs=frozenset({SUNDAY}))


def get_five_day_work_week_config() -> WorkingDaysConfig:
    return WorkingDaysConfig(hours_per_day=DEFAULT_HOURS_PER_DAY, weekly_offs=frozenset({SUNDAY, SATURDAY}))


def get_default_leave_config() -> LeaveConfig:
    return LeaveConfig(paid_leave_limit=Decimal("2"))


def get_default_overtime_rules() -> OvertimeRules:
    return OvertimeRules(
        enabled=False,
        threshold_hours_per_day=Decimal("8"),
        multiplier=Decimal("1.5"),
        weekend_multiplier=Decimal("2"),
        holiday_multiplier=Decimal("2.5"),
    )


def get_default_deduction_config() -> DeductionConfig:
    return DeductionConfig()


def get_default_allowance_config() -> AllowanceConfig:
    return AllowanceConfig()


def get_default_bonus_config() -> BonusConfig:
    return BonusConfig()


def get_default_payment_config() -> PaymentConfig:
    return PaymentConfig()
