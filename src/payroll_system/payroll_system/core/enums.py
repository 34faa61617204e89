from __future__ import annotations

from enum import Enum


class SaturdayMode(str, Enum):
    """Which Saturdays are worked, off, or half days."""

    WORKING = "working"
    ALL_OFF = "all-off"
    ALTERNATE_1_3 = "alternate-1-3"
    ALTERNATE_2_4 = "alternate-2-4"
    HALF_DAY = "half-day"


class SalaryPayType(str, Enum):
    """How the salary amount is paid out."""

    FIXED_MONTHLY = "fixed_monthly"
    DAILY_WAGE = "daily_wage"
    HOURLY = "hourly"


class SalaryBasis(str, Enum):
    """Divisor used to turn a fixed monthly salary into a daily rate."""

    CALENDAR_MONTH = "calendar_month"
    CYCLE_DAYS = "cycle_days"
    WORKING_DAYS_ONLY = "working_days_only"


class SalaryType(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


class LeaveType(str, Enum):
    SICK = "Sick"
    VACATION = "Vacation"
    PERSONAL = "Personal"
    HOLIDAY = "Holiday"
    OTHER = "Other"


class DayKind(str, Enum):
    """Classification of a single calendar date."""

    FULL = "FULL"
    HALF = "HALF"
    OFF = "OFF"


PAID_LEAVE_TYPES = frozenset({LeaveType.SICK, LeaveType.VACATION})
