from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from typing import Mapping, Optional

from ..core.enums import PAID_LEAVE_TYPES, LeaveType


@dataclass(frozen=True)
class LeaveEntry:
    is_leave: bool
    leave_type: Optional[LeaveType] = None
    leave_reason: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return self.leave_type in PAID_LEAVE_TYPES


@dataclass(frozen=True)
class TimeEntry:
    """Finished attendance record produced by the timer/entry screens.

    ``total_hours`` is usually filled in upstream; when it is missing the
    hours are derived from ``time_in``/``time_out`` and ``break_minutes``.
    """

    date: date
    time_in: Optional[time] = None
    time_out: Optional[time] = None
    total_hours: Optional[Decimal] = None
    break_minutes: int = 0
    leave: Optional[LeaveEntry] = None
    is_holiday_work: bool = False
    user_id: Optional[str] = None
    work_description: str = ""
    project: Optional[str] = None
    client: Optional[str] = None

    @property
    def is_leave(self) -> bool:
        return bool(self.leave and self.leave.is_leave)


@dataclass(frozen=True)
class TimeEntryAnalysis:
    """Attendance statistics for a period, independent of salary rules.

    The counters count dates. ``worked_day_units`` and ``unpaid_day_units``
    weight each date by its working-hours factor (0.5 for a half-day
    Saturday); a short day adds half its factor to the unpaid units. Pay is
    computed from these.
    """

    total_hours_worked: Decimal = Decimal("0")
    total_days_worked: int = 0
    overtime_hours: Decimal = Decimal("0")
    weekend_hours: Decimal = Decimal("0")
    holiday_hours: Decimal = Decimal("0")
    late_arrivals: int = 0
    half_days: int = 0
    absences: int = 0
    paid_leaves: int = 0
    unpaid_leaves: int = 0
    worked_day_units: Decimal = Decimal("0")
    unpaid_day_units: Decimal = Decimal("0")
    entries_by_date: Mapping[str, tuple[TimeEntry, ...]] = field(default_factory=dict)
