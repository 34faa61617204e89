from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from src.payroll_system.payroll_system.attendance.hours import worked_hours, worked_minutes
from src.payroll_system.payroll_system.attendance.model import TimeEntry


def test_worked_minutes_subtracts_break():
    entry = TimeEntry(date=date(2025, 1, 1), time_in=time(8, 0), time_out=time(17, 0), break_minutes=60)
    assert worked_minutes(entry) == 8 * 60


def test_overnight_shift_wraps_past_midnight():
    entry = TimeEntry(date=date(2025, 1, 1), time_in=time(22, 0), time_out=time(6, 0), break_minutes=30)
    assert worked_minutes(entry) == 7 * 60 + 30


def test_missing_time_out_counts_zero():
    entry = TimeEntry(date=date(2025, 1, 1), time_in=time(8, 0))
    assert worked_minutes(entry) == 0
    assert worked_hours(entry) == 0


def test_break_longer_than_shift_floors_at_zero():
    entry = TimeEntry(date=date(2025, 1, 1), time_in=time(8, 0), time_out=time(8, 30), break_minutes=60)
    assert worked_minutes(entry) == 0


def test_total_hours_wins_over_clock_times():
    entry = TimeEntry(
        date=date(2025, 1, 1),
        time_in=time(8, 0),
        time_out=time(17, 0),
        total_hours=Decimal("7.5"),
    )
    assert worked_hours(entry) == Decimal("7.5")


def test_hours_derived_from_clock_times():
    entry = TimeEntry(date=date(2025, 1, 1), time_in=time(9, 0), time_out=time(13, 30))
    assert worked_hours(entry) == Decimal("4.5")
