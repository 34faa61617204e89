"""Salary cycle boundaries.

A cycle either follows the calendar month (start day 1) or runs from
``cycle_start_day`` of one month to the day before it in the next month.
Start days are expected in 1..28 so every month has them; larger values
roll over the way date arithmetic does and are not rejected here.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import add_months, day_of_month, today_local
from .model import SalaryCycle


def create_monthly_cycle(year: int, month: int, cycle_start_day: int = 1) -> SalaryCycle:
    if cycle_start_day == 1:
        next_year, next_month = add_months(year, month, 1)
        return SalaryCycle(
            start_date=date(year, month, 1),
            end_date=day_of_month(next_year, next_month, 0),
        )

    end_year = year + 1 if month == 12 else year
    end_month = 1 if month == 12 else month + 1
    return SalaryCycle(
        start_date=day_of_month(year, month, cycle_start_day),
        end_date=day_of_month(end_year, end_month, cycle_start_day - 1),
    )


def _active_cycle_month(today: date, cycle_start_day: int) -> tuple[int, int]:
    """(year, month) in which the cycle containing ``today`` started."""
    if cycle_start_day != 1 and today.day < cycle_start_day:
        return add_months(today.year, today.month, -1)
    return today.year, today.month


def get_current_salary_cycle(cycle_start_day: int = 1, *, today: Optional[date] = None) -> SalaryCycle:
    today = today or today_local()
    year, month = _active_cycle_month(today, cycle_start_day)
    return create_monthly_cycle(year, month, cycle_start_day)


def cycle_for_date(day: date, cycle_start_day: int = 1) -> SalaryCycle:
    return get_current_salary_cycle(cycle_start_day, today=day)


def get_yearly_salary_cycles(year: int, cycle_start_day: int = 1) -> list[SalaryCycle]:
    return [create_monthly_cycle(year, month, cycle_start_day) for month in range(1, 13)]


def get_last_n_cycles(n: int, cycle_start_day: int = 1, *, today: Optional[date] = None) -> list[SalaryCycle]:
    """Last ``n`` cycles ending with the current one, oldest first."""
    today = today or today_local()
    year, month = _active_cycle_month(today, cycle_start_day)

    cycles: list[SalaryCycle] = []
    for _ in range(max(n, 0)):
        cycles.append(create_monthly_cycle(year, month, cycle_start_day))
        year, month = add_months(year, month, -1)

    cycles.reverse()
    return cycles
