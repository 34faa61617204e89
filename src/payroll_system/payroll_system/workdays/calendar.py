"""Working-day classification.

Every date is exactly one of: a full working day, a half day (Saturday in
``half-day`` mode) or an off day.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import iter_dates, weekday_index
from ..core.constants import SATURDAY
from ..core.enums import DayKind, SaturdayMode
from .model import WorkingDaysConfig, WorkingDaysSummary

logger = logging.getLogger(__name__)

_FACTORS = {
    DayKind.FULL: Decimal("1"),
    DayKind.HALF: Decimal("0.5"),
    DayKind.OFF: Decimal("0"),
}


def is_nth_weekday_of_month(day: date, weekday: int, n: int) -> bool:
    if weekday_index(day) != weekday:
        return False
    return math.ceil(day.day / 7) == n


def _resolve_mode(config: WorkingDaysConfig, saturday_mode: Optional[SaturdayMode]) -> SaturdayMode:
    return saturday_mode if saturday_mode is not None else config.saturday_mode


def is_weekly_off(day: date, config: WorkingDaysConfig, saturday_mode: Optional[SaturdayMode] = None) -> bool:
    if weekday_index(day) in config.weekly_offs:
        return True

    mode = _resolve_mode(config, saturday_mode)
    if weekday_index(day) == SATURDAY:
        if mode == SaturdayMode.ALL_OFF:
            return True
        if mode == SaturdayMode.ALTERNATE_1_3:
            return is_nth_weekday_of_month(day, SATURDAY, 1) or is_nth_weekday_of_month(day, SATURDAY, 3)
        if mode == SaturdayMode.ALTERNATE_2_4:
            return is_nth_weekday_of_month(day, SATURDAY, 2) or is_nth_weekday_of_month(day, SATURDAY, 4)
        if mode == SaturdayMode.HALF_DAY:
            return False

    # Legacy flags, only consulted in "working" mode.
    if config.second_saturday_off and is_nth_weekday_of_month(day, SATURDAY, 2):
        return True
    if config.fourth_saturday_off and is_nth_weekday_of_month(day, SATURDAY, 4):
        return True
    return False


def is_saturday_half_day(day: date, config: WorkingDaysConfig, saturday_mode: Optional[SaturdayMode] = None) -> bool:
    return weekday_index(day) == SATURDAY and _resolve_mode(config, saturday_mode) == SaturdayMode.HALF_DAY


def classify_day(day: date, config: WorkingDaysConfig, saturday_mode: Optional[SaturdayMode] = None) -> DayKind:
    if is_weekly_off(day, config, saturday_mode):
        return DayKind.OFF
    if is_saturday_half_day(day, config, saturday_mode):
        return DayKind.HALF
    return DayKind.FULL


def working_hours_factor(day: date, config: WorkingDaysConfig, saturday_mode: Optional[SaturdayMode] = None) -> Decimal:
    """1.0 for a full day, 0.5 for a half day, 0 for an off day."""
    return _FACTORS[classify_day(day, config, saturday_mode)]


def calculate_working_days(
    start: date,
    end: date,
    config: WorkingDaysConfig,
    saturday_mode: Optional[SaturdayMode] = None,
) -> WorkingDaysSummary:
    working_days = Decimal("0")
    weekly_offs = 0
    half_days = 0

    for day in iter_dates(start, end):
        kind = classify_day(day, config, saturday_mode)
        if kind == DayKind.OFF:
            weekly_offs += 1
        elif kind == DayKind.HALF:
            half_days += 1
        working_days += _FACTORS[kind]

    logger.debug(
        "working days %s..%s: working=%s offs=%s half=%s", start, end, working_days, weekly_offs, half_days
    )
    return WorkingDaysSummary(working_days=working_days, weekly_offs=weekly_offs, half_days=half_days)
