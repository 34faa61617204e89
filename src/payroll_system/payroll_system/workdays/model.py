from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.constants import DEFAULT_HOURS_PER_DAY
from ..core.enums import SaturdayMode


@dataclass(frozen=True)
class WorkingDaysConfig:
    """Weekly-off and Saturday policy.

    ``weekly_offs`` holds weekday indices with 0=Sunday .. 6=Saturday.
    ``second_saturday_off`` / ``fourth_saturday_off`` are the legacy flags
    and behave like the alternate Saturday modes.
    """

    hours_per_day: Decimal = DEFAULT_HOURS_PER_DAY
    weekly_offs: frozenset[int] = frozenset({0})
    saturday_mode: SaturdayMode = SaturdayMode.WORKING
    second_saturday_off: bool = False
    fourth_saturday_off: bool = False


@dataclass(frozen=True)
class WorkingDaysSummary:
    working_days: Decimal
    weekly_offs: int
    half_days: int

    @property
    def total_days(self) -> int:
        full_days = int(self.working_days - Decimal(self.half_days) / 2)
        return full_days + self.half_days + self.weekly_offs
