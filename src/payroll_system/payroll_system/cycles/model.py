from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import days_between


@dataclass(frozen=True)
class SalaryCycle:
    """Pay period, both ends inclusive."""

    start_date: date
    end_date: date

    @property
    def total_days(self) -> int:
        return days_between(self.start_date, self.end_date)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
