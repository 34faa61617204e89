from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value, "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def weekday_index(value: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""
    return (value.weekday() + 1) % 7


def days_between(start: date, end: date) -> int:
    """Number of days in [start, end], both ends included."""
    return abs((end - start).days) + 1


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Shift a (year, month) pair by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def day_of_month(year: int, month: int, day: int) -> date:
    """Build a date, rolling ``day`` over month boundaries instead of raising.

    ``day_of_month(2024, 3, 0)`` is the last day of February 2024.
    """
    return date(year, month, 1) + timedelta(days=day - 1)
