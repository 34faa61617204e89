"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

SATURDAY = 6
SUNDAY = 0

DEFAULT_HOURS_PER_DAY = Decimal("8")
DEFAULT_DAYS_PER_MONTH = 22
CALENDAR_MONTH_DAYS = Decimal("30")
MONTHS_PER_YEAR = Decimal("12")

DEFAULT_CURRENCY = "INR"
DEFAULT_LOCALE = "en-IN"
DEFAULT_PAYMENT_MODE = "Bank Transfer"
DEFAULT_CYCLE_START_DAY = 1
MAX_CYCLE_START_DAY = 28

DEFAULT_LATE_DEDUCTION_PER_ARRIVAL = Decimal("50")
DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")
DEFAULT_LAST_CYCLES = 6
MAX_LAST_CYCLES = 120
