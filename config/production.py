import os

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

PAYROLL_CONFIG = {
    "currency": os.getenv("DEFAULT_CURRENCY", "INR"),
    "locale": os.getenv("DEFAULT_LOCALE", "en-IN"),
    "cycle_start_day": int(os.getenv("DEFAULT_CYCLE_START_DAY", "1")),
    "late_deduction_per_arrival": os.getenv("LATE_DEDUCTION_PER_ARRIVAL", "50"),
    "payment_mode": os.getenv("PAYMENT_MODE", "Bank Transfer"),
}
