DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

PAYROLL_CONFIG = {
    "currency": "INR",
    "locale": "en-IN",
    "cycle_start_day": 1,
    "late_deduction_per_arrival": "50",
    "payment_mode": "Bank Transfer",
}
