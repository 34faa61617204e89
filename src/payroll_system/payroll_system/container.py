from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from .common.datetime_utils import now_local
from .common.money import to_decimal
from .payroll.defaults import get_default_payment_config
from .payroll.service import PayslipService


@dataclass(frozen=True)
class Container:
    payslip_service: PayslipService
    default_currency: str


def build_container(*, payroll_config: dict, clock: Callable[[], datetime] = now_local) -> Container:
    base = get_default_payment_config()
    defaults = replace(
        base,
        cycle_start_day=int(payroll_config.get("cycle_start_day", base.cycle_start_day)),
        currency=str(payroll_config.get("currency", base.currency)),
        locale=str(payroll_config.get("locale", base.locale)),
        payment_mode=str(payroll_config.get("payment_mode", base.payment_mode)),
        deductions=replace(
            base.deductions,
            late_deduction_per_arrival=to_decimal(
                payroll_config.get("late_deduction_per_arrival", base.deductions.late_deduction_per_arrival)
            ),
        ),
    )

    payslip_service = PayslipService(clock=clock, default_payment_config=defaults)

    return Container(
        payslip_service=payslip_service,
        default_currency=defaults.currency,
    )
