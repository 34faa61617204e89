"""Example: call the payroll engine directly, without Flask.

Controllers are a thin layer; the calculation lives in the payroll package.
"""

import importlib
from dataclasses import replace
from datetime import date
from decimal import Decimal

from config import get_settings_module

from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.core.enums import SalaryBasis, SalaryPayType
from src.payroll_system.payroll_system.cycles.resolver import create_monthly_cycle
from src.payroll_system.payroll_system.payroll.defaults import get_default_allowance_config
from src.payroll_system.payroll_system.payroll.model import PaySlipInput


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(payroll_config=settings.PAYROLL_CONFIG)

    data = PaySlipInput(
        base_salary=Decimal("30000"),
        salary_pay_type=SalaryPayType.FIXED_MONTHLY,
        salary_basis=SalaryBasis.WORKING_DAYS_ONLY,
        cycle=create_monthly_cycle(2024, 5, 1),
        allowances=replace(get_default_allowance_config(), hra=Decimal("5000")),
        joining_date=date(2024, 5, 16),
    )
    result = container.payslip_service.calculate(data)
    print(result.gross_salary, result.net_salary, result.pro_rata_factor)

    for cycle in container.payslip_service.last_cycles(3):
        print(cycle.start_date, cycle.end_date)


if __name__ == "__main__":
    main()
