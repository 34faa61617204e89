"""Generate a payslip from a JSON file and print it.

Usage: python scripts/generate_payslip.py payload.json

The payload has the same shape as the body of POST /api/payslip/generate.
"""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.payroll_system.payroll_system.common.validators import optional_date, require_int
from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.core.exceptions import ValidationError
from src.payroll_system.payroll_system.payroll.serializers import (
    parse_payment_config,
    parse_salary_record,
    parse_time_entry,
    to_json,
)


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__)
        return 2

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(payroll_config=getattr(settings, "PAYROLL_CONFIG", {}))
    service = container.payslip_service

    payload = json.loads(Path(argv[1]).read_text(encoding="utf-8"))
    try:
        payslip = service.generate(
            user_id=str(payload.get("user_id") or "unknown"),
            entries=[parse_time_entry(e) for e in payload.get("entries") or []],
            salary_records=[parse_salary_record(r) for r in payload.get("salary_records") or []],
            payment_config=parse_payment_config(payload.get("payment_config"), service.default_payment_config),
            start=optional_date(payload.get("start_date"), "start_date"),
            end=optional_date(payload.get("end_date"), "end_date"),
            year=None if payload.get("year") is None else require_int(payload["year"], "year"),
            month=None if payload.get("month") is None else require_int(payload["month"], "month"),
        )
    except ValidationError as e:
        print(f"Invalid payload: {e}")
        return 1

    print(json.dumps(to_json(payslip), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
