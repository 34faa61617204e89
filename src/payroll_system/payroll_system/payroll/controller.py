from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.validators import optional_date, require_int, require_mapping
from ..core.constants import DEFAULT_LAST_CYCLES, MAX_LAST_CYCLES
from ..core.exceptions import ValidationError
from ..container import Container
from .serializers import (
    parse_cycle_start_day,
    parse_pay_slip_input,
    parse_payment_config,
    parse_salary_record,
    parse_time_entry,
    to_json,
)

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.payslip_service

    def _body() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError("Request body must be a JSON object")
        return dict(require_mapping(data, "body"))

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/payslip/calculate", methods=["POST"], endpoint="api_payslip_calculate")
    def api_payslip_calculate():
        """Configuration-driven payslip: every figure comes in the request body."""
        try:
            data = parse_pay_slip_input(_body(), default_currency=container.default_currency)
            result = service.calculate(data)
            return jsonify({"success": True, "payslip": to_json(result)}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("payslip calculation failed")
            return jsonify({"success": False, "message": "Payslip calculation failed"}), 500

    @app.route("/api/payslip/generate", methods=["POST"], endpoint="api_payslip_generate")
    def api_payslip_generate():
        """Attendance-driven payslip built from time entries and salary records."""
        try:
            data = _body()
            user_id = str(data.get("user_id") or "").strip()
            if not user_id:
                raise ValidationError("user_id is required")

            payment_config = parse_payment_config(data.get("payment_config"), service.default_payment_config)
            year = data.get("year")
            month = data.get("month")
            payslip = service.generate(
                user_id=user_id,
                entries=[parse_time_entry(e) for e in data.get("entries") or []],
                salary_records=[parse_salary_record(r) for r in data.get("salary_records") or []],
                payment_config=payment_config,
                start=optional_date(data.get("start_date"), "start_date"),
                end=optional_date(data.get("end_date"), "end_date"),
                year=require_int(year, "year") if year is not None else None,
                month=require_int(month, "month") if month is not None else None,
            )
            return jsonify({"success": True, "payslip": to_json(payslip)}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("payslip generation failed")
            return jsonify({"success": False, "message": "Payslip generation failed"}), 500

    @app.route("/api/payslip/cycles", methods=["GET"], endpoint="api_payslip_cycles")
    def api_payslip_cycles():
        try:
            n = require_int(request.args.get("n", DEFAULT_LAST_CYCLES), "n")
            if not 1 <= n <= MAX_LAST_CYCLES:
                raise ValidationError(f"n must be between 1 and {MAX_LAST_CYCLES}")
            start_day = parse_cycle_start_day(
                request.args.get("cycle_start_day", service.default_payment_config.cycle_start_day)
            )
            cycles = service.last_cycles(n, cycle_start_day=start_day)
            return jsonify({"success": True, "cycles": to_json(cycles)}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("listing salary cycles failed")
            return jsonify({"success": False, "message": "Listing salary cycles failed"}), 500
