from __future__ import annotations

from decimal import Decimal

from src.payroll_system.payroll_system.common.money import percent_of, round2, safe_divide, to_decimal, total


def test_round2_is_half_up():
    assert round2(Decimal("2.345")) == Decimal("2.35")
    assert round2(Decimal("2.344")) == Decimal("2.34")
    assert round2(Decimal("-2.345")) == Decimal("-2.35")


def test_floats_keep_their_printed_value():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(None) == 0


def test_safe_divide_by_zero_is_zero():
    assert safe_divide(Decimal("100"), 0) == 0
    assert safe_divide(Decimal("100"), None) == 0
    assert safe_divide(Decimal("100"), 4) == Decimal("25")


def test_percent_and_total():
    assert percent_of(Decimal("35000"), Decimal("12")) == Decimal("4200")
    assert total([]) == 0
    assert total([Decimal("1.10"), 2, "0.40"]) == Decimal("3.50")
