from decimal import Decimal

import pytest

from invoicing.services.line_pricing import (
    price_with_tax,
    unit_price_from_taxed,
    line_total,
    taxable_value,
    taxable_value_from_total,
    clamp_discount,
    clamp_non_negative,
    price_summary,
)


GST_SLABS = ["0", "5", "12", "18", "28", "40"]


def test_price_with_tax_adds_rate():
    assert price_with_tax(Decimal("100"), Decimal("18")) == Decimal("118")
    assert price_with_tax(Decimal("100"), Decimal("0")) == Decimal("100")


def test_price_with_tax_is_not_rounded():
    assert price_with_tax(Decimal("10.01"), Decimal("5")) == Decimal("10.5105")


def test_unit_price_from_taxed_rounds_to_paisa():
    assert unit_price_from_taxed(Decimal("118"), Decimal("18")) == Decimal("100.00")
    assert unit_price_from_taxed(Decimal("100"), Decimal("18")) == Decimal("84.75")


def test_unit_price_from_taxed_zero_rate_returns_input():
    assert unit_price_from_taxed(Decimal("99.999"), Decimal("0")) == Decimal("99.999")


@pytest.mark.parametrize("rate", GST_SLABS)
@pytest.mark.parametrize("unit", ["0", "0.01", "1", "99.99", "1234.56", "250000"])
def test_unit_price_round_trip_within_a_paisa(unit, rate):
    unit = Decimal(unit)
    back = unit_price_from_taxed(price_with_tax(unit, Decimal(rate)), Decimal(rate))
    assert abs(back - unit) <= Decimal("0.01")


def test_line_total_scenario():
    # 100 x 2 = 200, 10% off = 180, 18% tax = 32.4
    assert line_total(Decimal("100"), Decimal("2"), Decimal("10"), Decimal("18")) == Decimal("212.4")


def test_line_total_without_discount_or_tax():
    assert line_total(Decimal("12.50"), Decimal("4"), Decimal("0"), Decimal("0")) == Decimal("50")


def test_line_total_full_discount_is_zero():
    assert line_total(Decimal("100"), Decimal("3"), Decimal("100"), Decimal("28")) == 0


def test_taxable_value_subtracts_tax():
    assert taxable_value(Decimal("212.4"), Decimal("32.4")) == Decimal("180")


def test_taxable_value_from_total_reverses_rate():
    assert taxable_value_from_total(Decimal("118"), Decimal("18")) == Decimal("100")
    assert taxable_value_from_total(Decimal("50"), Decimal("0")) == Decimal("50")


def test_backward_formulas_agree_when_tax_is_derived_from_total():
    total = Decimal("100")
    base = taxable_value_from_total(total, Decimal("18"))
    tax = total - base
    assert taxable_value(total, tax) == base


@pytest.mark.parametrize("raw, expected", [
    (Decimal("150"), Decimal("100")),
    (Decimal("-5"), Decimal("0")),
    (Decimal("12.5"), Decimal("12.5")),
    ("not a number", Decimal("0")),
])
def test_clamp_discount(raw, expected):
    assert clamp_discount(raw) == expected


def test_clamp_non_negative():
    assert clamp_non_negative(Decimal("-0.01")) == 0
    assert clamp_non_negative("42.10") == Decimal("42.10")
    assert clamp_non_negative(float("nan")) == 0


def test_price_summary_tax_exclusive():
    summary = price_summary(Decimal("100"), Decimal("18"))
    assert summary.base_price == Decimal("100.00")
    assert summary.tax_amount == Decimal("18.00")
    assert summary.final_price == Decimal("118.00")
    assert summary.is_price_tax_inclusive is False


def test_price_summary_tax_inclusive():
    summary = price_summary(Decimal("118"), Decimal("18"), is_price_tax_inclusive=True)
    assert summary.base_price == Decimal("100.00")
    assert summary.tax_amount == Decimal("18.00")
    assert summary.final_price == Decimal("118.00")


def test_price_summary_inclusive_parts_add_up():
    summary = price_summary(Decimal("100"), Decimal("18"), is_price_tax_inclusive=True)
    assert summary.base_price == Decimal("84.75")
    assert summary.tax_amount == Decimal("15.25")
    assert summary.base_price + summary.tax_amount == summary.final_price
