"""Line-Item Pricing Calculator.

Keeps a single invoice line's unit price, price with tax and total
consistent. Every function here is pure: inputs are clamped by the caller
(see ``clamp_discount`` / ``clamp_non_negative``) before they arrive, and
nothing is raised for out-of-range numbers.

Formulas:
- price with tax   = unit + unit * tax% / 100
- unit from taxed  = taxed / (1 + tax% / 100), rounded to 2 places
- line total       = (unit * qty) * (1 - disc% / 100) * (1 + tax% / 100)
- taxable (back)   = total / (1 + tax% / 100)
"""
from decimal import Decimal
from typing import Any

from invoicing.core.money import ZERO, HUNDRED, to_decimal, quantize_money
from invoicing.schemas.billing import PriceSummary


def price_with_tax(unit_price: Any, tax_percentage: Any) -> Decimal:
    """Unit price grossed up by the tax rate (unrounded)."""
    unit = to_decimal(unit_price)
    return unit + unit * to_decimal(tax_percentage) / HUNDRED


def unit_price_from_taxed(price_with_tax: Any, tax_percentage: Any) -> Decimal:
    """Back a unit price out of a tax-inclusive price, rounded to money precision."""
    taxed = to_decimal(price_with_tax)
    rate = to_decimal(tax_percentage)
    if rate > 0:
        return quantize_money(taxed / (1 + rate / HUNDRED))
    return taxed


def line_total(unit_price: Any, quantity: Any, discount_percent: Any, tax_percentage: Any) -> Decimal:
    """Final taxed amount of one line after its percentage discount."""
    subtotal = to_decimal(unit_price) * to_decimal(quantity)
    discounted = subtotal * (1 - to_decimal(discount_percent) / HUNDRED)
    tax = discounted * to_decimal(tax_percentage) / HUNDRED
    return discounted + tax


def taxable_value(total: Any, tax_amount: Any) -> Decimal:
    """Taxable base of a line whose total and tax are both known."""
    return to_decimal(total) - to_decimal(tax_amount)


def taxable_value_from_total(total: Any, tax_percentage: Any) -> Decimal:
    """
    Taxable base of a line whose total was typed in by the user.

    This is the formula used everywhere a total has to be reversed; the tax
    is then ``taxable_value(total, base)`` so both identities agree.
    """
    return to_decimal(total) / (1 + to_decimal(tax_percentage) / HUNDRED)


# ==================== Caller-boundary clamps ====================

def clamp_non_negative(value: Any) -> Decimal:
    """Prices and totals never go below zero."""
    amount = to_decimal(value)
    if amount.is_nan() or amount < 0:
        return ZERO
    return amount


def clamp_discount(value: Any) -> Decimal:
    """Discount percentage is held within [0, 100]."""
    discount = to_decimal(value)
    if discount.is_nan() or discount < 0:
        return ZERO
    if discount > HUNDRED:
        return HUNDRED
    return discount


# ==================== Product price summary ====================

def price_summary(
    selling_price: Any,
    tax_percentage: Any,
    is_price_tax_inclusive: bool = False,
) -> PriceSummary:
    """
    Break a catalog price into base, tax and final amounts.

    Tax-inclusive: the selling price is the final price and the base is
    backed out of it. Tax-exclusive: the selling price is the base.
    """
    price = clamp_non_negative(selling_price)
    rate = clamp_non_negative(tax_percentage)

    if is_price_tax_inclusive:
        final = price
        base = taxable_value_from_total(price, rate)
        tax = taxable_value(final, base)
    else:
        base = price
        tax = price * rate / HUNDRED
        final = base + tax

    return PriceSummary(
        base_price=quantize_money(base),
        tax_amount=quantize_money(tax),
        final_price=quantize_money(final),
        is_price_tax_inclusive=is_price_tax_inclusive,
    )
