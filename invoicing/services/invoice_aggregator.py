"""Invoice Aggregator: folds line items into invoice totals.

The fold is re-run over the full item list on every change; nothing is
rounded until InvoiceTotals.rounded() is called for display or persistence.

CGST and SGST are each half of the total tax regardless of the individual
line rates (intrastate presentation only).
"""
import logging
from decimal import Decimal
from typing import Iterable

from invoicing.core.money import ZERO, HUNDRED, to_decimal
from invoicing.schemas.billing import LineItem, LineBreakdown, InvoiceTotals
from invoicing.services.line_pricing import taxable_value, taxable_value_from_total


logger = logging.getLogger(__name__)

TWO = Decimal("2")


def line_breakdown(item: LineItem) -> LineBreakdown:
    """
    Contribution of a single line.

    A user-entered total wins over the forward computation: its taxable base
    is backed out of the total at the line's tax rate. The discount amount is
    still reported from unit price, quantity and discount in that case.
    """
    unit_price = to_decimal(item.unit_price)
    quantity = to_decimal(item.quantity)
    rate = to_decimal(item.tax_percentage)

    item_subtotal = unit_price * quantity
    discount_amount = item_subtotal * to_decimal(item.discount_percent) / HUNDRED

    if item.total is not None:
        total = to_decimal(item.total)
        base = taxable_value_from_total(total, rate)
        tax = taxable_value(total, base)
        return LineBreakdown(
            item_subtotal=item_subtotal,
            discount_amount=discount_amount,
            taxable_value=base,
            tax_amount=tax,
            line_total=total,
        )

    discounted = item_subtotal - discount_amount
    tax = discounted * rate / HUNDRED
    return LineBreakdown(
        item_subtotal=item_subtotal,
        discount_amount=discount_amount,
        taxable_value=discounted,
        tax_amount=tax,
        line_total=discounted + tax,
    )


def aggregate_totals(items: Iterable[LineItem]) -> InvoiceTotals:
    """Sum all line contributions. An empty list gives all-zero totals."""
    taxable = ZERO
    tax_amount = ZERO
    total_discount = ZERO
    count = 0

    for item in items:
        breakdown = line_breakdown(item)
        taxable += breakdown.taxable_value
        tax_amount += breakdown.tax_amount
        total_discount += breakdown.discount_amount
        count += 1

    half_tax = tax_amount / TWO
    totals = InvoiceTotals(
        taxable_value=taxable,
        tax_amount=tax_amount,
        total_discount=total_discount,
        total_amount=taxable + tax_amount,
        cgst_amount=half_tax,
        sgst_amount=half_tax,
    )
    logger.debug(
        f"Aggregated {count} line(s): taxable={taxable} tax={tax_amount} total={totals.total_amount}"
    )
    return totals
