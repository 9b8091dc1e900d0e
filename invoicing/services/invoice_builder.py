"""Invoice payload builder.

Turns the edited line items into the amounts the persistence layer stores
on submission: invoice subtotal / tax / total / balance and the per-line
tax and total of each InvoiceItem row. All amounts are rounded half-up to
money precision here and nowhere earlier.
"""
import logging
from typing import Any, Iterable

from invoicing.core.enum_utils import get_enum_value
from invoicing.core.money import to_decimal, quantize_money
from invoicing.schemas.billing import (
    LineItem, InvoiceItemPayload, InvoicePayload, InvoiceStatus
)
from invoicing.services.amount_in_words import amount_in_words_line
from invoicing.services.invoice_aggregator import aggregate_totals, line_breakdown


logger = logging.getLogger(__name__)


class InvoiceValidationError(Exception):
    """Exception raised when an invoice cannot be built from its line items."""
    pass


def build_item_payload(item: LineItem) -> InvoiceItemPayload:
    """Persisted form of one line. Discount and total override are honoured."""
    breakdown = line_breakdown(item)
    line_taxable = quantize_money(breakdown.taxable_value)
    line_tax = quantize_money(breakdown.tax_amount)
    return InvoiceItemPayload(
        product_id=item.product_id,
        item_name=item.name,
        hsn_sac_code=item.hsn_sac_code or "",
        quantity=item.quantity,
        rate=quantize_money(item.unit_price),
        tax_percentage=item.tax_percentage,
        discount_percent=item.discount_percent,
        taxable_value=line_taxable,
        tax_amount=line_tax,
        total_amount=line_taxable + line_tax,
    )


def build_invoice_payload(
    items: Iterable[LineItem],
    paid_amount: Any = 0,
    status: InvoiceStatus = InvoiceStatus.DRAFT,
) -> InvoicePayload:
    """
    Build the amounts of a new invoice.

    Args:
        items: Line items as edited on the invoice form
        paid_amount: Payment received up front (reduces the balance)
        status: Initial status, DRAFT unless the caller says otherwise

    Raises:
        InvoiceValidationError: no line items, invalid quantity or negative payment
    """
    items = list(items)
    if not items:
        raise InvoiceValidationError("Please add at least one product to the invoice")

    for item in items:
        quantity = to_decimal(item.quantity)
        if quantity.is_nan() or quantity <= 0:
            raise InvoiceValidationError(
                f"Quantity must be greater than 0 for product {item.product_id}"
            )

    paid = to_decimal(paid_amount)
    if paid.is_nan() or paid < 0:
        raise InvoiceValidationError(f"Paid amount must not be negative, got {paid_amount!r}")
    paid = quantize_money(paid)

    totals = aggregate_totals(items).rounded()
    payload = InvoicePayload(
        items=[build_item_payload(item) for item in items],
        subtotal=totals.taxable_value,
        tax_amount=totals.tax_amount,
        total_discount=totals.total_discount,
        total_amount=totals.total_amount,
        cgst_amount=totals.cgst_amount,
        sgst_amount=totals.sgst_amount,
        paid_amount=paid,
        balance_amount=totals.total_amount - paid,
        status=status,
        amount_in_words=amount_in_words_line(totals.total_amount),
    )

    logger.info(
        f"Built {get_enum_value(payload.status)} invoice with {len(payload.items)} item(s): "
        f"subtotal={payload.subtotal} tax={payload.tax_amount} "
        f"total={payload.total_amount} balance={payload.balance_amount}"
    )
    return payload
