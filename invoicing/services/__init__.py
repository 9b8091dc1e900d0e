# Services module
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
from invoicing.services.invoice_aggregator import aggregate_totals, line_breakdown
from invoicing.services.amount_in_words import (
    AmountInWordsError,
    to_words,
    amount_in_words_line,
)
from invoicing.services.line_items import LineItemCollection, LineItemNotFoundError
from invoicing.services.invoice_builder import (
    InvoiceValidationError,
    build_invoice_payload,
    build_item_payload,
)
from invoicing.services.client_balance import summarize_client_balance

__all__ = [
    # Line pricing
    "price_with_tax",
    "unit_price_from_taxed",
    "line_total",
    "taxable_value",
    "taxable_value_from_total",
    "clamp_discount",
    "clamp_non_negative",
    "price_summary",
    # Totals
    "aggregate_totals",
    "line_breakdown",
    # Amount in words
    "AmountInWordsError",
    "to_words",
    "amount_in_words_line",
    # Editing
    "LineItemCollection",
    "LineItemNotFoundError",
    # Payloads
    "InvoiceValidationError",
    "build_invoice_payload",
    "build_item_payload",
    "summarize_client_balance",
]
