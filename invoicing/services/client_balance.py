"""Client balance summary over a client's persisted invoices."""
import logging
from typing import Any, Iterable, Mapping, Union

from invoicing.core.enum_utils import status_in
from invoicing.core.money import ZERO, to_decimal, quantize_money
from invoicing.schemas.billing import (
    InvoiceBalanceRecord, ClientBalanceSummary, InvoiceStatus, ACTIVE_INVOICE_STATUSES
)


logger = logging.getLogger(__name__)


def _as_record(invoice: Union[InvoiceBalanceRecord, Mapping[str, Any], Any]) -> InvoiceBalanceRecord:
    if isinstance(invoice, InvoiceBalanceRecord):
        return invoice
    if isinstance(invoice, Mapping):
        return InvoiceBalanceRecord.model_validate(invoice)
    return InvoiceBalanceRecord.model_validate(invoice, from_attributes=True)


def summarize_client_balance(
    client_id: str,
    invoices: Iterable[Union[InvoiceBalanceRecord, Mapping[str, Any], Any]],
) -> ClientBalanceSummary:
    """
    Fold a client's invoices into their outstanding position.

    Balance:
    - an invoice with a positive balance adds that balance
    - otherwise, an overpaid invoice (paid > total) counts as credit
      and reduces the balance by the excess

    Active invoices are DRAFT, SENT or OVERDUE.
    """
    balance = ZERO
    total_invoiced = ZERO
    total_paid = ZERO
    active = 0
    overdue = 0
    last_invoice_date = None

    for raw in invoices:
        record = _as_record(raw)
        total = to_decimal(record.total_amount, default=None)
        paid = to_decimal(record.paid_amount, default=None)
        outstanding = to_decimal(record.balance_amount, default=None)

        if total is None:
            logger.warning(f"Invoice {record.invoice_id} of client {client_id} has no total amount")

        if outstanding is not None and outstanding > 0:
            balance += outstanding
        elif paid is not None and total is not None and paid > total:
            balance -= paid - total

        total_invoiced += total or ZERO
        total_paid += paid or ZERO

        if status_in(record.status, *ACTIVE_INVOICE_STATUSES):
            active += 1
        if status_in(record.status, InvoiceStatus.OVERDUE):
            overdue += 1

        if record.invoice_date and (last_invoice_date is None or record.invoice_date > last_invoice_date):
            last_invoice_date = record.invoice_date

    return ClientBalanceSummary(
        client_id=client_id,
        balance_amount=quantize_money(balance),
        total_invoiced=quantize_money(total_invoiced),
        total_paid=quantize_money(total_paid),
        active_invoices=active,
        overdue_invoices=overdue,
        last_invoice_date=last_invoice_date,
    )
