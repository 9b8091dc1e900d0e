from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from invoicing.schemas.billing import InvoiceBalanceRecord, InvoiceStatus
from invoicing.services.client_balance import summarize_client_balance


def test_no_invoices():
    summary = summarize_client_balance("client_1", [])
    assert summary.balance_amount == 0
    assert summary.total_invoiced == 0
    assert summary.total_paid == 0
    assert summary.active_invoices == 0
    assert summary.overdue_invoices == 0
    assert summary.last_invoice_date is None


def test_outstanding_and_credit_are_netted():
    invoices = [
        {"id": "inv_1", "invoiceDate": "2026-01-10", "totalAmount": "500.00",
         "paidAmount": "0", "balanceAmount": "500.00", "status": "sent"},
        {"id": "inv_2", "invoiceDate": "2026-02-01", "totalAmount": "1000.00",
         "paidAmount": "1200.00", "balanceAmount": "0", "status": "paid"},
        {"id": "inv_3", "invoiceDate": "2026-03-05", "totalAmount": "250.00",
         "paidAmount": "100.00", "balanceAmount": "150.00", "status": "overdue"},
    ]
    summary = summarize_client_balance("client_1", invoices)
    assert summary.client_id == "client_1"
    assert summary.balance_amount == Decimal("450.00")
    assert summary.total_invoiced == Decimal("1750.00")
    assert summary.total_paid == Decimal("1300.00")
    assert summary.active_invoices == 2
    assert summary.overdue_invoices == 1
    assert summary.last_invoice_date == date(2026, 3, 5)


def test_draft_counts_as_active():
    records = [InvoiceBalanceRecord(invoice_id="inv_9", total_amount=Decimal("10"),
                                    balance_amount=Decimal("10"), status=InvoiceStatus.DRAFT)]
    summary = summarize_client_balance("client_2", records)
    assert summary.active_invoices == 1
    assert summary.balance_amount == Decimal("10.00")


def test_missing_amounts_count_as_zero():
    summary = summarize_client_balance("client_3", [{"id": "inv_1", "status": "CANCELLED"}])
    assert summary.total_invoiced == 0
    assert summary.total_paid == 0
    assert summary.balance_amount == 0
    assert summary.active_invoices == 0


def test_accepts_row_objects():
    row = SimpleNamespace(
        invoice_id="inv_1",
        invoice_date=date(2026, 4, 1),
        total_amount=Decimal("300"),
        paid_amount=Decimal("50"),
        balance_amount=Decimal("250"),
        status="SENT",
    )
    summary = summarize_client_balance("client_4", [row])
    assert summary.balance_amount == Decimal("250.00")
    assert summary.last_invoice_date == date(2026, 4, 1)
