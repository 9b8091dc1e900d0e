"""Pydantic schemas for invoice line items, totals and payloads."""
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, List

from pydantic import Field, ConfigDict, field_validator

from invoicing.config import settings
from invoicing.core.enum_utils import (
    create_uppercase_validator, VALID_INVOICE_STATUSES, VALID_PRIMARY_UNITS
)
from invoicing.core.money import ZERO, quantize_money
from invoicing.core.units import PrimaryUnit
from invoicing.schemas.base import BaseInputSchema, BaseResultSchema, MoneyStr


class InvoiceStatus(str, Enum):
    """Invoice status enumeration."""
    DRAFT = "DRAFT"
    SENT = "SENT"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


# Statuses that still count as open receivables for a client
ACTIVE_INVOICE_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


def validate_tax_percentage(value: Decimal) -> Decimal:
    """Reject tax rates outside the configured GST slabs."""
    if value not in settings.ALLOWED_TAX_RATES:
        allowed = ", ".join(format(rate, "f") for rate in settings.ALLOWED_TAX_RATES)
        raise ValueError(f"tax_percentage must be one of {allowed}, got {value}")
    return value


# ==================== Catalog ====================

class ProductRef(BaseInputSchema):
    """Catalog product as supplied by the persistence layer. Never mutated."""
    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    selling_price: Decimal = Field(..., ge=0, alias="sellingPrice")
    tax_percentage: Decimal = Field(..., alias="taxPercentage")
    primary_units: PrimaryUnit = Field(PrimaryUnit.PIECES, alias="primaryUnits")
    hsn_sac_code: Optional[str] = Field(None, max_length=20, alias="hsnSacCode")

    _normalize_units = create_uppercase_validator('primary_units', VALID_PRIMARY_UNITS)

    @field_validator('tax_percentage')
    @classmethod
    def check_tax_slab(cls, v: Decimal) -> Decimal:
        return validate_tax_percentage(v)


class PriceSummary(BaseResultSchema):
    """Base / tax / final price of one product at quantity 1."""
    base_price: MoneyStr
    tax_amount: MoneyStr
    final_price: MoneyStr
    is_price_tax_inclusive: bool = False


# ==================== Line Items ====================

class LineItem(BaseResultSchema):
    """
    One invoice line as held by the caller while the invoice is edited.

    quantity is deliberately unconstrained: a zero is legal while the user is
    still typing and is dropped when the edit is committed.
    """
    product_id: str
    name: str = ""
    hsn_sac_code: Optional[str] = None
    quantity: Decimal = Decimal("1")
    unit_price: MoneyStr = Field(ZERO, ge=0)
    discount_percent: Decimal = Field(ZERO, ge=0, le=100)
    tax_percentage: Decimal = ZERO
    price_with_tax: MoneyStr = Field(ZERO, ge=0)
    total: Optional[MoneyStr] = Field(None, ge=0, description="User override of the taxed line total")

    @property
    def has_total_override(self) -> bool:
        return self.total is not None


class LineBreakdown(BaseResultSchema):
    """Contribution of one line item to the invoice totals (unrounded)."""
    item_subtotal: MoneyStr
    discount_amount: MoneyStr
    taxable_value: MoneyStr
    tax_amount: MoneyStr
    line_total: MoneyStr


# ==================== Totals ====================

class InvoiceTotals(BaseResultSchema):
    """Running totals of an invoice. Recomputed from the full item list on every change."""
    taxable_value: MoneyStr = ZERO
    tax_amount: MoneyStr = ZERO
    total_discount: MoneyStr = ZERO
    total_amount: MoneyStr = ZERO
    cgst_amount: MoneyStr = ZERO
    sgst_amount: MoneyStr = ZERO

    def rounded(self) -> "InvoiceTotals":
        """
        Display/persistence form: every amount rounded to money precision.

        total_amount is re-derived from the rounded parts so that
        total_amount == taxable_value + tax_amount still holds exactly.
        """
        taxable_value = quantize_money(self.taxable_value)
        tax_amount = quantize_money(self.tax_amount)
        return InvoiceTotals(
            taxable_value=taxable_value,
            tax_amount=tax_amount,
            total_discount=quantize_money(self.total_discount),
            total_amount=taxable_value + tax_amount,
            cgst_amount=quantize_money(self.cgst_amount),
            sgst_amount=quantize_money(self.sgst_amount),
        )


# ==================== Payloads ====================

class InvoiceItemPayload(BaseResultSchema):
    """Per-line values handed to the persistence layer (InvoiceItem row)."""
    product_id: str
    item_name: str
    hsn_sac_code: str = ""
    quantity: Decimal
    rate: MoneyStr
    tax_percentage: Decimal
    discount_percent: Decimal = ZERO
    taxable_value: MoneyStr
    tax_amount: MoneyStr
    total_amount: MoneyStr


class InvoicePayload(BaseResultSchema):
    """Finished invoice amounts handed to the persistence layer."""
    items: List[InvoiceItemPayload] = Field(..., min_length=1)
    subtotal: MoneyStr
    tax_amount: MoneyStr
    total_discount: MoneyStr
    total_amount: MoneyStr
    cgst_amount: MoneyStr
    sgst_amount: MoneyStr
    paid_amount: MoneyStr = ZERO
    balance_amount: MoneyStr
    status: InvoiceStatus = InvoiceStatus.DRAFT
    amount_in_words: str = ""


# ==================== Client Balance ====================

class InvoiceBalanceRecord(BaseInputSchema):
    """Persisted invoice amounts used for a client's balance."""
    invoice_id: Optional[str] = Field(None, alias="id")
    invoice_date: Optional[date] = Field(None, alias="invoiceDate")
    total_amount: Optional[Decimal] = Field(None, alias="totalAmount")
    paid_amount: Optional[Decimal] = Field(None, alias="paidAmount")
    balance_amount: Optional[Decimal] = Field(None, alias="balanceAmount")
    status: InvoiceStatus = InvoiceStatus.DRAFT

    _normalize_status = create_uppercase_validator('status', VALID_INVOICE_STATUSES)


class ClientBalanceSummary(BaseResultSchema):
    """Outstanding position of one client across all of their invoices."""
    client_id: str
    balance_amount: MoneyStr = ZERO
    total_invoiced: MoneyStr = ZERO
    total_paid: MoneyStr = ZERO
    active_invoices: int = 0
    overdue_invoices: int = 0
    last_invoice_date: Optional[date] = None
