"""Line-item collection held by the invoice editor.

Applies the editing policy of the invoice form on top of the pure pricing
functions:

- adding a product that is already on the invoice bumps its quantity
- prices and totals are clamped to >= 0, discounts to [0, 100]
- editing unit price re-derives price with tax and vice versa
- a quantity that is <= 0 or not a number when the edit is committed removes
  the line silently
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from invoicing.core.money import ZERO, to_decimal, quantize_money
from invoicing.schemas.billing import ProductRef, LineItem, InvoiceTotals
from invoicing.services.invoice_aggregator import aggregate_totals
from invoicing.services.line_pricing import (
    price_with_tax, unit_price_from_taxed, clamp_discount, clamp_non_negative
)


logger = logging.getLogger(__name__)


class LineItemNotFoundError(KeyError):
    """Raised when an edit targets a product that is not on the invoice."""
    pass


class LineItemCollection:
    """Ordered line items of one invoice, keyed by product id."""

    def __init__(self, items: Optional[List[LineItem]] = None):
        self._items: Dict[str, LineItem] = {}
        for item in items or []:
            self._items[item.product_id] = item

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._items

    def __iter__(self):
        return iter(list(self._items.values()))

    @property
    def items(self) -> List[LineItem]:
        return list(self._items.values())

    def get(self, product_id: str) -> LineItem:
        try:
            return self._items[product_id]
        except KeyError:
            raise LineItemNotFoundError(product_id) from None

    def _replace(self, product_id: str, **changes: Any) -> LineItem:
        item = self.get(product_id).model_copy(update=changes)
        self._items[product_id] = item
        return item

    # ==================== Add / remove ====================

    def add_product(self, product: ProductRef) -> LineItem:
        """Put a catalog product on the invoice, or add one more of it."""
        if product.id in self._items:
            current = self._items[product.id]
            logger.debug(f"Product {product.id} already on invoice, quantity {current.quantity} -> {current.quantity + 1}")
            return self._replace(product.id, quantity=current.quantity + 1)

        item = LineItem(
            product_id=product.id,
            name=product.name,
            hsn_sac_code=product.hsn_sac_code,
            quantity=Decimal("1"),
            unit_price=product.selling_price,
            discount_percent=ZERO,
            tax_percentage=product.tax_percentage,
            price_with_tax=quantize_money(price_with_tax(product.selling_price, product.tax_percentage)),
        )
        self._items[product.id] = item
        logger.debug(f"Added product {product.id} at {product.selling_price} ({product.tax_percentage}% tax)")
        return item

    def remove_product(self, product_id: str) -> None:
        self.get(product_id)
        del self._items[product_id]

    # ==================== Field edits ====================

    def update_quantity(self, product_id: str, quantity: Any) -> LineItem:
        """
        Quantity while the user is typing; never removes the line.

        Text that is not a number yet is held as zero so running totals stay
        computable; commit_quantity() then drops the line.
        """
        value = to_decimal(quantity)
        if value.is_nan():
            value = ZERO
        return self._replace(product_id, quantity=value)

    def commit_quantity(self, product_id: str, quantity: Any = None) -> bool:
        """
        Finish a quantity edit. Returns False if the line was removed.

        With no value the quantity currently held on the line is checked.
        """
        item = self.get(product_id)
        value = item.quantity if quantity is None else to_decimal(quantity)

        if value.is_nan() or value <= 0:
            logger.debug(f"Removing product {product_id}: invalid quantity {quantity!r}")
            del self._items[product_id]
            return False

        self._replace(product_id, quantity=value)
        return True

    def update_discount(self, product_id: str, discount: Any) -> LineItem:
        return self._replace(product_id, discount_percent=clamp_discount(discount))

    def update_unit_price(self, product_id: str, unit_price: Any) -> LineItem:
        """New unit price; price with tax follows, rounded to money precision."""
        unit = clamp_non_negative(unit_price)
        rate = self.get(product_id).tax_percentage
        return self._replace(
            product_id,
            unit_price=unit,
            price_with_tax=quantize_money(price_with_tax(unit, rate)),
        )

    def update_price_with_tax(self, product_id: str, taxed_price: Any) -> LineItem:
        """New tax-inclusive price; unit price is backed out of it."""
        taxed = clamp_non_negative(taxed_price)
        rate = self.get(product_id).tax_percentage
        return self._replace(
            product_id,
            price_with_tax=taxed,
            unit_price=unit_price_from_taxed(taxed, rate),
        )

    def update_total(self, product_id: str, total: Any) -> LineItem:
        """Override the line total; it takes precedence in the invoice totals."""
        return self._replace(product_id, total=clamp_non_negative(total))

    def clear_total(self, product_id: str) -> LineItem:
        return self._replace(product_id, total=None)

    # ==================== Totals ====================

    def totals(self) -> InvoiceTotals:
        return aggregate_totals(self._items.values())

    def total_quantity(self) -> Decimal:
        return sum((item.quantity for item in self._items.values()), ZERO)
