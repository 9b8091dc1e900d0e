from decimal import Decimal

import pytest

from invoicing.schemas.billing import ProductRef, LineItem


@pytest.fixture
def widget() -> ProductRef:
    """Catalog product at ₹100 with 18% GST."""
    return ProductRef(
        id="prod_widget",
        name="Widget",
        selling_price=Decimal("100"),
        tax_percentage=Decimal("18"),
        primary_units="pieces",
        hsn_sac_code="8421",
    )


@pytest.fixture
def service_fee() -> ProductRef:
    """Zero-rated service."""
    return ProductRef(
        id="prod_service",
        name="Installation",
        selling_price=Decimal("250"),
        tax_percentage=Decimal("0"),
        primary_units="units",
    )


@pytest.fixture
def make_line():
    """Build a LineItem with the usual scenario defaults."""
    def _make(product_id="prod_widget", unit_price="100", quantity="2",
              discount_percent="10", tax_percentage="18", total=None) -> LineItem:
        return LineItem(
            product_id=product_id,
            name=product_id,
            unit_price=Decimal(unit_price),
            quantity=Decimal(quantity),
            discount_percent=Decimal(discount_percent),
            tax_percentage=Decimal(tax_percentage),
            total=None if total is None else Decimal(total),
        )
    return _make
