from decimal import Decimal

from invoicing.services.invoice_aggregator import aggregate_totals, line_breakdown


def test_line_breakdown_scenario(make_line):
    breakdown = line_breakdown(make_line())
    assert breakdown.item_subtotal == Decimal("200")
    assert breakdown.discount_amount == Decimal("20")
    assert breakdown.taxable_value == Decimal("180")
    assert breakdown.tax_amount == Decimal("32.4")
    assert breakdown.line_total == Decimal("212.4")


def test_two_identical_lines(make_line):
    totals = aggregate_totals([make_line(product_id="a"), make_line(product_id="b")])
    assert totals.taxable_value == Decimal("360")
    assert totals.tax_amount == Decimal("64.8")
    assert totals.total_discount == Decimal("40")
    assert totals.total_amount == Decimal("424.8")
    assert totals.cgst_amount == Decimal("32.4")
    assert totals.sgst_amount == Decimal("32.4")


def test_empty_invoice_is_all_zero():
    totals = aggregate_totals([])
    for field in ("taxable_value", "tax_amount", "total_discount",
                  "total_amount", "cgst_amount", "sgst_amount"):
        assert getattr(totals, field) == 0


def test_total_override_backs_out_taxable_value(make_line):
    line = make_line(unit_price="100", quantity="1", discount_percent="10", total="118")
    breakdown = line_breakdown(line)
    assert breakdown.taxable_value == Decimal("100")
    assert breakdown.tax_amount == Decimal("18")
    assert breakdown.line_total == Decimal("118")
    # discount is still reported from price, quantity and percentage
    assert breakdown.discount_amount == Decimal("10")


def test_override_takes_precedence_over_forward_computation(make_line):
    totals = aggregate_totals([make_line(total="500")])
    assert totals.total_amount == Decimal("500")


def test_total_is_taxable_plus_tax_with_overrides(make_line):
    items = [
        make_line(product_id="a"),
        make_line(product_id="b", tax_percentage="5", total="99.99"),
        make_line(product_id="c", tax_percentage="28", unit_price="33.33", quantity="3"),
        make_line(product_id="d", tax_percentage="12", total="100"),
    ]
    totals = aggregate_totals(items)
    assert totals.total_amount == totals.taxable_value + totals.tax_amount


def test_cgst_sgst_is_half_of_tax_even_for_mixed_rates(make_line):
    items = [
        make_line(product_id="a", tax_percentage="5", discount_percent="0", quantity="1"),
        make_line(product_id="b", tax_percentage="28", discount_percent="0", quantity="1"),
    ]
    totals = aggregate_totals(items)
    assert totals.tax_amount == Decimal("33")
    assert totals.cgst_amount == Decimal("16.5")
    assert totals.sgst_amount == totals.cgst_amount


def test_rounded_totals_keep_identity(make_line):
    totals = aggregate_totals([make_line(total="100")]).rounded()
    assert totals.taxable_value == Decimal("84.75")
    assert totals.tax_amount == Decimal("15.25")
    assert totals.total_amount == Decimal("100.00")
    assert totals.total_amount == totals.taxable_value + totals.tax_amount


def test_totals_serialize_money_as_strings(make_line):
    data = aggregate_totals([make_line()]).rounded().model_dump(mode="json")
    assert data["total_amount"] == "212.40"
    assert data["cgst_amount"] == "16.20"
