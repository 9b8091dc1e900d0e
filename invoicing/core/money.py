"""Decimal helpers shared by the pricing, totals and words services.

All money is carried as ``Decimal``. Floats coming from callers are converted
through ``str`` so that ``0.1`` stays ``Decimal("0.1")``.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from invoicing.config import settings


ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any, default: Optional[Decimal] = ZERO) -> Optional[Decimal]:
    """
    Convert caller input (Decimal, int, float, numeric string) to Decimal.

    Blank strings and None give ``default``. Unparsable input gives
    ``Decimal("NaN")`` so callers can apply their own invalid-input policy.
    """
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return default
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("NaN")


def money_quantum(places: Optional[int] = None) -> Decimal:
    places = settings.MONEY_DECIMAL_PLACES if places is None else places
    return Decimal(1).scaleb(-places)


def quantize_money(value: Any, places: Optional[int] = None) -> Decimal:
    """Round a money value half-up to the configured number of places."""
    return to_decimal(value).quantize(money_quantum(places), rounding=ROUND_HALF_UP)


def format_currency(value: Any, symbol: Optional[str] = None) -> str:
    """Format an amount for display, e.g. ``₹1,234.50``."""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    amount = quantize_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{settings.MONEY_DECIMAL_PLACES}f}"
