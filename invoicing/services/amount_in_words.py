"""Amount-in-Words Formatter (Indian numbering system).

Bands: ones/teens, tens, Hundred, Thousand, Lakh (10^5), Crore (10^7).
No "and" is placed after Hundred; a zero band contributes nothing.

    >>> to_words(1234567)
    'Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven'
    >>> to_words(Decimal("105.50"))
    'One Hundred Five and Fifty Paisa'
"""
import logging
from decimal import ROUND_DOWN
from typing import Any, Optional, Tuple

from invoicing.config import settings
from invoicing.core.money import to_decimal, quantize_money


logger = logging.getLogger(__name__)


ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

THOUSAND = 1000
LAKH = 100000
CRORE = 10000000


class AmountInWordsError(ValueError):
    """Raised when an amount cannot be written out (negative or not a number)."""
    pass


def number_to_words(n: int) -> str:
    """Words for a non-negative integer; zero gives an empty string."""
    if n < 20:
        return ONES[n]
    if n < 100:
        return TENS[n // 10] + (" " + ONES[n % 10] if n % 10 else "")
    if n < THOUSAND:
        return ONES[n // 100] + " Hundred" + (" " + number_to_words(n % 100) if n % 100 else "")
    if n < LAKH:
        return number_to_words(n // THOUSAND) + " Thousand" + (" " + number_to_words(n % THOUSAND) if n % THOUSAND else "")
    if n < CRORE:
        return number_to_words(n // LAKH) + " Lakh" + (" " + number_to_words(n % LAKH) if n % LAKH else "")
    return number_to_words(n // CRORE) + " Crore" + (" " + number_to_words(n % CRORE) if n % CRORE else "")


def split_rupees_paisa(amount: Any) -> Tuple[int, int]:
    """Round to money precision and split into whole rupees and paisa."""
    value = to_decimal(amount)
    if value.is_nan() or value.is_infinite():
        raise AmountInWordsError(f"Cannot convert {amount!r} to words")
    if value < 0:
        raise AmountInWordsError(f"Amount must not be negative, got {value}")

    value = quantize_money(value, places=2)
    rupees = int(value)
    paisa = int((value - rupees) * 100)
    return rupees, paisa


def to_words(amount: Any, include_paisa: Optional[bool] = None) -> str:
    """
    Write an amount out in words.

    Zero rupees reads "Zero". Paisa are appended as "and <N> Paisa" unless
    disabled (argument or AMOUNT_WORDS_INCLUDE_PAISA), in which case the
    fraction is truncated.
    """
    if include_paisa is None:
        include_paisa = settings.AMOUNT_WORDS_INCLUDE_PAISA

    if include_paisa:
        rupees, paisa = split_rupees_paisa(amount)
    else:
        rupees, _ = split_rupees_paisa(to_decimal(amount).to_integral_value(rounding=ROUND_DOWN))
        paisa = 0

    words = number_to_words(rupees) or "Zero"
    if paisa:
        words += " and " + number_to_words(paisa) + " Paisa"

    # Collapse any doubled spaces left by empty bands
    return " ".join(words.split())


def amount_in_words_line(amount: Any, currency: Optional[str] = None, include_paisa: Optional[bool] = None) -> str:
    """The printed line, e.g. 'INR Four Hundred Twenty Four and Eighty Paisa Only.'"""
    currency = settings.CURRENCY_CODE if currency is None else currency
    words = to_words(amount, include_paisa=include_paisa)
    logger.debug(f"Amount {amount} written as '{words}'")
    return f"{currency} {words} Only."
