"""
Rupee amounts in Indian-English words.

Used for the "Net Salary in Words" line of a payslip. The formatter never
raises: bad input degrades to a sentinel string so one odd amount cannot
abort rendering of a whole document.
"""
import logging
import math
from decimal import Decimal

from app.services.money import round_half_up

logger = logging.getLogger(__name__)

INVALID_AMOUNT = "Invalid Amount"
AMOUNT_TOO_LARGE = "Amount Too Large"
CONVERSION_ERROR = "Conversion Error"

# One trillion; the crore group cannot be expressed beyond this
MAX_AMOUNT = 1_000_000_000_000

ONES = ("", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine")
TEENS = ("Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
         "Sixteen", "Seventeen", "Eighteen", "Nineteen")
TENS = ("", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety")

# Indian numbering system, most significant group first
SCALES = (
    (10_000_000, "Crore"),
    (100_000, "Lakh"),
    (1_000, "Thousand"),
)


def _word(table: tuple, index: int) -> str:
    if 0 <= index < len(table):
        return table[index]
    return ""


def convert_hundreds(n) -> str:
    """Words for a value in [0, 999]; larger values are clamped to 999."""
    if isinstance(n, bool) or not isinstance(n, (int, float)):
        return ""
    if not math.isfinite(n) or n < 0:
        return ""

    n = min(int(n), 999)
    result = ""

    hundreds, n = divmod(n, 100)
    if hundreds > 0:
        word = _word(ONES, hundreds)
        if word:
            result += word + " Hundred "

    if n >= 20:
        tens, ones = divmod(n, 10)
        word = _word(TENS, tens)
        if word:
            result += word + " "
        if ones > 0:
            word = _word(ONES, ones)
            if word:
                result += word + " "
    elif n >= 10:
        word = _word(TEENS, n - 10)
        if word:
            result += word + " "
    elif n > 0:
        word = _word(ONES, n)
        if word:
            result += word + " "

    return result.strip()


def to_words(amount) -> str:
    """
    Convert a rupee amount to words, e.g. 1234567 ->
    "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Only".

    Sentinels instead of exceptions:
    - non-numeric, NaN or infinite input -> "Invalid Amount"
    - magnitude of one trillion or more -> "Amount Too Large"
    - anything unexpected -> "Conversion Error"
    """
    try:
        if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
            return INVALID_AMOUNT
        if not math.isfinite(amount):
            return INVALID_AMOUNT

        if amount < 0:
            return f"Negative {_magnitude_to_words(abs(amount))}"
        return _magnitude_to_words(amount)
    except Exception:
        logger.exception("Unexpected error converting amount to words", extra={"amount": str(amount)})
        return CONVERSION_ERROR


def _magnitude_to_words(amount) -> str:
    n = int(round_half_up(float(amount)))

    if n == 0:
        return "Zero"
    if n >= MAX_AMOUNT:
        return AMOUNT_TOO_LARGE

    result = ""
    for divisor, label in SCALES:
        if n >= divisor:
            result += f"{convert_hundreds(n // divisor)} {label} "
            n %= divisor

    result += convert_hundreds(n)
    return result.strip() + " Only"
