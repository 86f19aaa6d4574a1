"""
Rupee amount helpers shared by the directory, calculator, formatter and renderer.

Spreadsheet cells arrive as loosely-typed strings, so every monetary value
passes through ``parse_or_default`` exactly once at the ingestion boundary.
"""
import math
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Optional

_STRIP_CHARS = ("₹", ",", "Rs.", "INR")


def parse_amount(value: Any) -> Optional[float]:
    """
    Parse a spreadsheet cell into a finite float.

    Returns None for anything that is not a finite number: None, booleans,
    blank or non-numeric strings, NaN and infinities. Never raises.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return None
        return number if math.isfinite(number) else None

    if isinstance(value, str):
        text = value.strip()
        for token in _STRIP_CHARS:
            text = text.replace(token, "")
        text = text.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None

    return None


def parse_or_default(value: Any, default: float = 0.0) -> float:
    parsed = parse_amount(value)
    return default if parsed is None else parsed


def round_half_up(value: float) -> float:
    """
    Round to the nearest whole number, halves toward +infinity
    (2.5 -> 3, -2.5 -> -2).

    Non-finite input is returned unchanged so callers can detect it.
    """
    if not math.isfinite(value):
        return value
    return float((Decimal(str(value)) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def format_inr(amount: int) -> str:
    """Format a whole-rupee amount with Indian digit grouping (12,34,567)."""
    sign = "-" if amount < 0 else ""
    digits = str(abs(int(amount)))
    if len(digits) <= 3:
        return f"{sign}{digits}"

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return f"{sign}{','.join(groups)},{tail}"
