"""
formatting.py — Indian currency / number formatting for labels and reports.

Indian digit grouping: last three digits, then groups of two.
    1234567   → 12,34,567
    100000000 → 10,00,00,000

Amounts are rounded half-up to whole rupees (no paise on display).
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]

RUPEE = "₹"


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_number_inr(amount: Number) -> str:
    """Whole-rupee amount with Indian grouping, no currency symbol."""
    whole = Decimal(str(amount)).to_integral_value(rounding=ROUND_HALF_UP)
    sign = "-" if whole < 0 else ""
    return sign + _group_indian(str(abs(int(whole))))


def format_inr(amount: Number) -> str:
    """Whole-rupee amount with ₹ symbol: ₹4,00,000 / -₹75,000."""
    text = format_number_inr(amount)
    if text.startswith("-"):
        return f"-{RUPEE}{text[1:]}"
    return f"{RUPEE}{text}"


def format_rate(rate: Decimal) -> str:
    """Fractional slab rate as a percentage without trailing zeros: 0.05 → '5'."""
    text = f"{rate * 100:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_percent(value: Decimal) -> str:
    """Effective-rate percentage to one decimal place: '6.3%'."""
    return f"{value.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%"
