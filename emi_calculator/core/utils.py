from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from ..config import CURRENCY_SYMBOL


def _quantize(value: float, ndigits: int) -> Decimal:
    number = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # all integer digits plus ndigits must fit in the context precision
        ctx.prec = max(ctx.prec, number.adjusted() + ndigits + 2)
        return number.quantize(Decimal(1).scaleb(-ndigits), rounding=ROUND_HALF_UP)


def round_half_up(value: float, ndigits: int = 2) -> float:
    """Round half away from zero on the decimal representation of ``value``.

    ``round()`` works on the binary value and rounds ties to even, so
    ``round(2.675, 2) == 2.67``; this returns 2.68. Non-finite values are
    returned unchanged.
    """
    if not math.isfinite(value):
        return float(value)
    return float(_quantize(value, ndigits))


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: float) -> str:
    """Currency with Indian digit grouping, at most two decimals.

    >>> format_currency(105499.06)
    '₹1,05,499.06'
    >>> format_currency(8791.5)
    '₹8,791.5'
    """
    if not math.isfinite(amount):
        return f"{CURRENCY_SYMBOL}{amount}"
    value = _quantize(amount, 2)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{value.copy_abs():f}".partition(".")
    fraction = fraction.rstrip("0")
    text = _group_indian(whole)
    if fraction:
        text = f"{text}.{fraction}"
    return f"{sign}{CURRENCY_SYMBOL}{text}"


def format_compact_currency(amount: float) -> str:
    """Short form used in the schedule table: Cr, L, K or whole units."""
    if amount >= 10_000_000:
        return f"{CURRENCY_SYMBOL}{round_half_up(amount / 10_000_000, 1):.1f}Cr"
    if amount >= 100_000:
        return f"{CURRENCY_SYMBOL}{round_half_up(amount / 100_000, 1):.1f}L"
    if amount >= 1_000:
        return f"{CURRENCY_SYMBOL}{round_half_up(amount / 1_000, 1):.1f}K"
    return f"{CURRENCY_SYMBOL}{round_half_up(amount, 0):.0f}"


def tenure_label(years: int, months: int) -> str:
    return f"{years} years {months} months"
