"""Rounding and currency display helpers.

The engine keeps full float precision internally. Rounding happens once, at
the presentation boundary: money to cents, percentages to two decimals and
scores to whole numbers, all half-up.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .coerce import positive_or_none

CONTACT_FOR_PRICING = "Contact for pricing"


def _half_up(value: float, exponent: str) -> Decimal:
    return Decimal(repr(float(value))).quantize(Decimal(exponent), rounding=ROUND_HALF_UP)


def round_money(value: float) -> float:
    return float(_half_up(value, "0.01"))


def round_percent(value: float) -> float:
    return float(_half_up(value, "0.01"))


def round_score(value: float) -> int:
    return int(_half_up(value, "1"))


def format_price(price: Optional[float], shorthand: bool = False) -> str:
    """Format a listing price for display.

    ``shorthand`` renders ``$1.2M`` / ``$350K`` style labels. Missing or
    non-positive prices yield the contact-for-pricing message.
    """

    value = positive_or_none(price)
    if value is None:
        return CONTACT_FOR_PRICING
    if shorthand:
        if value >= 1_000_000:
            return f"${value / 1_000_000:.1f}M".replace(".0M", "M")
        if value >= 1_000:
            return f"${round_score(value / 1_000)}K"
    return f"${round_score(value):,}"


__all__ = ["CONTACT_FOR_PRICING", "round_money", "round_percent", "round_score", "format_price"]
