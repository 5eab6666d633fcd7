"""Listing price position relative to its estimate and comparable sales."""

from __future__ import annotations

from typing import Dict, Optional, Tuple, Union

from ..models.finance import MarketComparison, MarketPosition, ValueIndicator
from ..utils.coerce import positive_or_none, require_positive
from ..utils.logging import get_logger

LOGGER = get_logger("services.market")

POSITION_DISPLAY: Dict[MarketPosition, Tuple[str, ValueIndicator]] = {
    MarketPosition.UNDERPRICED: ("Underpriced", ValueIndicator.GOOD_VALUE),
    MarketPosition.FAIR_VALUE: ("Fair Value", ValueIndicator.NEUTRAL),
    MarketPosition.OVERPRICED: ("Overpriced", ValueIndicator.EXPENSIVE),
    MarketPosition.PREMIUM: ("Premium", ValueIndicator.PREMIUM),
    MarketPosition.UNKNOWN: ("Unknown", ValueIndicator.NEUTRAL),
}

# Upper bounds (inclusive) on price-vs-reference percent used by the listing
# calculator when it stores a position for a listing.
HINT_BANDS: Tuple[Tuple[float, MarketPosition], ...] = (
    (-10.0, MarketPosition.UNDERPRICED),
    (5.0, MarketPosition.FAIR_VALUE),
    (15.0, MarketPosition.OVERPRICED),
)


def percent_difference(price: float, reference: Optional[float]) -> float:
    """Signed percent by which ``price`` exceeds ``reference``; 0 without a usable reference."""

    ref = positive_or_none(reference)
    if ref is None:
        return 0.0
    return (price - ref) / ref * 100


def parse_position(hint: Union[str, MarketPosition, None]) -> Optional[MarketPosition]:
    if hint is None or hint == "":
        return None
    if isinstance(hint, MarketPosition):
        return hint
    try:
        return MarketPosition(str(hint).strip().lower())
    except ValueError:
        LOGGER.warning("market_position_hint_ignored hint=%r", hint)
        return None


def classify_market_position(
    listing_price: float,
    estimated_value: Optional[float] = None,
    comparable_average: Optional[float] = None,
    position_hint: Union[str, MarketPosition, None] = None,
) -> MarketComparison:
    """Report price deltas and the externally supplied market position.

    The position is taken from ``position_hint`` as given; it is not derived
    from the deltas computed here. See :func:`derive_position_hint` for the
    rule the listing calculator applies upstream.
    """

    price = require_positive("listing_price", listing_price)
    position = parse_position(position_hint) or MarketPosition.UNKNOWN
    label, indicator = POSITION_DISPLAY[position]
    return MarketComparison(
        price_vs_estimate_percent=percent_difference(price, estimated_value),
        price_vs_comparables_percent=percent_difference(price, comparable_average),
        position=position,
        label=label,
        value_indicator=indicator,
    )


def derive_position_hint(
    listing_price: float,
    estimated_value: Optional[float] = None,
    comparable_average: Optional[float] = None,
) -> Optional[MarketPosition]:
    """Position from the estimate (or, failing that, the comparable average).

    Returns ``None`` when the price or both references are missing.
    """

    price = positive_or_none(listing_price)
    reference = positive_or_none(estimated_value) or positive_or_none(comparable_average)
    if price is None or reference is None:
        return None
    delta = percent_difference(price, reference)
    for upper, position in HINT_BANDS:
        if delta <= upper:
            return position
    return MarketPosition.PREMIUM


__all__ = [
    "POSITION_DISPLAY",
    "HINT_BANDS",
    "percent_difference",
    "parse_position",
    "classify_market_position",
    "derive_position_hint",
]
