"""Rental investment metrics for listings with a rent estimate."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..models.finance import InvestmentMetrics
from ..utils.coerce import positive_or_none, require_finite, require_non_negative, require_positive
from ..utils.logging import get_logger

LOGGER = get_logger("services.investment")

OPERATING_EXPENSE_RATIO = 0.25
DEFAULT_APPRECIATION_RATE = 3.0
DEFAULT_DOWN_PAYMENT_FRACTION = 0.20
ROI_YEARS = 5

# (threshold, points) pairs, highest first.
CAP_RATE_POINTS: Sequence[Tuple[float, int]] = ((8, 40), (6, 30), (4, 20), (2, 10))
CASH_FLOW_POINTS: Sequence[Tuple[float, int]] = ((500, 40), (200, 30), (0, 20), (-200, 10))
GROSS_YIELD_POINTS: Sequence[Tuple[float, int]] = ((12, 20), (10, 15), (8, 10), (6, 5))
GRADE_BANDS: Sequence[Tuple[int, str]] = (
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C+"),
    (40, "C"),
    (30, "D"),
)


def _points(value: float, table: Sequence[Tuple[float, int]]) -> int:
    for threshold, points in table:
        if value >= threshold:
            return points
    return 0


def investment_grade(cap_rate: float, cash_flow: float, gross_yield: float) -> str:
    """Letter grade from cap rate (40 pts), monthly cash flow (40) and gross yield (20)."""

    score = (
        _points(cap_rate, CAP_RATE_POINTS)
        + _points(cash_flow, CASH_FLOW_POINTS)
        + _points(gross_yield, GROSS_YIELD_POINTS)
    )
    for threshold, grade in GRADE_BANDS:
        if score >= threshold:
            return grade
    return "F"


def compute_investment_metrics(
    listing_price: float,
    monthly_rent: Optional[float],
    total_monthly_payment: float,
    down_payment_amount: Optional[float] = None,
    appreciation_rate_percent: float = DEFAULT_APPRECIATION_RATE,
) -> Optional[InvestmentMetrics]:
    price = require_positive("listing_price", listing_price)
    rent = positive_or_none(monthly_rent)
    if rent is None:
        return None
    payment = require_non_negative("total_monthly_payment", total_monthly_payment)
    appreciation = require_finite("appreciation_rate_percent", appreciation_rate_percent)

    annual_rent = rent * 12
    gross_yield = annual_rent / price * 100
    operating_expenses = annual_rent * OPERATING_EXPENSE_RATIO
    noi = annual_rent - operating_expenses
    cap_rate = noi / price * 100

    monthly_expenses = operating_expenses / 12
    cash_flow = rent - payment - monthly_expenses
    outgoing = payment + monthly_expenses
    break_even = rent / outgoing if outgoing > 0 else None

    if down_payment_amount is None:
        down_payment = price * DEFAULT_DOWN_PAYMENT_FRACTION
    else:
        down_payment = require_non_negative("down_payment_amount", down_payment_amount)
    appreciation_value = price * (1 + appreciation / 100) ** ROI_YEARS - price
    total_return = cash_flow * 12 * ROI_YEARS + appreciation_value
    # Undefined with nothing down.
    roi = total_return / down_payment * 100 if down_payment > 0 else None

    grade = investment_grade(cap_rate, cash_flow, gross_yield)
    LOGGER.debug("investment cap_rate=%.2f cash_flow=%.2f grade=%s", cap_rate, cash_flow, grade)
    return InvestmentMetrics(
        gross_yield_percent=gross_yield,
        cap_rate_percent=cap_rate,
        net_operating_income=noi,
        cash_flow_monthly=cash_flow,
        break_even_ratio=break_even,
        grade=grade,
        roi_5_year_percent=roi,
    )


__all__ = [
    "OPERATING_EXPENSE_RATIO",
    "investment_grade",
    "compute_investment_metrics",
]
