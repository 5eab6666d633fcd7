"""Buyer affordability against a target housing debt-to-income ratio."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..errors import InvalidInput
from ..models.finance import AffordabilityRating, AffordabilityResult, PaymentScenario
from ..utils.coerce import positive_or_none, require_non_negative, require_positive
from ..utils.logging import get_logger

LOGGER = get_logger("services.affordability")

DEFAULT_TARGET_DTI = 28.0
DEFAULT_MAX_TOTAL_DTI = 43.0

# Inclusive lower bounds on buyer income / required income, checked top-down.
RATING_THRESHOLDS: Sequence[Tuple[float, AffordabilityRating]] = (
    (1.30, AffordabilityRating.EXCELLENT),
    (1.10, AffordabilityRating.GOOD),
    (1.00, AffordabilityRating.ADEQUATE),
    (0.85, AffordabilityRating.CHALLENGING),
)

RATING_ORDER = (
    AffordabilityRating.NOT_AFFORDABLE,
    AffordabilityRating.CHALLENGING,
    AffordabilityRating.ADEQUATE,
    AffordabilityRating.GOOD,
    AffordabilityRating.EXCELLENT,
)


def required_annual_income(total_monthly_payment: float, target_debt_to_income_ratio: float = DEFAULT_TARGET_DTI) -> float:
    ratio = require_positive("target_debt_to_income_ratio", target_debt_to_income_ratio)
    payment = require_non_negative("total_monthly_payment", total_monthly_payment)
    return payment * 12 / (ratio / 100)


def rating_from_ratio(income_ratio: Optional[float]) -> AffordabilityRating:
    if income_ratio is None:
        return AffordabilityRating.UNKNOWN
    for threshold, rating in RATING_THRESHOLDS:
        if income_ratio >= threshold:
            return rating
    return AffordabilityRating.NOT_AFFORDABLE


def assess_affordability(
    scenario: PaymentScenario,
    target_debt_to_income_ratio: float = DEFAULT_TARGET_DTI,
    buyer_annual_income: Optional[float] = None,
) -> AffordabilityResult:
    required = required_annual_income(scenario.total_monthly_payment, target_debt_to_income_ratio)
    if buyer_annual_income is None:
        return AffordabilityResult(required_annual_income=required, rating=AffordabilityRating.UNKNOWN, income_gap=0.0)

    income = require_non_negative("buyer_annual_income", buyer_annual_income)
    if required == 0:
        # Nothing to pay each month; any income covers it.
        ratio = None
        rating = AffordabilityRating.EXCELLENT
    else:
        ratio = income / required
        rating = rating_from_ratio(ratio)
    result = AffordabilityResult(
        required_annual_income=required,
        rating=rating,
        income_gap=income - required,
        income_ratio=ratio,
    )
    LOGGER.debug("affordability required=%.2f income=%.2f rating=%s", required, income, result.rating.value)
    return result


def max_affordable_payment(
    monthly_income: float,
    monthly_debts: float = 0.0,
    debt_to_income_ratio: float = DEFAULT_MAX_TOTAL_DTI,
) -> float:
    """Largest monthly housing payment that keeps total debt under the DTI cap."""

    if positive_or_none(monthly_income) is None:
        return 0.0
    if debt_to_income_ratio < 0:
        raise InvalidInput("debt_to_income_ratio", debt_to_income_ratio, "must be >= 0")
    debts = require_non_negative("monthly_debts", monthly_debts)
    return max(0.0, monthly_income * debt_to_income_ratio / 100 - debts)


__all__ = [
    "DEFAULT_TARGET_DTI",
    "DEFAULT_MAX_TOTAL_DTI",
    "RATING_THRESHOLDS",
    "RATING_ORDER",
    "required_annual_income",
    "rating_from_ratio",
    "assess_affordability",
    "max_affordable_payment",
]
