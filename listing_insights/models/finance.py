"""Immutable value objects for payment, affordability and market calculations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..errors import InvalidInput
from ..utils.coerce import require_finite, require_non_negative, require_positive

PMI_THRESHOLD_PERCENT = 20.0


@dataclass(frozen=True)
class LoanParameters:
    """Purchase price and loan terms for a single payment calculation."""

    price: float
    down_payment_percent: float = 20.0
    interest_rate_annual_percent: float = 6.5
    loan_term_years: int = 30
    pmi_rate_percent: float = 0.5

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", require_positive("price", self.price))
        percent = require_finite("down_payment_percent", self.down_payment_percent)
        if not 0 <= percent <= 100:
            raise InvalidInput("down_payment_percent", self.down_payment_percent, "must be between 0 and 100")
        object.__setattr__(self, "down_payment_percent", percent)
        for name in ("interest_rate_annual_percent", "pmi_rate_percent"):
            object.__setattr__(self, name, require_non_negative(name, getattr(self, name)))
        term = self.loan_term_years
        if isinstance(term, bool) or not isinstance(term, int):
            if not (isinstance(term, float) and term.is_integer()):
                raise InvalidInput("loan_term_years", term, "must be a whole number of years")
            object.__setattr__(self, "loan_term_years", int(term))
        if self.loan_term_years <= 0:
            raise InvalidInput("loan_term_years", term, "must be > 0")

    @property
    def requires_pmi(self) -> bool:
        return self.down_payment_percent < PMI_THRESHOLD_PERCENT

    @property
    def number_of_payments(self) -> int:
        return self.loan_term_years * 12

    @property
    def monthly_rate(self) -> float:
        return self.interest_rate_annual_percent / 100 / 12

    def with_down_payment(self, percent: float) -> "LoanParameters":
        return replace(self, down_payment_percent=percent)


@dataclass(frozen=True)
class RecurringCosts:
    annual_property_tax: float = 0.0
    annual_insurance: float = 0.0
    monthly_hoa: float = 0.0

    def __post_init__(self) -> None:
        for name in ("annual_property_tax", "annual_insurance", "monthly_hoa"):
            object.__setattr__(self, name, require_non_negative(name, getattr(self, name)))


@dataclass(frozen=True)
class PaymentScenario:
    """Monthly cost breakdown for one down-payment choice."""

    down_payment_percent: float
    down_payment_amount: float
    loan_amount: float
    monthly_principal_interest: float
    monthly_taxes: float
    monthly_insurance: float
    monthly_hoa: float
    monthly_pmi: float
    total_monthly_payment: float
    total_interest_over_term: float

    @property
    def monthly_components(self) -> tuple:
        return (
            self.monthly_principal_interest,
            self.monthly_taxes,
            self.monthly_insurance,
            self.monthly_hoa,
            self.monthly_pmi,
        )


class AffordabilityRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ADEQUATE = "adequate"
    CHALLENGING = "challenging"
    NOT_AFFORDABLE = "not_affordable"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AffordabilityResult:
    required_annual_income: float
    rating: AffordabilityRating
    # Buyer income minus required income; negative means a shortfall.
    income_gap: float
    income_ratio: Optional[float] = None


class MarketPosition(str, Enum):
    UNDERPRICED = "underpriced"
    FAIR_VALUE = "fair_value"
    OVERPRICED = "overpriced"
    PREMIUM = "premium"
    UNKNOWN = "unknown"


class ValueIndicator(str, Enum):
    GOOD_VALUE = "good_value"
    NEUTRAL = "neutral"
    EXPENSIVE = "expensive"
    PREMIUM = "premium"


@dataclass(frozen=True)
class MarketComparison:
    price_vs_estimate_percent: float
    price_vs_comparables_percent: float
    position: MarketPosition
    label: str
    value_indicator: ValueIndicator


@dataclass(frozen=True)
class InvestmentMetrics:
    gross_yield_percent: float
    cap_rate_percent: float
    net_operating_income: float
    cash_flow_monthly: float
    break_even_ratio: Optional[float]
    grade: str
    roi_5_year_percent: Optional[float]


__all__ = [
    "PMI_THRESHOLD_PERCENT",
    "LoanParameters",
    "RecurringCosts",
    "PaymentScenario",
    "AffordabilityRating",
    "AffordabilityResult",
    "MarketPosition",
    "ValueIndicator",
    "MarketComparison",
    "InvestmentMetrics",
]
