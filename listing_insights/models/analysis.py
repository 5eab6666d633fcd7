"""Pydantic schemas for listing analysis requests and responses.

Payloads carry display-rounded numbers: money to cents, percentages to two
decimals, scores as integers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..services.amortization import STANDARD_DOWN_PAYMENT_SWEEP
from ..utils.money import CONTACT_FOR_PRICING, round_money, round_percent
from .finance import AffordabilityResult, InvestmentMetrics, MarketComparison, PaymentScenario
from .location import WalkabilityScore


class PaymentScenarioPayload(BaseModel):
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

    @classmethod
    def from_scenario(cls, scenario: PaymentScenario) -> "PaymentScenarioPayload":
        return cls(
            down_payment_percent=round_percent(scenario.down_payment_percent),
            down_payment_amount=round_money(scenario.down_payment_amount),
            loan_amount=round_money(scenario.loan_amount),
            monthly_principal_interest=round_money(scenario.monthly_principal_interest),
            monthly_taxes=round_money(scenario.monthly_taxes),
            monthly_insurance=round_money(scenario.monthly_insurance),
            monthly_hoa=round_money(scenario.monthly_hoa),
            monthly_pmi=round_money(scenario.monthly_pmi),
            total_monthly_payment=round_money(scenario.total_monthly_payment),
            total_interest_over_term=round_money(scenario.total_interest_over_term),
        )


class AffordabilityPayload(BaseModel):
    required_annual_income: float
    rating: str
    income_gap: float

    @classmethod
    def from_result(cls, result: AffordabilityResult) -> "AffordabilityPayload":
        return cls(
            required_annual_income=round_money(result.required_annual_income),
            rating=result.rating.value,
            income_gap=round_money(result.income_gap),
        )


class MarketComparisonPayload(BaseModel):
    price_vs_estimate_percent: float
    price_vs_comparables_percent: float
    position: str
    label: str
    value_indicator: str

    @classmethod
    def from_result(cls, result: MarketComparison) -> "MarketComparisonPayload":
        return cls(
            price_vs_estimate_percent=round_percent(result.price_vs_estimate_percent),
            price_vs_comparables_percent=round_percent(result.price_vs_comparables_percent),
            position=result.position.value,
            label=result.label,
            value_indicator=result.value_indicator.value,
        )


class CategoryScorePayload(BaseModel):
    category: str
    weight: float
    count: int
    proximity_bonus: float
    score: float
    contribution: float


class WalkabilityPayload(BaseModel):
    score: int
    tier: str
    source: str = "estimated"
    categories: List[CategoryScorePayload] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: WalkabilityScore) -> "WalkabilityPayload":
        return cls(
            score=result.score,
            tier=result.tier.value,
            categories=[
                CategoryScorePayload(
                    category=item.category.value,
                    weight=item.weight,
                    count=item.count,
                    proximity_bonus=round_percent(item.proximity_bonus),
                    score=round_percent(item.score),
                    contribution=round_percent(item.contribution),
                )
                for item in result.categories
            ],
        )


class InvestmentPayload(BaseModel):
    gross_yield_percent: float
    cap_rate_percent: float
    net_operating_income: float
    cash_flow_monthly: float
    break_even_ratio: Optional[float] = None
    grade: str
    roi_5_year_percent: Optional[float] = None

    @classmethod
    def from_metrics(cls, metrics: InvestmentMetrics) -> "InvestmentPayload":
        return cls(
            gross_yield_percent=round_percent(metrics.gross_yield_percent),
            cap_rate_percent=round_percent(metrics.cap_rate_percent),
            net_operating_income=round_money(metrics.net_operating_income),
            cash_flow_monthly=round_money(metrics.cash_flow_monthly),
            break_even_ratio=None if metrics.break_even_ratio is None else round_percent(metrics.break_even_ratio),
            grade=metrics.grade,
            roi_5_year_percent=None if metrics.roi_5_year_percent is None else round_percent(metrics.roi_5_year_percent),
        )


class ListingAnalysis(BaseModel):
    listing_id: str
    address: str
    price: float
    price_display: str
    annual_property_tax: float
    annual_insurance: float
    selected_scenario: PaymentScenarioPayload
    scenarios: Dict[str, PaymentScenarioPayload]
    affordability: AffordabilityPayload
    market: MarketComparisonPayload
    walkability: Optional[WalkabilityPayload] = None
    investment: Optional[InvestmentPayload] = None
    generated_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class PricingUnavailable(BaseModel):
    listing_id: str
    price_display: str = CONTACT_FOR_PRICING
    message: str = "Pricing is not published for this listing. Contact the listing agent for details."


class LoanRequest(BaseModel):
    price: float
    down_payment_percent: float = 20.0
    interest_rate_annual_percent: float = 6.5
    loan_term_years: int = 30
    pmi_rate_percent: float = 0.5
    annual_property_tax: Optional[float] = None
    annual_insurance: Optional[float] = None
    monthly_hoa: float = 0.0
    region_code: Optional[str] = None


class ScenariosRequest(LoanRequest):
    down_payment_percents: List[float] = Field(default_factory=lambda: list(STANDARD_DOWN_PAYMENT_SWEEP))


class ObservationPayload(BaseModel):
    category: str
    distance_miles: float


class WalkabilityRequest(BaseModel):
    observations: List[ObservationPayload] = Field(default_factory=list)
