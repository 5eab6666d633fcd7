"""Assemble a listing's payment, affordability, market and walkability analysis."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..config import (
    ANALYSIS_CACHE_TTL,
    DEFAULT_DOWN_PAYMENT_PERCENT,
    DEFAULT_INTEREST_RATE,
    DEFAULT_LOAN_TERM_YEARS,
    DEFAULT_PMI_RATE,
    TARGET_DTI_RATIO,
)
from ..db.repo import ListingSource, get_repository
from ..errors import ListingNotFound, PriceUnavailable
from ..models.analysis import (
    AffordabilityPayload,
    InvestmentPayload,
    ListingAnalysis,
    MarketComparisonPayload,
    PaymentScenarioPayload,
    WalkabilityPayload,
)
from ..models.finance import LoanParameters, RecurringCosts
from ..models.location import AmenityCategory, AmenityObservation, WalkabilityScore
from ..utils.caching import clear_prefix, memoize
from ..utils.coerce import positive_or_none, to_float
from ..utils.geo import haversine_distance
from ..utils.logging import get_logger, log_event
from ..utils.money import format_price, round_money
from .affordability import assess_affordability
from .amortization import STANDARD_DOWN_PAYMENT_SWEEP, compute_payment_scenario, compute_payment_scenarios
from .costs import RegionTaxTable, estimate_insurance, estimate_property_tax, load_region_tax_table
from .investment import compute_investment_metrics
from .market import classify_market_position
from .walkability import estimate_walkability

LOGGER = get_logger("services.listing")

CACHE_PREFIX = "analysis.listing"


class ListingAnalysisService:
    def __init__(self, repository: ListingSource, tax_table: Optional[RegionTaxTable] = None) -> None:
        self.repository = repository
        self.tax_table = tax_table or load_region_tax_table()

    @memoize(CACHE_PREFIX, ttl=ANALYSIS_CACHE_TTL)
    def analyze_listing(
        self,
        listing_id: str,
        interest_rate: float = DEFAULT_INTEREST_RATE,
        loan_term_years: int = DEFAULT_LOAN_TERM_YEARS,
        pmi_rate: float = DEFAULT_PMI_RATE,
        down_payment_percent: float = DEFAULT_DOWN_PAYMENT_PERCENT,
        buyer_annual_income: Optional[float] = None,
        target_dti_ratio: float = TARGET_DTI_RATIO,
    ) -> ListingAnalysis:
        listing = self._get_listing(listing_id)
        price = positive_or_none(listing.get("price"))
        if price is None:
            raise PriceUnavailable(listing_id)

        annual_tax = estimate_property_tax(
            price,
            listing.get("region_code"),
            actual_tax=listing.get("property_tax_annual"),
            table=self.tax_table,
        )
        annual_insurance = estimate_insurance(price, listing.get("insurance_annual"))
        costs = RecurringCosts(
            annual_property_tax=annual_tax,
            annual_insurance=annual_insurance,
            monthly_hoa=positive_or_none(listing.get("hoa_monthly")) or 0.0,
        )
        loan = LoanParameters(
            price=price,
            down_payment_percent=down_payment_percent,
            interest_rate_annual_percent=interest_rate,
            loan_term_years=loan_term_years,
            pmi_rate_percent=pmi_rate,
        )

        selected = compute_payment_scenario(loan, costs)
        scenarios = compute_payment_scenarios(loan, costs, STANDARD_DOWN_PAYMENT_SWEEP)
        affordability = assess_affordability(selected, target_dti_ratio, buyer_annual_income)
        market = classify_market_position(
            price,
            estimated_value=listing.get("estimated_value"),
            comparable_average=listing.get("comparable_average"),
            position_hint=listing.get("market_position"),
        )
        walkability = self.walkability_for(listing)
        investment = compute_investment_metrics(
            price,
            listing.get("est_monthly_rent"),
            selected.total_monthly_payment,
            down_payment_amount=selected.down_payment_amount,
        )

        log_event(
            LOGGER,
            "listing_analyzed",
            id=listing_id,
            price=price,
            total_monthly=selected.total_monthly_payment,
            rating=affordability.rating,
            walk=walkability.score if walkability else None,
        )
        return ListingAnalysis(
            listing_id=str(listing.get("id") or listing_id),
            address=listing.get("address") or "",
            price=price,
            price_display=format_price(price),
            annual_property_tax=round_money(annual_tax),
            annual_insurance=round_money(annual_insurance),
            selected_scenario=PaymentScenarioPayload.from_scenario(selected),
            scenarios={f"{pct:g}": PaymentScenarioPayload.from_scenario(s) for pct, s in scenarios.items()},
            affordability=AffordabilityPayload.from_result(affordability),
            market=MarketComparisonPayload.from_result(market),
            walkability=WalkabilityPayload.from_result(walkability) if walkability else None,
            investment=InvestmentPayload.from_metrics(investment) if investment else None,
        )

    def price_display(self, listing_id: str, shorthand: bool = False) -> str:
        listing = self._get_listing(listing_id)
        return format_price(listing.get("price"), shorthand=shorthand)

    def walkability_for(self, listing: Dict) -> Optional[WalkabilityScore]:
        """Estimate walkability from stored amenities.

        Returns ``None`` when the listing has neither coordinates nor any
        amenity records, since there is nothing to base an estimate on.
        """

        records = self.repository.get_amenities(listing["id"])
        has_coordinates = listing.get("latitude") is not None and listing.get("longitude") is not None
        if not records and not has_coordinates:
            return None
        return estimate_walkability(self._observations(listing, records))

    def _observations(self, listing: Dict, records: List[Dict]) -> List[AmenityObservation]:
        observations: List[AmenityObservation] = []
        for record in records:
            try:
                category = AmenityCategory.from_source(record.get("category"))
            except ValueError:
                LOGGER.debug("amenity_category_unscored listing=%s category=%s", listing["id"], record.get("category"))
                continue
            distance = to_float(record.get("distance_miles"))
            if distance is None:
                distance = self._distance_from_coordinates(listing, record)
            if distance is None or distance < 0:
                LOGGER.warning("amenity_distance_unavailable listing=%s name=%s", listing["id"], record.get("name"))
                continue
            observations.append(AmenityObservation(category=category, distance_miles=distance))
        return observations

    @staticmethod
    def _distance_from_coordinates(listing: Dict, record: Dict) -> Optional[float]:
        points = (listing.get("latitude"), listing.get("longitude"), record.get("latitude"), record.get("longitude"))
        if any(value is None for value in points):
            return None
        return haversine_distance(*points)

    def _get_listing(self, listing_id: str) -> Dict:
        listing = self.repository.get_listing(listing_id)
        if not listing:
            raise ListingNotFound(listing_id)
        return listing


def clear_analysis_cache() -> None:
    clear_prefix(CACHE_PREFIX)


_SERVICE_SINGLETON: ListingAnalysisService | None = None


def get_default_service() -> ListingAnalysisService:
    global _SERVICE_SINGLETON
    if _SERVICE_SINGLETON is None:
        _SERVICE_SINGLETON = ListingAnalysisService(get_repository())
    return _SERVICE_SINGLETON


def reset_default_service() -> None:
    global _SERVICE_SINGLETON
    _SERVICE_SINGLETON = None
    clear_analysis_cache()


def analyze_listing(listing_id: str, **params) -> ListingAnalysis:
    """Module-level helper used by the FastAPI layer."""

    return get_default_service().analyze_listing(listing_id, **params)
