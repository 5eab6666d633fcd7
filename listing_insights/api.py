"""Thin HTTP surface over the listing analysis service and the calculators."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from .config import DEFAULT_DOWN_PAYMENT_PERCENT, DEFAULT_INTEREST_RATE, DEFAULT_LOAN_TERM_YEARS, DEFAULT_PMI_RATE
from .db.repo import get_repository
from .errors import InvalidInput, ListingNotFound, PriceUnavailable
from .models.analysis import (
    LoanRequest,
    PaymentScenarioPayload,
    PricingUnavailable,
    ScenariosRequest,
    WalkabilityPayload,
    WalkabilityRequest,
)
from .models.finance import LoanParameters, RecurringCosts
from .models.location import AmenityObservation
from .services.amortization import compute_payment_scenario, compute_payment_scenarios
from .services.costs import RegionTaxTable, estimate_insurance, estimate_property_tax, load_region_tax_table
from .services.listing_service import analyze_listing
from .services.walkability import estimate_walkability
from .utils.logging import get_logger, log_event
from .utils.money import format_price

LOGGER = get_logger("api")

app = FastAPI(title="Listing Insights")
router = APIRouter(prefix="/api")


@lru_cache(maxsize=1)
def _tax_table() -> RegionTaxTable:
    return load_region_tax_table()


def _loan_and_costs(req: LoanRequest):
    loan = LoanParameters(
        price=req.price,
        down_payment_percent=req.down_payment_percent,
        interest_rate_annual_percent=req.interest_rate_annual_percent,
        loan_term_years=req.loan_term_years,
        pmi_rate_percent=req.pmi_rate_percent,
    )
    costs = RecurringCosts(
        annual_property_tax=estimate_property_tax(loan.price, req.region_code, req.annual_property_tax, table=_tax_table()),
        annual_insurance=estimate_insurance(loan.price, req.annual_insurance),
        monthly_hoa=req.monthly_hoa,
    )
    return loan, costs


def _invalid(exc: InvalidInput) -> HTTPException:
    log_event(LOGGER, "invalid_input", field=exc.field, reason=exc.reason)
    return HTTPException(422, detail={"field": exc.field, "reason": exc.reason})


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/listings")
def list_listings(city: Optional[str] = Query(None), limit: int = Query(50, ge=1, le=500)):
    rows = get_repository().list_listings(city=city, limit=limit)
    items = [{**row, "price_display": format_price(row["price"], shorthand=True)} for row in rows]
    return jsonable_encoder({"items": items, "total": len(items)})


@router.get("/listings/{listing_id}/analysis")
def listing_analysis(
    listing_id: str,
    interest_rate: float = Query(DEFAULT_INTEREST_RATE, ge=0),
    loan_term_years: int = Query(DEFAULT_LOAN_TERM_YEARS, gt=0, le=50),
    pmi_rate: float = Query(DEFAULT_PMI_RATE, ge=0),
    down_payment_percent: float = Query(DEFAULT_DOWN_PAYMENT_PERCENT, ge=0, le=100),
    buyer_annual_income: Optional[float] = Query(None, ge=0),
):
    try:
        analysis = analyze_listing(
            listing_id,
            interest_rate=interest_rate,
            loan_term_years=loan_term_years,
            pmi_rate=pmi_rate,
            down_payment_percent=down_payment_percent,
            buyer_annual_income=buyer_annual_income,
        )
    except ListingNotFound as exc:
        raise HTTPException(404, detail=str(exc)) from exc
    except PriceUnavailable:
        return jsonable_encoder(PricingUnavailable(listing_id=listing_id))
    except InvalidInput as exc:
        raise _invalid(exc) from exc
    return jsonable_encoder(analysis)


@router.post("/calculate/payment")
def calculate_payment(req: LoanRequest):
    try:
        loan, costs = _loan_and_costs(req)
        scenario = compute_payment_scenario(loan, costs)
    except InvalidInput as exc:
        raise _invalid(exc) from exc
    return jsonable_encoder(PaymentScenarioPayload.from_scenario(scenario))


@router.post("/calculate/scenarios")
def calculate_scenarios(req: ScenariosRequest):
    try:
        loan, costs = _loan_and_costs(req)
        scenarios = compute_payment_scenarios(loan, costs, req.down_payment_percents)
    except InvalidInput as exc:
        raise _invalid(exc) from exc
    items = [PaymentScenarioPayload.from_scenario(s) for s in scenarios.values()]
    return jsonable_encoder({"items": items, "total": len(items)})


@router.post("/calculate/walkability")
def calculate_walkability(req: WalkabilityRequest):
    try:
        observations = [AmenityObservation(category=o.category, distance_miles=o.distance_miles) for o in req.observations]
    except ValueError as exc:
        # Covers unknown categories and InvalidInput distances.
        raise HTTPException(422, detail=str(exc)) from exc
    return jsonable_encoder(WalkabilityPayload.from_result(estimate_walkability(observations)))


app.include_router(router)
