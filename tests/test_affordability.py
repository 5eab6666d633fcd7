import pytest

from listing_insights.errors import InvalidInput
from listing_insights.models.finance import AffordabilityRating, PaymentScenario
from listing_insights.services.affordability import (
    RATING_ORDER,
    assess_affordability,
    max_affordable_payment,
    rating_from_ratio,
    required_annual_income,
)


def _scenario(total: float) -> PaymentScenario:
    return PaymentScenario(
        down_payment_percent=20,
        down_payment_amount=80_000,
        loan_amount=320_000,
        monthly_principal_interest=total,
        monthly_taxes=0,
        monthly_insurance=0,
        monthly_hoa=0,
        monthly_pmi=0,
        total_monthly_payment=total,
        total_interest_over_term=0,
    )


def test_required_income_uses_target_ratio():
    result = assess_affordability(_scenario(2_000))
    assert result.required_annual_income == pytest.approx(2_000 * 12 / 0.28)
    assert assess_affordability(_scenario(2_000), 40).required_annual_income == pytest.approx(60_000)


def test_missing_income_is_unknown():
    result = assess_affordability(_scenario(2_000))
    assert result.rating is AffordabilityRating.UNKNOWN
    assert result.income_gap == 0


def test_income_gap_is_signed():
    required = required_annual_income(2_000)
    rich = assess_affordability(_scenario(2_000), buyer_annual_income=200_000)
    poor = assess_affordability(_scenario(2_000), buyer_annual_income=40_000)
    assert rich.income_gap == pytest.approx(200_000 - required)
    assert rich.rating is AffordabilityRating.EXCELLENT
    assert poor.income_gap < 0
    assert poor.rating is AffordabilityRating.NOT_AFFORDABLE


@pytest.mark.parametrize(
    "ratio, expected",
    [
        (2.0, AffordabilityRating.EXCELLENT),
        (1.30, AffordabilityRating.EXCELLENT),
        (1.29, AffordabilityRating.GOOD),
        (1.10, AffordabilityRating.GOOD),
        (1.05, AffordabilityRating.ADEQUATE),
        (1.00, AffordabilityRating.ADEQUATE),
        (0.99, AffordabilityRating.CHALLENGING),
        (0.85, AffordabilityRating.CHALLENGING),
        (0.84, AffordabilityRating.NOT_AFFORDABLE),
        (0.0, AffordabilityRating.NOT_AFFORDABLE),
    ],
)
def test_rating_thresholds_are_inclusive(ratio, expected):
    assert rating_from_ratio(ratio) is expected


def test_rating_is_monotonic_in_income():
    previous = -1
    for step in range(0, 301):
        ratio = step / 100
        rank = RATING_ORDER.index(rating_from_ratio(ratio))
        assert rank >= previous
        previous = rank


def test_zero_payment_is_always_affordable():
    result = assess_affordability(_scenario(0), buyer_annual_income=0)
    assert result.required_annual_income == 0
    assert result.rating is AffordabilityRating.EXCELLENT


def test_invalid_ratio_and_income():
    with pytest.raises(InvalidInput):
        assess_affordability(_scenario(2_000), target_debt_to_income_ratio=0)
    with pytest.raises(InvalidInput):
        assess_affordability(_scenario(2_000), buyer_annual_income=-1)


def test_max_affordable_payment():
    assert max_affordable_payment(10_000, 500) == pytest.approx(3_800)
    assert max_affordable_payment(10_000, 500, 28) == pytest.approx(2_300)
    assert max_affordable_payment(2_000, 5_000) == 0
    assert max_affordable_payment(0) == 0
