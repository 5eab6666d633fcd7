import math

import pytest

from listing_insights.errors import InvalidInput
from listing_insights.models.finance import LoanParameters, RecurringCosts
from listing_insights.services.amortization import (
    STANDARD_DOWN_PAYMENT_SWEEP,
    amortization_schedule,
    compute_payment_scenario,
    compute_payment_scenarios,
    down_payment_percentage,
    loan_to_value_ratio,
    max_loan_amount,
    monthly_principal_interest,
)


def _loan(**overrides) -> LoanParameters:
    params = dict(
        price=400_000,
        down_payment_percent=20,
        interest_rate_annual_percent=6.5,
        loan_term_years=30,
        pmi_rate_percent=0.5,
    )
    params.update(overrides)
    return LoanParameters(**params)


def _costs() -> RecurringCosts:
    return RecurringCosts(annual_property_tax=4_800, annual_insurance=1_600, monthly_hoa=0)


def test_reference_payment_breakdown():
    scenario = compute_payment_scenario(_loan(), _costs())
    assert scenario.loan_amount == pytest.approx(320_000)
    assert scenario.down_payment_amount == pytest.approx(80_000)
    assert scenario.monthly_principal_interest == pytest.approx(2022.62, abs=0.01)
    assert scenario.monthly_taxes == pytest.approx(400)
    assert scenario.monthly_insurance == pytest.approx(133.33, abs=0.01)
    assert scenario.monthly_pmi == 0
    assert scenario.total_monthly_payment == pytest.approx(2555.95, abs=0.5)


def test_zero_rate_is_straight_line():
    for price in (120_000, 360_000, 987_654.32):
        scenario = compute_payment_scenario(_loan(price=price, down_payment_percent=0, interest_rate_annual_percent=0), _costs())
        assert scenario.monthly_principal_interest == scenario.loan_amount / 360
        assert scenario.total_interest_over_term == pytest.approx(0, abs=1e-6)


@pytest.mark.parametrize("rate", [1e-14, 1e-300, 5e-324])
def test_near_zero_rate_behaves_like_straight_line(rate):
    scenario = compute_payment_scenario(_loan(interest_rate_annual_percent=rate), _costs())
    assert scenario.monthly_principal_interest == pytest.approx(320_000 / 360)
    assert max_loan_amount(1_000, rate, 30) == pytest.approx(360_000)


def test_total_is_sum_of_components():
    costs = RecurringCosts(annual_property_tax=6_000, annual_insurance=2_100, monthly_hoa=275)
    for price in (95_000, 400_000, 1_250_000):
        for pct in (0, 3.5, 12, 20, 45, 100):
            for rate in (0, 3.25, 7.875):
                scenario = compute_payment_scenario(
                    _loan(price=price, down_payment_percent=pct, interest_rate_annual_percent=rate), costs
                )
                assert math.isclose(scenario.total_monthly_payment, sum(scenario.monthly_components))


def test_pmi_only_below_twenty_percent():
    for pct in (0, 5, 10, 19.99, 20, 25, 50):
        scenario = compute_payment_scenario(_loan(down_payment_percent=pct, pmi_rate_percent=0.75), _costs())
        if pct >= 20:
            assert scenario.monthly_pmi == 0
        else:
            assert scenario.monthly_pmi == pytest.approx(scenario.loan_amount * 0.75 / 100 / 12)


def test_total_interest_over_term():
    scenario = compute_payment_scenario(_loan(), _costs())
    assert scenario.total_interest_over_term == pytest.approx(scenario.monthly_principal_interest * 360 - 320_000)
    assert scenario.total_interest_over_term > 0


def test_standard_sweep_matches_single_scenarios():
    loan = _loan(down_payment_percent=3)
    scenarios = compute_payment_scenarios(loan, _costs())
    assert list(scenarios) == [5, 10, 15, 20, 25, 30]
    assert len(scenarios) == len(STANDARD_DOWN_PAYMENT_SWEEP)
    for pct, scenario in scenarios.items():
        assert scenario == compute_payment_scenario(loan.with_down_payment(pct), _costs())
        assert scenario.down_payment_percent == pct
    assert compute_payment_scenarios(loan, _costs()) == scenarios


def test_sweep_keeps_input_order():
    scenarios = compute_payment_scenarios(_loan(), _costs(), [30, 5, 17.5])
    assert list(scenarios) == [30, 5, 17.5]


@pytest.mark.parametrize(
    "overrides",
    [
        {"price": 0},
        {"price": -100},
        {"price": float("nan")},
        {"loan_term_years": 0},
        {"loan_term_years": -15},
        {"loan_term_years": 12.5},
        {"down_payment_percent": 120},
        {"interest_rate_annual_percent": float("inf")},
        {"pmi_rate_percent": -0.1},
    ],
)
def test_invalid_loan_parameters(overrides):
    with pytest.raises(InvalidInput):
        compute_payment_scenario(_loan(**overrides), _costs())


def test_negative_costs_rejected():
    with pytest.raises(InvalidInput):
        RecurringCosts(annual_property_tax=-1)


def test_whole_float_term_is_accepted():
    assert _loan(loan_term_years=15.0).loan_term_years == 15


def test_max_loan_amount_inverts_payment():
    payment = monthly_principal_interest(320_000, 6.5, 30)
    assert max_loan_amount(payment, 6.5, 30) == pytest.approx(320_000)
    assert max_loan_amount(1_000, 0, 30) == 360_000
    assert max_loan_amount(0, 6.5, 30) == 0


def test_ratio_helpers():
    assert down_payment_percentage(80_000, 400_000) == pytest.approx(20)
    assert loan_to_value_ratio(320_000, 400_000) == pytest.approx(80)
    assert down_payment_percentage(80_000, 0) == 0
    assert loan_to_value_ratio(320_000, 0) == 0


def test_schedule_pays_off_loan():
    loan = _loan()
    schedule = amortization_schedule(loan)
    scenario = compute_payment_scenario(loan, _costs())
    assert list(schedule.columns) == ["year", "interest", "principal", "ending_balance"]
    assert len(schedule) == 30
    assert schedule["principal"].sum() == pytest.approx(320_000, abs=0.01)
    assert schedule["interest"].sum() == pytest.approx(scenario.total_interest_over_term, abs=1.0)
    assert schedule["ending_balance"].iloc[-1] == pytest.approx(0, abs=1e-6)
    assert schedule["ending_balance"].is_monotonic_decreasing


def test_schedule_extra_payments_shorten_term():
    schedule = amortization_schedule(_loan(), extra_payment_annual=12_000)
    assert len(schedule) < 30
    assert schedule["principal"].sum() == pytest.approx(320_000, abs=0.01)
    assert schedule["ending_balance"].iloc[-1] == pytest.approx(0, abs=1e-6)


def test_schedule_empty_without_loan():
    assert amortization_schedule(_loan(down_payment_percent=100)).empty
