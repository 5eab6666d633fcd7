"""Mortgage amortization and down-payment scenario calculations."""

from __future__ import annotations

import math
from typing import Dict, List, Sequence

import pandas as pd

from ..models.finance import LoanParameters, PaymentScenario, RecurringCosts
from ..utils.coerce import require_non_negative, require_positive
from ..utils.logging import get_logger

LOGGER = get_logger("services.amortization")

STANDARD_DOWN_PAYMENT_SWEEP = (5, 10, 15, 20, 25, 30)


def monthly_principal_interest(loan_amount: float, annual_rate_percent: float, term_years: int) -> float:
    """Fixed-rate amortized payment ``P * r(1+r)^n / ((1+r)^n - 1)``.

    ``r`` is the annual rate / 12 and ``n`` the number of monthly payments.
    A rate too small to compound (including zero) degrades to straight-line
    repayment ``P / n``.
    """

    loan_amount = require_non_negative("loan_amount", loan_amount)
    annual_rate_percent = require_non_negative("annual_rate_percent", annual_rate_percent)
    n = int(require_positive("term_years", term_years)) * 12
    r = annual_rate_percent / 100 / 12
    growth_minus_one = math.expm1(n * math.log1p(r))
    if growth_minus_one == 0:
        return loan_amount / n
    return loan_amount * r * (growth_minus_one + 1) / growth_minus_one


def compute_payment_scenario(loan: LoanParameters, costs: RecurringCosts) -> PaymentScenario:
    down_payment_amount = loan.price * loan.down_payment_percent / 100
    loan_amount = loan.price - down_payment_amount
    n = loan.number_of_payments

    monthly_pi = monthly_principal_interest(loan_amount, loan.interest_rate_annual_percent, loan.loan_term_years)
    monthly_taxes = costs.annual_property_tax / 12
    monthly_insurance = costs.annual_insurance / 12
    monthly_hoa = costs.monthly_hoa
    monthly_pmi = loan_amount * loan.pmi_rate_percent / 100 / 12 if loan.requires_pmi else 0.0

    total = monthly_pi + monthly_taxes + monthly_insurance + monthly_hoa + monthly_pmi
    scenario = PaymentScenario(
        down_payment_percent=loan.down_payment_percent,
        down_payment_amount=down_payment_amount,
        loan_amount=loan_amount,
        monthly_principal_interest=monthly_pi,
        monthly_taxes=monthly_taxes,
        monthly_insurance=monthly_insurance,
        monthly_hoa=monthly_hoa,
        monthly_pmi=monthly_pmi,
        total_monthly_payment=total,
        total_interest_over_term=monthly_pi * n - loan_amount,
    )
    LOGGER.debug(
        "payment_scenario price=%s down_pct=%s loan=%.2f total=%.2f",
        loan.price,
        loan.down_payment_percent,
        loan_amount,
        total,
    )
    return scenario


def compute_payment_scenarios(
    loan_base: LoanParameters,
    costs: RecurringCosts,
    down_payment_percents: Sequence[float] = STANDARD_DOWN_PAYMENT_SWEEP,
) -> Dict[float, PaymentScenario]:
    """Run :func:`compute_payment_scenario` once per down-payment percentage.

    Only the down payment varies; the mapping keeps the order of
    ``down_payment_percents``.
    """

    scenarios: Dict[float, PaymentScenario] = {}
    for percent in down_payment_percents:
        scenarios[percent] = compute_payment_scenario(loan_base.with_down_payment(percent), costs)
    return scenarios


def max_loan_amount(monthly_payment: float, annual_rate_percent: float, term_years: int = 30) -> float:
    """Largest principal a given monthly P&I payment can amortize."""

    if monthly_payment <= 0:
        return 0.0
    annual_rate_percent = require_non_negative("annual_rate_percent", annual_rate_percent)
    n = int(require_positive("term_years", term_years)) * 12
    r = annual_rate_percent / 100 / 12
    growth_minus_one = math.expm1(n * math.log1p(r))
    if growth_minus_one == 0:
        return monthly_payment * n
    return monthly_payment * growth_minus_one / (r * (growth_minus_one + 1))


def down_payment_percentage(down_payment: float, purchase_price: float) -> float:
    if purchase_price <= 0:
        return 0.0
    return down_payment / purchase_price * 100


def loan_to_value_ratio(loan_amount: float, property_value: float) -> float:
    if property_value <= 0:
        return 0.0
    return loan_amount / property_value * 100


def amortization_schedule(loan: LoanParameters, extra_payment_annual: float = 0.0) -> pd.DataFrame:
    """Month-by-month amortization aggregated into one row per loan year.

    ``extra_payment_annual`` is applied to principal at the end of each year,
    which shortens the schedule. Columns: year, interest, principal,
    ending_balance.
    """

    extra_payment_annual = require_non_negative("extra_payment_annual", extra_payment_annual)
    balance = loan.price * (1 - loan.down_payment_percent / 100)
    payment = monthly_principal_interest(balance, loan.interest_rate_annual_percent, loan.loan_term_years)
    r = loan.monthly_rate

    rows: List[Dict[str, float]] = []
    interest_ytd = 0.0
    principal_ytd = 0.0
    for month in range(1, loan.number_of_payments + 1):
        if balance <= 0:
            break
        interest = balance * r
        principal = min(payment - interest, balance)
        # The last scheduled payment clears any floating point residue.
        if month == loan.number_of_payments:
            principal = balance
        balance -= principal
        interest_ytd += interest
        principal_ytd += principal

        if month % 12 == 0 and extra_payment_annual and balance > 0:
            extra = min(extra_payment_annual, balance)
            balance -= extra
            principal_ytd += extra

        if month % 12 == 0 or balance <= 0:
            rows.append(
                {
                    "year": (month - 1) // 12 + 1,
                    "interest": interest_ytd,
                    "principal": principal_ytd,
                    "ending_balance": max(0.0, balance),
                }
            )
            interest_ytd = 0.0
            principal_ytd = 0.0

    return pd.DataFrame(rows, columns=["year", "interest", "principal", "ending_balance"])


__all__ = [
    "STANDARD_DOWN_PAYMENT_SWEEP",
    "monthly_principal_interest",
    "compute_payment_scenario",
    "compute_payment_scenarios",
    "max_loan_amount",
    "down_payment_percentage",
    "loan_to_value_ratio",
    "amortization_schedule",
]
