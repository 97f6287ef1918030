"""
Growth Projections

Compound and simple interest, future value, and period-by-period investment
and retirement balance projections.

Balances are accumulated unrounded; only the values copied into result
records are rounded.
"""

import math
from typing import List
from dataclasses import dataclass, field

from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_rate,
    require_between,
    require_choice,
    require_whole,
)
from fincalc.errors import InvalidInputError

PERIODS_PER_YEAR = {
    "annually": 1,
    "semi-annually": 2,
    "quarterly": 4,
    "monthly": 12,
    "daily": 365,
}

PAYMENTS_PER_YEAR = {
    "annually": 1,
    "monthly": 12,
}


# =============================================================================
# Compound interest
# =============================================================================


@dataclass
class YearlyBalance:
    year: int
    balance: int
    interest: int
    contributions: int


@dataclass
class CompoundInterestInputs:
    principal: float = 10000
    annual_rate: float = 7
    years: int = 10
    compounding_frequency: str = "monthly"
    monthly_contribution: float = 500


@dataclass
class CompoundInterestResults:
    final_amount: int
    total_interest: int
    total_contributions: int
    yearly_breakdown: List[YearlyBalance] = field(default_factory=list)


def calculate_compound_interest(inputs: CompoundInterestInputs) -> CompoundInterestResults:
    """
    Compound a principal with a recurring monthly contribution.

    Interest is credited at the compounding frequency using the nominal rate
    per period; contributions are converted to an equivalent deposit per
    compounding period and added after interest.

    Args:
        inputs: Principal, annual rate (percent), years, compounding frequency
            and monthly contribution

    Returns:
        CompoundInterestResults with a row per year
    """
    require_non_negative(inputs.principal, "principal")
    require_rate(inputs.annual_rate, "annual_rate")
    require_non_negative(inputs.years, "years")
    years = require_whole(inputs.years, "years")
    require_choice(inputs.compounding_frequency, tuple(PERIODS_PER_YEAR), "compounding_frequency")
    require_non_negative(inputs.monthly_contribution, "monthly_contribution")

    periods_per_year = PERIODS_PER_YEAR[inputs.compounding_frequency]
    rate_per_period = inputs.annual_rate / 100 / periods_per_year
    deposit_per_period = inputs.monthly_contribution * 12 / periods_per_year

    balance = inputs.principal
    total_contributions = inputs.principal
    yearly_breakdown = []

    for year in range(1, years + 1):
        yearly_interest = 0.0
        yearly_contributions = 0.0

        for _ in range(periods_per_year):
            interest = balance * rate_per_period
            balance += interest + deposit_per_period
            yearly_interest += interest
            yearly_contributions += deposit_per_period

        total_contributions += yearly_contributions
        yearly_breakdown.append(
            YearlyBalance(
                year=year,
                balance=round(balance),
                interest=round(yearly_interest),
                contributions=round(yearly_contributions),
            )
        )

    return CompoundInterestResults(
        final_amount=round(balance),
        total_interest=round(balance - total_contributions),
        total_contributions=round(total_contributions),
        yearly_breakdown=yearly_breakdown,
    )


# =============================================================================
# Simple interest
# =============================================================================


@dataclass
class SimpleInterestInputs:
    principal: float = 10000
    rate: float = 5
    time: float = 3  # Years


@dataclass
class SimpleInterestResults:
    interest: float
    final_amount: float
    daily_interest: float


def calculate_simple_interest(inputs: SimpleInterestInputs) -> SimpleInterestResults:
    """Calculate simple interest I = P * r * t."""
    require_non_negative(inputs.principal, "principal")
    require_non_negative(inputs.rate, "rate")
    require_positive(inputs.time, "time")

    interest = inputs.principal * inputs.rate * inputs.time / 100
    daily_interest = interest / (inputs.time * 365)

    return SimpleInterestResults(
        interest=round(interest, 2),
        final_amount=round(inputs.principal + interest, 2),
        daily_interest=round(daily_interest, 2),
    )


# =============================================================================
# Rule of 72
# =============================================================================


@dataclass
class Rule72Inputs:
    interest_rate: float = 6
    initial_amount: float = 1000


@dataclass
class Rule72Results:
    years_to_double: float
    doubled_amount: float
    effective_rate: float
    exact_years_to_double: float  # ln 2 / ln(1 + r), for comparison with the estimate


def calculate_rule_of_72(inputs: Rule72Inputs) -> Rule72Results:
    """Estimate doubling time as 72 / rate."""
    require_positive(inputs.interest_rate, "interest_rate")
    require_non_negative(inputs.initial_amount, "initial_amount")

    years_to_double = 72 / inputs.interest_rate
    exact_years = math.log(2) / math.log(1 + inputs.interest_rate / 100)

    return Rule72Results(
        years_to_double=round(years_to_double, 2),
        doubled_amount=round(inputs.initial_amount * 2, 2),
        effective_rate=round(72 / years_to_double, 2),
        exact_years_to_double=round(exact_years, 2),
    )


# =============================================================================
# Future value
# =============================================================================


@dataclass
class FutureValueYear:
    year: int
    value: int
    contributions: int
    interest: int


@dataclass
class FutureValueInputs:
    present_value: float = 10000
    rate: float = 7
    years: int = 10
    payments: float = 500  # Amount of each recurring payment
    payment_frequency: str = "monthly"
    compounding_frequency: str = "monthly"


@dataclass
class FutureValueResults:
    future_value: int
    total_contributions: int
    total_interest: int
    timeline: List[FutureValueYear] = field(default_factory=list)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def calculate_future_value(inputs: FutureValueInputs) -> FutureValueResults:
    """
    Project a present value plus recurring payments.

    Payments are placed at evenly spaced points in the year and deposited at
    the start of the compounding period they fall in, after that period's
    interest has been credited. This keeps annual contributions equal to
    payments * payments-per-year for any combination of frequencies.
    """
    require_non_negative(inputs.present_value, "present_value")
    require_rate(inputs.rate, "rate")
    require_non_negative(inputs.years, "years")
    years = require_whole(inputs.years, "years")
    require_non_negative(inputs.payments, "payments")
    require_choice(inputs.payment_frequency, tuple(PAYMENTS_PER_YEAR), "payment_frequency")
    require_choice(inputs.compounding_frequency, tuple(PERIODS_PER_YEAR), "compounding_frequency")

    periods_per_year = PERIODS_PER_YEAR[inputs.compounding_frequency]
    payments_per_year = PAYMENTS_PER_YEAR[inputs.payment_frequency]
    rate_per_period = inputs.rate / 100 / periods_per_year

    # Number of payments landing in each compounding period of a year
    deposits = [
        _ceil_div((p + 1) * payments_per_year, periods_per_year)
        - _ceil_div(p * payments_per_year, periods_per_year)
        for p in range(periods_per_year)
    ]

    balance = inputs.present_value
    total_contributions = inputs.present_value
    timeline = []

    for year in range(1, years + 1):
        yearly_contributions = 0.0
        yearly_interest = 0.0

        for count in deposits:
            interest = balance * rate_per_period
            deposit = count * inputs.payments
            balance += interest + deposit
            yearly_interest += interest
            yearly_contributions += deposit

        total_contributions += yearly_contributions
        timeline.append(
            FutureValueYear(
                year=year,
                value=round(balance),
                contributions=round(yearly_contributions),
                interest=round(yearly_interest),
            )
        )

    return FutureValueResults(
        future_value=round(balance),
        total_contributions=round(total_contributions),
        total_interest=round(balance - total_contributions),
        timeline=timeline,
    )


# =============================================================================
# Investment growth (nominal vs real)
# =============================================================================


@dataclass
class InvestmentGrowthYear:
    year: int
    nominal: int
    real: int
    contributions: int
    taxes: int


@dataclass
class InvestmentGrowthInputs:
    initial_amount: float = 10000
    monthly_contribution: float = 500
    years: int = 20
    expected_return: float = 7
    inflation_rate: float = 2
    tax_rate: float = 25  # Applied to each month's growth


@dataclass
class InvestmentGrowthResults:
    nominal_value: int
    real_value: int
    total_contributions: int
    total_taxes: int
    yearly_breakdown: List[InvestmentGrowthYear] = field(default_factory=list)


def calculate_investment_growth(inputs: InvestmentGrowthInputs) -> InvestmentGrowthResults:
    """
    Project nominal and inflation-adjusted balances with an estimated tax drag.

    The real balance grows at (return - inflation) per month. Taxes are
    reported, not deducted from the balance.
    """
    require_non_negative(inputs.initial_amount, "initial_amount")
    require_non_negative(inputs.monthly_contribution, "monthly_contribution")
    require_non_negative(inputs.years, "years")
    years = require_whole(inputs.years, "years")
    require_rate(inputs.expected_return, "expected_return")
    require_rate(inputs.inflation_rate, "inflation_rate")
    require_between(inputs.tax_rate, 0, 100, "tax_rate")

    monthly_rate = inputs.expected_return / 100 / 12
    monthly_inflation = inputs.inflation_rate / 100 / 12

    nominal = inputs.initial_amount
    real = inputs.initial_amount
    total_contributions = inputs.initial_amount
    total_taxes = 0.0
    yearly_breakdown = []

    for year in range(1, years + 1):
        yearly_contributions = 0.0
        yearly_taxes = 0.0

        for _ in range(12):
            nominal_growth = nominal * monthly_rate
            nominal += nominal_growth + inputs.monthly_contribution

            real += real * (monthly_rate - monthly_inflation) + inputs.monthly_contribution

            yearly_contributions += inputs.monthly_contribution
            yearly_taxes += nominal_growth * inputs.tax_rate / 100

        total_contributions += yearly_contributions
        total_taxes += yearly_taxes

        yearly_breakdown.append(
            InvestmentGrowthYear(
                year=year,
                nominal=round(nominal),
                real=round(real),
                contributions=round(yearly_contributions),
                taxes=round(yearly_taxes),
            )
        )

    return InvestmentGrowthResults(
        nominal_value=round(nominal),
        real_value=round(real),
        total_contributions=round(total_contributions),
        total_taxes=round(total_taxes),
        yearly_breakdown=yearly_breakdown,
    )


# =============================================================================
# Investment
# =============================================================================


@dataclass
class MonthlyProjection:
    month: int
    balance: int


@dataclass
class InvestmentInputs:
    initial_investment: float = 10000
    monthly_contribution: float = 500
    annual_return: float = 7
    time_horizon: int = 20  # Years


@dataclass
class InvestmentResults:
    final_balance: int
    total_contributions: int
    total_earnings: int
    monthly_projections: List[MonthlyProjection] = field(default_factory=list)


def calculate_investment(inputs: InvestmentInputs) -> InvestmentResults:
    """Grow an investment with contributions made at the start of each month."""
    require_non_negative(inputs.initial_investment, "initial_investment")
    require_non_negative(inputs.monthly_contribution, "monthly_contribution")
    require_rate(inputs.annual_return, "annual_return")
    require_non_negative(inputs.time_horizon, "time_horizon")
    time_horizon = require_whole(inputs.time_horizon, "time_horizon")

    monthly_rate = inputs.annual_return / 100 / 12
    total_months = time_horizon * 12

    balance = inputs.initial_investment
    projections = []

    for month in range(1, total_months + 1):
        balance = (balance + inputs.monthly_contribution) * (1 + monthly_rate)
        projections.append(MonthlyProjection(month=month, balance=round(balance)))

    total_contributions = inputs.initial_investment + inputs.monthly_contribution * total_months

    return InvestmentResults(
        final_balance=round(balance),
        total_contributions=round(total_contributions),
        total_earnings=round(balance - total_contributions),
        monthly_projections=projections,
    )


# =============================================================================
# Retirement (401k)
# =============================================================================


@dataclass
class RetirementInputs:
    salary: float = 75000
    contribution: float = 6  # Percent of salary
    employer_match: float = 50  # Percent of employee contribution matched
    match_limit: float = 6  # Match stops at this percent of salary
    current_age: int = 30
    retirement_age: int = 65
    current_balance: float = 50000
    annual_return: float = 7


@dataclass
class RetirementResults:
    projected_balance: int
    total_contributions: int
    employer_contributions: int
    monthly_contribution: int
    years_to_retirement: int


def calculate_retirement(inputs: RetirementInputs) -> RetirementResults:
    """
    Project a 401(k) balance at retirement.

    The employer match is the smaller of employer_match% of the employee's
    contribution and match_limit% of salary.
    """
    require_non_negative(inputs.salary, "salary")
    require_between(inputs.contribution, 0, 100, "contribution")
    require_non_negative(inputs.employer_match, "employer_match")
    require_between(inputs.match_limit, 0, 100, "match_limit")
    require_non_negative(inputs.current_age, "current_age")
    require_whole(inputs.current_age, "current_age")
    require_whole(inputs.retirement_age, "retirement_age")
    require_non_negative(inputs.current_balance, "current_balance")
    require_rate(inputs.annual_return, "annual_return")

    if inputs.retirement_age <= inputs.current_age:
        raise InvalidInputError(
            "retirement_age must be greater than current_age", field="retirement_age"
        )

    years_to_retirement = int(inputs.retirement_age - inputs.current_age)
    monthly_rate = inputs.annual_return / 100 / 12
    total_months = years_to_retirement * 12

    monthly_contribution = inputs.salary * inputs.contribution / 100 / 12
    employer_monthly = min(
        monthly_contribution * inputs.employer_match / 100,
        inputs.salary * inputs.match_limit / 100 / 12,
    )

    balance = inputs.current_balance
    for _ in range(total_months):
        balance = (balance + monthly_contribution + employer_monthly) * (1 + monthly_rate)

    return RetirementResults(
        projected_balance=round(balance),
        total_contributions=round(monthly_contribution * total_months),
        employer_contributions=round(employer_monthly * total_months),
        monthly_contribution=round(monthly_contribution),
        years_to_retirement=years_to_retirement,
    )
