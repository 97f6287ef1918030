"""
Stock Market Calculations

Holding-period and annualized returns, dividend yield and reinvestment,
dollar-cost averaging, and CAPM beta.
"""

from typing import List, Optional
from dataclasses import dataclass, field
from datetime import date
from dateutil.relativedelta import relativedelta
import math

from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_rate,
    require_choice,
    require_series,
    require_same_length,
    require_nonzero_result,
    require_whole,
)
from fincalc.calculations.portfolio import mean, variance, covariance
from fincalc.errors import InvalidInputError

PAYOUTS_PER_YEAR = {
    "annual": 1,
    "semi-annual": 2,
    "quarterly": 4,
    "monthly": 12,
}


# =============================================================================
# Stock return
# =============================================================================


def _default_dividends() -> List[float]:
    return [2, 2.1, 2.2, 2.3]


@dataclass
class StockReturnInputs:
    initial_price: float = 100
    final_price: float = 150
    dividends: List[float] = field(default_factory=_default_dividends)
    holding_period: float = 4  # Years


@dataclass
class StockReturnResults:
    total_return: float
    annualized_return: float
    capital_gains: float
    dividend_income: float


def calculate_stock_return(inputs: StockReturnInputs) -> StockReturnResults:
    """
    Total and annualized (CAGR) return per share including dividends.

    Raises:
        InvalidInputError: If the holding period is not positive
    """
    require_positive(inputs.initial_price, "initial_price")
    require_non_negative(inputs.final_price, "final_price")
    require_positive(inputs.holding_period, "holding_period")
    for dividend in inputs.dividends:
        require_non_negative(dividend, "dividends")

    capital_gains = inputs.final_price - inputs.initial_price
    dividend_income = sum(inputs.dividends)
    total_return = capital_gains + dividend_income

    growth = 1 + total_return / inputs.initial_price
    annualized = (growth ** (1 / inputs.holding_period) - 1) * 100

    return StockReturnResults(
        total_return=round(total_return, 2),
        annualized_return=round(annualized, 2),
        capital_gains=round(capital_gains, 2),
        dividend_income=round(dividend_income, 2),
    )


# =============================================================================
# Dividend yield
# =============================================================================


@dataclass
class DividendYieldInputs:
    stock_price: float = 50
    annual_dividend: float = 2  # Per share
    payout_frequency: str = "quarterly"
    as_of: Optional[date] = None  # First payout date; defaults to today


@dataclass
class DividendYieldResults:
    dividend_yield: float
    monthly_income: float
    annual_income: float
    payout_schedule: List[date] = field(default_factory=list)


def calculate_dividend_yield(inputs: DividendYieldInputs) -> DividendYieldResults:
    """Dividend yield and the payout dates for the coming year."""
    require_positive(inputs.stock_price, "stock_price")
    require_non_negative(inputs.annual_dividend, "annual_dividend")
    require_choice(inputs.payout_frequency, tuple(PAYOUTS_PER_YEAR), "payout_frequency")

    start = inputs.as_of or date.today()
    payouts = PAYOUTS_PER_YEAR[inputs.payout_frequency]
    interval = 12 // payouts
    schedule = [start + relativedelta(months=interval * i) for i in range(payouts)]

    return DividendYieldResults(
        dividend_yield=round(inputs.annual_dividend / inputs.stock_price * 100, 2),
        monthly_income=round(inputs.annual_dividend / 12, 2),
        annual_income=round(inputs.annual_dividend, 2),
        payout_schedule=schedule,
    )


# =============================================================================
# Dividend reinvestment
# =============================================================================


@dataclass
class DividendYear:
    year: int
    shares: float
    dividends: float
    value: float


@dataclass
class DividendReinvestmentInputs:
    initial_investment: float = 10000
    share_price: float = 50
    annual_dividend: float = 2  # Per share
    growth_rate: float = 5  # Annual share price growth, percent
    years: int = 10


@dataclass
class DividendReinvestmentResults:
    final_value: float
    total_dividends: float
    total_shares: float
    yearly_breakdown: List[DividendYear] = field(default_factory=list)


def calculate_dividend_reinvestment(inputs: DividendReinvestmentInputs) -> DividendReinvestmentResults:
    """
    Reinvest each year's dividends at that year's grown share price.

    The per-share dividend stays fixed; the share price compounds at
    growth_rate. Share counts are rounded to three decimals for display.
    """
    require_positive(inputs.initial_investment, "initial_investment")
    require_positive(inputs.share_price, "share_price")
    require_non_negative(inputs.annual_dividend, "annual_dividend")
    require_rate(inputs.growth_rate, "growth_rate")
    require_positive(inputs.years, "years")
    years = require_whole(inputs.years, "years")

    growth = 1 + inputs.growth_rate / 100
    shares = inputs.initial_investment / inputs.share_price
    total_dividends = 0.0
    breakdown = []

    for year in range(1, years + 1):
        price = inputs.share_price * growth ** year
        dividends = shares * inputs.annual_dividend
        total_dividends += dividends
        shares += dividends / price

        breakdown.append(
            DividendYear(
                year=year,
                shares=round(shares, 3),
                dividends=round(dividends, 2),
                value=round(shares * price, 2),
            )
        )

    final_value = shares * inputs.share_price * growth ** inputs.years

    return DividendReinvestmentResults(
        final_value=round(final_value, 2),
        total_dividends=round(total_dividends, 2),
        total_shares=round(shares, 3),
        yearly_breakdown=breakdown,
    )


# =============================================================================
# Dollar-cost averaging
# =============================================================================


def _default_price_history() -> List[float]:
    return [100, 95, 105, 98, 110, 108, 115, 112, 120, 118, 125, 122]


@dataclass
class DCAInputs:
    monthly_investment: float = 500
    price_history: List[float] = field(default_factory=_default_price_history)
    years: float = 1


@dataclass
class DCAResults:
    total_invested: float
    current_value: float
    total_shares: float
    average_cost: float
    return_on_investment: float
    months_invested: int


def calculate_dca(inputs: DCAInputs) -> DCAResults:
    """
    Buy a fixed dollar amount each month at the listed prices.

    Buys stop at years * 12 months or the end of the price history,
    whichever comes first. The position is valued at the last listed price.
    """
    require_positive(inputs.monthly_investment, "monthly_investment")
    require_positive(inputs.years, "years")
    require_series(inputs.price_history, "price_history")
    for price in inputs.price_history:
        require_positive(price, "price_history")

    months = min(math.floor(inputs.years * 12), len(inputs.price_history))
    if months < 1:
        raise InvalidInputError("years must cover at least one month", field="years")

    purchases = inputs.price_history[:months]
    total_shares = sum(inputs.monthly_investment / price for price in purchases)
    total_invested = inputs.monthly_investment * months

    current_value = total_shares * inputs.price_history[-1]

    return DCAResults(
        total_invested=round(total_invested, 2),
        current_value=round(current_value, 2),
        total_shares=round(total_shares, 3),
        average_cost=round(total_invested / total_shares, 2),
        return_on_investment=round((current_value - total_invested) / total_invested * 100, 2),
        months_invested=months,
    )


# =============================================================================
# Beta
# =============================================================================


def _default_stock_returns() -> List[float]:
    return [2.5, -1.8, 3.2, -0.5, 1.7]


def _default_market_returns() -> List[float]:
    return [1.8, -1.2, 2.5, 0.3, 1.1]


@dataclass
class BetaInputs:
    stock_returns: List[float] = field(default_factory=_default_stock_returns)
    market_returns: List[float] = field(default_factory=_default_market_returns)
    risk_free_rate: float = 2.5


@dataclass
class BetaResults:
    beta: float
    correlation: float
    r_squared: float
    standard_deviation: float
    expected_return: float  # CAPM, same units as the return series


def calculate_beta(inputs: BetaInputs) -> BetaResults:
    """
    Beta of a stock against the market from paired return series.

    beta = cov(stock, market) / var(market), using population statistics.
    expected_return applies CAPM: rf + beta * (mean market return - rf).

    Raises:
        InvalidInputError: If the series are empty or differ in length
        DegenerateResultError: If either series has zero variance
    """
    require_series(inputs.stock_returns, "stock_returns", min_length=2)
    require_series(inputs.market_returns, "market_returns", min_length=2)
    require_same_length(inputs.stock_returns, inputs.market_returns, "stock_returns", "market_returns")

    market_variance = require_nonzero_result(variance(inputs.market_returns), "market return variance")
    stock_std = require_nonzero_result(math.sqrt(variance(inputs.stock_returns)), "stock return variance")
    cov = covariance(inputs.stock_returns, inputs.market_returns)

    beta = cov / market_variance
    correlation = cov / (stock_std * math.sqrt(market_variance))
    expected_return = inputs.risk_free_rate + beta * (mean(inputs.market_returns) - inputs.risk_free_rate)

    return BetaResults(
        beta=round(beta, 2),
        correlation=round(correlation, 2),
        r_squared=round(correlation ** 2, 2),
        standard_deviation=round(stock_std, 2),
        expected_return=round(expected_return, 2),
    )
