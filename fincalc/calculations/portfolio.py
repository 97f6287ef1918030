"""
Portfolio Statistics

Return-series statistics (mean, population variance and covariance) and the
portfolio calculators built on them: asset allocation, rebalancing, Sharpe
ratio, correlation and portfolio risk.

Return series are percentages per period (2.5 means 2.5%).
"""

import math
from typing import Dict, List, Sequence
from dataclasses import dataclass, field
import numpy as np

from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_between,
    require_choice,
    require_series,
    require_same_length,
    require_nonzero_result,
)
from fincalc.calculations.options import normal_cdf
from fincalc.errors import InvalidInputError

SHARPE_PERIODS_PER_YEAR = {
    "daily": 252,
    "monthly": 12,
    "annual": 1,
}

VAR_95_Z_SCORE = 1.645
LARGE_PORTFOLIO_THRESHOLD = 1_000_000
ALLOCATION_TOLERANCE = 0.01  # Percentage points


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean of a series."""
    return float(np.mean(np.asarray(values, dtype=float)))


def variance(values: Sequence[float]) -> float:
    """Population variance (divides by n)."""
    return float(np.var(np.asarray(values, dtype=float)))


def covariance(first: Sequence[float], second: Sequence[float]) -> float:
    """Population covariance of two equal-length series."""
    matrix = np.cov(np.asarray(first, dtype=float), np.asarray(second, dtype=float), bias=True)
    return float(matrix[0, 1])


# =============================================================================
# Asset allocation
# =============================================================================


@dataclass
class AssetAllocationInputs:
    risk_tolerance: float = 60  # 0-100, starting stock percentage
    investment_horizon: float = 20  # Years
    current_age: int = 35
    retirement_age: int = 65
    portfolio_value: float = 100000


@dataclass
class AssetAllocationResults:
    stocks: int
    bonds: int
    cash: int
    other: int
    recommendations: List[str] = field(default_factory=list)


def _largest_remainder(values: Sequence[float]) -> List[int]:
    """Scale values to whole percentages that sum to exactly 100."""
    total = sum(values)
    shares = [value * 100 / total for value in values]
    whole = [math.floor(share) for share in shares]
    leftover = 100 - sum(whole)
    by_remainder = sorted(
        range(len(shares)), key=lambda i: shares[i] - whole[i], reverse=True
    )
    for i in by_remainder[:leftover]:
        whole[i] += 1
    return whole


def calculate_asset_allocation(inputs: AssetAllocationInputs) -> AssetAllocationResults:
    """
    Suggest a stock/bond/cash/other split.

    Starts from the risk tolerance as the stock share, then shifts toward
    bonds and cash for short horizons and near retirement, and carves out
    alternatives for portfolios above $1M. Each bucket is clamped to 0-100
    and the split is normalized to whole percentages summing to 100.
    """
    require_between(inputs.risk_tolerance, 0, 100, "risk_tolerance")
    require_non_negative(inputs.investment_horizon, "investment_horizon")
    require_non_negative(inputs.current_age, "current_age")
    require_non_negative(inputs.retirement_age, "retirement_age")
    require_non_negative(inputs.portfolio_value, "portfolio_value")

    stocks = inputs.risk_tolerance
    bonds = 90 - inputs.risk_tolerance
    cash = 10.0
    other = 0.0

    if inputs.investment_horizon > 15:
        stocks += 5
        bonds -= 5
    elif inputs.investment_horizon < 5:
        stocks -= 10
        bonds += 5
        cash += 5

    if inputs.retirement_age - inputs.current_age < 10:
        stocks -= 10
        bonds += 5
        cash += 5

    if inputs.portfolio_value > LARGE_PORTFOLIO_THRESHOLD:
        other = 10.0
        stocks -= 5
        bonds -= 5

    buckets = [max(0.0, min(100.0, value)) for value in (stocks, bonds, cash, other)]
    # cash never drops below 10, so the total is positive
    stocks, bonds, cash, other = _largest_remainder(buckets)

    recommendations = []
    if stocks > 70:
        recommendations.append(
            "Consider diversifying into more defensive stocks given the high equity allocation."
        )
    if bonds < 20 and inputs.current_age > 50:
        recommendations.append(
            "Consider increasing bond allocation for more stability as you near retirement."
        )
    if cash > 15:
        recommendations.append(
            "Consider investing some cash holdings to protect against inflation."
        )
    if other > 0:
        recommendations.append(
            "Consider alternative investments like REITs or commodities for diversification."
        )

    return AssetAllocationResults(
        stocks=stocks, bonds=bonds, cash=cash, other=other, recommendations=recommendations
    )


# =============================================================================
# Rebalancing
# =============================================================================


@dataclass
class Holding:
    value: float
    price: float


def _default_targets() -> Dict[str, float]:
    return {"stocks": 60, "bonds": 30, "cash": 10}


def _default_holdings() -> Dict[str, Holding]:
    return {
        "stocks": Holding(value=70000, price=100),
        "bonds": Holding(value=30000, price=1000),
        "cash": Holding(value=8000, price=1),
    }


@dataclass
class PortfolioRebalancingInputs:
    target_allocations: Dict[str, float] = field(default_factory=_default_targets)
    current_holdings: Dict[str, Holding] = field(default_factory=_default_holdings)


@dataclass
class Trade:
    asset: str
    action: str  # buy or sell
    shares: int
    amount: float


@dataclass
class PortfolioRebalancingResults:
    total_value: float
    trades: List[Trade] = field(default_factory=list)
    current_allocations: Dict[str, int] = field(default_factory=dict)
    new_allocations: Dict[str, float] = field(default_factory=dict)


def calculate_portfolio_rebalancing(inputs: PortfolioRebalancingInputs) -> PortfolioRebalancingResults:
    """
    List the trades that move current holdings to the target allocation.

    Trades that round to zero shares are dropped.

    Raises:
        InvalidInputError: If a target has no matching holding or the targets
            do not add up to 100%
        DegenerateResultError: If the portfolio is worth nothing
    """
    for asset, holding in inputs.current_holdings.items():
        require_non_negative(holding.value, f"current_holdings.{asset}.value")
        require_positive(holding.price, f"current_holdings.{asset}.price")
    for asset, target in inputs.target_allocations.items():
        require_between(target, 0, 100, f"target_allocations.{asset}")
        if asset not in inputs.current_holdings:
            raise InvalidInputError(
                f"no current holding for target asset {asset!r}", field=f"target_allocations.{asset}"
            )
    if abs(sum(inputs.target_allocations.values()) - 100) > ALLOCATION_TOLERANCE:
        raise InvalidInputError("target allocations must add up to 100%", field="target_allocations")

    total_value = sum(holding.value for holding in inputs.current_holdings.values())
    require_nonzero_result(total_value, "total portfolio value")

    current_allocations = {
        asset: round(holding.value / total_value * 100)
        for asset, holding in inputs.current_holdings.items()
    }

    trades = []
    for asset, target in inputs.target_allocations.items():
        holding = inputs.current_holdings[asset]
        difference = total_value * target / 100 - holding.value
        shares = round(abs(difference) / holding.price)
        if shares > 0:
            trades.append(
                Trade(
                    asset=asset,
                    action="buy" if difference > 0 else "sell",
                    shares=shares,
                    amount=round(abs(difference), 2),
                )
            )

    return PortfolioRebalancingResults(
        total_value=round(total_value, 2),
        trades=trades,
        current_allocations=current_allocations,
        new_allocations=dict(inputs.target_allocations),
    )


# =============================================================================
# Sharpe ratio
# =============================================================================


def _default_sharpe_returns() -> List[float]:
    return [12.5, -5.2, 8.7, -2.1, 15.3]


@dataclass
class SharpeRatioInputs:
    returns: List[float] = field(default_factory=_default_sharpe_returns)
    risk_free_rate: float = 2.5
    period: str = "monthly"


@dataclass
class SharpeRatioResults:
    sharpe_ratio: float
    excess_return: float
    standard_deviation: float
    annualized_sharpe: float


def calculate_sharpe_ratio(inputs: SharpeRatioInputs) -> SharpeRatioResults:
    """
    Sharpe ratio of a return series, annualized by sqrt(periods per year).

    Raises:
        DegenerateResultError: If every return is identical (zero volatility)
    """
    require_series(inputs.returns, "returns", min_length=2)
    require_choice(inputs.period, tuple(SHARPE_PERIODS_PER_YEAR), "period")

    average = mean(inputs.returns)
    standard_deviation = math.sqrt(variance(inputs.returns))
    require_nonzero_result(standard_deviation, "standard deviation of returns")

    excess_return = average - inputs.risk_free_rate
    sharpe_ratio = excess_return / standard_deviation
    annualized = sharpe_ratio * math.sqrt(SHARPE_PERIODS_PER_YEAR[inputs.period])

    return SharpeRatioResults(
        sharpe_ratio=round(sharpe_ratio, 2),
        excess_return=round(excess_return, 2),
        standard_deviation=round(standard_deviation, 2),
        annualized_sharpe=round(annualized, 2),
    )


# =============================================================================
# Correlation
# =============================================================================


def _default_asset1_returns() -> List[float]:
    return [2.5, -1.8, 3.2, -0.5, 1.7]


def _default_asset2_returns() -> List[float]:
    return [1.8, -1.2, 2.5, 0.3, 1.1]


@dataclass
class CorrelationInputs:
    asset1_returns: List[float] = field(default_factory=_default_asset1_returns)
    asset2_returns: List[float] = field(default_factory=_default_asset2_returns)
    period: str = "monthly"


@dataclass
class CorrelationResults:
    correlation: float
    r_squared: float  # Percent of variance explained
    covariance: float
    significance: float  # Percent confidence the correlation is non-zero


def correlation_coefficient(first: Sequence[float], second: Sequence[float]) -> float:
    """
    Pearson correlation of two paired series.

    Raises:
        DegenerateResultError: If either series has zero variance
    """
    spread = math.sqrt(variance(first) * variance(second))
    require_nonzero_result(spread, "variance of a return series")
    return covariance(first, second) / spread


def calculate_correlation(inputs: CorrelationInputs) -> CorrelationResults:
    """
    Correlation, R-squared and covariance of two return series.

    Significance uses the t statistic r * sqrt((n - 2) / (1 - r^2)) against the
    normal distribution; a perfect correlation is 100% significant.
    """
    require_series(inputs.asset1_returns, "asset1_returns", min_length=3)
    require_series(inputs.asset2_returns, "asset2_returns", min_length=3)
    require_same_length(inputs.asset1_returns, inputs.asset2_returns, "asset1_returns", "asset2_returns")
    require_choice(inputs.period, tuple(SHARPE_PERIODS_PER_YEAR), "period")

    correlation = correlation_coefficient(inputs.asset1_returns, inputs.asset2_returns)
    n = len(inputs.asset1_returns)

    if abs(correlation) >= 1:
        significance = 100.0
    else:
        t = abs(correlation * math.sqrt((n - 2) / (1 - correlation ** 2)))
        significance = (1 - 2 * (1 - normal_cdf(t))) * 100

    return CorrelationResults(
        correlation=round(correlation, 2),
        r_squared=round(correlation ** 2 * 100, 2),
        covariance=round(covariance(inputs.asset1_returns, inputs.asset2_returns), 2),
        significance=round(significance, 2),
    )


# =============================================================================
# Portfolio risk
# =============================================================================


@dataclass
class Asset:
    name: str
    weight: float  # Relative; normalized to sum to 1
    returns: List[float] = field(default_factory=list)


def _default_assets() -> List[Asset]:
    return [
        Asset(name="Stock A", weight=40, returns=[12, -5, 8, -2, 15]),
        Asset(name="Stock B", weight=30, returns=[8, -3, 10, 4, 7]),
        Asset(name="Bond Fund", weight=30, returns=[4, 3, 5, 4, 3]),
    ]


@dataclass
class PortfolioRiskInputs:
    assets: List[Asset] = field(default_factory=_default_assets)
    risk_free_rate: float = 2.5


@dataclass
class PortfolioRiskResults:
    portfolio_return: float
    portfolio_risk: float
    sharpe_ratio: float
    var_five_percent: float
    max_drawdown: float


def max_drawdown(period_returns: Sequence[float]) -> float:
    """
    Largest peak-to-trough decline, in percent, of the growth of $1.

    The wealth index starts at 1 before the first period and compounds each
    percentage return.
    """
    wealth = np.cumprod(1 + np.asarray(period_returns, dtype=float) / 100)
    wealth = np.concatenate(([1.0], wealth))
    peaks = np.maximum.accumulate(wealth)
    drawdowns = (peaks - wealth) / peaks * 100
    return float(drawdowns.max())


def calculate_portfolio_risk(inputs: PortfolioRiskInputs) -> PortfolioRiskResults:
    """
    Portfolio return, volatility, Sharpe ratio, 95% VaR and max drawdown.

    Volatility is sqrt(w' C w) with C the population covariance matrix of the
    asset return series and w the normalized weights.

    Args:
        inputs: Assets (name, weight, per-period returns) and risk-free rate

    Returns:
        PortfolioRiskResults, all values in percent

    Raises:
        InvalidInputError: If there are no assets, weights do not add up to a
            positive total, or return series differ in length
        DegenerateResultError: If the portfolio has zero volatility
    """
    if not inputs.assets:
        raise InvalidInputError("at least one asset is required", field="assets")

    first = inputs.assets[0]
    for asset in inputs.assets:
        require_non_negative(asset.weight, f"assets[{asset.name}].weight")
        require_series(asset.returns, f"assets[{asset.name}].returns", min_length=2)
        require_same_length(first.returns, asset.returns, f"assets[{first.name}].returns", f"assets[{asset.name}].returns")

    weights = np.array([asset.weight for asset in inputs.assets], dtype=float)
    total_weight = weights.sum()
    if total_weight <= 0:
        raise InvalidInputError("asset weights must add up to more than zero", field="assets")
    weights = weights / total_weight

    returns = np.array([asset.returns for asset in inputs.assets], dtype=float)
    covariance_matrix = np.atleast_2d(np.cov(returns, bias=True))

    portfolio_return = float(weights @ returns.mean(axis=1))
    portfolio_risk = math.sqrt(max(0.0, float(weights @ covariance_matrix @ weights)))
    require_nonzero_result(portfolio_risk, "portfolio volatility")

    sharpe_ratio = (portfolio_return - inputs.risk_free_rate) / portfolio_risk
    value_at_risk = VAR_95_Z_SCORE * portfolio_risk
    drawdown = max_drawdown(weights @ returns)

    return PortfolioRiskResults(
        portfolio_return=round(portfolio_return, 2),
        portfolio_risk=round(portfolio_risk, 2),
        sharpe_ratio=round(sharpe_ratio, 2),
        var_five_percent=round(value_at_risk, 2),
        max_drawdown=round(drawdown, 2),
    )
