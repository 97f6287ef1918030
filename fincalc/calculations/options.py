"""
Options Pricing

Black-Scholes pricing and Greeks for European options, covered calls,
put-call parity checks and implied volatility.

Volatility and rates are whole-number percentages at the interface; time to
expiry is in years.
"""

import logging
import math
from typing import Optional
from dataclasses import dataclass

from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_choice,
)
from fincalc.errors import ConvergenceError

logger = logging.getLogger(__name__)

OPTION_TYPES = ("call", "put")

# Implied volatility solver (volatility in percent)
IV_SEED = 30.0
IV_MAX_ITERATIONS = 100
IV_TOLERANCE = 0.0001
IV_LOWER_BOUND = 1.0
IV_UPPER_BOUND = 200.0
IV_CONFIDENCE_BAND = 0.2
HISTORICAL_VOLATILITY = 20.0  # Reference market volatility for comparison

PARITY_ARBITRAGE_THRESHOLD = 0.5


def normal_cdf(x: float) -> float:
    """
    Standard normal CDF.

    Abramowitz & Stegun polynomial approximation (26.2.17), absolute error
    below 7.5e-8.
    """
    t = 1 / (1 + 0.2316419 * abs(x))
    d = 0.3989423 * math.exp(-x * x / 2)
    p = d * t * (0.3193815 + t * (-0.3565638 + t * (1.781478 + t * (-1.821256 + t * 1.330274))))
    return 1 - p if x > 0 else p


def normal_pdf(x: float) -> float:
    """Standard normal density."""
    return math.exp(-x * x / 2) / math.sqrt(2 * math.pi)


def _validate_contract(stock_price, strike_price, time_to_expiry, option_type):
    require_positive(stock_price, "stock_price")
    require_positive(strike_price, "strike_price")
    require_positive(time_to_expiry, "time_to_expiry")
    require_choice(option_type, OPTION_TYPES, "option_type")


# =============================================================================
# Black-Scholes
# =============================================================================


@dataclass
class BlackScholesInputs:
    stock_price: float = 100
    strike_price: float = 100
    time_to_expiry: float = 1  # Years
    risk_free_rate: float = 2.5
    volatility: float = 20
    option_type: str = "call"


@dataclass
class BlackScholesResults:
    option_price: float
    delta: float
    gamma: float
    theta: float  # Per year
    vega: float  # Per 1% change in volatility
    rho: float  # Per 1% change in rate


def black_scholes(inputs: BlackScholesInputs) -> BlackScholesResults:
    """
    Unrounded Black-Scholes price and Greeks.

    Args:
        inputs: Contract terms, rate and volatility (percent)

    Returns:
        BlackScholesResults with full-precision values
    """
    s = inputs.stock_price
    k = inputs.strike_price
    t = inputs.time_to_expiry
    r = inputs.risk_free_rate / 100
    sigma = inputs.volatility / 100
    sign = 1 if inputs.option_type == "call" else -1

    sqrt_t = math.sqrt(t)
    d1 = (math.log(s / k) + (r + sigma ** 2 / 2) * t) / (sigma * sqrt_t)
    d2 = d1 - sigma * sqrt_t
    discounted_strike = k * math.exp(-r * t)

    if sign == 1:
        price = s * normal_cdf(d1) - discounted_strike * normal_cdf(d2)
        delta = normal_cdf(d1)
    else:
        price = discounted_strike * normal_cdf(-d2) - s * normal_cdf(-d1)
        delta = normal_cdf(d1) - 1

    gamma = normal_pdf(d1) / (s * sigma * sqrt_t)
    theta = (-s * normal_pdf(d1) * sigma) / (2 * sqrt_t) - sign * r * discounted_strike * normal_cdf(sign * d2)
    vega = s * sqrt_t * normal_pdf(d1) / 100
    rho = sign * k * t * math.exp(-r * t) * normal_cdf(sign * d2) / 100

    return BlackScholesResults(
        option_price=price, delta=delta, gamma=gamma, theta=theta, vega=vega, rho=rho
    )


def calculate_black_scholes(inputs: BlackScholesInputs) -> BlackScholesResults:
    """Black-Scholes price and Greeks, rounded for display (gamma to 4 places)."""
    _validate_contract(inputs.stock_price, inputs.strike_price, inputs.time_to_expiry, inputs.option_type)
    require_positive(inputs.volatility, "volatility")

    exact = black_scholes(inputs)

    return BlackScholesResults(
        option_price=round(exact.option_price, 2),
        delta=round(exact.delta, 2),
        gamma=round(exact.gamma, 4),
        theta=round(exact.theta, 2),
        vega=round(exact.vega, 2),
        rho=round(exact.rho, 2),
    )


# =============================================================================
# Covered call
# =============================================================================


@dataclass
class CoveredCallInputs:
    stock_price: float = 100
    strike_price: float = 105
    premium: float = 3  # Per share
    contracts: int = 1  # 100 shares each
    days_to_expiry: int = 30


@dataclass
class CoveredCallResults:
    max_profit: float
    max_loss: float
    breakeven: float
    return_if_unchanged: float
    annualized_return: float


def calculate_covered_call(inputs: CoveredCallInputs) -> CoveredCallResults:
    """Payoff profile of owning 100 shares per contract and selling calls against them."""
    require_positive(inputs.stock_price, "stock_price")
    require_positive(inputs.strike_price, "strike_price")
    require_non_negative(inputs.premium, "premium")
    require_positive(inputs.contracts, "contracts")
    require_positive(inputs.days_to_expiry, "days_to_expiry")

    shares = inputs.contracts * 100
    max_profit = (inputs.strike_price - inputs.stock_price + inputs.premium) * shares
    max_loss = inputs.stock_price * shares
    breakeven = inputs.stock_price - inputs.premium
    return_if_unchanged = inputs.premium / inputs.stock_price * 100
    annualized_return = return_if_unchanged * 365 / inputs.days_to_expiry

    return CoveredCallResults(
        max_profit=round(max_profit, 2),
        max_loss=round(max_loss, 2),
        breakeven=round(breakeven, 2),
        return_if_unchanged=round(return_if_unchanged, 2),
        annualized_return=round(annualized_return, 2),
    )


# =============================================================================
# Put-call parity
# =============================================================================


@dataclass
class PutCallParityInputs:
    call_price: float = 5
    put_price: float = 3
    stock_price: float = 100
    strike_price: float = 100
    risk_free_rate: float = 2.5
    time_to_expiry: float = 1


@dataclass
class PutCallParityResults:
    parity_value: float
    deviation: float
    arbitrage_opportunity: bool
    recommended_action: str


def calculate_put_call_parity(inputs: PutCallParityInputs) -> PutCallParityResults:
    """
    Check C - P = S - K e^(-rT) and flag deviations above $0.50.

    parity_value is C - P - S + K e^(-rT); positive means calls are rich
    relative to puts.
    """
    require_non_negative(inputs.call_price, "call_price")
    require_non_negative(inputs.put_price, "put_price")
    require_positive(inputs.stock_price, "stock_price")
    require_positive(inputs.strike_price, "strike_price")
    require_positive(inputs.time_to_expiry, "time_to_expiry")

    pv_strike = inputs.strike_price * math.exp(-inputs.risk_free_rate / 100 * inputs.time_to_expiry)
    parity_value = inputs.call_price - inputs.put_price - inputs.stock_price + pv_strike
    deviation = abs(parity_value)
    arbitrage = deviation > PARITY_ARBITRAGE_THRESHOLD

    if not arbitrage:
        action = "No significant arbitrage opportunity"
    elif parity_value > 0:
        action = "Buy stock and put, sell call and bonds"
    else:
        action = "Sell stock and put, buy call and bonds"

    return PutCallParityResults(
        parity_value=round(parity_value, 2),
        deviation=round(deviation, 2),
        arbitrage_opportunity=arbitrage,
        recommended_action=action,
    )


# =============================================================================
# Implied volatility
# =============================================================================


@dataclass
class ImpliedVolatilityInputs:
    option_price: float = 5
    stock_price: float = 100
    strike_price: float = 100
    time_to_expiry: float = 1
    risk_free_rate: float = 2.5
    option_type: str = "call"


@dataclass
class ConfidenceInterval:
    lower: float
    upper: float


@dataclass
class ImpliedVolatilityResults:
    implied_volatility: Optional[float]  # None when the solver did not converge
    annualized_volatility: Optional[float]
    confidence_interval: Optional[ConfidenceInterval]
    historical_comparison: float
    converged: bool
    iterations: int


@dataclass
class VolatilitySolution:
    volatility: Optional[float]
    iterations: int
    converged: bool


def solve_implied_volatility(inputs: ImpliedVolatilityInputs, strict: bool = False) -> VolatilitySolution:
    """
    Find the volatility (percent) whose Black-Scholes price matches the market price.

    Newton-Raphson seeded at 30%. Each step divides the price error by vega
    (price change per 1 volatility point) using unrounded values. Gives up
    after 100 iterations, when vega vanishes, or when the estimate leaves
    [1%, 200%].

    Args:
        inputs: Market option price and contract terms
        strict: Raise ConvergenceError instead of returning an unconverged solution

    Returns:
        VolatilitySolution; volatility is None unless converged

    Raises:
        ConvergenceError: If strict and no solution was found
    """
    volatility = IV_SEED
    reason = f"no solution within {IV_MAX_ITERATIONS} iterations"

    for iteration in range(1, IV_MAX_ITERATIONS + 1):
        model = black_scholes(
            BlackScholesInputs(
                stock_price=inputs.stock_price,
                strike_price=inputs.strike_price,
                time_to_expiry=inputs.time_to_expiry,
                risk_free_rate=inputs.risk_free_rate,
                volatility=volatility,
                option_type=inputs.option_type,
            )
        )

        diff = model.option_price - inputs.option_price
        if abs(diff) < IV_TOLERANCE:
            return VolatilitySolution(volatility=volatility, iterations=iteration, converged=True)

        if model.vega == 0:
            reason = "vega vanished"
            break

        volatility -= diff / model.vega
        if volatility < IV_LOWER_BOUND or volatility > IV_UPPER_BOUND:
            reason = f"estimate left [{IV_LOWER_BOUND:g}%, {IV_UPPER_BOUND:g}%]"
            break

    logger.warning(f"Implied volatility did not converge: {reason} (price={inputs.option_price})")
    if strict:
        raise ConvergenceError(f"implied volatility did not converge: {reason}", field="option_price")
    return VolatilitySolution(volatility=None, iterations=iteration, converged=False)


def calculate_implied_volatility(inputs: ImpliedVolatilityInputs) -> ImpliedVolatilityResults:
    """
    Implied volatility with a +/-20% band around the estimate.

    Non-convergence is reported through converged=False with the volatility
    fields set to None.
    """
    _validate_contract(inputs.stock_price, inputs.strike_price, inputs.time_to_expiry, inputs.option_type)
    require_positive(inputs.option_price, "option_price")

    solution = solve_implied_volatility(inputs)

    if not solution.converged:
        return ImpliedVolatilityResults(
            implied_volatility=None,
            annualized_volatility=None,
            confidence_interval=None,
            historical_comparison=HISTORICAL_VOLATILITY,
            converged=False,
            iterations=solution.iterations,
        )

    volatility = solution.volatility
    band = volatility * IV_CONFIDENCE_BAND

    return ImpliedVolatilityResults(
        implied_volatility=round(volatility, 2),
        annualized_volatility=round(volatility, 2),
        confidence_interval=ConfidenceInterval(
            lower=round(max(0.0, volatility - band), 2),
            upper=round(volatility + band, 2),
        ),
        historical_comparison=HISTORICAL_VOLATILITY,
        converged=True,
        iterations=solution.iterations,
    )
