"""Options pricing endpoints."""

from fastapi import APIRouter

from fincalc.calculations.options import (
    BlackScholesInputs,
    BlackScholesResults,
    CoveredCallInputs,
    CoveredCallResults,
    PutCallParityInputs,
    PutCallParityResults,
    ImpliedVolatilityInputs,
    ImpliedVolatilityResults,
    calculate_black_scholes,
    calculate_covered_call,
    calculate_put_call_parity,
    calculate_implied_volatility,
)

router = APIRouter()


@router.post("/black-scholes", response_model=BlackScholesResults)
async def black_scholes_endpoint(inputs: BlackScholesInputs):
    """European option price and Greeks."""
    return calculate_black_scholes(inputs)


@router.post("/covered-call", response_model=CoveredCallResults)
async def covered_call_endpoint(inputs: CoveredCallInputs):
    return calculate_covered_call(inputs)


@router.post("/put-call-parity", response_model=PutCallParityResults)
async def put_call_parity_endpoint(inputs: PutCallParityInputs):
    return calculate_put_call_parity(inputs)


@router.post("/implied-volatility", response_model=ImpliedVolatilityResults)
async def implied_volatility_endpoint(inputs: ImpliedVolatilityInputs):
    """Implied volatility; converged is false when the solver gives up."""
    return calculate_implied_volatility(inputs)
