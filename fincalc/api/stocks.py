"""Stock market endpoints."""

from fastapi import APIRouter

from fincalc.calculations.stocks import (
    StockReturnInputs,
    StockReturnResults,
    DividendYieldInputs,
    DividendYieldResults,
    DividendReinvestmentInputs,
    DividendReinvestmentResults,
    DCAInputs,
    DCAResults,
    BetaInputs,
    BetaResults,
    calculate_stock_return,
    calculate_dividend_yield,
    calculate_dividend_reinvestment,
    calculate_dca,
    calculate_beta,
)

router = APIRouter()


@router.post("/stock-return", response_model=StockReturnResults)
async def stock_return_endpoint(inputs: StockReturnInputs):
    return calculate_stock_return(inputs)


@router.post("/dividend-yield", response_model=DividendYieldResults)
async def dividend_yield_endpoint(inputs: DividendYieldInputs):
    return calculate_dividend_yield(inputs)


@router.post("/dividend-reinvestment", response_model=DividendReinvestmentResults)
async def dividend_reinvestment_endpoint(inputs: DividendReinvestmentInputs):
    return calculate_dividend_reinvestment(inputs)


@router.post("/dca", response_model=DCAResults)
async def dca_endpoint(inputs: DCAInputs):
    """Dollar-cost averaging over a monthly price history."""
    return calculate_dca(inputs)


@router.post("/beta", response_model=BetaResults)
async def beta_endpoint(inputs: BetaInputs):
    return calculate_beta(inputs)
