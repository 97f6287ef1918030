"""Portfolio endpoints."""

from fastapi import APIRouter

from fincalc.calculations.portfolio import (
    AssetAllocationInputs,
    AssetAllocationResults,
    PortfolioRebalancingInputs,
    PortfolioRebalancingResults,
    SharpeRatioInputs,
    SharpeRatioResults,
    CorrelationInputs,
    CorrelationResults,
    PortfolioRiskInputs,
    PortfolioRiskResults,
    calculate_asset_allocation,
    calculate_portfolio_rebalancing,
    calculate_sharpe_ratio,
    calculate_correlation,
    calculate_portfolio_risk,
)

router = APIRouter()


@router.post("/asset-allocation", response_model=AssetAllocationResults)
async def asset_allocation_endpoint(inputs: AssetAllocationInputs):
    return calculate_asset_allocation(inputs)


@router.post("/rebalancing", response_model=PortfolioRebalancingResults)
async def rebalancing_endpoint(inputs: PortfolioRebalancingInputs):
    return calculate_portfolio_rebalancing(inputs)


@router.post("/sharpe-ratio", response_model=SharpeRatioResults)
async def sharpe_ratio_endpoint(inputs: SharpeRatioInputs):
    return calculate_sharpe_ratio(inputs)


@router.post("/correlation", response_model=CorrelationResults)
async def correlation_endpoint(inputs: CorrelationInputs):
    return calculate_correlation(inputs)


@router.post("/risk", response_model=PortfolioRiskResults)
async def portfolio_risk_endpoint(inputs: PortfolioRiskInputs):
    """Volatility, Sharpe ratio, 95% VaR and max drawdown of a weighted portfolio."""
    return calculate_portfolio_risk(inputs)
