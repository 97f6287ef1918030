"""Interest and investment growth endpoints."""

from fastapi import APIRouter

from fincalc.calculations.growth import (
    CompoundInterestInputs,
    CompoundInterestResults,
    SimpleInterestInputs,
    SimpleInterestResults,
    Rule72Inputs,
    Rule72Results,
    FutureValueInputs,
    FutureValueResults,
    InvestmentGrowthInputs,
    InvestmentGrowthResults,
    InvestmentInputs,
    InvestmentResults,
    RetirementInputs,
    RetirementResults,
    calculate_compound_interest,
    calculate_simple_interest,
    calculate_rule_of_72,
    calculate_future_value,
    calculate_investment_growth,
    calculate_investment,
    calculate_retirement,
)

router = APIRouter()


@router.post("/compound-interest", response_model=CompoundInterestResults)
async def compound_interest_endpoint(inputs: CompoundInterestInputs):
    return calculate_compound_interest(inputs)


@router.post("/simple-interest", response_model=SimpleInterestResults)
async def simple_interest_endpoint(inputs: SimpleInterestInputs):
    return calculate_simple_interest(inputs)


@router.post("/rule-of-72", response_model=Rule72Results)
async def rule_of_72_endpoint(inputs: Rule72Inputs):
    return calculate_rule_of_72(inputs)


@router.post("/future-value", response_model=FutureValueResults)
async def future_value_endpoint(inputs: FutureValueInputs):
    return calculate_future_value(inputs)


@router.post("/investment-growth", response_model=InvestmentGrowthResults)
async def investment_growth_endpoint(inputs: InvestmentGrowthInputs):
    """Nominal, inflation-adjusted and after-tax growth."""
    return calculate_investment_growth(inputs)


@router.post("/investment", response_model=InvestmentResults)
async def investment_endpoint(inputs: InvestmentInputs):
    return calculate_investment(inputs)


@router.post("/retirement", response_model=RetirementResults)
async def retirement_endpoint(inputs: RetirementInputs):
    return calculate_retirement(inputs)
