"""Mortgage calculator endpoints."""

from fastapi import APIRouter

from fincalc.calculations.mortgage import (
    MortgageInputs,
    MortgageResults,
    MortgagePaymentInputs,
    MortgagePaymentResults,
    RefinanceInputs,
    RefinanceResults,
    HomeAffordabilityInputs,
    HomeAffordabilityResults,
    InterestOnlyInputs,
    InterestOnlyResults,
    ARMvsFixedInputs,
    ARMvsFixedResults,
    ClosingCostInputs,
    ClosingCostResults,
    calculate_mortgage,
    calculate_mortgage_payment,
    calculate_refinance,
    calculate_home_affordability,
    calculate_interest_only,
    calculate_arm_vs_fixed,
    calculate_closing_costs,
)

router = APIRouter()


@router.post("/mortgage", response_model=MortgageResults)
async def mortgage_endpoint(inputs: MortgageInputs):
    """Monthly payment and lifetime totals for a fixed-rate mortgage."""
    return calculate_mortgage(inputs)


@router.post("/payment", response_model=MortgagePaymentResults)
async def mortgage_payment_endpoint(inputs: MortgagePaymentInputs):
    """Principal, interest, taxes and insurance breakdown."""
    return calculate_mortgage_payment(inputs)


@router.post("/refinance", response_model=RefinanceResults)
async def refinance_endpoint(inputs: RefinanceInputs):
    return calculate_refinance(inputs)


@router.post("/affordability", response_model=HomeAffordabilityResults)
async def affordability_endpoint(inputs: HomeAffordabilityInputs):
    return calculate_home_affordability(inputs)


@router.post("/interest-only", response_model=InterestOnlyResults)
async def interest_only_endpoint(inputs: InterestOnlyInputs):
    return calculate_interest_only(inputs)


@router.post("/arm-vs-fixed", response_model=ARMvsFixedResults)
async def arm_vs_fixed_endpoint(inputs: ARMvsFixedInputs):
    """Year-by-year ARM rate path compared with a fixed-rate loan."""
    return calculate_arm_vs_fixed(inputs)


@router.post("/closing-costs", response_model=ClosingCostResults)
async def closing_costs_endpoint(inputs: ClosingCostInputs):
    return calculate_closing_costs(inputs)
