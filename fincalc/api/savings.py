"""Savings and budgeting endpoints."""

from fastapi import APIRouter

from fincalc.calculations.savings import (
    SavingsInputs,
    SavingsResults,
    BudgetPlannerInputs,
    BudgetPlannerResults,
    EmergencyFundInputs,
    EmergencyFundResults,
    CollegeSavingsInputs,
    CollegeSavingsResults,
    RainyDayInputs,
    RainyDayResults,
    calculate_savings,
    calculate_savings_goal,
    calculate_budget_planner,
    calculate_emergency_fund,
    calculate_college_savings,
    calculate_rainy_day,
)

router = APIRouter()


@router.post("/savings", response_model=SavingsResults)
async def savings_endpoint(inputs: SavingsInputs):
    """Monthly deposit needed to reach a savings target."""
    return calculate_savings(inputs)


@router.post("/savings-goal", response_model=SavingsResults)
async def savings_goal_endpoint(inputs: SavingsInputs):
    return calculate_savings_goal(inputs)


@router.post("/budget-planner", response_model=BudgetPlannerResults)
async def budget_planner_endpoint(inputs: BudgetPlannerInputs):
    return calculate_budget_planner(inputs)


@router.post("/emergency-fund", response_model=EmergencyFundResults)
async def emergency_fund_endpoint(inputs: EmergencyFundInputs):
    return calculate_emergency_fund(inputs)


@router.post("/college-savings", response_model=CollegeSavingsResults)
async def college_savings_endpoint(inputs: CollegeSavingsInputs):
    return calculate_college_savings(inputs)


@router.post("/rainy-day", response_model=RainyDayResults)
async def rainy_day_endpoint(inputs: RainyDayInputs):
    return calculate_rainy_day(inputs)
