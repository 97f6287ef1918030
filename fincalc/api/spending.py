"""Spending endpoints."""

from fastapi import APIRouter

from fincalc.calculations.spending import (
    CostOfLivingInputs,
    CostOfLivingResults,
    SubscriptionInputs,
    SubscriptionResults,
    VacationSavingsInputs,
    VacationSavingsResults,
    EntertainmentBudgetInputs,
    EntertainmentBudgetResults,
    MonthlyExpenseInputs,
    MonthlyExpenseResults,
    calculate_cost_of_living,
    calculate_subscriptions,
    calculate_vacation_savings,
    calculate_entertainment_budget,
    calculate_monthly_expenses,
)

router = APIRouter()


@router.post("/cost-of-living", response_model=CostOfLivingResults)
async def cost_of_living_endpoint(inputs: CostOfLivingInputs):
    return calculate_cost_of_living(inputs)


@router.post("/subscriptions", response_model=SubscriptionResults)
async def subscriptions_endpoint(inputs: SubscriptionInputs):
    return calculate_subscriptions(inputs)


@router.post("/vacation-savings", response_model=VacationSavingsResults)
async def vacation_savings_endpoint(inputs: VacationSavingsInputs):
    return calculate_vacation_savings(inputs)


@router.post("/entertainment-budget", response_model=EntertainmentBudgetResults)
async def entertainment_budget_endpoint(inputs: EntertainmentBudgetInputs):
    return calculate_entertainment_budget(inputs)


@router.post("/monthly-expenses", response_model=MonthlyExpenseResults)
async def monthly_expenses_endpoint(inputs: MonthlyExpenseInputs):
    return calculate_monthly_expenses(inputs)
