"""Debt payoff endpoints."""

from fastapi import APIRouter

from fincalc.calculations.debt import (
    CreditCardInputs,
    CreditCardResults,
    LoanPayoffInputs,
    LoanPayoffResults,
    DebtStrategyInputs,
    DebtStrategyResults,
    DebtToIncomeInputs,
    DebtToIncomeResults,
    calculate_credit_card,
    calculate_loan_payoff,
    calculate_debt_snowball,
    calculate_debt_avalanche,
    calculate_debt_to_income,
)

router = APIRouter()


@router.post("/credit-card", response_model=CreditCardResults)
async def credit_card_endpoint(inputs: CreditCardInputs):
    """Months and interest to pay off a card; paid_off is false when the cap is hit."""
    return calculate_credit_card(inputs)


@router.post("/loan-payoff", response_model=LoanPayoffResults)
async def loan_payoff_endpoint(inputs: LoanPayoffInputs):
    return calculate_loan_payoff(inputs)


@router.post("/snowball", response_model=DebtStrategyResults)
async def snowball_endpoint(inputs: DebtStrategyInputs):
    return calculate_debt_snowball(inputs)


@router.post("/avalanche", response_model=DebtStrategyResults)
async def avalanche_endpoint(inputs: DebtStrategyInputs):
    return calculate_debt_avalanche(inputs)


@router.post("/debt-to-income", response_model=DebtToIncomeResults)
async def debt_to_income_endpoint(inputs: DebtToIncomeInputs):
    return calculate_debt_to_income(inputs)
