"""Income and payroll tax endpoints."""

from fastapi import APIRouter

from fincalc.calculations.income import (
    SalaryInputs,
    SalaryResults,
    SelfEmploymentInputs,
    SelfEmploymentResults,
    NetIncomeInputs,
    NetIncomeResults,
    TaxWithholdingInputs,
    TaxWithholdingResults,
    calculate_salary,
    calculate_self_employment_tax,
    calculate_net_income,
    calculate_tax_withholding,
)

router = APIRouter()


@router.post("/salary", response_model=SalaryResults)
async def salary_endpoint(inputs: SalaryInputs):
    return calculate_salary(inputs)


@router.post("/self-employment-tax", response_model=SelfEmploymentResults)
async def self_employment_tax_endpoint(inputs: SelfEmploymentInputs):
    return calculate_self_employment_tax(inputs)


@router.post("/net-income", response_model=NetIncomeResults)
async def net_income_endpoint(inputs: NetIncomeInputs):
    """Monthly take-home pay."""
    return calculate_net_income(inputs)


@router.post("/tax-withholding", response_model=TaxWithholdingResults)
async def tax_withholding_endpoint(inputs: TaxWithholdingInputs):
    return calculate_tax_withholding(inputs)
