"""
Income and Payroll Tax Calculations

Flat-rate estimates only: federal and state income tax use single effective
rates, and payroll taxes use the published rates with their wage bases.
"""

from dataclasses import dataclass

from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_between,
)

# Payroll tax constants
IRS_MILEAGE_RATE = 0.655  # 2023 standard mileage rate, $/mile
SE_SOCIAL_SECURITY_RATE = 0.124
SE_SOCIAL_SECURITY_WAGE_BASE = 160200
SE_MEDICARE_RATE = 0.029
SE_INCOME_TAX_ESTIMATE = 0.15

EMPLOYEE_SOCIAL_SECURITY_RATE = 0.062
EMPLOYEE_SOCIAL_SECURITY_WAGE_BASE = 147000
EMPLOYEE_MEDICARE_RATE = 0.0145

FEDERAL_TAX_RATE = 0.22
STATE_TAX_RATE = 0.06
ALLOWANCE_AMOUNT = 4300

WORK_DAYS_PER_WEEK = 5


def _employee_payroll_taxes(annual_income: float):
    """Monthly Social Security (capped at the wage base) and Medicare."""
    social_security = min(annual_income, EMPLOYEE_SOCIAL_SECURITY_WAGE_BASE) * EMPLOYEE_SOCIAL_SECURITY_RATE / 12
    medicare = annual_income * EMPLOYEE_MEDICARE_RATE / 12
    return social_security, medicare


# =============================================================================
# Salary
# =============================================================================


@dataclass
class SalaryInputs:
    hourly_rate: float = 25
    hours_per_week: float = 40
    weeks_per_year: float = 52


@dataclass
class SalaryResults:
    annual_salary: int
    monthly_salary: int
    biweekly_salary: int
    weekly_pay: int
    daily_pay: int


def calculate_salary(inputs: SalaryInputs) -> SalaryResults:
    """Convert an hourly rate into annual, monthly, biweekly, weekly and daily pay."""
    require_non_negative(inputs.hourly_rate, "hourly_rate")
    require_between(inputs.hours_per_week, 0, 168, "hours_per_week")
    require_between(inputs.weeks_per_year, 0, 52, "weeks_per_year")

    weekly_pay = inputs.hourly_rate * inputs.hours_per_week
    annual_salary = weekly_pay * inputs.weeks_per_year

    return SalaryResults(
        annual_salary=round(annual_salary),
        monthly_salary=round(annual_salary / 12),
        biweekly_salary=round(weekly_pay * 2),
        weekly_pay=round(weekly_pay),
        daily_pay=round(weekly_pay / WORK_DAYS_PER_WEEK),
    )


# =============================================================================
# Self-employment tax
# =============================================================================


@dataclass
class SelfEmploymentInputs:
    net_earnings: float = 75000
    expenses: float = 15000
    other_income: float = 0
    business_miles: float = 5000
    home_office_percent: float = 15


@dataclass
class SelfEmploymentResults:
    self_employment_tax: int
    social_security_tax: int
    medicare_tax: int
    taxable_income: int
    estimated_quarterly_tax: int
    deductions: int


def calculate_self_employment_tax(inputs: SelfEmploymentInputs) -> SelfEmploymentResults:
    """
    Estimate self-employment tax and quarterly estimated payments.

    Deductions are business expenses, the standard mileage deduction and the
    home-office share of net earnings. Social Security applies up to the
    wage base; the quarterly estimate adds a flat income tax estimate.

    Args:
        inputs: Net earnings, expenses, other income, business miles and
            home office percentage

    Returns:
        SelfEmploymentResults with whole-dollar amounts
    """
    require_non_negative(inputs.net_earnings, "net_earnings")
    require_non_negative(inputs.expenses, "expenses")
    require_non_negative(inputs.other_income, "other_income")
    require_non_negative(inputs.business_miles, "business_miles")
    require_between(inputs.home_office_percent, 0, 100, "home_office_percent")

    mileage_deduction = inputs.business_miles * IRS_MILEAGE_RATE
    home_office_deduction = inputs.net_earnings * inputs.home_office_percent / 100
    total_deductions = inputs.expenses + mileage_deduction + home_office_deduction

    taxable_income = max(0.0, inputs.net_earnings - total_deductions + inputs.other_income)

    social_security_tax = min(taxable_income, SE_SOCIAL_SECURITY_WAGE_BASE) * SE_SOCIAL_SECURITY_RATE
    medicare_tax = taxable_income * SE_MEDICARE_RATE
    self_employment_tax = social_security_tax + medicare_tax

    estimated_income_tax = taxable_income * SE_INCOME_TAX_ESTIMATE
    estimated_quarterly_tax = (self_employment_tax + estimated_income_tax) / 4

    return SelfEmploymentResults(
        self_employment_tax=round(self_employment_tax),
        social_security_tax=round(social_security_tax),
        medicare_tax=round(medicare_tax),
        taxable_income=round(taxable_income),
        estimated_quarterly_tax=round(estimated_quarterly_tax),
        deductions=round(total_deductions),
    )


# =============================================================================
# Net income
# =============================================================================


@dataclass
class NetIncomeInputs:
    gross_income: float = 75000  # Annual
    retirement_401k: float = 5  # Percent of gross
    health_insurance: float = 200  # Monthly
    other_deductions: float = 0  # Monthly


@dataclass
class NetIncomeResults:
    gross_pay: int
    federal_tax: int
    state_tax: int
    social_security: int
    medicare: int
    retirement_401k: int
    health_insurance: int
    other_deductions: int
    net_pay: int


def calculate_net_income(inputs: NetIncomeInputs) -> NetIncomeResults:
    """
    Monthly take-home pay after taxes and payroll deductions.

    Income taxes apply to gross income less the 401(k) contribution; payroll
    taxes apply to the full gross.
    """
    require_non_negative(inputs.gross_income, "gross_income")
    require_between(inputs.retirement_401k, 0, 100, "retirement_401k")
    require_non_negative(inputs.health_insurance, "health_insurance")
    require_non_negative(inputs.other_deductions, "other_deductions")

    monthly_gross = inputs.gross_income / 12
    annual_retirement = inputs.gross_income * inputs.retirement_401k / 100
    taxable_income = inputs.gross_income - annual_retirement

    federal_tax = taxable_income * FEDERAL_TAX_RATE / 12
    state_tax = taxable_income * STATE_TAX_RATE / 12
    social_security, medicare = _employee_payroll_taxes(inputs.gross_income)
    retirement = annual_retirement / 12

    total_deductions = (
        federal_tax
        + state_tax
        + social_security
        + medicare
        + retirement
        + inputs.health_insurance
        + inputs.other_deductions
    )

    return NetIncomeResults(
        gross_pay=round(monthly_gross),
        federal_tax=round(federal_tax),
        state_tax=round(state_tax),
        social_security=round(social_security),
        medicare=round(medicare),
        retirement_401k=round(retirement),
        health_insurance=round(inputs.health_insurance),
        other_deductions=round(inputs.other_deductions),
        net_pay=round(monthly_gross - total_deductions),
    )


# =============================================================================
# Tax withholding
# =============================================================================


@dataclass
class TaxWithholdingInputs:
    annual_salary: float = 75000
    allowances: int = 2
    additional_withholding: float = 0  # Monthly


@dataclass
class TaxWithholdingResults:
    federal_withholding: int
    state_withholding: int
    social_security: int
    medicare: int
    total_withholding: int
    net_pay: int


def calculate_tax_withholding(inputs: TaxWithholdingInputs) -> TaxWithholdingResults:
    """Monthly paycheck withholding; each allowance shelters a fixed amount from federal tax."""
    require_non_negative(inputs.annual_salary, "annual_salary")
    require_non_negative(inputs.allowances, "allowances")
    require_non_negative(inputs.additional_withholding, "additional_withholding")

    # Allowances cannot push federal withholding below zero
    federal = max(0.0, inputs.annual_salary * FEDERAL_TAX_RATE - inputs.allowances * ALLOWANCE_AMOUNT) / 12
    state = inputs.annual_salary * STATE_TAX_RATE / 12
    social_security, medicare = _employee_payroll_taxes(inputs.annual_salary)

    total = federal + state + social_security + medicare + inputs.additional_withholding

    return TaxWithholdingResults(
        federal_withholding=round(federal),
        state_withholding=round(state),
        social_security=round(social_security),
        medicare=round(medicare),
        total_withholding=round(total),
        net_pay=round(inputs.annual_salary / 12 - total),
    )
