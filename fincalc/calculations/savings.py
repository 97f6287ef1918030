"""
Savings and Budgeting Calculations

Sinking-fund deposits, budgets, emergency funds and college savings.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field

from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_rate,
    require_between,
)
from fincalc.errors import InvalidInputError

# Rainy day fund covers this many months of the target share of income
RAINY_DAY_MONTHS = 6


def required_monthly_deposit(
    target: float, initial: float, annual_rate: float, months: int
) -> float:
    """
    Monthly deposit that grows `initial` into `target` after `months`.

    Uses the sinking fund payment (target - initial*(1+r)^n) * r / ((1+r)^n - 1)
    with a linear fallback at a zero rate. Negative when the initial balance
    alone already reaches the target.
    """
    monthly_rate = annual_rate / 100 / 12

    if monthly_rate == 0:
        return (target - initial) / months

    growth = (1 + monthly_rate) ** months
    return (target - initial * growth) * monthly_rate / (growth - 1)


def future_balance(initial: float, deposit: float, annual_rate: float, months: int) -> float:
    """Balance after `months` end-of-month deposits with monthly compounding."""
    monthly_rate = annual_rate / 100 / 12

    if monthly_rate == 0:
        return initial + deposit * months

    growth = (1 + monthly_rate) ** months
    return initial * growth + deposit * (growth - 1) / monthly_rate


# =============================================================================
# Savings / savings goal
# =============================================================================


@dataclass
class SavingsInputs:
    target_amount: float = 50000
    timeframe: float = 5  # Years
    initial_savings: float = 5000
    interest_rate: float = 2


@dataclass
class SavingsResults:
    monthly_required: int
    total_contributions: int
    total_interest: int
    final_balance: int


def calculate_savings(inputs: SavingsInputs) -> SavingsResults:
    """
    Calculate the monthly deposit needed to reach a savings target.

    When the initial savings already grow past the target, no deposit is
    required and final_balance reports where the savings end up.
    """
    require_positive(inputs.target_amount, "target_amount")
    require_positive(inputs.timeframe, "timeframe")
    require_non_negative(inputs.initial_savings, "initial_savings")
    require_rate(inputs.interest_rate, "interest_rate")

    total_months = round(inputs.timeframe * 12)
    if total_months < 1:
        raise InvalidInputError("timeframe must be at least one month", field="timeframe")

    monthly_required = max(
        0.0,
        required_monthly_deposit(
            inputs.target_amount, inputs.initial_savings, inputs.interest_rate, total_months
        ),
    )
    final_balance = future_balance(
        inputs.initial_savings, monthly_required, inputs.interest_rate, total_months
    )
    total_contributions = monthly_required * total_months
    total_interest = final_balance - total_contributions - inputs.initial_savings

    return SavingsResults(
        monthly_required=round(monthly_required),
        total_contributions=round(total_contributions),
        total_interest=round(total_interest),
        final_balance=round(final_balance),
    )


def calculate_savings_goal(inputs: SavingsInputs) -> SavingsResults:
    """Savings goal planner; same sinking-fund math as calculate_savings."""
    return calculate_savings(inputs)


# =============================================================================
# Budget planner
# =============================================================================


def _default_budget_expenses() -> Dict[str, float]:
    return {
        "housing": 1500,
        "utilities": 200,
        "food": 600,
        "transportation": 400,
        "healthcare": 300,
        "entertainment": 200,
        "other": 300,
    }


@dataclass
class BudgetLine:
    category: str
    amount: float
    percentage: float


@dataclass
class BudgetPlannerInputs:
    monthly_income: float = 5000
    expenses: Dict[str, float] = field(default_factory=_default_budget_expenses)


@dataclass
class BudgetPlannerResults:
    total_expenses: float
    remaining_income: float
    expense_breakdown: List[BudgetLine] = field(default_factory=list)


def calculate_budget_planner(inputs: BudgetPlannerInputs) -> BudgetPlannerResults:
    """Total monthly expenses and each category's share of income."""
    require_positive(inputs.monthly_income, "monthly_income")
    for name, amount in inputs.expenses.items():
        require_non_negative(amount, f"expenses.{name}")

    total_expenses = sum(inputs.expenses.values())

    breakdown = [
        BudgetLine(
            category=category,
            amount=amount,
            percentage=round(amount / inputs.monthly_income * 100, 1),
        )
        for category, amount in inputs.expenses.items()
    ]

    return BudgetPlannerResults(
        total_expenses=round(total_expenses, 2),
        remaining_income=round(inputs.monthly_income - total_expenses, 2),
        expense_breakdown=breakdown,
    )


# =============================================================================
# Emergency fund
# =============================================================================


@dataclass
class EmergencyFundInputs:
    monthly_expenses: float = 3000
    desired_months: float = 6
    current_savings: float = 5000
    months_to_save: int = 12


@dataclass
class EmergencyFundResults:
    target_amount: int
    additional_needed: int
    monthly_contribution: int
    time_to_reach: int  # Months; 0 when the fund is already complete


def calculate_emergency_fund(inputs: EmergencyFundInputs) -> EmergencyFundResults:
    """Size an emergency fund and the monthly saving needed to fill it."""
    require_non_negative(inputs.monthly_expenses, "monthly_expenses")
    require_non_negative(inputs.desired_months, "desired_months")
    require_non_negative(inputs.current_savings, "current_savings")
    require_positive(inputs.months_to_save, "months_to_save")

    target_amount = inputs.monthly_expenses * inputs.desired_months
    additional_needed = max(0.0, target_amount - inputs.current_savings)
    monthly_contribution = additional_needed / inputs.months_to_save
    time_to_reach = inputs.months_to_save if additional_needed > 0 else 0

    return EmergencyFundResults(
        target_amount=round(target_amount),
        additional_needed=round(additional_needed),
        monthly_contribution=round(monthly_contribution),
        time_to_reach=time_to_reach,
    )


# =============================================================================
# College savings
# =============================================================================


@dataclass
class CollegeSavingsInputs:
    child_age: int = 5
    college_start_age: int = 18
    years_in_college: int = 4
    annual_cost: float = 25000
    current_savings: float = 5000
    expected_return: float = 6
    monthly_budget: Optional[float] = None  # What the family can actually save each month


@dataclass
class CollegeSavingsResults:
    total_cost: int
    monthly_contribution: int
    projected_savings: int
    shortfall: int


def calculate_college_savings(inputs: CollegeSavingsInputs) -> CollegeSavingsResults:
    """
    Plan monthly college savings.

    monthly_contribution is the deposit needed to cover the full cost by the
    start of college. projected_savings uses monthly_budget when given (and
    the required contribution otherwise), so shortfall shows the gap left by
    a smaller budget.
    """
    require_non_negative(inputs.child_age, "child_age")
    require_positive(inputs.years_in_college, "years_in_college")
    require_non_negative(inputs.annual_cost, "annual_cost")
    require_non_negative(inputs.current_savings, "current_savings")
    require_rate(inputs.expected_return, "expected_return")
    if inputs.monthly_budget is not None:
        require_non_negative(inputs.monthly_budget, "monthly_budget")

    if inputs.college_start_age <= inputs.child_age:
        raise InvalidInputError(
            "college_start_age must be greater than child_age", field="college_start_age"
        )

    total_months = (inputs.college_start_age - inputs.child_age) * 12
    total_cost = inputs.annual_cost * inputs.years_in_college

    monthly_contribution = max(
        0.0,
        required_monthly_deposit(
            total_cost, inputs.current_savings, inputs.expected_return, total_months
        ),
    )

    deposit = monthly_contribution if inputs.monthly_budget is None else inputs.monthly_budget
    projected = future_balance(inputs.current_savings, deposit, inputs.expected_return, total_months)

    return CollegeSavingsResults(
        total_cost=round(total_cost),
        monthly_contribution=round(monthly_contribution),
        projected_savings=round(projected),
        shortfall=round(max(0.0, total_cost - projected)),
    )


# =============================================================================
# Rainy day fund
# =============================================================================


@dataclass
class RainyDayInputs:
    monthly_income: float = 5000
    target_percentage: float = 20  # Percent of monthly income to set aside
    current_savings: float = 2000
    timeframe: float = 1  # Years


@dataclass
class RainyDayResults:
    target_amount: int
    monthly_contribution: int
    time_to_reach: float
    progress_percentage: float


def calculate_rainy_day(inputs: RainyDayInputs) -> RainyDayResults:
    """Target six months of a share of income and the saving rate to get there."""
    require_positive(inputs.monthly_income, "monthly_income")
    require_between(inputs.target_percentage, 0, 100, "target_percentage")
    require_positive(inputs.target_percentage, "target_percentage")
    require_non_negative(inputs.current_savings, "current_savings")
    require_positive(inputs.timeframe, "timeframe")

    target_amount = inputs.monthly_income * inputs.target_percentage / 100 * RAINY_DAY_MONTHS
    remaining = max(0.0, target_amount - inputs.current_savings)
    monthly_contribution = remaining / (inputs.timeframe * 12)
    progress = inputs.current_savings / target_amount * 100

    return RainyDayResults(
        target_amount=round(target_amount),
        monthly_contribution=round(monthly_contribution),
        time_to_reach=inputs.timeframe,
        progress_percentage=round(progress, 1),
    )
