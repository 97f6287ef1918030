"""
Spending Calculations

Cost of living comparisons, subscription totals, trip savings plans and
monthly budgets.
"""

import logging
import math
from typing import Dict, List, Optional
from dataclasses import dataclass, field
from datetime import date, timedelta

from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_choice,
)
from fincalc.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Relative cost of living; cities not listed use 1.0
CITY_MULTIPLIERS = {
    "New York": 1.8,
    "San Francisco": 1.9,
    "Los Angeles": 1.5,
    "Chicago": 1.2,
    "Houston": 1.0,
    "Phoenix": 1.1,
    "Philadelphia": 1.3,
    "Dallas": 1.1,
    "Austin": 1.2,
    "Denver": 1.3,
}

BILLING_CYCLES = ("monthly", "yearly")
WEEKS_PER_MONTH = 4.33


def _share(part: float, whole: float) -> int:
    """Whole-number percentage of part in whole; 0 when whole is 0."""
    if whole == 0:
        return 0
    return round(part / whole * 100)


# =============================================================================
# Cost of living
# =============================================================================


@dataclass
class CostOfLivingInputs:
    current_city: str = "Houston"
    new_city: str = "San Francisco"
    current_income: float = 75000
    current_rent: float = 1500
    current_utilities: float = 200
    current_groceries: float = 500
    current_transportation: float = 400


@dataclass
class CostOfLivingResults:
    required_income: int
    rent_difference: int
    utilities_difference: int
    groceries_difference: int
    transportation_difference: int
    total_difference: int
    percentage_difference: int


def city_multiplier(city: str) -> float:
    multiplier = CITY_MULTIPLIERS.get(city)
    if multiplier is None:
        logger.debug(f"No cost of living data for {city!r}, using 1.0")
        return 1.0
    return multiplier


def calculate_cost_of_living(inputs: CostOfLivingInputs) -> CostOfLivingResults:
    """Scale income and monthly costs by the ratio of the two city multipliers."""
    require_non_negative(inputs.current_income, "current_income")
    require_non_negative(inputs.current_rent, "current_rent")
    require_non_negative(inputs.current_utilities, "current_utilities")
    require_non_negative(inputs.current_groceries, "current_groceries")
    require_non_negative(inputs.current_transportation, "current_transportation")

    ratio = city_multiplier(inputs.new_city) / city_multiplier(inputs.current_city)
    change = ratio - 1

    rent = inputs.current_rent * change
    utilities = inputs.current_utilities * change
    groceries = inputs.current_groceries * change
    transportation = inputs.current_transportation * change

    return CostOfLivingResults(
        required_income=round(inputs.current_income * ratio),
        rent_difference=round(rent),
        utilities_difference=round(utilities),
        groceries_difference=round(groceries),
        transportation_difference=round(transportation),
        total_difference=round(rent + utilities + groceries + transportation),
        percentage_difference=round(change * 100),
    )


# =============================================================================
# Subscriptions
# =============================================================================


@dataclass
class Subscription:
    name: str
    cost: float
    billing_cycle: str = "monthly"
    category: str = "Other"


def _default_subscriptions() -> List[Subscription]:
    return [
        Subscription(name="Netflix", cost=15.99, category="Streaming"),
        Subscription(name="Spotify", cost=9.99, category="Music"),
    ]


@dataclass
class SubscriptionInputs:
    subscriptions: List[Subscription] = field(default_factory=_default_subscriptions)


@dataclass
class SubscriptionCategory:
    category: str
    monthly_amount: int
    yearly_amount: int
    percentage: int


@dataclass
class SubscriptionResults:
    monthly_total: int
    yearly_total: int
    category_breakdown: List[SubscriptionCategory] = field(default_factory=list)


def calculate_subscriptions(inputs: SubscriptionInputs) -> SubscriptionResults:
    """Total subscription spend per month and per year, grouped by category."""
    totals: Dict[str, List[float]] = {}

    for sub in inputs.subscriptions:
        require_non_negative(sub.cost, f"subscriptions[{sub.name}].cost")
        require_choice(sub.billing_cycle, BILLING_CYCLES, f"subscriptions[{sub.name}].billing_cycle")

        if sub.billing_cycle == "yearly":
            monthly, yearly = sub.cost / 12, sub.cost
        else:
            monthly, yearly = sub.cost, sub.cost * 12

        category = totals.setdefault(sub.category, [0.0, 0.0])
        category[0] += monthly
        category[1] += yearly

    monthly_total = sum(monthly for monthly, _ in totals.values())
    yearly_total = sum(yearly for _, yearly in totals.values())

    breakdown = [
        SubscriptionCategory(
            category=name,
            monthly_amount=round(monthly),
            yearly_amount=round(yearly),
            percentage=_share(yearly, yearly_total),
        )
        for name, (monthly, yearly) in totals.items()
    ]

    return SubscriptionResults(
        monthly_total=round(monthly_total),
        yearly_total=round(yearly_total),
        category_breakdown=breakdown,
    )


# =============================================================================
# Vacation savings
# =============================================================================


@dataclass
class VacationSavingsInputs:
    destination: str = "Hawaii"
    travel_cost: float = 1200
    accommodation_cost: float = 1500
    activities: float = 800
    food: float = 600
    misc_expenses: float = 400
    current_savings: float = 1000
    start_date: Optional[date] = None  # Defaults to 180 days after as_of
    as_of: Optional[date] = None  # Defaults to today


@dataclass
class VacationBreakdown:
    travel: int
    accommodation: int
    activities: int
    food: int
    misc: int


@dataclass
class VacationSavingsResults:
    total_cost: int
    monthly_required: int
    weeks_until_trip: int
    savings_progress: int
    breakdown: VacationBreakdown


def calculate_vacation_savings(inputs: VacationSavingsInputs) -> VacationSavingsResults:
    """
    Monthly saving needed before a trip.

    Weeks until the trip are rounded up; the weekly requirement is converted
    to a monthly one at 4.33 weeks per month.

    Raises:
        InvalidInputError: If the trip does not start after as_of
    """
    for name in ("travel_cost", "accommodation_cost", "activities", "food", "misc_expenses"):
        require_non_negative(getattr(inputs, name), name)
    require_non_negative(inputs.current_savings, "current_savings")

    as_of = inputs.as_of or date.today()
    start_date = inputs.start_date or as_of + timedelta(days=180)

    days_until_trip = (start_date - as_of).days
    if days_until_trip <= 0:
        raise InvalidInputError("start_date must be in the future", field="start_date")
    weeks_until_trip = math.ceil(days_until_trip / 7)

    total_cost = (
        inputs.travel_cost
        + inputs.accommodation_cost
        + inputs.activities
        + inputs.food
        + inputs.misc_expenses
    )
    remaining = max(0.0, total_cost - inputs.current_savings)
    monthly_required = remaining / weeks_until_trip * WEEKS_PER_MONTH

    return VacationSavingsResults(
        total_cost=round(total_cost),
        monthly_required=round(monthly_required),
        weeks_until_trip=weeks_until_trip,
        savings_progress=_share(inputs.current_savings, total_cost),
        breakdown=VacationBreakdown(
            travel=round(inputs.travel_cost),
            accommodation=round(inputs.accommodation_cost),
            activities=round(inputs.activities),
            food=round(inputs.food),
            misc=round(inputs.misc_expenses),
        ),
    )


# =============================================================================
# Entertainment budget
# =============================================================================


def _default_entertainment() -> Dict[str, float]:
    return {
        "dining": 400,
        "movies": 50,
        "concerts": 100,
        "sports": 100,
        "hobbies": 150,
        "streaming": 50,
        "other": 100,
    }


@dataclass
class EntertainmentBudgetInputs:
    monthly_income: float = 5000
    categories: Dict[str, float] = field(default_factory=_default_entertainment)


@dataclass
class CategoryShare:
    category: str
    amount: float
    percentage: int


@dataclass
class EntertainmentBudgetResults:
    total_budget: int
    percentage_of_income: int
    category_breakdown: List[CategoryShare] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def calculate_entertainment_budget(inputs: EntertainmentBudgetInputs) -> EntertainmentBudgetResults:
    """Entertainment spend as a share of income, with simple recommendations."""
    require_positive(inputs.monthly_income, "monthly_income")
    for name, amount in inputs.categories.items():
        require_non_negative(amount, f"categories.{name}")

    total_budget = sum(inputs.categories.values())
    percentage_of_income = total_budget / inputs.monthly_income * 100

    breakdown = [
        CategoryShare(category=name, amount=amount, percentage=_share(amount, total_budget))
        for name, amount in inputs.categories.items()
    ]

    recommendations = []
    if percentage_of_income > 30:
        recommendations.append("Consider reducing entertainment spending")
    if inputs.categories.get("streaming", 0) > total_budget * 0.3:
        recommendations.append("Review streaming subscriptions for potential savings")
    if inputs.categories.get("dining", 0) > total_budget * 0.4:
        recommendations.append("Look for ways to reduce dining out expenses")

    return EntertainmentBudgetResults(
        total_budget=round(total_budget),
        percentage_of_income=round(percentage_of_income),
        category_breakdown=breakdown,
        recommendations=recommendations,
    )


# =============================================================================
# Monthly expenses
# =============================================================================


@dataclass
class Expense:
    name: str
    amount: float
    category: str = "Other"
    due_date: Optional[int] = None  # Day of month
    is_recurring: bool = True


def _default_expenses() -> List[Expense]:
    return [
        Expense(name="Rent", category="Housing", amount=1500, due_date=1),
        Expense(name="Car Payment", category="Transportation", amount=400, due_date=15),
    ]


@dataclass
class MonthlyExpenseInputs:
    income: float = 5000
    expenses: List[Expense] = field(default_factory=_default_expenses)


@dataclass
class CategoryTotal:
    category: str
    total: float
    percentage: int


@dataclass
class UpcomingExpense:
    name: str
    amount: float
    due_date: int


@dataclass
class MonthlyExpenseResults:
    total_expenses: int
    remaining_income: int
    expenses_by_category: List[CategoryTotal] = field(default_factory=list)
    upcoming_expenses: List[UpcomingExpense] = field(default_factory=list)


def calculate_monthly_expenses(inputs: MonthlyExpenseInputs) -> MonthlyExpenseResults:
    """Group monthly expenses by category and list dated bills in due order."""
    require_non_negative(inputs.income, "income")
    for expense in inputs.expenses:
        require_non_negative(expense.amount, f"expenses[{expense.name}].amount")
        if expense.due_date is not None and not 1 <= expense.due_date <= 31:
            raise InvalidInputError(
                "due_date must be a day of the month (1-31)",
                field=f"expenses[{expense.name}].due_date",
            )

    total_expenses = sum(expense.amount for expense in inputs.expenses)

    by_category: Dict[str, float] = {}
    for expense in inputs.expenses:
        by_category[expense.category] = by_category.get(expense.category, 0) + expense.amount

    upcoming = sorted(
        (
            UpcomingExpense(name=expense.name, amount=expense.amount, due_date=expense.due_date)
            for expense in inputs.expenses
            if expense.due_date
        ),
        key=lambda item: item.due_date,
    )

    return MonthlyExpenseResults(
        total_expenses=round(total_expenses),
        remaining_income=round(inputs.income - total_expenses),
        expenses_by_category=[
            CategoryTotal(category=name, total=total, percentage=_share(total, total_expenses))
            for name, total in by_category.items()
        ],
        upcoming_expenses=upcoming,
    )
