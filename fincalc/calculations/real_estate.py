"""
Real Estate Investment Calculations

Rent-vs-buy, rental returns, appreciation and operating expense analysis for
residential investment property.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field

from fincalc.calculations.amortization import calculate_payment
from fincalc.calculations.timevalue import calculate_npv
from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_rate,
    require_between,
    require_nonzero_result,
    require_whole,
)
from fincalc.errors import InvalidInputError

# Rental ROI assumes this much appreciation when computing total return
ASSUMED_APPRECIATION_RATE = 0.03

# Cap rate calculator's financing assumption for cash-on-cash return
CAP_RATE_DOWN_PAYMENT = 0.20
CAP_RATE_LOAN_RATE = 4.5
CAP_RATE_LOAN_YEARS = 30


def _title(category: str) -> str:
    """propertyTax -> PropertyTax, matching how categories are displayed."""
    return category[:1].upper() + category[1:]


@dataclass
class ExpenseLine:
    category: str
    annual: int
    monthly: Optional[int] = None
    percentage: int = 0


# =============================================================================
# Rent vs buy
# =============================================================================


@dataclass
class RentVsBuyInputs:
    home_price: float = 500000
    down_payment: float = 100000
    interest_rate: float = 4.5
    property_tax: float = 6000  # Annual
    insurance: float = 1800  # Annual
    maintenance: float = 3000  # Annual
    monthly_rent: float = 2500
    rent_increase: float = 3
    home_appreciation: float = 3
    timeframe: int = 10  # Years
    discount_rate: float = 3  # Used to present-value both cost streams


@dataclass
class RentVsBuyResults:
    buying_costs: int
    renting_costs: int
    net_difference: int
    break_even_year: Optional[int]  # None when renting stays cheaper for the whole timeframe
    buying_equity: int
    buying_costs_pv: int
    renting_costs_pv: int


def calculate_rent_vs_buy(inputs: RentVsBuyInputs) -> RentVsBuyResults:
    """
    Compare cumulative costs of buying (30-year mortgage) against renting.

    Buying costs start with the down payment and add mortgage, taxes,
    insurance and maintenance each year. Renting costs escalate by
    rent_increase every year. Both yearly streams are also discounted at
    discount_rate for a present-value comparison.
    """
    require_positive(inputs.home_price, "home_price")
    require_non_negative(inputs.down_payment, "down_payment")
    require_non_negative(inputs.interest_rate, "interest_rate")
    require_non_negative(inputs.property_tax, "property_tax")
    require_non_negative(inputs.insurance, "insurance")
    require_non_negative(inputs.maintenance, "maintenance")
    require_non_negative(inputs.monthly_rent, "monthly_rent")
    require_rate(inputs.rent_increase, "rent_increase")
    require_rate(inputs.home_appreciation, "home_appreciation")
    require_positive(inputs.timeframe, "timeframe")
    timeframe = require_whole(inputs.timeframe, "timeframe")
    require_rate(inputs.discount_rate, "discount_rate")

    if inputs.down_payment > inputs.home_price:
        raise InvalidInputError("down_payment cannot exceed home_price", field="down_payment")

    loan_amount = inputs.home_price - inputs.down_payment
    monthly_payment = calculate_payment(loan_amount, inputs.interest_rate, 30 * 12)
    yearly_ownership = (
        monthly_payment * 12 + inputs.property_tax + inputs.insurance + inputs.maintenance
    )

    buying_costs = inputs.down_payment
    renting_costs = 0.0
    current_rent = inputs.monthly_rent
    home_value = inputs.home_price
    break_even_year = None

    buying_stream = [inputs.down_payment]
    renting_stream = [0.0]

    for year in range(1, timeframe + 1):
        buying_costs += yearly_ownership
        buying_stream.append(yearly_ownership)

        yearly_rent = current_rent * 12
        renting_costs += yearly_rent
        renting_stream.append(yearly_rent)
        current_rent *= 1 + inputs.rent_increase / 100

        home_value *= 1 + inputs.home_appreciation / 100

        if break_even_year is None and renting_costs > buying_costs:
            break_even_year = year

    buying_equity = home_value - loan_amount

    return RentVsBuyResults(
        buying_costs=round(buying_costs),
        renting_costs=round(renting_costs),
        net_difference=round(renting_costs - buying_costs),
        break_even_year=break_even_year,
        buying_equity=round(buying_equity),
        buying_costs_pv=round(calculate_npv(buying_stream, inputs.discount_rate)),
        renting_costs_pv=round(calculate_npv(renting_stream, inputs.discount_rate)),
    )


# =============================================================================
# Rental ROI
# =============================================================================


def _default_rental_expenses() -> Dict[str, float]:
    return {
        "mortgage": 1200,
        "tax": 250,
        "insurance": 100,
        "utilities": 150,
        "maintenance": 200,
        "management": 200,
        "other": 100,
    }


@dataclass
class RentalROIInputs:
    purchase_price: float = 300000
    down_payment: float = 60000
    closing_costs: float = 5000
    repair_costs: float = 10000
    monthly_rent: float = 2500
    monthly_expenses: Dict[str, float] = field(default_factory=_default_rental_expenses)
    vacancy: float = 5  # Percent of gross rent


@dataclass
class RentalROIResults:
    cash_flow: int
    net_operating_income: int
    cap_rate: float
    cash_on_cash_return: float
    total_roi: float


def calculate_rental_roi(inputs: RentalROIInputs) -> RentalROIResults:
    """
    Calculate yearly returns on a rental property.

    monthly_expenses may contain a "mortgage" entry; it is counted in the
    operating expense total and subtracted again as debt service.
    """
    require_positive(inputs.purchase_price, "purchase_price")
    require_non_negative(inputs.down_payment, "down_payment")
    require_non_negative(inputs.closing_costs, "closing_costs")
    require_non_negative(inputs.repair_costs, "repair_costs")
    require_non_negative(inputs.monthly_rent, "monthly_rent")
    require_between(inputs.vacancy, 0, 100, "vacancy")
    for name, amount in inputs.monthly_expenses.items():
        require_non_negative(amount, f"monthly_expenses.{name}")

    total_investment = inputs.down_payment + inputs.closing_costs + inputs.repair_costs
    require_nonzero_result(total_investment, "total cash invested")

    yearly_rent = inputs.monthly_rent * 12
    effective_gross_income = yearly_rent * (1 - inputs.vacancy / 100)
    yearly_expenses = sum(amount * 12 for amount in inputs.monthly_expenses.values())

    noi = effective_gross_income - yearly_expenses
    cash_flow = noi - inputs.monthly_expenses.get("mortgage", 0) * 12
    cap_rate = noi / inputs.purchase_price * 100
    cash_on_cash = cash_flow / total_investment * 100
    total_roi = (cash_flow + inputs.purchase_price * ASSUMED_APPRECIATION_RATE) / total_investment * 100

    return RentalROIResults(
        cash_flow=round(cash_flow),
        net_operating_income=round(noi),
        cap_rate=round(cap_rate, 1),
        cash_on_cash_return=round(cash_on_cash, 1),
        total_roi=round(total_roi, 1),
    )


# =============================================================================
# Property appreciation
# =============================================================================


@dataclass
class Improvement:
    year: int
    cost: float
    value_add: float


@dataclass
class AppreciationYear:
    year: int
    value: int
    appreciation: int
    improvements: float


def _default_improvements() -> List[Improvement]:
    return [
        Improvement(year=1, cost=15000, value_add=20000),
        Improvement(year=3, cost=25000, value_add=35000),
    ]


@dataclass
class PropertyAppreciationInputs:
    purchase_price: float = 500000
    annual_appreciation: float = 3
    years_to_hold: int = 10
    improvements: List[Improvement] = field(default_factory=_default_improvements)


@dataclass
class PropertyAppreciationResults:
    future_value: int
    total_appreciation: int
    annualized_return: float
    total_improvements: float
    year_by_year: List[AppreciationYear] = field(default_factory=list)


def calculate_property_appreciation(
    inputs: PropertyAppreciationInputs,
) -> PropertyAppreciationResults:
    """
    Project property value with market appreciation plus improvement value-add.

    Each year the value compounds first, then that year's improvements add
    their value_add. annualized_return is the CAGR from purchase price.
    """
    require_positive(inputs.purchase_price, "purchase_price")
    require_rate(inputs.annual_appreciation, "annual_appreciation")
    require_positive(inputs.years_to_hold, "years_to_hold")
    years_to_hold = require_whole(inputs.years_to_hold, "years_to_hold")
    for improvement in inputs.improvements:
        require_non_negative(improvement.cost, "improvements.cost")

    current_value = inputs.purchase_price
    total_improvements = 0.0
    year_by_year = []

    for year in range(1, years_to_hold + 1):
        year_cost = sum(imp.cost for imp in inputs.improvements if imp.year == year)
        year_value_add = sum(imp.value_add for imp in inputs.improvements if imp.year == year)

        total_improvements += year_cost
        current_value *= 1 + inputs.annual_appreciation / 100
        current_value += year_value_add

        year_by_year.append(
            AppreciationYear(
                year=year,
                value=round(current_value),
                appreciation=round(current_value - inputs.purchase_price),
                improvements=year_cost,
            )
        )

    require_nonzero_result(max(current_value, 0.0), "projected property value")
    annualized_return = (
        (current_value / inputs.purchase_price) ** (1 / inputs.years_to_hold) - 1
    ) * 100

    return PropertyAppreciationResults(
        future_value=round(current_value),
        total_appreciation=round(current_value - inputs.purchase_price),
        annualized_return=round(annualized_return, 1),
        total_improvements=round(total_improvements, 2),
        year_by_year=year_by_year,
    )


# =============================================================================
# Landlord expenses
# =============================================================================


@dataclass
class MortgageExpense:
    payment: float = 1500  # Monthly
    enabled: bool = True


def _default_landlord_expenses() -> Dict[str, float]:
    return {
        "propertyTax": 3600,
        "insurance": 1200,
        "utilities": 1800,
        "maintenance": 2400,
        "propertyManagement": 2400,
        "marketing": 600,
        "legal": 500,
        "other": 1000,
    }


@dataclass
class LandlordExpenseInputs:
    monthly_rent: float = 2000
    property_value: float = 300000
    mortgage: MortgageExpense = field(default_factory=MortgageExpense)
    expenses: Dict[str, float] = field(default_factory=_default_landlord_expenses)  # Annual
    vacancy: float = 5


@dataclass
class LandlordExpenseResults:
    monthly_expenses: int
    annual_expenses: int
    net_operating_income: int
    cash_flow: int
    expense_ratio: float
    expense_breakdown: List[ExpenseLine] = field(default_factory=list)


def calculate_landlord_expenses(inputs: LandlordExpenseInputs) -> LandlordExpenseResults:
    """
    Summarize a landlord's annual operating expenses and resulting cash flow.

    annual_expenses and NOI exclude the mortgage; monthly_expenses and the
    expense ratio include it when the mortgage is enabled.
    """
    require_positive(inputs.monthly_rent, "monthly_rent")
    require_non_negative(inputs.property_value, "property_value")
    require_between(inputs.vacancy, 0, 100, "vacancy")
    require_non_negative(inputs.mortgage.payment, "mortgage.payment")
    for name, amount in inputs.expenses.items():
        require_non_negative(amount, f"expenses.{name}")

    annual_gross = inputs.monthly_rent * 12
    effective_gross_income = annual_gross * (1 - inputs.vacancy / 100)
    require_nonzero_result(effective_gross_income, "effective gross income")

    operating_expenses = sum(inputs.expenses.values())
    debt_service = inputs.mortgage.payment * 12 if inputs.mortgage.enabled else 0.0
    total_expenses = operating_expenses + debt_service

    noi = effective_gross_income - operating_expenses
    cash_flow = noi - debt_service
    expense_ratio = total_expenses / effective_gross_income * 100

    breakdown = [
        ExpenseLine(
            category=_title(category),
            monthly=round(annual / 12),
            annual=round(annual),
            percentage=round(annual / operating_expenses * 100) if operating_expenses else 0,
        )
        for category, annual in inputs.expenses.items()
    ]

    return LandlordExpenseResults(
        monthly_expenses=round(total_expenses / 12),
        annual_expenses=round(operating_expenses),
        net_operating_income=round(noi),
        cash_flow=round(cash_flow),
        expense_ratio=round(expense_ratio, 1),
        expense_breakdown=breakdown,
    )


# =============================================================================
# Cap rate
# =============================================================================


def _default_operating_expenses() -> Dict[str, float]:
    return {
        "propertyTax": 6000,
        "insurance": 2400,
        "utilities": 1800,
        "maintenance": 3600,
        "propertyManagement": 4200,
        "other": 1200,
    }


@dataclass
class CapRateInputs:
    property_value: float = 500000
    monthly_rent: float = 3500
    operating_expenses: Dict[str, float] = field(default_factory=_default_operating_expenses)  # Annual
    vacancy: float = 5


@dataclass
class CapRateResults:
    cap_rate: float
    noi: int
    effective_gross_income: int
    operating_expense_ratio: float
    cash_on_cash_return: float
    expense_breakdown: List[ExpenseLine] = field(default_factory=list)


def calculate_cap_rate(inputs: CapRateInputs) -> CapRateResults:
    """
    Calculate capitalization rate (NOI / property value).

    Cash-on-cash return assumes 20% down with the rest financed at 4.5% over
    30 years.
    """
    require_positive(inputs.property_value, "property_value")
    require_positive(inputs.monthly_rent, "monthly_rent")
    require_between(inputs.vacancy, 0, 100, "vacancy")
    for name, amount in inputs.operating_expenses.items():
        require_non_negative(amount, f"operating_expenses.{name}")

    annual_rent = inputs.monthly_rent * 12
    effective_gross_income = annual_rent * (1 - inputs.vacancy / 100)
    require_nonzero_result(effective_gross_income, "effective gross income")

    total_expenses = sum(inputs.operating_expenses.values())
    noi = effective_gross_income - total_expenses
    cap_rate = noi / inputs.property_value * 100
    opex_ratio = total_expenses / effective_gross_income * 100

    down_payment = inputs.property_value * CAP_RATE_DOWN_PAYMENT
    annual_debt_service = calculate_payment(
        inputs.property_value - down_payment, CAP_RATE_LOAN_RATE, CAP_RATE_LOAN_YEARS * 12
    ) * 12
    cash_on_cash = (noi - annual_debt_service) / down_payment * 100

    breakdown = [
        ExpenseLine(
            category=_title(category),
            annual=round(annual),
            percentage=round(annual / total_expenses * 100) if total_expenses else 0,
        )
        for category, annual in inputs.operating_expenses.items()
    ]

    return CapRateResults(
        cap_rate=round(cap_rate, 1),
        noi=round(noi),
        effective_gross_income=round(effective_gross_income),
        operating_expense_ratio=round(opex_ratio, 1),
        cash_on_cash_return=round(cash_on_cash, 1),
        expense_breakdown=breakdown,
    )
