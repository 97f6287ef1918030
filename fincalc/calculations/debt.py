"""
Debt Payoff Calculations

Month-by-month payoff simulations for single debts (credit cards, loans) and
multi-debt strategies (snowball, avalanche), plus debt-to-income scoring.

Every simulation stops at MAX_PAYOFF_MONTHS. A payment that never outpaces
interest runs to the cap and is reported with paid_off=False rather than
looping forever.
"""

import logging
from typing import List, Optional
from dataclasses import dataclass, field
from datetime import date
from dateutil.relativedelta import relativedelta

from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
)
from fincalc.errors import InvalidInputError

logger = logging.getLogger(__name__)

MAX_PAYOFF_MONTHS = 1200  # 100 years


@dataclass
class PayoffSimulation:
    """Outcome of a single-debt payoff loop."""

    months: int
    total_interest: float
    paid_off: bool


def simulate_payoff(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> PayoffSimulation:
    """
    Simulate paying down one balance with a fixed monthly payment.

    Interest accrues on the outstanding balance before each payment. The last
    payment may overshoot; the overshoot is not refunded, so total paid is
    always balance + total_interest.

    Args:
        balance: Starting balance
        annual_rate: Annual interest rate in percent
        monthly_payment: Payment made every month
        max_months: Iteration cap

    Returns:
        PayoffSimulation; paid_off is False when the cap was reached first
    """
    monthly_rate = annual_rate / 100 / 12
    remaining = balance
    months = 0
    total_interest = 0.0

    while remaining > 0 and months < max_months:
        interest = remaining * monthly_rate
        total_interest += interest
        remaining = remaining + interest - monthly_payment
        months += 1

    paid_off = remaining <= 0
    if not paid_off:
        logger.warning(
            f"Payoff not reached after {max_months} months "
            f"(balance={balance}, rate={annual_rate}%, payment={monthly_payment})"
        )

    return PayoffSimulation(months=months, total_interest=total_interest, paid_off=paid_off)


# =============================================================================
# Credit card / loan payoff
# =============================================================================


@dataclass
class CreditCardInputs:
    balance: float = 10000
    interest_rate: float = 18.9
    monthly_payment: float = 300
    additional_payment: float = 0
    start_date: Optional[date] = None  # Defaults to today


@dataclass
class CreditCardResults:
    months_to_payoff: int
    total_interest: int
    total_payment: int
    payoff_date: Optional[date]  # None when the balance is never paid off
    paid_off: bool


def calculate_credit_card(inputs: CreditCardInputs) -> CreditCardResults:
    """Calculate how long a credit card balance takes to pay off."""
    require_non_negative(inputs.balance, "balance")
    require_non_negative(inputs.interest_rate, "interest_rate")
    require_non_negative(inputs.monthly_payment, "monthly_payment")
    require_non_negative(inputs.additional_payment, "additional_payment")

    payment = inputs.monthly_payment + inputs.additional_payment
    if payment <= 0 and inputs.balance > 0:
        raise InvalidInputError("a positive monthly payment is required", field="monthly_payment")

    simulation = simulate_payoff(inputs.balance, inputs.interest_rate, payment)

    payoff_date = None
    if simulation.paid_off:
        start = inputs.start_date or date.today()
        payoff_date = start + relativedelta(months=simulation.months)

    return CreditCardResults(
        months_to_payoff=simulation.months,
        total_interest=round(simulation.total_interest),
        total_payment=round(inputs.balance + simulation.total_interest),
        payoff_date=payoff_date,
        paid_off=simulation.paid_off,
    )


@dataclass
class LoanPayoffInputs:
    loan_amount: float = 20000
    interest_rate: float = 6
    monthly_payment: float = 400
    additional_payment: float = 100
    start_date: Optional[date] = None


@dataclass
class LoanPayoffResults:
    months_to_payoff: int
    total_interest: int
    total_payment: int
    payoff_date: Optional[date]
    paid_off: bool
    baseline_paid_off: bool
    months_saved: Optional[int]  # Versus paying only monthly_payment
    interest_saved: Optional[int]


def calculate_loan_payoff(inputs: LoanPayoffInputs) -> LoanPayoffResults:
    """
    Calculate loan payoff with an extra monthly payment.

    Also simulates the base payment alone to report months and interest saved
    by the additional payment. When the base payment alone never clears the
    loan, baseline_paid_off is False and both savings figures are None.
    """
    require_positive(inputs.loan_amount, "loan_amount")
    require_non_negative(inputs.interest_rate, "interest_rate")
    require_positive(inputs.monthly_payment, "monthly_payment")
    require_non_negative(inputs.additional_payment, "additional_payment")

    accelerated = simulate_payoff(
        inputs.loan_amount,
        inputs.interest_rate,
        inputs.monthly_payment + inputs.additional_payment,
    )
    baseline = simulate_payoff(inputs.loan_amount, inputs.interest_rate, inputs.monthly_payment)

    payoff_date = None
    if accelerated.paid_off:
        start = inputs.start_date or date.today()
        payoff_date = start + relativedelta(months=accelerated.months)

    months_saved = None
    interest_saved = None
    if baseline.paid_off and accelerated.paid_off:
        months_saved = baseline.months - accelerated.months
        interest_saved = round(baseline.total_interest - accelerated.total_interest)

    return LoanPayoffResults(
        months_to_payoff=accelerated.months,
        total_interest=round(accelerated.total_interest),
        total_payment=round(inputs.loan_amount + accelerated.total_interest),
        payoff_date=payoff_date,
        paid_off=accelerated.paid_off,
        baseline_paid_off=baseline.paid_off,
        months_saved=months_saved,
        interest_saved=interest_saved,
    )


# =============================================================================
# Snowball / avalanche
# =============================================================================


@dataclass
class Debt:
    name: str
    balance: float
    interest_rate: float
    minimum_payment: float


@dataclass
class PayoffScheduleEntry:
    debt_name: str
    payoff_month: Optional[int]  # None when the debt is still open at the cap
    interest_paid: int


def _default_debts() -> List[Debt]:
    return [
        Debt(name="Credit Card", balance=5000, interest_rate=18.9, minimum_payment=150),
        Debt(name="Car Loan", balance=15000, interest_rate=5.5, minimum_payment=300),
        Debt(name="Personal Loan", balance=8000, interest_rate=12, minimum_payment=200),
    ]


@dataclass
class DebtStrategyInputs:
    debts: List[Debt] = field(default_factory=_default_debts)
    additional_payment: float = 200


@dataclass
class DebtStrategyResults:
    total_months: int
    total_interest: int
    total_payment: int
    paid_off: bool
    payoff_schedule: List[PayoffScheduleEntry] = field(default_factory=list)


def _validate_debts(debts: List[Debt]) -> None:
    if not debts:
        raise InvalidInputError("at least one debt is required", field="debts")
    for debt in debts:
        require_non_negative(debt.balance, f"debts[{debt.name}].balance")
        require_non_negative(debt.interest_rate, f"debts[{debt.name}].interest_rate")
        require_non_negative(debt.minimum_payment, f"debts[{debt.name}].minimum_payment")


def simulate_debt_strategy(
    ordered_debts: List[Debt],
    additional_payment: float,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> DebtStrategyResults:
    """
    Pay down several debts at once, focusing extra money on one at a time.

    Each month every open debt accrues interest and receives its minimum
    payment. The monthly budget (all minimums plus additional_payment) stays
    constant, so minimums freed by paid-off debts roll into the extra amount,
    which is applied to open debts in the given priority order.

    Args:
        ordered_debts: Debts in payoff priority order
        additional_payment: Extra amount paid every month
        max_months: Iteration cap

    Returns:
        DebtStrategyResults with a per-debt schedule in priority order
    """
    balances = [debt.balance for debt in ordered_debts]
    interest_paid = [0.0] * len(ordered_debts)
    payoff_month: List[Optional[int]] = [
        0 if balance <= 0 else None for balance in balances
    ]
    budget = sum(debt.minimum_payment for debt in ordered_debts) + additional_payment

    month = 0
    while any(balance > 0 for balance in balances) and month < max_months:
        month += 1
        available = budget

        for i, debt in enumerate(ordered_debts):
            if balances[i] <= 0:
                continue
            interest = balances[i] * debt.interest_rate / 100 / 12
            balances[i] += interest
            interest_paid[i] += interest

            payment = min(debt.minimum_payment, balances[i], available)
            balances[i] -= payment
            available -= payment

        for i in range(len(ordered_debts)):
            if available <= 0:
                break
            if balances[i] <= 0:
                continue
            payment = min(balances[i], available)
            balances[i] -= payment
            available -= payment

        for i in range(len(ordered_debts)):
            if payoff_month[i] is None and balances[i] <= 0:
                payoff_month[i] = month

    paid_off = all(balance <= 0 for balance in balances)
    if not paid_off:
        logger.warning(f"Debts still open after {max_months} months")

    total_interest = sum(interest_paid)
    schedule = [
        PayoffScheduleEntry(
            debt_name=debt.name,
            payoff_month=payoff_month[i],
            interest_paid=round(interest_paid[i]),
        )
        for i, debt in enumerate(ordered_debts)
    ]

    return DebtStrategyResults(
        total_months=month,
        total_interest=round(total_interest),
        total_payment=round(sum(debt.balance for debt in ordered_debts) + total_interest),
        paid_off=paid_off,
        payoff_schedule=schedule,
    )


def calculate_debt_snowball(inputs: DebtStrategyInputs) -> DebtStrategyResults:
    """Snowball method: smallest balance first."""
    _validate_debts(inputs.debts)
    require_non_negative(inputs.additional_payment, "additional_payment")

    ordered = sorted(inputs.debts, key=lambda debt: debt.balance)
    return simulate_debt_strategy(ordered, inputs.additional_payment)


def calculate_debt_avalanche(inputs: DebtStrategyInputs) -> DebtStrategyResults:
    """Avalanche method: highest interest rate first."""
    _validate_debts(inputs.debts)
    require_non_negative(inputs.additional_payment, "additional_payment")

    ordered = sorted(inputs.debts, key=lambda debt: debt.interest_rate, reverse=True)
    return simulate_debt_strategy(ordered, inputs.additional_payment)


# =============================================================================
# Debt-to-income
# =============================================================================


@dataclass
class MonthlyDebt:
    name: str
    monthly_payment: float


def _default_monthly_debts() -> List[MonthlyDebt]:
    return [
        MonthlyDebt(name="Mortgage/Rent", monthly_payment=1500),
        MonthlyDebt(name="Car Payment", monthly_payment=400),
        MonthlyDebt(name="Credit Cards", monthly_payment=200),
    ]


@dataclass
class DebtToIncomeInputs:
    monthly_income: float = 5000
    debts: List[MonthlyDebt] = field(default_factory=_default_monthly_debts)


@dataclass
class DebtToIncomeResults:
    ratio: float
    total_monthly_debt: int
    status: str  # Excellent, Good, Fair or Poor
    recommendations: List[str] = field(default_factory=list)


DTI_BANDS = [
    (28, "Excellent", [
        "Your debt-to-income ratio is excellent. Consider investing or saving more.",
    ]),
    (36, "Good", [
        "Your debt-to-income ratio is good. Monitor your debts and avoid taking on more.",
    ]),
    (43, "Fair", [
        "Consider reducing some debts to improve your financial health.",
        "Look for ways to increase your income or reduce expenses.",
    ]),
]

DTI_POOR_RECOMMENDATIONS = [
    "Focus on paying off high-interest debt first.",
    "Consider debt consolidation or speaking with a financial advisor.",
    "Avoid taking on any new debt.",
]


def calculate_debt_to_income(inputs: DebtToIncomeInputs) -> DebtToIncomeResults:
    """Calculate DTI ratio and classify it against lender thresholds (28/36/43)."""
    require_positive(inputs.monthly_income, "monthly_income")
    for debt in inputs.debts:
        require_non_negative(debt.monthly_payment, f"debts[{debt.name}].monthly_payment")

    total_monthly_debt = sum(debt.monthly_payment for debt in inputs.debts)
    ratio = total_monthly_debt / inputs.monthly_income * 100

    status, recommendations = "Poor", DTI_POOR_RECOMMENDATIONS
    for limit, band, band_recommendations in DTI_BANDS:
        if ratio <= limit:
            status, recommendations = band, band_recommendations
            break

    return DebtToIncomeResults(
        ratio=round(ratio, 1),
        total_monthly_debt=round(total_monthly_debt),
        status=status,
        recommendations=list(recommendations),
    )
