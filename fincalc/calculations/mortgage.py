"""
Mortgage Calculations

Payment, refinance, affordability, interest-only and ARM comparisons built on
the annuity formula in amortization.py.
"""

import logging
import math
from typing import List, Optional
from dataclasses import dataclass, field
from datetime import date

from fincalc.calculations.amortization import (
    AmortizationRow,
    calculate_payment,
    calculate_loan_amount,
    generate_amortization_schedule,
)
from fincalc.calculations.validation import (
    require_positive,
    require_non_negative,
    require_choice,
    require_whole,
)
from fincalc.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Qualifying ratios used by conventional lenders
FRONT_END_RATIO = 0.28
BACK_END_RATIO = 0.36
AFFORDABILITY_TERM_YEARS = 30

# Absolute ceiling on any ARM rate, regardless of the lifetime cap
ARM_RATE_CEILING = 20.0

LOAN_TYPES = ("conventional", "fha", "va")


# =============================================================================
# Mortgage
# =============================================================================


@dataclass
class MortgageInputs:
    loan_amount: float = 300000  # Purchase price being financed
    down_payment: float = 60000
    interest_rate: float = 4.5
    loan_term: int = 30  # Years
    include_schedule: bool = False
    start_date: Optional[date] = None


@dataclass
class MortgageResults:
    monthly_payment: float
    total_payment: float
    total_interest: float
    principal_amount: float
    schedule: Optional[List[AmortizationRow]] = None


def calculate_mortgage(inputs: MortgageInputs) -> MortgageResults:
    """
    Calculate the monthly payment and lifetime cost of a fixed-rate mortgage.

    Args:
        inputs: Purchase price, down payment, rate (percent) and term (years)

    Returns:
        MortgageResults with values rounded to cents
    """
    require_positive(inputs.loan_amount, "loan_amount")
    require_non_negative(inputs.down_payment, "down_payment")
    require_non_negative(inputs.interest_rate, "interest_rate")
    require_positive(inputs.loan_term, "loan_term")

    if inputs.down_payment >= inputs.loan_amount:
        raise InvalidInputError(
            "down_payment must be less than loan_amount", field="down_payment"
        )

    principal = inputs.loan_amount - inputs.down_payment
    number_of_payments = inputs.loan_term * 12

    monthly_payment = calculate_payment(principal, inputs.interest_rate, number_of_payments)
    total_payment = monthly_payment * number_of_payments
    total_interest = total_payment - principal

    schedule = None
    if inputs.include_schedule:
        schedule = generate_amortization_schedule(
            principal,
            inputs.interest_rate,
            number_of_payments,
            start_date=inputs.start_date,
        )

    return MortgageResults(
        monthly_payment=round(monthly_payment, 2),
        total_payment=round(total_payment, 2),
        total_interest=round(total_interest, 2),
        principal_amount=round(principal, 2),
        schedule=schedule,
    )


# =============================================================================
# Mortgage payment with taxes and insurance (PITI)
# =============================================================================


@dataclass
class MortgagePaymentInputs:
    loan_amount: float = 300000
    interest_rate: float = 4.5
    loan_term: int = 30
    property_tax: float = 3600  # Annual
    insurance: float = 1200  # Annual


@dataclass
class MortgagePaymentResults:
    monthly_payment: int
    monthly_principal_interest: int
    monthly_taxes: int
    monthly_insurance: int
    total_payment: int
    total_interest: int


def calculate_mortgage_payment(inputs: MortgagePaymentInputs) -> MortgagePaymentResults:
    """Calculate a full monthly housing payment: principal, interest, taxes and insurance."""
    require_positive(inputs.loan_amount, "loan_amount")
    require_non_negative(inputs.interest_rate, "interest_rate")
    require_positive(inputs.loan_term, "loan_term")
    require_non_negative(inputs.property_tax, "property_tax")
    require_non_negative(inputs.insurance, "insurance")

    number_of_payments = inputs.loan_term * 12
    monthly_pi = calculate_payment(inputs.loan_amount, inputs.interest_rate, number_of_payments)

    monthly_taxes = inputs.property_tax / 12
    monthly_insurance = inputs.insurance / 12
    monthly_payment = monthly_pi + monthly_taxes + monthly_insurance
    total_payment = monthly_payment * number_of_payments
    total_interest = monthly_pi * number_of_payments - inputs.loan_amount

    return MortgagePaymentResults(
        monthly_payment=round(monthly_payment),
        monthly_principal_interest=round(monthly_pi),
        monthly_taxes=round(monthly_taxes),
        monthly_insurance=round(monthly_insurance),
        total_payment=round(total_payment),
        total_interest=round(total_interest),
    )


# =============================================================================
# Refinance
# =============================================================================


@dataclass
class RefinanceInputs:
    current_loan_balance: float = 250000
    current_interest_rate: float = 5.5
    current_loan_term: int = 30  # Remaining years on the current loan
    new_interest_rate: float = 4.5
    new_loan_term: int = 30
    closing_costs: float = 4000  # Rolled into the new loan


@dataclass
class RefinanceResults:
    new_monthly_payment: int
    old_monthly_payment: int
    monthly_savings: int
    break_even_months: Optional[int]  # None when the refinance never pays for itself
    lifetime_savings: int


def calculate_refinance(inputs: RefinanceInputs) -> RefinanceResults:
    """
    Compare the current loan against a refinance that rolls in closing costs.

    Returns:
        RefinanceResults; break_even_months is None when monthly savings are not positive
    """
    require_positive(inputs.current_loan_balance, "current_loan_balance")
    require_non_negative(inputs.current_interest_rate, "current_interest_rate")
    require_positive(inputs.current_loan_term, "current_loan_term")
    require_non_negative(inputs.new_interest_rate, "new_interest_rate")
    require_positive(inputs.new_loan_term, "new_loan_term")
    require_non_negative(inputs.closing_costs, "closing_costs")

    old_payment = calculate_payment(
        inputs.current_loan_balance,
        inputs.current_interest_rate,
        inputs.current_loan_term * 12,
    )
    new_payment = calculate_payment(
        inputs.current_loan_balance + inputs.closing_costs,
        inputs.new_interest_rate,
        inputs.new_loan_term * 12,
    )

    monthly_savings = old_payment - new_payment

    break_even_months = None
    if monthly_savings > 0:
        break_even_months = math.ceil(inputs.closing_costs / monthly_savings)

    lifetime_savings = monthly_savings * inputs.new_loan_term * 12 - inputs.closing_costs

    return RefinanceResults(
        new_monthly_payment=round(new_payment),
        old_monthly_payment=round(old_payment),
        monthly_savings=round(monthly_savings),
        break_even_months=break_even_months,
        lifetime_savings=round(lifetime_savings),
    )


# =============================================================================
# Home affordability
# =============================================================================


@dataclass
class HomeAffordabilityInputs:
    annual_income: float = 100000
    monthly_debts: float = 500
    down_payment: float = 60000
    interest_rate: float = 4.5
    property_tax: float = 3600  # Annual
    insurance: float = 1200  # Annual
    monthly_hoa: float = 250


@dataclass
class HomeAffordabilityResults:
    max_purchase_price: int
    max_loan_amount: int
    monthly_payment: int
    required_income: int
    debt_to_income_ratio: float


def calculate_home_affordability(inputs: HomeAffordabilityInputs) -> HomeAffordabilityResults:
    """
    Estimate the most expensive home the income supports under the 28/36 rule.

    The allowed housing payment is the smaller of 28% of gross monthly income
    and 36% of it minus existing debts. Taxes, insurance and HOA come out of
    that payment first; the remainder is converted to a 30-year loan amount.
    """
    require_positive(inputs.annual_income, "annual_income")
    require_non_negative(inputs.monthly_debts, "monthly_debts")
    require_non_negative(inputs.down_payment, "down_payment")
    require_non_negative(inputs.interest_rate, "interest_rate")
    require_non_negative(inputs.property_tax, "property_tax")
    require_non_negative(inputs.insurance, "insurance")
    require_non_negative(inputs.monthly_hoa, "monthly_hoa")

    monthly_income = inputs.annual_income / 12
    max_front_end = monthly_income * FRONT_END_RATIO
    max_back_end = monthly_income * BACK_END_RATIO - inputs.monthly_debts
    max_allowed_payment = max(0.0, min(max_front_end, max_back_end))

    monthly_tax_insurance = (inputs.property_tax + inputs.insurance) / 12 + inputs.monthly_hoa
    max_pi_payment = max(0.0, max_allowed_payment - monthly_tax_insurance)
    if max_pi_payment == 0:
        logger.debug("Taxes, insurance and HOA consume the entire allowed payment")

    max_loan_amount = calculate_loan_amount(
        max_pi_payment, inputs.interest_rate, AFFORDABILITY_TERM_YEARS * 12
    )
    max_purchase_price = max_loan_amount + inputs.down_payment
    dti = (max_allowed_payment + inputs.monthly_debts) / monthly_income * 100

    return HomeAffordabilityResults(
        max_purchase_price=round(max_purchase_price),
        max_loan_amount=round(max_loan_amount),
        monthly_payment=round(max_allowed_payment),
        required_income=round(inputs.annual_income),
        debt_to_income_ratio=round(dti, 1),
    )


# =============================================================================
# Interest-only
# =============================================================================


@dataclass
class InterestOnlyInputs:
    loan_amount: float = 300000
    interest_rate: float = 4.5
    interest_only_period: int = 10  # Years
    loan_term: int = 30  # Years, including the interest-only period
    property_value: float = 375000
    property_appreciation: float = 3


@dataclass
class InterestOnlyResults:
    interest_only_payment: int
    principal_and_interest_payment: int
    total_interest: int
    payment_increase: int
    equity_after_io: int


def calculate_interest_only(inputs: InterestOnlyInputs) -> InterestOnlyResults:
    """Calculate the payment shock and total cost of an interest-only loan."""
    require_positive(inputs.loan_amount, "loan_amount")
    require_non_negative(inputs.interest_rate, "interest_rate")
    require_non_negative(inputs.interest_only_period, "interest_only_period")
    require_positive(inputs.loan_term, "loan_term")
    require_non_negative(inputs.property_value, "property_value")

    if inputs.interest_only_period >= inputs.loan_term:
        raise InvalidInputError(
            "interest_only_period must be shorter than loan_term",
            field="interest_only_period",
        )

    monthly_rate = inputs.interest_rate / 100 / 12
    io_payment = inputs.loan_amount * monthly_rate

    remaining_payments = (inputs.loan_term - inputs.interest_only_period) * 12
    pi_payment = calculate_payment(inputs.loan_amount, inputs.interest_rate, remaining_payments)

    io_interest = io_payment * inputs.interest_only_period * 12
    amortizing_interest = pi_payment * remaining_payments - inputs.loan_amount

    appreciated_value = inputs.property_value * (
        (1 + inputs.property_appreciation / 100) ** inputs.interest_only_period
    )

    return InterestOnlyResults(
        interest_only_payment=round(io_payment),
        principal_and_interest_payment=round(pi_payment),
        total_interest=round(io_interest + amortizing_interest),
        payment_increase=round(pi_payment - io_payment),
        equity_after_io=round(appreciated_value - inputs.property_value),
    )


# =============================================================================
# ARM vs fixed
# =============================================================================


@dataclass
class ARMYear:
    year: int
    arm_rate: float
    arm_payment: int
    fixed_payment: int
    fixed_remaining: int  # Fixed-rate payments still owed
    arm_remaining: int  # ARM principal balance at year end


@dataclass
class ARMvsFixedInputs:
    loan_amount: float = 300000
    fixed_rate: float = 4.5
    initial_arm_rate: float = 3.5
    adjustment_period: int = 5  # Years between rate adjustments
    rate_adjustment_cap: float = 2  # Max increase per adjustment, percentage points
    lifetime_cap: float = 5  # Max increase over the life of the loan
    loan_term: int = 30
    expected_rate_increase: float = 1  # Market move expected at each adjustment


@dataclass
class ARMvsFixedResults:
    fixed_monthly_payment: int
    initial_arm_payment: int
    max_arm_payment: int
    fixed_total_cost: int
    arm_total_cost: int
    break_even_year: Optional[int]  # First year cumulative ARM cost exceeds fixed; None if never
    year_by_year: List[ARMYear] = field(default_factory=list)


def calculate_arm_vs_fixed(inputs: ARMvsFixedInputs) -> ARMvsFixedResults:
    """
    Compare an adjustable-rate mortgage against a fixed-rate loan year by year.

    The ARM rate moves by min(rate_adjustment_cap, expected_rate_increase) at
    each adjustment, never past initial rate + lifetime cap (and never above
    20%). At each year the ARM is re-amortized from its remaining balance over
    the remaining term at the current rate.
    """
    require_positive(inputs.loan_amount, "loan_amount")
    require_non_negative(inputs.fixed_rate, "fixed_rate")
    require_non_negative(inputs.initial_arm_rate, "initial_arm_rate")
    require_positive(inputs.adjustment_period, "adjustment_period")
    require_non_negative(inputs.rate_adjustment_cap, "rate_adjustment_cap")
    require_non_negative(inputs.lifetime_cap, "lifetime_cap")
    require_positive(inputs.loan_term, "loan_term")
    loan_term = require_whole(inputs.loan_term, "loan_term")

    total_months = inputs.loan_term * 12
    fixed_payment = calculate_payment(inputs.loan_amount, inputs.fixed_rate, total_months)
    fixed_total_cost = fixed_payment * total_months

    initial_arm_payment = calculate_payment(
        inputs.loan_amount, inputs.initial_arm_rate, total_months
    )
    rate_ceiling = min(inputs.initial_arm_rate + inputs.lifetime_cap, ARM_RATE_CEILING)
    max_arm_payment = calculate_payment(inputs.loan_amount, rate_ceiling, total_months)

    current_rate = inputs.initial_arm_rate
    arm_balance = inputs.loan_amount
    arm_total_cost = 0.0
    break_even_year = None
    year_by_year = []

    for year in range(1, loan_term + 1):
        if (
            year > inputs.adjustment_period
            and (year - inputs.adjustment_period) % inputs.adjustment_period == 0
        ):
            step = min(inputs.rate_adjustment_cap, inputs.expected_rate_increase)
            current_rate = min(current_rate + step, rate_ceiling)

        remaining_months = (inputs.loan_term - year + 1) * 12
        arm_payment = calculate_payment(arm_balance, current_rate, remaining_months)

        monthly_rate = current_rate / 100 / 12
        for _ in range(12):
            interest = arm_balance * monthly_rate
            arm_balance = max(0.0, arm_balance + interest - arm_payment)

        arm_total_cost += arm_payment * 12

        if break_even_year is None and arm_total_cost > fixed_payment * 12 * year:
            break_even_year = year

        year_by_year.append(
            ARMYear(
                year=year,
                arm_rate=round(current_rate, 2),
                arm_payment=round(arm_payment),
                fixed_payment=round(fixed_payment),
                fixed_remaining=round(fixed_total_cost - fixed_payment * 12 * year),
                arm_remaining=round(arm_balance),
            )
        )

    return ARMvsFixedResults(
        fixed_monthly_payment=round(fixed_payment),
        initial_arm_payment=round(initial_arm_payment),
        max_arm_payment=round(max_arm_payment),
        fixed_total_cost=round(fixed_total_cost),
        arm_total_cost=round(arm_total_cost),
        break_even_year=break_even_year,
        year_by_year=year_by_year,
    )


# =============================================================================
# Closing costs
# =============================================================================


@dataclass
class ClosingCostItem:
    name: str
    amount: int


@dataclass
class ClosingCostInputs:
    purchase_price: float = 300000
    down_payment: float = 60000
    loan_type: str = "conventional"
    state: str = "CA"


@dataclass
class ClosingCostResults:
    total_closing_costs: int
    lender_fees: int
    third_party_fees: int
    government_fees: int
    prepaid_items: int
    itemized_costs: List[ClosingCostItem] = field(default_factory=list)


LENDER_FEE_RATE = 0.01
LENDER_FEE_CAP = 3000
THIRD_PARTY_FEES = 2500  # Appraisal, inspection, title work
GOVERNMENT_FEE_RATE = 0.002
PREPAID_RATE = 0.015  # Escrowed insurance and taxes


def calculate_closing_costs(inputs: ClosingCostInputs) -> ClosingCostResults:
    """Estimate closing costs as percentages of the price and loan amount."""
    require_positive(inputs.purchase_price, "purchase_price")
    require_non_negative(inputs.down_payment, "down_payment")
    require_choice(inputs.loan_type, LOAN_TYPES, "loan_type")

    if inputs.down_payment > inputs.purchase_price:
        raise InvalidInputError(
            "down_payment cannot exceed purchase_price", field="down_payment"
        )

    loan_amount = inputs.purchase_price - inputs.down_payment

    lender_fees = min(loan_amount * LENDER_FEE_RATE, LENDER_FEE_CAP)
    government_fees = inputs.purchase_price * GOVERNMENT_FEE_RATE
    prepaid_items = inputs.purchase_price * PREPAID_RATE

    itemized = [
        ("Loan Origination Fee", loan_amount * 0.01),
        ("Appraisal", 500),
        ("Credit Report", 50),
        ("Title Insurance", loan_amount * 0.004),
        ("Recording Fees", 125),
        ("Survey", 400),
        ("Inspection", 400),
    ]

    return ClosingCostResults(
        total_closing_costs=round(
            lender_fees + THIRD_PARTY_FEES + government_fees + prepaid_items
        ),
        lender_fees=round(lender_fees),
        third_party_fees=round(THIRD_PARTY_FEES),
        government_fees=round(government_fees),
        prepaid_items=round(prepaid_items),
        itemized_costs=[ClosingCostItem(name=name, amount=round(amount)) for name, amount in itemized],
    )
