"""
Loan Amortization Calculations

Implements the fixed-payment annuity formula and amortization schedules
shared by the mortgage and real estate calculators.

Rates are whole-number percentages (4.5 means 4.5%).
"""

from typing import List, Optional
from dataclasses import dataclass
from datetime import date
from dateutil.relativedelta import relativedelta

from fincalc.errors import InvalidInputError


@dataclass
class AmortizationRow:
    """One month of an amortization schedule."""

    period: int
    date: date
    beginning_balance: float
    payment: float
    interest: float
    principal: float
    ending_balance: float


def calculate_payment(principal: float, annual_rate: float, months: int) -> float:
    """
    Calculate the level monthly payment of a fully amortizing loan.

    payment = P * r / (1 - (1 + r)^-n), with r the monthly rate. A zero rate
    falls back to the linear payment P / n.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent (e.g., 4.5 for 4.5%)
        months: Number of monthly payments

    Returns:
        Monthly payment amount

    Raises:
        InvalidInputError: If months is not positive
    """
    if months <= 0:
        raise InvalidInputError("loan term must be at least one month", field="months")

    monthly_rate = annual_rate / 100 / 12

    if monthly_rate == 0:
        return principal / months

    growth = (1 + monthly_rate) ** months
    return principal * monthly_rate * growth / (growth - 1)


def calculate_loan_amount(payment: float, annual_rate: float, months: int) -> float:
    """Largest principal a monthly payment can amortize (inverse of calculate_payment)."""
    if months <= 0:
        raise InvalidInputError("loan term must be at least one month", field="months")

    monthly_rate = annual_rate / 100 / 12

    if monthly_rate == 0:
        return payment * months

    growth = (1 + monthly_rate) ** months
    return payment * (growth - 1) / (monthly_rate * growth)


def calculate_remaining_balance(
    principal: float,
    annual_rate: float,
    months: int,
    payments_completed: int,
) -> float:
    """Calculate remaining loan balance after N payments."""
    monthly_rate = annual_rate / 100 / 12
    payment = calculate_payment(principal, annual_rate, months)

    if monthly_rate == 0:
        return max(0.0, principal - payment * payments_completed)

    balance = principal * ((1 + monthly_rate) ** payments_completed) - payment * (
        ((1 + monthly_rate) ** payments_completed - 1) / monthly_rate
    )

    return max(0.0, balance)


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    months: int,
    io_months: int = 0,
    start_date: Optional[date] = None,
) -> List[AmortizationRow]:
    """
    Generate a full amortization schedule.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent
        months: Amortization period in months (after any interest-only period)
        io_months: Interest-only period in months
        start_date: Date of first payment (defaults to today)

    Returns:
        List of amortization rows, one per month
    """
    if months <= 0:
        raise InvalidInputError("loan term must be at least one month", field="months")
    if io_months < 0:
        raise InvalidInputError("interest-only period cannot be negative", field="io_months")

    schedule = []
    balance = principal
    monthly_rate = annual_rate / 100 / 12

    if start_date is None:
        start_date = date.today()

    for period in range(1, io_months + months + 1):
        period_date = start_date + relativedelta(months=period - 1)

        interest = balance * monthly_rate

        if period <= io_months:
            principal_pmt = 0.0
            payment = interest
        else:
            remaining_periods = months - (period - io_months - 1)
            payment = calculate_payment(balance, annual_rate, remaining_periods)
            principal_pmt = min(payment - interest, balance)
            payment = principal_pmt + interest

        ending_balance = max(0.0, balance - principal_pmt)

        schedule.append(
            AmortizationRow(
                period=period,
                date=period_date,
                beginning_balance=round(balance, 2),
                payment=round(payment, 2),
                interest=round(interest, 2),
                principal=round(principal_pmt, 2),
                ending_balance=round(ending_balance, 2),
            )
        )

        balance = ending_balance

        if balance == 0:
            break

    return schedule


def calculate_total_interest(schedule: List[AmortizationRow]) -> float:
    """Calculate total interest paid over the schedule."""
    return round(sum(row.interest for row in schedule), 2)
