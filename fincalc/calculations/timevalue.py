"""
Time Value of Money

Discounting helpers shared by calculators that compare cost streams.
"""

from typing import List

from fincalc.calculations.validation import require_rate


def present_value(amount: float, annual_rate: float, years: float) -> float:
    """
    Discount a single amount back to today.

    Args:
        amount: Future amount
        annual_rate: Annual discount rate in percent
        years: Years until the amount is received or paid

    Returns:
        Present value
    """
    require_rate(annual_rate, "discount_rate")
    return amount / ((1 + annual_rate / 100) ** years)


def calculate_npv(cash_flows: List[float], annual_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of yearly cash flows.

    The first cash flow is at t=0 and is not discounted.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        annual_rate: Annual discount rate in percent (e.g., 3 for 3%)

    Returns:
        NPV value
    """
    require_rate(annual_rate, "discount_rate")
    rate = annual_rate / 100
    npv = 0.0
    for period, cf in enumerate(cash_flows):
        npv += cf / ((1 + rate) ** period)
    return npv
