"""
Financial Calculation Engine

One pure function per calculator, grouped by family. Each function takes an
input record and returns a result record; see outcome.evaluate for a tagged
wrapper.
"""

from fincalc.calculations import (
    amortization,
    timevalue,
    mortgage,
    real_estate,
    growth,
    savings,
    debt,
    income,
    spending,
    options,
    portfolio,
    stocks,
)

__all__ = [
    "amortization",
    "timevalue",
    "mortgage",
    "real_estate",
    "growth",
    "savings",
    "debt",
    "income",
    "spending",
    "options",
    "portfolio",
    "stocks",
]
