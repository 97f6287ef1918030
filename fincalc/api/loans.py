"""
Loan schedule and discounting endpoints.

These wrap the shared amortization and time-value helpers, which take plain
arguments rather than an input record.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Optional
from datetime import date

from fincalc.calculations import amortization, timevalue

router = APIRouter()


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float
    annual_rate: float  # Percent
    amortization_years: int
    io_months: int = 0
    start_date: Optional[date] = None


class AmortizationRowOut(BaseModel):
    period: int
    date: date
    beginning_balance: float
    payment: float
    interest: float
    principal: float
    ending_balance: float


class AmortizationResponse(BaseModel):
    """Schedule plus lifetime totals."""

    monthly_payment: float
    total_interest: float
    total_principal: float
    schedule: List[AmortizationRowOut]


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    months = inputs.amortization_years * 12

    schedule = amortization.generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        months=months,
        io_months=inputs.io_months,
        start_date=inputs.start_date,
    )

    return AmortizationResponse(
        monthly_payment=round(
            amortization.calculate_payment(inputs.principal, inputs.annual_rate, months), 2
        ),
        total_interest=amortization.calculate_total_interest(schedule),
        total_principal=round(sum(row.principal for row in schedule), 2),
        schedule=[AmortizationRowOut(**vars(row)) for row in schedule],
    )


class NPVInput(BaseModel):
    """Input for NPV calculation."""

    cash_flows: List[float]
    discount_rate: float  # Percent


class NPVResponse(BaseModel):
    npv: float


@router.post("/npv", response_model=NPVResponse)
async def calculate_npv_endpoint(inputs: NPVInput):
    """Net present value of yearly cash flows; the first flow is undiscounted."""
    return NPVResponse(npv=round(timevalue.calculate_npv(inputs.cash_flows, inputs.discount_rate), 2))
