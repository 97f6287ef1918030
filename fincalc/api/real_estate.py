"""Real estate investment endpoints."""

from fastapi import APIRouter

from fincalc.calculations.real_estate import (
    RentVsBuyInputs,
    RentVsBuyResults,
    RentalROIInputs,
    RentalROIResults,
    PropertyAppreciationInputs,
    PropertyAppreciationResults,
    LandlordExpenseInputs,
    LandlordExpenseResults,
    CapRateInputs,
    CapRateResults,
    calculate_rent_vs_buy,
    calculate_rental_roi,
    calculate_property_appreciation,
    calculate_landlord_expenses,
    calculate_cap_rate,
)

router = APIRouter()


@router.post("/rent-vs-buy", response_model=RentVsBuyResults)
async def rent_vs_buy_endpoint(inputs: RentVsBuyInputs):
    """Cumulative cost of buying versus renting, with break-even year."""
    return calculate_rent_vs_buy(inputs)


@router.post("/rental-roi", response_model=RentalROIResults)
async def rental_roi_endpoint(inputs: RentalROIInputs):
    return calculate_rental_roi(inputs)


@router.post("/property-appreciation", response_model=PropertyAppreciationResults)
async def property_appreciation_endpoint(inputs: PropertyAppreciationInputs):
    return calculate_property_appreciation(inputs)


@router.post("/landlord-expenses", response_model=LandlordExpenseResults)
async def landlord_expenses_endpoint(inputs: LandlordExpenseInputs):
    return calculate_landlord_expenses(inputs)


@router.post("/cap-rate", response_model=CapRateResults)
async def cap_rate_endpoint(inputs: CapRateInputs):
    return calculate_cap_rate(inputs)
