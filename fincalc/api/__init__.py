"""
API routes for the calculator engine.

Every calculator is exposed as POST /calculate/<family>/<name>. The request
body is the calculator's input record and the response is its result record.
"""

from fastapi import APIRouter

from fincalc.api import (
    loans,
    mortgage,
    real_estate,
    growth,
    savings,
    debt,
    income,
    spending,
    stocks,
    options,
    portfolio,
)

router = APIRouter()

FAMILIES = {
    "loans": loans,
    "mortgage": mortgage,
    "real-estate": real_estate,
    "growth": growth,
    "savings": savings,
    "debt": debt,
    "income": income,
    "spending": spending,
    "stocks": stocks,
    "options": options,
    "portfolio": portfolio,
}

for family, module in FAMILIES.items():
    router.include_router(module.router, prefix=f"/calculate/{family}", tags=[family])
