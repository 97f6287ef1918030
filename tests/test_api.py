"""
Tests for the HTTP API.
"""

import pytest

from fincalc.api import FAMILIES


class TestHealth:
    """Test service endpoints."""

    def test_health_check(self, client):
        """Test health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCalculateEndpoints:
    """Test calculator endpoints."""

    def test_mortgage_defaults(self, client):
        """Test an empty body uses the default inputs."""
        response = client.post("/api/calculate/mortgage/mortgage", json={})
        assert response.status_code == 200
        assert response.json()["monthly_payment"] == 1216.04

    def test_amortization(self, client):
        """Test amortization schedule endpoint."""
        response = client.post(
            "/api/calculate/loans/amortization",
            json={
                "principal": 100000,
                "annual_rate": 6.0,
                "amortization_years": 5,
                "start_date": "2025-01-01",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 60
        assert data["schedule"][1]["date"] == "2025-02-01"
        assert data["total_principal"] == pytest.approx(100000, abs=1)

    def test_npv(self, client):
        """Test NPV endpoint."""
        response = client.post(
            "/api/calculate/loans/npv",
            json={"cash_flows": [-100, 110], "discount_rate": 10},
        )
        assert response.status_code == 200
        assert response.json()["npv"] == 0

    def test_snowball_with_debts(self, client):
        """Test nested debt records in the request body."""
        response = client.post(
            "/api/calculate/debt/snowball",
            json={
                "debts": [
                    {"name": "Small", "balance": 100, "interest_rate": 0, "minimum_payment": 100},
                    {"name": "Large", "balance": 1000, "interest_rate": 0, "minimum_payment": 100},
                ],
                "additional_payment": 0,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total_months"] == 6
        assert data["paid_off"] is True

    def test_vacation_savings_dates(self, client):
        """Test date fields are parsed from ISO strings."""
        response = client.post(
            "/api/calculate/spending/vacation-savings",
            json={"start_date": "2025-01-29", "as_of": "2025-01-01"},
        )
        assert response.status_code == 200
        assert response.json()["weeks_until_trip"] == 4

    def test_implied_volatility_not_converged(self, client):
        """Test an unconverged search is a normal response."""
        response = client.post(
            "/api/calculate/options/implied-volatility", json={"option_price": 150}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["converged"] is False
        assert data["implied_volatility"] is None


class TestErrors:
    """Test error responses."""

    def test_invalid_input(self, client):
        """Test invalid input returns 422 naming the field."""
        response = client.post(
            "/api/calculate/mortgage/mortgage",
            json={"loan_amount": 100000, "down_payment": 150000},
        )
        assert response.status_code == 422
        assert response.json()["field"] == "down_payment"

    def test_degenerate_result(self, client):
        """Test an undefined result returns 422 tagged degenerate."""
        response = client.post(
            "/api/calculate/portfolio/sharpe-ratio", json={"returns": [4, 4, 4]}
        )
        assert response.status_code == 422
        assert response.json()["error"] == "degenerate"

    def test_malformed_body(self, client):
        """Test type errors are rejected by request validation."""
        response = client.post(
            "/api/calculate/growth/simple-interest", json={"principal": "lots"}
        )
        assert response.status_code == 422

    def test_unknown_calculator(self, client):
        """Test unknown routes return 404."""
        response = client.post("/api/calculate/mortgage/balloon", json={})
        assert response.status_code == 404


class TestRoutes:
    """Test every calculator is reachable."""

    def test_family_routes_registered(self, client):
        """Test each family exposes at least one POST route."""
        paths = client.app.openapi()["paths"]
        for family in FAMILIES:
            assert any(path.startswith(f"/api/calculate/{family}/") for path in paths)

    @pytest.mark.parametrize(
        "path",
        [
            "/api/calculate/mortgage/payment",
            "/api/calculate/mortgage/refinance",
            "/api/calculate/mortgage/affordability",
            "/api/calculate/mortgage/interest-only",
            "/api/calculate/mortgage/arm-vs-fixed",
            "/api/calculate/mortgage/closing-costs",
            "/api/calculate/real-estate/rent-vs-buy",
            "/api/calculate/real-estate/rental-roi",
            "/api/calculate/real-estate/property-appreciation",
            "/api/calculate/real-estate/landlord-expenses",
            "/api/calculate/real-estate/cap-rate",
            "/api/calculate/growth/compound-interest",
            "/api/calculate/growth/simple-interest",
            "/api/calculate/growth/rule-of-72",
            "/api/calculate/growth/future-value",
            "/api/calculate/growth/investment-growth",
            "/api/calculate/growth/investment",
            "/api/calculate/growth/retirement",
            "/api/calculate/savings/savings",
            "/api/calculate/savings/savings-goal",
            "/api/calculate/savings/budget-planner",
            "/api/calculate/savings/emergency-fund",
            "/api/calculate/savings/college-savings",
            "/api/calculate/savings/rainy-day",
            "/api/calculate/debt/loan-payoff",
            "/api/calculate/debt/avalanche",
            "/api/calculate/debt/debt-to-income",
            "/api/calculate/income/salary",
            "/api/calculate/income/self-employment-tax",
            "/api/calculate/income/net-income",
            "/api/calculate/income/tax-withholding",
            "/api/calculate/spending/cost-of-living",
            "/api/calculate/spending/subscriptions",
            "/api/calculate/spending/entertainment-budget",
            "/api/calculate/spending/monthly-expenses",
            "/api/calculate/stocks/stock-return",
            "/api/calculate/stocks/dividend-yield",
            "/api/calculate/stocks/dividend-reinvestment",
            "/api/calculate/stocks/dca",
            "/api/calculate/stocks/beta",
            "/api/calculate/options/black-scholes",
            "/api/calculate/options/covered-call",
            "/api/calculate/options/put-call-parity",
            "/api/calculate/portfolio/asset-allocation",
            "/api/calculate/portfolio/rebalancing",
            "/api/calculate/portfolio/correlation",
            "/api/calculate/portfolio/risk",
        ],
    )
    def test_defaults_accepted(self, client, path):
        """Test each calculator answers its default inputs."""
        response = client.post(path, json={})
        assert response.status_code == 200
