"""
Tests for tagged outcomes, configuration and logging setup.
"""

import copy
import logging

import pytest

from fincalc.calculations import (
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
from fincalc.calculations.outcome import (
    evaluate,
    OK,
    INVALID,
    DEGENERATE,
    NOT_CONVERGED,
)
from fincalc.calculations.mortgage import MortgageInputs, calculate_mortgage
from fincalc.calculations.debt import CreditCardInputs, calculate_credit_card
from fincalc.calculations.portfolio import SharpeRatioInputs, calculate_sharpe_ratio
from fincalc.calculations.options import ImpliedVolatilityInputs, calculate_implied_volatility
from fincalc.config import Settings, get_settings
from fincalc.logging_config import configure_logging


class TestEvaluate:
    """Test outcome classification."""

    def test_ok(self):
        """Test a normal result is tagged ok."""
        outcome = evaluate(calculate_mortgage, MortgageInputs())
        assert outcome.status == OK
        assert outcome.ok
        assert outcome.result.monthly_payment == 1216.04

    def test_invalid_names_field(self):
        """Test invalid input carries the offending field."""
        outcome = evaluate(calculate_mortgage, MortgageInputs(loan_amount=-1))
        assert outcome.status == INVALID
        assert outcome.field == "loan_amount"
        assert outcome.result is None
        assert not outcome.ok

    def test_degenerate(self):
        """Test an undefined result is tagged degenerate."""
        outcome = evaluate(calculate_sharpe_ratio, SharpeRatioInputs(returns=[3, 3, 3]))
        assert outcome.status == DEGENERATE
        assert outcome.reason

    def test_payoff_never_reached(self, fixed_date):
        """Test a capped payoff loop is tagged not_converged with its result."""
        outcome = evaluate(
            calculate_credit_card,
            CreditCardInputs(interest_rate=24, monthly_payment=100, start_date=fixed_date),
        )
        assert outcome.status == NOT_CONVERGED
        assert outcome.result.paid_off is False

    def test_implied_volatility_not_converged(self):
        """Test a failed volatility search is tagged not_converged."""
        outcome = evaluate(calculate_implied_volatility, ImpliedVolatilityInputs(option_price=150))
        assert outcome.status == NOT_CONVERGED
        assert outcome.result.implied_volatility is None


CALCULATORS = [
    (calculate_mortgage, MortgageInputs),
    (mortgage.calculate_arm_vs_fixed, mortgage.ARMvsFixedInputs),
    (real_estate.calculate_rent_vs_buy, real_estate.RentVsBuyInputs),
    (real_estate.calculate_property_appreciation, real_estate.PropertyAppreciationInputs),
    (growth.calculate_future_value, growth.FutureValueInputs),
    (growth.calculate_investment_growth, growth.InvestmentGrowthInputs),
    (savings.calculate_college_savings, savings.CollegeSavingsInputs),
    (debt.calculate_debt_snowball, debt.DebtStrategyInputs),
    (debt.calculate_debt_avalanche, debt.DebtStrategyInputs),
    (income.calculate_net_income, income.NetIncomeInputs),
    (spending.calculate_subscriptions, spending.SubscriptionInputs),
    (stocks.calculate_beta, stocks.BetaInputs),
    (stocks.calculate_dividend_reinvestment, stocks.DividendReinvestmentInputs),
    (options.calculate_black_scholes, options.BlackScholesInputs),
    (portfolio.calculate_portfolio_risk, portfolio.PortfolioRiskInputs),
    (portfolio.calculate_correlation, portfolio.CorrelationInputs),
]


class TestDeterminism:
    """Test calculators are pure."""

    @pytest.mark.parametrize("calculator,inputs_type", CALCULATORS)
    def test_same_inputs_same_result(self, calculator, inputs_type):
        """Test repeated calls agree and leave the inputs untouched."""
        inputs = inputs_type()
        snapshot = copy.deepcopy(inputs)
        assert calculator(inputs) == calculator(inputs)
        assert inputs == snapshot

    def test_dated_calculators(self, fixed_date):
        """Test date-dependent calculators are repeatable with a fixed date."""
        first = calculate_credit_card(CreditCardInputs(start_date=fixed_date))
        second = calculate_credit_card(CreditCardInputs(start_date=fixed_date))
        assert first == second
        yields = [
            stocks.calculate_dividend_yield(stocks.DividendYieldInputs(as_of=fixed_date))
            for _ in range(2)
        ]
        assert yields[0] == yields[1]


class TestConfig:
    """Test settings and logging configuration."""

    def test_defaults(self):
        """Test default settings."""
        settings = Settings()
        assert settings.api_prefix == "/api"
        assert settings.port == 8000

    def test_env_override(self, monkeypatch):
        """Test settings read environment variables."""
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"

    def test_settings_cached(self):
        """Test get_settings returns one instance."""
        assert get_settings() is get_settings()

    def test_configure_logging_single_handler(self):
        """Test repeated configuration does not duplicate handlers."""
        configure_logging("INFO")
        logger = configure_logging("WARNING")
        assert logger.name == "fincalc"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        configure_logging("INFO")
