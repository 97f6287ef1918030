"""
Tests for stock, options and portfolio calculators.
"""

import pytest
from datetime import date

from fincalc.calculations.stocks import (
    StockReturnInputs,
    DividendYieldInputs,
    DividendReinvestmentInputs,
    DCAInputs,
    BetaInputs,
    calculate_stock_return,
    calculate_dividend_yield,
    calculate_dividend_reinvestment,
    calculate_dca,
    calculate_beta,
)
from fincalc.calculations.options import (
    BlackScholesInputs,
    CoveredCallInputs,
    PutCallParityInputs,
    ImpliedVolatilityInputs,
    normal_cdf,
    black_scholes,
    calculate_black_scholes,
    calculate_covered_call,
    calculate_put_call_parity,
    solve_implied_volatility,
    calculate_implied_volatility,
)
from fincalc.calculations.portfolio import (
    AssetAllocationInputs,
    Holding,
    PortfolioRebalancingInputs,
    SharpeRatioInputs,
    CorrelationInputs,
    Asset,
    PortfolioRiskInputs,
    variance,
    covariance,
    max_drawdown,
    calculate_asset_allocation,
    calculate_portfolio_rebalancing,
    calculate_sharpe_ratio,
    calculate_correlation,
    calculate_portfolio_risk,
)
from fincalc.errors import InvalidInputError, DegenerateResultError, ConvergenceError


class TestStocks:
    """Test stock return, dividend, DCA and beta calculators."""

    def test_stock_return(self):
        """Test total and annualized return including dividends."""
        results = calculate_stock_return(StockReturnInputs())
        assert results.capital_gains == 50
        assert results.dividend_income == 8.6
        assert results.total_return == 58.6
        assert 12 < results.annualized_return < 12.5

    def test_zero_holding_period_rejected(self):
        """Test the holding period must be positive."""
        with pytest.raises(InvalidInputError) as exc:
            calculate_stock_return(StockReturnInputs(holding_period=0))
        assert exc.value.field == "holding_period"

    def test_dividend_yield_schedule(self):
        """Test yield and quarterly payout dates."""
        results = calculate_dividend_yield(DividendYieldInputs(as_of=date(2025, 1, 15)))
        assert results.dividend_yield == 4.0
        assert results.payout_schedule == [
            date(2025, 1, 15),
            date(2025, 4, 15),
            date(2025, 7, 15),
            date(2025, 10, 15),
        ]

    def test_dividend_yield_monthly(self):
        """Test monthly payouts produce twelve dates."""
        results = calculate_dividend_yield(
            DividendYieldInputs(payout_frequency="monthly", as_of=date(2025, 1, 31))
        )
        assert len(results.payout_schedule) == 12
        assert results.payout_schedule[1] == date(2025, 2, 28)

    def test_dividend_reinvestment_no_growth(self):
        """Test no dividends and no growth leaves the position unchanged."""
        results = calculate_dividend_reinvestment(
            DividendReinvestmentInputs(annual_dividend=0, growth_rate=0)
        )
        assert results.final_value == 10000
        assert results.total_shares == 200
        assert results.total_dividends == 0

    def test_dividend_reinvestment_adds_shares(self):
        """Test reinvested dividends increase the share count."""
        results = calculate_dividend_reinvestment(DividendReinvestmentInputs())
        assert results.total_shares > 200
        assert len(results.yearly_breakdown) == 10

    def test_dca_constant_price(self):
        """Test a flat price gives zero return."""
        results = calculate_dca(DCAInputs(price_history=[100] * 12))
        assert results.total_invested == 6000
        assert results.total_shares == 60
        assert results.average_cost == 100
        assert results.return_on_investment == 0

    def test_dca_limited_by_history(self):
        """Test buys stop at the end of the price history."""
        results = calculate_dca(DCAInputs(years=2))
        assert results.months_invested == 12

    def test_dca_limited_by_years(self):
        """Test buys stop after years * 12 months."""
        results = calculate_dca(DCAInputs(years=0.5))
        assert results.months_invested == 6
        assert results.total_invested == 3000

    def test_beta_identical_series(self):
        """Test a stock that moves with the market has beta 1."""
        returns = [2.5, -1.8, 3.2, -0.5, 1.7]
        results = calculate_beta(BetaInputs(stock_returns=returns, market_returns=list(returns)))
        assert results.beta == 1.0
        assert results.correlation == 1.0
        assert results.r_squared == 1.0

    def test_beta_doubled_returns(self):
        """Test a stock moving twice as much has beta 2."""
        market = [1.8, -1.2, 2.5, 0.3, 1.1]
        results = calculate_beta(
            BetaInputs(stock_returns=[2 * r for r in market], market_returns=market)
        )
        assert results.beta == 2.0

    def test_beta_length_mismatch_rejected(self):
        """Test paired series must have equal length."""
        with pytest.raises(InvalidInputError):
            calculate_beta(BetaInputs(stock_returns=[1, 2, 3], market_returns=[1, 2]))

    def test_beta_flat_market_is_degenerate(self):
        """Test zero market variance leaves beta undefined."""
        with pytest.raises(DegenerateResultError):
            calculate_beta(BetaInputs(stock_returns=[1, 2, 3], market_returns=[1, 1, 1]))


class TestOptions:
    """Test Black-Scholes, covered calls, parity and implied volatility."""

    def test_normal_cdf(self):
        """Test the CDF at zero and its symmetry."""
        assert normal_cdf(0) == pytest.approx(0.5, abs=1e-6)
        assert normal_cdf(1.5) + normal_cdf(-1.5) == pytest.approx(1.0)
        assert normal_cdf(1.96) == pytest.approx(0.975, abs=1e-4)

    def test_black_scholes_call(self):
        """Test an at-the-money call price."""
        results = calculate_black_scholes(BlackScholesInputs())
        assert 8.5 < results.option_price < 10
        assert 0 < results.delta < 1

    def test_black_scholes_parity(self):
        """Test unrounded call and put prices satisfy put-call parity."""
        call = black_scholes(BlackScholesInputs(option_type="call"))
        put = black_scholes(BlackScholesInputs(option_type="put"))
        parity = 100 - 100 * 2.718281828459045 ** (-0.025)
        assert call.option_price - put.option_price == pytest.approx(parity, abs=0.01)
        assert put.delta < 0

    @pytest.mark.parametrize(
        "stock_price,strike_price,rate,years,volatility",
        [
            (100, 100, 2.5, 1, 20),  # at the money
            (120, 100, 5, 0.5, 30),  # call in the money
            (80, 100, 3, 0.25, 25),  # call out of the money
            (100, 90, 4, 10, 35),  # long dated
            (50, 55, 1, 0.1, 60),  # short dated, high volatility
        ],
    )
    def test_black_scholes_prices_pass_parity_check(
        self, stock_price, strike_price, rate, years, volatility
    ):
        """Test rounded call and put prices show no parity arbitrage."""
        contract = dict(
            stock_price=stock_price,
            strike_price=strike_price,
            risk_free_rate=rate,
            time_to_expiry=years,
        )
        call = calculate_black_scholes(
            BlackScholesInputs(volatility=volatility, option_type="call", **contract)
        )
        put = calculate_black_scholes(
            BlackScholesInputs(volatility=volatility, option_type="put", **contract)
        )
        results = calculate_put_call_parity(
            PutCallParityInputs(
                call_price=call.option_price, put_price=put.option_price, **contract
            )
        )
        assert results.deviation <= 0.01
        assert results.arbitrage_opportunity is False

    def test_zero_volatility_rejected(self):
        """Test volatility must be positive."""
        with pytest.raises(InvalidInputError) as exc:
            calculate_black_scholes(BlackScholesInputs(volatility=0))
        assert exc.value.field == "volatility"

    def test_unknown_option_type_rejected(self):
        """Test only calls and puts are priced."""
        with pytest.raises(InvalidInputError):
            calculate_black_scholes(BlackScholesInputs(option_type="straddle"))

    def test_covered_call(self):
        """Test covered call payoff profile."""
        results = calculate_covered_call(CoveredCallInputs())
        assert results.max_profit == 800
        assert results.max_loss == 10000
        assert results.breakeven == 97
        assert results.return_if_unchanged == 3.0
        assert results.annualized_return == 36.5

    def test_parity_holds(self):
        """Test a small deviation is not an arbitrage."""
        results = calculate_put_call_parity(PutCallParityInputs())
        assert not results.arbitrage_opportunity
        assert results.recommended_action == "No significant arbitrage opportunity"

    def test_parity_rich_calls(self):
        """Test expensive calls suggest selling the call."""
        results = calculate_put_call_parity(PutCallParityInputs(call_price=8))
        assert results.arbitrage_opportunity
        assert results.recommended_action == "Buy stock and put, sell call and bonds"

    def test_parity_cheap_calls(self):
        """Test cheap calls suggest buying the call."""
        results = calculate_put_call_parity(PutCallParityInputs(call_price=1))
        assert results.recommended_action == "Sell stock and put, buy call and bonds"

    def test_implied_volatility_recovers_input(self):
        """Test solving for the volatility used to price the option."""
        price = black_scholes(BlackScholesInputs(volatility=25)).option_price
        results = calculate_implied_volatility(ImpliedVolatilityInputs(option_price=price))
        assert results.converged
        assert results.implied_volatility == pytest.approx(25, abs=0.01)
        assert results.confidence_interval.lower == pytest.approx(20, abs=0.01)
        assert results.confidence_interval.upper == pytest.approx(30, abs=0.01)

    def test_implied_volatility_put(self):
        """Test the solver works for puts."""
        price = black_scholes(BlackScholesInputs(volatility=40, option_type="put")).option_price
        solution = solve_implied_volatility(
            ImpliedVolatilityInputs(option_price=price, option_type="put")
        )
        assert solution.converged
        assert solution.volatility == pytest.approx(40, abs=0.01)

    def test_implied_volatility_unreachable_price(self):
        """Test a call priced above the stock does not converge."""
        results = calculate_implied_volatility(ImpliedVolatilityInputs(option_price=150))
        assert not results.converged
        assert results.implied_volatility is None
        assert results.confidence_interval is None

    def test_implied_volatility_strict(self):
        """Test strict mode raises instead of returning an empty solution."""
        with pytest.raises(ConvergenceError):
            solve_implied_volatility(ImpliedVolatilityInputs(option_price=150), strict=True)


class TestPortfolio:
    """Test portfolio statistics and calculators."""

    def test_population_statistics(self):
        """Test variance and covariance divide by n."""
        assert variance([1, 2, 3, 4]) == pytest.approx(1.25)
        assert covariance([1, 2, 3, 4], [1, 2, 3, 4]) == pytest.approx(1.25)

    def test_asset_allocation_defaults(self):
        """Test a long horizon tilts toward stocks."""
        results = calculate_asset_allocation(AssetAllocationInputs())
        assert (results.stocks, results.bonds, results.cash, results.other) == (65, 25, 10, 0)

    def test_asset_allocation_large_portfolio(self):
        """Test large portfolios carve out alternatives."""
        results = calculate_asset_allocation(AssetAllocationInputs(portfolio_value=2_000_000))
        assert (results.stocks, results.bonds, results.cash, results.other) == (60, 20, 10, 10)
        assert any("alternative" in rec for rec in results.recommendations)

    def test_asset_allocation_sums_to_100(self):
        """Test clamped buckets are normalized."""
        results = calculate_asset_allocation(
            AssetAllocationInputs(risk_tolerance=100, investment_horizon=2, current_age=60)
        )
        assert results.stocks + results.bonds + results.cash + results.other == 100
        assert results.bonds == 0

    def test_asset_allocation_rounding_keeps_total(self):
        """Test leftover points go to the largest fractional shares."""
        # Clamped buckets 95/0/10/10 scale to 82.6/0/8.7/8.7
        results = calculate_asset_allocation(
            AssetAllocationInputs(
                risk_tolerance=95, investment_horizon=20, portfolio_value=2_000_000
            )
        )
        assert (results.stocks, results.bonds, results.cash, results.other) == (82, 0, 9, 9)

    def test_rebalancing_trades(self):
        """Test trades toward a 60/30/10 target."""
        results = calculate_portfolio_rebalancing(PortfolioRebalancingInputs())
        assert results.total_value == 108000
        trades = {trade.asset: trade for trade in results.trades}
        assert (trades["stocks"].action, trades["stocks"].shares) == ("sell", 52)
        assert (trades["bonds"].action, trades["bonds"].shares) == ("buy", 2)
        assert (trades["cash"].action, trades["cash"].shares) == ("buy", 2800)

    def test_rebalancing_targets_must_sum_to_100(self):
        """Test targets that do not add up are rejected."""
        with pytest.raises(InvalidInputError) as exc:
            calculate_portfolio_rebalancing(
                PortfolioRebalancingInputs(target_allocations={"stocks": 60, "bonds": 30})
            )
        assert exc.value.field == "target_allocations"

    def test_rebalancing_missing_holding(self):
        """Test a target without a holding is rejected."""
        with pytest.raises(InvalidInputError):
            calculate_portfolio_rebalancing(
                PortfolioRebalancingInputs(
                    target_allocations={"stocks": 50, "gold": 50},
                    current_holdings={"stocks": Holding(value=1000, price=10)},
                )
            )

    def test_rebalancing_already_balanced(self):
        """Test a balanced portfolio needs no trades."""
        results = calculate_portfolio_rebalancing(
            PortfolioRebalancingInputs(
                target_allocations={"stocks": 50, "bonds": 50},
                current_holdings={
                    "stocks": Holding(value=5000, price=10),
                    "bonds": Holding(value=5000, price=10),
                },
            )
        )
        assert results.trades == []

    def test_sharpe_ratio_annual(self):
        """Test annual periods are not scaled."""
        results = calculate_sharpe_ratio(SharpeRatioInputs(period="annual"))
        assert results.annualized_sharpe == results.sharpe_ratio

    def test_sharpe_constant_returns_degenerate(self):
        """Test zero volatility leaves the ratio undefined."""
        with pytest.raises(DegenerateResultError):
            calculate_sharpe_ratio(SharpeRatioInputs(returns=[5, 5, 5]))

    def test_correlation_identical(self):
        """Test identical series are perfectly correlated."""
        returns = [2.5, -1.8, 3.2, -0.5, 1.7]
        results = calculate_correlation(
            CorrelationInputs(asset1_returns=returns, asset2_returns=list(returns))
        )
        assert results.correlation == 1.0
        assert results.r_squared == 100.0
        assert results.significance == 100.0

    def test_correlation_needs_three_points(self):
        """Test two observations are not enough."""
        with pytest.raises(InvalidInputError):
            calculate_correlation(CorrelationInputs(asset1_returns=[1, 2], asset2_returns=[2, 1]))

    def test_max_drawdown(self):
        """Test drawdown is measured on compounded wealth."""
        assert max_drawdown([10, -50]) == pytest.approx(50.0)
        assert max_drawdown([5, 5]) == 0

    def test_portfolio_risk(self):
        """Test VaR is 1.645 standard deviations."""
        results = calculate_portfolio_risk(PortfolioRiskInputs())
        assert results.var_five_percent == pytest.approx(1.645 * results.portfolio_risk, abs=0.02)
        assert results.max_drawdown >= 0

    def test_portfolio_risk_flat_returns_degenerate(self):
        """Test a riskless portfolio leaves the Sharpe ratio undefined."""
        with pytest.raises(DegenerateResultError):
            calculate_portfolio_risk(
                PortfolioRiskInputs(assets=[Asset(name="Cash", weight=1, returns=[1, 1, 1])])
            )
