"""
Tests for amortization, discounting and mortgage calculators.
"""

import pytest
from datetime import date

from fincalc.calculations.amortization import (
    calculate_payment,
    calculate_loan_amount,
    calculate_remaining_balance,
    generate_amortization_schedule,
    calculate_total_interest,
)
from fincalc.calculations.timevalue import present_value, calculate_npv
from fincalc.calculations.mortgage import (
    MortgageInputs,
    MortgagePaymentInputs,
    RefinanceInputs,
    HomeAffordabilityInputs,
    InterestOnlyInputs,
    ARMvsFixedInputs,
    ClosingCostInputs,
    calculate_mortgage,
    calculate_mortgage_payment,
    calculate_refinance,
    calculate_home_affordability,
    calculate_interest_only,
    calculate_arm_vs_fixed,
    calculate_closing_costs,
)
from fincalc.errors import InvalidInputError


class TestAmortization:
    """Test loan amortization calculations."""

    def test_calculate_payment(self):
        """Test monthly payment calculation."""
        # $240k at 4.5% for 30 years
        payment = calculate_payment(240000, 4.5, 360)
        assert round(payment, 2) == 1216.04

    def test_zero_rate_is_linear(self):
        """Test zero rate falls back to principal / months."""
        assert calculate_payment(1200, 0, 12) == 100

    def test_non_positive_term_rejected(self):
        """Test a zero-month loan is rejected."""
        with pytest.raises(InvalidInputError) as exc:
            calculate_payment(1000, 5, 0)
        assert exc.value.field == "months"

    def test_loan_amount_inverts_payment(self):
        """Test loan amount is the inverse of the payment formula."""
        payment = calculate_payment(200000, 6, 360)
        assert abs(calculate_loan_amount(payment, 6, 360) - 200000) < 0.01

    def test_remaining_balance(self):
        """Test remaining balance at the start and end of the loan."""
        assert abs(calculate_remaining_balance(100000, 6, 60, 0) - 100000) < 0.01
        assert calculate_remaining_balance(100000, 6, 60, 60) < 0.01
        assert calculate_remaining_balance(1200, 0, 12, 6) == 600

    def test_amortization_schedule_length(self):
        """Test amortization schedule has correct number of periods."""
        schedule = generate_amortization_schedule(100000, 6, 60, start_date=date(2025, 1, 1))
        assert len(schedule) == 60
        assert schedule[1].date == date(2025, 2, 1)

    def test_amortization_io_periods(self):
        """Test interest-only periods in amortization."""
        schedule = generate_amortization_schedule(100000, 6, 60, io_months=12)
        assert len(schedule) == 72
        # First 12 periods should have 0 principal
        for i in range(12):
            assert schedule[i].principal == 0
            assert schedule[i].interest == 500

    def test_amortization_final_balance(self):
        """Test that final balance is approximately zero."""
        schedule = generate_amortization_schedule(100000, 6, 60)
        assert abs(schedule[-1].ending_balance) < 1

    def test_total_interest_matches_payments(self):
        """Test schedule interest equals payments minus principal."""
        schedule = generate_amortization_schedule(100000, 6, 60)
        payment = calculate_payment(100000, 6, 60)
        assert abs(calculate_total_interest(schedule) - (payment * 60 - 100000)) < 1


class TestTimeValue:
    """Test discounting helpers."""

    def test_present_value(self):
        """Test discounting a single amount."""
        assert abs(present_value(110, 10, 1) - 100) < 1e-9

    def test_npv_first_flow_undiscounted(self):
        """Test the t=0 flow is taken at face value."""
        assert calculate_npv([-100], 10) == -100
        assert abs(calculate_npv([-100, 110], 10)) < 1e-9

    def test_rate_at_minus_100_rejected(self):
        """Test a -100% discount rate is rejected."""
        with pytest.raises(InvalidInputError):
            calculate_npv([100, 100], -100)


class TestMortgage:
    """Test the fixed-rate mortgage calculator."""

    def test_standard_mortgage(self):
        """Test the standard annuity check value."""
        results = calculate_mortgage(
            MortgageInputs(loan_amount=300000, down_payment=60000, interest_rate=4.5, loan_term=30)
        )
        assert results.monthly_payment == 1216.04
        assert results.principal_amount == 240000
        assert results.schedule is None

    def test_total_interest_consistent(self):
        """Test monthly payment * payments - principal ~= total interest."""
        results = calculate_mortgage(MortgageInputs())
        expected = results.monthly_payment * 360 - results.principal_amount
        assert abs(expected - results.total_interest) < 2

    def test_zero_rate(self):
        """Test a zero-rate mortgage divides principal evenly."""
        results = calculate_mortgage(MortgageInputs(interest_rate=0))
        assert results.monthly_payment == 666.67
        assert results.total_interest == 0

    def test_down_payment_must_be_below_price(self):
        """Test a down payment covering the whole price is rejected."""
        with pytest.raises(InvalidInputError) as exc:
            calculate_mortgage(MortgageInputs(loan_amount=100000, down_payment=100000))
        assert exc.value.field == "down_payment"

    def test_negative_term_rejected(self):
        """Test a negative loan term is rejected."""
        with pytest.raises(InvalidInputError):
            calculate_mortgage(MortgageInputs(loan_term=-5))

    def test_schedule_included(self):
        """Test the optional schedule."""
        results = calculate_mortgage(
            MortgageInputs(include_schedule=True, start_date=date(2025, 3, 1))
        )
        assert len(results.schedule) == 360
        assert results.schedule[0].date == date(2025, 3, 1)
        assert results.schedule[0].payment == 1216.04


class TestMortgageFamily:
    """Test PITI, refinance, affordability, interest-only, ARM and closing costs."""

    def test_mortgage_payment_breakdown(self):
        """Test taxes and insurance are spread monthly."""
        results = calculate_mortgage_payment(MortgagePaymentInputs())
        assert results.monthly_taxes == 300
        assert results.monthly_insurance == 100
        assert results.monthly_principal_interest == 1520
        assert results.monthly_payment == 1920

    def test_refinance_break_even(self):
        """Test a lower rate pays back closing costs."""
        results = calculate_refinance(RefinanceInputs())
        assert results.monthly_savings > 0
        assert 20 < results.break_even_months < 40

    def test_refinance_without_savings(self):
        """Test break-even is None when the new payment is higher."""
        results = calculate_refinance(RefinanceInputs(new_interest_rate=7))
        assert results.monthly_savings < 0
        assert results.break_even_months is None

    def test_affordability_front_end_limit(self):
        """Test the 28% front-end ratio binds for low existing debt."""
        results = calculate_home_affordability(HomeAffordabilityInputs())
        # 28% of $8,333/month
        assert results.monthly_payment == 2333
        assert results.debt_to_income_ratio == 34.0
        assert results.max_purchase_price == results.max_loan_amount + 60000

    def test_affordability_clamps_to_zero(self):
        """Test heavy debts leave no room for a loan."""
        results = calculate_home_affordability(HomeAffordabilityInputs(monthly_debts=5000))
        assert results.max_loan_amount == 0
        assert results.monthly_payment == 0

    def test_interest_only_payment(self):
        """Test interest-only payment and payment shock."""
        results = calculate_interest_only(InterestOnlyInputs())
        assert results.interest_only_payment == 1125
        assert results.payment_increase > 0

    def test_interest_only_period_must_be_shorter(self):
        """Test an IO period covering the whole term is rejected."""
        with pytest.raises(InvalidInputError) as exc:
            calculate_interest_only(InterestOnlyInputs(interest_only_period=30, loan_term=30))
        assert exc.value.field == "interest_only_period"

    def test_arm_rate_path(self):
        """Test ARM adjustments respect the caps."""
        results = calculate_arm_vs_fixed(ARMvsFixedInputs())
        assert len(results.year_by_year) == 30
        assert results.year_by_year[0].arm_rate == 3.5
        assert results.year_by_year[9].arm_rate == 4.5
        assert all(year.arm_rate <= 8.5 for year in results.year_by_year)
        assert results.year_by_year[-1].arm_remaining == 0

    def test_arm_lifetime_cap(self):
        """Test large expected increases stop at the lifetime cap."""
        results = calculate_arm_vs_fixed(
            ARMvsFixedInputs(expected_rate_increase=10, rate_adjustment_cap=10, lifetime_cap=2)
        )
        assert max(year.arm_rate for year in results.year_by_year) == 5.5

    def test_closing_costs(self):
        """Test closing cost categories."""
        results = calculate_closing_costs(ClosingCostInputs())
        assert results.lender_fees == 2400
        assert results.government_fees == 600
        assert results.prepaid_items == 4500
        assert results.total_closing_costs == 10000
        assert results.itemized_costs[0].name == "Loan Origination Fee"

    def test_closing_costs_unknown_loan_type(self):
        """Test an unknown loan type is rejected."""
        with pytest.raises(InvalidInputError):
            calculate_closing_costs(ClosingCostInputs(loan_type="jumbo"))
