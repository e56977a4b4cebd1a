"""Tests for salary calculation and aggregation."""

from datetime import date, timedelta

import pytest

from salary_tracker.calculator import (
    aggregate_calculations,
    calculate_company_payroll,
    calculate_salary,
    format_currency,
    format_number,
    sort_earnings,
    total_earnings,
)
from salary_tracker.models import DailyEarning, Employee, SalaryCalculation, TaxRates


def earnings_of(*amounts, start=date(2024, 1, 1)):
    return [
        DailyEarning(earning_date=start + timedelta(days=i), amount=amount)
        for i, amount in enumerate(amounts)
    ]


DEFAULT_RATES = TaxRates(tax=10, retirement=10, insurance=5)


class TestCalculateSalary:
    """Tests for calculate_salary."""

    def test_end_to_end_example(self):
        """Test the documented two-day example."""
        calc = calculate_salary(earnings_of(1000, 500), DEFAULT_RATES)
        assert calc.gross_salary == 1500
        assert calc.tax_deduction == 150
        assert calc.retirement_deduction == 150
        assert calc.insurance_deduction == 75
        assert calc.total_deductions == 375
        assert calc.net_salary == 1125
        assert calc.working_days == 2

    def test_empty_earnings(self):
        """Test that no earnings yields all zeros."""
        calc = calculate_salary([], TaxRates(tax=33, retirement=7, insurance=1))
        assert calc.gross_salary == 0
        assert calc.total_deductions == 0
        assert calc.net_salary == 0
        assert calc.working_days == 0

    @pytest.mark.parametrize("amounts,rates", [
        ((0.1, 0.2, 0.3), TaxRates(tax=12.5, retirement=7.3, insurance=3.3)),
        ((199.99, 1.01), TaxRates(tax=100, retirement=100, insurance=100)),
        ((5,), TaxRates(tax=0, retirement=0, insurance=0)),
        ((1234.56, 789.01, 0.01, 42), TaxRates(tax=18, retirement=14, insurance=7.5)),
    ])
    def test_totals_are_consistent(self, amounts, rates):
        """Test net and total deductions are exact sums of their parts."""
        calc = calculate_salary(earnings_of(*amounts), rates)
        assert calc.total_deductions == (
            calc.tax_deduction + calc.retirement_deduction + calc.insurance_deduction
        )
        assert calc.net_salary == calc.gross_salary - calc.total_deductions

    def test_no_rounding(self):
        """Test that values are not rounded internally."""
        calc = calculate_salary(earnings_of(0.1, 0.2), DEFAULT_RATES)
        assert calc.gross_salary == 0.1 + 0.2

    def test_idempotent(self):
        """Test identical inputs give identical outputs."""
        earnings = earnings_of(300, 250.5, 99)
        assert calculate_salary(earnings, DEFAULT_RATES) == calculate_salary(earnings, DEFAULT_RATES)

    def test_working_days_counts_entries(self):
        calc = calculate_salary(earnings_of(1, 1, 1, 1), DEFAULT_RATES)
        assert calc.working_days == 4


class TestAggregation:
    """Tests for pointwise aggregation across owners."""

    def test_aggregate_nothing_is_zero(self):
        assert aggregate_calculations([]) == SalaryCalculation.zero()

    def test_aggregate_is_pointwise_sum(self):
        """Test every field of the aggregate is the sum of that field."""
        a = calculate_salary(earnings_of(1000, 500), DEFAULT_RATES)
        b = calculate_salary(earnings_of(200), DEFAULT_RATES)
        total = aggregate_calculations([a, b])
        assert total.gross_salary == a.gross_salary + b.gross_salary
        assert total.tax_deduction == a.tax_deduction + b.tax_deduction
        assert total.retirement_deduction == a.retirement_deduction + b.retirement_deduction
        assert total.insurance_deduction == a.insurance_deduction + b.insurance_deduction
        assert total.total_deductions == a.total_deductions + b.total_deductions
        assert total.net_salary == a.net_salary + b.net_salary
        assert total.working_days == 3

    def test_aggregate_keeps_per_owner_rates(self):
        """Test owners computed at different rates are summed, not recomputed."""
        first = earnings_of(100)
        second = earnings_of(200)
        low = TaxRates(tax=10, retirement=0, insurance=0)
        high = TaxRates(tax=20, retirement=0, insurance=0)

        total = aggregate_calculations([
            calculate_salary(first, low),
            calculate_salary(second, high),
        ])
        merged = calculate_salary(first + second, low)

        assert total.tax_deduction == 50
        assert total.net_salary == 250
        assert total.tax_deduction != merged.tax_deduction


class TestCompanyPayroll:
    """Tests for calculate_company_payroll."""

    def test_per_employee_and_totals(self):
        """Test each employee is calculated separately and totals are summed."""
        ayse = Employee(id="e1", name="Ayse", user_id="c1", daily_earnings=earnings_of(1000, 500))
        mehmet = Employee(id="e2", name="Mehmet", user_id="c1", daily_earnings=earnings_of(400))

        payroll = calculate_company_payroll([ayse, mehmet], DEFAULT_RATES)

        assert payroll.per_employee["e1"].net_salary == 1125
        assert payroll.per_employee["e2"].gross_salary == 400
        assert payroll.totals == aggregate_calculations(payroll.per_employee.values())
        assert payroll.totals.working_days == 3

    def test_employee_without_earnings(self):
        """Test an employee with no entries contributes zeros."""
        idle = Employee(id="e1", name="Idle", user_id="c1")
        payroll = calculate_company_payroll([idle], DEFAULT_RATES)
        assert payroll.per_employee["e1"] == SalaryCalculation.zero()
        assert payroll.totals == SalaryCalculation.zero()

    def test_no_employees(self):
        payroll = calculate_company_payroll([], DEFAULT_RATES)
        assert payroll.per_employee == {}
        assert payroll.totals.working_days == 0


class TestDisplayHelpers:
    """Tests for sorting and formatting helpers."""

    def test_sort_newest_first(self):
        earnings = [
            DailyEarning(earning_date=date(2024, 1, 2), amount=1),
            DailyEarning(earning_date=date(2024, 1, 5), amount=1),
            DailyEarning(earning_date=date(2024, 1, 1), amount=1),
        ]
        ordered = sort_earnings(earnings)
        assert [e.earning_date.day for e in ordered] == [5, 2, 1]
        assert [e.earning_date.day for e in sort_earnings(earnings, newest_first=False)] == [1, 2, 5]

    def test_total_earnings(self):
        assert total_earnings(earnings_of(10, 20.5)) == 30.5
        assert total_earnings([]) == 0

    @pytest.mark.parametrize("amount,expected", [
        (1500, "₺1.500,00"),
        (0, "₺0,00"),
        (1234567.891, "₺1.234.567,89"),
        (-375, "-₺375,00"),
    ])
    def test_format_currency(self, amount, expected):
        """Test Turkish lira formatting."""
        assert format_currency(amount) == expected

    @pytest.mark.parametrize("value,expected", [
        (1234567, "1.234.567"),
        (12, "12"),
        (1234.5, "1.234,5"),
        (0.1234, "0,123"),
        (2.5004, "2,5"),
        (-1500.25, "-1.500,25"),
    ])
    def test_format_number(self, value, expected):
        """Test up to three fraction digits without trailing zeros."""
        assert format_number(value) == expected

    def test_format_number_fixed_decimals(self):
        assert format_number(1234.5, decimals=1) == "1.234,5"
        assert format_number(1234.4, decimals=0) == "1.234"
