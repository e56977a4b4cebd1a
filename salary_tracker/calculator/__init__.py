"""Salary calculation package."""

from salary_tracker.calculator.salary import (
    aggregate_calculations,
    calculate_company_payroll,
    calculate_salary,
    format_currency,
    format_number,
    sort_earnings,
    total_earnings,
)

__all__ = [
    "aggregate_calculations",
    "calculate_company_payroll",
    "calculate_salary",
    "format_currency",
    "format_number",
    "sort_earnings",
    "total_earnings",
]
