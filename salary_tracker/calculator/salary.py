"""
Salary Calculation

DESIGN DECISION: The calculation is a pure function of an earnings
collection and the deduction rates. Nothing is rounded here; values are
plain floats so the presentation layer decides how to display them.

Aggregation across owners (a company's total payroll) is the pointwise
sum of each owner's own SalaryCalculation. Rates are applied per owner
first and the results summed; a total is never recomputed from a merged
earnings list, so per-owner rates can be introduced without changing
how totals are built.
"""

from typing import Iterable, Optional, Sequence

from salary_tracker.models import (
    CompanyPayroll,
    DailyEarning,
    Employee,
    SalaryCalculation,
    TaxRates,
)


def calculate_salary(
    earnings: Sequence[DailyEarning],
    rates: TaxRates,
) -> SalaryCalculation:
    """
    Summarize one owner's earnings after deductions.

    Each deduction is ``gross * rate / 100``; net is gross minus the sum
    of the three deductions. An empty collection yields all zeros.
    """
    gross_salary = sum((earning.amount for earning in earnings), 0.0)

    tax_deduction = gross_salary * rates.tax / 100
    retirement_deduction = gross_salary * rates.retirement / 100
    insurance_deduction = gross_salary * rates.insurance / 100

    total_deductions = tax_deduction + retirement_deduction + insurance_deduction

    return SalaryCalculation(
        gross_salary=gross_salary,
        tax_deduction=tax_deduction,
        retirement_deduction=retirement_deduction,
        insurance_deduction=insurance_deduction,
        total_deductions=total_deductions,
        net_salary=gross_salary - total_deductions,
        working_days=len(earnings),
    )


def aggregate_calculations(calculations: Iterable[SalaryCalculation]) -> SalaryCalculation:
    """Pointwise sum of every field. No calculations sum to zero."""
    totals = SalaryCalculation.zero()
    for calc in calculations:
        totals = SalaryCalculation(
            gross_salary=totals.gross_salary + calc.gross_salary,
            tax_deduction=totals.tax_deduction + calc.tax_deduction,
            retirement_deduction=totals.retirement_deduction + calc.retirement_deduction,
            insurance_deduction=totals.insurance_deduction + calc.insurance_deduction,
            total_deductions=totals.total_deductions + calc.total_deductions,
            net_salary=totals.net_salary + calc.net_salary,
            working_days=totals.working_days + calc.working_days,
        )
    return totals


def calculate_company_payroll(
    employees: Sequence[Employee],
    rates: TaxRates,
) -> CompanyPayroll:
    """Per-employee calculations keyed by employee id, plus their total."""
    per_employee = {
        employee.id: calculate_salary(employee.daily_earnings, rates)
        for employee in employees
    }
    return CompanyPayroll(
        per_employee=per_employee,
        totals=aggregate_calculations(per_employee.values()),
    )


def total_earnings(earnings: Iterable[DailyEarning]) -> float:
    return sum((earning.amount for earning in earnings), 0.0)


def sort_earnings(
    earnings: Iterable[DailyEarning],
    newest_first: bool = True,
) -> list[DailyEarning]:
    """Earnings ordered by date for display."""
    return sorted(earnings, key=lambda e: e.earning_date, reverse=newest_first)


# =============================================================================
# DISPLAY FORMATTING (the only place values are rounded)
# =============================================================================

def _group_thousands(integer_part: str, separator: str) -> str:
    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)
    return separator.join(groups)


def format_number(value: float, decimals: Optional[int] = None) -> str:
    """
    Turkish-style number: '.' groups thousands, ',' marks decimals.

    With ``decimals`` unset, up to three fraction digits are shown and
    trailing zeros dropped.

    >>> format_number(1234567)
    '1.234.567'
    >>> format_number(1234.5)
    '1.234,5'
    """
    sign = "-" if value < 0 else ""
    if decimals is None:
        text = f"{abs(value):.3f}".rstrip("0").rstrip(".")
    else:
        text = f"{abs(value):.{decimals}f}"
    integer_part, _, fraction = text.partition(".")
    grouped = _group_thousands(integer_part, ".")
    return f"{sign}{grouped},{fraction}" if fraction else f"{sign}{grouped}"


def format_currency(amount: float) -> str:
    """
    Amount in Turkish lira with two decimals.

    >>> format_currency(1500)
    '₺1.500,00'
    """
    formatted = format_number(amount, decimals=2)
    if formatted.startswith("-"):
        return f"-₺{formatted[1:]}"
    return f"₺{formatted}"
