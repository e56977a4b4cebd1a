"""
Main Orchestrator for Salary Tracker

Ties the components together for the presentation layer:
1. ``create_app_components()`` builds storage, accounts and repository
   from configuration
2. ``SalaryReportFlow`` turns a session into the results-screen summary

The presentation layer issues one call at a time; nothing here runs in
the background.
"""

from typing import Optional

from salary_tracker.accounts import AccountDirectory
from salary_tracker.audit import AuditLogger
from salary_tracker.calculator import calculate_company_payroll, calculate_salary
from salary_tracker.config import Settings, get_settings
from salary_tracker.errors import NotAuthenticatedError
from salary_tracker.models import (
    SalaryReport,
    Session,
    TaxRates,
    UserRole,
)
from salary_tracker.repository import EarningsRepository
from salary_tracker.services.storage import KeyValueStorageInterface, create_storage
from salary_tracker.validation import EarningsValidator


class SalaryReportFlow:
    """
    Builds the salary summary for the signed-in user.

    Each owner is calculated on their own; a company's totals are the
    pointwise sum of its employees' calculations.
    """

    def __init__(self, repository: EarningsRepository):
        self._repository = repository

    async def build_report(self, session: Session) -> SalaryReport:
        """
        Load the session user's data and current rates, and calculate.

        Raises:
            NotAuthenticatedError: If the session is anonymous
        """
        if not session.is_authenticated:
            raise NotAuthenticatedError("Sign in to see salary results")

        user = session.user
        rates = await self._repository.load_tax_rates()

        if user.role == UserRole.COMPANY:
            employees = await self._repository.load_employees(user.id)
            payroll = calculate_company_payroll(employees, rates)
            return SalaryReport(
                user_id=user.id,
                role=user.role,
                tax_rates=rates,
                payroll=payroll,
                employee_names={emp.id: emp.name for emp in employees},
                totals=payroll.totals,
            )

        earnings = await self._repository.load_individual_earnings(user.id)
        individual = calculate_salary(earnings, rates)
        return SalaryReport(
            user_id=user.id,
            role=user.role,
            tax_rates=rates,
            individual=individual,
            totals=individual,
        )


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> tuple[AccountDirectory, EarningsRepository, SalaryReportFlow]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to build from; defaults to get_settings()
        storage: Pre-built storage backend; defaults to the one
                 selected by STORAGE_BACKEND

    Returns:
        (account_directory, earnings_repository, salary_report_flow)
    """
    settings = settings or get_settings()
    storage = storage or create_storage(settings.storage)
    audit_logger = AuditLogger()

    validator = EarningsValidator(
        min_password_length=settings.accounts.min_password_length
    )
    default_rates = TaxRates(**settings.tax_defaults.model_dump())

    accounts = AccountDirectory(
        storage,
        validator=validator,
        audit_logger=audit_logger,
    )
    repository = EarningsRepository(
        storage,
        default_tax_rates=default_rates,
        validator=validator,
        audit_logger=audit_logger,
    )

    return accounts, repository, SalaryReportFlow(repository)
