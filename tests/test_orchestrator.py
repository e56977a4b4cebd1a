"""Tests for component wiring and the salary report flow."""

import pytest
from structlog.testing import capture_logs

from salary_tracker.accounts import AccountDirectory
from salary_tracker.audit import AuditLogger
from salary_tracker.calculator import aggregate_calculations
from salary_tracker.config import Settings, validate_all_settings
from salary_tracker.errors import NotAuthenticatedError
from salary_tracker.models import Session, TaxRates, UserRole
from salary_tracker.orchestrator import SalaryReportFlow, create_app_components
from salary_tracker.repository import EarningsRepository
from salary_tracker.services.storage import MemoryKeyValueStore


@pytest.fixture
def reports(repository) -> SalaryReportFlow:
    return SalaryReportFlow(repository)


class TestSalaryReportFlow:
    """Tests for SalaryReportFlow.build_report."""

    async def test_anonymous_rejected(self, reports):
        with pytest.raises(NotAuthenticatedError):
            await reports.build_report(Session.anonymous())

    async def test_individual_report(self, accounts, repository, reports):
        """Test the documented example through the full stack."""
        session = await accounts.register("Ali", "Veli", "ali", "1234", "individual")
        await repository.add_individual_earning(session.user.id, "2024-01-01", 1000)
        await repository.add_individual_earning(session.user.id, "2024-01-02", 500)

        report = await reports.build_report(session)

        assert report.role == UserRole.INDIVIDUAL
        assert report.payroll is None
        assert report.individual.gross_salary == 1500
        assert report.individual.net_salary == 1125
        assert report.totals == report.individual

    async def test_company_report(self, accounts, repository, reports):
        """Test company totals are the pointwise sum of employee results."""
        session = await accounts.register("Acme", "Ltd", "acme", "secret", "company")
        company_id = session.user.id
        ayse = await repository.add_employee(company_id, "Ayse")
        mehmet = await repository.add_employee(company_id, "Mehmet")
        await repository.add_employee_earning(company_id, ayse.id, "2024-01-01", 1000)
        await repository.add_employee_earning(company_id, ayse.id, "2024-01-02", 500)
        await repository.add_employee_earning(company_id, mehmet.id, "2024-01-01", 800)

        report = await reports.build_report(session)

        assert report.individual is None
        assert report.employee_names == {ayse.id: "Ayse", mehmet.id: "Mehmet"}
        assert report.payroll.per_employee[ayse.id].net_salary == 1125
        assert report.totals == aggregate_calculations(report.payroll.per_employee.values())
        assert report.totals.gross_salary == 2300
        assert report.totals.working_days == 3

    async def test_report_uses_saved_rates(self, accounts, repository, reports):
        session = await accounts.register("Ali", "Veli", "ali", "1234", "individual")
        await repository.add_individual_earning(session.user.id, "2024-01-01", 200)
        await repository.save_tax_rates(TaxRates(tax=50, retirement=0, insurance=0))

        report = await reports.build_report(session)

        assert report.tax_rates.tax == 50
        assert report.totals.net_salary == 100

    async def test_company_without_employees(self, accounts, reports):
        session = await accounts.register("Acme", "Ltd", "acme", "secret", "company")
        report = await reports.build_report(session)
        assert report.totals.gross_salary == 0
        assert report.payroll.per_employee == {}


class TestCreateAppComponents:
    """Tests for create_app_components."""

    async def test_components_share_storage(self):
        storage = MemoryKeyValueStore()
        accounts, repository, reports = create_app_components(Settings(), storage=storage)

        assert isinstance(accounts, AccountDirectory)
        assert isinstance(repository, EarningsRepository)
        assert isinstance(reports, SalaryReportFlow)

        session = await accounts.register("Ali", "Veli", "ali", "1234", "individual")
        await repository.add_individual_earning(session.user.id, "2024-01-01", 100)
        report = await reports.build_report(session)

        assert report.totals.gross_salary == 100
        assert "users" in storage.raw

    async def test_defaults_from_environment(self, monkeypatch):
        """Test default tax rates and backend come from configuration."""
        monkeypatch.setenv("SALARY_DEFAULT_TAX", "20")
        monkeypatch.setenv("STORAGE_BACKEND", "memory")

        _, repository, _ = create_app_components(Settings())

        assert (await repository.load_tax_rates()).tax == 20

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["tax_defaults"] is True
        assert "google_sheets" not in results

    def test_validate_reports_bad_values(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        monkeypatch.setenv("SALARY_DEFAULT_TAX", "250")
        results = validate_all_settings()
        assert results["tax_defaults"] is False
        assert "tax_defaults_error" in results


class TestAuditLogging:
    """Tests that actions emit structured audit events."""

    async def test_failed_login_is_logged_without_password(self, storage):
        directory = AccountDirectory(storage, audit_logger=AuditLogger("test.audit"))
        await directory.register("Ali", "Veli", "ali", "1234", "individual")

        with capture_logs() as logs:
            directory = AccountDirectory(storage, audit_logger=AuditLogger("test.audit.login"))
            with pytest.raises(Exception):
                await directory.login("ali", "hunter2")

        events = [entry for entry in logs if entry.get("event_type") == "login_failed"]
        assert len(events) == 1
        assert events[0]["log_level"] == "warning"
        assert "hunter2" not in repr(events[0])

    async def test_rejected_input_is_logged(self, storage):
        repo = EarningsRepository(
            storage,
            default_tax_rates=TaxRates(),
            audit_logger=AuditLogger("test.audit.rejected"),
        )
        with capture_logs() as logs:
            with pytest.raises(Exception):
                await repo.add_individual_earning("u1", "2024-01-01", -1)

        rejected = [entry for entry in logs if entry.get("event_type") == "input_rejected"]
        assert rejected[0]["details"]["issues"][0]["field"] == "amount"
