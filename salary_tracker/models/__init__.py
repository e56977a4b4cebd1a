"""
Data Models Package

This package contains all Pydantic models used in the Salary Tracker system.
All data flowing through the system must conform to these schemas.
"""

from salary_tracker.models.earnings import (
    CompanyPayroll,
    DailyEarning,
    Employee,
    SalaryCalculation,
    SalaryReport,
    Session,
    TaxRates,
    ThemePreference,
    User,
    UserRole,
    new_record_id,
)
from salary_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from salary_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Earnings models
    "CompanyPayroll",
    "DailyEarning",
    "Employee",
    "SalaryCalculation",
    "SalaryReport",
    "Session",
    "TaxRates",
    "ThemePreference",
    "User",
    "UserRole",
    "new_record_id",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
