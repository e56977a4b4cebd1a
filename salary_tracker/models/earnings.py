"""
Core Data Models for Salary Tracker

These models define the strict schemas for every record the system
persists or returns. They are designed to:
1. Enforce the record invariants at construction time
2. Read and write the persisted camelCase JSON shape unchanged
3. Coerce loosely-typed deserialized data into strong types

DESIGN DECISION: Persisted JSON keeps the field names the mobile app
has always written (firstName, dailyEarnings, employeeId, ...), so
existing stores stay readable. Python code uses snake_case; the
alias generator maps between the two.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_record_id() -> str:
    """Opaque identifier for a newly created record."""
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredModel(BaseModel):
    """Base for every record that round-trips through the key-value store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_storage_dict(self) -> dict:
        """Serialize to the JSON-ready camelCase shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# ENUMS
# =============================================================================

class UserRole(str, Enum):
    """
    Account kind.

    Individuals track their own earnings; companies track their employees'.
    """
    INDIVIDUAL = "individual"
    COMPANY = "company"


class ThemePreference(str, Enum):
    """UI theme stored alongside the data. Not used by any computation."""
    DARK = "dark"
    LIGHT = "light"


# =============================================================================
# ACCOUNTS
# =============================================================================

class User(StoredModel):
    """
    A registered account.

    Identity key is ``username`` (case-sensitive). The password is kept
    in plaintext; there is no real security in this application.
    """

    id: str = Field(default_factory=new_record_id)
    first_name: str
    last_name: str
    username: str
    password: str
    role: UserRole
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Session(BaseModel):
    """
    Who is signed in on this device.

    Returned by every account operation; the caller holds on to it and
    passes it back in. ``user`` is None for an anonymous session.
    """

    model_config = ConfigDict(frozen=True)

    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()


# =============================================================================
# EARNINGS
# =============================================================================

class DailyEarning(StoredModel):
    """
    One day's earning for an owner.

    Individuals own earnings directly (no ``employee_id``); companies
    own them through an Employee. An owner has at most one entry per date,
    enforced when appending (see EarningsRepository).
    """

    id: str = Field(default_factory=new_record_id)
    earning_date: date = Field(..., alias="date")
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Amount earned that day; strictly positive"
    )
    employee_id: Optional[str] = None


class Employee(StoredModel):
    """
    An employee tracked by a company account.

    Names are unique per company, compared case-insensitively.
    Employees are only ever appended to, never deleted.
    """

    id: str = Field(default_factory=new_record_id)
    name: str = Field(..., min_length=1)
    daily_earnings: list[DailyEarning] = Field(default_factory=list)
    user_id: str


class TaxRates(StoredModel):
    """
    Deduction percentages applied to gross salary.

    One instance is shared process-wide. Every rate is in [0, 100].
    """

    tax: float = Field(default=10.0, ge=0, le=100)
    retirement: float = Field(default=10.0, ge=0, le=100)
    insurance: float = Field(default=5.0, ge=0, le=100)


# =============================================================================
# DERIVED RESULTS (never persisted)
# =============================================================================

class SalaryCalculation(StoredModel):
    """
    Salary summary for one owner, or a pointwise sum over several.

    No rounding is applied; format for display only.
    """

    gross_salary: float = 0.0
    tax_deduction: float = 0.0
    retirement_deduction: float = 0.0
    insurance_deduction: float = 0.0
    total_deductions: float = 0.0
    net_salary: float = 0.0
    working_days: int = 0

    @classmethod
    def zero(cls) -> "SalaryCalculation":
        return cls()


class CompanyPayroll(StoredModel):
    """Per-employee salary summaries and their pointwise total."""

    per_employee: dict[str, SalaryCalculation] = Field(default_factory=dict)
    totals: SalaryCalculation = Field(default_factory=SalaryCalculation.zero)


class SalaryReport(StoredModel):
    """
    Everything the results screen shows for one signed-in user.

    Individuals get ``individual``; companies get ``payroll``. ``totals``
    is filled for both so callers can always show one summary.
    """

    user_id: str
    role: UserRole
    tax_rates: TaxRates
    individual: Optional[SalaryCalculation] = None
    payroll: Optional[CompanyPayroll] = None
    employee_names: dict[str, str] = Field(default_factory=dict)
    totals: SalaryCalculation = Field(default_factory=SalaryCalculation.zero)
