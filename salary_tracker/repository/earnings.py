"""
Earnings Repository

Loads and saves each owner's earnings data through the key-value store:
- individual users: a list of DailyEarning under individual_earnings_{userId}
- company users: a list of Employee under employees_{userId}
- everyone: the single shared TaxRates under tax_rates

GUARANTEES:
- Loads never raise. Missing, unreadable or malformed data comes back
  as an empty list (or the default rates).
- Saves are full overwrites of the owner's collection.
- Appends validate before writing; a rejected append writes nothing.

KNOWN LIMITATION: Appends are load -> validate -> append -> save. Two
writers sharing one store can lose each other's update. Only a single
writer per store is supported. Multi-writer safety would need an atomic
append (or versioned write) in the storage interface.
"""

import json
from datetime import date
from typing import Optional, Sequence, TypeVar, Union

from pydantic import Field, TypeAdapter, ValidationError as PydanticValidationError

from salary_tracker.audit import AuditLogger
from salary_tracker.config import get_settings
from salary_tracker.errors import NotFoundError, ValidationError
from salary_tracker.models import (
    DailyEarning,
    Employee,
    TaxRates,
    ThemePreference,
    ValidationResult,
)
from salary_tracker.services.storage import KeyValueStorageInterface
from salary_tracker.services.storage.keys import (
    TAX_RATES_KEY,
    THEME_PREFERENCE_KEY,
    employees_key,
    individual_earnings_key,
)
from salary_tracker.validation import EarningsValidator, coerce_amount, coerce_date


T = TypeVar("T")

_EARNINGS_ADAPTER = TypeAdapter(list[DailyEarning])
_EMPLOYEES_ADAPTER = TypeAdapter(list[Employee])


class _StoredTaxRates(TaxRates):
    """Stored rates; every field must be present, no model defaults fill gaps."""

    tax: float = Field(..., ge=0, le=100)
    retirement: float = Field(..., ge=0, le=100)
    insurance: float = Field(..., ge=0, le=100)


_TAX_RATES_ADAPTER = TypeAdapter(_StoredTaxRates)


class EarningsRepository:
    """Owner-scoped persistence for earnings, employees and tax rates."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        default_tax_rates: Optional[TaxRates] = None,
        validator: Optional[EarningsValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        if default_tax_rates is None:
            default_tax_rates = TaxRates(**get_settings().tax_defaults.model_dump())
        self._default_tax_rates = default_tax_rates
        self._validator = validator or EarningsValidator()
        self._audit = audit_logger or AuditLogger()

    @property
    def default_tax_rates(self) -> TaxRates:
        return self._default_tax_rates.model_copy()

    # -------------------------------------------------------------------------
    # Serialization helpers
    # -------------------------------------------------------------------------

    async def _load(self, key: str, adapter: TypeAdapter, default: T) -> T:
        raw = await self._storage.get(key)
        if raw is None:
            return default
        try:
            return adapter.validate_json(raw)
        except PydanticValidationError as e:
            self._audit.log_malformed_data(key, f"{e.error_count()} validation errors")
            return default

    async def _save(self, key: str, records: Union[list, dict]) -> bool:
        return await self._storage.set(key, json.dumps(records, ensure_ascii=False))

    def _reject(self, entity_type: str, result: ValidationResult) -> ValidationError:
        self._audit.log_input_rejected(
            entity_type, [issue.model_dump() for issue in result.issues]
        )
        return ValidationError(result)

    # -------------------------------------------------------------------------
    # Individual earnings
    # -------------------------------------------------------------------------

    async def load_individual_earnings(self, user_id: str) -> list[DailyEarning]:
        """The user's own earnings; empty if none are stored or they are malformed."""
        return await self._load(individual_earnings_key(user_id), _EARNINGS_ADAPTER, [])

    async def save_individual_earnings(
        self,
        user_id: str,
        earnings: Sequence[DailyEarning],
    ) -> bool:
        """Overwrite the user's earnings. Returns False if the write was dropped."""
        return await self._save(
            individual_earnings_key(user_id),
            [earning.to_storage_dict() for earning in earnings],
        )

    async def add_individual_earning(
        self,
        user_id: str,
        day: Union[date, str],
        amount: Union[float, int, str],
    ) -> DailyEarning:
        """
        Append one day's earning for an individual user.

        Raises:
            ValidationError: If the amount is not positive, the date is
                invalid, or an entry for that date already exists
        """
        earnings = await self.load_individual_earnings(user_id)

        result = self._validator.validate_earning(earnings, day, amount)
        if not result.is_valid:
            raise self._reject("earning", result)

        earning = DailyEarning(earning_date=coerce_date(day), amount=coerce_amount(amount))
        await self.save_individual_earnings(user_id, [*earnings, earning])

        self._audit.log_earning_added(
            owner_id=user_id,
            earning_id=earning.id,
            day=earning.earning_date.isoformat(),
            amount=earning.amount,
        )
        return earning

    # -------------------------------------------------------------------------
    # Company employees
    # -------------------------------------------------------------------------

    async def load_employees(self, user_id: str) -> list[Employee]:
        """The company's employees; empty if none are stored or they are malformed."""
        return await self._load(employees_key(user_id), _EMPLOYEES_ADAPTER, [])

    async def save_employees(self, user_id: str, employees: Sequence[Employee]) -> bool:
        """Overwrite the company's employees. Returns False if the write was dropped."""
        return await self._save(
            employees_key(user_id),
            [employee.to_storage_dict() for employee in employees],
        )

    async def add_employee(self, user_id: str, name: str) -> Employee:
        """
        Append a new employee to a company.

        Raises:
            ValidationError: If the name is empty or already used
                (case-insensitive)
        """
        employees = await self.load_employees(user_id)

        result = self._validator.validate_employee_name(employees, name)
        if not result.is_valid:
            raise self._reject("employee", result)

        employee = Employee(name=name.strip(), user_id=user_id)
        await self.save_employees(user_id, [*employees, employee])

        self._audit.log_employee_added(user_id, employee.id, employee.name)
        return employee

    async def add_employee_earning(
        self,
        user_id: str,
        employee_id: str,
        day: Union[date, str],
        amount: Union[float, int, str],
    ) -> Employee:
        """
        Append one day's earning to an employee.

        Returns the updated employee.

        Raises:
            NotFoundError: If the company has no employee with that id
            ValidationError: If the amount is not positive, the date is
                invalid, or the employee already has an entry for that date
        """
        employees = await self.load_employees(user_id)

        target = next((emp for emp in employees if emp.id == employee_id), None)
        if target is None:
            raise NotFoundError(f"Employee not found: {employee_id}")

        result = self._validator.validate_earning(target.daily_earnings, day, amount)
        if not result.is_valid:
            raise self._reject("earning", result)

        earning = DailyEarning(
            earning_date=coerce_date(day),
            amount=coerce_amount(amount),
            employee_id=employee_id,
        )
        updated = target.model_copy(
            update={"daily_earnings": [*target.daily_earnings, earning]}
        )
        await self.save_employees(
            user_id,
            [updated if emp.id == employee_id else emp for emp in employees],
        )

        self._audit.log_earning_added(
            owner_id=user_id,
            earning_id=earning.id,
            day=earning.earning_date.isoformat(),
            amount=earning.amount,
            employee_id=employee_id,
        )
        return updated

    # -------------------------------------------------------------------------
    # Tax rates (shared)
    # -------------------------------------------------------------------------

    async def load_tax_rates(self) -> TaxRates:
        """Saved rates, or the configured defaults if missing or malformed."""
        stored = await self._load(TAX_RATES_KEY, _TAX_RATES_ADAPTER, None)
        if stored is None:
            return self.default_tax_rates
        return TaxRates(tax=stored.tax, retirement=stored.retirement, insurance=stored.insurance)

    async def save_tax_rates(self, rates: Union[TaxRates, dict]) -> TaxRates:
        """
        Overwrite the shared tax rates.

        Raises:
            ValidationError: If any rate is missing or outside [0, 100];
                nothing is written
        """
        result = self._validator.validate_tax_rates(rates)
        if not result.is_valid:
            raise self._reject("tax_rates", result)

        values = rates.model_dump() if isinstance(rates, TaxRates) else rates
        saved = TaxRates(
            tax=coerce_amount(values["tax"]),
            retirement=coerce_amount(values["retirement"]),
            insurance=coerce_amount(values["insurance"]),
        )
        await self._save(TAX_RATES_KEY, saved.to_storage_dict())

        self._audit.log_tax_rates_updated(saved.tax, saved.retirement, saved.insurance)
        return saved

    # -------------------------------------------------------------------------
    # Theme (UI only)
    # -------------------------------------------------------------------------

    async def load_theme_preference(self) -> ThemePreference:
        """Stored theme; anything other than 'dark' reads as light."""
        raw = await self._storage.get(THEME_PREFERENCE_KEY)
        return ThemePreference.DARK if raw == ThemePreference.DARK.value else ThemePreference.LIGHT

    async def save_theme_preference(self, preference: ThemePreference) -> bool:
        return await self._storage.set(THEME_PREFERENCE_KEY, ThemePreference(preference).value)
