"""
Audit Models for Salary Tracker

Account and earnings actions each produce one AuditEvent. Events are
written to the structured log; they are not persisted to the key-value
store.

Passwords never appear in an event.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Accounts
    USER_REGISTERED = "user_registered"
    REGISTRATION_REJECTED = "registration_rejected"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGGED_OUT = "logged_out"
    SESSION_RESTORED = "session_restored"

    # Earnings
    EARNING_ADDED = "earning_added"
    EMPLOYEE_ADDED = "employee_added"
    INPUT_REJECTED = "input_rejected"
    TAX_RATES_UPDATED = "tax_rates_updated"

    # Storage
    MALFORMED_DATA = "malformed_data"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What the event is about: 'user', 'employee', 'earning', 'tax_rates', 'storage_key'
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.user_registered(user_id, username, role)
        event = AuditEventBuilder.login_failed(username, reason)
    """

    @staticmethod
    def user_registered(user_id: str, username: str, role: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_REGISTERED,
            entity_type="user",
            entity_id=user_id,
            description="User registered",
            details={"username": username, "role": role},
            is_user_action=True,
        )

    @staticmethod
    def registration_rejected(username: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REGISTRATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            description=f"Registration rejected with {len(issues)} issues",
            details={"username": username, "issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def login_succeeded(user_id: str, username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            entity_type="user",
            entity_id=user_id,
            description="User logged in",
            details={"username": username},
            is_user_action=True,
        )

    @staticmethod
    def login_failed(username: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            description=f"Login failed ({reason})",
            details={"username": username, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def logged_out(user_id: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGGED_OUT,
            entity_type="user",
            entity_id=user_id,
            description="User logged out",
            is_user_action=True,
        )

    @staticmethod
    def session_restored(user_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_RESTORED,
            entity_type="user",
            entity_id=user_id,
            description="Session restored from stored pointer",
        )

    @staticmethod
    def earning_added(
        owner_id: str,
        earning_id: str,
        day: str,
        amount: float,
        employee_id: Optional[str] = None,
    ) -> AuditEvent:
        details = {"owner_id": owner_id, "date": day, "amount": amount}
        if employee_id:
            details["employee_id"] = employee_id
        return AuditEvent(
            event_type=AuditEventType.EARNING_ADDED,
            entity_type="earning",
            entity_id=earning_id,
            description=f"Daily earning added for {day}",
            details=details,
            is_user_action=True,
        )

    @staticmethod
    def employee_added(owner_id: str, employee_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EMPLOYEE_ADDED,
            entity_type="employee",
            entity_id=employee_id,
            description="Employee added",
            details={"owner_id": owner_id, "name": name},
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(entity_type: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            description=f"{entity_type.replace('_', ' ').capitalize()} rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def tax_rates_updated(tax: float, retirement: float, insurance: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TAX_RATES_UPDATED,
            entity_type="tax_rates",
            description="Tax rates updated",
            details={"tax": tax, "retirement": retirement, "insurance": insurance},
            is_user_action=True,
        )

    @staticmethod
    def malformed_data(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MALFORMED_DATA,
            severity=AuditSeverity.WARNING,
            entity_type="storage_key",
            entity_id=key,
            description="Stored value is malformed; using fallback",
            details={"error": error_message},
        )
