"""
Audit Logger

Every account and earnings action is logged as a structured event.
This provides:
1. Traceability of who changed which collection
2. Debugging capability when stored data turns out malformed
3. A record of rejected input

The audit logger:
- Writes to the structlog pipeline only; events are not persisted
- Never raises; a logging failure must not break the caller
- Never receives passwords (see AuditEventBuilder)
"""

from typing import Any, Callable, Optional

import structlog

from salary_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging() -> None:
    """Configure structlog for JSON output through the stdlib logging module."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, logger_name: str = "salary_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        try:
            log_dict = event.to_log_dict()
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # logging failures never reach the caller
            pass

    def _emit(self, build: Callable[..., AuditEvent], *args: Any, **kwargs: Any) -> None:
        """Build an event and log it; a builder failure is swallowed like a logging one."""
        try:
            event = build(*args, **kwargs)
        except Exception:
            return
        self.log(event)

    def log_user_registered(self, user_id: str, username: str, role: str) -> None:
        self._emit(AuditEventBuilder.user_registered, user_id, username, role)

    def log_registration_rejected(self, username: str, issues: list[dict]) -> None:
        self._emit(AuditEventBuilder.registration_rejected, username, issues)

    def log_login_succeeded(self, user_id: str, username: str) -> None:
        self._emit(AuditEventBuilder.login_succeeded, user_id, username)

    def log_login_failed(self, username: str, reason: str) -> None:
        self._emit(AuditEventBuilder.login_failed, username, reason)

    def log_logged_out(self, user_id: Optional[str]) -> None:
        self._emit(AuditEventBuilder.logged_out, user_id)

    def log_session_restored(self, user_id: str) -> None:
        self._emit(AuditEventBuilder.session_restored, user_id)

    def log_earning_added(
        self,
        owner_id: str,
        earning_id: str,
        day: str,
        amount: float,
        employee_id: Optional[str] = None,
    ) -> None:
        self._emit(
            AuditEventBuilder.earning_added,
            owner_id=owner_id,
            earning_id=earning_id,
            day=day,
            amount=amount,
            employee_id=employee_id,
        )

    def log_employee_added(self, owner_id: str, employee_id: str, name: str) -> None:
        self._emit(AuditEventBuilder.employee_added, owner_id, employee_id, name)

    def log_input_rejected(self, entity_type: str, issues: list[dict]) -> None:
        self._emit(AuditEventBuilder.input_rejected, entity_type, issues)

    def log_tax_rates_updated(self, tax: float, retirement: float, insurance: float) -> None:
        self._emit(AuditEventBuilder.tax_rates_updated, tax, retirement, insurance)

    def log_malformed_data(self, key: str, error_message: str) -> None:
        self._emit(AuditEventBuilder.malformed_data, key, error_message)
