"""
Account Directory

Registration, login and logout against the stored user list.

DESIGN DECISION: There is no ambient "current user". Every operation
returns a Session value; the caller keeps it and passes it back. The
``current_user`` storage pointer is still written so a restarted
process can restore the session with ``current_user()``.

Session states:
    Anonymous --register/login ok--> Authenticated --logout--> Anonymous
A failed register or login writes nothing and leaves the caller's
session as it was.

There is no real security: passwords are stored and compared in
plaintext, exactly as typed.
"""

import json
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from salary_tracker.audit import AuditLogger
from salary_tracker.config import get_settings
from salary_tracker.errors import (
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from salary_tracker.models import Session, User, UserRole
from salary_tracker.services.storage import KeyValueStorageInterface
from salary_tracker.services.storage.keys import CURRENT_USER_KEY, USERS_KEY
from salary_tracker.validation import EarningsValidator


_USERS_ADAPTER = TypeAdapter(list[User])


class AccountDirectory:
    """Local user list plus the persisted current-user pointer."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        validator: Optional[EarningsValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or EarningsValidator(
            min_password_length=get_settings().accounts.min_password_length
        )
        self._audit = audit_logger or AuditLogger()

    async def _load_users(self) -> Optional[list[User]]:
        """Stored users, None if no list exists. Raises on malformed data."""
        raw = await self._storage.get(USERS_KEY)
        if raw is None:
            return None
        return _USERS_ADAPTER.validate_json(raw)

    async def _save_users(self, users: list[User]) -> bool:
        return await self._storage.set(
            USERS_KEY,
            json.dumps([user.to_storage_dict() for user in users], ensure_ascii=False),
        )

    async def _set_current(self, user: User) -> Session:
        await self._storage.set(
            CURRENT_USER_KEY,
            json.dumps(user.to_storage_dict(), ensure_ascii=False),
        )
        return Session(user=user)

    async def register(
        self,
        first_name: str,
        last_name: str,
        username: str,
        password: str,
        role: Union[UserRole, str],
    ) -> Session:
        """
        Create an account and sign it in.

        Raises:
            ValidationError: If a required field is empty, the password is
                too short, the role is unknown, or the username is taken
        """
        try:
            users = await self._load_users() or []
        except PydanticValidationError:
            # A corrupt list is replaced by a fresh one
            users = []

        result = self._validator.validate_registration(
            users, first_name, last_name, username, password, role
        )
        if not result.is_valid:
            self._audit.log_registration_rejected(
                username, [issue.model_dump() for issue in result.issues]
            )
            raise ValidationError(result)

        user = User(
            first_name=first_name,
            last_name=last_name,
            username=username,
            password=password,
            role=UserRole(role),
        )
        await self._save_users([*users, user])
        session = await self._set_current(user)

        self._audit.log_user_registered(user.id, user.username, user.role.value)
        return session

    async def login(self, username: str, password: str) -> Session:
        """
        Sign in with an exact (case-sensitive) username and password.

        Raises:
            NotFoundError: If no user list has ever been stored
            InvalidCredentialsError: If no stored user matches both fields
        """
        try:
            users = await self._load_users()
        except PydanticValidationError:
            self._audit.log_login_failed(username, "malformed_user_list")
            raise InvalidCredentialsError("An error occurred while signing in")

        if users is None:
            self._audit.log_login_failed(username, "no_users")
            raise NotFoundError("User not found")

        user = next(
            (u for u in users if u.username == username and u.password == password),
            None,
        )
        if user is None:
            self._audit.log_login_failed(username, "invalid_credentials")
            raise InvalidCredentialsError("Incorrect username or password")

        session = await self._set_current(user)
        self._audit.log_login_succeeded(user.id, user.username)
        return session

    async def logout(self, session: Optional[Session] = None) -> Session:
        """Forget the signed-in user. Always succeeds."""
        await self._storage.remove(CURRENT_USER_KEY)
        user_id = session.user.id if session and session.user else None
        self._audit.log_logged_out(user_id)
        return Session.anonymous()

    async def current_user(self) -> Session:
        """
        Session restored from the stored pointer.

        Missing or malformed data gives an anonymous session.
        """
        raw = await self._storage.get(CURRENT_USER_KEY)
        if raw is None:
            return Session.anonymous()
        try:
            user = User.model_validate_json(raw)
        except PydanticValidationError:
            self._audit.log_malformed_data(CURRENT_USER_KEY, "current user pointer")
            return Session.anonymous()

        self._audit.log_session_restored(user.id)
        return Session(user=user)

    restore_session = current_user
