from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import EMPLOYEE_CODE_DIGITS, EMPLOYEE_CODE_PREFIX
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    ValidationError,
)
from ..store.repository import RecordStore
from .model import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What the adapter keeps in its session after login."""

    user_id: int
    name: str
    email: str
    role: Role
    employee_code: str
    department: str

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            employee_code=user.employee_code,
            department=user.department,
        )

    def require_manager(self) -> None:
        if self.role != Role.MANAGER:
            raise AuthorizationError("Manager role required")


def next_employee_code(users: Sequence[User]) -> str:
    """``EMP`` + zero-padded sequence among employees registered so far."""
    count = sum(1 for u in users if u.is_employee)
    return f"{EMPLOYEE_CODE_PREFIX}{count + 1:0{EMPLOYEE_CODE_DIGITS}d}"


class UserService:
    """Use case: register users."""

    def __init__(self, store: RecordStore):
        self._store = store

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        department: str,
        role: Role | str = Role.EMPLOYEE,
    ) -> User:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", 6)
        department = (department or "").strip()
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")

        version = self._store.users_version()
        users = list(self._store.load_users())
        if any(u.email == email for u in users):
            raise EmailAlreadyRegisteredError("Email already registered")

        user = User(
            user_id=max((u.user_id for u in users), default=0) + 1,
            name=name,
            email=email,
            role=role,
            employee_code=next_employee_code(users),
            department=department,
            password_hash=generate_password_hash(password),
        )
        users.append(user)
        self._store.save_users(users, expected_version=version)

        logger.info("Registered %s %s as %s", role.value, user.employee_code, email)
        return user


class AuthService:
    """Use case: authenticate (login) and resolve the session user."""

    def __init__(self, store: RecordStore):
        self._store = store

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        user = next((u for u in self._store.load_users() if u.email == email), None)
        if not user:
            raise InvalidCredentialsError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. imported users with an empty or foreign hash
            ok = False

        if not ok:
            logger.warning("Failed login for %s", email)
            raise InvalidCredentialsError("Invalid credentials")

        return SessionUser.from_user(user)

    def resolve(self, user_id: Optional[int]) -> SessionUser:
        if user_id is None:
            raise NotAuthenticatedError("Not authenticated")
        for u in self._store.load_users():
            if u.user_id == int(user_id):
                return SessionUser.from_user(u)
        raise NotAuthenticatedError("Not authenticated")
