from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a registered user.

    Plain data object; immutable once registered.
    """

    user_id: int
    name: str
    email: str
    role: Role
    employee_code: str
    department: str
    password_hash: str = ""

    @property
    def is_employee(self) -> bool:
        return self.role == Role.EMPLOYEE
