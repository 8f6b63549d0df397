from __future__ import annotations

from datetime import datetime

import pytest

from staff_attendance.core.enums import Role
from staff_attendance.store.memory_store import InMemoryRecordStore
from staff_attendance.users.model import User


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 0, 0)


@pytest.fixture
def manager() -> User:
    return User(
        user_id=1,
        name="Mai Manager",
        email="mai@example.com",
        role=Role.MANAGER,
        employee_code="EMP001",
        department="Operations",
    )


@pytest.fixture
def employees() -> list[User]:
    return [
        User(user_id=2, name="An", email="an@example.com", role=Role.EMPLOYEE, employee_code="EMP001", department="IT"),
        User(user_id=3, name="Binh", email="binh@example.com", role=Role.EMPLOYEE, employee_code="EMP002", department="HR"),
        User(user_id=4, name="Chi", email="chi@example.com", role=Role.EMPLOYEE, employee_code="EMP003", department="IT"),
    ]


@pytest.fixture
def store(manager, employees) -> InMemoryRecordStore:
    return InMemoryRecordStore(users=[manager, *employees])
