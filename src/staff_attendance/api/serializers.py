from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from ..users.model import User


def user_json(u: User) -> dict[str, Any]:
    # password_hash never leaves the service layer
    return {
        "user_id": u.user_id,
        "name": u.name,
        "email": u.email,
        "role": u.role.value,
        "employee_code": u.employee_code,
        "department": u.department,
    }


def to_json(value: Any) -> Any:
    """Convert service results (dataclasses, enums, dates) into JSON-ready values."""
    if value is None:
        return None
    if isinstance(value, User):
        return user_json(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value
