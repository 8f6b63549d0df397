from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Per-day attendance status as stored.

    Only PRESENT and LATE are produced by the check-in rule today; ABSENT and
    HALF_DAY are valid stored values that no code path assigns yet.
    """

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    HALF_DAY = "half-day"
