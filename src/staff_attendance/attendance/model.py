from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import hours_between
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (user, calendar day)."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[float] = None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out_time is not None

    def closed_at(self, check_out_time: datetime) -> "AttendanceRecord":
        """Copy of this record checked out at ``check_out_time``; status is kept."""
        return replace(
            self,
            check_out_time=check_out_time,
            total_hours=hours_between(self.check_in_time, check_out_time),
        )


@dataclass(frozen=True)
class JoinedRecord:
    """Read-model for reports/exports: a record plus its owner's fields."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[float]
    name: str
    email: str
    employee_code: str
    department: str
