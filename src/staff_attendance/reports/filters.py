from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, JoinedRecord
from ..core.constants import DEFAULT_EMPLOYEE_RECORDS_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..store.repository import RecordStore
from ..users.model import User
from .exporter import to_csv


@dataclass(frozen=True)
class ReportFilter:
    """Optional, conjunctive report filters.

    The date range is inclusive and only applies when both ends are set.
    """

    date: Optional[Date] = None
    start_date: Optional[Date] = None
    end_date: Optional[Date] = None
    status: Optional[AttendanceStatus] = None
    user_id: Optional[int] = None

    def __post_init__(self):
        if self.status is not None and not isinstance(self.status, AttendanceStatus):
            try:
                object.__setattr__(self, "status", AttendanceStatus(self.status))
            except ValueError:
                raise ValidationError(f"Unknown status: {self.status}")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError("Start date must not be after end date")

    @property
    def has_range(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    def matches(self, r: AttendanceRecord) -> bool:
        if self.date is not None and r.work_date != self.date:
            return False
        if self.has_range and not (self.start_date <= r.work_date <= self.end_date):
            return False
        if self.status is not None and r.status != self.status:
            return False
        if self.user_id is not None and r.user_id != self.user_id:
            return False
        return True


def join_record(r: AttendanceRecord, owner: Optional[User]) -> JoinedRecord:
    return JoinedRecord(
        attendance_id=r.attendance_id,
        user_id=r.user_id,
        work_date=r.work_date,
        check_in_time=r.check_in_time,
        check_out_time=r.check_out_time,
        status=r.status,
        total_hours=r.total_hours,
        name=owner.name if owner else "",
        email=owner.email if owner else "",
        employee_code=owner.employee_code if owner else "",
        department=owner.department if owner else "",
    )


class ReportService:
    """Use case: filtered, user-joined attendance views and CSV export."""

    def __init__(self, store: RecordStore):
        self._store = store

    def _joined(self, records: Sequence[AttendanceRecord]) -> list[JoinedRecord]:
        users_by_id = {u.user_id: u for u in self._store.load_users()}
        return [join_record(r, users_by_id.get(r.user_id)) for r in records]

    def filter_records(self, filters: Optional[ReportFilter] = None) -> list[JoinedRecord]:
        """Records matching every given filter, newest date first (stable for ties)."""
        filters = filters or ReportFilter()
        matched = [r for r in self._store.load_records() if filters.matches(r)]
        rows = self._joined(matched)
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows

    def employee_attendance(
        self,
        user_id: int,
        *,
        start_date: Optional[Date] = None,
        end_date: Optional[Date] = None,
        limit: int = DEFAULT_EMPLOYEE_RECORDS_LIMIT,
    ) -> list[JoinedRecord]:
        """One employee's records in store order, optionally range-limited, at most ``limit`` rows."""
        filters = ReportFilter(start_date=start_date, end_date=end_date, user_id=int(user_id))
        matched = [r for r in self._store.load_records() if filters.matches(r)]
        return self._joined(matched)[: int(limit)]

    def export_csv(self, filters: Optional[ReportFilter] = None) -> str:
        return to_csv(self.filter_records(filters))
