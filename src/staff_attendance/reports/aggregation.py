from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.service import find_record
from ..common.datetime_utils import now_local, resolve_month_year
from ..common.validators import require_month
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import AttendanceStatus
from ..store.repository import RecordStore
from ..users.model import User


@dataclass(frozen=True)
class MonthlySummary:
    present: int
    absent: int
    late: int
    half_day: int
    total_hours: float


@dataclass(frozen=True)
class TeamMemberSummary:
    user_id: int
    name: str
    employee_code: str
    department: str
    present: int
    absent: int
    late: int
    half_day: int
    total_hours: float


@dataclass(frozen=True)
class RosterEntry:
    user_id: int
    name: str
    employee_code: str
    department: str
    status: Optional[AttendanceStatus]
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]


@dataclass(frozen=True)
class TodayRoster:
    today: date
    present: int
    absent: int
    late: int
    employees: list[RosterEntry]


@dataclass(frozen=True)
class DayCounts:
    present: int
    absent: int
    late: int


@dataclass(frozen=True)
class DashboardTotals:
    total_employees: int
    today: DayCounts
    absent_today: list[User]


@dataclass(frozen=True)
class MonthToDateStats:
    present: int
    absent: int
    late: int
    total_hours: float


@dataclass(frozen=True)
class EmployeeDashboard:
    today_record: Optional[AttendanceRecord]
    monthly_stats: MonthToDateStats
    recent: list[AttendanceRecord]


def _count(records: Iterable[AttendanceRecord], *statuses: AttendanceStatus) -> int:
    return sum(1 for r in records if r.status in statuses)


def _sum_hours(records: Iterable[AttendanceRecord]) -> float:
    return sum((r.total_hours or 0.0) for r in records)


def summarize(records: Sequence[AttendanceRecord]) -> MonthlySummary:
    """Status counts and worked hours of a pre-filtered record list.

    ``absent`` is always 0: missing days are not inferred per user.
    """

    return MonthlySummary(
        present=_count(records, AttendanceStatus.PRESENT),
        absent=0,
        late=_count(records, AttendanceStatus.LATE),
        half_day=_count(records, AttendanceStatus.HALF_DAY),
        total_hours=_sum_hours(records),
    )


class AggregationService:
    """Read-side rollups; recomputed from the full collections on every call.

    The three "absent" figures use different formulas:
    - monthly summaries report a constant 0;
    - ``today_roster`` counts employees without a record today;
    - ``manager_dashboard_totals`` subtracts today's record count (any role)
      from the employee count.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    def _employees(self) -> list[User]:
        return [u for u in self._store.load_users() if u.is_employee]

    @staticmethod
    def _in_month(records: Iterable[AttendanceRecord], user_id: int, month: int, year: int) -> list[AttendanceRecord]:
        return [r for r in records if r.user_id == user_id and r.work_date.month == month and r.work_date.year == year]

    def monthly_summary(self, user_id: int, *, month: int | None = None, year: int | None = None) -> MonthlySummary:
        month, year = resolve_month_year(month, year)
        month = require_month(month)
        return summarize(self._in_month(self._store.load_records(), user_id, month, year))

    def team_monthly_summary(self, *, month: int | None = None, year: int | None = None) -> list[TeamMemberSummary]:
        month, year = resolve_month_year(month, year)
        month = require_month(month)
        records = self._store.load_records()

        out: list[TeamMemberSummary] = []
        for u in self._employees():
            s = summarize(self._in_month(records, u.user_id, month, year))
            out.append(
                TeamMemberSummary(
                    user_id=u.user_id,
                    name=u.name,
                    employee_code=u.employee_code,
                    department=u.department,
                    present=s.present,
                    absent=s.absent,
                    late=s.late,
                    half_day=s.half_day,
                    total_hours=s.total_hours,
                )
            )
        return out

    def today_roster(self, *, now: datetime | None = None) -> TodayRoster:
        today = (now or now_local()).date()
        todays = [r for r in self._store.load_records() if r.work_date == today]

        employees: list[RosterEntry] = []
        for u in self._employees():
            rec = find_record(todays, u.user_id, today)
            employees.append(
                RosterEntry(
                    user_id=u.user_id,
                    name=u.name,
                    employee_code=u.employee_code,
                    department=u.department,
                    status=rec.status if rec else None,
                    check_in_time=rec.check_in_time if rec else None,
                    check_out_time=rec.check_out_time if rec else None,
                )
            )

        return TodayRoster(
            today=today,
            present=sum(1 for e in employees if e.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)),
            absent=sum(1 for e in employees if e.status is None),
            late=sum(1 for e in employees if e.status == AttendanceStatus.LATE),
            employees=employees,
        )

    def manager_dashboard_totals(self, *, now: datetime | None = None) -> DashboardTotals:
        today = (now or now_local()).date()
        employees = self._employees()
        todays = [r for r in self._store.load_records() if r.work_date == today]
        checked_in = {r.user_id for r in todays}

        return DashboardTotals(
            total_employees=len(employees),
            today=DayCounts(
                present=_count(todays, AttendanceStatus.PRESENT, AttendanceStatus.LATE),
                absent=len(employees) - len(todays),
                late=_count(todays, AttendanceStatus.LATE),
            ),
            absent_today=[u for u in employees if u.user_id not in checked_in],
        )

    def employee_dashboard(self, user_id: int, *, now: datetime | None = None) -> EmployeeDashboard:
        now = now or now_local()
        today = now.date()
        first_of_month = today.replace(day=1)

        mine = [r for r in self._store.load_records() if r.user_id == user_id]
        month_to_date = [r for r in mine if r.work_date >= first_of_month]

        return EmployeeDashboard(
            today_record=find_record(mine, user_id, today),
            monthly_stats=MonthToDateStats(
                present=_count(month_to_date, AttendanceStatus.PRESENT),
                absent=0,
                late=_count(month_to_date, AttendanceStatus.LATE),
                total_hours=_sum_hours(month_to_date),
            ),
            recent=sorted(mine, key=lambda r: r.work_date, reverse=True)[:DEFAULT_RECENT_LIMIT],
        )
