from __future__ import annotations

from typing import Any, Mapping

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.enums import AttendanceStatus, Role
from ..users.model import User


def user_to_dict(u: User) -> dict[str, Any]:
    return {
        "user_id": u.user_id,
        "name": u.name,
        "email": u.email,
        "role": u.role.value,
        "employee_code": u.employee_code,
        "department": u.department,
        "password_hash": u.password_hash,
    }


def user_from_dict(d: Mapping[str, Any]) -> User:
    return User(
        user_id=int(d["user_id"]),
        name=d["name"],
        email=d["email"],
        role=Role(d["role"]),
        employee_code=d.get("employee_code") or "",
        department=d.get("department") or "",
        password_hash=d.get("password_hash") or "",
    )


def record_to_dict(r: AttendanceRecord) -> dict[str, Any]:
    return {
        "attendance_id": r.attendance_id,
        "user_id": r.user_id,
        "work_date": r.work_date.isoformat(),
        "check_in_time": r.check_in_time.isoformat() if r.check_in_time else None,
        "check_out_time": r.check_out_time.isoformat() if r.check_out_time else None,
        "status": r.status.value,
        "total_hours": r.total_hours,
    }


def record_from_dict(d: Mapping[str, Any]) -> AttendanceRecord:
    total_hours = d.get("total_hours")
    return AttendanceRecord(
        attendance_id=int(d["attendance_id"]),
        user_id=int(d["user_id"]),
        work_date=parse_iso_date(d["work_date"]),
        check_in_time=parse_iso_datetime(d.get("check_in_time")),
        check_out_time=parse_iso_datetime(d.get("check_out_time")),
        status=AttendanceStatus(d["status"]),
        total_hours=float(total_hours) if total_hours is not None else None,
    )
