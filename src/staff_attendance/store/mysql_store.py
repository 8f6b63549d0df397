from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ConcurrentModificationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..users.model import User
from .repository import RecordStore

logger = logging.getLogger(__name__)


class MySQLRecordStore(RecordStore):
    """Replace-all store on MySQL.

    A save deletes and re-inserts its table in one transaction, holding the
    collection's ``collection_versions`` row with ``FOR UPDATE`` so concurrent
    saves serialize and the compare-and-swap check is reliable.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _version(self, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT version FROM collection_versions WHERE name=%s", (name,))
            row = fetchone(cur)
            return int(row["version"]) if row else 0

    @staticmethod
    def _lock_and_check(cur, name: str, expected_version: Optional[int]) -> int:
        cur.execute("SELECT version FROM collection_versions WHERE name=%s FOR UPDATE", (name,))
        row = fetchone(cur)
        current = int(row["version"]) if row else 0
        if expected_version is not None and expected_version != current:
            raise ConcurrentModificationError(
                f"{name} changed since it was read (expected v{expected_version}, found v{current})"
            )
        return current

    @staticmethod
    def _bump(cur, name: str, version: int) -> None:
        cur.execute(
            """
            INSERT INTO collection_versions(name, version) VALUES(%s,%s)
            ON DUPLICATE KEY UPDATE version=VALUES(version)
            """,
            (name, version),
        )

    def load_users(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, name, email, role, employee_code, department, password_hash
                FROM users
                ORDER BY user_id ASC
                """
            )
            return [
                User(
                    user_id=int(r["user_id"]),
                    name=r["name"],
                    email=r["email"],
                    role=Role(r["role"]),
                    employee_code=r.get("employee_code") or "",
                    department=r.get("department") or "",
                    password_hash=r.get("password_hash") or "",
                )
                for r in fetchall(cur)
            ]

    def users_version(self) -> int:
        return self._version("users")

    def save_users(self, users: Sequence[User], *, expected_version: Optional[int] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            current = self._lock_and_check(cur, "users", expected_version)
            cur.execute("DELETE FROM users")
            if users:
                cur.executemany(
                    """
                    INSERT INTO users(user_id, name, email, role, employee_code, department, password_hash)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (u.user_id, u.name, u.email, u.role.value, u.employee_code, u.department, u.password_hash)
                        for u in users
                    ],
                )
            self._bump(cur, "users", current + 1)
        logger.debug("Saved %d users (v%d)", len(users), current + 1)

    def load_records(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, check_in_time, check_out_time, status, total_hours
                FROM attendance_records
                ORDER BY attendance_id ASC
                """
            )
            return [
                AttendanceRecord(
                    attendance_id=int(r["attendance_id"]),
                    user_id=int(r["user_id"]),
                    work_date=r["work_date"],
                    check_in_time=parse_iso_datetime(r.get("check_in_time")),
                    check_out_time=parse_iso_datetime(r.get("check_out_time")),
                    status=AttendanceStatus(r["status"]),
                    total_hours=float(r["total_hours"]) if r.get("total_hours") is not None else None,
                )
                for r in fetchall(cur)
            ]

    def records_version(self) -> int:
        return self._version("attendance")

    def save_records(self, records: Sequence[AttendanceRecord], *, expected_version: Optional[int] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            current = self._lock_and_check(cur, "attendance", expected_version)
            cur.execute("DELETE FROM attendance_records")
            if records:
                cur.executemany(
                    """
                    INSERT INTO attendance_records(
                        attendance_id, user_id, work_date, check_in_time, check_out_time, status, total_hours
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            r.attendance_id,
                            r.user_id,
                            r.work_date,
                            r.check_in_time.isoformat() if r.check_in_time else None,
                            r.check_out_time.isoformat() if r.check_out_time else None,
                            r.status.value,
                            r.total_hours,
                        )
                        for r in records
                    ],
                )
            self._bump(cur, "attendance", current + 1)
        logger.debug("Saved %d attendance records (v%d)", len(records), current + 1)
