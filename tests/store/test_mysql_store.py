from __future__ import annotations

import copy
from datetime import date, datetime

import pytest

from staff_attendance.attendance.model import AttendanceRecord
from staff_attendance.core.enums import AttendanceStatus
from staff_attendance.core.exceptions import ConcurrentModificationError
from staff_attendance.store.mysql_store import MySQLRecordStore


class FakeDatabase:
    """Just enough of MySQL for the statements the store issues.

    Writes are staged per connection and only land on ``commit``.
    """

    def __init__(self, versions=None):
        self.state = {"versions": dict(versions or {}), "users": [], "attendance_records": []}
        self.statements: list[str] = []
        self.commits = 0
        self.rollbacks = 0

    def connect(self, *, with_database: bool = True):
        return FakeConnection(self)


class FakeConnection:
    def __init__(self, db: FakeDatabase):
        self.db = db
        self.staged = copy.deepcopy(db.state)

    def cursor(self, dictionary: bool = True):
        return FakeCursor(self)

    def commit(self):
        self.db.state = self.staged
        self.db.commits += 1

    def rollback(self):
        self.db.rollbacks += 1

    def close(self):
        pass


class FakeCursor:
    def __init__(self, conn: FakeConnection):
        self.conn = conn
        self.rows: list[dict] = []

    def _log(self, sql: str) -> str:
        sql = " ".join(sql.split())
        self.conn.db.statements.append(sql)
        return sql

    def execute(self, sql, params=()):
        sql = self._log(sql)
        state = self.conn.staged
        if sql.startswith("SELECT version FROM collection_versions"):
            name = params[0]
            self.rows = [{"version": state["versions"][name]}] if name in state["versions"] else []
        elif sql.startswith("INSERT INTO collection_versions"):
            state["versions"][params[0]] = params[1]
        elif sql.startswith("DELETE FROM"):
            state[sql.split()[2]] = []
        elif sql.startswith("SELECT user_id"):
            self.rows = [dict(r) for r in state["users"]]
        elif sql.startswith("SELECT attendance_id"):
            self.rows = [dict(r) for r in state["attendance_records"]]
        else:
            raise AssertionError(f"unexpected statement: {sql}")

    def executemany(self, sql, seq):
        sql = self._log(sql)
        head, rest = sql[len("INSERT INTO "):].split("(", 1)
        columns = [c.strip() for c in rest.split(")", 1)[0].split(",")]
        self.conn.staged[head.strip()].extend(dict(zip(columns, params)) for params in seq)

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def close(self):
        pass


def _writes(db: FakeDatabase) -> list[str]:
    return [s for s in db.statements if s.startswith(("DELETE", "INSERT"))]


def test_users_round_trip_and_bump_version(manager, employees):
    db = FakeDatabase()
    store = MySQLRecordStore(db)

    store.save_users([manager, *employees], expected_version=0)

    assert store.users_version() == 1
    assert store.load_users() == [manager, *employees]
    assert db.state["users"][0]["role"] == "manager"

    store.save_users([manager], expected_version=1)
    assert store.users_version() == 2
    assert db.state["versions"] == {"users": 2}


def test_open_and_closed_records_round_trip():
    db = FakeDatabase()
    store = MySQLRecordStore(db)
    closed = AttendanceRecord(
        1, 2, date(2026, 2, 2), datetime(2026, 2, 2, 9, 30), datetime(2026, 2, 2, 11, 30), AttendanceStatus.LATE, 2.0
    )
    still_open = AttendanceRecord(2, 3, date(2026, 2, 2), datetime(2026, 2, 2, 8), None, AttendanceStatus.PRESENT)

    store.save_records([closed, still_open])

    stored = db.state["attendance_records"]
    assert stored[0]["check_in_time"] == "2026-02-02T09:30:00"
    assert stored[0]["status"] == "late"
    assert stored[1]["check_out_time"] is None
    assert stored[1]["total_hours"] is None
    assert store.load_records() == [closed, still_open]
    assert store.records_version() == 1


def test_stale_version_writes_nothing_and_rolls_back():
    db = FakeDatabase(versions={"attendance": 2})
    store = MySQLRecordStore(db)
    record = AttendanceRecord(1, 2, date(2026, 2, 2), datetime(2026, 2, 2, 8), None, AttendanceStatus.PRESENT)

    with pytest.raises(ConcurrentModificationError):
        store.save_records([record], expected_version=1)

    assert db.statements == [
        "SELECT version FROM collection_versions WHERE name=%s FOR UPDATE",
    ]
    assert _writes(db) == []
    assert (db.commits, db.rollbacks) == (0, 1)
    assert db.state["attendance_records"] == []
    assert db.state["versions"] == {"attendance": 2}


def test_save_without_expected_version_skips_the_check():
    db = FakeDatabase(versions={"users": 5})
    store = MySQLRecordStore(db)

    store.save_users([])

    assert store.users_version() == 6
    assert _writes(db)[0] == "DELETE FROM users"
