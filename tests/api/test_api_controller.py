from __future__ import annotations

from datetime import datetime

import pytest

from staff_attendance.main import create_app
from staff_attendance.settings import testing as testing_settings
from staff_attendance.store.memory_store import InMemoryRecordStore


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock(monkeypatch) -> Clock:
    clock = Clock(datetime(2026, 2, 2, 9, 30))
    monkeypatch.setattr("staff_attendance.attendance.service.now_local", clock)
    monkeypatch.setattr("staff_attendance.reports.aggregation.now_local", clock)
    monkeypatch.setattr("staff_attendance.common.datetime_utils.now_local", clock)
    return clock


@pytest.fixture
def app():
    return create_app(settings=testing_settings, store=InMemoryRecordStore())


@pytest.fixture
def client(app):
    return app.test_client()


def _register(client, email: str, role: str = "employee"):
    resp = client.post(
        "/api/auth/register",
        json={"name": email.split("@")[0], "email": email, "password": "secret1", "department": "IT", "role": role},
    )
    assert resp.status_code == 201
    return resp.get_json()["user"]


def test_requires_login(client):
    resp = client.get("/api/attendance/today")

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Not authenticated"}


def test_register_then_me(client):
    user = _register(client, "an@example.com")

    assert user["employee_code"] == "EMP001"
    assert "password_hash" not in user
    assert client.get("/api/auth/me").get_json()["user"]["email"] == "an@example.com"


def test_duplicate_registration_is_400(client):
    _register(client, "an@example.com")

    resp = client.post(
        "/api/auth/register",
        json={"name": "x", "email": "an@example.com", "password": "secret1", "department": "IT"},
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Email already registered"


def test_login_logout(client):
    _register(client, "an@example.com")
    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401

    assert client.post("/api/auth/login", json={"email": "an@example.com", "password": "bad"}).status_code == 401
    assert client.post("/api/auth/login", json={"email": "an@example.com", "password": "secret1"}).status_code == 200
    assert client.get("/api/auth/me").status_code == 200


def test_employee_day(client, clock):
    _register(client, "an@example.com")

    resp = client.post("/api/attendance/check-in")
    assert resp.status_code == 201
    assert resp.get_json()["attendance"]["status"] == "late"
    assert resp.get_json()["attendance"]["work_date"] == "2026-02-02"

    again = client.post("/api/attendance/check-in")
    assert again.status_code == 400
    assert again.get_json()["error"] == "Already checked in today"

    clock.now = datetime(2026, 2, 2, 11, 30)
    out = client.post("/api/attendance/check-out").get_json()["attendance"]
    assert out["total_hours"] == pytest.approx(2.0)
    assert out["check_out_time"] == "2026-02-02T11:30:00"

    assert client.post("/api/attendance/check-out").status_code == 400

    today = client.get("/api/attendance/today").get_json()["attendance"]
    assert today["attendance_id"] == out["attendance_id"]

    history = client.get("/api/attendance/history?month=2&year=2026").get_json()["attendance"]
    assert len(history) == 1

    summary = client.get("/api/attendance/summary").get_json()["summary"]
    assert summary == {"present": 0, "absent": 0, "late": 1, "half_day": 0, "total_hours": pytest.approx(2.0)}

    dash = client.get("/api/dashboard/employee").get_json()
    assert dash["monthly_stats"]["late"] == 1
    assert len(dash["recent"]) == 1


def test_checkout_without_checkin_is_400(client, clock):
    _register(client, "an@example.com")

    resp = client.post("/api/attendance/check-out")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "No check-in found"


def test_employee_cannot_use_manager_routes(client):
    _register(client, "an@example.com")

    assert client.get("/api/attendance/all").status_code == 403
    assert client.get("/api/attendance/export").status_code == 403


def test_manager_views(app, clock):
    employee = app.test_client()
    _register(employee, "an@example.com")
    _register(app.test_client(), "binh@example.com")
    employee.post("/api/attendance/check-in")

    manager = app.test_client()
    _register(manager, "mai@example.com", role="manager")

    roster = manager.get("/api/attendance/today-status").get_json()
    assert roster["today"] == "2026-02-02"
    assert (roster["present"], roster["late"], roster["absent"]) == (1, 1, 1)
    assert [e["status"] for e in roster["employees"]] == ["late", None]

    team = manager.get("/api/attendance/team-summary?month=2&year=2026").get_json()["summary"]
    assert [t["employee_code"] for t in team] == ["EMP001", "EMP002"]

    rows = manager.get("/api/attendance/all?start_date=2026-02-01&end_date=2026-02-28&status=late").get_json()["attendance"]
    assert [r["name"] for r in rows] == ["an"]

    assert len(manager.get("/api/attendance/employee/1").get_json()["attendance"]) == 1

    dash = manager.get("/api/dashboard/manager").get_json()
    assert dash["total_employees"] == 2
    assert dash["today"] == {"present": 1, "absent": 1, "late": 1}
    assert [u["email"] for u in dash["absent_today"]] == ["binh@example.com"]

    export = manager.get("/api/attendance/export?date=2026-02-02")
    assert export.status_code == 200
    assert export.mimetype == "text/csv"
    assert "attachment; filename=attendance.csv" in export.headers["Content-Disposition"]
    lines = export.data.decode("utf-8-sig").split("\n")
    assert lines[0] == "Employee ID,Name,Department,Date,Check In,Check Out,Status,Total Hours"
    assert lines[1] == "EMP001,an,IT,2026-02-02,2026-02-02T09:30:00,,late,0"


def test_bad_filter_values_are_400(app):
    manager = app.test_client()
    _register(manager, "mai@example.com", role="manager")

    assert manager.get("/api/attendance/all?date=02/02/2026").status_code == 400
    assert manager.get("/api/attendance/all?status=holiday").status_code == 400
