from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConcurrentModificationError,
    DomainError,
    ValidationError,
)
from ..reports.filters import ReportFilter
from .serializers import to_json, user_json

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    """Thin JSON adapter: resolve the session user, call a service, serialize."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = container.auth_service.resolve(session.get("user_id"))
            return view(*args, **kwargs)

        return wrapper

    def manager_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = container.auth_service.resolve(session.get("user_id"))
            g.current_user.require_manager()
            return view(*args, **kwargs)

        return wrapper

    def _error(e: DomainError, status: int):
        return jsonify({"error": str(e)}), status

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, AuthenticationError):
            return _error(e, 401)
        if isinstance(e, AuthorizationError):
            return _error(e, 403)
        if isinstance(e, ConcurrentModificationError):
            logger.warning("Write conflict: %s", e)
            return _error(e, 409)
        return _error(e, 400)

    def _parse_date(value: Optional[str]):
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid date (YYYY-MM-DD): {value}")

    def _month_year() -> dict:
        return {
            "month": request.args.get("month", type=int),
            "year": request.args.get("year", type=int),
        }

    def _report_filter() -> ReportFilter:
        return ReportFilter(
            date=_parse_date(request.args.get("date")),
            start_date=_parse_date(request.args.get("start_date")),
            end_date=_parse_date(request.args.get("end_date")),
            status=request.args.get("status") or None,
            user_id=request.args.get("user_id", type=int),
        )

    # Identity

    @app.route("/api/auth/register", methods=["POST"], endpoint="api_register")
    def api_register():
        data = request.get_json(silent=True) or {}
        user = container.user_service.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            department=data.get("department", ""),
            role=data.get("role") or "employee",
        )
        session["user_id"] = user.user_id
        return jsonify({"user": user_json(user)}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = request.get_json(silent=True) or {}
        current = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        session["user_id"] = current.user_id
        return jsonify({"user": to_json(current)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="api_me")
    @login_required
    def api_me():
        return jsonify({"user": to_json(g.current_user)})

    # Employee

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @login_required
    def api_check_in():
        record = container.attendance_service.check_in(g.current_user.user_id)
        return jsonify({"attendance": to_json(record)}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    @login_required
    def api_check_out():
        record = container.attendance_service.check_out(g.current_user.user_id)
        return jsonify({"attendance": to_json(record)})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_today")
    @login_required
    def api_today():
        record = container.attendance_service.get_today(g.current_user.user_id)
        return jsonify({"attendance": to_json(record)})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_history")
    @login_required
    def api_history():
        rows = container.attendance_service.get_history(g.current_user.user_id, **_month_year())
        return jsonify({"attendance": to_json(rows)})

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="api_summary")
    @login_required
    def api_summary():
        summary = container.aggregation_service.monthly_summary(g.current_user.user_id, **_month_year())
        return jsonify({"summary": to_json(summary)})

    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="api_employee_dashboard")
    @login_required
    def api_employee_dashboard():
        return jsonify(to_json(container.aggregation_service.employee_dashboard(g.current_user.user_id)))

    # Manager

    @app.route("/api/attendance/all", methods=["GET"], endpoint="api_all_attendance")
    @manager_required
    def api_all_attendance():
        rows = container.report_service.filter_records(_report_filter())
        return jsonify({"attendance": to_json(rows)})

    @app.route("/api/attendance/employee/<int:user_id>", methods=["GET"], endpoint="api_employee_attendance")
    @manager_required
    def api_employee_attendance(user_id: int):
        rows = container.report_service.employee_attendance(
            user_id,
            start_date=_parse_date(request.args.get("start_date")),
            end_date=_parse_date(request.args.get("end_date")),
        )
        return jsonify({"attendance": to_json(rows)})

    @app.route("/api/attendance/team-summary", methods=["GET"], endpoint="api_team_summary")
    @manager_required
    def api_team_summary():
        return jsonify({"summary": to_json(container.aggregation_service.team_monthly_summary(**_month_year()))})

    @app.route("/api/attendance/today-status", methods=["GET"], endpoint="api_today_status")
    @manager_required
    def api_today_status():
        return jsonify(to_json(container.aggregation_service.today_roster()))

    @app.route("/api/attendance/export", methods=["GET"], endpoint="api_export")
    @manager_required
    def api_export():
        csv_text = container.report_service.export_csv(_report_filter())
        return app.response_class(
            csv_text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance.csv"},
        )

    @app.route("/api/dashboard/manager", methods=["GET"], endpoint="api_manager_dashboard")
    @manager_required
    def api_manager_dashboard():
        return jsonify(to_json(container.aggregation_service.manager_dashboard_totals()))
