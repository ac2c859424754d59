from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import (
    current_company_id,
    current_role,
    current_user_id,
    login_required,
    manager_required,
    optional_date_arg,
)
from ..container import Container
from .model import AttendanceSummary, BoardRow


def summary_dict(s: AttendanceSummary) -> dict:
    return {
        "totalDays": s.total_days,
        "presentDays": s.present_days,
        "lateDays": s.late_days,
        "halfDays": s.half_days,
        "totalWorkHours": s.total_work_hours,
        "totalExtraHours": s.total_extra_hours,
    }


def board_row_dict(row: BoardRow) -> dict:
    return {
        "userId": row.employee.user_id,
        "loginId": row.employee.login_id,
        "name": row.employee.full_name,
        "department": row.employee.department,
        "status": row.status.value,
        "record": row.record.to_dict() if row.record else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @login_required
    def check_in():
        record = container.attendance_service.check_in(current_user_id())
        return jsonify({"message": "Checked in", "attendance": record.to_dict()}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    @login_required
    def check_out():
        record = container.attendance_service.check_out(current_user_id())
        return jsonify({"message": "Checked out", "attendance": record.to_dict()})

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_today")
    @login_required
    def today():
        record, status = container.attendance_service.today(current_user_id())
        return jsonify({"status": status.value, "attendance": record.to_dict() if record else None})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_attendance_history")
    @login_required
    def history():
        result = container.attendance_service.history(
            current_user_id(),
            start_date=optional_date_arg("startDate"),
            end_date=optional_date_arg("endDate"),
        )
        return jsonify(
            {
                "records": [r.to_dict() for r in result.records],
                "summary": summary_dict(result.summary),
            }
        )

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="api_admin_attendance")
    @manager_required
    def board():
        result = container.attendance_service.daily_board(
            current_role=current_role(),
            company_id=current_company_id(),
            day=optional_date_arg("date"),
        )
        return jsonify(
            {
                "date": result.work_date.isoformat(),
                "employees": [board_row_dict(r) for r in result.rows],
                "stats": result.stats,
            }
        )
