from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, current_company_id, current_role, money
from ..container import Container
from .model import Dashboard


def dashboard_dict(d: Dashboard) -> dict:
    return {
        "overview": {
            "totalEmployees": d.overview.total_employees,
            "presentToday": d.overview.present_today,
            "absentToday": d.overview.absent_today,
            "attendanceRate": d.overview.attendance_rate,
        },
        "departments": [{"name": name, "count": count} for name, count in d.departments],
        "weeklyAttendance": [{"date": day.isoformat(), "count": count} for day, count in d.weekly_attendance],
        "leaves": {k.lower(): v for k, v in d.leaves.items()},
        "salary": {
            "averageMonthly": money(d.salary.average_monthly),
            "totalMonthly": money(d.salary.total_monthly),
            "minSalary": money(d.salary.min_salary),
            "maxSalary": money(d.salary.max_salary),
        },
        "payroll": {
            "currentMonth": d.payroll.pay_period,
            "totalPayout": money(d.payroll.total_payout),
            "employeesProcessed": d.payroll.employees_processed,
        },
        "notifications": {"unread": d.unread_notifications},
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/analytics", methods=["GET"], endpoint="api_analytics")
    @admin_required
    def analytics():
        dashboard = container.analytics_service.dashboard(
            current_role=current_role(),
            company_id=current_company_id(),
        )
        return jsonify(dashboard_dict(dashboard))
