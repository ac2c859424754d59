from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_pay_period
from ..common.http import (
    current_company_id,
    current_role,
    current_user_id,
    json_body,
    login_required,
    manager_required,
    money,
    optional_date_arg,
    optional_int_arg,
)
from ..container import Container
from .model import AttendanceReport, NewPayroll, PayrollHistoryRow, PayrollRecord, SalaryReport, SalarySlip


def payroll_dict(record: PayrollRecord) -> dict:
    return {
        "id": record.payroll_id,
        "userId": record.user_id,
        "payPeriod": record.pay_period,
        "basicSalary": money(record.basic_salary),
        "allowances": money(record.allowances),
        "deductions": money(record.deductions),
        "netSalary": money(record.net_salary),
        "status": record.status.value,
        "createdAt": record.created_at.isoformat() if record.created_at else None,
        "processedAt": record.processed_at.isoformat() if record.processed_at else None,
    }


def history_dict(row: PayrollHistoryRow) -> dict:
    data = payroll_dict(row.record)
    data.update({"loginId": row.login_id, "employeeName": row.full_name, "department": row.department})
    return data


def slip_dict(slip: SalarySlip) -> dict:
    c = slip.components
    return {
        "userId": slip.user_id,
        "loginId": slip.login_id,
        "employeeName": slip.employee_name,
        "email": slip.email,
        "department": slip.department,
        "jobTitle": slip.job_title,
        "dateJoined": slip.date_joined.isoformat() if slip.date_joined else None,
        "earnings": {
            "basic": money(c.basic),
            "hra": money(c.hra),
            "standardAllowance": money(c.standard_allowance),
            "performanceBonus": money(c.performance_bonus),
            "lta": money(c.lta),
            "fixedAllowance": money(c.fixed_allowance),
        },
        "deductions": {
            "pfEmployee": money(c.pf_employee),
            "professionalTax": money(c.professional_tax),
        },
        "employerContributions": {"pfEmployer": money(c.pf_employer)},
        "grossEarnings": money(slip.gross_earnings),
        "totalDeductions": money(slip.total_deductions),
        "monthlyWage": money(slip.monthly_wage),
        "yearlyWage": money(slip.yearly_wage),
        "workingDays": slip.working_days,
        "workingHours": slip.working_hours,
    }


def report_dict(report: SalaryReport) -> dict:
    s = report.summary
    return {
        "salarySlips": [slip_dict(x) for x in report.salary_slips],
        "payrollHistory": [history_dict(x) for x in report.payroll_history],
        "summary": {
            "totalEmployees": s.total_employees,
            "totalMonthlyWage": money(s.total_monthly_wage),
            "totalYearlyWage": money(s.total_yearly_wage),
            "averageSalary": money(s.average_salary),
            "totalEmployerPF": money(s.total_employer_pf),
            "totalEmployeePF": money(s.total_employee_pf),
        },
        "departmentBreakdown": [
            {"department": d.department, "totalWage": money(d.total_wage), "employeeCount": d.employee_count}
            for d in report.department_breakdown
        ],
    }


def attendance_report_dict(report: AttendanceReport) -> dict:
    s = report.summary
    return {
        "records": [
            dict(r.record.to_dict(), loginId=r.login_id, employeeName=r.full_name, department=r.department)
            for r in report.rows
        ],
        "summary": {
            "totalRecords": s.total_records,
            "totalWorkHours": s.total_work_hours,
            "totalExtraHours": s.total_extra_hours,
            "presentCount": s.present_count,
            "lateCount": s.late_count,
            "averageWorkHours": s.average_work_hours,
        },
        "employeeSummary": [
            {
                "userId": e.user_id,
                "loginId": e.login_id,
                "name": e.employee_name,
                "department": e.department,
                "totalDays": e.total_days,
                "totalHours": e.total_hours,
                "avgHours": e.average_hours,
            }
            for e in report.employee_summary
        ],
    }


def _pay_period_arg():
    raw = (request.args.get("payPeriod") or "").strip()
    return parse_pay_period(raw) if raw else None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="api_list_payroll")
    @login_required
    def list_payroll():
        rows = container.payroll_service.list_payrolls(
            current_role=current_role(),
            current_user_id=current_user_id(),
            company_id=current_company_id(),
            employee_id=optional_int_arg("employeeId"),
            pay_period=_pay_period_arg(),
        )
        return jsonify({"payrolls": [history_dict(r) for r in rows]})

    @app.route("/api/payroll", methods=["POST"], endpoint="api_create_payroll")
    @manager_required
    def create_payroll():
        payroll = NewPayroll.from_payload(json_body())
        record = container.payroll_service.create_payroll(
            current_role=current_role(),
            company_id=current_company_id(),
            payroll=payroll,
        )
        return jsonify({"payroll": payroll_dict(record)}), 201

    @app.route("/api/payroll/<int:payroll_id>/process", methods=["POST"], endpoint="api_process_payroll")
    @manager_required
    def process_payroll(payroll_id: int):
        record = container.payroll_service.process_payroll(
            current_role=current_role(),
            company_id=current_company_id(),
            payroll_id=payroll_id,
        )
        return jsonify({"payroll": payroll_dict(record)})

    @app.route("/api/admin/reports/salary", methods=["GET"], endpoint="api_salary_report")
    @manager_required
    def salary_report():
        report = container.payroll_report_service.build_salary_report(
            current_role=current_role(),
            company_id=current_company_id(),
            employee_id=optional_int_arg("employeeId"),
            pay_period=_pay_period_arg(),
            department=(request.args.get("department") or "").strip() or None,
        )
        return jsonify(report_dict(report))

    @app.route("/api/admin/reports/attendance", methods=["GET"], endpoint="api_attendance_report")
    @manager_required
    def attendance_report():
        report = container.payroll_report_service.build_attendance_report(
            current_role=current_role(),
            company_id=current_company_id(),
            start=optional_date_arg("startDate"),
            end=optional_date_arg("endDate"),
            employee_id=optional_int_arg("employeeId"),
            department=(request.args.get("department") or "").strip() or None,
        )
        return jsonify(attendance_report_dict(report))
