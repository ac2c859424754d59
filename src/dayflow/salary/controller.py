from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, current_company_id, current_role, json_body, money
from ..container import Container
from .model import SalaryInfo, WageInput


def salary_info_dict(info: SalaryInfo) -> dict:
    c = info.components
    return {
        "userId": info.user_id,
        "monthlyWage": money(info.monthly_wage),
        "yearlyWage": money(info.yearly_wage),
        "workingDays": info.working_days,
        "workingHours": info.working_hours,
        "basic": money(c.basic),
        "hra": money(c.hra),
        "standardAllowance": money(c.standard_allowance),
        "performanceBonus": money(c.performance_bonus),
        "lta": money(c.lta),
        "fixedAllowance": money(c.fixed_allowance),
        "pfEmployee": money(c.pf_employee),
        "pfEmployer": money(c.pf_employer),
        "professionalTax": money(c.professional_tax),
        "grossEarnings": money(c.gross_earnings),
        "totalDeductions": money(c.total_deductions),
        "updatedAt": info.updated_at.isoformat() if info.updated_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/employees/<int:user_id>/salary", methods=["GET"], endpoint="api_get_salary")
    @admin_required
    def get_salary(user_id: int):
        info = container.salary_service.get_salary_info(
            current_role=current_role(),
            company_id=current_company_id(),
            user_id=user_id,
        )
        return jsonify({"salaryInfo": salary_info_dict(info) if info else None})

    @app.route("/api/admin/employees/<int:user_id>/salary", methods=["PUT"], endpoint="api_update_salary")
    @admin_required
    def update_salary(user_id: int):
        wage = WageInput.from_payload(json_body())
        info = container.salary_service.update_salary(
            current_role=current_role(),
            company_id=current_company_id(),
            user_id=user_id,
            wage=wage,
        )
        return jsonify({"salaryInfo": salary_info_dict(info)})
