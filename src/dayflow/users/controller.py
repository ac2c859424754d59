from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify, session

from ..common.http import (
    admin_required,
    current_company_id,
    current_role,
    current_user_id,
    json_body,
    login_required,
    optional_int_arg,
)
from ..container import Container
from ..core import constants
from .service import NewEmployee


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def login():
        body = json_body()
        s_user = container.auth_service.authenticate(body.get("loginId") or body.get("email") or "", body.get("password", ""))

        session.clear()
        session.permanent = bool(body.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=constants.DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["company_id"] = s_user.company_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["login_id"] = s_user.login_id

        app.logger.info("User %s logged in", s_user.login_id)
        return jsonify(
            {
                "user": {
                    "id": s_user.user_id,
                    "loginId": s_user.login_id,
                    "name": s_user.full_name,
                    "role": s_user.role.value,
                    "isFirstLogin": s_user.is_first_login,
                }
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="api_change_password")
    @login_required
    def change_password():
        body = json_body()
        container.employee_service.change_password(
            user_id=current_user_id(),
            current_password=body.get("currentPassword", ""),
            new_password=body.get("newPassword", ""),
        )
        return jsonify({"message": "Password updated"})

    @app.route("/api/admin/employees", methods=["GET"], endpoint="api_list_employees")
    @admin_required
    def list_employees():
        users = container.employee_service.list_employees(company_id=current_company_id())
        return jsonify({"employees": [u.public_dict() for u in users]})

    @app.route("/api/admin/employees", methods=["POST"], endpoint="api_create_employee")
    @admin_required
    def create_employee():
        data = NewEmployee.from_payload(json_body(), today=date.today())
        user, password = container.employee_service.create_employee(
            current_role=current_role(),
            company_id=current_company_id(),
            data=data,
        )
        app.logger.info("Employee %s created by %s", user.login_id, session.get("login_id"))
        return jsonify({"employee": user.public_dict(), "temporaryPassword": password}), 201

    @app.route("/api/admin/employees/<int:user_id>/reset-password", methods=["POST"], endpoint="api_reset_password")
    @admin_required
    def reset_password(user_id: int):
        password = container.employee_service.reset_password(
            current_role=current_role(),
            company_id=current_company_id(),
            user_id=user_id,
        )
        return jsonify({"temporaryPassword": password})

    @app.route("/api/admin/employees/<int:user_id>/announce", methods=["POST"], endpoint="api_announce")
    @admin_required
    def announce(user_id: int):
        count = container.notification_service.announce(
            current_role=current_role(),
            company_id=current_company_id(),
            user_id=user_id,
            payload=json_body(),
        )
        return jsonify({"message": "Announcement sent", "count": count}), 201

    @app.route("/api/employee/profile", methods=["GET"], endpoint="api_profile")
    @login_required
    def profile():
        result = container.employee_service.get_profile(
            current_user_id=current_user_id(),
            current_role=current_role(),
            company_id=current_company_id(),
            employee_id=optional_int_arg("employeeId"),
        )
        return jsonify({"user": result.to_dict()})

    @app.route("/api/employee/profile", methods=["PATCH"], endpoint="api_update_profile")
    @login_required
    def update_profile():
        result = container.employee_service.update_profile(
            current_user_id=current_user_id(),
            current_role=current_role(),
            company_id=current_company_id(),
            payload=json_body(),
            employee_id=optional_int_arg("employeeId"),
        )
        return jsonify({"user": result.to_dict()})
