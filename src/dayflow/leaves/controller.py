from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import (
    current_company_id,
    current_role,
    current_user_id,
    json_body,
    login_required,
    manager_required,
    optional_int_arg,
)
from ..container import Container
from .model import LeaveDecision, NewLeave
from .service import LEAVE_APPROVERS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave", methods=["GET"], endpoint="api_list_leave")
    @login_required
    def list_leave():
        rows = container.leave_service.list_requests(
            current_role=current_role(),
            current_user_id=current_user_id(),
            company_id=current_company_id(),
            employee_id=optional_int_arg("employeeId"),
            status=request.args.get("status"),
        )
        return jsonify({"leaveRequests": [r.to_dict() for r in rows]})

    @app.route("/api/leave", methods=["POST"], endpoint="api_apply_leave")
    @login_required
    def apply_leave():
        data = NewLeave.from_payload(json_body())
        leave = container.leave_service.apply(
            user_id=current_user_id(),
            company_id=current_company_id(),
            data=data,
        )
        return jsonify({"leaveRequest": leave.to_dict()}), 201

    @app.route("/api/leave/balance", methods=["GET"], endpoint="api_leave_balance")
    @login_required
    def balance():
        user_id = current_user_id()
        employee_id = optional_int_arg("employeeId")
        if employee_id and current_role() in LEAVE_APPROVERS:
            container.employee_service.get_in_company(company_id=current_company_id(), user_id=employee_id)
            user_id = employee_id
        return jsonify({"leaveBalance": container.leave_service.get_balance(user_id).to_dict()})

    @app.route("/api/admin/leaves/<int:request_id>", methods=["PATCH"], endpoint="api_decide_leave")
    @manager_required
    def decide_leave(request_id: int):
        decision = LeaveDecision.from_payload(json_body())
        leave = container.leave_service.decide(
            current_role=current_role(),
            company_id=current_company_id(),
            request_id=request_id,
            decision=decision,
        )
        return jsonify({"leaveRequest": leave.to_dict()})
