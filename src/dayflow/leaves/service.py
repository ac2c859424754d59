from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import LeaveBalance, LeaveDecision, LeaveRequest, NewLeave
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

LEAVE_APPROVERS = {Role.ADMIN, Role.HR}


class LeaveService:
    """Use case: apply for leave, decide requests and track balances."""

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def get_balance(self, user_id: int, *, today: date | None = None) -> LeaveBalance:
        """Return the balance, creating the default allowance on first use."""

        balance = self._leaves.get_balance(int(user_id))
        if balance:
            return balance
        year = (today or date.today()).year
        return self._leaves.create_balance(int(user_id), year=year)

    def apply(self, *, user_id: int, company_id: int, data: NewLeave, today: date | None = None) -> LeaveRequest:
        balance = self.get_balance(user_id, today=today)
        if balance.available(data.leave_type) < data.days:
            raise ValidationError("Insufficient leave balance")

        request_id = self._leaves.create(
            user_id=int(user_id),
            company_id=int(company_id),
            leave_type=data.leave_type,
            start_date=data.start_date,
            end_date=data.end_date,
            reason=data.reason,
        )
        logger.info("Leave request %s filed by user %s (%s, %s days)", request_id, user_id, data.leave_type.value, data.days)
        return self._leaves.get_by_id(request_id)

    def list_requests(
        self,
        *,
        current_role: Role,
        current_user_id: int,
        company_id: int,
        employee_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[LeaveRequest]:
        # Employees only ever see their own requests
        if current_role not in LEAVE_APPROVERS:
            employee_id = current_user_id

        status_filter = None
        if status:
            try:
                status_filter = LeaveStatus(status.strip().upper())
            except ValueError:
                raise ValidationError("Invalid status")

        return list(self._leaves.list_requests(company_id=int(company_id), user_id=employee_id, status=status_filter))

    def decide(self, *, current_role: Role, company_id: int, request_id: int, decision: LeaveDecision) -> LeaveRequest:
        if current_role not in LEAVE_APPROVERS:
            raise AuthorizationError("Admin or HR access required")

        leave = self._leaves.get_by_id(int(request_id))
        if not leave or leave.company_id != int(company_id):
            raise NotFoundError("Leave request not found or unauthorized")
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been decided")

        if decision.status == LeaveStatus.APPROVED:
            self.get_balance(leave.user_id)
            decided = self._leaves.approve(
                leave.request_id,
                user_id=leave.user_id,
                leave_type=leave.leave_type,
                days=leave.days,
                admin_comment=decision.admin_comment,
            )
        else:
            decided = self._leaves.decide(leave.request_id, status=decision.status, admin_comment=decision.admin_comment)
        if not decided:
            raise ValidationError("Leave request has already been decided")

        logger.info("Leave request %s %s", leave.request_id, decision.status.value.lower())
        return self._leaves.get_by_id(leave.request_id)

    def status_counts(self, company_id: int) -> dict[str, int]:
        counts = self._leaves.count_by_status(int(company_id))
        return {s.value: counts.get(s, 0) for s in LeaveStatus}
