from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        company_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        company_id: int,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(self, request_id: int, *, status: LeaveStatus, admin_comment: Optional[str]) -> bool:
        """Only pending requests are updated."""

        raise NotImplementedError

    def approve(
        self,
        request_id: int,
        *,
        user_id: int,
        leave_type: LeaveType,
        days: int,
        admin_comment: Optional[str],
    ) -> bool:
        """Approve a pending request and deduct its days from the balance together.

        Returns False when the request is no longer pending. Raises
        ValidationError, changing nothing, when the balance is too low.
        """

        raise NotImplementedError

    def approved_user_ids_on(self, *, company_id: int, day: date) -> Sequence[int]:
        raise NotImplementedError

    def count_by_status(self, company_id: int) -> dict[LeaveStatus, int]:
        raise NotImplementedError

    # Balances
    def get_balance(self, user_id: int) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def create_balance(self, user_id: int, *, year: int) -> LeaveBalance:
        raise NotImplementedError
