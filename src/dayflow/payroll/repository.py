from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import NewPayroll, PayrollHistoryRow, PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_user_and_period(self, user_id: int, pay_period: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def create(self, payroll: NewPayroll) -> int:
        """Insert a draft record.

        Raises DuplicateRecordError when the user already has one for the period.
        """

        raise NotImplementedError

    def mark_processed(self, payroll_id: int, *, processed_at: datetime) -> bool:
        """Move a draft to processed. Returns False if it was not a draft."""

        raise NotImplementedError

    def list_history(
        self,
        *,
        company_id: int,
        user_id: Optional[int] = None,
        pay_period: Optional[str] = None,
    ) -> Sequence[PayrollHistoryRow]:
        """Newest pay period first."""

        raise NotImplementedError
