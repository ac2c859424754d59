from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

_BALANCE_COLUMNS = {
    LeaveType.PAID: "paid_days_left",
    LeaveType.SICK: "sick_days_left",
    LeaveType.UNPAID: "unpaid_days_left",
}

_SELECT = """
    SELECT lr.request_id, lr.user_id, lr.company_id, lr.leave_type, lr.start_date, lr.end_date,
           lr.reason, lr.status, lr.admin_comment, lr.created_at,
           u.full_name, u.login_id
    FROM leave_requests lr
    JOIN users u ON u.user_id = lr.user_id
"""


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        company_id=int(r["company_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason"),
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        admin_comment=r.get("admin_comment"),
        employee_name=r.get("full_name"),
        login_id=r.get("login_id"),
    )


def _to_balance(r: dict) -> LeaveBalance:
    return LeaveBalance(
        user_id=int(r["user_id"]),
        year=int(r["year"]),
        paid_days_left=int(r["paid_days_left"]),
        sick_days_left=int(r["sick_days_left"]),
        unpaid_days_left=int(r["unpaid_days_left"]),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, company_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, company_id, leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE lr.request_id=%s", (request_id,))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_requests(
        self,
        *,
        company_id: int,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        where = ["lr.company_id=%s"]
        params: list = [company_id]
        if user_id is not None:
            where.append("lr.user_id=%s")
            params.append(user_id)
        if status is not None:
            where.append("lr.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE " + " AND ".join(where) + " ORDER BY lr.created_at DESC",
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(self, request_id: int, *, status: LeaveStatus, admin_comment: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, admin_comment=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, admin_comment, request_id, LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def approve(
        self,
        request_id: int,
        *,
        user_id: int,
        leave_type: LeaveType,
        days: int,
        admin_comment: Optional[str],
    ) -> bool:
        column = _BALANCE_COLUMNS[leave_type]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, admin_comment=%s
                WHERE request_id=%s AND status=%s
                """,
                (LeaveStatus.APPROVED.value, admin_comment, request_id, LeaveStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return False

            cur.execute(
                f"UPDATE leave_balances SET {column} = {column} - %s WHERE user_id=%s AND {column} >= %s",
                (days, user_id, days),
            )
            if cur.rowcount == 0:
                # Rolls back the status change above
                raise ValidationError("Insufficient leave balance")
            return True

    def approved_user_ids_on(self, *, company_id: int, day: date) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT user_id
                FROM leave_requests
                WHERE company_id=%s AND status=%s AND start_date <= %s AND end_date >= %s
                """,
                (company_id, LeaveStatus.APPROVED.value, day, day),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]

    def count_by_status(self, company_id: int) -> dict[LeaveStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status, COUNT(*) AS total FROM leave_requests WHERE company_id=%s GROUP BY status",
                (company_id,),
            )
            return {LeaveStatus(r["status"]): int(r["total"]) for r in fetchall(cur)}

    def get_balance(self, user_id: int) -> Optional[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, year, paid_days_left, sick_days_left, unpaid_days_left
                FROM leave_balances WHERE user_id=%s
                """,
                (user_id,),
            )
            r = fetchone(cur)
            return _to_balance(r) if r else None

    def create_balance(self, user_id: int, *, year: int) -> LeaveBalance:
        balance = LeaveBalance(user_id=user_id, year=year)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO leave_balances(user_id, year, paid_days_left, sick_days_left, unpaid_days_left)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (user_id, year, balance.paid_days_left, balance.sick_days_left, balance.unpaid_days_left),
            )
        return self.get_balance(user_id) or balance
