from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import NewPayroll, PayrollHistoryRow, PayrollRecord
from .repository import PayrollRepository

_COLUMNS = """
    p.payroll_id, p.user_id, p.pay_period, p.basic_salary, p.allowances, p.deductions,
    p.net_salary, p.status, p.created_at, p.processed_at
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        user_id=int(r["user_id"]),
        pay_period=r["pay_period"],
        basic_salary=to_decimal(r["basic_salary"]),
        allowances=to_decimal(r["allowances"]),
        deductions=to_decimal(r["deductions"]),
        net_salary=to_decimal(r["net_salary"]),
        status=PayrollStatus(r["status"]),
        created_at=r.get("created_at"),
        processed_at=r.get("processed_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payrolls p WHERE p.payroll_id=%s", (payroll_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_period(self, user_id: int, pay_period: str) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payrolls p WHERE p.user_id=%s AND p.pay_period=%s",
                (user_id, pay_period),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(self, payroll: NewPayroll) -> int:
        # uq_payroll_user_period turns a concurrent duplicate into DuplicateRecordError
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payrolls(user_id, pay_period, basic_salary, allowances, deductions, net_salary, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payroll.user_id,
                    payroll.pay_period,
                    payroll.basic_salary,
                    payroll.allowances,
                    payroll.deductions,
                    payroll.net_salary,
                    PayrollStatus.DRAFT.value,
                ),
            )
            return int(cur.lastrowid)

    def mark_processed(self, payroll_id: int, *, processed_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payrolls
                SET status=%s, processed_at=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (PayrollStatus.PROCESSED.value, processed_at, payroll_id, PayrollStatus.DRAFT.value),
            )
            return cur.rowcount > 0

    def list_history(
        self,
        *,
        company_id: int,
        user_id: Optional[int] = None,
        pay_period: Optional[str] = None,
    ) -> Sequence[PayrollHistoryRow]:
        sql = f"""
            SELECT {_COLUMNS}, u.login_id, u.full_name, u.department
            FROM payrolls p
            JOIN users u ON u.user_id = p.user_id
            WHERE u.company_id=%s
        """
        params: list = [company_id]
        if user_id is not None:
            sql += " AND p.user_id=%s"
            params.append(user_id)
        if pay_period:
            sql += " AND p.pay_period=%s"
            params.append(pay_period)
        sql += " ORDER BY p.pay_period DESC, u.full_name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                PayrollHistoryRow(
                    record=_to_record(r),
                    login_id=r["login_id"],
                    full_name=r["full_name"],
                    department=r.get("department"),
                )
                for r in fetchall(cur)
            ]
