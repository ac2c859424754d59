from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = "a.attendance_id, a.user_id, a.work_date, a.check_in_time, a.check_out_time, a.status, a.work_hours, a.extra_hours"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        work_hours=float(r["work_hours"]) if r.get("work_hours") is not None else None,
        extra_hours=float(r["extra_hours"]) if r.get("extra_hours") is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records a WHERE a.user_id=%s AND a.work_date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_open(self, user_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records a
                WHERE a.user_id=%s AND a.check_out_time IS NULL
                ORDER BY a.check_in_time DESC
                """,
                (user_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, work_date, check_in_time, status)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, work_date, check_in_time, status.value),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        status: AttendanceStatus,
        work_hours: float,
        extra_hours: float,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, status=%s, work_hours=%s, extra_hours=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, status.value, work_hours, extra_hours, attendance_id),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records a
                WHERE a.user_id=%s AND a.work_date BETWEEN %s AND %s
                ORDER BY a.work_date DESC
                """,
                (user_id, start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_company_date(self, company_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records a
                JOIN users u ON u.user_id = a.user_id
                WHERE u.company_id=%s AND a.work_date=%s
                """,
                (company_id, work_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_by_date(self, company_id: int, *, start_date: date, end_date: date) -> dict[date, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.work_date, COUNT(*) AS total
                FROM attendance_records a
                JOIN users u ON u.user_id = a.user_id
                WHERE u.company_id=%s AND a.work_date BETWEEN %s AND %s
                GROUP BY a.work_date
                ORDER BY a.work_date
                """,
                (company_id, start_date, end_date),
            )
            return {r["work_date"]: int(r["total"]) for r in fetchall(cur)}

    def get_report_rows(
        self,
        *,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        where = ["u.company_id=%s"]
        params: list = [company_id]
        if start_date is not None:
            where.append("a.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            where.append("a.work_date <= %s")
            params.append(end_date)
        if user_id is not None:
            where.append("a.user_id=%s")
            params.append(user_id)
        where_sql = " AND ".join(where)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.login_id, u.full_name, u.department
                FROM attendance_records a
                JOIN users u ON u.user_id = a.user_id
                WHERE {where_sql}
                ORDER BY a.work_date DESC, u.full_name
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    record=_to_record(r),
                    login_id=r["login_id"],
                    full_name=r["full_name"],
                    department=r.get("department"),
                )
                for r in fetchall(cur)
            ]
