from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Company, CompanySettings
from .repository import CompanyRepository


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, company_id: int) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, name, initials, start_time, work_hours, grace_period
                FROM companies
                WHERE company_id=%s
                """,
                (company_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Company(
                company_id=int(r["company_id"]),
                name=r["name"],
                initials=r["initials"],
                start_time=normalize_mysql_time(r["start_time"]),
                work_hours=float(r["work_hours"]),
                grace_period=int(r["grace_period"]),
            )

    def update_settings(self, company_id: int, settings: CompanySettings) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE companies
                SET start_time=%s, work_hours=%s, grace_period=%s
                WHERE company_id=%s
                """,
                (settings.start_time, settings.work_hours, settings.grace_period, company_id),
            )
            return cur.rowcount > 0
