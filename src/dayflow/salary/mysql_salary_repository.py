from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from ..payroll.model import SalaryComponents
from ..users.model import User
from .model import EmployeeSalary, SalaryInfo, WageInput
from .repository import SalaryRepository

_COMPONENT_FIELDS = (
    "basic",
    "hra",
    "standard_allowance",
    "performance_bonus",
    "lta",
    "fixed_allowance",
    "pf_employee",
    "pf_employer",
    "professional_tax",
)

_SALARY_COLUMNS = ", ".join(
    ["s.user_id", "s.monthly_wage", "s.yearly_wage", "s.working_days", "s.working_hours", "s.updated_at"]
    + [f"s.{f}" for f in _COMPONENT_FIELDS]
)


def _to_info(r: dict) -> SalaryInfo:
    return SalaryInfo(
        user_id=int(r["user_id"]),
        monthly_wage=to_decimal(r["monthly_wage"]),
        yearly_wage=to_decimal(r["yearly_wage"]),
        components=SalaryComponents(**{f: to_decimal(r[f]) for f in _COMPONENT_FIELDS}),
        working_days=r.get("working_days"),
        working_hours=r.get("working_hours"),
        updated_at=r.get("updated_at"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, user_id: int) -> Optional[SalaryInfo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SALARY_COLUMNS} FROM salary_info s WHERE s.user_id=%s", (user_id,))
            r = fetchone(cur)
            return _to_info(r) if r else None

    def upsert(
        self,
        *,
        user_id: int,
        wage: WageInput,
        yearly_wage: Decimal,
        components: SalaryComponents,
    ) -> None:
        values = components.as_dict()
        columns = ["user_id", "monthly_wage", "yearly_wage", "working_days", "working_hours", *_COMPONENT_FIELDS]
        params = [user_id, wage.monthly_wage, yearly_wage, wage.working_days, wage.working_hours]
        params += [values[f] for f in _COMPONENT_FIELDS]
        updates = ", ".join(f"{c}=VALUES({c})" for c in columns[1:])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO salary_info({", ".join(columns)})
                VALUES({", ".join(["%s"] * len(columns))})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                tuple(params),
            )

    def list_with_employees(self, *, company_id: int, user_id: Optional[int] = None) -> Sequence[EmployeeSalary]:
        sql = f"""
            SELECT {_SALARY_COLUMNS},
                   u.company_id, u.login_id, u.full_name, u.email, u.password_hash, u.role,
                   u.department, u.job_title, u.date_joined, u.is_active
            FROM salary_info s
            JOIN users u ON u.user_id = s.user_id
            WHERE u.company_id=%s
        """
        params: list = [company_id]
        if user_id is not None:
            sql += " AND s.user_id=%s"
            params.append(user_id)
        sql += " ORDER BY u.full_name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            out: list[EmployeeSalary] = []
            for r in fetchall(cur):
                employee = User(
                    user_id=int(r["user_id"]),
                    company_id=int(r["company_id"]),
                    login_id=r["login_id"],
                    full_name=r["full_name"],
                    email=r["email"],
                    password_hash=r["password_hash"],
                    role=Role(r["role"]),
                    department=r.get("department"),
                    job_title=r.get("job_title"),
                    date_joined=r["date_joined"],
                    is_active=bool(r.get("is_active", True)),
                )
                out.append(EmployeeSalary(info=_to_info(r), employee=employee))
            return out
