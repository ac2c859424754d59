from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_PROFILE_COLUMNS = ("full_name", "phone", "address", "department", "job_title")

_COLUMNS = """
    user_id, company_id, login_id, full_name, email, password_hash, role,
    department, job_title, date_joined, is_active, is_first_login, phone, address
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        company_id=int(row["company_id"]),
        login_id=row["login_id"],
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        department=row.get("department"),
        job_title=row.get("job_title"),
        date_joined=row["date_joined"],
        is_active=bool(row.get("is_active", True)),
        is_first_login=bool(row.get("is_first_login", False)),
        phone=row.get("phone"),
        address=row.get("address"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_login(self, login: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE login_id=%s OR email=%s",
                (login.upper(), login.lower()),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def email_exists(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM users WHERE email=%s", (email.lower(),))
            return fetchone(cur) is not None

    def next_serial(self, *, company_id: int, year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_counters(company_id, year, count)
                VALUES(%s, %s, LAST_INSERT_ID(1))
                ON DUPLICATE KEY UPDATE count = LAST_INSERT_ID(count + 1)
                """,
                (company_id, year),
            )
            cur.execute("SELECT LAST_INSERT_ID() AS serial")
            return int(fetchone(cur)["serial"])

    def create_user(
        self,
        *,
        company_id: int,
        login_id: str,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: Optional[str],
        job_title: Optional[str],
        date_joined: date,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(company_id, login_id, full_name, email, password_hash, role,
                                  department, job_title, date_joined, is_active, is_first_login)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,1,1)
                """,
                (company_id, login_id, full_name, email, password_hash, role.value, department, job_title, date_joined),
            )
            return int(cur.lastrowid)

    def update_password(self, user_id: int, *, password_hash: str, is_first_login: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET password_hash=%s, is_first_login=%s WHERE user_id=%s",
                (password_hash, int(is_first_login), user_id),
            )
            return cur.rowcount > 0

    def update_profile(self, user_id: int, *, changes: dict[str, Optional[str]]) -> bool:
        columns = [c for c in _PROFILE_COLUMNS if c in changes]
        if not columns:
            return False
        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE users SET {assignments} WHERE user_id=%s",
                tuple(changes[c] for c in columns) + (user_id,),
            )
            return cur.rowcount > 0

    def list_for_company(self, company_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE company_id=%s ORDER BY full_name",
                (company_id,),
            )
            return [_to_user(r) for r in fetchall(cur)]
