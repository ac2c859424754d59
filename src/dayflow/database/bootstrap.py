from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..users.id_generator import build_login_id
from .connection import DBConfig


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_company_admin(
    db_config: dict,
    *,
    company_name: str,
    initials: str,
    admin_name: str,
    email: str,
    password: str,
    joining_year: int,
) -> str:
    """Create the company and its first admin account if missing; return the admin login id."""

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT company_id FROM companies WHERE name=%s", (company_name,))
        row = cur.fetchone()
        if row:
            company_id = int(row["company_id"])
        else:
            cur.execute("INSERT INTO companies (name, initials) VALUES (%s, %s)", (company_name, initials.upper()[:2]))
            company_id = int(cur.lastrowid)

        cur.execute("SELECT login_id FROM users WHERE email=%s", (email.lower(),))
        existing = cur.fetchone()
        if existing:
            conn.commit()
            return existing["login_id"]

        cur.execute(
            """
            INSERT INTO employee_counters (company_id, year, count) VALUES (%s, %s, LAST_INSERT_ID(1))
            ON DUPLICATE KEY UPDATE count = LAST_INSERT_ID(count + 1)
            """,
            (company_id, joining_year),
        )
        cur.execute("SELECT LAST_INSERT_ID() AS serial")
        serial = int(cur.fetchone()["serial"])

        login_id = build_login_id(
            company_initials=initials,
            full_name=admin_name,
            joining_year=joining_year,
            serial=serial,
        )
        cur.execute(
            """
            INSERT INTO users (company_id, login_id, full_name, email, password_hash, role, date_joined, is_first_login)
            VALUES (%s, %s, %s, %s, %s, 'admin', %s, 0)
            """,
            (company_id, login_id, admin_name, email.lower(), generate_password_hash(password), f"{joining_year}-01-01"),
        )
        conn.commit()
        return login_id
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
