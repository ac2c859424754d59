from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification
from .repository import NotificationRepository

_SELECT = """
    SELECT n.notification_id, n.user_id, n.type, n.title, n.message, n.is_read, n.created_at,
           u.full_name, u.login_id
    FROM notifications n
    JOIN users u ON u.user_id = n.user_id
"""


def _to_notification(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["notification_id"]),
        user_id=int(r["user_id"]),
        type=NotificationType(r["type"]),
        title=r["title"],
        message=r["message"],
        is_read=bool(r["is_read"]),
        created_at=r.get("created_at"),
        user_name=r.get("full_name"),
        login_id=r.get("login_id"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_many(self, *, user_ids: Sequence[int], type: NotificationType, title: str, message: str) -> int:
        rows = [(int(uid), type.value, title, message) for uid in user_ids]
        if not rows:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO notifications(user_id, type, title, message) VALUES(%s,%s,%s,%s)",
                rows,
            )
            return len(rows)

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE n.notification_id=%s", (notification_id,))
            r = fetchone(cur)
            return _to_notification(r) if r else None

    def list_for_company(
        self,
        company_id: int,
        *,
        type: Optional[NotificationType] = None,
        unread_only: bool = False,
        limit: int = 100,
    ) -> Sequence[Notification]:
        where = ["u.company_id=%s"]
        params: list = [company_id]
        if type is not None:
            where.append("n.type=%s")
            params.append(type.value)
        if unread_only:
            where.append("n.is_read=0")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE " + " AND ".join(where) + " ORDER BY n.created_at DESC LIMIT %s",
                (*params, int(limit)),
            )
            return [_to_notification(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int, *, limit: int = 100) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE n.user_id=%s ORDER BY n.created_at DESC LIMIT %s",
                (user_id, int(limit)),
            )
            return [_to_notification(r) for r in fetchall(cur)]

    def count_unread(self, *, company_id: Optional[int] = None, user_id: Optional[int] = None) -> int:
        where = ["n.is_read=0"]
        params: list = []
        if company_id is not None:
            where.append("u.company_id=%s")
            params.append(company_id)
        if user_id is not None:
            where.append("n.user_id=%s")
            params.append(user_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM notifications n JOIN users u ON u.user_id = n.user_id WHERE "
                + " AND ".join(where),
                tuple(params),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def count_by_type(self, company_id: int) -> dict[NotificationType, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT n.type, COUNT(*) AS total
                FROM notifications n
                JOIN users u ON u.user_id = n.user_id
                WHERE u.company_id=%s
                GROUP BY n.type
                """,
                (company_id,),
            )
            return {NotificationType(r["type"]): int(r["total"]) for r in fetchall(cur)}

    def mark_read(self, notification_id: int, *, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE notification_id=%s AND user_id=%s",
                (notification_id, user_id),
            )
            return cur.rowcount > 0

    def delete(self, notification_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM notifications WHERE notification_id=%s", (notification_id,))
            return cur.rowcount > 0
