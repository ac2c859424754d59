from __future__ import annotations

import logging
from typing import Optional

from ..core import constants
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import NewNotification, Notification, NotificationFeed, NotificationSummary, parse_notification_type
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

ANNOUNCEMENT_TITLE = "New Announcement"


class NotificationService:
    def __init__(self, notifications: NotificationRepository, users: UserRepository):
        self._notifications = notifications
        self._users = users

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

    def send(self, *, current_role: Role, company_id: int, data: NewNotification) -> int:
        """Deliver to the listed employees, or to everyone in the company."""

        self._require_admin(current_role)

        company_users = {u.user_id for u in self._users.list_for_company(int(company_id))}
        if data.send_to_all:
            targets = sorted(company_users)
        elif data.user_ids:
            unknown = [uid for uid in data.user_ids if uid not in company_users]
            if unknown:
                raise NotFoundError("User not found or unauthorized")
            targets = list(dict.fromkeys(data.user_ids))
        else:
            raise ValidationError("Either userIds or sendToAll must be provided")

        count = self._notifications.create_many(
            user_ids=targets,
            type=data.type,
            title=data.title,
            message=data.message,
        )
        logger.info("Notification %r sent to %s users in company %s", data.title, count, company_id)
        return count

    def announce(self, *, current_role: Role, company_id: int, user_id: int, payload: dict) -> int:
        data = NewNotification.from_payload(payload, default_title=ANNOUNCEMENT_TITLE)
        return self.send(
            current_role=current_role,
            company_id=company_id,
            data=NewNotification(title=data.title, message=data.message, type=data.type, user_ids=[int(user_id)]),
        )

    def list_for_admin(
        self,
        *,
        current_role: Role,
        company_id: int,
        type: Optional[str] = None,
        unread_only: bool = False,
    ) -> NotificationFeed:
        self._require_admin(current_role)

        type_filter = parse_notification_type(type) if type else None
        rows = list(
            self._notifications.list_for_company(
                int(company_id),
                type=type_filter,
                unread_only=unread_only,
                limit=constants.NOTIFICATION_LIST_LIMIT,
            )
        )
        by_type = self._notifications.count_by_type(int(company_id))
        summary = NotificationSummary(
            total=len(rows),
            unread=self._notifications.count_unread(company_id=int(company_id)),
            by_type={t.value: n for t, n in by_type.items()},
        )
        return NotificationFeed(notifications=rows, summary=summary)

    def list_mine(self, user_id: int) -> list[Notification]:
        return list(self._notifications.list_for_user(int(user_id), limit=constants.NOTIFICATION_LIST_LIMIT))

    def unread_count(self, *, company_id: Optional[int] = None, user_id: Optional[int] = None) -> int:
        return self._notifications.count_unread(company_id=company_id, user_id=user_id)

    def mark_read(self, *, user_id: int, notification_id: int) -> None:
        if not self._notifications.mark_read(int(notification_id), user_id=int(user_id)):
            raise NotFoundError("Notification not found")

    def delete(self, *, current_role: Role, company_id: int, notification_id: int) -> None:
        self._require_admin(current_role)

        notification = self._notifications.get_by_id(int(notification_id))
        if not notification:
            raise NotFoundError("Notification not found")
        owner = self._users.get_by_id(notification.user_id)
        if not owner or owner.company_id != int(company_id):
            raise NotFoundError("Notification not found")

        self._notifications.delete(notification.notification_id)
        logger.info("Notification %s deleted", notification.notification_id)
