from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationType
from .model import Notification


class NotificationRepository(Protocol):
    def create_many(self, *, user_ids: Sequence[int], type: NotificationType, title: str, message: str) -> int:
        """Insert one notification per user and return how many were written."""

        raise NotImplementedError

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_company(
        self,
        company_id: int,
        *,
        type: Optional[NotificationType] = None,
        unread_only: bool = False,
        limit: int = 100,
    ) -> Sequence[Notification]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int = 100) -> Sequence[Notification]:
        raise NotImplementedError

    def count_unread(self, *, company_id: Optional[int] = None, user_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def count_by_type(self, company_id: int) -> dict[NotificationType, int]:
        raise NotImplementedError

    def mark_read(self, notification_id: int, *, user_id: int) -> bool:
        raise NotImplementedError

    def delete(self, notification_id: int) -> bool:
        raise NotImplementedError
