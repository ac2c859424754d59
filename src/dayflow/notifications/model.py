from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import NotificationType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Notification:
    notification_id: int
    user_id: int
    type: NotificationType
    title: str
    message: str
    is_read: bool = False
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None
    login_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "loginId": self.login_id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


def parse_notification_type(value: Any) -> NotificationType:
    if value in (None, ""):
        return NotificationType.ANNOUNCEMENT
    try:
        return NotificationType(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Invalid notification type")


@dataclass(frozen=True)
class NewNotification:
    """Validated body of a "send notification" request."""

    title: str
    message: str
    type: NotificationType = NotificationType.ANNOUNCEMENT
    user_ids: list[int] = field(default_factory=list)
    send_to_all: bool = False

    @classmethod
    def from_payload(cls, payload: dict[str, Any], *, default_title: Optional[str] = None) -> "NewNotification":
        title = (payload.get("title") or default_title or "").strip()
        message = (payload.get("message") or "").strip()
        if not title or not message:
            raise ValidationError("Title and message are required")

        user_ids = payload.get("userIds") or []
        if not isinstance(user_ids, list):
            raise ValidationError("userIds must be a list")
        try:
            user_ids = [int(u) for u in user_ids]
        except (TypeError, ValueError):
            raise ValidationError("userIds must be integers")

        return cls(
            title=title,
            message=message,
            type=parse_notification_type(payload.get("type")),
            user_ids=user_ids,
            send_to_all=bool(payload.get("sendToAll")),
        )


@dataclass(frozen=True)
class NotificationSummary:
    total: int
    unread: int
    by_type: dict[str, int]


@dataclass(frozen=True)
class NotificationFeed:
    notifications: list[Notification]
    summary: NotificationSummary
