from __future__ import annotations

from datetime import datetime, timezone

from ..models import Notification
from .base import BaseClient, eq


class NotificationsClient(BaseClient):
    def get_my_notifications(self, limit: int = 50) -> list[Notification]:
        data = self._select(
            "notifications",
            {"select": "*", "order": "created_at.desc", "limit": limit},
            module="notifications",
        )
        return [Notification.model_validate(item) for item in data or []]

    def mark_notification_as_read(self, notification_id: str) -> Notification:
        data = self._update(
            "notifications",
            {"id": eq(notification_id)},
            {"is_read": True, "read_at": _now_iso()},
            single=True,
            module="notifications",
        )
        return Notification.model_validate(data)

    def mark_all_notifications_as_read(self, user_id: str) -> int:
        data = self._update(
            "notifications",
            {"user_id": eq(user_id), "is_read": eq(False)},
            {"is_read": True, "read_at": _now_iso()},
            module="notifications",
        )
        return len(data) if isinstance(data, list) else 0


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
