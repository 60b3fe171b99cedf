from __future__ import annotations

import logging

from clockwise_sdk import ApiSession
from clockwise_sdk.models import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list(self, limit: int = 50) -> list[Notification]:
        items = self.session.notifications_client().get_my_notifications(limit=limit)
        logger.info("notifications_loaded", extra={"count": len(items)})
        return items

    def mark_read(self, notification_id: str) -> Notification:
        return self.session.notifications_client().mark_notification_as_read(notification_id)

    def mark_all_read(self) -> int:
        user = self.session.user
        if user is None:
            return 0
        updated = self.session.notifications_client().mark_all_notifications_as_read(user.id)
        logger.info("notifications_marked_read", extra={"count": updated})
        return updated
