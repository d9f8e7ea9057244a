from __future__ import annotations

from typing import Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Notification
from .notifier import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, notification: Notification) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(user_id, type, title, message, related_entity_id, timestamp, is_read)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    notification.user_id,
                    notification.type.value,
                    notification.title,
                    notification.message,
                    notification.related_entity_id,
                    int(notification.timestamp),
                    1 if notification.is_read else 0,
                ),
            )

    def list_for_user(self, user_id: str, *, limit: int = 50) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, type, title, message, related_entity_id, timestamp, is_read
                FROM notifications
                WHERE user_id=%s
                ORDER BY timestamp DESC
                LIMIT %s
                """,
                (str(user_id), int(limit)),
            )
            rows = fetchall(cur)
        return [
            Notification(
                user_id=r["user_id"],
                type=NotificationType(r["type"]),
                title=r["title"],
                message=r["message"],
                related_entity_id=r.get("related_entity_id"),
                timestamp=int(r["timestamp"]),
                is_read=bool(r["is_read"]),
            )
            for r in rows
        ]
