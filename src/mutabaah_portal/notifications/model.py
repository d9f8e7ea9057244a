from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    user_id: str
    type: NotificationType
    title: str
    message: str
    timestamp: int
    related_entity_id: Optional[str] = None
    is_read: bool = False

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "timestamp": self.timestamp,
            "related_entity_id": self.related_entity_id,
            "is_read": self.is_read,
        }
