"""Fire-and-forget notification sink.

Delivery (push, e-mail) lives elsewhere; this package only records the inbox
row. A failed notification must never undo the write that triggered it.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import Clock, to_epoch_ms
from ..core.enums import NotificationType
from .model import Notification

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(
        self,
        *,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        related_entity_id: Optional[str] = None,
    ) -> None:
        raise NotImplementedError


class NotificationRepository(Protocol):
    def add(self, notification: Notification) -> None:
        raise NotImplementedError

    def list_for_user(self, user_id: str, *, limit: int = 50) -> Sequence[Notification]:
        raise NotImplementedError


class InboxNotifier(Notifier):
    """Persist notifications as inbox rows."""

    def __init__(self, repo: NotificationRepository, clock: Clock):
        self._repo = repo
        self._clock = clock

    def notify(
        self,
        *,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        related_entity_id: Optional[str] = None,
    ) -> None:
        self._repo.add(
            Notification(
                user_id=str(user_id),
                type=type,
                title=title,
                message=message,
                timestamp=to_epoch_ms(self._clock.now()),
                related_entity_id=related_entity_id,
            )
        )


def safe_notify(notifier: Notifier, **kwargs) -> bool:
    """Send a notification, logging (not raising) on failure."""

    if not kwargs.get("user_id"):
        return False
    try:
        notifier.notify(**kwargs)
        return True
    except Exception:
        logger.warning(
            "Notification %s to %s failed", kwargs.get("type"), kwargs.get("user_id"), exc_info=True
        )
        return False
