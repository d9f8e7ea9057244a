from __future__ import annotations

import logging
from datetime import datetime

from mutabaah_portal.core.enums import NotificationType
from mutabaah_portal.notifications.notifier import InboxNotifier, safe_notify
from tests.fakes import FailingNotificationRepo, FixedClock, InMemoryNotificationRepo


def test_inbox_notifier_records_timestamp_from_clock():
    repo = InMemoryNotificationRepo()
    notifier = InboxNotifier(repo, FixedClock(datetime(2024, 3, 10, 9, 0)))

    assert safe_notify(
        notifier,
        user_id="E1",
        type=NotificationType.MONTHLY_REPORT_APPROVED,
        title="Laporan Bulanan Disetujui",
        message="ok",
        related_entity_id="s1",
    )

    [notification] = repo.items
    assert notification.user_id == "E1"
    assert notification.is_read is False
    assert notification.timestamp == int(FixedClock(datetime(2024, 3, 10, 9, 0)).now().timestamp() * 1000)


def test_safe_notify_logs_and_swallows_failures(caplog):
    notifier = InboxNotifier(FailingNotificationRepo(), FixedClock(datetime(2024, 3, 10, 9, 0)))

    with caplog.at_level(logging.WARNING, logger="mutabaah_portal.notifications.notifier"):
        sent = safe_notify(notifier, user_id="E1", type=NotificationType.MONTHLY_REPORT_REJECTED, title="t", message="m")

    assert sent is False
    assert "failed" in caplog.text


def test_safe_notify_skips_missing_recipient():
    repo = InMemoryNotificationRepo()
    notifier = InboxNotifier(repo, FixedClock(datetime(2024, 3, 10, 9, 0)))

    assert safe_notify(notifier, user_id=None, type=NotificationType.MONTHLY_REPORT_NEEDS_REVIEW, title="t", message="m") is False
    assert repo.items == []
