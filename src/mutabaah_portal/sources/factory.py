from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import RequestKind
from .base import SourceAdapter
from .manual_request_adapter import TadarusRequestAdapter
from .prayer_adapter import PrayerAttendanceAdapter
from .reading_history_adapter import ReadingHistoryAdapter
from .scheduled_activity_adapter import ScheduledActivityAdapter
from .team_session_adapter import TeamSessionAdapter


@dataclass
class SourceAdapterFactory:
    """Factory Pattern: one adapter instance per evidence stream."""

    prayer: PrayerAttendanceAdapter = field(default_factory=PrayerAttendanceAdapter)
    team_session: TeamSessionAdapter = field(default_factory=TeamSessionAdapter)
    tadarus: TadarusRequestAdapter = field(default_factory=TadarusRequestAdapter)
    scheduled: ScheduledActivityAdapter = field(default_factory=ScheduledActivityAdapter)
    reading: ReadingHistoryAdapter = field(default_factory=ReadingHistoryAdapter)

    def for_request(self, kind: RequestKind) -> SourceAdapter:
        if kind == RequestKind.TADARUS:
            return self.tadarus
        return self.prayer
