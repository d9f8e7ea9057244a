from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import PrayerCheckIn, ReadingReport, ScheduledActivityAttendance, TeamSessionAttendance


class EvidenceRepository(Protocol):
    """Read access to the raw evidence streams (owned by other subsystems)."""

    def list_prayer_checkins(self, *, employee_id: str, start: date, end: date) -> Sequence[PrayerCheckIn]:
        raise NotImplementedError

    def list_team_attendance(self, *, user_id: str, start: date, end: date) -> Sequence[TeamSessionAttendance]:
        raise NotImplementedError

    def list_scheduled_attendance(
        self, *, employee_id: str, start: date, end: date
    ) -> Sequence[ScheduledActivityAttendance]:
        raise NotImplementedError

    def list_reading_reports(self, *, employee_id: str, start: date, end: date) -> Sequence[ReadingReport]:
        raise NotImplementedError

    def add_prayer_checkin(self, checkin: PrayerCheckIn) -> None:
        raise NotImplementedError

    def add_team_attendance(self, attendance: TeamSessionAttendance) -> None:
        raise NotImplementedError

    def add_scheduled_attendance(self, attendance: ScheduledActivityAttendance) -> None:
        raise NotImplementedError

    def add_reading_report(self, report: ReadingReport) -> None:
        raise NotImplementedError
