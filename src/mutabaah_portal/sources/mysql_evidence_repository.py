from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import PrayerCheckIn, ReadingReport, ScheduledActivityAttendance, TeamSessionAttendance
from .repository import EvidenceRepository


class MySQLEvidenceRepository(EvidenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_prayer_checkins(self, *, employee_id: str, start: date, end: date) -> Sequence[PrayerCheckIn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, prayer_id, prayer_date, status
                FROM prayer_checkins
                WHERE employee_id=%s AND prayer_date BETWEEN %s AND %s
                ORDER BY prayer_date
                """,
                (employee_id, start, end),
            )
            rows = fetchall(cur)
        return [
            PrayerCheckIn(
                employee_id=r["employee_id"],
                prayer_id=r["prayer_id"],
                date=r["prayer_date"],
                status=AttendanceStatus(r["status"]),
            )
            for r in rows
        ]

    def list_team_attendance(self, *, user_id: str, start: date, end: date) -> Sequence[TeamSessionAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, session_type, session_date
                FROM team_attendance
                WHERE user_id=%s AND session_date BETWEEN %s AND %s
                ORDER BY session_date
                """,
                (user_id, start, end),
            )
            rows = fetchall(cur)
        return [
            TeamSessionAttendance(user_id=r["user_id"], session_type=r["session_type"], session_date=r["session_date"])
            for r in rows
        ]

    def list_scheduled_attendance(
        self, *, employee_id: str, start: date, end: date
    ) -> Sequence[ScheduledActivityAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, activity_name, activity_date, status
                FROM activity_attendance
                WHERE employee_id=%s AND activity_date BETWEEN %s AND %s
                ORDER BY activity_date
                """,
                (employee_id, start, end),
            )
            rows = fetchall(cur)
        return [
            ScheduledActivityAttendance(
                employee_id=r["employee_id"],
                activity_name=r["activity_name"],
                activity_date=r["activity_date"],
                status=AttendanceStatus(r["status"]),
            )
            for r in rows
        ]

    def list_reading_reports(self, *, employee_id: str, start: date, end: date) -> Sequence[ReadingReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, reading_date, title
                FROM quran_reading_history
                WHERE employee_id=%s AND reading_date BETWEEN %s AND %s
                ORDER BY reading_date
                """,
                (employee_id, start, end),
            )
            rows = fetchall(cur)
        return [ReadingReport(employee_id=r["employee_id"], date=r["reading_date"], title=r["title"]) for r in rows]

    def add_prayer_checkin(self, checkin: PrayerCheckIn) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO prayer_checkins(employee_id, prayer_id, prayer_date, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (checkin.employee_id, checkin.prayer_id, checkin.date, checkin.status.value),
            )

    def add_team_attendance(self, attendance: TeamSessionAttendance) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO team_attendance(user_id, session_type, session_date)
                VALUES(%s,%s,%s)
                """,
                (attendance.user_id, attendance.session_type, attendance.session_date),
            )

    def add_scheduled_attendance(self, attendance: ScheduledActivityAttendance) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_attendance(employee_id, activity_name, activity_date, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (attendance.employee_id, attendance.activity_name, attendance.activity_date, attendance.status.value),
            )

    def add_reading_report(self, report: ReadingReport) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO quran_reading_history(employee_id, reading_date, title)
                VALUES(%s,%s,%s)
                """,
                (report.employee_id, report.date, report.title),
            )
