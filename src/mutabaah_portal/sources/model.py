from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class PrayerCheckIn:
    """Presensi sholat wajib yang dicatat langsung oleh karyawan."""

    employee_id: str
    prayer_id: str
    date: date
    status: AttendanceStatus = AttendanceStatus.HADIR


@dataclass(frozen=True)
class TeamSessionAttendance:
    user_id: str
    session_type: str
    session_date: date


@dataclass(frozen=True)
class ScheduledActivityAttendance:
    employee_id: str
    activity_name: str
    activity_date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class ReadingReport:
    """Laporan bacaan Al-Quran atau buku yang dicatat karyawan."""

    employee_id: str
    date: date
    title: Optional[str] = None
