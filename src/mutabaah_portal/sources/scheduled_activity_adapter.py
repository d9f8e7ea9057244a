from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus
from .base import SourceAdapter
from .model import ScheduledActivityAttendance

# Checked in order; the first substring found in the activity name wins.
NAME_SUBSTRING_TO_ACTIVITY = (
    ("KAJIAN SELASA", "kajian_selasa"),
    ("PERSYARIKATAN", "persyarikatan"),
    ("KIE", "tepat_waktu_kie"),
    ("DOA BERSAMA", "doa_bersama"),
)


class ScheduledActivityAdapter(SourceAdapter[ScheduledActivityAttendance]):
    def credit_for(self, record: ScheduledActivityAttendance) -> Optional[tuple[date, str]]:
        if record.status != AttendanceStatus.HADIR:
            return None

        name = (record.activity_name or "").upper()
        for needle, activity_id in NAME_SUBSTRING_TO_ACTIVITY:
            if needle in name:
                return record.activity_date, activity_id
        return None
