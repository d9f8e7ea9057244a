from __future__ import annotations

from datetime import date
from typing import Optional, Union

from ..core.enums import AttendanceStatus, RequestStatus
from ..requests.model import MissedPrayerRequest
from .base import SourceAdapter
from .model import PrayerCheckIn


class PrayerAttendanceAdapter(SourceAdapter[Union[PrayerCheckIn, MissedPrayerRequest]]):
    """Credit the prayer itself on the day it was (or should have been) prayed.

    The record's own date decides the day, never the time it was submitted.
    """

    def credit_for(self, record: Union[PrayerCheckIn, MissedPrayerRequest]) -> Optional[tuple[date, str]]:
        if isinstance(record, MissedPrayerRequest):
            if record.status != RequestStatus.APPROVED:
                return None
        elif record.status != AttendanceStatus.HADIR:
            return None

        prayer_id = (record.prayer_id or "").strip().lower()
        if not prayer_id:
            return None
        return record.date, prayer_id
