from __future__ import annotations

from datetime import date
from typing import Optional

from .base import SourceAdapter
from .model import TeamSessionAttendance

SESSION_TYPE_TO_ACTIVITY = {
    "doa bersama": "doa_bersama",
    "kie": "tepat_waktu_kie",
    "kajian selasa": "kajian_selasa",
    "pengajian persyarikatan": "persyarikatan",
    "persyarikatan": "persyarikatan",
    "bbq": "tadarus",
    "umum": "tadarus",
    "tadarus": "tadarus",
    "membaca al-quran dan buku": "baca_alquran_buku",
    "baca alquran buku": "baca_alquran_buku",
}


class TeamSessionAdapter(SourceAdapter[TeamSessionAttendance]):
    """Unmapped session types are informational-only and credit nothing."""

    def credit_for(self, record: TeamSessionAttendance) -> Optional[tuple[date, str]]:
        activity_id = SESSION_TYPE_TO_ACTIVITY.get((record.session_type or "").strip().lower())
        if not activity_id:
            return None
        return record.session_date, activity_id
