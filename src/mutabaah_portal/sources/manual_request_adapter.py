from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import RequestStatus
from ..requests.model import TadarusRequest
from .base import SourceAdapter

DEFAULT_TADARUS_ACTIVITY = "tadarus"

CATEGORY_TO_ACTIVITY = {
    "BBQ": "tadarus",
    "UMUM": "tadarus",
    "TADARUS": "tadarus",
    "KIE": "tepat_waktu_kie",
    "DOA BERSAMA": "doa_bersama",
    "KAJIAN SELASA": "kajian_selasa",
    "PERSYARIKATAN": "persyarikatan",
}


class TadarusRequestAdapter(SourceAdapter[TadarusRequest]):
    def credit_for(self, record: TadarusRequest) -> Optional[tuple[date, str]]:
        if record.status != RequestStatus.APPROVED:
            return None
        category = (record.category or "").strip().upper()
        return record.date, CATEGORY_TO_ACTIVITY.get(category, DEFAULT_TADARUS_ACTIVITY)
