from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..core.enums import RequestKind, RequestStatus


@dataclass(frozen=True)
class TadarusRequest:
    request_id: str
    mentee_id: str
    mentee_name: str
    mentor_id: str
    date: date
    category: str
    notes: Optional[str]
    status: RequestStatus
    requested_at: int
    reviewed_at: Optional[int] = None
    reviewer_notes: Optional[str] = None

    kind = RequestKind.TADARUS


@dataclass(frozen=True)
class MissedPrayerRequest:
    request_id: str
    mentee_id: str
    mentee_name: str
    mentor_id: str
    date: date
    prayer_id: str
    prayer_name: str
    reason: str
    status: RequestStatus
    requested_at: int
    reviewed_at: Optional[int] = None
    reviewer_notes: Optional[str] = None

    kind = RequestKind.MISSED_PRAYER


ManualRequest = Union[TadarusRequest, MissedPrayerRequest]
