from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import FIRST_REVISION
from ..core.enums import SubmissionStatus
from ..ledger.model import DayMap


@dataclass(frozen=True)
class MonthlyReportSubmission:
    """Frozen snapshot of one mentee's month, moving through the review chain.

    mentee_id, month_key and revision never change after creation; reviewer ids
    are the ones that held the relationship when the report was submitted.
    """

    submission_id: str
    mentee_id: str
    mentee_name: str
    month_key: str
    status: SubmissionStatus
    submitted_at: int
    mentor_id: Optional[str]
    ka_unit_id: Optional[str]
    reports: DayMap = field(default_factory=dict)
    revision: int = FIRST_REVISION
    mentor_reviewed_at: Optional[int] = None
    mentor_notes: Optional[str] = None
    ka_unit_reviewed_at: Optional[int] = None
    ka_unit_notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.submission_id,
            "mentee_id": self.mentee_id,
            "mentee_name": self.mentee_name,
            "month_key": self.month_key,
            "revision": self.revision,
            "status": self.status.value,
            "submitted_at": self.submitted_at,
            "mentor_id": self.mentor_id,
            "ka_unit_id": self.ka_unit_id,
            "mentor_reviewed_at": self.mentor_reviewed_at,
            "mentor_notes": self.mentor_notes,
            "ka_unit_reviewed_at": self.ka_unit_reviewed_at,
            "ka_unit_notes": self.ka_unit_notes,
            "reports": self.reports,
        }
