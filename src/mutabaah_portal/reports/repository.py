from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_PENDING_LIMIT
from ..core.enums import SubmissionStatus
from .model import MonthlyReportSubmission


class SubmissionRepository(Protocol):
    def get(self, submission_id: str) -> Optional[MonthlyReportSubmission]:
        raise NotImplementedError

    def create(self, submission: MonthlyReportSubmission) -> None:
        """Insert a new revision. Raises ConflictError if (mentee, month, revision) exists."""

        raise NotImplementedError

    def update_review(self, submission: MonthlyReportSubmission, *, expected_status: SubmissionStatus) -> bool:
        """Compare-and-set: persist only if the stored status still equals expected_status."""

        raise NotImplementedError

    def find_live(self, mentee_id: str, month_key: str) -> Optional[MonthlyReportSubmission]:
        """Latest revision that is pending or approved, if any."""

        raise NotImplementedError

    def latest_revision(self, mentee_id: str, month_key: str) -> int:
        raise NotImplementedError

    def list_for_mentee(self, mentee_id: str, *, month_key: Optional[str] = None) -> Sequence[MonthlyReportSubmission]:
        raise NotImplementedError

    def list_pending(self, *, limit: int = DEFAULT_PENDING_LIMIT) -> Sequence[MonthlyReportSubmission]:
        raise NotImplementedError
