from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Callable, Optional, Sequence, Union

from ..common.datetime_utils import Clock, parse_month_key, to_epoch_ms
from ..common.validators import require_month_key, require_non_empty
from ..core.constants import DEFAULT_PENDING_LIMIT
from ..core.enums import NotificationType, ReviewDecision, ReviewerRole, SubmissionStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..ledger.service import ProgressService
from ..notifications.notifier import Notifier, safe_notify
from ..org.model import OrgProfile
from ..org.repository import OrgDirectory
from . import router
from .model import MonthlyReportSubmission
from .repository import SubmissionRepository

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class ReportSubmissionService:
    def __init__(
        self,
        submissions: SubmissionRepository,
        progress: ProgressService,
        org: OrgDirectory,
        notifier: Notifier,
        clock: Clock,
        *,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._submissions = submissions
        self._progress = progress
        self._org = org
        self._notifier = notifier
        self._clock = clock
        self._id_factory = id_factory

    def _profile(self, employee_id: str) -> OrgProfile:
        profile = self._org.get_profile(employee_id)
        if profile is None:
            raise NotFoundError("Karyawan tidak ditemukan.")
        return profile

    def submit(self, *, mentee_id: str, month_key: str) -> MonthlyReportSubmission:
        mentee_id = require_non_empty(mentee_id, "Karyawan")
        month_key = require_month_key(month_key)

        now = self._clock.now()
        if parse_month_key(month_key) > now.date().replace(day=1):
            raise ValidationError("Tidak dapat mengirim laporan untuk bulan yang akan datang.")

        mentee = self._profile(mentee_id)
        if not mentee.mentor_id:
            raise ValidationError("Mentor belum diatur dalam profil Anda.")
        if self._submissions.find_live(mentee_id, month_key) is not None:
            raise ValidationError("Laporan untuk bulan ini sudah dikirim.")

        submission = MonthlyReportSubmission(
            submission_id=self._id_factory(),
            mentee_id=mentee_id,
            mentee_name=mentee.name,
            month_key=month_key,
            revision=self._submissions.latest_revision(mentee_id, month_key) + 1,
            status=SubmissionStatus.PENDING_MENTOR,
            submitted_at=to_epoch_ms(now),
            mentor_id=mentee.mentor_id,
            ka_unit_id=mentee.ka_unit_id,
            reports=self._progress.build_snapshot(employee_id=mentee_id, month_key=month_key),
        )
        # raises ConflictError when a concurrent submit took this revision
        self._submissions.create(submission)
        logger.info(
            "Report %s submitted by %s for %s (rev %d)",
            submission.submission_id,
            mentee_id,
            month_key,
            submission.revision,
        )

        safe_notify(
            self._notifier,
            user_id=submission.mentor_id,
            type=NotificationType.MONTHLY_REPORT_SUBMITTED,
            title="Laporan Bulanan Baru",
            message=f"{mentee.name} mengirim laporan mutabaah bulan {month_key}.",
            related_entity_id=submission.submission_id,
        )
        return submission

    def review(
        self,
        *,
        submission_id: str,
        viewer_id: str,
        decision: Union[ReviewDecision, str],
        notes: Optional[str] = None,
    ) -> MonthlyReportSubmission:
        try:
            decision = ReviewDecision(decision)
        except ValueError:
            raise ValidationError("Keputusan tidak valid")

        submission = self.get(submission_id=submission_id)
        viewer = self._org.get_profile(viewer_id)
        mentee = self._org.get_profile(submission.mentee_id)
        if not router.can_review(submission, viewer, mentee):
            raise AuthorizationError("Anda tidak memiliki akses untuk meninjau laporan ini.")

        notes = (notes or "").strip()
        if decision == ReviewDecision.REJECTED and not notes:
            raise ValidationError("Catatan wajib diisi saat menolak laporan.")

        role = router.reviewer_role_for(submission, viewer, mentee)
        new_status = router.apply_decision(submission, decision, notes, role)
        reviewed_at = to_epoch_ms(self._clock.now())
        if role == ReviewerRole.MENTOR:
            updated = replace(submission, status=new_status, mentor_reviewed_at=reviewed_at, mentor_notes=notes or None)
        else:
            updated = replace(submission, status=new_status, ka_unit_reviewed_at=reviewed_at, ka_unit_notes=notes or None)

        if not self._submissions.update_review(updated, expected_status=submission.status):
            raise ConflictError("Laporan ini sudah ditinjau oleh pengguna lain. Muat ulang halaman.")
        logger.info(
            "Report %s %s by %s (%s): %s -> %s",
            submission.submission_id,
            decision.value,
            viewer_id,
            role.value,
            submission.status.value,
            new_status.value,
        )

        self._notify_decision(updated, decision, role, notes, mentee)
        return updated

    def _notify_decision(
        self,
        submission: MonthlyReportSubmission,
        decision: ReviewDecision,
        role: ReviewerRole,
        notes: str,
        mentee: Optional[OrgProfile],
    ) -> None:
        reviewer_label = "Mentor" if role == ReviewerRole.MENTOR else "Ka. Unit"
        if decision == ReviewDecision.APPROVED:
            title = "Laporan Bulanan Disetujui"
            message = f"Laporan bulan {submission.month_key} disetujui oleh {reviewer_label}."
            notification_type = NotificationType.MONTHLY_REPORT_APPROVED
        else:
            title = "Laporan Bulanan Ditolak"
            message = f"Laporan bulan {submission.month_key} ditolak oleh {reviewer_label}."
            notification_type = NotificationType.MONTHLY_REPORT_REJECTED
        if notes:
            message = f"{message} Catatan: {notes}"

        safe_notify(
            self._notifier,
            user_id=submission.mentee_id,
            type=notification_type,
            title=title,
            message=message,
            related_entity_id=submission.submission_id,
        )

        if submission.status == SubmissionStatus.PENDING_KAUNIT:
            ka_unit_id = submission.ka_unit_id or (mentee.ka_unit_id if mentee else None)
            safe_notify(
                self._notifier,
                user_id=ka_unit_id,
                type=NotificationType.MONTHLY_REPORT_NEEDS_REVIEW,
                title="Validasi Laporan Diperlukan",
                message=f"Laporan {submission.mentee_name} bulan {submission.month_key} menunggu validasi Anda.",
                related_entity_id=submission.submission_id,
            )

    def get(self, *, submission_id: str) -> MonthlyReportSubmission:
        submission = self._submissions.get(submission_id)
        if submission is None:
            raise NotFoundError("Laporan tidak ditemukan.")
        return submission

    def list_for_mentee(self, *, mentee_id: str, month_key: Optional[str] = None) -> Sequence[MonthlyReportSubmission]:
        return self._submissions.list_for_mentee(mentee_id, month_key=month_key)

    def list_reviewable(self, *, viewer_id: str, limit: int = DEFAULT_PENDING_LIMIT) -> list[MonthlyReportSubmission]:
        viewer = self._org.get_profile(viewer_id)
        if viewer is None:
            return []

        mentees: dict[str, Optional[OrgProfile]] = {}
        out: list[MonthlyReportSubmission] = []
        for submission in self._submissions.list_pending(limit=limit):
            if submission.mentee_id not in mentees:
                mentees[submission.mentee_id] = self._org.get_profile(submission.mentee_id)
            if router.can_review(submission, viewer, mentees[submission.mentee_id]):
                out.append(submission)
        return out
