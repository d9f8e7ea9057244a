"""Approval routing for monthly reports and manual requests.

Every "who may review this, and in which capacity" question is answered here;
services never compare reviewer ids themselves.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import RequestKind, RequestStatus, ReviewDecision, ReviewerRole, SubmissionStatus
from ..core.exceptions import ValidationError
from ..org.model import OrgProfile
from ..requests.model import ManualRequest
from .model import MonthlyReportSubmission

TRANSITIONS: dict[tuple[SubmissionStatus, ReviewDecision], SubmissionStatus] = {
    (SubmissionStatus.PENDING_MENTOR, ReviewDecision.APPROVED): SubmissionStatus.PENDING_KAUNIT,
    (SubmissionStatus.PENDING_MENTOR, ReviewDecision.REJECTED): SubmissionStatus.REJECTED_MENTOR,
    (SubmissionStatus.PENDING_KAUNIT, ReviewDecision.APPROVED): SubmissionStatus.APPROVED,
    (SubmissionStatus.PENDING_KAUNIT, ReviewDecision.REJECTED): SubmissionStatus.REJECTED_KAUNIT,
}

STAGE_ROLE: dict[SubmissionStatus, ReviewerRole] = {
    SubmissionStatus.PENDING_MENTOR: ReviewerRole.MENTOR,
    SubmissionStatus.PENDING_KAUNIT: ReviewerRole.KA_UNIT,
}


def reviewer_role_for(
    submission: MonthlyReportSubmission,
    viewer: Optional[OrgProfile] = None,
    mentee: Optional[OrgProfile] = None,
) -> ReviewerRole:
    role = STAGE_ROLE.get(submission.status)
    if role is not None:
        return role

    if viewer is not None:
        ka_unit_ids = {submission.ka_unit_id, mentee.ka_unit_id if mentee else None} - {None}
        if viewer.employee_id in ka_unit_ids:
            return ReviewerRole.KA_UNIT
    return ReviewerRole.MENTOR


def _has_override(viewer: OrgProfile, mentee: Optional[OrgProfile]) -> bool:
    if viewer.global_override:
        return True
    return mentee is not None and viewer.manages_hospital(mentee.hospital_id)


def can_review(
    submission: MonthlyReportSubmission,
    viewer: Optional[OrgProfile],
    mentee: Optional[OrgProfile],
) -> bool:
    if viewer is None or not submission.status.is_pending:
        return False
    if viewer.employee_id == submission.mentee_id:
        return False

    if submission.status == SubmissionStatus.PENDING_MENTOR:
        assigned = {submission.mentor_id, mentee.mentor_id if mentee else None}
    else:
        assigned = {submission.ka_unit_id, mentee.ka_unit_id if mentee else None}

    if viewer.employee_id in assigned - {None}:
        return True
    return _has_override(viewer, mentee)


def apply_decision(
    submission: MonthlyReportSubmission,
    decision: ReviewDecision,
    notes: Optional[str],
    role: ReviewerRole,
) -> SubmissionStatus:
    """Next status for a decision. Pure; raises ValidationError for illegal moves."""

    if submission.status.is_terminal:
        raise ValidationError("Laporan ini sudah selesai ditinjau.")
    if STAGE_ROLE[submission.status] != role:
        raise ValidationError("Laporan ini tidak sedang menunggu peninjauan Anda.")
    if decision == ReviewDecision.REJECTED and not (notes or "").strip():
        raise ValidationError("Catatan wajib diisi saat menolak laporan.")
    return TRANSITIONS[(submission.status, decision)]


def can_review_request(
    request: ManualRequest,
    viewer: Optional[OrgProfile],
    mentee: Optional[OrgProfile],
) -> bool:
    if viewer is None or request.status != RequestStatus.PENDING:
        return False
    if viewer.employee_id == request.mentee_id:
        return False

    assigned = {request.mentor_id, mentee.mentor_id if mentee else None}
    if request.kind == RequestKind.MISSED_PRAYER and mentee is not None:
        assigned.add(mentee.ka_unit_id)

    if viewer.employee_id in assigned - {None, ""}:
        return True
    return _has_override(viewer, mentee)
