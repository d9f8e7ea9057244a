from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from mutabaah_portal.core.enums import (
    RequestStatus,
    ReviewDecision,
    ReviewerRole,
    Role,
    SubmissionStatus,
)
from mutabaah_portal.core.exceptions import ValidationError
from mutabaah_portal.org.model import OrgProfile
from mutabaah_portal.reports.model import MonthlyReportSubmission
from mutabaah_portal.reports.router import (
    TRANSITIONS,
    apply_decision,
    can_review,
    can_review_request,
    reviewer_role_for,
)
from mutabaah_portal.requests.model import MissedPrayerRequest, TadarusRequest

MENTEE = OrgProfile(employee_id="E1", name="Ahmad", mentor_id="M1", ka_unit_id="K1", hospital_id="RS1")
MENTOR = OrgProfile(employee_id="M1", name="Mentor")
KA_UNIT = OrgProfile(employee_id="K1", name="Ka Unit")
STRANGER = OrgProfile(employee_id="X9", name="Orang Lain", hospital_id="RS1")


def _submission(status=SubmissionStatus.PENDING_MENTOR, **kwargs):
    data = dict(
        submission_id="s1",
        mentee_id="E1",
        mentee_name="Ahmad",
        month_key="2024-03",
        status=status,
        submitted_at=0,
        mentor_id="M1",
        ka_unit_id="K1",
    )
    data.update(kwargs)
    return MonthlyReportSubmission(**data)


def test_transition_table_is_closed():
    statuses = set(SubmissionStatus)
    for (source, _), target in TRANSITIONS.items():
        assert source.is_pending
        assert target in statuses
    for status in SubmissionStatus:
        for decision in ReviewDecision:
            if status.is_terminal:
                with pytest.raises(ValidationError):
                    apply_decision(_submission(status), decision, "catatan", ReviewerRole.MENTOR)
                with pytest.raises(ValidationError):
                    apply_decision(_submission(status), decision, "catatan", ReviewerRole.KA_UNIT)


def test_apply_decision_follows_two_stages():
    first = apply_decision(_submission(), ReviewDecision.APPROVED, "ok", ReviewerRole.MENTOR)
    assert first == SubmissionStatus.PENDING_KAUNIT

    second = apply_decision(_submission(first), ReviewDecision.APPROVED, "", ReviewerRole.KA_UNIT)
    assert second == SubmissionStatus.APPROVED

    assert (
        apply_decision(_submission(first), ReviewDecision.REJECTED, "kurang", ReviewerRole.KA_UNIT)
        == SubmissionStatus.REJECTED_KAUNIT
    )


def test_apply_decision_rejects_wrong_role():
    with pytest.raises(ValidationError):
        apply_decision(_submission(), ReviewDecision.APPROVED, "", ReviewerRole.KA_UNIT)


@pytest.mark.parametrize("notes", [None, "", "   "])
def test_rejection_requires_notes(notes):
    with pytest.raises(ValidationError):
        apply_decision(_submission(), ReviewDecision.REJECTED, notes, ReviewerRole.MENTOR)


def test_reviewer_role_for_pending_stages_and_fallback():
    assert reviewer_role_for(_submission()) == ReviewerRole.MENTOR
    assert reviewer_role_for(_submission(SubmissionStatus.PENDING_KAUNIT)) == ReviewerRole.KA_UNIT

    done = _submission(SubmissionStatus.APPROVED)
    assert reviewer_role_for(done, KA_UNIT, MENTEE) == ReviewerRole.KA_UNIT
    assert reviewer_role_for(done, MENTOR, MENTEE) == ReviewerRole.MENTOR


def test_can_review_snapshotted_and_current_reviewers():
    assert can_review(_submission(), MENTOR, MENTEE)
    assert not can_review(_submission(), KA_UNIT, MENTEE)
    assert can_review(_submission(SubmissionStatus.PENDING_KAUNIT), KA_UNIT, MENTEE)

    new_mentor = OrgProfile(employee_id="M2", name="Mentor Baru")
    moved = replace(MENTEE, mentor_id="M2")
    assert can_review(_submission(), new_mentor, moved)
    assert can_review(_submission(), MENTOR, moved)


def test_can_review_denies_strangers_self_and_terminal():
    assert not can_review(_submission(), STRANGER, MENTEE)
    assert not can_review(_submission(), None, MENTEE)
    assert not can_review(_submission(mentor_id="E1"), MENTEE, MENTEE)
    assert not can_review(_submission(SubmissionStatus.APPROVED), KA_UNIT, MENTEE)


def test_overrides_global_and_hospital_scoped_admin():
    bph = OrgProfile(employee_id="B1", name="BPH", global_override=True)
    admin = OrgProfile(employee_id="A1", name="Admin", role=Role.ADMIN, managed_hospital_ids=frozenset({"RS1"}))
    other_admin = OrgProfile(employee_id="A2", name="Admin", role=Role.ADMIN, managed_hospital_ids=frozenset({"RS2"}))

    assert can_review(_submission(), bph, MENTEE)
    assert can_review(_submission(SubmissionStatus.PENDING_KAUNIT), admin, MENTEE)
    assert not can_review(_submission(), other_admin, MENTEE)


def test_can_review_request_rules():
    tadarus = TadarusRequest(
        request_id="t1",
        mentee_id="E1",
        mentee_name="Ahmad",
        mentor_id="M1",
        date=date(2024, 3, 5),
        category="BBQ",
        notes=None,
        status=RequestStatus.PENDING,
        requested_at=0,
    )
    prayer = MissedPrayerRequest(
        request_id="p1",
        mentee_id="E1",
        mentee_name="Ahmad",
        mentor_id="M1",
        date=date(2024, 3, 5),
        prayer_id="subuh",
        prayer_name="Subuh",
        reason="dinas",
        status=RequestStatus.PENDING,
        requested_at=0,
    )

    assert can_review_request(tadarus, MENTOR, MENTEE)
    assert not can_review_request(tadarus, KA_UNIT, MENTEE)
    assert can_review_request(prayer, KA_UNIT, MENTEE)
    assert not can_review_request(prayer, STRANGER, MENTEE)
    assert not can_review_request(replace(tadarus, status=RequestStatus.APPROVED), MENTOR, MENTEE)
