from __future__ import annotations

from datetime import date, datetime

import pytest

from mutabaah_portal.activation.gate import WriteGate, is_writable
from mutabaah_portal.core.enums import SubmissionStatus
from mutabaah_portal.core.exceptions import PeriodClosedError, ValidationError
from mutabaah_portal.reports.model import MonthlyReportSubmission
from tests.fakes import FixedClock, InMemoryActivationRepo, InMemorySubmissionRepo, build_test_container

NOW = datetime(2024, 3, 10, 9, 0)
ACTIVE = {"2024-03"}


def _submission(status, month_key="2024-03", mentee_id="E1"):
    return MonthlyReportSubmission(
        submission_id="s-" + status.value,
        mentee_id=mentee_id,
        mentee_name="Ahmad",
        month_key=month_key,
        status=status,
        submitted_at=0,
        mentor_id="M1",
        ka_unit_id="K1",
    )


def test_current_month_past_day_is_writable():
    assert is_writable("E1", date(2024, 3, 1), ACTIVE, [], NOW)
    assert is_writable("E1", date(2024, 3, 10), ACTIVE, [], NOW)


def test_future_day_is_not_writable():
    assert not is_writable("E1", date(2024, 3, 11), ACTIVE, [], NOW)


def test_previous_month_is_not_writable():
    assert not is_writable("E1", date(2024, 2, 20), ACTIVE | {"2024-02"}, [], NOW)


def test_month_must_be_activated_unless_disabled():
    assert not is_writable("E1", date(2024, 3, 5), set(), [], NOW)
    assert is_writable("E1", date(2024, 3, 5), set(), [], NOW, require_activation=False)


@pytest.mark.parametrize(
    "status",
    [SubmissionStatus.PENDING_MENTOR, SubmissionStatus.PENDING_KAUNIT, SubmissionStatus.APPROVED],
)
def test_live_submission_locks_the_month(status):
    assert not is_writable("E1", date(2024, 3, 5), ACTIVE, [_submission(status)], NOW)


@pytest.mark.parametrize("status", [SubmissionStatus.REJECTED_MENTOR, SubmissionStatus.REJECTED_KAUNIT])
def test_rejected_submission_reopens_the_month(status):
    assert is_writable("E1", date(2024, 3, 5), ACTIVE, [_submission(status)], NOW)


def test_other_mentees_submissions_do_not_lock():
    other = _submission(SubmissionStatus.APPROVED, mentee_id="E2")
    assert is_writable("E1", date(2024, 3, 5), ACTIVE, [other], NOW)


def test_gate_is_monotonic_in_time():
    day = date(2024, 3, 5)
    was_closed = False
    for now in [datetime(2024, 3, d) for d in range(5, 32)] + [datetime(2024, 4, d) for d in range(1, 5)]:
        writable = is_writable("E1", day, ACTIVE, [], now)
        if was_closed:
            assert not writable
        was_closed = was_closed or not writable
    assert was_closed


def test_ensure_writable_raises_period_closed_for_last_month():
    activations = InMemoryActivationRepo([("E1", "2024-02"), ("E1", "2024-03")])
    gate = WriteGate(activations, InMemorySubmissionRepo(), FixedClock(NOW))

    with pytest.raises(PeriodClosedError):
        gate.ensure_writable("E1", date(2024, 2, 20))
    gate.ensure_writable("E1", date(2024, 3, 9))


def test_activation_is_idempotent_and_listed():
    container = build_test_container(activated=())
    svc = container.activation_service

    assert svc.activate_month(employee_id="E1", month_key="2024-03") is True
    assert svc.activate_month(employee_id="E1", month_key="2024-03") is False
    assert svc.activate_month(employee_id="E1", month_key="2024-01") is True
    assert svc.list_activated_months(employee_id="E1") == ["2024-01", "2024-03"]


def test_future_month_cannot_be_activated():
    container = build_test_container(activated=())

    with pytest.raises(ValidationError):
        container.activation_service.activate_month(employee_id="E1", month_key="2024-04")
    with pytest.raises(ValidationError):
        container.activation_service.activate_month(employee_id="E1", month_key="2024-13")
