"""Activation/locking gate.

A day may be written by the employee only while its month is the current,
opted-in month and no live report (pending or approved) freezes it.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Collection, Iterable, Union

from ..common.datetime_utils import Clock, month_key_of
from ..core.constants import PERIOD_CLOSED_MESSAGE
from ..core.exceptions import PeriodClosedError
from ..reports.model import MonthlyReportSubmission
from ..reports.repository import SubmissionRepository
from .repository import ActivationRepository


def is_writable(
    employee_id: str,
    on: date,
    activation_set: Collection[str],
    existing_submissions: Iterable[MonthlyReportSubmission],
    now: Union[date, datetime],
    *,
    require_activation: bool = True,
) -> bool:
    today = now.date() if isinstance(now, datetime) else now
    if on > today:
        return False

    month_key = month_key_of(on)
    if month_key != month_key_of(today):
        return False

    if require_activation and month_key not in activation_set:
        return False

    for submission in existing_submissions:
        if submission.mentee_id != employee_id or submission.month_key != month_key:
            continue
        if submission.status.locks_period:
            return False
    return True


class WriteGate:
    """Wires the pure rule to storage and the trusted clock."""

    def __init__(
        self,
        activations: ActivationRepository,
        submissions: SubmissionRepository,
        clock: Clock,
        *,
        require_activation: bool = True,
    ):
        self._activations = activations
        self._submissions = submissions
        self._clock = clock
        self._require_activation = require_activation

    def is_writable(self, employee_id: str, on: date) -> bool:
        month_key = month_key_of(on)
        return is_writable(
            employee_id,
            on,
            set(self._activations.list_for_employee(employee_id)),
            self._submissions.list_for_mentee(employee_id, month_key=month_key),
            self._clock.now(),
            require_activation=self._require_activation,
        )

    def ensure_writable(self, employee_id: str, on: date) -> None:
        if not self.is_writable(employee_id, on):
            raise PeriodClosedError(PERIOD_CLOSED_MESSAGE)
