from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from ..activation.gate import WriteGate
from ..catalog.registry import get_activity
from ..common.datetime_utils import date_in_month, month_bounds, month_key_of
from ..common.validators import require_day_key, require_month_key, require_non_empty
from ..core.constants import PRAYER_IDS
from ..core.enums import RequestKind
from ..core.exceptions import ValidationError
from ..requests.repository import RequestRepository
from ..sources.factory import SourceAdapterFactory
from ..sources.model import PrayerCheckIn, ReadingReport, ScheduledActivityAttendance, TeamSessionAttendance
from ..sources.repository import EvidenceRepository
from . import merge
from .model import DayMap, ProgressFragment
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


def _credit_total(day_map: DayMap) -> int:
    return sum(len(flags) for flags in day_map.values())


class ProgressService:
    """Read-merge-write access to the per-employee monthly checklist.

    Employee-initiated writes pass the write gate first. Credits derived from
    already-approved evidence go through merge_fragment, which is never gated.
    """

    def __init__(
        self,
        ledger: LedgerRepository,
        gate: WriteGate,
        evidence: EvidenceRepository,
        requests: RequestRepository,
        *,
        adapters: Optional[SourceAdapterFactory] = None,
    ):
        self._ledger = ledger
        self._gate = gate
        self._evidence = evidence
        self._requests = requests
        self._adapters = adapters or SourceAdapterFactory()

    def get_month(self, *, employee_id: str, month_key: str) -> DayMap:
        month_key = require_month_key(month_key)
        return merge.clean_month(self._ledger.load_month(employee_id, month_key))

    def list_months(self, *, employee_id: str) -> list[str]:
        return sorted(self._ledger.list_months(employee_id))

    def mark_activity(
        self,
        *,
        employee_id: str,
        month_key: str,
        day_key: str,
        activity_id: str,
        value: bool = True,
    ) -> DayMap:
        employee_id = require_non_empty(employee_id, "Karyawan")
        month_key = require_month_key(month_key)
        require_day_key(day_key)
        activity_id = require_non_empty(activity_id, "Aktivitas")
        if get_activity(activity_id) is None and activity_id not in PRAYER_IDS:
            raise ValidationError(f"Aktivitas tidak dikenal: {activity_id}")

        on = date_in_month(month_key, day_key)
        self._gate.ensure_writable(employee_id, on)

        return self._ledger.update_month(
            employee_id,
            month_key,
            lambda current: merge.mark_activity(current, day_key, activity_id, value),
        )

    def merge_fragment(self, *, employee_id: str, month_key: str, fragment: Mapping[str, object]) -> DayMap:
        month_key = require_month_key(month_key)
        return self._ledger.update_month(
            employee_id,
            month_key,
            lambda current: merge.merge_fragment(current, fragment),
        )

    def apply_fragments(self, *, employee_id: str, fragments: ProgressFragment) -> None:
        for month_key, day_map in fragments.items():
            self.merge_fragment(employee_id=employee_id, month_key=month_key, fragment=day_map)

    def record_prayer(self, *, employee_id: str, prayer_id: str, on: date) -> DayMap:
        prayer_id = require_non_empty(prayer_id, "Sholat").lower()
        if prayer_id not in PRAYER_IDS:
            raise ValidationError(f"Sholat tidak dikenal: {prayer_id}")
        self._gate.ensure_writable(employee_id, on)

        checkin = PrayerCheckIn(employee_id=employee_id, prayer_id=prayer_id, date=on)
        self._evidence.add_prayer_checkin(checkin)
        return self._merge_credit(employee_id, self._adapters.prayer.to_fragment([checkin]), on)

    def record_team_attendance(self, attendance: TeamSessionAttendance) -> DayMap:
        self._gate.ensure_writable(attendance.user_id, attendance.session_date)
        self._evidence.add_team_attendance(attendance)
        fragment = self._adapters.team_session.to_fragment([attendance])
        return self._merge_credit(attendance.user_id, fragment, attendance.session_date)

    def record_scheduled_attendance(self, attendance: ScheduledActivityAttendance) -> DayMap:
        self._gate.ensure_writable(attendance.employee_id, attendance.activity_date)
        self._evidence.add_scheduled_attendance(attendance)
        fragment = self._adapters.scheduled.to_fragment([attendance])
        return self._merge_credit(attendance.employee_id, fragment, attendance.activity_date)

    def record_reading_report(self, report: ReadingReport) -> DayMap:
        self._gate.ensure_writable(report.employee_id, report.date)
        self._evidence.add_reading_report(report)
        return self._merge_credit(report.employee_id, self._adapters.reading.to_fragment([report]), report.date)

    def _merge_credit(self, employee_id: str, fragment: ProgressFragment, on: date) -> DayMap:
        month_key = month_key_of(on)
        day_map = fragment.get(month_key)
        if not day_map:
            # informational-only evidence; nothing to credit
            return self.get_month(employee_id=employee_id, month_key=month_key)
        return self.merge_fragment(employee_id=employee_id, month_key=month_key, fragment=day_map)

    def derive_month(self, *, employee_id: str, month_key: str) -> DayMap:
        """Credits implied by stored evidence for the month (no I/O on the ledger)."""

        start, end = month_bounds(month_key)
        fragments = [
            self._adapters.prayer.to_fragment(
                self._evidence.list_prayer_checkins(employee_id=employee_id, start=start, end=end)
            ),
            self._adapters.team_session.to_fragment(
                self._evidence.list_team_attendance(user_id=employee_id, start=start, end=end)
            ),
            self._adapters.scheduled.to_fragment(
                self._evidence.list_scheduled_attendance(employee_id=employee_id, start=start, end=end)
            ),
            self._adapters.reading.to_fragment(
                self._evidence.list_reading_reports(employee_id=employee_id, start=start, end=end)
            ),
        ]
        for kind in RequestKind:
            approved = self._requests.list_approved(kind, employee_id, start=start, end=end)
            fragments.append(self._adapters.for_request(kind).to_fragment(approved))

        return merge.merge_fragments(fragments).get(month_key, {})

    def sync_evidence(self, *, employee_id: str, month_key: str) -> DayMap:
        """Backfill: union every evidence-derived credit into the stored month."""

        month_key = require_month_key(month_key)
        derived = self.derive_month(employee_id=employee_id, month_key=month_key)
        before = self.get_month(employee_id=employee_id, month_key=month_key)
        if not derived:
            return before

        after = self.merge_fragment(employee_id=employee_id, month_key=month_key, fragment=derived)
        logger.debug(
            "Backfilled %d credits for %s %s",
            _credit_total(after) - _credit_total(before),
            employee_id,
            month_key,
        )
        return after

    def build_snapshot(self, *, employee_id: str, month_key: str) -> DayMap:
        return merge.clean_month(self.sync_evidence(employee_id=employee_id, month_key=month_key))

