from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Callable, Optional, Sequence, Union

from ..activation.gate import WriteGate
from ..common.datetime_utils import Clock, to_epoch_ms
from ..common.validators import require_non_empty
from ..core.constants import PRAYER_IDS, PRAYER_NAMES, TADARUS_CATEGORIES
from ..core.enums import NotificationType, RequestKind, RequestStatus, ReviewDecision
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..ledger.service import ProgressService
from ..notifications.notifier import Notifier, safe_notify
from ..org.model import OrgProfile
from ..org.repository import OrgDirectory
from ..reports.router import can_review_request
from ..sources.factory import SourceAdapterFactory
from .model import ManualRequest, MissedPrayerRequest, TadarusRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)

_KIND_LABELS = {
    RequestKind.TADARUS: "tadarus",
    RequestKind.MISSED_PRAYER: "sholat terlewat",
}


def _new_id() -> str:
    return uuid.uuid4().hex


def parse_kind(value: Union[RequestKind, str]) -> RequestKind:
    try:
        return RequestKind(value)
    except ValueError:
        raise NotFoundError("Jenis permohonan tidak dikenal.")


class ManualRequestService:
    """Catch-up requests for evidence the automatic streams missed.

    An approved request is merged into the ledger through its source adapter.
    """

    def __init__(
        self,
        requests: RequestRepository,
        progress: ProgressService,
        gate: WriteGate,
        org: OrgDirectory,
        notifier: Notifier,
        clock: Clock,
        *,
        adapters: Optional[SourceAdapterFactory] = None,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._requests = requests
        self._progress = progress
        self._gate = gate
        self._org = org
        self._notifier = notifier
        self._clock = clock
        self._adapters = adapters or SourceAdapterFactory()
        self._id_factory = id_factory

    def _mentee_with_mentor(self, mentee_id: str) -> OrgProfile:
        mentee = self._org.get_profile(mentee_id)
        if mentee is None:
            raise NotFoundError("Karyawan tidak ditemukan.")
        if not mentee.mentor_id:
            raise ValidationError("Mentor belum diatur dalam profil Anda.")
        return mentee

    def create_tadarus_request(
        self,
        *,
        mentee_id: str,
        on: date,
        category: str,
        notes: Optional[str] = None,
    ) -> TadarusRequest:
        category = require_non_empty(category, "Kategori").upper()
        if category not in TADARUS_CATEGORIES:
            raise ValidationError(f"Kategori tidak valid: {category}")

        self._gate.ensure_writable(mentee_id, on)
        mentee = self._mentee_with_mentor(mentee_id)

        request = TadarusRequest(
            request_id=self._id_factory(),
            mentee_id=mentee.employee_id,
            mentee_name=mentee.name,
            mentor_id=mentee.mentor_id,
            date=on,
            category=category,
            notes=(notes or "").strip() or None,
            status=RequestStatus.PENDING,
            requested_at=to_epoch_ms(self._clock.now()),
        )
        return self._create(request, f"{mentee.name} mengajukan presensi {category} tanggal {on.isoformat()}.")

    def create_missed_prayer_request(
        self,
        *,
        mentee_id: str,
        on: date,
        prayer_id: str,
        reason: str,
    ) -> MissedPrayerRequest:
        prayer_id = require_non_empty(prayer_id, "Sholat").lower()
        if prayer_id not in PRAYER_IDS:
            raise ValidationError(f"Sholat tidak dikenal: {prayer_id}")
        reason = require_non_empty(reason, "Alasan")

        self._gate.ensure_writable(mentee_id, on)
        mentee = self._mentee_with_mentor(mentee_id)

        request = MissedPrayerRequest(
            request_id=self._id_factory(),
            mentee_id=mentee.employee_id,
            mentee_name=mentee.name,
            mentor_id=mentee.mentor_id,
            date=on,
            prayer_id=prayer_id,
            prayer_name=PRAYER_NAMES[prayer_id],
            reason=reason,
            status=RequestStatus.PENDING,
            requested_at=to_epoch_ms(self._clock.now()),
        )
        return self._create(
            request,
            f"{mentee.name} mengajukan sholat {request.prayer_name} terlewat tanggal {on.isoformat()}.",
        )

    def _create(self, request, message: str):
        self._requests.create(request)
        logger.info("Manual %s request %s created by %s", request.kind.value, request.request_id, request.mentee_id)
        safe_notify(
            self._notifier,
            user_id=request.mentor_id,
            type=NotificationType.MANUAL_REQUEST_SUBMITTED,
            title="Permohonan Baru",
            message=message,
            related_entity_id=request.request_id,
        )
        return request

    def get(self, *, kind: Union[RequestKind, str], request_id: str) -> ManualRequest:
        request = self._requests.get(parse_kind(kind), request_id)
        if request is None:
            raise NotFoundError("Permohonan tidak ditemukan.")
        return request

    def review_request(
        self,
        *,
        kind: Union[RequestKind, str],
        request_id: str,
        viewer_id: str,
        decision: Union[ReviewDecision, str],
        notes: Optional[str] = None,
    ) -> ManualRequest:
        try:
            decision = ReviewDecision(decision)
        except ValueError:
            raise ValidationError("Keputusan tidak valid")

        request = self.get(kind=kind, request_id=request_id)
        viewer = self._org.get_profile(viewer_id)
        mentee = self._org.get_profile(request.mentee_id)
        if not can_review_request(request, viewer, mentee):
            if request.status != RequestStatus.PENDING:
                raise ValidationError("Permohonan sudah diproses.")
            raise AuthorizationError("Anda tidak memiliki akses untuk meninjau permohonan ini.")

        notes = (notes or "").strip()
        if decision == ReviewDecision.REJECTED and request.kind == RequestKind.MISSED_PRAYER and not notes:
            raise ValidationError("Catatan wajib diisi saat menolak permohonan.")

        new_status = RequestStatus.APPROVED if decision == ReviewDecision.APPROVED else RequestStatus.REJECTED
        updated = replace(
            request,
            status=new_status,
            reviewed_at=to_epoch_ms(self._clock.now()),
            reviewer_notes=notes or None,
        )
        if not self._requests.update_review(updated, expected_status=RequestStatus.PENDING):
            raise ConflictError("Permohonan ini sudah ditinjau oleh pengguna lain.")
        logger.info("Manual %s request %s %s by %s", request.kind.value, request.request_id, new_status.value, viewer_id)

        if new_status == RequestStatus.APPROVED:
            fragments = self._adapters.for_request(updated.kind).to_fragment([updated])
            self._progress.apply_fragments(employee_id=updated.mentee_id, fragments=fragments)

        label = _KIND_LABELS[updated.kind]
        if new_status == RequestStatus.APPROVED:
            title, message = "Permohonan Disetujui", f"Permohonan {label} tanggal {updated.date.isoformat()} disetujui."
            notification_type = NotificationType.MANUAL_REQUEST_APPROVED
        else:
            title, message = "Permohonan Ditolak", f"Permohonan {label} tanggal {updated.date.isoformat()} ditolak."
            notification_type = NotificationType.MANUAL_REQUEST_REJECTED
        if notes:
            message = f"{message} Catatan: {notes}"
        safe_notify(
            self._notifier,
            user_id=updated.mentee_id,
            type=notification_type,
            title=title,
            message=message,
            related_entity_id=updated.request_id,
        )
        return updated

    def list_for_mentee(self, *, kind: Union[RequestKind, str], mentee_id: str) -> Sequence[ManualRequest]:
        return self._requests.list_for_mentee(parse_kind(kind), mentee_id)

    def list_reviewable(self, *, kind: Union[RequestKind, str], viewer_id: str) -> list[ManualRequest]:
        viewer = self._org.get_profile(viewer_id)
        if viewer is None:
            return []

        mentees: dict[str, Optional[OrgProfile]] = {}
        out: list[ManualRequest] = []
        for request in self._requests.list_pending(parse_kind(kind)):
            if request.mentee_id not in mentees:
                mentees[request.mentee_id] = self._org.get_profile(request.mentee_id)
            if can_review_request(request, viewer, mentees[request.mentee_id]):
                out.append(request)
        return out


def request_to_dict(request: ManualRequest) -> dict:
    data = {
        "id": request.request_id,
        "kind": request.kind.value,
        "mentee_id": request.mentee_id,
        "mentee_name": request.mentee_name,
        "mentor_id": request.mentor_id,
        "date": request.date.isoformat(),
        "status": request.status.value,
        "requested_at": request.requested_at,
        "reviewed_at": request.reviewed_at,
        "reviewer_notes": request.reviewer_notes,
    }
    if isinstance(request, TadarusRequest):
        data.update(category=request.category, notes=request.notes)
    else:
        data.update(prayer_id=request.prayer_id, prayer_name=request.prayer_name, reason=request.reason)
    return data
