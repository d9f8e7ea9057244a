from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_PENDING_LIMIT
from ..core.enums import RequestKind, RequestStatus
from .model import ManualRequest


class RequestRepository(Protocol):
    def create(self, request: ManualRequest) -> None:
        raise NotImplementedError

    def get(self, kind: RequestKind, request_id: str) -> Optional[ManualRequest]:
        raise NotImplementedError

    def update_review(self, request: ManualRequest, *, expected_status: RequestStatus) -> bool:
        """Compare-and-set on status; False when someone else decided first."""

        raise NotImplementedError

    def list_for_mentee(self, kind: RequestKind, mentee_id: str) -> Sequence[ManualRequest]:
        raise NotImplementedError

    def list_pending(self, kind: RequestKind, *, limit: int = DEFAULT_PENDING_LIMIT) -> Sequence[ManualRequest]:
        raise NotImplementedError

    def list_approved(
        self,
        kind: RequestKind,
        mentee_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[ManualRequest]:
        raise NotImplementedError
