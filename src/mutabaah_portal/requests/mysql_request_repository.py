from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import DEFAULT_PENDING_LIMIT
from ..core.enums import RequestKind, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ManualRequest, MissedPrayerRequest, TadarusRequest
from .repository import RequestRepository

_TABLES = {
    RequestKind.TADARUS: "tadarus_requests",
    RequestKind.MISSED_PRAYER: "missed_prayer_requests",
}

_COMMON_COLUMNS = (
    "request_id, mentee_id, mentee_name, mentor_id, request_date, status, "
    "requested_at, reviewed_at, reviewer_notes"
)
_KIND_COLUMNS = {
    RequestKind.TADARUS: "category, notes",
    RequestKind.MISSED_PRAYER: "prayer_id, prayer_name, reason",
}


def _row_to_request(kind: RequestKind, r: dict) -> ManualRequest:
    common = dict(
        request_id=str(r["request_id"]),
        mentee_id=str(r["mentee_id"]),
        mentee_name=r.get("mentee_name") or "",
        mentor_id=r.get("mentor_id") or "",
        date=r["request_date"],
        status=RequestStatus(r["status"]),
        requested_at=int(r["requested_at"]),
        reviewed_at=r.get("reviewed_at"),
        reviewer_notes=r.get("reviewer_notes"),
    )
    if kind == RequestKind.TADARUS:
        return TadarusRequest(category=r["category"], notes=r.get("notes"), **common)
    return MissedPrayerRequest(
        prayer_id=r["prayer_id"],
        prayer_name=r.get("prayer_name") or "",
        reason=r.get("reason") or "",
        **common,
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, kind: RequestKind, where: str, params: tuple, suffix: str = "") -> list[ManualRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COMMON_COLUMNS}, {_KIND_COLUMNS[kind]}
                FROM {_TABLES[kind]}
                WHERE {where}
                {suffix}
                """,
                params,
            )
            return [_row_to_request(kind, r) for r in fetchall(cur)]

    def create(self, request: ManualRequest) -> None:
        common = (
            request.request_id,
            request.mentee_id,
            request.mentee_name,
            request.mentor_id,
            request.date,
            request.status.value,
            int(request.requested_at),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if isinstance(request, TadarusRequest):
                cur.execute(
                    """
                    INSERT INTO tadarus_requests(
                        request_id, mentee_id, mentee_name, mentor_id, request_date, status, requested_at,
                        category, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    common + (request.category, request.notes),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO missed_prayer_requests(
                        request_id, mentee_id, mentee_name, mentor_id, request_date, status, requested_at,
                        prayer_id, prayer_name, reason
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    common + (request.prayer_id, request.prayer_name, request.reason),
                )

    def get(self, kind: RequestKind, request_id: str) -> Optional[ManualRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COMMON_COLUMNS}, {_KIND_COLUMNS[kind]} FROM {_TABLES[kind]} WHERE request_id=%s",
                (request_id,),
            )
            r = fetchone(cur)
        return _row_to_request(kind, r) if r else None

    def update_review(self, request: ManualRequest, *, expected_status: RequestStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {_TABLES[request.kind]}
                SET status=%s, reviewed_at=%s, reviewer_notes=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    request.status.value,
                    request.reviewed_at,
                    request.reviewer_notes,
                    request.request_id,
                    expected_status.value,
                ),
            )
            return cur.rowcount == 1

    def list_for_mentee(self, kind: RequestKind, mentee_id: str) -> Sequence[ManualRequest]:
        return self._select(kind, "mentee_id=%s", (mentee_id,), "ORDER BY requested_at DESC")

    def list_pending(self, kind: RequestKind, *, limit: int = DEFAULT_PENDING_LIMIT) -> Sequence[ManualRequest]:
        return self._select(
            kind,
            "status=%s",
            (RequestStatus.PENDING.value, int(limit)),
            "ORDER BY requested_at ASC LIMIT %s",
        )

    def list_approved(
        self,
        kind: RequestKind,
        mentee_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[ManualRequest]:
        clauses = ["mentee_id=%s", "status=%s"]
        params: list[object] = [mentee_id, RequestStatus.APPROVED.value]
        if start is not None:
            clauses.append("request_date>=%s")
            params.append(start)
        if end is not None:
            clauses.append("request_date<=%s")
            params.append(end)
        return self._select(kind, " AND ".join(clauses), tuple(params), "ORDER BY request_date")
