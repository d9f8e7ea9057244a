from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.constants import DEFAULT_PENDING_LIMIT
from ..core.enums import SubmissionStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, is_duplicate_key, load_json
from ..ledger.merge import clean_month
from .model import MonthlyReportSubmission
from .repository import SubmissionRepository

_COLUMNS = """
    submission_id, mentee_id, mentee_name, month_key, revision, status, submitted_at,
    mentor_id, ka_unit_id, mentor_reviewed_at, mentor_notes,
    ka_unit_reviewed_at, ka_unit_notes, reports
"""

_LIVE_STATUSES = tuple(s.value for s in SubmissionStatus if s.locks_period)
_PENDING_STATUSES = tuple(s.value for s in SubmissionStatus if s.is_pending)


def _row_to_submission(r: dict) -> MonthlyReportSubmission:
    return MonthlyReportSubmission(
        submission_id=str(r["submission_id"]),
        mentee_id=str(r["mentee_id"]),
        mentee_name=r.get("mentee_name") or "",
        month_key=r["month_key"],
        revision=int(r["revision"]),
        status=SubmissionStatus(r["status"]),
        submitted_at=int(r["submitted_at"]),
        mentor_id=r.get("mentor_id"),
        ka_unit_id=r.get("ka_unit_id"),
        mentor_reviewed_at=r.get("mentor_reviewed_at"),
        mentor_notes=r.get("mentor_notes"),
        ka_unit_reviewed_at=r.get("ka_unit_reviewed_at"),
        ka_unit_notes=r.get("ka_unit_notes"),
        reports=clean_month(load_json(r.get("reports"))),
    )


def _placeholders(values: Sequence[object]) -> str:
    return ",".join(["%s"] * len(values))


class MySQLSubmissionRepository(SubmissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, submission_id: str) -> Optional[MonthlyReportSubmission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM monthly_report_submissions WHERE submission_id=%s", (submission_id,))
            r = fetchone(cur)
        return _row_to_submission(r) if r else None

    def create(self, submission: MonthlyReportSubmission) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO monthly_report_submissions(
                        submission_id, mentee_id, mentee_name, month_key, revision, status,
                        submitted_at, mentor_id, ka_unit_id, reports
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        submission.submission_id,
                        submission.mentee_id,
                        submission.mentee_name,
                        submission.month_key,
                        int(submission.revision),
                        submission.status.value,
                        int(submission.submitted_at),
                        submission.mentor_id,
                        submission.ka_unit_id,
                        dump_json(submission.reports),
                    ),
                )
        except mysql.connector.Error as err:
            if is_duplicate_key(err):
                raise ConflictError("Laporan untuk bulan ini sudah dikirim.") from err
            raise

    def update_review(self, submission: MonthlyReportSubmission, *, expected_status: SubmissionStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE monthly_report_submissions
                SET status=%s,
                    mentor_reviewed_at=%s, mentor_notes=%s,
                    ka_unit_reviewed_at=%s, ka_unit_notes=%s
                WHERE submission_id=%s AND status=%s
                """,
                (
                    submission.status.value,
                    submission.mentor_reviewed_at,
                    submission.mentor_notes,
                    submission.ka_unit_reviewed_at,
                    submission.ka_unit_notes,
                    submission.submission_id,
                    expected_status.value,
                ),
            )
            return cur.rowcount == 1

    def find_live(self, mentee_id: str, month_key: str) -> Optional[MonthlyReportSubmission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM monthly_report_submissions
                WHERE mentee_id=%s AND month_key=%s AND status IN ({_placeholders(_LIVE_STATUSES)})
                ORDER BY revision DESC
                LIMIT 1
                """,
                (mentee_id, month_key, *_LIVE_STATUSES),
            )
            r = fetchone(cur)
        return _row_to_submission(r) if r else None

    def latest_revision(self, mentee_id: str, month_key: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(MAX(revision), 0) AS rev
                FROM monthly_report_submissions
                WHERE mentee_id=%s AND month_key=%s
                """,
                (mentee_id, month_key),
            )
            r = fetchone(cur)
        return int(r["rev"]) if r else 0

    def list_for_mentee(self, mentee_id: str, *, month_key: Optional[str] = None) -> Sequence[MonthlyReportSubmission]:
        clauses = ["mentee_id=%s"]
        params: list[object] = [mentee_id]
        if month_key is not None:
            clauses.append("month_key=%s")
            params.append(month_key)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM monthly_report_submissions
                WHERE {" AND ".join(clauses)}
                ORDER BY month_key DESC, revision DESC
                """,
                tuple(params),
            )
            return [_row_to_submission(r) for r in fetchall(cur)]

    def list_pending(self, *, limit: int = DEFAULT_PENDING_LIMIT) -> Sequence[MonthlyReportSubmission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM monthly_report_submissions
                WHERE status IN ({_placeholders(_PENDING_STATUSES)})
                ORDER BY submitted_at ASC
                LIMIT %s
                """,
                (*_PENDING_STATUSES, int(limit)),
            )
            return [_row_to_submission(r) for r in fetchall(cur)]
