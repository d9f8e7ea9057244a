from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Peran sistem karyawan untuk otorisasi."""

    EMPLOYEE = "employee"
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"


class ActivityCategory(str, Enum):
    SIDIQ = "SIDIQ (Integritas)"
    TABLIGH = "TABLIGH (Teamwork)"
    AMANAH = "AMANAH (Disiplin)"
    FATONAH = "FATONAH (Belajar)"


class AutomationTrigger(str, Enum):
    """Which evidence stream may credit an activity automatically."""

    MANUAL_USER_REPORT = "MANUAL_USER_REPORT"
    TEAM_ATTENDANCE = "TEAM_ATTENDANCE"
    PRAYER_WAJIB = "PRAYER_WAJIB"
    TADARUS_SESSION = "TADARUS_SESSION"
    BOOK_READING_REPORT = "BOOK_READING_REPORT"


class SubmissionStatus(str, Enum):
    """Status alur persetujuan laporan bulanan (mentor -> ka unit)."""

    PENDING_MENTOR = "pending_mentor"
    PENDING_KAUNIT = "pending_kaunit"
    APPROVED = "approved"
    REJECTED_MENTOR = "rejected_mentor"
    REJECTED_KAUNIT = "rejected_kaunit"

    @property
    def is_pending(self) -> bool:
        return self.value.startswith("pending_")

    @property
    def is_rejected(self) -> bool:
        return self.value.startswith("rejected_")

    @property
    def is_terminal(self) -> bool:
        return not self.is_pending

    @property
    def locks_period(self) -> bool:
        return self.is_pending or self is SubmissionStatus.APPROVED


class ReviewerRole(str, Enum):
    MENTOR = "mentor"
    KA_UNIT = "kaunit"


class ReviewDecision(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


class RequestStatus(str, Enum):
    """Status persetujuan permohonan manual (tadarus / sholat terlewat)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RequestKind(str, Enum):
    TADARUS = "tadarus"
    MISSED_PRAYER = "prayer"


class AttendanceStatus(str, Enum):
    HADIR = "hadir"
    TIDAK_HADIR = "tidak_hadir"
    IZIN = "izin"


class NotificationType(str, Enum):
    MONTHLY_REPORT_SUBMITTED = "monthly_report_submitted"
    MONTHLY_REPORT_APPROVED = "monthly_report_approved"
    MONTHLY_REPORT_REJECTED = "monthly_report_rejected"
    MONTHLY_REPORT_NEEDS_REVIEW = "monthly_report_needs_review"
    MANUAL_REQUEST_SUBMITTED = "manual_request_submitted"
    MANUAL_REQUEST_APPROVED = "manual_request_approved"
    MANUAL_REQUEST_REJECTED = "manual_request_rejected"
