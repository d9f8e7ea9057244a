from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .activation.gate import WriteGate
from .activation.mysql_activation_repository import MySQLActivationRepository
from .activation.repository import ActivationRepository
from .activation.service import ActivationService
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .ledger.mysql_ledger_repository import MySQLLedgerRepository
from .ledger.repository import LedgerRepository
from .ledger.service import ProgressService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.notifier import InboxNotifier, NotificationRepository
from .org.mysql_org_directory import MySQLOrgDirectory
from .org.repository import OrgDirectory
from .reports.mysql_submission_repository import MySQLSubmissionRepository
from .reports.repository import SubmissionRepository
from .reports.service import ReportSubmissionService
from .reports.summary import ProgressSummaryService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.repository import RequestRepository
from .requests.service import ManualRequestService
from .sources.factory import SourceAdapterFactory
from .sources.mysql_evidence_repository import MySQLEvidenceRepository
from .sources.repository import EvidenceRepository


@dataclass(frozen=True)
class Container:
    clock: Clock

    ledger_repo: LedgerRepository
    activation_repo: ActivationRepository
    submissions_repo: SubmissionRepository
    requests_repo: RequestRepository
    evidence_repo: EvidenceRepository
    org_directory: OrgDirectory
    notifications_repo: NotificationRepository

    gate: WriteGate
    progress_service: ProgressService
    activation_service: ActivationService
    report_service: ReportSubmissionService
    manual_request_service: ManualRequestService
    summary_service: ProgressSummaryService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    clock: Clock,
    ledger_repo: LedgerRepository,
    activation_repo: ActivationRepository,
    submissions_repo: SubmissionRepository,
    requests_repo: RequestRepository,
    evidence_repo: EvidenceRepository,
    org_directory: OrgDirectory,
    notifications_repo: NotificationRepository,
    require_activation: bool = True,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, fakes in tests)."""

    adapters = SourceAdapterFactory()
    notifier = InboxNotifier(notifications_repo, clock)
    gate = WriteGate(activation_repo, submissions_repo, clock, require_activation=require_activation)

    progress_service = ProgressService(ledger_repo, gate, evidence_repo, requests_repo, adapters=adapters)
    activation_service = ActivationService(activation_repo, clock)
    report_service = ReportSubmissionService(submissions_repo, progress_service, org_directory, notifier, clock)
    manual_request_service = ManualRequestService(
        requests_repo,
        progress_service,
        gate,
        org_directory,
        notifier,
        clock,
        adapters=adapters,
    )
    summary_service = ProgressSummaryService(progress_service)

    return Container(
        clock=clock,
        ledger_repo=ledger_repo,
        activation_repo=activation_repo,
        submissions_repo=submissions_repo,
        requests_repo=requests_repo,
        evidence_repo=evidence_repo,
        org_directory=org_directory,
        notifications_repo=notifications_repo,
        gate=gate,
        progress_service=progress_service,
        activation_service=activation_service,
        report_service=report_service,
        manual_request_service=manual_request_service,
        summary_service=summary_service,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    require_activation: bool = True,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        clock=SystemClock(timezone),
        ledger_repo=MySQLLedgerRepository(conn),
        activation_repo=MySQLActivationRepository(conn),
        submissions_repo=MySQLSubmissionRepository(conn),
        requests_repo=MySQLRequestRepository(conn),
        evidence_repo=MySQLEvidenceRepository(conn),
        org_directory=MySQLOrgDirectory(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        require_activation=require_activation,
        conn=conn,
    )
