from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.constants import DEFAULT_TRANSCRIPT_PATH, RECONCILE_INTERVAL_SECONDS, STALE_AFTER_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventLogRepository
from .events.repository import EventLogRepository
from .events.service import EventLog
from .events.transcript import TranscriptWriter
from .presence.service import PresenceService
from .reconciler.scheduler import ReconcilerThread
from .reconciler.service import StalenessReconciler
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import RosterService
from .transfers.mysql_transfer_repository import MySQLPendingTransferRepository
from .transfers.repository import PendingTransferRepository
from .transfers.service import TransferService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    events_repo: EventLogRepository
    transfers_repo: PendingTransferRepository

    transcript: TranscriptWriter
    event_log: EventLog

    roster_service: RosterService
    presence_service: PresenceService
    transfer_service: TransferService
    reconciler: StalenessReconciler
    reconciler_thread: ReconcilerThread


def assemble(
    *,
    students_repo: StudentRepository,
    events_repo: EventLogRepository,
    transfers_repo: PendingTransferRepository,
    transcript_path: str | Path = DEFAULT_TRANSCRIPT_PATH,
    stale_after_minutes: int = STALE_AFTER_MINUTES,
    reconcile_interval_seconds: float = RECONCILE_INTERVAL_SECONDS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementation (MySQL or in-memory)."""

    transcript = TranscriptWriter(transcript_path)
    event_log = EventLog(events_repo, students_repo)
    event_log.subscribe(transcript)

    reconciler = StalenessReconciler(event_log, stale_after_minutes=stale_after_minutes)

    return Container(
        conn=conn,
        students_repo=students_repo,
        events_repo=events_repo,
        transfers_repo=transfers_repo,
        transcript=transcript,
        event_log=event_log,
        roster_service=RosterService(students_repo),
        presence_service=PresenceService(event_log, students_repo, transfers_repo),
        transfer_service=TransferService(transfers_repo, students_repo, event_log),
        reconciler=reconciler,
        reconciler_thread=ReconcilerThread(reconciler, interval_seconds=reconcile_interval_seconds),
    )


def build_container(
    *,
    db_config: dict,
    transcript_path: str | Path = DEFAULT_TRANSCRIPT_PATH,
    stale_after_minutes: int = STALE_AFTER_MINUTES,
    reconcile_interval_seconds: float = RECONCILE_INTERVAL_SECONDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        students_repo=MySQLStudentRepository(conn),
        events_repo=MySQLEventLogRepository(conn),
        transfers_repo=MySQLPendingTransferRepository(conn),
        transcript_path=transcript_path,
        stale_after_minutes=stale_after_minutes,
        reconcile_interval_seconds=reconcile_interval_seconds,
        conn=conn,
    )
