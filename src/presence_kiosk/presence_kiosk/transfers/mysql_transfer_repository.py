from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import ScanAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..events.model import Event
from ..students.model import Student
from .model import PendingTransfer
from .repository import PendingTransferRepository


def _to_transfer(r: dict) -> PendingTransfer:
    return PendingTransfer(
        student_id=str(r["student_id"]),
        first_name=r.get("first_name") or "",
        last_name=r.get("last_name") or "",
        sent_at=r["sent_at"],
    )


class MySQLPendingTransferRepository(PendingTransferRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add_if_absent(self, *, student: Student, sent_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO pending_transfers(student_id, first_name, last_name, sent_at)
                VALUES(%s,%s,%s,%s)
                """,
                (student.oen, student.first_name, student.last_name, sent_at),
            )
            return cur.rowcount > 0

    def list_all(self) -> Sequence[PendingTransfer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, first_name, last_name, sent_at
                FROM pending_transfers
                ORDER BY sent_at DESC, transfer_id DESC
                """
            )
            return [_to_transfer(r) for r in fetchall(cur)]

    def confirm_arrival(self, *, student_id: str, timestamp: datetime) -> Event:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO events(student_id, action, occurred_at) VALUES(%s,%s,%s)",
                (student_id, ScanAction.SIGN_IN.value, timestamp),
            )
            event_id = int(cur.lastrowid)
            cur.execute("DELETE FROM pending_transfers WHERE student_id=%s", (student_id,))
            return Event(
                event_id=event_id,
                student_id=student_id,
                action=ScanAction.SIGN_IN,
                timestamp=timestamp,
            )
