from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence, Tuple

from ..core.enums import ScanAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..students.model import Student
from .model import Event
from .repository import EventLogRepository

# Latest event per student; joined back to events to read its action/time.
_LATEST_IDS = "SELECT student_id, MAX(event_id) AS last_id FROM events GROUP BY student_id"


def _to_event(r: dict) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        student_id=str(r["student_id"]),
        action=ScanAction(r["action"]),
        timestamp=r["occurred_at"],
    )


class MySQLEventLogRepository(EventLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, *, student_id: str, action: ScanAction, timestamp: datetime) -> Event:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._insert(cur, student_id=student_id, action=action, timestamp=timestamp)

    def append_if_last(
        self,
        *,
        student_id: str,
        action: ScanAction,
        expected_last_id: Optional[int],
        timestamp: datetime,
    ) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the roster entry serialises scans of the same student.
            cur.execute("SELECT oen FROM students WHERE oen=%s FOR UPDATE", (student_id,))
            fetchone(cur)
            cur.execute(
                "SELECT MAX(event_id) AS last_id FROM events WHERE student_id=%s",
                (student_id,),
            )
            r = fetchone(cur)
            last_id = r.get("last_id") if r else None
            current = int(last_id) if last_id is not None else None
            if current != expected_last_id:
                return None
            return self._insert(cur, student_id=student_id, action=action, timestamp=timestamp)

    def last_event_for(self, student_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, student_id, action, occurred_at
                FROM events
                WHERE student_id=%s
                ORDER BY event_id DESC
                LIMIT 1
                """,
                (student_id,),
            )
            r = fetchone(cur)
            return _to_event(r) if r else None

    def all_latest_sign_ins(self) -> Sequence[Tuple[Event, Student]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.event_id, e.student_id, e.action, e.occurred_at,
                       s.oen, s.sid, s.first_name, s.last_name
                FROM events e
                JOIN ({_LATEST_IDS}) latest ON latest.last_id = e.event_id
                JOIN students s ON s.oen = e.student_id
                WHERE e.action = %s
                ORDER BY e.occurred_at DESC, e.event_id DESC
                """,
                (ScanAction.SIGN_IN.value,),
            )
            return [
                (
                    _to_event(r),
                    Student(
                        oen=str(r["oen"]),
                        sid=r.get("sid"),
                        first_name=r.get("first_name") or "",
                        last_name=r.get("last_name") or "",
                    ),
                )
                for r in fetchall(cur)
            ]

    def sign_out_stale(self, *, cutoff: datetime, now: datetime) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.student_id
                FROM events e
                JOIN ({_LATEST_IDS}) latest ON latest.last_id = e.event_id
                WHERE e.action = %s AND e.occurred_at < %s
                """,
                (ScanAction.SIGN_IN.value, cutoff),
            )
            stale = [str(r["student_id"]) for r in fetchall(cur)]
            return [
                self._insert(cur, student_id=student_id, action=ScanAction.SIGN_OUT, timestamp=now)
                for student_id in stale
            ]

    def clear(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events")
            return cur.rowcount

    @staticmethod
    def _insert(cur, *, student_id: str, action: ScanAction, timestamp: datetime) -> Event:
        cur.execute(
            "INSERT INTO events(student_id, action, occurred_at) VALUES(%s,%s,%s)",
            (student_id, action.value, timestamp),
        )
        return Event(
            event_id=int(cur.lastrowid),
            student_id=student_id,
            action=action,
            timestamp=timestamp,
        )
