from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import MAX_TOGGLE_ATTEMPTS
from ..core.enums import PresenceStatus, ScanAction
from ..core.exceptions import ConcurrentScanError, NotFoundError
from ..events.model import Event
from ..events.service import EventLog
from ..students.repository import StudentRepository
from ..transfers.repository import PendingTransferRepository
from .model import PresenceRow

logger = logging.getLogger(__name__)


def next_action(last: Optional[Event]) -> ScanAction:
    """A scan always flips the most recent action; no history means sign-in."""

    if last is None:
        return ScanAction.SIGN_IN
    return last.action.toggled()


class PresenceService:
    """Presence Resolver.

    Status is never cached: every call derives it from the event log and the
    pending transfer queue.
    """

    def __init__(
        self,
        event_log: EventLog,
        students: StudentRepository,
        transfers: PendingTransferRepository,
        *,
        max_attempts: int = MAX_TOGGLE_ATTEMPTS,
    ):
        self._log = event_log
        self._students = students
        self._transfers = transfers
        self._max_attempts = max(1, int(max_attempts))

    def toggle(self, student_id: str, *, now: Optional[datetime] = None) -> Event:
        student_id = require_non_empty(student_id, "studentId")

        student = self._students.get_by_oen(student_id)
        if not student:
            raise NotFoundError("Student not found")

        for _ in range(self._max_attempts):
            last = self._log.last_event_for(student_id)
            event = self._log.append_if_last(
                student_id,
                next_action(last),
                expected_last_id=last.event_id if last else None,
                timestamp=now,
            )
            if event is not None:
                logger.info("%s scanned: %s", student.full_name, event.action.value)
                return event
            logger.warning("Concurrent scan for %s, re-reading last event", student_id)

        raise ConcurrentScanError(f"Could not record scan for {student_id}")

    def currently_signed_in(self) -> list[PresenceRow]:
        rows = [
            PresenceRow(
                student_id=event.student_id,
                first_name=student.first_name,
                last_name=student.last_name,
                timestamp=event.timestamp,
                status=PresenceStatus.CONFIRMED,
            )
            for event, student in self._log.all_latest_sign_ins()
        ]
        rows.extend(
            PresenceRow(
                student_id=t.student_id,
                first_name=t.first_name,
                last_name=t.last_name,
                timestamp=t.sent_at,
                status=PresenceStatus.PENDING,
            )
            for t in self._transfers.list_all()
        )
        # One merge across both statuses; a student both pending and confirmed shows twice.
        rows.sort(key=lambda r: r.timestamp, reverse=True)
        return rows
