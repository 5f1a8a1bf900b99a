from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from ..events.model import Event
from ..events.service import EventLog
from ..students.repository import StudentRepository
from .repository import PendingTransferRepository

logger = logging.getLogger(__name__)


class TransferService:
    """Use case: classroom sends a student to the library, librarian confirms."""

    def __init__(self, transfers: PendingTransferRepository, students: StudentRepository, event_log: EventLog):
        self._transfers = transfers
        self._students = students
        self._log = event_log

    def dispatch(self, identifier: str, *, now: Optional[datetime] = None) -> bool:
        identifier = require_non_empty(identifier, "studentId")

        student = self._students.find_by_oen_or_sid(identifier)
        if not student:
            raise NotFoundError("Student not found")

        queued = self._transfers.add_if_absent(student=student, sent_at=now or self._log.now())
        if queued:
            logger.info("Sent %s (%s) to the library", student.full_name, student.oen)
        else:
            logger.debug("Transfer for %s already pending", student.oen)
        return queued

    def confirm_arrival(self, student_id: str, *, now: Optional[datetime] = None) -> Event:
        # Unconditional: works even when nothing was pending.
        student_id = require_non_empty(student_id, "studentId")

        event = self._transfers.confirm_arrival(student_id=student_id, timestamp=now or self._log.now())
        self._log.publish([event])
        logger.info("Confirmed library arrival of %s", student_id)
        return event
