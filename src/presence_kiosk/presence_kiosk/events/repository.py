from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence, Tuple

from ..core.enums import ScanAction
from ..students.model import Student
from .model import Event


class EventLogRepository(Protocol):
    """Append-only ledger of scans.

    Rows are never updated; the only removal is :meth:`clear`.
    """

    def append(self, *, student_id: str, action: ScanAction, timestamp: datetime) -> Event:
        raise NotImplementedError

    def append_if_last(
        self,
        *,
        student_id: str,
        action: ScanAction,
        expected_last_id: Optional[int],
        timestamp: datetime,
    ) -> Optional[Event]:
        """Compare-and-append.

        Stores the event only if the student's newest event id still equals
        ``expected_last_id`` (``None`` meaning "no events yet"). Returns the
        stored event, or ``None`` when another append got there first.
        """

        raise NotImplementedError

    def last_event_for(self, student_id: str) -> Optional[Event]:
        raise NotImplementedError

    def all_latest_sign_ins(self) -> Sequence[Tuple[Event, Student]]:
        raise NotImplementedError

    def sign_out_stale(self, *, cutoff: datetime, now: datetime) -> Sequence[Event]:
        """Append a ``sign-out`` at ``now`` for every latest sign-in older than ``cutoff``."""

        raise NotImplementedError

    def clear(self) -> int:
        raise NotImplementedError
