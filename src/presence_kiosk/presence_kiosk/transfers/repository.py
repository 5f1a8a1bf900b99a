from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..events.model import Event
from ..students.model import Student
from .model import PendingTransfer


class PendingTransferRepository(Protocol):
    def add_if_absent(self, *, student: Student, sent_at: datetime) -> bool:
        """Queue ``student``; returns False when a transfer is already pending."""

        raise NotImplementedError

    def list_all(self) -> Sequence[PendingTransfer]:
        raise NotImplementedError

    def confirm_arrival(self, *, student_id: str, timestamp: datetime) -> Event:
        """Append a ``sign-in`` and drop any pending row, as one transaction."""

        raise NotImplementedError
