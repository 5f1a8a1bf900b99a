from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PendingTransfer:
    """A student sent to the library who has not been confirmed as arrived.

    Names are copied at dispatch time so the queue still reads well after a
    roster re-import.
    """

    student_id: str
    first_name: str
    last_name: str
    sent_at: datetime
