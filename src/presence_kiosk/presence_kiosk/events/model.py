from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import ScanAction


@dataclass(frozen=True)
class Event:
    """Domain entity: one immutable row of the sign-in/sign-out ledger."""

    event_id: int
    student_id: str
    action: ScanAction
    timestamp: datetime
