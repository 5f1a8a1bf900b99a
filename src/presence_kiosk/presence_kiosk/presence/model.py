from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import format_local
from ..core.enums import PresenceStatus


@dataclass(frozen=True)
class PresenceRow:
    """Read-model for the "who is in the library" board."""

    student_id: str
    first_name: str
    last_name: str
    timestamp: datetime
    status: PresenceStatus

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "name": self.name,
            "timestamp": format_local(self.timestamp),
            "status": self.status.value,
        }
