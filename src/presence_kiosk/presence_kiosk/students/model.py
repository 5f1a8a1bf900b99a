from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: one roster row.

    ``oen`` is the primary identifier scanned at the kiosk; ``sid`` is the
    school-issued secondary id teachers may type instead.
    """

    oen: str
    sid: Optional[str]
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        return {
            "oen": self.oen,
            "sid": self.sid,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }
