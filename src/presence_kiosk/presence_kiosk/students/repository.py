from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for the student roster.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_oen(self, oen: str) -> Optional[Student]:
        raise NotImplementedError

    def find_by_oen_or_sid(self, identifier: str) -> Optional[Student]:
        """Match ``identifier`` against the primary id first, then the secondary id."""

        raise NotImplementedError

    def search(self, query: str, *, limit: int) -> Sequence[Student]:
        raise NotImplementedError

    def replace_all(self, students: Sequence[Student]) -> int:
        """Swap the whole roster for ``students`` atomically; returns rows inserted."""

        raise NotImplementedError
