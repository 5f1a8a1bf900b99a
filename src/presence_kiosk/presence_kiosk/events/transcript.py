"""Human-readable mirror of the event log.

One line per event, e.g. ``2025-03-04 09:15:02 - Ada Lovelace - sign-in``.
The file feeds the search and full-log pages; the database stays the
source of truth.
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from ..common.datetime_utils import format_local
from ..students.model import Student
from .model import Event


class TranscriptWriter:
    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @staticmethod
    def format_line(event: Event, student: Optional[Student]) -> str:
        name = student.full_name if student else event.student_id
        return f"{format_local(event.timestamp)} - {name} - {event.action.value}"

    def on_event(self, event: Event, student: Optional[Student]) -> None:
        line = self.format_line(event, student)
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")

    def on_clear(self) -> None:
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text("", encoding="utf-8")

    def read(self) -> str:
        with self._lock:
            if not self._path.exists():
                return ""
            return self._path.read_text(encoding="utf-8")

    def search(self, term: str) -> list[str]:
        needle = term.lower()
        return [ln for ln in self.read().splitlines() if ln and needle in ln.lower()]

    def __repr__(self) -> str:
        return f"TranscriptWriter({str(self._path)!r})"
