from __future__ import annotations

import csv
import io
import logging
from typing import IO, Sequence

from ..core.constants import AUTOCOMPLETE_LIMIT, ROSTER_CSV_COLUMNS
from ..core.exceptions import ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: replace the roster from CSV and look students up."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def parse_csv(self, stream: IO[str]) -> list[Student]:
        reader = csv.DictReader(stream)
        header = [h.strip() for h in (reader.fieldnames or [])]
        missing = [c for c in ROSTER_CSV_COLUMNS if c not in header]
        if missing:
            raise ValidationError(f"CSV is missing column(s): {', '.join(missing)}")

        students: list[Student] = []
        seen: set[str] = set()
        for line_no, raw in enumerate(reader, start=2):
            row = {(k or "").strip(): (v or "").strip() for k, v in raw.items() if k is not None}
            oen = row.get("OEN", "")
            if not oen:
                raise ValidationError(f"Line {line_no}: OEN is required")
            if oen in seen:
                raise ValidationError(f"Line {line_no}: duplicate OEN {oen}")
            seen.add(oen)
            students.append(
                Student(
                    oen=oen,
                    sid=row.get("SID") or None,
                    first_name=row.get("first_name", ""),
                    last_name=row.get("last_name", ""),
                )
            )
        return students

    def import_csv(self, stream: IO[str]) -> int:
        students = self.parse_csv(stream)
        count = self._students.replace_all(students)
        logger.info("Roster replaced with %d student(s)", count)
        return count

    def import_csv_bytes(self, data: bytes) -> int:
        # Spreadsheet exports often carry a UTF-8 BOM.
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ValidationError("CSV must be UTF-8 encoded") from e
        return self.import_csv(io.StringIO(text, newline=""))

    def autocomplete(self, query: str, *, limit: int = AUTOCOMPLETE_LIMIT) -> Sequence[Student]:
        query = (query or "").strip()
        if not query:
            return []
        return self._students.search(query, limit=limit)
