from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository


def _to_student(r: dict) -> Student:
    return Student(
        oen=str(r["oen"]),
        sid=r.get("sid"),
        first_name=r.get("first_name") or "",
        last_name=r.get("last_name") or "",
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_oen(self, oen: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT oen, sid, first_name, last_name FROM students WHERE oen=%s",
                (oen,),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def find_by_oen_or_sid(self, identifier: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT oen, sid, first_name, last_name
                FROM students
                WHERE oen=%s OR sid=%s
                ORDER BY (oen=%s) DESC
                LIMIT 1
                """,
                (identifier, identifier, identifier),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def search(self, query: str, *, limit: int) -> Sequence[Student]:
        pattern = f"%{query}%"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT oen, sid, first_name, last_name
                FROM students
                WHERE oen LIKE %s OR sid LIKE %s OR first_name LIKE %s OR last_name LIKE %s
                ORDER BY last_name, first_name
                LIMIT %s
                """,
                (pattern, pattern, pattern, pattern, int(limit)),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def replace_all(self, students: Sequence[Student]) -> int:
        # One transaction: a failed insert rolls the DELETE back too.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students")
            if students:
                cur.executemany(
                    """
                    INSERT INTO students(oen, sid, first_name, last_name)
                    VALUES(%s,%s,%s,%s)
                    """,
                    [(s.oen, s.sid, s.first_name, s.last_name) for s in students],
                )
            return len(students)
