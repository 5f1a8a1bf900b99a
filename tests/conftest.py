from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from presence_kiosk.container import assemble
from presence_kiosk.core.enums import ScanAction
from presence_kiosk.events.model import Event
from presence_kiosk.students.model import Student
from presence_kiosk.transfers.model import PendingTransfer


class InMemoryStudents:
    def __init__(self, students=()):
        self.by_oen: dict[str, Student] = {s.oen: s for s in students}

    def get_by_oen(self, oen: str) -> Optional[Student]:
        return self.by_oen.get(oen)

    def find_by_oen_or_sid(self, identifier: str) -> Optional[Student]:
        if identifier in self.by_oen:
            return self.by_oen[identifier]
        for s in self.by_oen.values():
            if s.sid == identifier:
                return s
        return None

    def search(self, query: str, *, limit: int):
        q = query.lower()
        hits = [
            s
            for s in self.by_oen.values()
            if any(q in (v or "").lower() for v in (s.oen, s.sid, s.first_name, s.last_name))
        ]
        return hits[:limit]

    def replace_all(self, students) -> int:
        self.by_oen = {s.oen: s for s in students}
        return len(students)


class InMemoryEvents:
    def __init__(self, students: InMemoryStudents):
        self._students = students
        self.events: list[Event] = []
        self._id = 0

    def append(self, *, student_id: str, action: ScanAction, timestamp: datetime) -> Event:
        self._id += 1
        event = Event(event_id=self._id, student_id=student_id, action=action, timestamp=timestamp)
        self.events.append(event)
        return event

    def append_if_last(self, *, student_id, action, expected_last_id, timestamp):
        last = self.last_event_for(student_id)
        if (last.event_id if last else None) != expected_last_id:
            return None
        return self.append(student_id=student_id, action=action, timestamp=timestamp)

    def last_event_for(self, student_id: str) -> Optional[Event]:
        mine = [e for e in self.events if e.student_id == student_id]
        return max(mine, key=lambda e: e.event_id) if mine else None

    def _latest(self) -> list[Event]:
        latest: dict[str, Event] = {}
        for e in self.events:
            if e.student_id not in latest or e.event_id > latest[e.student_id].event_id:
                latest[e.student_id] = e
        return list(latest.values())

    def all_latest_sign_ins(self):
        out = []
        for e in self._latest():
            student = self._students.get_by_oen(e.student_id)
            if e.action == ScanAction.SIGN_IN and student:
                out.append((e, student))
        return out

    def sign_out_stale(self, *, cutoff: datetime, now: datetime):
        stale = [e for e in self._latest() if e.action == ScanAction.SIGN_IN and e.timestamp < cutoff]
        return [self.append(student_id=e.student_id, action=ScanAction.SIGN_OUT, timestamp=now) for e in stale]

    def clear(self) -> int:
        removed = len(self.events)
        self.events.clear()
        return removed

    def actions_for(self, student_id: str) -> list[str]:
        return [e.action.value for e in self.events if e.student_id == student_id]


class InMemoryTransfers:
    def __init__(self, events: InMemoryEvents):
        self._events = events
        self.pending: dict[str, PendingTransfer] = {}

    def add_if_absent(self, *, student: Student, sent_at: datetime) -> bool:
        if student.oen in self.pending:
            return False
        self.pending[student.oen] = PendingTransfer(
            student_id=student.oen,
            first_name=student.first_name,
            last_name=student.last_name,
            sent_at=sent_at,
        )
        return True

    def list_all(self):
        return list(self.pending.values())

    def confirm_arrival(self, *, student_id: str, timestamp: datetime) -> Event:
        event = self._events.append(student_id=student_id, action=ScanAction.SIGN_IN, timestamp=timestamp)
        self.pending.pop(student_id, None)
        return event


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 4, 13, 0, 0)


@pytest.fixture
def roster() -> list[Student]:
    return [
        Student(oen="100200300", sid="S1", first_name="Ada", last_name="Lovelace"),
        Student(oen="100200301", sid="S2", first_name="Alan", last_name="Turing"),
        Student(oen="100200302", sid="S3", first_name="Grace", last_name="Hopper"),
    ]


@pytest.fixture
def students_repo(roster) -> InMemoryStudents:
    return InMemoryStudents(roster)


@pytest.fixture
def events_repo(students_repo) -> InMemoryEvents:
    return InMemoryEvents(students_repo)


@pytest.fixture
def transfers_repo(events_repo) -> InMemoryTransfers:
    return InMemoryTransfers(events_repo)


@pytest.fixture
def transcript_path(tmp_path):
    return tmp_path / "history.txt"


@pytest.fixture
def container(students_repo, events_repo, transfers_repo, transcript_path):
    return assemble(
        students_repo=students_repo,
        events_repo=events_repo,
        transfers_repo=transfers_repo,
        transcript_path=transcript_path,
    )


@pytest.fixture
def client(container, monkeypatch):
    from presence_kiosk.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
