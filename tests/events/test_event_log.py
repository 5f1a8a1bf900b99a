from __future__ import annotations

from datetime import timedelta

from presence_kiosk.core.enums import ScanAction
from presence_kiosk.events.service import EventLog
from presence_kiosk.events.transcript import TranscriptWriter


class ExplodingListener:
    def on_event(self, event, student):
        raise OSError("disk full")

    def on_clear(self):
        raise OSError("disk full")


class RecordingListener:
    def __init__(self):
        self.seen = []
        self.cleared = 0

    def on_event(self, event, student):
        self.seen.append((event.event_id, student.oen if student else None))

    def on_clear(self):
        self.cleared += 1


def test_append_writes_transcript_line(container, transcript_path, fixed_now):
    container.event_log.append("100200300", ScanAction.SIGN_IN, fixed_now)
    container.event_log.append("100200300", ScanAction.SIGN_OUT, fixed_now + timedelta(minutes=30))

    assert transcript_path.read_text(encoding="utf-8").splitlines() == [
        "2025-03-04 13:00:00 - Ada Lovelace - sign-in",
        "2025-03-04 13:30:00 - Ada Lovelace - sign-out",
    ]


def test_failing_listener_does_not_fail_append(students_repo, events_repo, fixed_now):
    log = EventLog(events_repo, students_repo)
    recorder = RecordingListener()
    log.subscribe(ExplodingListener())
    log.subscribe(recorder)

    event = log.append("100200301", ScanAction.SIGN_IN, fixed_now)

    assert events_repo.last_event_for("100200301") == event
    assert recorder.seen == [(event.event_id, "100200301")]


def test_clear_removes_events_and_truncates_transcript(container, events_repo, transcript_path, fixed_now):
    container.event_log.append("100200300", ScanAction.SIGN_IN, fixed_now)

    removed = container.event_log.clear()

    assert removed == 1
    assert events_repo.events == []
    assert transcript_path.read_text(encoding="utf-8") == ""
    assert container.event_log.last_event_for("100200300") is None


def test_clear_survives_listener_failure(students_repo, events_repo, fixed_now):
    log = EventLog(events_repo, students_repo)
    recorder = RecordingListener()
    log.subscribe(ExplodingListener())
    log.subscribe(recorder)
    log.append("100200300", ScanAction.SIGN_IN, fixed_now)

    assert log.clear() == 1
    assert recorder.cleared == 1


def test_append_uses_clock_when_no_timestamp(students_repo, events_repo, fixed_now):
    log = EventLog(events_repo, students_repo, clock=lambda: fixed_now)

    assert log.append("100200300", ScanAction.SIGN_IN).timestamp == fixed_now


def test_unknown_student_falls_back_to_raw_id(container, transcript_path, fixed_now):
    container.event_log.append("999", ScanAction.SIGN_IN, fixed_now)

    assert transcript_path.read_text(encoding="utf-8") == "2025-03-04 13:00:00 - 999 - sign-in\n"


def test_transcript_search_is_case_insensitive(tmp_path):
    writer = TranscriptWriter(tmp_path / "nested" / "history.txt")
    assert writer.read() == ""

    (tmp_path / "nested").mkdir()
    writer.path.write_text(
        "2025-03-04 09:00:00 - Ada Lovelace - sign-in\n"
        "2025-03-04 09:05:00 - Alan Turing - sign-in\n"
        "2025-03-04 10:00:00 - Ada Lovelace - sign-out\n",
        encoding="utf-8",
    )

    assert writer.search("ADA") == [
        "2025-03-04 09:00:00 - Ada Lovelace - sign-in",
        "2025-03-04 10:00:00 - Ada Lovelace - sign-out",
    ]
    assert writer.search("hopper") == []
