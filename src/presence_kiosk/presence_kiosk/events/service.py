from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence, Tuple

from ..common.datetime_utils import now_local
from ..core.enums import ScanAction
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import Event
from .repository import EventLogRepository

logger = logging.getLogger(__name__)


class EventListener(Protocol):
    """Observer notified after events are durably stored."""

    def on_event(self, event: Event, student: Optional[Student]) -> None:
        ...

    def on_clear(self) -> None:
        ...


class EventLog:
    """Event Log Store: the authoritative ledger plus its subscribers.

    Listeners run after the storage commit. A failing listener is logged and
    skipped; it never undoes or fails the append that triggered it.
    """

    def __init__(
        self,
        events: EventLogRepository,
        students: StudentRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._events = events
        self._students = students
        self._clock = clock
        self._listeners: list[EventListener] = []

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def now(self) -> datetime:
        return self._clock()

    def append(self, student_id: str, action: ScanAction, timestamp: Optional[datetime] = None) -> Event:
        event = self._events.append(student_id=student_id, action=action, timestamp=timestamp or self._clock())
        self.publish([event])
        return event

    def append_if_last(
        self,
        student_id: str,
        action: ScanAction,
        *,
        expected_last_id: Optional[int],
        timestamp: Optional[datetime] = None,
    ) -> Optional[Event]:
        event = self._events.append_if_last(
            student_id=student_id,
            action=action,
            expected_last_id=expected_last_id,
            timestamp=timestamp or self._clock(),
        )
        if event is not None:
            self.publish([event])
        return event

    def last_event_for(self, student_id: str) -> Optional[Event]:
        return self._events.last_event_for(student_id)

    def all_latest_sign_ins(self) -> Sequence[Tuple[Event, Student]]:
        return self._events.all_latest_sign_ins()

    def sign_out_stale(self, *, cutoff: datetime, now: datetime) -> Sequence[Event]:
        events = self._events.sign_out_stale(cutoff=cutoff, now=now)
        self.publish(events)
        return events

    def clear(self) -> int:
        removed = self._events.clear()
        logger.info("Event log cleared (%d event(s) removed)", removed)
        for listener in self._listeners:
            try:
                listener.on_clear()
            except Exception:
                logger.exception("Event listener %r failed to clear", listener)
        return removed

    def publish(self, events: Sequence[Event]) -> None:
        """Notify listeners about events that were stored outside :meth:`append`."""

        if not events or not self._listeners:
            return

        names: dict[str, Optional[Student]] = {}
        for event in events:
            try:
                if event.student_id not in names:
                    names[event.student_id] = self._students.get_by_oen(event.student_id)
                student = names[event.student_id]
            except Exception:
                logger.exception("Roster lookup failed while publishing event %s", event.event_id)
                student = None

            for listener in self._listeners:
                try:
                    listener.on_event(event, student)
                except Exception:
                    logger.exception("Event listener %r failed on event %s", listener, event.event_id)
