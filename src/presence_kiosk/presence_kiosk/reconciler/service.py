from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..core.constants import STALE_AFTER_MINUTES
from ..events.model import Event
from ..events.service import EventLog

logger = logging.getLogger(__name__)


class StalenessReconciler:
    """Force sign-out of students signed in for longer than the threshold.

    Forced sign-outs go through the normal append path and are stamped with
    the sweep time, so the log cannot tell them apart from a manual scan.
    """

    def __init__(self, event_log: EventLog, *, stale_after_minutes: int = STALE_AFTER_MINUTES):
        self._log = event_log
        self._threshold = timedelta(minutes=int(stale_after_minutes))

    def sweep(self, *, now: Optional[datetime] = None) -> Sequence[Event]:
        now = now or self._log.now()
        events = self._log.sign_out_stale(cutoff=now - self._threshold, now=now)
        if events:
            logger.info(
                "Auto signed out %d student(s) after %d+ minutes",
                len(events),
                int(self._threshold.total_seconds() // 60),
            )
        return events
