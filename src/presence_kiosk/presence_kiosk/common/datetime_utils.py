from __future__ import annotations

from datetime import datetime

from ..core.constants import TRANSCRIPT_TIME_FORMAT


def now_local() -> datetime:
    """Current local time, truncated to whole seconds.

    Note: Wrapped so tests can patch/mocked easier. The event log stores
    DATETIME without fractions, so we drop microseconds here too.
    """
    return datetime.now().replace(microsecond=0)


def format_local(value: datetime) -> str:
    return value.strftime(TRANSCRIPT_TIME_FORMAT)
