from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.constants import RECONCILE_INTERVAL_SECONDS
from .service import StalenessReconciler

logger = logging.getLogger(__name__)


class ReconcilerThread:
    """Runs a sweep at start (covers downtime) and then on a fixed interval.

    Fire-and-forget: nobody waits on a sweep, so errors are logged and the
    loop keeps going.
    """

    def __init__(self, reconciler: StalenessReconciler, *, interval_seconds: float = RECONCILE_INTERVAL_SECONDS):
        self._reconciler = reconciler
        self._interval = float(interval_seconds)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        try:
            return len(self._reconciler.sweep())
        except Exception:
            logger.exception("Auto sign-out sweep failed")
            return 0

    def _loop(self) -> None:
        self.run_once()
        while not self._stop.wait(self._interval):
            self.run_once()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="staleness-reconciler", daemon=True)
        self._thread.start()
        logger.info("Staleness reconciler started (interval=%ss)", int(self._interval))

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
