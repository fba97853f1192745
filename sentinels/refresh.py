from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from sentinels.data.models import MarketSnapshot

logger = logging.getLogger("sentinels")

class CycleState:
    IDLE = "IDLE"
    FETCHING = "FETCHING"


class RefreshController:
    """
    Guards the refresh cycle with an IDLE -> FETCHING -> IDLE state machine.

    - refresh() while FETCHING is a no-op (returns None); requests are not queued.
    - A finished cycle replaces the published snapshot in a single reference swap,
      so readers of `latest` never observe a partially built snapshot.
    """

    def __init__(self, cycle: Callable[[], MarketSnapshot]) -> None:
        self._cycle = cycle
        self._lock = threading.Lock()
        self._state = CycleState.IDLE
        self._latest: Optional[MarketSnapshot] = None

    @property
    def state(self) -> str:
        return self._state

    @property
    def latest(self) -> Optional[MarketSnapshot]:
        return self._latest

    def refresh(self) -> Optional[MarketSnapshot]:
        with self._lock:
            if self._state == CycleState.FETCHING:
                logger.debug("REFRESH_SKIP | cycle already in flight")
                return None
            self._state = CycleState.FETCHING

        try:
            snap = self._cycle()
            self._latest = snap
            return snap
        finally:
            with self._lock:
                self._state = CycleState.IDLE
