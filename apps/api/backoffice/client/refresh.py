"""
Per-resource auto refresh.
"""
import time
from typing import Callable, Dict, List, Optional

from backoffice.client.request_state import MENU, ORDERS, RESERVATIONS, RequestStateStore

# Seconds between refreshes
DEFAULT_INTERVALS = {
    MENU: 60,
    ORDERS: 300,
    RESERVATIONS: 60,
}


class AutoRefresher:
    """
    Invalidates store keys whose refresh interval has elapsed.

    Call ``tick()`` from the dashboard's loop; the next ``should_fetch`` for
    a returned key will allow a fetch.
    """

    def __init__(
        self,
        store: RequestStateStore,
        intervals: Optional[Dict[str, float]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.intervals = dict(intervals or DEFAULT_INTERVALS)
        self.clock = clock
        started = clock()
        self._last_refresh = {key: started for key in self.intervals}

    def tick(self) -> List[str]:
        now = self.clock()
        due = []
        for key, interval in self.intervals.items():
            if now - self._last_refresh[key] >= interval:
                self.store.invalidate(key)
                self._last_refresh[key] = now
                due.append(key)
        return due
