"""
Keyed request-state store.

Tracks, per resource key, whether a list has already been fetched so that
views re-created during a session do not fetch it again. Mutations call
``invalidate`` so the next caller fetches fresh data.
"""
import json
import logging
import threading
import time
from functools import lru_cache
from pathlib import Path
from typing import Callable, Dict, Optional, Union

logger = logging.getLogger(__name__)

MENU = "menu"
ORDERS = "orders"
RESERVATIONS = "reservations"


class RequestStateStore:
    """
    First caller wins, until the key is invalidated or goes stale.

    Args:
        max_age: seconds after which a fetched key counts as unfetched
            again. None means never.
        persist_path: optional JSON file the state is mirrored to, so a
            new process in the same session starts where the last one left.
        clock: wall-clock source, seconds.
    """

    def __init__(
        self,
        max_age: Optional[float] = None,
        persist_path: Union[str, Path, None] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.max_age = max_age
        self.persist_path = Path(persist_path) if persist_path else None
        self.clock = clock
        self._fetched_at: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._load()

    def should_fetch(self, key: str) -> bool:
        """Return True for the caller that should fetch ``key``; False for everyone after."""
        with self._lock:
            now = self.clock()
            fetched_at = self._fetched_at.get(key)
            if fetched_at is not None and not self._is_stale(fetched_at, now):
                logger.debug("Fetch of %s skipped", key)
                return False
            self._fetched_at[key] = now
            self._save()
        logger.debug("Fetch of %s allowed", key)
        return True

    def is_fetched(self, key: str) -> bool:
        with self._lock:
            fetched_at = self._fetched_at.get(key)
            return fetched_at is not None and not self._is_stale(fetched_at, self.clock())

    def invalidate(self, key: str) -> None:
        with self._lock:
            if self._fetched_at.pop(key, None) is not None:
                self._save()
        logger.debug("Invalidated %s", key)

    def reset(self) -> None:
        with self._lock:
            self._fetched_at.clear()
            self._save()
        logger.debug("Request state reset")

    def snapshot(self) -> Dict[str, float]:
        """Fetched keys and when they were fetched."""
        with self._lock:
            return dict(self._fetched_at)

    def _is_stale(self, fetched_at: float, now: float) -> bool:
        return self.max_age is not None and now - fetched_at >= self.max_age

    def _load(self) -> None:
        if self.persist_path is None or not self.persist_path.exists():
            return
        try:
            state = json.loads(self.persist_path.read_text())
            self._fetched_at = {str(k): float(v) for k, v in state.get("fetched", {}).items()}
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.warning("Ignoring unreadable request state in %s: %s", self.persist_path, e)
            self._fetched_at = {}

    def _save(self) -> None:
        if self.persist_path is None:
            return
        try:
            self.persist_path.write_text(json.dumps({"fetched": self._fetched_at}))
        except OSError as e:
            logger.warning("Could not persist request state to %s: %s", self.persist_path, e)


@lru_cache
def get_default_store() -> RequestStateStore:
    """Process-wide store shared by services created without one."""
    return RequestStateStore()
