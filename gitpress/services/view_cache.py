"""
In-memory cache of rendered listing and post views, keyed by route path.
"""

import logging
import threading
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


class ViewCache:
    """Thread-safe view cache; None results are not cached."""

    def __init__(self):
        self._lock = threading.Lock()
        self._store: Dict[str, Any] = {}

    def get_or_build(self, path: str, build: Callable[[], Any]) -> Any:
        with self._lock:
            if path in self._store:
                return self._store[path]

        value = build()
        if value is None:
            return None
        with self._lock:
            self._store.setdefault(path, value)
            return self._store[path]

    def invalidate(self, path: str) -> None:
        with self._lock:
            self._store.pop(path, None)
        logger.debug(f"Invalidated view cache for {path}")

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._store
