"""Metrics clients."""

from __future__ import annotations

import threading


class TodoMetrics:
    """A metrics client that only keeps running totals in memory."""

    def __init__(self) -> None:
        self.counters: dict[str, int] = {}
        self._lock = threading.Lock()

    def inc(self, key: str, value: int) -> None:
        with self._lock:
            self.counters[key] = self.counters.get(key, 0) + value