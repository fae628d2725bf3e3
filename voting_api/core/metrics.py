"""Uptime and call counter reported by the /<entities>/health endpoints."""

from __future__ import annotations

import threading
import time


class HealthMetrics:
    """Boot time plus a request counter shared by every worker thread."""

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._calls = 0
        self.boot_time = clock()

    @property
    def calls(self) -> int:
        with self._lock:
            return self._calls

    def record_call(self) -> int:
        with self._lock:
            self._calls += 1
            return self._calls

    def report(self) -> dict:
        uptime = max(0.0, self._clock() - self.boot_time)
        return {"Uptime": round(uptime, 3), "APIcalls": self.calls}
