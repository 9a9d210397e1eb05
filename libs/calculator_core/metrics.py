from __future__ import annotations

import threading
from typing import Dict


class MetricsEmitter:
    """In-memory counters named the Prometheus way (``calculator_<thing>``)."""

    def __init__(self) -> None:
        self.counters: Dict[str, float] = {}
        self._lock = threading.Lock()

    def incr(self, name: str, value: float = 1.0) -> None:
        with self._lock:
            self.counters[name] = self.counters.get(name, 0.0) + value

    def snapshot(self) -> Dict[str, float]:
        with self._lock:
            return dict(self.counters)
