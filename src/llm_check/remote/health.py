# src/llm_check/remote/health.py

import logging
import threading
from collections.abc import Callable
from time import monotonic

logger = logging.getLogger(__name__)

DOWN_INTERVAL_MS = 5000.0


def _monotonic_ms() -> float:
    return 1000 * monotonic()


class HealthGate:
    """Fail-fast gate shared by every call against a remote endpoint.

    Holds the time of the last transport failure. While less than
    ``cooldown_ms`` has passed since then, callers should skip the
    network entirely. There is no reset: the window just expires.
    """

    def __init__(
        self,
        cooldown_ms: float = DOWN_INTERVAL_MS,
        clock: Callable[[], float] = _monotonic_ms,
    ) -> None:
        self.cooldown_ms = cooldown_ms
        self._clock = clock
        self._last_failure_at: float | None = None
        self._lock = threading.Lock()

    @property
    def last_failure_at(self) -> float | None:
        with self._lock:
            return self._last_failure_at

    def should_short_circuit(self, now_ms: float | None = None) -> bool:
        if now_ms is None:
            now_ms = self._clock()
        last = self.last_failure_at
        if last is None:
            return False
        return (now_ms - last) < self.cooldown_ms

    def record_failure(self, now_ms: float | None = None) -> None:
        # Last writer wins
        if now_ms is None:
            now_ms = self._clock()
        with self._lock:
            self._last_failure_at = now_ms
        logger.debug("Recorded remote failure at %.0fms", now_ms)


# Process-wide gate used when a rule is not given its own.
DEFAULT_HEALTH_GATE = HealthGate()
