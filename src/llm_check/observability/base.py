# src/llm_check/observability/base.py

from typing import Protocol


class MetricsHook(Protocol):
    """Sink for remote rule metrics.

    ``OpenAIRule`` reports one latency per completed check, counters for
    requests, matches, skipped correction records, short-circuits and
    errors (labelled by ``ErrorKind``), and a gauge for input size.
    Names come from ``llm_check.observability.names``.
    """

    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Wall time of a remote check, in milliseconds."""
        ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Add ``value`` to a counter such as matches or errors."""
        ...

    def record_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Point-in-time value, e.g. characters sent in one request."""
        ...


class NoOpMetricsHook:
    """Default hook for rules created without one. Discards everything."""

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        return None

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        return None

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        return None
