# src/manuscript_kit/observability/base.py

import logging
from typing import Protocol


class MetricsHook(Protocol):
    """Sink for pipeline metrics.

    Implementations forward to a metrics backend (Prometheus, StatsD, ...).
    Durations are reported in milliseconds.
    """

    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def record_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    """Discards every metric. Used when no hook is injected."""

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        pass


class LoggingMetricsHook:
    """Writes every metric to the log at DEBUG level.

    For local runs and scripts where no metrics backend is wired up.
    """

    def __init__(self, logger_name: str = "manuscript_kit.metrics") -> None:
        self._logger = logging.getLogger(logger_name)

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        self._logger.debug("%s=%.1fms %s", name, value_ms, _format_labels(labels))

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        self._logger.debug("%s+=%d %s", name, value, _format_labels(labels))

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        self._logger.debug("%s=%s %s", name, value, _format_labels(labels))


def _format_labels(labels: dict[str, str] | None) -> str:
    if not labels:
        return ""
    return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
