# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request and throttle metrics for apiwrap clients.

This module provides:
1. ClientMetrics - Dataclass counting requests, pages and throttle waits
2. PrometheusClientMetrics - Optional Prometheus counters mirroring them

Usage:
    metrics = ClientMetrics()
    client = APIClient(endpoint="https://api.example.com/", metrics=metrics)
    client.get_paged("/users")

    stats = metrics.get_stats()
    print(stats["requests_total"], stats["throttle_wait_seconds"])
"""

from __future__ import annotations

import logging
import threading
from collections import Counter as _Tally
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

# Type declarations for optional prometheus_client imports
if TYPE_CHECKING:
    from prometheus_client import Counter as CounterType, Histogram as HistogramType
else:
    CounterType = object
    HistogramType = object

# Try to import prometheus_client for optional Prometheus metrics
try:
    from prometheus_client import Counter as _Counter, Histogram as _Histogram

    Counter: type[CounterType] | None = _Counter
    Histogram: type[HistogramType] | None = _Histogram
    PROMETHEUS_AVAILABLE = True
except ImportError:
    Counter = None
    Histogram = None
    PROMETHEUS_AVAILABLE = False


@dataclass
class ClientMetrics:
    """
    Counters for one client (or a group of clients sharing the instance).

    Thread Safety:
        Rate gates record waits from many threads at once, so every update
        takes ``_lock``.

    Example:
        >>> metrics = ClientMetrics()
        >>> metrics.record_request("GET", 200)
        >>> metrics.record_throttle_wait(0.25)
        >>> metrics.get_stats()["requests_by_method"]
        {'GET': 1}
    """

    requests_total: int = 0
    pages_fetched: int = 0
    throttle_waits: int = 0
    throttle_wait_seconds: float = 0.0

    requests_by_method: _Tally[str] = field(default_factory=_Tally)
    responses_by_status: _Tally[int] = field(default_factory=_Tally)

    prometheus: PrometheusClientMetrics | None = field(default=None, repr=False)

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_request(self, method: str, status_code: int) -> None:
        with self._lock:
            self.requests_total += 1
            self.requests_by_method[method] += 1
            self.responses_by_status[status_code] += 1
        if self.prometheus is not None:
            self.prometheus.observe_request(method, status_code)

    def record_page(self) -> None:
        with self._lock:
            self.pages_fetched += 1

    def record_throttle_wait(self, seconds: float) -> None:
        """
        Record time a caller spent blocked in a rate gate.

        Args:
            seconds: Time between entering ``acquire`` and admission
        """
        with self._lock:
            self.throttle_waits += 1
            self.throttle_wait_seconds += seconds
        if self.prometheus is not None:
            self.prometheus.observe_throttle_wait(seconds)

    def get_stats(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of all counters."""
        with self._lock:
            return {
                "requests_total": self.requests_total,
                "pages_fetched": self.pages_fetched,
                "throttle_waits": self.throttle_waits,
                "throttle_wait_seconds": round(self.throttle_wait_seconds, 6),
                "requests_by_method": dict(self.requests_by_method),
                "responses_by_status": {
                    str(status): count
                    for status, count in self.responses_by_status.items()
                },
            }

    def reset(self) -> None:
        with self._lock:
            self.requests_total = 0
            self.pages_fetched = 0
            self.throttle_waits = 0
            self.throttle_wait_seconds = 0.0
            self.requests_by_method.clear()
            self.responses_by_status.clear()


class PrometheusClientMetrics:
    """
    Optional Prometheus metrics for API clients.

    Only instantiated if prometheus_client is available.

    Metrics:
        - apiwrap_requests_total: Counter of requests by method and status
        - apiwrap_throttle_wait_seconds: Histogram of rate gate waits
    """

    def __init__(self, registry: Any | None = None) -> None:
        """
        Initialize Prometheus client metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.

        Raises:
            ImportError: If prometheus_client is not available.
        """
        if not PROMETHEUS_AVAILABLE or Counter is None or Histogram is None:
            raise ImportError(
                "prometheus_client is not available. "
                "Install with: pip install apiwrap[metrics]"
            )

        self.requests = Counter(
            "apiwrap_requests_total",
            "Total HTTP requests issued by apiwrap clients",
            ["method", "status"],
            registry=registry,
        )

        self.throttle_wait_seconds = Histogram(
            "apiwrap_throttle_wait_seconds",
            "Time spent blocked in a rate gate before admission",
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60],
            registry=registry,
        )

        logger.info("Prometheus client metrics initialized")

    def observe_request(self, method: str, status_code: int) -> None:
        self.requests.labels(method=method, status=str(status_code)).inc()

    def observe_throttle_wait(self, seconds: float) -> None:
        self.throttle_wait_seconds.observe(seconds)


# Module-level singleton for Prometheus metrics (optional)
_prometheus_client_metrics: PrometheusClientMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_client_metrics() -> PrometheusClientMetrics | None:
    """
    Get or create the Prometheus client metrics singleton.

    Returns:
        PrometheusClientMetrics instance if prometheus_client is available,
        None otherwise.
    """
    global _prometheus_client_metrics

    if not PROMETHEUS_AVAILABLE:
        return None

    if _prometheus_client_metrics is None:
        with _prometheus_lock:
            if _prometheus_client_metrics is None:
                try:
                    _prometheus_client_metrics = PrometheusClientMetrics()
                except Exception as e:
                    logger.warning(f"Failed to initialize Prometheus client metrics: {e}")
                    return None

    return _prometheus_client_metrics


def reset_prometheus_client_metrics() -> None:
    """Reset the Prometheus client metrics singleton (mainly for testing)."""
    global _prometheus_client_metrics
    _prometheus_client_metrics = None


__all__ = [
    "PROMETHEUS_AVAILABLE",
    "ClientMetrics",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "reset_prometheus_client_metrics",
]
