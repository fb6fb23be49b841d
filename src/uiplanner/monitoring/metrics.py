"""
Metrics Collection
Prometheus metrics for planning, validation and code generation
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, generate_latest


class RequestTimer:
    """Start time and current status of an in-flight planner request."""

    def __init__(self, status: str) -> None:
        self.status = status
        self.start = time.time()

    def elapsed(self) -> float:
        return time.time() - self.start


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the planner.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        self.registry = registry

        self.plan_requests_total = Counter(
            "uiplan_plan_requests_total",
            "Total number of planner requests",
            ["status"],
            registry=registry,
        )
        self.plan_duration = Histogram(
            "uiplan_plan_duration_seconds",
            "Planner request duration in seconds",
            buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
            registry=registry,
        )
        self.validation_errors_total = Counter(
            "uiplan_validation_errors_total",
            "Total number of plan validation errors reported",
            registry=registry,
        )
        self.generations_total = Counter(
            "uiplan_generations_total",
            "Total number of code generation calls",
            ["outcome"],
            registry=registry,
        )
        self.cache_lookups_total = Counter(
            "uiplan_cache_lookups_total",
            "Total number of plan cache lookups",
            ["result"],
            registry=registry,
        )

    def record_plan_request(self, status: str, duration: float) -> None:
        """Record a planner request (valid, cached, invalid, malformed, rejected, completion_error)."""
        self.plan_requests_total.labels(status=status).inc()
        self.plan_duration.observe(duration)

    def record_validation_errors(self, count: int) -> None:
        if count:
            self.validation_errors_total.inc(count)

    def record_generation(self, outcome: str) -> None:
        """Record a generator call (rendered or diagnostic)."""
        self.generations_total.labels(outcome=outcome).inc()

    def record_cache_lookup(self, hit: bool) -> None:
        self.cache_lookups_total.labels(result="hit" if hit else "miss").inc()

    @contextmanager
    def measure_plan_request(self, status: str = "rejected") -> Iterator["RequestTimer"]:
        """
        Time one planner request.

        The caller moves ``timer.status`` along as the request progresses;
        whatever it holds on exit, including exit by exception, is recorded.
        """
        timer = RequestTimer(status)
        try:
            yield timer
        finally:
            self.record_plan_request(timer.status, timer.elapsed())

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
