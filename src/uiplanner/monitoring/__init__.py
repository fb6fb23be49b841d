"""
Performance Monitoring
Prometheus-based metrics collection for the planner
"""

from .metrics import MetricsCollector, RequestTimer, metrics_collector

__all__ = [
    "MetricsCollector",
    "RequestTimer",
    "metrics_collector",
]
