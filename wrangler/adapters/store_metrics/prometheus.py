"""Prometheus implementation of the ConnectionStoreMetrics protocol.

Creates a dedicated CollectorRegistry unless one is passed in, so store
metrics never collide with the process-wide default registry.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram

from wrangler.core.protocols.store_metrics import ConnectionStoreMetrics

_DURATION_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
)


class PrometheusConnectionStoreMetrics(ConnectionStoreMetrics):
    """Prometheus-backed connection store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()

        self._operations_total = Counter(
            "wrangler_connection_store_operations_total",
            "Total connection store operations",
            ["operation", "outcome"],
            registry=self._registry,
        )

        self._operation_duration = Histogram(
            "wrangler_connection_store_operation_duration_seconds",
            "Connection store operation duration in seconds",
            ["operation"],
            buckets=_DURATION_BUCKETS,
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Registry the collectors are bound to, for exposition."""
        return self._registry

    # -- ConnectionStoreMetrics protocol method --

    def observe_operation(self, operation: str, outcome: str, duration: float) -> None:
        self._operations_total.labels(operation=operation, outcome=outcome).inc()
        self._operation_duration.labels(operation=operation).observe(duration)
