"""ConnectionStoreMetrics protocol for store operation instrumentation.

Abstracts metric collection so the store depends on a protocol rather than
a concrete library. Production uses Prometheus; tests inject a fake that
records calls in memory.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConnectionStoreMetrics(Protocol):
    """Protocol for connection store metrics collection."""

    def observe_operation(self, operation: str, outcome: str, duration: float) -> None:
        """Record a completed store operation (count + latency).

        Args:
            operation: Store method name (``create``, ``get``, ``list``, ...).
            outcome: ``success``, ``not_found``, ``already_exists`` or ``error``.
            duration: Wall time spent in the operation, in seconds.
        """
        ...
