"""Fake ConnectionStoreMetrics for testing.

Records all calls in memory so tests can assert on metrics behaviour
without reaching into prometheus-client internals.
"""

from dataclasses import dataclass


@dataclass
class OperationRecord:
    """Single observed store operation."""

    operation: str
    outcome: str
    duration: float


class FakeConnectionStoreMetrics:
    """In-memory spy implementing the ConnectionStoreMetrics protocol.

    Usage:
        fake = FakeConnectionStoreMetrics()
        store = ConnectionStore(table, metrics=fake)
        store.delete(id)
        assert fake.outcomes("delete") == ["success"]
    """

    def __init__(self) -> None:
        self.operations: list[OperationRecord] = []

    def observe_operation(self, operation: str, outcome: str, duration: float) -> None:
        self.operations.append(OperationRecord(operation, outcome, duration))

    # -- test helpers --

    def outcomes(self, operation: str) -> list[str]:
        """Outcomes recorded for ``operation`` in call order."""
        return [rec.outcome for rec in self.operations if rec.operation == operation]

    def clear(self) -> None:
        """Reset all recorded state."""
        self.operations.clear()
