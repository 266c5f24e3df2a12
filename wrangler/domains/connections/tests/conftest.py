"""Fixtures for connection store tests."""

import pytest

from wrangler.adapters.clock import FakeClock
from wrangler.adapters.store_metrics import FakeConnectionStoreMetrics
from wrangler.adapters.structured_table import InMemoryStructuredTable
from wrangler.core.shared_models import ConnectionType
from wrangler.domains.connections.store import TABLE_SPEC, ConnectionStore
from wrangler.schemas.connection import ConnectionMeta


@pytest.fixture
def table() -> InMemoryStructuredTable:
    return InMemoryStructuredTable.from_table(TABLE_SPEC)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def metrics() -> FakeConnectionStoreMetrics:
    return FakeConnectionStoreMetrics()


@pytest.fixture
def store(table, clock, metrics) -> ConnectionStore:
    return ConnectionStore(table, clock=clock, metrics=metrics)


@pytest.fixture
def make_meta():
    def _make_meta(
        name: str = "My DB!",
        type: ConnectionType = ConnectionType.DATABASE,
        description: str = "",
        properties: dict | None = None,
    ) -> ConnectionMeta:
        return ConnectionMeta(
            name=name,
            type=type,
            description=description,
            properties=properties if properties is not None else {"host": "h"},
        )

    return _make_meta
