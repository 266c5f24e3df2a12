"""ConnectionStore running on the SQLAlchemy adapter against SQLite."""

import pytest

from wrangler.adapters.clock import FakeClock
from wrangler.adapters.store_metrics import PrometheusConnectionStoreMetrics
from wrangler.core.exceptions import (
    ConnectionAlreadyExistsException,
    ConnectionNotFoundException,
    UnknownConnectionTypeException,
)
from wrangler.core.shared_models import ConnectionType
from wrangler.domains.connections.filters import by_type, match_all, match_none
from wrangler.domains.connections.store import ConnectionStore
from wrangler.schemas.connection import ConnectionMeta, NamespacedId


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1_000)


@pytest.fixture
def store(table_context, clock) -> ConnectionStore:
    return ConnectionStore.from_context(
        table_context, clock=clock, metrics=PrometheusConnectionStoreMetrics()
    )


def _meta(name="My DB!", type=ConnectionType.DATABASE, **properties) -> ConnectionMeta:
    return ConnectionMeta(name=name, type=type, properties=properties or {"host": "h"})


class TestSqlAlchemyConnectionStore:
    """End-to-end lifecycle on a real database."""

    def test_lifecycle(self, store, clock):
        id = store.create("ns1", _meta())
        assert id == NamespacedId(namespace="ns1", id="my_db_")

        created = store.get(id)
        assert created.properties == {"host": "h"}
        assert created.created == created.updated == 1_000

        clock.advance(5)
        store.update(id, _meta(name="My DB (primary)", port="5432"))
        updated = store.get(id)
        assert updated.id == "my_db_"
        assert updated.name == "My DB (primary)"
        assert updated.properties == {"port": "5432"}
        assert (updated.created, updated.updated) == (1_000, 1_005)

        store.delete(id)
        with pytest.raises(ConnectionNotFoundException):
            store.get(id)
        store.delete(id)

    def test_uniqueness_is_per_namespace(self, store):
        store.create("ns1", _meta(name="My DB!"))

        with pytest.raises(ConnectionAlreadyExistsException):
            store.create("ns1", _meta(name="my db!"))
        assert store.create("ns2", _meta(name="my db!")).namespace == "ns2"

    def test_list(self, store):
        store.create("ns1", _meta(name="warehouse", type=ConnectionType.BIGQUERY))
        store.create("ns1", _meta(name="events", type=ConnectionType.KAFKA))
        store.create("ns2", _meta(name="other"))

        assert [c.id for c in store.list("ns1", match_all)] == ["events", "warehouse"]
        assert [c.id for c in store.list("ns1", by_type(ConnectionType.KAFKA))] == ["events"]
        assert store.list("ns1", match_none) == []

    def test_exists(self, store):
        store.create("ns1", _meta(name="My DB!"))

        assert store.connection_exists("ns1", "MY DB!")
        assert not store.connection_exists("ns2", "My DB!")

    def test_unknown_stored_type_is_fatal(self, store, table_context):
        table_context.get_table("connections").upsert(
            {
                "namespace": "ns1",
                "id": "legacy",
                "type": "HBASE",
                "name": "legacy",
                "description": "",
                "properties": "{}",
                "created": 1,
                "updated": 1,
            }
        )

        with pytest.raises(UnknownConnectionTypeException):
            store.list("ns1", match_all)
