"""Connection store.

Manages the lifecycle of connections: create, get, update, delete, and
filtered listing within a namespace.

The store is backed by a structured table with namespace, id, type, name,
description, properties, created and updated columns. The primary key is
(namespace, id), where id is derived from the display name by
``get_connection_id``.

``create`` checks for an existing row and then upserts. The two steps are not
atomic, so two concurrent creates of the same id can both succeed and the
later write wins.
"""

from __future__ import annotations

import json
import re
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from pydantic import ValidationError

from wrangler import models
from wrangler.adapters.clock import SystemClock
from wrangler.core.exceptions import (
    AlreadyExistsException,
    ConnectionAlreadyExistsException,
    ConnectionNotFoundException,
    CorruptConnectionDataException,
    NotFoundException,
    SystemTableMissingException,
    TableNotFoundException,
    UnknownConnectionTypeException,
)
from wrangler.core.logging import ContextualLogger, logger
from wrangler.core.protocols.clock import Clock
from wrangler.core.protocols.store_metrics import ConnectionStoreMetrics
from wrangler.core.protocols.structured_table import (
    Range,
    Row,
    StructuredTable,
    StructuredTableContext,
)
from wrangler.core.shared_models import ConnectionType
from wrangler.domains.connections.filters import ConnectionFilter
from wrangler.domains.connections.protocols import ConnectionStoreProtocol
from wrangler.schemas.connection import Connection, ConnectionMeta, NamespacedId

NAMESPACE_COL = "namespace"
ID_COL = "id"
TYPE_COL = "type"
NAME_COL = "name"
DESC_COL = "description"
PROPERTIES_COL = "properties"
CREATED_COL = "created"
UPDATED_COL = "updated"

TABLE_ID = models.Connection.__tablename__
TABLE_SPEC = models.Connection.__table__

_INVALID_ID_CHARS = re.compile(r"[^a-z0-9_]")


def get_connection_id(name: str) -> str:
    """Derive the connection id from a display name.

    Strips surrounding whitespace, lower-cases, and replaces every character
    outside ``[a-z0-9_]`` with an underscore. Running it on an id it produced
    returns the id unchanged.
    """
    return _INVALID_ID_CHARS.sub("_", name.strip().lower())


class ConnectionStore(ConnectionStoreProtocol):
    """Stores connections in a structured table."""

    get_connection_id = staticmethod(get_connection_id)

    def __init__(
        self,
        table: StructuredTable,
        *,
        clock: Optional[Clock] = None,
        metrics: Optional[ConnectionStoreMetrics] = None,
    ) -> None:
        """Initialize the store over an already-resolved table."""
        self._table = table
        self._clock = clock or SystemClock()
        self._metrics = metrics

    @classmethod
    def from_context(
        cls,
        context: StructuredTableContext,
        *,
        clock: Optional[Clock] = None,
        metrics: Optional[ConnectionStoreMetrics] = None,
    ) -> ConnectionStore:
        """Build a store on the connections table of ``context``.

        Raises:
            SystemTableMissingException: The table is not provisioned. This is a
                deployment problem, not something a caller can retry.
        """
        try:
            table = context.get_table(TABLE_ID)
        except TableNotFoundException as e:
            logger.error(f"[ConnectionStore] System table '{TABLE_ID}' is missing")
            raise SystemTableMissingException(TABLE_ID) from e
        return cls(table, clock=clock, metrics=metrics)

    def create(self, namespace: str, meta: ConnectionMeta) -> NamespacedId:
        """Create a connection from ``meta`` and return its id.

        Args:
            namespace: Namespace the connection belongs to.
            meta: Name, type, description and properties of the connection.

        Returns:
            NamespacedId: The namespace and the id derived from ``meta.name``.

        Raises:
            ConnectionAlreadyExistsException: The derived id is already in use
                in the namespace.
        """
        with self._observe("create"):
            id = NamespacedId(namespace=namespace, id=get_connection_id(meta.name))
            log = self._logger(id)
            if self._read(id) is not None:
                log.warning(f"[ConnectionStore] Refusing duplicate connection '{meta.name}'")
                raise ConnectionAlreadyExistsException(meta.name, id.id)

            now = self._clock.now()
            connection = Connection.from_meta(id, meta, created=now, updated=now)
            self._table.upsert(self._to_fields(connection))
            log.info(f"[ConnectionStore] Created {meta.type.value} connection '{meta.name}'")
            return connection.namespaced_id

    def get(self, id: NamespacedId) -> Connection:
        """Get the connection stored at ``id``.

        Raises:
            ConnectionNotFoundException: Nothing is stored at ``id``.
        """
        with self._observe("get"):
            return self._get(id)

    def update(self, id: NamespacedId, meta: ConnectionMeta) -> None:
        """Replace name, type, description and properties of an existing connection.

        The id is kept even if ``meta.name`` would now derive a different one;
        ``created`` is preserved and ``updated`` is set to the current time.

        Raises:
            ConnectionNotFoundException: Nothing is stored at ``id``.
        """
        with self._observe("update"):
            existing = self._get(id)
            updated = Connection.from_meta(
                id, meta, created=existing.created, updated=self._clock.now()
            )
            self._table.upsert(self._to_fields(updated))
            self._logger(id).info(f"[ConnectionStore] Updated connection '{meta.name}'")

    def delete(self, id: NamespacedId) -> None:
        """Delete the connection at ``id``; deleting a missing connection is a no-op."""
        with self._observe("delete"):
            self._table.delete(self._key(id))
            self._logger(id).info("[ConnectionStore] Deleted connection")

    def connection_exists(self, namespace: str, connection_name: str) -> bool:
        """Return True if a connection named ``connection_name`` exists in ``namespace``."""
        with self._observe("exists"):
            id = NamespacedId(namespace=namespace, id=get_connection_id(connection_name))
            return self._read(id) is not None

    def list(self, namespace: str, predicate: ConnectionFilter) -> list[Connection]:
        """List the connections of ``namespace`` for which ``predicate`` is true.

        Scans the whole namespace and filters in memory, in primary-key order.
        There is no paging, so very large namespaces are read in full.
        """
        with self._observe("list"):
            key_range = Range.singleton({NAMESPACE_COL: namespace})
            result: list[Connection] = []
            with self._table.scan(key_range, None) as rows:
                for row in rows:
                    connection = self._from_row(row)
                    if predicate(connection):
                        result.append(connection)
            logger.with_context(namespace=namespace).debug(
                f"[ConnectionStore] Listed {len(result)} connections"
            )
            return result

    # -- helpers --

    def _get(self, id: NamespacedId) -> Connection:
        existing = self._read(id)
        if existing is None:
            raise ConnectionNotFoundException(id.id)
        return existing

    def _read(self, id: NamespacedId) -> Optional[Connection]:
        row = self._table.read(self._key(id))
        return self._from_row(row) if row is not None else None

    @staticmethod
    def _key(id: NamespacedId) -> dict[str, Any]:
        return {NAMESPACE_COL: id.namespace, ID_COL: id.id}

    @staticmethod
    def _to_fields(connection: Connection) -> dict[str, Any]:
        return {
            NAMESPACE_COL: connection.namespace,
            ID_COL: connection.id,
            TYPE_COL: connection.type.name,
            NAME_COL: connection.name,
            DESC_COL: connection.description,
            PROPERTIES_COL: json.dumps(connection.properties, sort_keys=True),
            CREATED_COL: connection.created,
            UPDATED_COL: connection.updated,
        }

    def _from_row(self, row: Row) -> Connection:
        try:
            return Connection(
                namespace=row[NAMESPACE_COL],
                id=row[ID_COL],
                type=_parse_type(row[TYPE_COL]),
                name=row[NAME_COL],
                description=row[DESC_COL],
                properties=_decode_properties(row[PROPERTIES_COL]),
                created=row[CREATED_COL],
                updated=row[UPDATED_COL],
            )
        except CorruptConnectionDataException as e:
            self._log_corrupt(row, e)
            raise
        except (KeyError, ValidationError) as e:
            self._log_corrupt(row, e)
            raise CorruptConnectionDataException(f"Stored connection row is invalid: {e}") from e

    @staticmethod
    def _log_corrupt(row: Row, error: Exception) -> None:
        logger.with_context(
            namespace=row.get(NAMESPACE_COL), connection_id=row.get(ID_COL)
        ).error(f"[ConnectionStore] Corrupt connection row: {error}")

    @staticmethod
    def _logger(id: NamespacedId) -> ContextualLogger:
        return logger.with_context(namespace=id.namespace, connection_id=id.id)

    @contextmanager
    def _observe(self, operation: str) -> Iterator[None]:
        if self._metrics is None:
            yield
            return

        started = time.perf_counter()
        outcome = "success"
        try:
            yield
        except NotFoundException:
            outcome = "not_found"
            raise
        except AlreadyExistsException:
            outcome = "already_exists"
            raise
        except Exception:
            outcome = "error"
            raise
        finally:
            self._metrics.observe_operation(operation, outcome, time.perf_counter() - started)


def _parse_type(value: Any) -> ConnectionType:
    try:
        return ConnectionType[value]
    except KeyError:
        raise UnknownConnectionTypeException(str(value)) from None


def _decode_properties(value: Any) -> dict[str, str]:
    try:
        properties = json.loads(value)
    except (TypeError, ValueError) as e:
        raise CorruptConnectionDataException(f"Unreadable connection properties: {e}") from e
    if not isinstance(properties, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in properties.items()
    ):
        raise CorruptConnectionDataException(
            "Connection properties must be a JSON object of strings"
        )
    return properties
