"""Protocol for the connection store."""

from __future__ import annotations

from typing import Protocol

from wrangler.domains.connections.filters import ConnectionFilter
from wrangler.schemas.connection import Connection, ConnectionMeta, NamespacedId


class ConnectionStoreProtocol(Protocol):
    """CRUD and listing of connections within a namespace."""

    def create(self, namespace: str, meta: ConnectionMeta) -> NamespacedId:
        """Store a new connection; its id is derived from ``meta.name``."""
        ...

    def get(self, id: NamespacedId) -> Connection:
        """Get a connection by id."""
        ...

    def update(self, id: NamespacedId, meta: ConnectionMeta) -> None:
        """Replace the caller-supplied fields of an existing connection."""
        ...

    def delete(self, id: NamespacedId) -> None:
        """Delete a connection if it exists."""
        ...

    def connection_exists(self, namespace: str, connection_name: str) -> bool:
        """Whether a connection with this display name exists in the namespace."""
        ...

    def list(self, namespace: str, predicate: ConnectionFilter) -> list[Connection]:
        """List the connections of a namespace accepted by ``predicate``."""
        ...
