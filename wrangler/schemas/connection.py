"""Connection schemas."""

from pydantic import BaseModel, ConfigDict, Field

from wrangler.core.shared_models import ConnectionType


class NamespacedId(BaseModel):
    """Identity of a connection: the namespace plus the derived id."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    id: str

    def __str__(self) -> str:
        """Render as ``namespace:id`` for log lines."""
        return f"{self.namespace}:{self.id}"


class ConnectionMeta(BaseModel):
    """Caller-supplied part of a connection.

    Everything except the identity and the lifecycle timestamps, which the
    store owns.
    """

    name: str
    type: ConnectionType
    description: str = ""
    properties: dict[str, str] = Field(default_factory=dict)


class Connection(ConnectionMeta):
    """A stored connection."""

    namespace: str
    id: str
    created: int
    updated: int

    @property
    def namespaced_id(self) -> NamespacedId:
        """Identity of this connection."""
        return NamespacedId(namespace=self.namespace, id=self.id)

    @classmethod
    def from_meta(
        cls, id: NamespacedId, meta: ConnectionMeta, *, created: int, updated: int
    ) -> "Connection":
        """Build a connection at ``id`` carrying ``meta``.

        The id is taken as given and is not re-derived from ``meta.name``.
        """
        return cls(
            namespace=id.namespace,
            id=id.id,
            type=meta.type,
            name=meta.name,
            description=meta.description,
            properties=dict(meta.properties),
            created=created,
            updated=updated,
        )

    def to_meta(self) -> ConnectionMeta:
        """Strip identity and timestamps."""
        return ConnectionMeta(
            name=self.name,
            type=self.type,
            description=self.description,
            properties=dict(self.properties),
        )
