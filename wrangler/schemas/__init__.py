from wrangler.schemas.connection import Connection, ConnectionMeta, NamespacedId

__all__ = ["Connection", "ConnectionMeta", "NamespacedId"]
