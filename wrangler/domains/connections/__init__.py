"""Connection metadata domain."""

from wrangler.domains.connections.store import (
    TABLE_ID,
    TABLE_SPEC,
    ConnectionStore,
    get_connection_id,
)

__all__ = ["TABLE_ID", "TABLE_SPEC", "ConnectionStore", "get_connection_id"]
