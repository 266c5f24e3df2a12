"""Core protocols for dependency injection.

Only cross-cutting infrastructure protocols live here; the store's own
protocol is in ``wrangler.domains.connections.protocols``.
"""

from wrangler.core.protocols.clock import Clock
from wrangler.core.protocols.store_metrics import ConnectionStoreMetrics
from wrangler.core.protocols.structured_table import (
    CloseableIterator,
    Range,
    Row,
    StructuredTable,
    StructuredTableContext,
)

__all__ = [
    "Clock",
    "CloseableIterator",
    "ConnectionStoreMetrics",
    "Range",
    "Row",
    "StructuredTable",
    "StructuredTableContext",
]
