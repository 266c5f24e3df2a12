"""Structured table adapters."""

from wrangler.adapters.structured_table.fake import (
    FakeRowIterator,
    InMemoryStructuredTable,
    InMemoryTableContext,
)
from wrangler.adapters.structured_table.sqlalchemy import (
    SQLAlchemyStructuredTable,
    SQLAlchemyTableContext,
)

__all__ = [
    "FakeRowIterator",
    "InMemoryStructuredTable",
    "InMemoryTableContext",
    "SQLAlchemyStructuredTable",
    "SQLAlchemyTableContext",
]
