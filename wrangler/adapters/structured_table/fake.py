"""In-memory StructuredTable fakes for testing.

Honour the same contract as the SQLAlchemy adapter (scan ordered by primary
key, prefix filtering, idempotent delete) and record every call so tests can
assert on table traffic without a database.
"""

from types import TracebackType
from typing import Any, Iterator, Optional, Sequence

from sqlalchemy import Table

from wrangler.core.exceptions import TableNotFoundException
from wrangler.core.protocols.structured_table import Range, Row


class FakeRowIterator:
    """List-backed closeable iterator that remembers whether it was closed."""

    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows: Iterator[dict[str, Any]] = iter(rows)
        self.closed = False

    def __iter__(self) -> "FakeRowIterator":
        return self

    def __next__(self) -> Row:
        if self.closed:
            raise StopIteration
        return next(self._rows)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeRowIterator":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


class InMemoryStructuredTable:
    """Dict-backed fake implementing the StructuredTable protocol.

    Usage:
        table = InMemoryStructuredTable.from_table(Connection.__table__)
        table.upsert({"namespace": "ns", "id": "a", ...})
        assert table.read({"namespace": "ns", "id": "a"}) is not None
    """

    def __init__(self, table_id: str, primary_key: Sequence[str]) -> None:
        if not primary_key:
            raise ValueError("primary_key must name at least one column")
        self._table_id = table_id
        self._primary_key = list(primary_key)
        self._rows: dict[tuple, dict[str, Any]] = {}
        self._errors: dict[str, Exception] = {}
        self._calls: list[tuple] = []
        self.iterators: list[FakeRowIterator] = []

    @classmethod
    def from_table(cls, table: Table) -> "InMemoryStructuredTable":
        """Build a fake with the name and primary key of a SQLAlchemy table."""
        return cls(table.name, [column.name for column in table.primary_key.columns])

    @property
    def table_id(self) -> str:
        return self._table_id

    def upsert(self, fields: Row) -> None:
        self._calls.append(("upsert", dict(fields)))
        self._maybe_fail("upsert")
        self._rows[self._key_of(fields)] = dict(fields)

    def read(self, key: Row) -> Optional[Row]:
        self._calls.append(("read", dict(key)))
        self._maybe_fail("read")
        row = self._rows.get(self._key_of(key))
        return dict(row) if row is not None else None

    def delete(self, key: Row) -> None:
        self._calls.append(("delete", dict(key)))
        self._maybe_fail("delete")
        self._rows.pop(self._key_of(key), None)

    def scan(self, key_range: Range, limit: Optional[int] = None) -> FakeRowIterator:
        self._calls.append(("scan", dict(key_range.prefix), limit))
        self._maybe_fail("scan")
        names = list(key_range.prefix)
        if names != self._primary_key[: len(names)]:
            raise ValueError(f"Scan prefix {names} is not a leading part of {self._primary_key}")
        rows = [dict(self._rows[k]) for k in sorted(self._rows) if key_range.contains(self._rows[k])]
        if limit is not None:
            rows = rows[:limit]
        iterator = FakeRowIterator(rows)
        self.iterators.append(iterator)
        return iterator

    # -- test helpers --

    def seed(self, row: Row) -> None:
        """Store a raw row without recording a call."""
        self._rows[self._key_of(row)] = dict(row)

    def fail_on(self, operation: str, exc: Exception) -> None:
        """Make every subsequent ``operation`` call raise ``exc``."""
        self._errors[operation] = exc

    def rows(self) -> list[dict[str, Any]]:
        """All stored rows ordered by primary key."""
        return [dict(self._rows[k]) for k in sorted(self._rows)]

    def calls(self, operation: Optional[str] = None) -> list[tuple]:
        """Recorded calls, optionally filtered by operation name."""
        if operation is None:
            return list(self._calls)
        return [call for call in self._calls if call[0] == operation]

    def clear(self) -> None:
        """Reset rows, recorded calls, and injected errors."""
        self._rows.clear()
        self._errors.clear()
        self._calls.clear()
        self.iterators.clear()

    def _key_of(self, row: Row) -> tuple:
        missing = [name for name in self._primary_key if name not in row]
        if missing:
            raise ValueError(f"Missing primary key columns for table '{self._table_id}': {missing}")
        return tuple(row[name] for name in self._primary_key)

    def _maybe_fail(self, operation: str) -> None:
        exc = self._errors.get(operation)
        if exc is not None:
            raise exc


class InMemoryTableContext:
    """Fake StructuredTableContext resolving tables from a dict."""

    def __init__(self, tables: Optional[dict[str, InMemoryStructuredTable]] = None) -> None:
        self._tables = dict(tables or {})

    def add(self, table: InMemoryStructuredTable) -> None:
        self._tables[table.table_id] = table

    def get_table(self, table_id: str) -> InMemoryStructuredTable:
        table = self._tables.get(table_id)
        if table is None:
            raise TableNotFoundException(table_id)
        return table
