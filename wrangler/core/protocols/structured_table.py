"""StructuredTable protocols.

A structured table is a keyed store of rows with typed columns. Keys and rows
are plain mappings of column name to value; the primary key columns are
fixed by the table definition. The store depends only on these protocols so
any engine (SQLAlchemy, an in-memory fake, ...) can back it.
"""

from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Iterator, Mapping, Optional, Protocol, runtime_checkable

Row = Mapping[str, Any]


@dataclass(frozen=True)
class Range:
    """Bounds of a scan over the primary key.

    Only prefix ranges are supported: ``prefix`` pins the leading primary-key
    columns to exact values and leaves the remaining columns unbounded. An
    empty prefix scans the whole table.
    """

    prefix: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def singleton(cls, prefix: Mapping[str, Any]) -> "Range":
        """Range covering every row whose key starts with ``prefix``."""
        return cls(prefix=dict(prefix))

    @classmethod
    def all(cls) -> "Range":
        """Range covering the whole table."""
        return cls()

    def contains(self, row: Row) -> bool:
        """Whether ``row`` falls inside this range."""
        return all(row.get(name) == value for name, value in self.prefix.items())


@runtime_checkable
class CloseableIterator(Protocol):
    """Iterator over rows that holds an engine resource until closed.

    Usable as a context manager; leaving the ``with`` block closes it even
    when iteration was abandoned or raised.
    """

    def __iter__(self) -> Iterator[Row]: ...

    def __next__(self) -> Row: ...

    def close(self) -> None:
        """Release the underlying cursor/connection. Idempotent."""
        ...

    def __enter__(self) -> "CloseableIterator": ...

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None: ...


@runtime_checkable
class StructuredTable(Protocol):
    """Keyed row storage with upsert, point read, delete and prefix scan."""

    @property
    def table_id(self) -> str:
        """Name of the table."""
        ...

    def upsert(self, fields: Row) -> None:
        """Write ``fields`` as a full row, replacing any row with the same key."""
        ...

    def read(self, key: Row) -> Optional[Row]:
        """Return the row stored under ``key`` or ``None`` when absent."""
        ...

    def delete(self, key: Row) -> None:
        """Remove the row stored under ``key``. Absent rows are not an error."""
        ...

    def scan(self, key_range: Range, limit: Optional[int] = None) -> CloseableIterator:
        """Iterate rows inside ``key_range`` ordered by primary key.

        Args:
            key_range: Prefix bounds of the scan.
            limit: Maximum number of rows, ``None`` for no limit.
        """
        ...


@runtime_checkable
class StructuredTableContext(Protocol):
    """Resolves structured tables by id."""

    def get_table(self, table_id: str) -> StructuredTable:
        """Return the table named ``table_id``.

        Raises:
            TableNotFoundException: If the table is not provisioned.
        """
        ...
