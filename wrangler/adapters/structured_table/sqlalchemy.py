"""SQLAlchemy implementation of the StructuredTable protocols.

Every call runs on its own connection: writes inside ``engine.begin()``,
scans on a connection owned by the returned iterator until it is closed.
"""

from types import TracebackType
from typing import Any, Optional

from sqlalchemy import (
    ColumnElement,
    CursorResult,
    Engine,
    MetaData,
    Table,
    and_,
    delete,
    insert,
    inspect,
    select,
    true,
    update,
)
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Connection

from wrangler.core.exceptions import TableNotFoundException
from wrangler.core.logging import logger
from wrangler.core.protocols.structured_table import (
    CloseableIterator,
    Range,
    Row,
    StructuredTable,
    StructuredTableContext,
)

_NATIVE_UPSERT = {"sqlite": sqlite_insert, "postgresql": postgresql_insert}


class _CursorRowIterator(CloseableIterator):
    """Streams rows off an open cursor and closes the connection when done."""

    def __init__(self, connection: Connection, result: CursorResult) -> None:
        self._connection = connection
        self._result = result
        self._closed = False

    def __iter__(self) -> "_CursorRowIterator":
        return self

    def __next__(self) -> Row:
        if self._closed:
            raise StopIteration
        row = self._result.fetchone()
        if row is None:
            self.close()
            raise StopIteration
        return dict(row._mapping)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._result.close()
        finally:
            self._connection.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "_CursorRowIterator":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


class SQLAlchemyStructuredTable(StructuredTable):
    """Structured table over a SQLAlchemy Core ``Table``."""

    def __init__(self, engine: Engine, table: Table) -> None:
        if not table.primary_key.columns:
            raise ValueError(f"Table '{table.name}' has no primary key")
        self._engine = engine
        self._table = table
        self._primary_key = [column.name for column in table.primary_key.columns]

    @property
    def table_id(self) -> str:
        return self._table.name

    def upsert(self, fields: Row) -> None:
        values = self._validate_row(fields)
        changes = {name: value for name, value in values.items() if name not in self._primary_key}
        native_insert = _NATIVE_UPSERT.get(self._engine.dialect.name)

        with self._engine.begin() as conn:
            if native_insert is not None:
                stmt = native_insert(self._table).values(**values)
                if changes:
                    stmt = stmt.on_conflict_do_update(
                        index_elements=self._primary_key,
                        set_={name: stmt.excluded[name] for name in changes},
                    )
                else:
                    stmt = stmt.on_conflict_do_nothing(index_elements=self._primary_key)
                conn.execute(stmt)
                return

            # Portable path for dialects without ON CONFLICT.
            result = conn.execute(
                update(self._table).where(self._key_clause(values)).values(**changes)
            )
            if result.rowcount == 0:
                conn.execute(insert(self._table).values(**values))

    def read(self, key: Row) -> Optional[Row]:
        clause = self._key_clause(self._validate_key(key))
        with self._engine.connect() as conn:
            row = conn.execute(select(self._table).where(clause)).first()
        return dict(row._mapping) if row is not None else None

    def delete(self, key: Row) -> None:
        clause = self._key_clause(self._validate_key(key))
        with self._engine.begin() as conn:
            conn.execute(delete(self._table).where(clause))

    def scan(self, key_range: Range, limit: Optional[int] = None) -> CloseableIterator:
        stmt = (
            select(self._table)
            .where(self._prefix_clause(key_range))
            .order_by(*(self._table.c[name] for name in self._primary_key))
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        conn = self._engine.connect()
        try:
            result = conn.execution_options(stream_results=True).execute(stmt)
        except Exception:
            conn.close()
            raise
        return _CursorRowIterator(conn, result)

    # -- helpers --

    def _validate_row(self, fields: Row) -> dict[str, Any]:
        unknown = set(fields) - set(self._table.c.keys())
        if unknown:
            raise ValueError(f"Unknown columns for table '{self.table_id}': {sorted(unknown)}")
        self._validate_key(fields)
        return dict(fields)

    def _validate_key(self, key: Row) -> dict[str, Any]:
        missing = [name for name in self._primary_key if name not in key]
        if missing:
            raise ValueError(f"Missing primary key columns for table '{self.table_id}': {missing}")
        return {name: key[name] for name in self._primary_key}

    def _key_clause(self, key: Row) -> ColumnElement[bool]:
        return and_(*(self._table.c[name] == key[name] for name in self._primary_key))

    def _prefix_clause(self, key_range: Range) -> ColumnElement[bool]:
        names = list(key_range.prefix)
        if names != self._primary_key[: len(names)]:
            raise ValueError(
                f"Scan prefix {names} is not a leading part of the primary key "
                f"{self._primary_key} of table '{self.table_id}'"
            )
        if not names:
            return true()
        return and_(*(self._table.c[name] == value for name, value in key_range.prefix.items()))


class SQLAlchemyTableContext(StructuredTableContext):
    """Hands out structured tables registered on ``metadata``.

    A table is only returned if it is both declared on the metadata and
    present in the database.
    """

    def __init__(self, engine: Engine, metadata: MetaData) -> None:
        self._engine = engine
        self._metadata = metadata

    def get_table(self, table_id: str) -> StructuredTable:
        table = self._metadata.tables.get(table_id)
        if table is None or not inspect(self._engine).has_table(table.name, schema=table.schema):
            raise TableNotFoundException(table_id)
        return SQLAlchemyStructuredTable(self._engine, table)

    def create_tables(self) -> None:
        """Create every table declared on the metadata that does not exist yet."""
        logger.info(f"[TableContext] Creating tables: {sorted(self._metadata.tables)}")
        self._metadata.create_all(self._engine)
