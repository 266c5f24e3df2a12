"""Exceptions raised by the connection store.

Storage-engine errors are not represented here: they propagate to callers
exactly as the engine raised them.
"""

from typing import Optional


class WranglerException(Exception):
    """Base class for all exceptions raised by this package."""

    def __init__(self, message: Optional[str] = None):
        self.message = message or "An error occurred"
        super().__init__(self.message)


class NotFoundException(WranglerException):
    """Raised when a requested object does not exist."""


class AlreadyExistsException(WranglerException):
    """Raised when an object with the same identity already exists."""


class CorruptDataException(WranglerException):
    """Raised when a persisted row cannot be materialized.

    This is not recoverable by retrying; the stored data has to be repaired.
    """


class ConnectionNotFoundException(NotFoundException):
    """Raised when no connection is stored under the requested id."""

    def __init__(self, id: str):
        self.id = id
        super().__init__(f"Connection '{id}' does not exist")


class ConnectionAlreadyExistsException(AlreadyExistsException):
    """Raised when a connection name normalizes to an id already in use."""

    def __init__(self, name: str, id: str):
        self.name = name
        self.id = id
        super().__init__(f"Connection named '{name}' with id '{id}' already exists.")


class CorruptConnectionDataException(CorruptDataException):
    """Raised when a stored connection row has an unreadable column."""


class UnknownConnectionTypeException(CorruptConnectionDataException):
    """Raised when a stored connection type is not a known ConnectionType."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown connection type '{value}' in stored connection")


class TableNotFoundException(WranglerException):
    """Raised by a table context when the requested table is not provisioned."""

    def __init__(self, table_id: str):
        self.table_id = table_id
        super().__init__(f"Table '{table_id}' not found")


class SystemTableMissingException(WranglerException):
    """Raised at startup when a table the store depends on is missing.

    Signals a misconfigured deployment rather than a per-request failure.
    """

    def __init__(self, table_id: str):
        self.table_id = table_id
        super().__init__(
            f"System table '{table_id}' does not exist. Please check your system environment."
        )
