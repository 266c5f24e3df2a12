"""Enums shared across schemas and models."""

from enum import Enum


class ConnectionType(str, Enum):
    """Kinds of connection the store can hold.

    Persisted by member name, so renaming a member orphans stored rows.
    """

    FILE = "FILE"
    DATABASE = "DATABASE"
    TABLE = "TABLE"
    S3 = "S3"
    GCS = "GCS"
    BIGQUERY = "BIGQUERY"
    SPANNER = "SPANNER"
    KAFKA = "KAFKA"
    ADLS = "ADLS"
