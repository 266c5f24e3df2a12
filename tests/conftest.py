"""Shared fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from wrangler.adapters.structured_table import SQLAlchemyTableContext
from wrangler.models import Base


@pytest.fixture
def engine():
    """In-memory SQLite engine; one shared connection so every checkout sees the same data."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def table_context(engine) -> SQLAlchemyTableContext:
    context = SQLAlchemyTableContext(engine, Base.metadata)
    context.create_tables()
    return context
