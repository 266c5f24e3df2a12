"""Declarative base for the store's tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models; ``Base.metadata`` holds every table."""
