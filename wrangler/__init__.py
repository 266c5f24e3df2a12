"""Namespaced metadata store for connection records."""

__version__ = "0.1.0"
